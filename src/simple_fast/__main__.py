"""Punto de entrada de la app Kivy."""

from __future__ import annotations

from simple_fast.app import run_app
from simple_fast.config import configure_logging, load_config


def main() -> int:
    """Run app entrypoint."""
    config = load_config()
    configure_logging(config.log_level)
    try:
        return run_app(config)
    except ImportError as exc:
        print(f"No se pudo iniciar Kivy: {exc}")
        print("Instala dependencias de GUI: pip install simple-fast[gui]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
