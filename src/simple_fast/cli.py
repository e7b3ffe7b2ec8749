"""CLI para planificar un ayuno y ver su progreso hora por hora."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from datetime import datetime

from dateutil import parser as date_parser

from simple_fast.config import configure_logging, load_config
from simple_fast.model import FASTING_PRESETS, preset_by_label, preset_for_hours
from simple_fast.timeline import (
    display_frame,
    presets_frame,
    simulate_session,
    timeline_frame,
)

log = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Simula un ayuno intermitente sobre el dial de 24 horas."
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--duration",
        type=int,
        choices=[preset.hours for preset in FASTING_PRESETS],
        default=None,
        help="Horas de ayuno (default: configuracion, 16).",
    )
    group.add_argument(
        "--preset",
        choices=[preset.label for preset in FASTING_PRESETS],
        default=None,
        help="Intervalo por etiqueta, p. ej. 16:8.",
    )
    parser.add_argument(
        "--start",
        default=None,
        help="Hora de inicio (p. ej. 09:00 o 2024-11-23T23:30). Default: ahora.",
    )
    parser.add_argument(
        "--step-minutes",
        type=int,
        default=60,
        help="Minutos entre filas de la tabla (default: 60).",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="Muestra los intervalos disponibles y termina.",
    )
    parser.add_argument("--verbose", action="store_true", help="Logging INFO.")
    ns = parser.parse_args(argv)
    if ns.step_minutes <= 0:
        parser.error("--step-minutes must be positive")
    if ns.start is not None:
        try:
            ns.start = date_parser.parse(ns.start)
        except (ValueError, OverflowError) as exc:
            parser.error(f"invalid --start value {ns.start!r}: {exc}")
    return ns


def main(argv: Sequence[str] | None = None) -> int:
    """Run the planner CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args(argv)
    config = load_config()
    configure_logging(logging.INFO if ns.verbose else config.log_level)

    zone = config.tzinfo()
    start: datetime = ns.start if ns.start is not None else datetime.now(tz=zone)
    if start.tzinfo is None:
        start = start.replace(tzinfo=zone)

    if ns.list_presets:
        print(display_frame(presets_frame(start)).to_string(index=False))
        return 0

    if ns.preset is not None:
        preset = preset_by_label(ns.preset)
    elif ns.duration is not None:
        preset = preset_for_hours(ns.duration)
    else:
        preset = preset_for_hours(config.default_duration_hours)

    log.info("Simulating %s fast from %s", preset.label, start.isoformat())
    snapshots = simulate_session(
        preset.hours,
        start,
        step_seconds=ns.step_minutes * 60,
        tick_seconds=config.tick_seconds,
    )
    first, last = snapshots[0], snapshots[-1]
    print(display_frame(timeline_frame(snapshots)).to_string(index=False))
    print(f"OK: Preset: {preset.label}")
    print(f"OK: Start angle: {first.start_angle:g}")
    if first.end_time is not None:
        print(f"OK: Ends: {first.end_time.strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"OK: Completed: {'yes' if last.elapsed_fraction >= 1.0 else 'no'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
