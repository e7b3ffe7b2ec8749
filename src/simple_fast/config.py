"""Configuracion de la app (variables de entorno) y logging."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo

from dateutil import tz

from simple_fast.model import DEFAULT_DURATION_HOURS, preset_for_hours

ENV_PREFIX = "SIMPLE_FAST_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings. Nothing here is persisted."""

    timezone: str = ""
    default_duration_hours: int = DEFAULT_DURATION_HOURS
    tick_seconds: float = 1.0
    log_level: str = "WARNING"

    def tzinfo(self) -> tzinfo:
        """Return the configured zone, or the local one when unset.

        Raises:
            ValueError: If the zone name is unknown.
        """
        if not self.timezone:
            return tz.tzlocal()
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ValueError(f"Unknown timezone: {self.timezone}")
        return zone


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    """Build an :class:`AppConfig` from ``SIMPLE_FAST_*`` variables.

    Args:
        env: Variables to read (``os.environ`` by default).

    Returns:
        Validated configuration.

    Raises:
        ValueError: If a value is malformed or out of range.
    """
    env = os.environ if env is None else env
    defaults = AppConfig()

    timezone = env.get(f"{ENV_PREFIX}TZ", defaults.timezone).strip()
    hours_raw = env.get(f"{ENV_PREFIX}DURATION", "").strip()
    tick_raw = env.get(f"{ENV_PREFIX}TICK_SECONDS", "").strip()
    log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).strip().upper()

    hours = int(hours_raw) if hours_raw else defaults.default_duration_hours
    preset_for_hours(hours)

    tick_seconds = float(tick_raw) if tick_raw else defaults.tick_seconds
    if tick_seconds <= 0:
        raise ValueError(f"Tick interval must be positive: {tick_seconds}")

    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level}")

    config = AppConfig(
        timezone=timezone,
        default_duration_hours=hours,
        tick_seconds=tick_seconds,
        log_level=log_level,
    )
    config.tzinfo()
    return config


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Configure root logging for the entry points."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
