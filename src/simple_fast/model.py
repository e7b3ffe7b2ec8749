"""Modelos tipados para intervalos de ayuno y estado de la sesión."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_DURATION_HOURS = 16


@dataclass(frozen=True)
class FastingPreset:
    """Named fasting interval (e.g. "16:8" -> 16 hours of fasting)."""

    label: str
    hours: int

    def __post_init__(self) -> None:
        if self.hours <= 0:
            raise ValueError(f"Fasting duration must be positive: {self.hours}")


FASTING_PRESETS: tuple[FastingPreset, ...] = (
    FastingPreset("12:12", 12),
    FastingPreset("16:8", 16),
    FastingPreset("18:6", 18),
    FastingPreset("20:4", 20),
)


def preset_for_hours(hours: int) -> FastingPreset:
    """Return the preset with the given fasting hours.

    Raises:
        ValueError: If no preset uses that duration.
    """
    for preset in FASTING_PRESETS:
        if preset.hours == hours:
            return preset
    raise ValueError(f"No fasting preset with {hours} hours")


def preset_by_label(label: str) -> FastingPreset:
    """Return the preset displayed as ``label`` (e.g. "18:6")."""
    for preset in FASTING_PRESETS:
        if preset.label == label.strip():
            return preset
    raise ValueError(f"Unknown fasting preset: {label!r}")


@dataclass
class FastingSession:
    """Mutable state of zero or one in-progress fast."""

    is_active: bool = False
    duration_hours: int = DEFAULT_DURATION_HOURS
    end_time: datetime | None = None
    start_angle: float = 0.0
    elapsed_fraction: float = 0.0


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to observers."""

    is_active: bool
    duration_hours: int
    selected_hours: int
    end_time: datetime | None
    start_angle: float
    elapsed_fraction: float
    current_time: datetime
    hour_angle: float
    remaining_seconds: int


def format_hhmmss(total_seconds: int | None) -> str:
    """Format seconds as ``HH:MM:SS`` (``--:--:--`` when unknown)."""
    if total_seconds is None:
        return "--:--:--"
    if total_seconds < 0:
        total_seconds = 0
    h = total_seconds // 3600
    m = (total_seconds % 3600) // 60
    s = total_seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"
