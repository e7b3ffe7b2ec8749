"""Simulación de una sesión de ayuno sobre un reloj manual y vista tabular."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import pandas as pd

from simple_fast.clock import ManualClock
from simple_fast.controller import FastingController
from simple_fast.model import FASTING_PRESETS, SessionSnapshot, format_hhmmss
from simple_fast.scheduler import ManualScheduler

WALL_CLOCK_FORMAT = "%d/%m/%Y %H:%M:%S"

TIMELINE_COLUMNS = [
    "time",
    "hour_angle",
    "active",
    "elapsed_pct",
    "remaining",
]


def simulate_session(
    hours: int,
    start: datetime,
    step_seconds: float = 3600.0,
    tick_seconds: float = 1.0,
) -> list[SessionSnapshot]:
    """Run a fast of ``hours`` from ``start`` on a simulated clock.

    Args:
        hours: Fasting duration.
        start: Instant the fast starts.
        step_seconds: Gap between recorded snapshots.
        tick_seconds: Period of the controller's tick.

    Returns:
        Snapshots at start, after every step while fasting, and the one where
        the fast completed.

    Raises:
        ValueError: If ``step_seconds`` is not positive.
    """
    if step_seconds <= 0:
        raise ValueError(f"Step must be positive: {step_seconds}")
    clock = ManualClock(start)
    scheduler = ManualScheduler(clock)
    controller = FastingController(clock, scheduler, tick_seconds=tick_seconds)
    controller.attach()
    controller.start(hours)

    out = [controller.snapshot()]
    while controller.is_active:
        scheduler.advance(step_seconds)
        out.append(controller.snapshot())
    controller.detach()
    return out


def timeline_frame(snapshots: Sequence[SessionSnapshot]) -> pd.DataFrame:
    """Tabulate snapshots (one row each)."""
    rows = [
        {
            "time": snap.current_time,
            "hour_angle": snap.hour_angle,
            "active": snap.is_active,
            "elapsed_pct": round(snap.elapsed_fraction * 100, 2),
            "remaining": format_hhmmss(snap.remaining_seconds),
        }
        for snap in snapshots
    ]
    if not rows:
        return pd.DataFrame(columns=TIMELINE_COLUMNS)
    return pd.DataFrame(rows, columns=TIMELINE_COLUMNS)


def presets_frame(start: datetime) -> pd.DataFrame:
    """One row per preset with the end time and arc of a fast from ``start``."""
    clock = ManualClock(start)
    rows: list[dict[str, object]] = []
    for preset in FASTING_PRESETS:
        controller = FastingController(clock, ManualScheduler(clock))
        controller.start(preset.hours)
        first = controller.snapshot()
        rows.append(
            {
                "preset": preset.label,
                "hours": preset.hours,
                "start": start,
                "end": first.end_time,
                "start_angle": first.start_angle,
            }
        )
    return pd.DataFrame(rows)


def display_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Prepare a string-renderable DataFrame for aligned output."""
    if df.empty:
        return df.copy()
    out = df.copy()
    for col in out.columns:
        out[col] = out[col].map(_format_value)
    return out


def _format_value(value: object) -> str:
    """Render one cell: local wall-clock times, yes/no flags, plain numbers."""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return ""
    if isinstance(value, datetime):
        # Timestamps are shown in the zone they were taken in.
        return value.replace(tzinfo=None).strftime(WALL_CLOCK_FORMAT)
    if pd.api.types.is_bool(value):
        return "yes" if value else "no"
    if pd.api.types.is_integer(value):
        return str(int(value))
    if pd.api.types.is_float(value):
        return f"{float(value):.6f}".rstrip("0").rstrip(".") or "0"
    return str(value)
