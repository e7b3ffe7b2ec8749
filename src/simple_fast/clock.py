"""Cálculo de ángulos sobre un dial de 24 horas y fuentes de hora."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo

from dateutil import tz

log = logging.getLogger(__name__)

DEGREES_PER_HOUR = 15.0
DEGREES_PER_MINUTE = 0.25


def hour_angle(time: datetime) -> float:
    """Return the dial angle of ``time`` on a 24-hour face.

    0 degrees is the "0" mark at the top; each hour moves 15 degrees and each
    minute a quarter degree. Seconds are ignored.

    Args:
        time: Local wall-clock time.

    Returns:
        Angle in degrees, in ``[0, 360)``.
    """
    return time.hour * DEGREES_PER_HOUR + time.minute * DEGREES_PER_MINUTE


def angle_as_fraction_of_circle(degrees: float) -> float:
    """Convert an angle in degrees to a fraction of a full turn."""
    return degrees / 360.0


def add_hours(start: datetime, hours: int) -> datetime:
    """Add elapsed hours to ``start``.

    Aware datetimes are shifted in UTC and converted back to their own zone,
    so a DST change moves the wall-clock result by the offset difference.
    If the result cannot be represented, ``start`` is returned unchanged.

    Args:
        start: Starting instant.
        hours: Number of hours to add.

    Returns:
        The shifted instant, or ``start`` when the addition overflows.
    """
    try:
        if start.tzinfo is None:
            return start + timedelta(hours=hours)
        shifted = start.astimezone(tz.UTC) + timedelta(hours=hours)
        return shifted.astimezone(start.tzinfo)
    except OverflowError:
        log.warning("Could not add %s hours to %s; using start time", hours, start)
        return start


def seconds_until(end: datetime, now: datetime) -> float:
    """Return the seconds from ``now`` to ``end`` (negative once passed)."""
    if end.tzinfo is not None and now.tzinfo is not None:
        end = end.astimezone(tz.UTC)
        now = now.astimezone(tz.UTC)
    return (end - now).total_seconds()


class SystemClock:
    """Wall clock in a fixed timezone (local zone by default)."""

    def __init__(self, tzinfo: tzinfo | None = None) -> None:
        self._tz = tzinfo if tzinfo is not None else tz.tzlocal()

    def now(self) -> datetime:
        return datetime.now(tz=self._tz)


@dataclass
class ManualClock:
    """Clock whose time only moves when told to.

    Example::

        clock = ManualClock(datetime(2024, 11, 23, 9, 0))
        clock.advance(90)
        assert clock.now().minute == 1
    """

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> datetime:
        self.current = self.current + timedelta(seconds=seconds)
        return self.current

    def set(self, when: datetime) -> None:
        self.current = when
