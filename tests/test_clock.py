from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from dateutil import tz

from simple_fast.clock import (
    ManualClock,
    SystemClock,
    add_hours,
    angle_as_fraction_of_circle,
    hour_angle,
    seconds_until,
)


def test_hour_angle_examples() -> None:
    assert hour_angle(datetime(2024, 11, 23, 0, 0)) == 0.0
    assert hour_angle(datetime(2024, 11, 23, 9, 0)) == 135.0
    assert hour_angle(datetime(2024, 11, 23, 23, 30)) == 352.5
    assert hour_angle(datetime(2024, 11, 23, 6, 2, 59)) == 90.5


def test_hour_angle_in_range_and_monotonic_over_a_day() -> None:
    t = datetime(2024, 11, 23, 0, 0)
    previous = -1.0
    while t.day == 23:
        angle = hour_angle(t)
        assert 0.0 <= angle < 360.0
        assert angle >= previous
        previous = angle
        t += timedelta(minutes=1)
    assert previous == 359.75
    assert hour_angle(t) == 0.0


def test_angle_as_fraction_of_circle() -> None:
    assert angle_as_fraction_of_circle(0.0) == 0.0
    assert angle_as_fraction_of_circle(135.0) == 0.375
    assert angle_as_fraction_of_circle(352.5) == pytest.approx(0.979166, rel=1e-5)


def test_add_hours_crosses_midnight() -> None:
    end = add_hours(datetime(2024, 11, 23, 23, 30), 16)
    assert end == datetime(2024, 11, 24, 15, 30)


def test_add_hours_counts_elapsed_hours_across_dst() -> None:
    zone = tz.gettz("Europe/Madrid")
    # DST ends 2024-10-27 03:00 -> 02:00 local.
    start = datetime(2024, 10, 26, 20, 0, tzinfo=zone)
    end = add_hours(start, 12)
    assert end.hour == 7
    assert seconds_until(end, start) == 12 * 3600


def test_add_hours_overflow_falls_back_to_start() -> None:
    start = datetime(9999, 12, 31, 20, 0)
    assert add_hours(start, 16) == start


def test_seconds_until_sign() -> None:
    now = datetime(2024, 11, 23, 9, 0)
    assert seconds_until(now + timedelta(seconds=90), now) == 90.0
    assert seconds_until(now, now + timedelta(seconds=1)) == -1.0


def test_manual_clock_advance_and_set() -> None:
    clock = ManualClock(datetime(2024, 11, 23, 9, 0))
    assert clock.advance(90) == datetime(2024, 11, 23, 9, 1, 30)
    clock.set(datetime(2024, 11, 24, 0, 0))
    assert clock.now() == datetime(2024, 11, 24, 0, 0)


def test_system_clock_is_timezone_aware() -> None:
    now = SystemClock(tz.UTC).now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)
