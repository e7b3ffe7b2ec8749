"""Geometría del dial de 24 horas (marcas, números, aguja y arco)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from simple_fast.clock import DEGREES_PER_HOUR

HOURS_ON_DIAL = 24
MAJOR_EVERY = 6
MAJOR_MARK_LENGTH = 20.0
MINOR_MARK_LENGTH = 10.0
LABEL_RADIUS_FACTOR = 1.2

Point = tuple[float, float]


@dataclass(frozen=True)
class DialMark:
    """One hour mark: tick segment plus the position of its number."""

    hour: int
    angle: float
    major: bool
    inner: Point
    outer: Point
    label_pos: Point


def point_on_dial(center: Point, radius: float, degrees: float) -> Point:
    """Point at ``degrees`` clockwise from the top, ``radius`` from center.

    Uses y-up coordinates (as Kivy canvases do).
    """
    rad = math.radians(degrees)
    return (center[0] + radius * math.sin(rad), center[1] + radius * math.cos(rad))


def dial_marks(center: Point, radius: float) -> list[DialMark]:
    """Build the 24 hour marks; every sixth one is a long, bold mark."""
    marks: list[DialMark] = []
    for hour in range(HOURS_ON_DIAL):
        angle = hour * DEGREES_PER_HOUR
        major = hour % MAJOR_EVERY == 0
        half = (MAJOR_MARK_LENGTH if major else MINOR_MARK_LENGTH) / 2
        marks.append(
            DialMark(
                hour=hour,
                angle=angle,
                major=major,
                inner=point_on_dial(center, radius - half, angle),
                outer=point_on_dial(center, radius + half, angle),
                label_pos=point_on_dial(center, radius * LABEL_RADIUS_FACTOR, angle),
            )
        )
    return marks


def hand_points(center: Point, length: float, degrees: float) -> tuple[Point, Point]:
    """Segment of the hour hand, from the center outwards."""
    return center, point_on_dial(center, length, degrees)


def progress_arc(start_angle: float, fraction: float) -> tuple[float, float] | None:
    """Start and end angle of the progress arc, or None when empty.

    The arc may run past 360 degrees when the fast crosses the top of the dial.
    """
    fraction = max(0.0, min(1.0, fraction))
    if fraction == 0.0:
        return None
    return start_angle, start_angle + fraction * 360.0
