"""Controlador de la sesión de ayuno (estados Idle / Fasting)."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from simple_fast.clock import add_hours, hour_angle, seconds_until
from simple_fast.model import (
    DEFAULT_DURATION_HOURS,
    FastingPreset,
    FastingSession,
    SessionSnapshot,
    preset_for_hours,
)
from simple_fast.scheduler import Scheduler, TaskHandle

log = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


class WallClock(Protocol):
    """Anything with a ``now()`` returning the current local time."""

    def now(self) -> datetime: ...


class FastingController:
    """Owns the fasting session and its two periodic tasks.

    The session tick runs only while fasting. The wall-clock sampler runs
    between :meth:`attach` and :meth:`detach` and only refreshes the time
    used for the hour hand.
    """

    def __init__(
        self,
        clock: WallClock,
        scheduler: Scheduler,
        *,
        default_hours: int = DEFAULT_DURATION_HOURS,
        tick_seconds: float = 1.0,
    ) -> None:
        """Create an idle controller.

        Args:
            clock: Source of the current time.
            scheduler: Runs the periodic tasks.
            default_hours: Initially selected preset duration.
            tick_seconds: Period of both tasks.
        """
        self._clock = clock
        self._scheduler = scheduler
        self._tick_seconds = tick_seconds
        self._selected = preset_for_hours(default_hours)
        self.session = FastingSession(duration_hours=self._selected.hours)
        self.current_time = clock.now()
        self._session_task: TaskHandle | None = None
        self._clock_task: TaskHandle | None = None
        self._listeners: list[Listener] = []

    @property
    def selected_preset(self) -> FastingPreset:
        return self._selected

    @property
    def is_active(self) -> bool:
        return self.session.is_active

    @property
    def elapsed_fraction(self) -> float:
        return self.session.elapsed_fraction

    @property
    def start_angle(self) -> float:
        return self.session.start_angle

    def select_preset(self, preset: FastingPreset) -> None:
        """Choose the duration used by the next :meth:`start`."""
        self._selected = preset_for_hours(preset.hours)
        log.debug("Selected fasting preset %s", self._selected.label)
        self._notify()

    def select_duration(self, hours: int) -> None:
        """Choose the next duration by hours; must match a preset."""
        self.select_preset(preset_for_hours(hours))

    def start(
        self, duration_hours: int | None = None, now: datetime | None = None
    ) -> None:
        """Begin a fast of ``duration_hours`` (the selected preset by default).

        Ignored while a fast is already running.

        Raises:
            ValueError: If the duration is not positive.
        """
        if self.session.is_active:
            log.debug("start() ignored: a fast is already running")
            return
        hours = self._selected.hours if duration_hours is None else duration_hours
        if hours <= 0:
            raise ValueError(f"Fasting duration must be positive: {hours}")
        now = self._clock.now() if now is None else now

        end_time = add_hours(now, hours)
        self.session = FastingSession(
            is_active=True,
            duration_hours=hours,
            end_time=end_time,
            start_angle=hour_angle(now),
            elapsed_fraction=0.0,
        )
        self.current_time = now
        self._cancel_session_task()
        self._session_task = self._scheduler.schedule_interval(
            self.tick, self._tick_seconds
        )
        log.info("Fast started: %sh, ends at %s", hours, end_time.isoformat())
        self._notify()

    def stop(self) -> None:
        """End the running fast and clear its progress. No-op while idle."""
        if not self.session.is_active:
            return
        self._cancel_session_task()
        self.session.is_active = False
        self.session.elapsed_fraction = 0.0
        self.session.start_angle = 0.0
        log.info("Fast ended by user")
        self._notify()

    def toggle(self) -> None:
        """Start or end the fast, like the main button."""
        if self.session.is_active:
            self.stop()
        else:
            self.start()

    def tick(self, now: datetime | None = None) -> None:
        """Recompute the elapsed fraction; completes the fast at its end time."""
        session = self.session
        if not session.is_active or session.end_time is None:
            return
        now = self._clock.now() if now is None else now

        total = session.duration_hours * 3600
        remaining = max(0, math.floor(seconds_until(session.end_time, now)))
        elapsed = total - remaining

        if remaining > 0:
            # A clock stepped backwards never rewinds progress.
            fraction = max(0, elapsed) / total
            session.elapsed_fraction = max(session.elapsed_fraction, fraction)
        else:
            # Completion keeps start_angle so the full ring stays drawn.
            session.elapsed_fraction = 1.0
            session.is_active = False
            self._cancel_session_task()
            log.info("Fast completed (%sh)", session.duration_hours)
        self.current_time = now
        self._notify()

    def sample_clock(self) -> None:
        """Refresh the time shown by the hour hand."""
        self.current_time = self._clock.now()
        self._notify()

    def attach(self) -> None:
        """Start the wall-clock sampler and resume the tick of a running fast."""
        if self.session.is_active and self._session_task is None:
            self._session_task = self._scheduler.schedule_interval(
                self.tick, self._tick_seconds
            )
        if self._clock_task is not None:
            return
        self.sample_clock()
        self._clock_task = self._scheduler.schedule_interval(
            self.sample_clock, self._tick_seconds
        )

    def detach(self) -> None:
        """Cancel the wall-clock sampler and any session tick."""
        if self._clock_task is not None:
            self._clock_task.cancel()
            self._clock_task = None
        self._cancel_session_task()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def remaining_seconds(self, now: datetime | None = None) -> int:
        session = self.session
        if not session.is_active or session.end_time is None:
            return 0
        now = self.current_time if now is None else now
        return max(0, math.floor(seconds_until(session.end_time, now)))

    def snapshot(self) -> SessionSnapshot:
        session = self.session
        return SessionSnapshot(
            is_active=session.is_active,
            duration_hours=session.duration_hours,
            selected_hours=self._selected.hours,
            end_time=session.end_time,
            start_angle=session.start_angle,
            elapsed_fraction=session.elapsed_fraction,
            current_time=self.current_time,
            hour_angle=hour_angle(self.current_time),
            remaining_seconds=self.remaining_seconds(),
        )

    def _cancel_session_task(self) -> None:
        if self._session_task is not None:
            self._session_task.cancel()
            self._session_task = None

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
