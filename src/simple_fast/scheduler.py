"""Tareas periódicas cancelables (reloj simulado y reloj de Kivy)."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Protocol

from simple_fast.clock import ManualClock


class TaskHandle(Protocol):
    """Handle of a scheduled periodic task."""

    def cancel(self) -> None:
        """Stop the task; no callback runs after this returns."""


class Scheduler(Protocol):
    """Runs callbacks at a fixed interval."""

    def schedule_interval(
        self, callback: Callable[[], None], interval: float
    ) -> TaskHandle:
        """Call ``callback`` every ``interval`` seconds until cancelled."""


@dataclass
class ManualTask:
    """Periodic task owned by a :class:`ManualScheduler`."""

    callback: Callable[[], None]
    interval: float
    due: datetime
    seq: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler driven by a :class:`ManualClock`.

    Nothing fires until :meth:`advance` is called; then every task due inside
    the window runs in time order, with the clock moved to each firing time.
    """

    clock: ManualClock
    _tasks: list[ManualTask] = field(default_factory=list)
    _seq: int = 0

    def schedule_interval(
        self, callback: Callable[[], None], interval: float
    ) -> ManualTask:
        if interval <= 0:
            raise ValueError(f"Interval must be positive: {interval}")
        self._seq += 1
        task = ManualTask(
            callback=callback,
            interval=interval,
            due=self.clock.now() + timedelta(seconds=interval),
            seq=self._seq,
        )
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        """Tasks that are still scheduled."""
        return [task for task in self._tasks if not task.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks.

        Returns:
            Number of callbacks fired.
        """
        target = self.clock.now() + timedelta(seconds=seconds)
        fired = 0
        while True:
            self._tasks = self.pending
            due = [task for task in self._tasks if task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self.clock.set(task.due)
            task.due = task.due + timedelta(seconds=task.interval)
            task.callback()
            fired += 1
        self.clock.set(target)
        return fired


class KivyScheduler:
    """Scheduler backed by ``kivy.clock.Clock``."""

    def schedule_interval(
        self, callback: Callable[[], None], interval: float
    ) -> Any:
        from kivy.clock import Clock

        return Clock.schedule_interval(lambda _dt: callback(), interval)
