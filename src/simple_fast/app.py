"""App Kivy: dial de 24 horas con arco de progreso del ayuno."""

from __future__ import annotations

import logging

from simple_fast.clock import SystemClock
from simple_fast.config import AppConfig
from simple_fast.controller import FastingController
from simple_fast.dial import dial_marks, hand_points, progress_arc
from simple_fast.model import FASTING_PRESETS, SessionSnapshot, format_hhmmss
from simple_fast.scheduler import KivyScheduler

log = logging.getLogger(__name__)

DIAL_RADIUS_FACTOR = 0.36
HAND_LENGTH_FACTOR = 0.72
RING_WIDTH = 10.0
HAND_WIDTH = 2.0


def run_app(config: AppConfig) -> int:
    """Lanza la app Kivy."""
    from kivy.app import App
    from kivy.core.window import Window
    from kivy.graphics import Color, Line
    from kivy.uix.boxlayout import BoxLayout
    from kivy.uix.button import Button
    from kivy.uix.label import Label
    from kivy.uix.popup import Popup
    from kivy.uix.widget import Widget

    class DialWidget(Widget):
        """24-hour face, hour hand and progress arc."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.snapshot: SessionSnapshot | None = None
            self._labels: list[Label] = []
            for mark in dial_marks((0.0, 0.0), 1.0):
                label = Label(
                    text=str(mark.hour),
                    bold=mark.major,
                    font_size=18 if mark.major else 14,
                    size_hint=(None, None),
                    size=(28, 20),
                )
                self._labels.append(label)
                self.add_widget(label)
            self.bind(size=self.redraw, pos=self.redraw)

        def show(self, snap: SessionSnapshot) -> None:
            self.snapshot = snap
            self.redraw()

        def redraw(self, *_args: object) -> None:
            center = (float(self.center_x), float(self.center_y))
            radius = min(self.width, self.height) * DIAL_RADIUS_FACTOR
            marks = dial_marks(center, radius)
            for mark, label in zip(marks, self._labels):
                label.center = mark.label_pos

            self.canvas.before.clear()
            with self.canvas.before:
                Color(0.5, 0.5, 0.5, 0.3)
                Line(circle=(center[0], center[1], radius), width=RING_WIDTH)
                Color(1, 1, 1, 1)
                for mark in marks:
                    Line(points=[*mark.inner, *mark.outer], width=1)

                snap = self.snapshot
                if snap is None:
                    return
                arc = progress_arc(snap.start_angle, snap.elapsed_fraction)
                if arc is not None:
                    Color(0.16, 0.45, 0.95, 1)
                    Line(
                        circle=(center[0], center[1], radius, arc[0], arc[1]),
                        width=RING_WIDTH,
                        cap="round",
                    )
                Color(1, 1, 1, 1)
                start, end = hand_points(
                    center, radius * HAND_LENGTH_FACTOR, snap.hour_angle
                )
                Line(points=[*start, *end], width=HAND_WIDTH)

    class SimpleFastApp(App):
        """Main Kivy app."""

        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            self.controller = FastingController(
                SystemClock(config.tzinfo()),
                KivyScheduler(),
                default_hours=config.default_duration_hours,
                tick_seconds=config.tick_seconds,
            )
            self.dial: DialWidget | None = None
            self.status: Label | None = None
            self.fast_btn: Button | None = None
            self._unsubscribe = self.controller.subscribe(self._on_snapshot)

        def build(self) -> BoxLayout:
            Window.bind(on_key_down=self._on_key_down)

            root = BoxLayout(orientation="vertical", spacing=8, padding=10)
            root.add_widget(
                Label(
                    text="Simple Fasting App",
                    font_size=28,
                    bold=True,
                    size_hint_y=None,
                    height=48,
                )
            )
            self.dial = DialWidget()
            root.add_widget(self.dial)

            self.status = Label(text="", size_hint_y=None, height=30)
            root.add_widget(self.status)

            interval_btn = Button(
                text="Change Fasting Interval",
                size_hint_y=None,
                height=48,
                background_color=(0.2, 0.7, 0.3, 1),
            )
            interval_btn.bind(on_press=self._open_interval_picker)
            root.add_widget(interval_btn)

            self.fast_btn = Button(size_hint_y=None, height=48)
            self.fast_btn.bind(on_press=lambda *_args: self.controller.toggle())
            root.add_widget(self.fast_btn)

            self.controller.attach()
            self._on_snapshot(self.controller.snapshot())
            return root

        def on_stop(self) -> None:
            self.controller.detach()
            self._unsubscribe()

        def _on_key_down(
            self,
            _window: object,
            keycode: int,
            _scancode: int,
            _text: str,
            _modifiers: list[str],
        ) -> bool:
            # Esc: cerrar app.
            if keycode != 27:
                return False
            self.stop()
            return True

        def _on_snapshot(self, snap: SessionSnapshot) -> None:
            if self.dial is not None:
                self.dial.show(snap)
            if self.fast_btn is not None:
                self.fast_btn.text = fast_button_text(snap)
                self.fast_btn.background_color = (
                    (0.9, 0.2, 0.2, 1) if snap.is_active else (0.2, 0.4, 0.9, 1)
                )
            if self.status is not None:
                self.status.text = status_text(snap)

        def _open_interval_picker(self, _: object) -> None:
            content = BoxLayout(orientation="vertical", spacing=4, padding=8)
            popup = Popup(
                title="Select Fasting Interval",
                content=content,
                size_hint=(0.8, 0.6),
            )
            for preset in FASTING_PRESETS:
                btn = Button(text=preset.label, font_size=18, size_hint_y=None, height=44)

                def choose(*_args: object, hours: int = preset.hours) -> None:
                    self.controller.select_duration(hours)
                    popup.dismiss()

                btn.bind(on_press=choose)
                content.add_widget(btn)
            popup.open()

    log.info("Starting Kivy app")
    SimpleFastApp().run()
    return 0


def fast_button_text(snap: SessionSnapshot) -> str:
    """Label of the Start/End button."""
    return "End Fasting" if snap.is_active else "Start Fasting"


def status_text(snap: SessionSnapshot) -> str:
    """Status line under the dial."""
    selected = _preset_label(snap.selected_hours)
    if snap.is_active and snap.end_time is not None:
        ends = snap.end_time.strftime("%H:%M")
        return (
            f"{_preset_label(snap.duration_hours)} - ends {ends} - "
            f"{format_hhmmss(snap.remaining_seconds)} left"
        )
    if snap.elapsed_fraction >= 1.0:
        return f"Fast completed. Next: {selected}"
    return f"Interval: {selected}"


def _preset_label(hours: int) -> str:
    for preset in FASTING_PRESETS:
        if preset.hours == hours:
            return preset.label
    return f"{hours}h"
