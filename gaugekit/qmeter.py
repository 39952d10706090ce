"""A needle meter with scale, threshold arcs, valid/warning windows and a spring effect."""

from __future__ import annotations

import math
from typing import Iterator

from PIL import Image

from .painting import (
    BLACK,
    DARK_RED,
    GREEN,
    RED,
    WHITE,
    YELLOW,
    Color,
    Painter,
    Rect,
    Signal,
)
from .qgauge import ErrorCode

_OVERSHOOT = 1.70158
_ANIMATION_FRAMES = 60


def out_back(t: float) -> float:
    """Easing curve that overshoots the target slightly before settling on it."""
    t = float(t) - 1.0
    return t * t * ((_OVERSHOOT + 1.0) * t + _OVERSHOOT) + 1.0


def _mix(c0: Color, c1: Color, fraction: float = 0.5) -> Color:
    return Color(*(round(a + (b - a) * fraction) for a, b in zip(c0.rgba, c1.rgba)))


class Meter:
    """A dial with a needle, drawn in a 100x100 window centred on the widget.

    Problems are reported through ``error_signal`` (an ErrorCode); the
    ``threshold_alarm`` signal fires once on each crossing of the threshold,
    with True when the value rises above it and False when it falls below.
    """

    def __init__(self) -> None:
        self.error_signal = Signal()
        self.threshold_alarm = Signal()
        self.precision = 0
        self.precision_numeric = 0
        self.steps = 10
        self._threshold_flag = False
        self.foreground: Color = WHITE
        self.background: Color = BLACK
        self.threshold_enabled = True
        self.numeric_indicator_enabled = True
        self._value = 0.0
        self._min_value = 0.0
        self._max_value = 100.0
        self._threshold = 0.0
        self.set_min_value(0)
        self.set_max_value(100)
        self.set_value(0)
        self.start_angle = 225.0
        self.end_angle = -45.0
        self.label = "speed"
        self.units = "km/h"
        self.set_threshold(80)
        self.valid_window_enabled = False
        self.begin_valid_value = 40.0
        self.end_valid_value = 50.0
        self.warning_window_enabled = False
        self.begin_warning_value = 30.0
        self.end_warning_value = 60.0

    # -- properties ----------------------------------------------------
    @property
    def value(self) -> float:
        return self._value

    @property
    def min_value(self) -> float:
        return self._min_value

    @property
    def max_value(self) -> float:
        return self._max_value

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def threshold_flag(self) -> bool:
        """Whether the value currently stands above the threshold."""
        return self._threshold_flag

    # -- value and range -----------------------------------------------
    def set_value(self, value: float) -> None:
        """Set the value, clamped to the range; clamping is reported as OUT_OF_RANGE."""
        value = float(value)
        if value > self._max_value:
            self._value = self._max_value
            self.error_signal.emit(ErrorCode.OUT_OF_RANGE)
        elif value < self._min_value:
            self._value = self._min_value
            self.error_signal.emit(ErrorCode.OUT_OF_RANGE)
        else:
            self._value = value
        if self.threshold_enabled:
            self._threshold_manager()

    def set_min_value(self, value: float) -> None:
        self._min_value = float(value)

    def set_max_value(self, value: float) -> None:
        """Set the maximum; a value not above the minimum is reported and ignored."""
        if value > self._min_value:
            self._max_value = float(value)
        else:
            self.error_signal.emit(ErrorCode.MAX_VALUE_ERROR)

    def set_threshold(self, value: float) -> None:
        """Set the threshold; it must lie strictly inside the range."""
        if self._min_value < value < self._max_value:
            self._threshold = float(value)
        else:
            self.error_signal.emit(ErrorCode.THRESHOLD_ERROR)

    def _threshold_manager(self) -> None:
        if self._value > self._threshold and not self._threshold_flag:
            self._threshold_flag = True
            self.threshold_alarm.emit(True)
        elif self._value < self._threshold and self._threshold_flag:
            self._threshold_flag = False
            self.threshold_alarm.emit(False)

    # -- derived values ------------------------------------------------
    def value_angle(self, value: float) -> float:
        """Angle on the dial, in degrees counter-clockwise from 3 o'clock, for a value."""
        span = self._max_value - self._min_value
        return self.start_angle + (self.end_angle - self.start_angle) / span * (
            value - self._min_value
        )

    def scale_labels(self) -> list[str]:
        """Texts written at each scale step, from the minimum upwards."""
        step = (self._max_value - self._min_value) / self.steps
        return [f"{i * step + self._min_value:.{self.precision}f}"
                for i in range(self.steps + 1)]

    def numeric_text(self) -> str:
        return f"{self._value:.{self.precision_numeric}f}"

    def set_value_with_spring_effect(self, value: float,
                                     frames: int = _ANIMATION_FRAMES) -> Iterator[float]:
        """Animate towards a value with an overshooting ease.

        Each iteration applies the next frame through set_value and yields the
        resulting value; the last frame lands exactly on the target.
        """
        if frames < 1:
            raise ValueError("an animation needs at least one frame")
        start = self._value
        end = float(value)

        def frames_iter() -> Iterator[float]:
            for frame in range(1, frames + 1):
                progress = out_back(frame / frames)
                self.set_value(start + (end - start) * progress)
                yield self._value

        return frames_iter()

    # -- drawing -------------------------------------------------------
    def render(self, width: int, height: int) -> Image.Image:
        painter = Painter(width, height)
        side = min(width, height)
        painter.translate((width - side) / 2.0, (height - side) / 2.0)
        painter.scale(side / 100.0, side / 100.0)
        painter.translate(50.0, 50.0)

        painter.draw_ellipse(Rect(-45, -45, 90, 90), fill=self.background)
        glass = _mix(Color(255, 255, 255, 30), Color(120, 120, 120, 20))
        painter.draw_ellipse(Rect(-45, -45, 90, 90), fill=glass)
        self._draw_ticks(painter)
        self._draw_scale(painter)
        painter.draw_text(Rect(-15, -20, 30, 10), self.units, self.foreground, 6)
        self._draw_threshold_line(painter)
        if self.warning_window_enabled:
            self._draw_window(painter, self.begin_warning_value, self.end_warning_value,
                              YELLOW)
        if self.valid_window_enabled:
            self._draw_window(painter, self.begin_valid_value, self.end_valid_value, GREEN)
        self._draw_needle(painter)
        if self.numeric_indicator_enabled:
            color = RED if self._threshold_flag else WHITE
            painter.draw_text(Rect(-15, 25, 30, 10), self.numeric_text(), color, 8)
        painter.draw_text(Rect(-20, 15, 40, 10), self.label, self.foreground, 6)
        painter.draw_arc(Rect(-47, -47, 94, 94), 30, 390,
                         _mix(WHITE, Color(60, 60, 60, 250), 0.7), 3)
        return painter.image()

    def _draw_ticks(self, painter: Painter) -> None:
        painter.save()
        painter.rotate(-self.start_angle)
        angle_step = (self.start_angle - self.end_angle) / self.steps
        for _ in range(self.steps + 1):
            painter.draw_line(28, 0, 30, 0, self.foreground, 1)
            painter.rotate(angle_step)
        painter.restore()
        painter.draw_arc(Rect(-28, -28, 56, 56), self.start_angle,
                         self.end_angle - self.start_angle, self.foreground, 1)

    def _draw_scale(self, painter: Painter) -> None:
        start_rad = math.radians(self.start_angle) + math.pi / 2.0
        delta_rad = math.radians((self.end_angle - self.start_angle) / self.steps)
        for i, text in enumerate(self.scale_labels()):
            angle = start_rad + i * delta_rad
            centre = Rect(38 * math.sin(angle), 38 * math.cos(angle), 0, 0)
            painter.draw_text(centre, text, self.foreground, 5)

    def _draw_threshold_line(self, painter: Painter) -> None:
        if not self.threshold_enabled:
            return
        angle = self.value_angle(self._threshold)
        area = Rect(-25, -25, 50, 50)
        painter.draw_arc(area, int(self.start_angle), int(angle - self.start_angle), GREEN, 3)
        painter.draw_arc(area, int(angle), int(self.end_angle - angle), RED, 3)

    def _draw_window(self, painter: Painter, begin: float, end: float, color: Color) -> None:
        begin_angle = self.value_angle(begin)
        end_angle = self.value_angle(end)
        low, high = sorted((begin_angle, end_angle))
        painter.draw_arc(Rect(-25, -25, 50, 50), int(low), int(high - low), color, 2)

    def _draw_needle(self, painter: Painter) -> None:
        painter.save()
        painter.rotate(-90.0)
        painter.rotate(-int(self.value_angle(self._value)))
        outline = Color(DARK_RED.r, DARK_RED.g, DARK_RED.b, 90)
        painter.draw_polygon([(-2, 0), (2, 0), (0, 30)],
                             fill=_mix(Color(255, 120, 120), Color(200, 20, 20)),
                             outline=outline)
        painter.draw_polygon([(-1, 0), (1, 0), (0, 29)], fill=Color(255, 120, 120),
                             outline=outline)
        painter.restore()
        painter.draw_ellipse(Rect(-7, -7, 14, 14), fill=_mix(WHITE, BLACK))