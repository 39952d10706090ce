"""A speedometer dial with major and minor ticks and a numeric readout."""

from __future__ import annotations

import math

from PIL import Image

from .painting import WHITE, Color, Painter, Rect


def _mix(c0: Color, c1: Color, fraction: float = 0.5) -> Color:
    return Color(*(round(a + (b - a) * fraction) for a, b in zip(c0.rgba, c1.rgba)))


class SpeedWatch:
    """A dial whose scale spans from start_angle to 360 - end_angle, clockwise from below."""

    def __init__(self) -> None:
        self._value = 0.0
        self._min_value = 0
        self._max_value = 100
        self._precision = 0
        self.units = "km/h"
        self.title = "时速表"
        self._scale_major = 10
        self._scale_minor = 10
        self.start_angle = 60
        self.end_angle = 60
        self.crown_color = Color(160, 160, 160)
        self.foreground = Color(255, 255, 255)
        self.background = Color(65, 65, 65)
        self.numeric_indicator_enabled = True
        self.width = 400
        self.height = 400

    @property
    def value(self) -> float:
        return self._value

    @property
    def min_value(self) -> int:
        return self._min_value

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def scale_major(self) -> int:
        return self._scale_major

    @scale_major.setter
    def scale_major(self, count: int) -> None:
        if count < 1:
            raise ValueError("scale_major must be at least 1")
        self._scale_major = int(count)

    @property
    def scale_minor(self) -> int:
        return self._scale_minor

    @scale_minor.setter
    def scale_minor(self, count: int) -> None:
        if count < 1:
            raise ValueError("scale_minor must be at least 1")
        self._scale_minor = int(count)

    def set_value(self, value: float) -> None:
        """Set the value, clamped to the dial's range."""
        self._value = float(min(self._max_value, max(self._min_value, value)))

    def set_min_value(self, value: int) -> None:
        """Set the minimum; ignored unless it lies below the maximum."""
        if value < self._max_value:
            self._min_value = int(value)

    def set_max_value(self, value: int) -> None:
        """Set the maximum; ignored unless it lies above the minimum."""
        if value > self._min_value:
            self._max_value = int(value)

    def set_precision(self, precision: int) -> None:
        """Set the readout's decimals; values above 3 are ignored."""
        if precision <= 3:
            self._precision = int(precision)

    def numeric_text(self) -> str:
        decimals = self._precision if self._precision >= 0 else 6
        return f"{self._value:.{decimals}f} {self.units}"

    def scale_labels(self) -> list[str]:
        """Texts at the major ticks; the step between them is a whole number."""
        span = self._max_value - self._min_value
        step = int(span / self._scale_major)
        return [f"{float(i * step + self._min_value):.6g}"
                for i in range(self._scale_major + 1)]

    def _sweep(self) -> float:
        return 360.0 - self.start_angle - self.end_angle

    def indicator_angle(self) -> float:
        """Clockwise rotation of the needle from pointing straight down."""
        fraction = (self._value - self._min_value) / (self._max_value - self._min_value)
        return self.start_angle + self._sweep() * fraction

    def render(self, width: int, height: int) -> Image.Image:
        painter = Painter(width, height)
        painter.translate(width / 2.0, height / 2.0)
        side = min(width, height)
        painter.scale(side / 200.0, side / 200.0)

        painter.draw_ellipse(Rect(-100, -100, 200, 200),
                             fill=_mix(Color(255, 255, 255), Color(166, 166, 166)))
        painter.draw_ellipse(Rect(-92, -92, 184, 184), fill=self.background)
        self._draw_scale_numbers(painter)
        self._draw_scale(painter)
        painter.draw_text(Rect(0, -34, 0, 0), self.title, self.foreground, 9)
        if self.numeric_indicator_enabled:
            painter.draw_text(Rect(0, 38, 0, 0), self.numeric_text(), self.foreground, 9)
        self._draw_indicator(painter)
        return painter.image()

    def _draw_scale_numbers(self, painter: Painter) -> None:
        start_rad = (360 - self.start_angle - 90) * (3.14 / 180)
        delta_rad = self._sweep() * (3.14 / 180) / self._scale_major
        for i, text in enumerate(self.scale_labels()):
            angle = start_rad - i * delta_rad
            center = Rect(82 * math.cos(angle), -82 * math.sin(angle), 0, 0)
            painter.draw_text(center, text, self.foreground, 8)

    def _draw_scale(self, painter: Painter) -> None:
        painter.save()
        painter.rotate(self.start_angle)
        steps = self._scale_major * self._scale_minor
        angle_step = self._sweep() / steps
        for i in range(steps + 1):
            inner = 62 if i % self._scale_minor == 0 else 67
            painter.draw_line(0, inner, 0, 72, self.foreground, 1)
            painter.rotate(angle_step)
        painter.restore()

    def _draw_indicator(self, painter: Painter) -> None:
        painter.save()
        painter.rotate(self.indicator_angle())
        painter.draw_polygon([(-2, 0), (2, 0), (0, 60)],
                             fill=_mix(Color(60, 60, 60), Color(160, 160, 160)),
                             outline=WHITE)
        painter.restore()
        painter.draw_ellipse(Rect(-5, -5, 10, 10), fill=Color(150, 150, 200))