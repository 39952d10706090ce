"""A horizontal progress bar with a percentage readout beside it."""

from __future__ import annotations

import math

from PIL import Image

from .painting import BLACK, WHITE, Color, Painter, Point, Rect

_SPACE = 10


def _rounded_rect(rect: Rect, rx: float, ry: float) -> list[Point]:
    """Outline of a rectangle with elliptical corners."""
    rx = min(rx, rect.width / 2.0)
    ry = min(ry, rect.height / 2.0)
    corners = (
        (rect.right - rx, rect.top + ry, 0),
        (rect.left + rx, rect.top + ry, 90),
        (rect.left + rx, rect.bottom - ry, 180),
        (rect.right - rx, rect.bottom - ry, 270),
    )
    points = []
    for cx, cy, start in corners:
        for step in range(7):
            theta = math.radians(start + step * 15)
            points.append((cx + rx * math.cos(theta), cy - ry * math.sin(theta)))
    return points


class ColorProgressBar:
    """Progress bar over 0..100 with optional vertical split lines."""

    def __init__(self) -> None:
        self.minimum = 0.0
        self.maximum = 100.0
        self._value = 0.0
        self.bar_background_color: Color = WHITE
        self.split_line_color: Color = BLACK
        self.text_color = Color(37, 125, 218)
        self.bar_color = Color(255, 107, 107)
        self.show_split_line = False
        self._split_line_delta = 4
        self._decimal = 0
        self.x_radius = 5
        self.y_radius = 5

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        self._value = float(value)

    @property
    def decimal(self) -> int:
        return self._decimal

    @decimal.setter
    def decimal(self, count: int) -> None:
        if count < 0:
            raise ValueError("decimal count must not be negative")
        self._decimal = int(count)

    @property
    def split_line_delta(self) -> int:
        return self._split_line_delta

    @split_line_delta.setter
    def split_line_delta(self, delta: int) -> None:
        if delta < 0:
            raise ValueError("split line spacing must not be negative")
        self._split_line_delta = int(delta)

    def _fraction(self) -> float:
        return (self._value - self.minimum) / (self.maximum - self.minimum)

    def percent_text(self) -> str:
        """The readout text, e.g. '25%' for a quarter-full bar."""
        return f"{self._fraction() * 100.0:.{self._decimal}f}%"

    def render(self, width: int, height: int) -> Image.Image:
        painter = Painter(width, height)
        bar = Rect(0.0, 0.0, 0.9 * width - _SPACE, float(height))
        text_area = Rect(0.9 * width + _SPACE, 0.0, 0.1 * width - _SPACE, float(height))

        for area in (bar, text_area):
            if area.width > 0 and area.height > 0:
                painter.draw_polygon(_rounded_rect(area, self.x_radius, self.y_radius),
                                     fill=self.bar_background_color)

        dx = (1.0 - self._fraction()) * bar.width
        filled = bar.adjusted(0, 0, -dx, 0)
        if filled.width > 0 and filled.height > 0:
            painter.draw_polygon(_rounded_rect(filled, self.x_radius, self.y_radius),
                                 fill=self.bar_color)

        if self.show_split_line:
            for x in range(0, math.ceil(bar.right), self._split_line_delta + 1):
                painter.draw_line(x, 0, x, height, self.split_line_color, 1)

        painter.draw_text(text_area, self.percent_text(), self.text_color,
                          max(1.0, min(12.0, height * 0.6)))
        return painter.image()