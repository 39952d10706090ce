"""A circular progress bar drawn as a donut, a pie or a thin ring."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Sequence

from PIL import Image

from .painting import BLACK, WHITE, Color, Painter, Rect

POSITION_LEFT = 180
POSITION_TOP = 90
POSITION_RIGHT = 0
POSITION_BOTTOM = -90


class BarStyle(Enum):
    DONUT = "donut"
    PIE = "pie"
    LINE = "line"


class _UpdateFlag(Flag):
    NONE = 0
    VALUE = auto()
    PERCENT = auto()
    MAX = auto()


@dataclass
class Palette:
    """Colours used by the bar, named after the roles they play."""

    window: Color = Color(240, 240, 240)
    base: Color = WHITE
    alternate_base: Color = Color(233, 231, 227)
    shadow: Color = BLACK
    highlight: Color = Color(48, 140, 198)
    text: Color = BLACK


def _interpolate(stops: Sequence[tuple[float, Color]], t: float) -> Color:
    ordered = sorted(stops, key=lambda stop: stop[0])
    if t <= ordered[0][0]:
        return ordered[0][1]
    for (p0, c0), (p1, c1) in zip(ordered, ordered[1:]):
        if t <= p1:
            f = 0.0 if p1 == p0 else (t - p0) / (p1 - p0)
            return Color(*(round(a + (b - a) * f) for a, b in zip(c0.rgba, c1.rgba)))
    return ordered[-1][1]


class RoundProgressBar:
    """Circular progress indicator whose API follows a linear progress bar."""

    def __init__(self) -> None:
        self._min = 0.0
        self._max = 100.0
        self._value = 25.0
        self._null_position = float(POSITION_TOP)
        self._bar_style = BarStyle.DONUT
        self.outline_pen_width = 1.0
        self.data_pen_width = 1.0
        self._gradient: list[tuple[float, Color]] = []
        self._rebuild_brush = False
        self._data_stops: list[tuple[float, Color]] = []
        self._format = "%p%"
        self._decimals = 1
        self._flags = _UpdateFlag.PERCENT
        self.palette = Palette()

    # -- properties ----------------------------------------------------
    @property
    def value(self) -> float:
        return self._value

    @property
    def minimum(self) -> float:
        return self._min

    @property
    def maximum(self) -> float:
        return self._max

    @property
    def null_position(self) -> float:
        return self._null_position

    @property
    def bar_style(self) -> BarStyle:
        return self._bar_style

    @bar_style.setter
    def bar_style(self, style: BarStyle) -> None:
        self._bar_style = BarStyle(style)

    @property
    def format(self) -> str:
        return self._format

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def data_colors(self) -> list[tuple[float, Color]]:
        return list(self._gradient)

    # -- range and value -----------------------------------------------
    def set_range(self, minimum: float, maximum: float) -> None:
        """Set the range, swapping reversed bounds and clamping the value into it."""
        self._min, self._max = float(minimum), float(maximum)
        if self._max < self._min:
            self._min, self._max = self._max, self._min
        self._value = min(self._max, max(self._min, self._value))
        if self._gradient:
            self._rebuild_brush = True

    def set_minimum(self, minimum: float) -> None:
        self.set_range(minimum, self._max)

    def set_maximum(self, maximum: float) -> None:
        self.set_range(self._min, maximum)

    def set_value(self, value: float) -> None:
        """Set the value, clamped to the range."""
        self._value = float(min(self._max, max(self._min, value)))

    def set_null_position(self, position: float) -> None:
        """Set where the minimum lies on the circle, in degrees counter-clockwise from 3 o'clock."""
        if position != self._null_position:
            self._null_position = float(position)
            if self._gradient:
                self._rebuild_brush = True

    def set_data_colors(self, stops: Sequence[tuple[float, Color]]) -> None:
        """Fill the data area with a gradient from the minimum (0) to the maximum (1)."""
        stops = [(float(position), color) for position, color in stops]
        if stops != self._gradient:
            self._gradient = stops
            self._rebuild_brush = True

    # -- text ----------------------------------------------------------
    def set_format(self, fmt: str) -> None:
        """Set the text pattern: %v is the value, %p the percentage, %m the count of steps."""
        if fmt != self._format:
            self._format = fmt
            self._format_changed()

    def reset_format(self) -> None:
        self._format = ""
        self._format_changed()

    def set_decimals(self, count: int) -> None:
        """Set decimals shown; negative counts are ignored."""
        if count >= 0 and count != self._decimals:
            self._decimals = int(count)
            self._format_changed()

    def _format_changed(self) -> None:
        flags = _UpdateFlag.NONE
        if "%v" in self._format:
            flags |= _UpdateFlag.VALUE
        if "%p" in self._format:
            flags |= _UpdateFlag.PERCENT
        if "%m" in self._format:
            flags |= _UpdateFlag.MAX
        self._flags = flags

    def _number(self, number: float) -> str:
        return f"{number:.{self._decimals}f}"

    def value_to_text(self, value: float) -> str:
        text = self._format
        if _UpdateFlag.VALUE in self._flags:
            text = text.replace("%v", self._number(value))
        if _UpdateFlag.PERCENT in self._flags:
            span = self._max - self._min
            percent = (value - self._min) / span * 100.0 if span else math.nan
            text = text.replace("%p", self._number(percent))
        if _UpdateFlag.MAX in self._flags:
            text = text.replace("%m", self._number(self._max - self._min + 1))
        return text

    # -- geometry ------------------------------------------------------
    def inner_rect(self, outer_radius: float) -> tuple[Rect, float]:
        """The central area left free by the bar, and its diameter."""
        if self._bar_style is BarStyle.LINE:
            inner = outer_radius - self.outline_pen_width
        else:
            inner = outer_radius * 0.75
        delta = (outer_radius - inner) / 2.0
        return Rect(delta, delta, inner, inner), inner

    # -- drawing -------------------------------------------------------
    def _rebuild_brush_if_needed(self) -> None:
        if self._rebuild_brush:
            self._rebuild_brush = False
            self._data_stops = list(self._gradient)

    def render(self, width: int, height: int) -> Image.Image:
        painter = Painter(width, height, background=self.palette.window)
        outer = float(min(width, height))
        base = Rect(1.0, 1.0, outer - 2.0, outer - 2.0)
        self._rebuild_brush_if_needed()

        self._draw_base(painter, base)
        span = self._max - self._min
        arc = 360.0 / span * self._value if span else 0.0
        self._draw_value(painter, base, self._value, arc)

        inner, inner_radius = self.inner_rect(outer)
        if self._bar_style is BarStyle.DONUT:
            painter.draw_ellipse(inner, fill=self.palette.alternate_base,
                                 outline=self.palette.shadow, width=self.data_pen_width)
        if self._format:
            size = inner_radius * max(0.05, 0.35 - self._decimals * 0.08)
            painter.draw_text(inner, self.value_to_text(self._value), self.palette.text, size)
        return painter.image()

    def _ring_rect(self, base: Rect) -> Rect:
        half = self.outline_pen_width / 2.0
        return base.adjusted(half, half, -half, -half)

    def _draw_base(self, painter: Painter, base: Rect) -> None:
        pal = self.palette
        if self._bar_style is BarStyle.DONUT:
            painter.draw_ellipse(base, fill=pal.base, outline=pal.shadow,
                                 width=self.outline_pen_width)
        elif self._bar_style is BarStyle.PIE:
            painter.draw_ellipse(base, fill=pal.base, outline=pal.base,
                                 width=self.outline_pen_width)
        else:
            painter.draw_ellipse(self._ring_rect(base), outline=pal.base,
                                 width=self.outline_pen_width)

    def _draw_value(self, painter: Painter, base: Rect, value: float, arc: float) -> None:
        if value == self._min:
            return
        if self._bar_style is BarStyle.LINE:
            painter.draw_arc(self._ring_rect(base), self._null_position, -arc,
                             self.palette.highlight, self.data_pen_width)
            return
        if not self._data_stops:
            painter.draw_pie(base, self._null_position, -arc, self.palette.highlight)
            return
        # A conical gradient starting at the null position: draw it as thin slices.
        slices = max(1, math.ceil(abs(arc) / 2.0))
        step = arc / slices
        for index in range(slices):
            start = index * step
            color = _interpolate(self._data_stops, (start + step / 2.0) / 360.0)
            painter.draw_pie(base, self._null_position - start, -step, color)