"""Items composed into a dial gauge: backgrounds, scales, arcs, labels and ticks."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, Protocol, Sequence

from .painting import (
    BLACK,
    DARK_GRAY,
    DARK_GREEN,
    GRAY,
    GREEN,
    RED,
    WHITE,
    Color,
    Painter,
    Point,
    Rect,
)


class GaugeErrorKind(Enum):
    INVALID_VALUE_RANGE = "invalid value range"
    INVALID_DEGREE_RANGE = "invalid degree range"
    INVALID_STEP = "invalid step"


class GaugeRangeError(ValueError):
    """Raised when a gauge item is given an inconsistent range or step."""

    def __init__(self, kind: GaugeErrorKind, message: str | None = None) -> None:
        super().__init__(message or kind.value)
        self.kind = kind


class GaugeParent(Protocol):
    def rect(self) -> Rect: ...

    def update(self) -> None: ...


def _lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _gradient_color(stops: Sequence[tuple[float, Color]], t: float = 0.5) -> Color | None:
    """Colour of a gradient with the given stops at fraction t."""
    ordered = sorted(stops, key=lambda stop: stop[0])
    if not ordered:
        return None
    if t <= ordered[0][0]:
        return ordered[0][1]
    for (p0, c0), (p1, c1) in zip(ordered, ordered[1:]):
        if t <= p1:
            f = 0.0 if p1 == p0 else (t - p0) / (p1 - p0)
            return Color(*(round(x0 + (x1 - x0) * f) for x0, x1 in zip(c0.rgba, c1.rgba)))
    return ordered[-1][1]


def _stepped(start: float, stop: float, step: float) -> Iterator[float]:
    count = 0
    while (value := start + count * step) <= stop + 1e-9:
        yield value
        count += 1


class GaugeItem(ABC):
    """Base of everything drawn on a gauge, placed at a radial position in percent."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        self.parent = parent
        self._rect = Rect(0.0, 0.0, 0.0, 0.0)
        self._position = 50.0

    @property
    def position(self) -> float:
        return self._position

    @position.setter
    def position(self, percentage: float) -> None:
        self._position = min(100.0, max(0.0, float(percentage)))
        self.update()

    def rect(self) -> Rect:
        return self._rect

    def update(self) -> None:
        if self.parent is not None:
            self.parent.update()

    def reset_rect(self) -> Rect:
        """Recompute the square drawing area centred in the parent."""
        outer = self.parent.rect() if self.parent is not None else Rect(0.0, 0.0, 0.0, 0.0)
        r = self.get_radius(outer)
        self._rect = Rect(0.0, 0.0, 2.0 * r, 2.0 * r).moved_center(*outer.center())
        return self._rect

    def adjust_rect(self, percentage: float) -> Rect:
        r = self.get_radius(self._rect)
        offset = r - percentage * r / 100.0
        return self._rect.adjusted(offset, offset, -offset, -offset)

    def get_radius(self, rect: Rect) -> float:
        return min(rect.width, rect.height) / 2.0

    def get_point(self, deg: float, rect: Rect) -> Point:
        """Point on the circle of `rect`; 0 degrees is left, 90 is top."""
        r = self.get_radius(rect)
        cx, cy = rect.center()
        rad = math.radians(deg)
        return (cx - math.cos(rad) * r, cy - math.sin(rad) * r)

    def get_angle(self, point: Point, rect: Rect) -> float:
        cx, cy = rect.center()
        return math.degrees(math.atan2(cy - point[1], cx - point[0]))

    @abstractmethod
    def draw(self, painter: Painter) -> None:
        """Paint the item."""


class ScaleItem(GaugeItem):
    """An item that maps values onto an angular range."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self._min_degree = -45.0
        self._max_degree = 225.0
        self._min_value = 0.0
        self._max_value = 100.0

    @property
    def min_value(self) -> float:
        return self._min_value

    @property
    def max_value(self) -> float:
        return self._max_value

    @property
    def min_degree(self) -> float:
        return self._min_degree

    @property
    def max_degree(self) -> float:
        return self._max_degree

    def set_value_range(self, min_value: float, max_value: float) -> None:
        if not min_value < max_value:
            raise GaugeRangeError(GaugeErrorKind.INVALID_VALUE_RANGE)
        self._min_value = float(min_value)
        self._max_value = float(max_value)

    def set_degree_range(self, min_degree: float, max_degree: float) -> None:
        if not min_degree < max_degree:
            raise GaugeRangeError(GaugeErrorKind.INVALID_VALUE_RANGE)
        self._min_degree = float(min_degree)
        self._max_degree = float(max_degree)

    def set_min_value(self, min_value: float) -> None:
        if min_value > self._max_value:
            raise GaugeRangeError(GaugeErrorKind.INVALID_VALUE_RANGE)
        self._min_value = float(min_value)
        self.update()

    def set_max_value(self, max_value: float) -> None:
        if max_value < self._min_value:
            raise GaugeRangeError(GaugeErrorKind.INVALID_VALUE_RANGE)
        self._max_value = float(max_value)
        self.update()

    def set_min_degree(self, min_degree: float) -> None:
        if min_degree > self._max_degree:
            raise GaugeRangeError(GaugeErrorKind.INVALID_DEGREE_RANGE)
        self._min_degree = float(min_degree)
        self.update()

    def set_max_degree(self, max_degree: float) -> None:
        if max_degree < self._min_degree:
            raise GaugeRangeError(GaugeErrorKind.INVALID_DEGREE_RANGE)
        self._max_degree = float(max_degree)
        self.update()

    def deg_from_value(self, value: float) -> float:
        a = (self._max_degree - self._min_degree) / (self._max_value - self._min_value)
        b = -a * self._min_value + self._min_degree
        return a * value + b


class BackgroundItem(GaugeItem):
    """A filled disc shaded by a diagonal gradient."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.position = 88
        self.colors: list[tuple[float, Color]] = []
        self.add_color(0.4, DARK_GRAY)
        self.add_color(0.8, BLACK)

    def add_color(self, position: float, color: Color) -> None:
        """Add a gradient stop; positions outside 0..1 are ignored."""
        if position < 0 or position > 1:
            return
        self.colors.append((float(position), color))
        self.update()

    def clear_colors(self) -> None:
        self.colors.clear()

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        fill = _gradient_color(self.colors)
        painter.draw_ellipse(self.adjust_rect(self.position), fill=fill)


class GlassItem(GaugeItem):
    """A translucent highlight suggesting a cover glass."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.position = 88

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        upper = self.adjust_rect(self.position)
        r = self.get_radius(upper)
        fill = _gradient_color([(0.1, GRAY.with_alpha(0.2)), (0.5, WHITE.with_alpha(0.4))])
        painter.draw_pie(upper, 0, 180, fill)
        lower = Rect(upper.x, upper.y, upper.width, r / 2.0).moved_center(*self.rect().center())
        painter.draw_pie(lower, 0, -180, fill)


class LabelItem(GaugeItem):
    """Text placed at an angle on the circle of its position."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.position = 50
        self._angle = 270.0
        self._text = "%"
        self._color = BLACK

    @property
    def angle(self) -> float:
        return self._angle

    @angle.setter
    def angle(self, value: float) -> None:
        self._angle = float(value)
        self.update()

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str, repaint: bool = True) -> None:
        self._text = text
        if repaint:
            self.update()

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._color = value
        self.update()

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        r = self.get_radius(self.rect())
        cx, cy = self.get_point(self._angle, area)
        painter.draw_text(Rect(cx, cy, 0.0, 0.0), self._text, self._color, r / 10.0)


class ArcItem(ScaleItem):
    """A thin arc spanning the scale's degree range."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.position = 80
        self.color = BLACK

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        r = self.get_radius(area)
        painter.draw_arc(area, -(self._min_degree + 180), -(self._max_degree - self._min_degree),
                         self.color, r / 40.0)


class ColorBand(ScaleItem):
    """Coloured arc segments, each ending at a given value."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.band_colors: list[tuple[Color, float]] = [
            (GREEN, 10.0),
            (DARK_GREEN, 50.0),
            (RED, 100.0),
        ]
        self.position = 50

    def set_colors(self, colors: Sequence[tuple[Color, float]]) -> None:
        self.band_colors = list(colors)
        self.update()

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        r = self.get_radius(self.rect())
        area = self.adjust_rect(self.position)
        offset = self.deg_from_value(self._min_value)
        previous = self._min_value
        for color, value in self.band_colors:
            sweep = self.deg_from_value(value) - self.deg_from_value(previous)
            painter.draw_arc(area, 180 - offset, -sweep, color, r / 20.0)
            offset += sweep
            previous = value


class DegreesItem(ScaleItem):
    """Tick marks placed at every step along the scale."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self._step = 10.0
        self._color = BLACK
        self._sub_degree = False
        self.position = 90

    @property
    def step(self) -> float:
        return self._step

    @step.setter
    def step(self, value: float) -> None:
        if value <= 0:
            raise GaugeRangeError(GaugeErrorKind.INVALID_STEP)
        self._step = float(value)
        self.update()

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._color = value
        self.update()

    @property
    def sub_degree(self) -> bool:
        return self._sub_degree

    @sub_degree.setter
    def sub_degree(self, value: bool) -> None:
        self._sub_degree = bool(value)
        self.update()

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        r = self.get_radius(area)
        center = area.center()
        width = 1.0 if self._sub_degree else r / 25.0
        for value in _stepped(self._min_value, self._max_value, self._step):
            edge = self.get_point(self.deg_from_value(value), area)
            outer = _lerp(edge, center, 0.03)
            inner = _lerp(edge, center, 0.13)
            painter.draw_line(*outer, *inner, self._color, width)