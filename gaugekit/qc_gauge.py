"""The dial gauge widget and its needle, value-label and attitude-meter items."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterator

from PIL import Image

from .painting import (
    BLACK,
    BLUE,
    DARK_BLUE,
    GRAY,
    RED,
    WHITE,
    Color,
    Painter,
    Point,
    Rect,
)
from .qc_items import (
    ArcItem,
    BackgroundItem,
    ColorBand,
    DegreesItem,
    GaugeErrorKind,
    GaugeItem,
    GaugeParent,
    GaugeRangeError,
    GlassItem,
    LabelItem,
    ScaleItem,
)

MINIMUM_SIZE = 250


def _number_text(value: float) -> str:
    """Shortest text for a number, six significant digits at most."""
    return f"{value:.6g}"


def _mix(c0: Color, c1: Color, fraction: float) -> Color:
    return Color(*(round(a + (b - a) * fraction) for a, b in zip(c0.rgba, c1.rgba)))


def _lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


class NeedleType(Enum):
    DIAMOND = "diamond"
    TRIANGLE = "triangle"
    FEATHER = "feather"
    ATTITUDE_METER = "attitude_meter"
    COMPASS = "compass"


class NeedleItem(ScaleItem):
    """A needle rotated to point at the current value."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self._current_value = 0.0
        self._color = BLACK
        self._label: LabelItem | None = None
        self._needle_type = NeedleType.FEATHER
        self._value_format = ""

    @property
    def current_value(self) -> float:
        return self._current_value

    def set_current_value(self, value: float) -> None:
        """Set the value, clamped to the scale's range; a linked label shows it."""
        self._current_value = float(min(self._max_value, max(self._min_value, value)))
        if self._label is not None:
            self._label.set_text(_number_text(self._current_value), False)
        self.update()

    @property
    def value_format(self) -> str:
        return self._value_format

    @value_format.setter
    def value_format(self, fmt: str) -> None:
        self._value_format = fmt
        self.update()

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        self._color = value
        self.update()

    @property
    def label(self) -> LabelItem | None:
        return self._label

    @label.setter
    def label(self, item: LabelItem | None) -> None:
        self._label = item
        self.update()

    @property
    def needle_type(self) -> NeedleType:
        return self._needle_type

    @needle_type.setter
    def needle_type(self, value: NeedleType) -> None:
        self._needle_type = NeedleType(value)
        self.update()

    def needle_polygon(self, radius: float) -> list[Point]:
        """Outline of the needle pointing down the +y axis, in unrotated coordinates."""
        r = float(radius)
        if self._needle_type is NeedleType.DIAMOND:
            return [(0.0, 0.0), (-r / 20.0, r / 20.0), (0.0, r), (r / 20.0, r / 20.0)]
        if self._needle_type is NeedleType.TRIANGLE:
            return [(0.0, r), (-r / 40.0, 0.0), (r / 40.0, 0.0)]
        if self._needle_type is NeedleType.ATTITUDE_METER:
            return [(0.0, r), (-r / 20.0, 0.85 * r), (r / 20.0, 0.85 * r)]
        if self._needle_type is NeedleType.COMPASS:
            return [(0.0, r), (-r / 15.0, 0.0), (0.0, -r), (r / 15.0, 0.0)]
        return [
            (0.0, r),
            (-r / 40.0, 0.0),
            (-r / 15.0, -r / 5.0),
            (r / 15.0, -r / 5.0),
            (r / 40.0, 0.0),
        ]

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        painter.save()
        painter.translate(*area.center())
        painter.rotate(self.deg_from_value(self._current_value) + 90.0)
        # The compass gradient runs red up to 90% of the way, so the body reads red.
        fill = RED if self._needle_type is NeedleType.COMPASS else self._color
        painter.draw_polygon(self.needle_polygon(self.get_radius(area)), fill=fill)
        painter.restore()


class ValuesItem(ScaleItem):
    """Numbers written at every step along the scale."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self.position = 70
        self.color = BLACK
        self._step = 10.0

    @property
    def step(self) -> float:
        return self._step

    @step.setter
    def step(self, value: float) -> None:
        if value <= 0:
            raise GaugeRangeError(GaugeErrorKind.INVALID_STEP)
        self._step = float(value)

    def _values(self) -> Iterator[float]:
        count = 0
        while (value := self._min_value + count * self._step) <= self._max_value + 1e-9:
            yield value
            count += 1

    def labels(self) -> list[str]:
        """The texts written on the scale, from the minimum value upwards."""
        return [_number_text(value) for value in self._values()]

    def draw(self, painter: Painter) -> None:
        area = self.reset_rect()
        size = 0.08 * self.get_radius(self.adjust_rect(99))
        center = area.center()
        for value in self._values():
            edge = self.get_point(self.deg_from_value(value), area)
            cx, cy = _lerp(edge, center, 1.0 - self.position / 100.0)
            painter.draw_text(Rect(cx, cy, 0.0, 0.0), _number_text(value), self.color, size)


class AttitudeMeterItem(GaugeItem):
    """An artificial horizon showing roll and pitch."""

    def __init__(self, parent: GaugeParent | None = None) -> None:
        super().__init__(parent)
        self._pitch = 0.0
        self._roll = 0.0
        self._offset = 0.0

    @property
    def pitch(self) -> float:
        return self._pitch

    @property
    def roll(self) -> float:
        return self._roll

    def set_current_pitch(self, pitch: float) -> None:
        self._pitch = -float(pitch)
        self.update()

    def set_current_roll(self, roll: float) -> None:
        self._roll = float(roll)
        self.update()

    def _start_angle(self, area: Rect) -> float:
        """Angle at which the horizon line meets the rim on the roll side."""
        r = self.get_radius(area)
        rad = math.radians(self._roll)
        ux, uy = -math.cos(rad), -math.sin(rad)
        wy = -self._offset
        dot = wy * uy
        disc = dot * dot - wy * wy + r * r
        t = -dot + math.sqrt(disc) if disc > 0 else -dot
        cx, cy = area.center()
        return self.get_angle((cx + t * ux, cy + wy + t * uy), area)

    def draw(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        r = self.get_radius(area)
        factor = 0.0135 if self._pitch < 0 else 0.015
        self._offset = factor * r * self._pitch

        offset = self._start_angle(area)
        sky = _mix(BLUE.with_alpha(0.5), DARK_BLUE.with_alpha(0.5), 0.625)
        start = 180.0 - offset
        painter.draw_chord(area, start, (offset - 2 * self._roll) - start, sky)

        ground = _mix(Color(139, 119, 118), Color(139, 119, 101), 0.625)
        start = 180.0 + offset
        painter.draw_chord(area, -start, (offset - 2 * self._roll) + start, ground)

        self._draw_pitch_steps(painter, area)
        self._draw_handle(painter)
        self._draw_degrees(painter)

    def _draw_pitch_steps(self, painter: Painter, area: Rect) -> None:
        r = self.get_radius(area)
        cx, cy = area.center()
        painter.save()
        painter.translate(cx, cy - self._offset)
        painter.rotate(self._roll)
        for i in range(-30, 31, 10):
            y = r / 70.0 * i
            half = 0.01 * r * abs(i)
            painter.draw_line(-half, y, half, y, WHITE, r / 40.0)
            if i == 0:
                continue
            text = str(abs(i))
            painter.draw_text(Rect(-half - 0.1 * r, y, 0.0, 0.0), text, WHITE, 0.08 * r)
            painter.draw_text(Rect(half + 0.1 * r, y, 0.0, 0.0), text, WHITE, 0.08 * r)
        painter.restore()

    def _draw_handle(self, painter: Painter) -> None:
        hub = self.adjust_rect(15)
        r = self.get_radius(hub)
        width = 0.25 * r
        painter.draw_arc(hub, 0, -180, GRAY, width)
        cx, cy = hub.center()
        painter.draw_line(cx - 2 * r, cy, cx - r, cy, GRAY, width)
        painter.draw_line(cx + 2 * r, cy, cx + r, cy, GRAY, width)
        painter.draw_ellipse(self.adjust_rect(2), fill=GRAY, outline=GRAY, width=width)
        painter.draw_line(cx, cy + r, cx, cy + 4 * r, GRAY, width)

        full = self.adjust_rect(self.position)
        trapezium = [
            (cx - r, cy + 4 * r),
            self.get_point(290, full),
            self.get_point(250, full),
            (cx + r, cy + 4 * r),
        ]
        painter.draw_polygon(trapezium, fill=GRAY, outline=GRAY)
        painter.draw_chord(full, -70, -40, GRAY)

    def _draw_degrees(self, painter: Painter) -> None:
        self.reset_rect()
        area = self.adjust_rect(self.position)
        r = self.get_radius(area)
        for deg in range(60, 121, 10):
            if deg != 90:
                self._draw_degree(painter, area, deg, 1.0)
        for deg in (0, 90, 180, 30, 150):
            self._draw_degree(painter, area, deg, r / 30.0)

    def _draw_degree(self, painter: Painter, area: Rect, deg: float, width: float) -> None:
        edge = self.get_point(deg, area)
        inner = _lerp(edge, area.center(), 0.1)
        painter.draw_line(*edge, *inner, WHITE, width)


class GaugeWidget:
    """A square-ish canvas holding gauge items drawn in insertion order."""

    def __init__(self, width: int = MINIMUM_SIZE, height: int = MINIMUM_SIZE) -> None:
        self.width = max(MINIMUM_SIZE, int(width))
        self.height = max(MINIMUM_SIZE, int(height))
        self.dirty = True
        self._items: list[GaugeItem] = []

    @property
    def items(self) -> list[GaugeItem]:
        return list(self._items)

    def _add(self, item: GaugeItem, position: float) -> GaugeItem:
        item.position = position
        self._items.append(item)
        return item

    def add_background(self, position: float) -> BackgroundItem:
        return self._add(BackgroundItem(self), position)

    def add_degrees(self, position: float) -> DegreesItem:
        return self._add(DegreesItem(self), position)

    def add_values(self, position: float) -> ValuesItem:
        return self._add(ValuesItem(self), position)

    def add_arc(self, position: float) -> ArcItem:
        return self._add(ArcItem(self), position)

    def add_color_band(self, position: float) -> ColorBand:
        return self._add(ColorBand(self), position)

    def add_needle(self, position: float) -> NeedleItem:
        return self._add(NeedleItem(self), position)

    def add_label(self, position: float) -> LabelItem:
        return self._add(LabelItem(self), position)

    def add_glass(self, position: float) -> GlassItem:
        return self._add(GlassItem(self), position)

    def add_attitude_meter(self, position: float) -> AttitudeMeterItem:
        return self._add(AttitudeMeterItem(self), position)

    def add_item(self, item: GaugeItem, position: float) -> None:
        """Take ownership of an item and place it at the given position."""
        item.parent = self
        self._add(item, position)

    def remove_item(self, item: GaugeItem) -> int:
        """Remove every occurrence of the item and return how many there were."""
        count = sum(1 for existing in self._items if existing is item)
        self._items = [existing for existing in self._items if existing is not item]
        return count

    def rect(self) -> Rect:
        return Rect(0.0, 0.0, float(self.width), float(self.height))

    def update(self) -> None:
        self.dirty = True

    def render(self) -> Image.Image:
        painter = Painter(self.width, self.height)
        for item in self._items:
            item.draw(painter)
        self.dirty = False
        return painter.image()