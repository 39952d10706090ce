"""Colours, rectangles, signals and a small raster painter built on Pillow."""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from PIL import Image, ImageDraw, ImageFont

Point = tuple[float, float]


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit components."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour component {name}={value} outside 0..255")

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def with_alpha(self, alpha: float) -> Color:
        """Return this colour with its opacity set from a fraction in 0..1."""
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha {alpha} outside 0..1")
        return Color(self.r, self.g, self.b, round(alpha * 255))


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
DARK_GRAY = Color(128, 128, 128)
GRAY = Color(160, 160, 164)
LIGHT_GRAY = Color(192, 192, 192)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
DARK_RED = Color(128, 0, 0)
DARK_GREEN = Color(0, 128, 0)
DARK_BLUE = Color(0, 0, 128)
YELLOW = Color(255, 255, 0)
TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle with floating-point geometry."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def adjusted(self, dx1: float, dy1: float, dx2: float, dy2: float) -> Rect:
        """Move the top-left corner by (dx1, dy1) and the bottom-right by (dx2, dy2)."""
        return Rect(
            self.x + dx1,
            self.y + dy1,
            self.width - dx1 + dx2,
            self.height - dy1 + dy2,
        )

    def moved_center(self, cx: float, cy: float) -> Rect:
        """Return a rectangle of the same size centred on (cx, cy)."""
        return Rect(cx - self.width / 2.0, cy - self.height / 2.0, self.width, self.height)


class Signal:
    """A list of callables invoked together when the signal is emitted."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove a connected slot; raises ValueError if it was never connected."""
        self._slots.remove(slot)

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)


@functools.lru_cache(maxsize=64)
def _font(pixels: int) -> Any:
    try:
        return ImageFont.load_default(size=pixels)
    except (TypeError, OSError):
        return ImageFont.load_default()


def _arc_points(rect: Rect, start: float, span: float) -> list[Point]:
    """Sample an elliptical arc; angles in degrees, counter-clockwise from 3 o'clock."""
    cx, cy = rect.center()
    rx, ry = rect.width / 2.0, rect.height / 2.0
    count = max(2, int(abs(span) / 3) + 2)
    points = []
    for step in range(count):
        theta = math.radians(start + span * step / (count - 1))
        points.append((cx + rx * math.cos(theta), cy - ry * math.sin(theta)))
    return points


class Painter:
    """Draws onto an RGBA image through a save/restore-able affine transform.

    Angles of arcs, pies and chords are in degrees, counter-clockwise from
    three o'clock; positive rotations turn clockwise on screen.
    """

    _IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    def __init__(self, width: int, height: int, background: Color | None = None) -> None:
        fill = (background or TRANSPARENT).rgba
        self._image = Image.new("RGBA", (max(1, int(width)), max(1, int(height))), fill)
        self._draw = ImageDraw.Draw(self._image, "RGBA")
        self._transform = self._IDENTITY
        self._stack: list[tuple[float, ...]] = []
        self.operations: list[tuple[str, dict[str, Any]]] = []

    # -- transform -----------------------------------------------------
    def save(self) -> None:
        self._stack.append(self._transform)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() without a matching save()")
        self._transform = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        a, b, c, d, e, f = self._transform
        self._transform = (a, b, c, d, e + a * dx + c * dy, f + b * dx + d * dy)

    def rotate(self, degrees: float) -> None:
        a, b, c, d, e, f = self._transform
        cos_t = math.cos(math.radians(degrees))
        sin_t = math.sin(math.radians(degrees))
        self._transform = (
            cos_t * a + sin_t * c,
            cos_t * b + sin_t * d,
            -sin_t * a + cos_t * c,
            -sin_t * b + cos_t * d,
            e,
            f,
        )

    def scale(self, sx: float, sy: float) -> None:
        a, b, c, d, e, f = self._transform
        self._transform = (a * sx, b * sx, c * sy, d * sy, e, f)

    def map(self, x: float, y: float) -> Point:
        """Map a point from the current coordinate system to image pixels."""
        a, b, c, d, e, f = self._transform
        return (a * x + c * y + e, b * x + d * y + f)

    def _map_all(self, points: Iterable[Point]) -> list[Point]:
        return [self.map(x, y) for x, y in points]

    def _pen_width(self, width: float) -> int:
        a, b, c, d, _, _ = self._transform
        factor = math.sqrt(abs(a * d - b * c))
        return max(1, round(width * factor))

    def _fill_polygon(self, points: Sequence[Point], fill: Color | None,
                      outline: Color | None = None, width: float = 1) -> None:
        if fill is not None and len(points) >= 3:
            self._draw.polygon(points, fill=fill.rgba)
        if outline is not None and len(points) >= 2:
            self._draw.line(list(points) + [points[0]], fill=outline.rgba,
                            width=self._pen_width(width), joint="curve")

    # -- primitives ----------------------------------------------------
    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: Color = BLACK, width: float = 1) -> None:
        self.operations.append(("line", {"from": (x1, y1), "to": (x2, y2), "color": color}))
        self._draw.line([self.map(x1, y1), self.map(x2, y2)], fill=color.rgba,
                        width=self._pen_width(width))

    def draw_ellipse(self, rect: Rect, fill: Color | None = None,
                     outline: Color | None = None, width: float = 1) -> None:
        self.operations.append(("ellipse", {"rect": rect, "fill": fill, "outline": outline}))
        points = self._map_all(_arc_points(rect, 0.0, 360.0)[:-1])
        self._fill_polygon(points, fill, outline, width)

    def draw_arc(self, rect: Rect, start: float, span: float,
                 color: Color = BLACK, width: float = 1) -> None:
        self.operations.append(("arc", {"rect": rect, "start": start, "span": span,
                                        "color": color}))
        points = self._map_all(_arc_points(rect, start, span))
        self._draw.line(points, fill=color.rgba, width=self._pen_width(width), joint="curve")

    def draw_pie(self, rect: Rect, start: float, span: float, fill: Color = BLACK) -> None:
        self.operations.append(("pie", {"rect": rect, "start": start, "span": span,
                                        "fill": fill}))
        points = self._map_all([rect.center(), *_arc_points(rect, start, span)])
        self._fill_polygon(points, fill)

    def draw_chord(self, rect: Rect, start: float, span: float, fill: Color = BLACK) -> None:
        self.operations.append(("chord", {"rect": rect, "start": start, "span": span,
                                          "fill": fill}))
        points = self._map_all(_arc_points(rect, start, span))
        self._fill_polygon(points, fill)

    def draw_polygon(self, points: Sequence[Point], fill: Color | None = None,
                     outline: Color | None = None) -> None:
        self.operations.append(("polygon", {"points": list(points), "fill": fill,
                                            "outline": outline}))
        self._fill_polygon(self._map_all(points), fill, outline)

    def draw_text(self, rect: Rect, text: str, color: Color = BLACK, size: float = 12) -> None:
        """Draw text centred in the rectangle, with a font of roughly `size` pixels."""
        self.operations.append(("text", {"rect": rect, "text": text, "color": color}))
        if not text:
            return
        font = _font(self._pen_width(size))
        cx, cy = self.map(*rect.center())
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=font)
        origin = (cx - (right - left) / 2.0 - left, cy - (bottom - top) / 2.0 - top)
        self._draw.text(origin, text, fill=color.rgba, font=font)

    def image(self) -> Image.Image:
        return self._image