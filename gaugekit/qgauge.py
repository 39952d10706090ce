"""A round gauge with a circular value bar, an LCD readout and a threshold alarm."""

from __future__ import annotations

from enum import IntEnum

from PIL import Image

from .painting import BLACK, GRAY, RED, WHITE, Color, Painter, Rect, Signal

_DISABLED_LCD = Color(200, 200, 200)
_ALARM_LCD = Color(200, 0, 0)


class ErrorCode(IntEnum):
    MAX_VALUE_ERROR = 1
    MIN_VALUE_ERROR = 2
    THRESHOLD_ERROR = 3
    TARGET_ERROR = 4
    PRECISION_ERROR = 5
    COLOR_ERROR = 6
    UNITS_EMPTY = 7
    OUT_OF_RANGE = 8


def digits(value: int) -> int:
    """Number of characters needed to show an integer; a minus sign counts as one."""
    value = int(value)
    if value == 0:
        return 1
    return len(str(abs(value))) + (1 if value < 0 else 0)


def _mix(c0: Color, c1: Color, fraction: float = 0.5) -> Color:
    return Color(*(round(a + (b - a) * fraction) for a, b in zip(c0.rgba, c1.rgba)))


def _style(color: Color) -> str:
    return f"background-color: transparent; color: rgb({color.r},{color.g},{color.b});"


class Gauge:
    """A dial over a value range, drawn in a 100x100 window centred on the widget.

    Problems are reported through ``error_signal`` (an ErrorCode) and crossings
    of the threshold through ``threshold_alarm`` (True above, False below).
    """

    def __init__(self) -> None:
        self.error_signal = Signal()
        self.threshold_alarm = Signal()
        self._enabled = True
        self._lcd_color = BLACK
        self._lcd_digits = 5
        self._lcd_value = 0.0
        self._value = 0.0
        self._min_value = 0.0
        self._max_value = 100.0
        self._threshold = 0.0
        self.precision = 0
        self._steps = 20
        self.bar_size = 5
        self.start_angle = 225
        self.end_angle = -45
        self._foreground = Color(0, 166, 8)
        self._background = BLACK
        self._lcd_color = self._foreground
        self.threshold_enabled = False
        self.numeric_indicator_enabled = True
        self._autodigits = True
        self.set_min_value(0)
        self.set_max_value(100)
        self.set_digit_count(5)
        self.set_value(0)
        self.label = "Speed"
        self.units = "Km/h"
        self.set_threshold(80)
        self.circular_bar_enabled = True
        self.cover_glass_enabled = True

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
    def steps(self) -> int:
        return self._steps

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def foreground(self) -> Color:
        return self._foreground

    @foreground.setter
    def foreground(self, color: Color) -> None:
        self._foreground = color
        self._lcd_color = self._foreground

    @property
    def background(self) -> Color:
        return self._background

    @background.setter
    def background(self, color: Color) -> None:
        self._background = color
        self._lcd_color = self._foreground

    # -- value and range -----------------------------------------------
    def set_value(self, value: float) -> None:
        """Set the value, clamped to the range; ignored while the gauge is disabled."""
        if not self._enabled:
            return
        value = float(value)
        if value > self._max_value:
            self._value = self._max_value
            self.error_signal.emit(ErrorCode.OUT_OF_RANGE)
        elif value < self._min_value:
            self._value = self._min_value
            self.error_signal.emit(ErrorCode.OUT_OF_RANGE)
        else:
            self._value = value
            if self._autodigits:
                self._lcd_digits = digits(int(value))
            self._lcd_value = self._value

        if self.threshold_enabled:
            self._threshold_manager()
            self._lcd_color = _ALARM_LCD if value >= self._threshold else self._foreground
        else:
            self._lcd_color = self._foreground

    def set_min_value(self, value: float) -> None:
        self._min_value = float(value)

    def set_max_value(self, value: float) -> None:
        """Set the maximum; a value not above the minimum is reported and ignored."""
        if value > self._min_value:
            self._max_value = float(value)
        else:
            self.error_signal.emit(ErrorCode.MAX_VALUE_ERROR)

    def set_threshold(self, value: float) -> None:
        """Set and enable the threshold; it must lie strictly inside the range."""
        if self._min_value < value < self._max_value:
            self._threshold = float(value)
            self.threshold_enabled = True
        else:
            self.error_signal.emit(ErrorCode.THRESHOLD_ERROR)

    def set_steps(self, steps: int) -> None:
        """Set the number of tick intervals; counts below 2 are ignored."""
        if steps > 1:
            self._steps = int(steps)

    def _threshold_manager(self) -> None:
        if self._value > self._threshold:
            self.threshold_alarm.emit(True)
        elif self._value < self._threshold:
            self.threshold_alarm.emit(False)

    # -- readout -------------------------------------------------------
    def set_digit_count(self, n_digits: int) -> None:
        """Set the readout width; a non-positive count selects automatic sizing."""
        if n_digits > 0:
            self._lcd_digits = int(n_digits)
        else:
            self._autodigits = True

    def digit_count(self) -> int:
        """Readout width, or -1 while it is sized automatically."""
        if self._autodigits:
            return -1
        return self._lcd_digits

    def set_enabled(self, enabled: bool) -> None:
        """Enable or grey out the gauge; re-enabling re-applies the current value."""
        self._enabled = bool(enabled)
        if not self._enabled:
            self._lcd_color = _DISABLED_LCD
        else:
            self.set_value(self._value)

    def lcd_style(self) -> str:
        return _style(self._lcd_color)

    def lcd_text(self) -> str:
        """The number currently shown by the readout."""
        return f"{self._lcd_value:.{max(1, self._lcd_digits)}g}"

    # -- drawing -------------------------------------------------------
    def _value_angle(self, value: float) -> float:
        span = self._max_value - self._min_value
        return self.start_angle + (self.end_angle - self.start_angle) / span * (
            value - self._min_value
        )

    def render(self, width: int, height: int) -> Image.Image:
        painter = Painter(width, height)
        side = min(width, height)
        painter.translate((width - side) / 2.0, (height - side) / 2.0)
        painter.scale(side / 100.0, side / 100.0)
        painter.translate(50.0, 50.0)

        painter.draw_ellipse(Rect(-45, -45, 90, 90), fill=self._background)
        if self.circular_bar_enabled:
            self._draw_circular_bar(painter)
        self._draw_ticks(painter)
        if self.cover_glass_enabled:
            glass = _mix(Color(255, 255, 255, 30), Color(120, 120, 120, 20))
            painter.draw_ellipse(Rect(-45, -45, 90, 90), fill=glass)
        text_color = self._foreground if self._enabled else GRAY
        painter.draw_text(Rect(-15, 20, 30, 20), self.label, text_color, 8)
        painter.draw_text(Rect(-20, -30, 40, 20), self.units, text_color, 8)
        painter.draw_arc(Rect(-47, -47, 94, 94), 30, 390,
                         _mix(WHITE, Color(60, 60, 60, 250), 0.7), 3)
        if self.threshold_enabled:
            self._draw_threshold_line(painter)
        if self.numeric_indicator_enabled:
            painter.draw_text(Rect(-25, -50 / 3, 50, 100 / 3), self.lcd_text(),
                              self._lcd_color, 20)
        return painter.image()

    def _draw_circular_bar(self, painter: Painter) -> None:
        angle = self._value_angle(self._value)
        color = self._foreground if self._enabled else GRAY
        start = int(self.start_angle * 16) / 16.0
        span = int((angle - self.start_angle) * 16) / 16.0
        painter.draw_arc(Rect(-35, -35, 70, 70), start, span, color, self.bar_size)

    def _draw_ticks(self, painter: Painter) -> None:
        painter.save()
        painter.rotate(-self.start_angle)
        angle_step = int((self.start_angle - self.end_angle) / self._steps)
        for _ in range(self._steps + 1):
            painter.draw_line(30, 0, 40, 0, self._background, 1)
            painter.rotate(angle_step)
        painter.restore()
        painter.draw_arc(Rect(-28, -28, 56, 56), self.start_angle,
                         float(self.end_angle - self.start_angle), self._background, 1)

    def _draw_threshold_line(self, painter: Painter) -> None:
        angle = self._value_angle(self._threshold)
        color = RED if self._enabled else GRAY
        painter.draw_arc(Rect(-40, -40, 80, 80), int(angle), int(self.end_angle - angle),
                         color, 2)