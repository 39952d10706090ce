"""Ready-made dial instruments assembled from gauge items."""

from __future__ import annotations

from PIL import Image

from .painting import BLACK, BLUE, DARK_GRAY, GRAY, WHITE
from .qc_gauge import (
    MINIMUM_SIZE,
    AttitudeMeterItem,
    GaugeWidget,
    NeedleItem,
    NeedleType,
)
from .qc_items import BackgroundItem, LabelItem


def _two_tone_background(gauge: GaugeWidget, position: float, first, second) -> BackgroundItem:
    background = gauge.add_background(position)
    background.clear_colors()
    background.add_color(0.1, first)
    background.add_color(1.0, second)
    return background


class _Instrument:
    """Holds a gauge widget and renders it."""

    def __init__(self, size: int = MINIMUM_SIZE) -> None:
        self.gauge = GaugeWidget(size, size)

    def render(self) -> Image.Image:
        """Draw the instrument and return the image."""
        return self.gauge.render()


class AirSpeedGauge(_Instrument):
    """An air-speed dial reading 0 to 100 km/h with a numeric readout."""

    def __init__(self, size: int = MINIMUM_SIZE) -> None:
        super().__init__(size)
        gauge = self.gauge
        gauge.add_arc(55)
        gauge.add_degrees(65).set_value_range(0, 100)
        gauge.add_color_band(50).set_value_range(0, 100)
        gauge.add_values(80).set_value_range(0, 100)
        gauge.add_label(70).set_text("Km/h")
        self.value_label: LabelItem = gauge.add_label(40)
        self.value_label.set_text("0")
        self.needle: NeedleItem = gauge.add_needle(60)
        self.needle.label = self.value_label
        self.needle.color = BLUE
        self.needle.set_value_range(0, 100)
        gauge.add_background(7)

    def set_current_value(self, value: float) -> None:
        self.needle.set_current_value(value)

    def render(self) -> Image.Image:
        return super().render()


class AttitudeMeter(_Instrument):
    """An artificial horizon with a roll pointer."""

    def __init__(self, size: int = MINIMUM_SIZE) -> None:
        super().__init__(size)
        gauge = self.gauge
        gauge.add_background(99)
        _two_tone_background(gauge, 92, BLACK, WHITE)
        self.meter: AttitudeMeterItem = gauge.add_attitude_meter(88)
        self.needle: NeedleItem = gauge.add_needle(70)
        self.needle.set_min_degree(0)
        self.needle.set_max_degree(180)
        self.needle.set_value_range(0, 180)
        self.needle.set_current_value(90)
        self.needle.color = WHITE
        self.needle.needle_type = NeedleType.ATTITUDE_METER
        gauge.add_glass(80)

    def set_current_value(self, value: float) -> None:
        """Set the roll angle; the pointer moves opposite to it."""
        self.needle.set_current_value(90 - value)
        self.meter.set_current_roll(value)

    def set_current_pitch(self, value: float) -> None:
        self.meter.set_current_pitch(value)

    def render(self) -> Image.Image:
        return super().render()


class CompassGauge(_Instrument):
    """A compass rose with a two-ended needle over 0 to 360 degrees."""

    def __init__(self, size: int = MINIMUM_SIZE) -> None:
        super().__init__(size)
        gauge = self.gauge
        gauge.add_background(99)
        _two_tone_background(gauge, 92, BLACK, WHITE)
        _two_tone_background(gauge, 88, WHITE, BLACK)

        self.cardinal_labels: list[LabelItem] = []
        for text, angle in (("W", 0), ("N", 90), ("E", 180), ("S", 270)):
            label = gauge.add_label(80)
            label.set_text(text)
            label.angle = angle
            label.color = WHITE
            self.cardinal_labels.append(label)

        degrees = gauge.add_degrees(70)
        degrees.step = 5
        degrees.set_max_degree(270)
        degrees.set_min_degree(-75)
        degrees.color = WHITE

        self.needle: NeedleItem = gauge.add_needle(60)
        self.needle.needle_type = NeedleType.COMPASS
        self.needle.set_value_range(0, 360)
        self.needle.set_max_degree(360)
        self.needle.set_min_degree(0)
        gauge.add_background(7)
        gauge.add_glass(88)

    def set_current_value(self, value: float) -> None:
        self.needle.set_current_value(value)

    def render(self) -> Image.Image:
        return super().render()


class SpeedGauge(_Instrument):
    """A speedometer reading 0 to 80 km/h with a numeric readout."""

    def __init__(self, size: int = MINIMUM_SIZE) -> None:
        super().__init__(size)
        gauge = self.gauge
        gauge.add_background(99)
        _two_tone_background(gauge, 92, BLACK, WHITE)
        _two_tone_background(gauge, 88, GRAY, DARK_GRAY)
        gauge.add_arc(55)
        gauge.add_degrees(65).set_value_range(0, 80)
        gauge.add_color_band(50)
        gauge.add_values(80).set_value_range(0, 80)
        gauge.add_label(70).set_text("Km/h")
        self.value_label: LabelItem = gauge.add_label(40)
        self.value_label.set_text("0")
        self.needle: NeedleItem = gauge.add_needle(60)
        self.needle.label = self.value_label
        self.needle.color = WHITE
        self.needle.set_value_range(0, 80)
        gauge.add_background(7)
        gauge.add_glass(88)

    def set_current_value(self, value: float) -> None:
        self.needle.set_current_value(value)

    def render(self) -> Image.Image:
        return super().render()