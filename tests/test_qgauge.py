import pytest

from gaugekit.painting import Color
from gaugekit.qgauge import ErrorCode, Gauge, digits


def _record(signal):
    received = []
    signal.connect(received.append)
    return received


def test_digits_zero_is_one():
    assert digits(0) == 1


@pytest.mark.parametrize("power", [0, 1, 2, 5])
def test_digits_of_powers_of_ten(power):
    assert digits(10 ** power) == power + 1


@pytest.mark.parametrize("value", [7, 42, 999, 12345])
def test_digits_negative_counts_sign(value):
    assert digits(-value) == digits(value) + 1


def test_defaults():
    gauge = Gauge()
    assert gauge.value == 0
    assert gauge.min_value == 0
    assert gauge.max_value == 100
    assert gauge.threshold == 80
    assert gauge.threshold_enabled is True
    assert gauge.steps == 20
    assert gauge.label == "Speed"
    assert gauge.units == "Km/h"
    assert gauge.start_angle == 225
    assert gauge.end_angle == -45


def test_default_lcd_style_uses_foreground():
    gauge = Gauge()
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(0,166,8);"


def test_digit_count_is_automatic():
    gauge = Gauge()
    gauge.set_digit_count(7)
    assert gauge.digit_count() == -1


@pytest.mark.parametrize("value, expected", [(500, 100.0), (-3, 0.0)])
def test_set_value_clamps_and_reports(value, expected):
    gauge = Gauge()
    errors = _record(gauge.error_signal)
    gauge.set_value(value)
    assert gauge.value == expected
    assert errors == [ErrorCode.OUT_OF_RANGE]


def test_out_of_range_keeps_previous_readout():
    gauge = Gauge()
    gauge.set_value(42)
    assert gauge.lcd_text() == "42"
    gauge.set_value(500)
    assert gauge.lcd_text() == "42"
    assert gauge.value == 100


def test_max_value_not_above_min_is_rejected():
    gauge = Gauge()
    errors = _record(gauge.error_signal)
    gauge.set_max_value(0)
    assert gauge.max_value == 100
    assert errors == [ErrorCode.MAX_VALUE_ERROR]


def test_threshold_outside_range_is_rejected():
    gauge = Gauge()
    errors = _record(gauge.error_signal)
    gauge.set_threshold(100)
    assert gauge.threshold == 80
    assert errors == [ErrorCode.THRESHOLD_ERROR]


def test_threshold_alarm_on_crossings():
    gauge = Gauge()
    alarms = _record(gauge.threshold_alarm)
    gauge.set_value(90)
    gauge.set_value(50)
    gauge.set_value(80)
    assert alarms == [True, False]


def test_lcd_turns_red_at_threshold():
    gauge = Gauge()
    gauge.set_value(80)
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(200,0,0);"
    gauge.set_value(10)
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(0,166,8);"


def test_disabled_gauge_ignores_values():
    gauge = Gauge()
    gauge.set_value(30)
    gauge.set_enabled(False)
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(200,200,200);"
    gauge.set_value(60)
    assert gauge.value == 30
    gauge.set_enabled(True)
    assert gauge.enabled is True
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(0,166,8);"


def test_steps_below_two_are_ignored():
    gauge = Gauge()
    gauge.set_steps(1)
    assert gauge.steps == 20
    gauge.set_steps(8)
    assert gauge.steps == 8


def test_foreground_change_updates_lcd_style():
    gauge = Gauge()
    gauge.foreground = Color(1, 2, 3)
    assert gauge.lcd_style() == "background-color: transparent; color: rgb(1,2,3);"


def test_render_size_and_value_changes_image():
    gauge = Gauge()
    low = gauge.render(160, 120)
    assert low.size == (160, 120)
    gauge.set_value(100)
    high = gauge.render(160, 120)
    assert list(low.getdata()) != list(high.getdata())


def test_render_draws_into_square_viewport():
    gauge = Gauge()
    image = gauge.render(200, 100)
    assert image.getpixel((0, 50))[3] == 0
    assert image.getpixel((100, 50))[3] > 0