# gaugekit

Dashboard instruments drawn to Pillow images: dial gauges, a needle
meter, a speed watch, a round progress bar, a coloured progress bar,
and a composable gauge built by stacking items such as backgrounds,
scales, colour bands, needles, labels and a glass cover.

## Installation

```
pip install .
```

Add the `test` extra to run the test suite with pytest:

```
pip install .[test]
pytest
```

## What it does not do

Everything here draws into an image in memory and hands back a Pillow
`Image`. There is no window, no event loop and no mouse or keyboard
handling, and there is no command-line program. To show an instrument,
save or display the image yourself and render again after changing a
value.

## Composable gauges

`GaugeWidget` (in `gaugekit.qc_gauge`) holds a list of items. Each item
is placed at a position given as a percentage of the gauge radius
(clamped to 0..100), and items are drawn in the order they were added.
The widget is at least 250 pixels on each side.

```python
from gaugekit.qc_gauge import GaugeWidget

gauge = GaugeWidget()
gauge.add_background(99)
gauge.add_arc(55)
gauge.add_degrees(65).set_value_range(0, 100)
gauge.add_color_band(50)
gauge.add_values(80).set_value_range(0, 100)
label = gauge.add_label(40)
needle = gauge.add_needle(60)
needle.label = label
needle.set_value_range(0, 100)
needle.set_current_value(42)      # clamped to the needle's range; the label shows "42"
gauge.add_glass(88)

gauge.render().save("gauge.png")
```

The items live in `gaugekit.qc_items` (`BackgroundItem`, `GlassItem`,
`LabelItem`, `ArcItem`, `ColorBand`, `DegreesItem`) and
`gaugekit.qc_gauge` (`NeedleItem`, `ValuesItem`, `AttitudeMeterItem`).
A `NeedleItem` can be drawn as any `NeedleType`: `DIAMOND`, `TRIANGLE`,
`FEATHER` (the default), `ATTITUDE_METER` or `COMPASS`.
`ValuesItem.labels()` returns the numbers written on its scale.

Scale items raise `GaugeRangeError` (a `ValueError` carrying a
`GaugeErrorKind`) when a value or degree range is given the wrong way
round, and `DegreesItem` and `ValuesItem` raise it for a step that is
not positive. `GaugeWidget.add_item` adopts an item you built yourself;
`remove_item` removes every occurrence and returns how many there were.

## Ready-made instruments

`gaugekit.instruments` has four assembled gauges, each rendered with
`render()`:

- `AirSpeedGauge`: 0 to 100 km/h with a numeric readout.
- `SpeedGauge`: 0 to 80 km/h with a numeric readout.
- `CompassGauge`: a compass rose over 0 to 360 degrees.
- `AttitudeMeter`: an artificial horizon; `set_current_value` sets the
  roll and `set_current_pitch` the pitch.

```python
from gaugekit.instruments import AttitudeMeter, CompassGauge

compass = CompassGauge()
compass.set_current_value(135)
compass.render().save("compass.png")

attitude = AttitudeMeter()
attitude.set_current_value(100)
attitude.set_current_pitch(10)
attitude.render().save("attitude.png")
```

## Stand-alone widgets

Each of these is drawn with `render(width, height)`, which returns a
Pillow image.

### `gaugekit.qgauge.Gauge`

A circular bar gauge with an LCD-style readout and a threshold.
`set_value` clamps to the range and emits `ErrorCode.OUT_OF_RANGE` on
`error_signal` when it has to; `set_max_value` and `set_threshold`
emit `MAX_VALUE_ERROR` and `THRESHOLD_ERROR` for values they refuse.
While the threshold is enabled, every `set_value` emits on
`threshold_alarm`: `True` above the threshold, `False` below it.
`set_enabled(False)` greys the gauge out and makes `set_value` do
nothing until it is enabled again. `lcd_text()` and `lcd_style()`
describe the readout; `digit_count()` is `-1` while its width is chosen
automatically. `digits(value)` counts the characters an integer needs.

```python
from gaugekit.qgauge import ErrorCode, Gauge

errors = []
gauge = Gauge()
gauge.error_signal.connect(errors.append)
gauge.set_value(150)
assert gauge.value == 100.0 and errors == [ErrorCode.OUT_OF_RANGE]
```

### `gaugekit.qmeter.Meter`

A needle meter with a threshold, optional valid and warning windows
(`valid_window_enabled`, `warning_window_enabled`) and the same error
codes as `Gauge`. Its `threshold_alarm` fires only when the value
crosses the threshold. `value_angle`, `scale_labels` and `numeric_text`
expose what is drawn. `set_value_with_spring_effect(value, frames)`
returns an iterator; each step applies the next frame of an
overshooting ease (`out_back`) and yields the new value, ending on the
target.

```python
from gaugekit.qmeter import Meter

meter = Meter()
for value in meter.set_value_with_spring_effect(70, frames=30):
    image = meter.render(200, 200)
```

### `gaugekit.speed_watch.SpeedWatch`

A speedometer dial with major and minor ticks. `set_value` clamps to
the range, `set_min_value` / `set_max_value` ignore values that would
cross the other bound, and `set_precision` ignores counts above 3.
`numeric_text()`, `scale_labels()` and `indicator_angle()` expose what
is drawn.

### `gaugekit.round_progress.RoundProgressBar`

A donut, pie or line (`BarStyle`) circular progress bar. The text
format understands `%v` (value), `%p` (percentage) and `%m`; the number
of decimals is set with `set_decimals`. `set_range` swaps reversed
bounds and clamps the value; `set_data_colors` fills the bar with a
gradient.

```python
from gaugekit.round_progress import RoundProgressBar

bar = RoundProgressBar()
bar.set_value(60)
print(bar.value_to_text(60))   # "60.0%"
bar.render(200, 200).save("round.png")
```

### `gaugekit.color_progress.ColorProgressBar`

A horizontal bar with a percentage readout beside it
(`percent_text()`, e.g. `"25%"`), optional split lines and a
configurable number of decimals.

## Drawing helpers

`gaugekit.painting` provides `Color`, `Rect`, `Signal` (connect any
callable; `emit` calls them in order) and `Painter`, the small Pillow
painter with a save/restore-able transform that all widgets draw with.