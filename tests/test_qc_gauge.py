import pytest

from gaugekit.painting import RED, Painter
from gaugekit.qc_gauge import (
    AttitudeMeterItem,
    GaugeWidget,
    NeedleItem,
    NeedleType,
    ValuesItem,
)
from gaugekit.qc_items import (
    ArcItem,
    BackgroundItem,
    ColorBand,
    DegreesItem,
    GaugeErrorKind,
    GaugeRangeError,
    GlassItem,
    LabelItem,
)


@pytest.fixture
def widget():
    return GaugeWidget()


def test_needle_value_is_clamped_and_shown_in_label(widget):
    needle = widget.add_needle(60)
    label = widget.add_label(40)
    needle.label = label
    needle.set_value_range(0, 80)
    needle.set_current_value(120)
    assert needle.current_value == 80
    assert label.text == "80"
    needle.set_current_value(-5)
    assert needle.current_value == 0
    assert label.text == "0"
    needle.set_current_value(42.5)
    assert label.text == "42.5"


@pytest.mark.parametrize(
    "kind, count",
    [
        (NeedleType.DIAMOND, 4),
        (NeedleType.TRIANGLE, 3),
        (NeedleType.FEATHER, 5),
        (NeedleType.ATTITUDE_METER, 3),
        (NeedleType.COMPASS, 4),
    ],
)
def test_needle_polygon_tip_reaches_radius(kind, count):
    needle = NeedleItem()
    needle.needle_type = kind
    polygon = needle.needle_polygon(40)
    assert len(polygon) == count
    assert max(y for _, y in polygon) == 40
    assert (0.0, 40.0) in polygon


def test_compass_needle_is_symmetric():
    needle = NeedleItem()
    needle.needle_type = NeedleType.COMPASS
    polygon = needle.needle_polygon(30)
    assert min(y for _, y in polygon) == -30
    assert sum(x for x, _ in polygon) == 0


def test_needle_draw_uses_polygon_and_color(widget):
    needle = widget.add_needle(60)
    painter = Painter(widget.width, widget.height)
    needle.draw(painter)
    kind, data = painter.operations[-1]
    radius = needle.get_radius(needle.adjust_rect(needle.position))
    assert kind == "polygon"
    assert data["points"] == needle.needle_polygon(radius)
    assert data["fill"] == needle.color


def test_compass_needle_draws_red(widget):
    needle = widget.add_needle(60)
    needle.needle_type = NeedleType.COMPASS
    painter = Painter(widget.width, widget.height)
    needle.draw(painter)
    assert painter.operations[-1][1]["fill"] == RED


def test_values_labels_default_range():
    values = ValuesItem()
    assert values.labels() == [str(v) for v in range(0, 101, 10)]


def test_values_labels_fractional_step():
    values = ValuesItem()
    values.set_value_range(0, 2)
    values.step = 0.5
    assert values.labels() == ["0", "0.5", "1", "1.5", "2"]


def test_values_rejects_non_positive_step():
    values = ValuesItem()
    with pytest.raises(GaugeRangeError) as info:
        values.step = 0
    assert info.value.kind is GaugeErrorKind.INVALID_STEP
    assert values.labels() == [str(v) for v in range(0, 101, 10)]


def test_values_draw_writes_every_label(widget):
    values = widget.add_values(80)
    values.set_value_range(0, 80)
    painter = Painter(widget.width, widget.height)
    values.draw(painter)
    texts = [data["text"] for kind, data in painter.operations if kind == "text"]
    assert texts == values.labels()


def test_attitude_pitch_is_negated_and_roll_kept():
    meter = AttitudeMeterItem()
    meter.set_current_pitch(10)
    meter.set_current_roll(25)
    assert meter.pitch == -10
    assert meter.roll == 25


def test_attitude_level_horizon_splits_dial_in_half(widget):
    meter = widget.add_attitude_meter(88)
    painter = Painter(widget.width, widget.height)
    meter.draw(painter)
    chords = [data for kind, data in painter.operations if kind == "chord"]
    upper, lower = chords[0], chords[1]
    assert upper["start"] == pytest.approx(180)
    assert upper["span"] == pytest.approx(-180)
    assert lower["start"] == pytest.approx(-180)
    assert lower["span"] == pytest.approx(180)


def test_attitude_nose_up_enlarges_sky(widget):
    meter = widget.add_attitude_meter(88)
    meter.set_current_pitch(10)
    painter = Painter(widget.width, widget.height)
    meter.draw(painter)
    upper = next(data for kind, data in painter.operations if kind == "chord")
    assert abs(upper["span"]) > 180


def test_add_methods_return_typed_items_in_order(widget):
    created = [
        widget.add_background(99),
        widget.add_degrees(65),
        widget.add_values(80),
        widget.add_arc(55),
        widget.add_color_band(50),
        widget.add_needle(60),
        widget.add_label(70),
        widget.add_glass(88),
        widget.add_attitude_meter(88),
    ]
    types = [BackgroundItem, DegreesItem, ValuesItem, ArcItem, ColorBand,
             NeedleItem, LabelItem, GlassItem, AttitudeMeterItem]
    assert [type(item) for item in created] == types
    assert widget.items == created
    assert [item.position for item in created] == [99, 65, 80, 55, 50, 60, 70, 88, 88]
    assert all(item.parent is widget for item in created)


def test_position_is_clamped(widget):
    assert widget.add_label(150).position == 100
    assert widget.add_label(-3).position == 0


def test_add_item_reparents_and_remove_counts(widget):
    label = LabelItem()
    widget.add_item(label, 30)
    widget.add_item(label, 30)
    assert label.parent is widget
    assert label.position == 30
    assert widget.remove_item(label) == 2
    assert widget.items == []
    assert widget.remove_item(label) == 0


def test_widget_enforces_minimum_size():
    small = GaugeWidget(100, 40)
    assert (small.width, small.height) == (250, 250)
    assert GaugeWidget(300, 400).rect().height == 400


def test_render_paints_centre_and_clears_dirty(widget):
    widget.add_background(99)
    assert widget.dirty
    image = widget.render()
    assert image.size == (widget.width, widget.height)
    assert image.getpixel((widget.width // 2, widget.height // 2))[3] == 255
    assert image.getpixel((0, 0))[3] == 0
    assert widget.dirty is False
    widget.items[0].add_color(0.5, RED)
    assert widget.dirty is True


def test_needle_degree_range_errors():
    needle = NeedleItem()
    with pytest.raises(GaugeRangeError) as info:
        needle.set_max_degree(-90)
    assert info.value.kind is GaugeErrorKind.INVALID_DEGREE_RANGE