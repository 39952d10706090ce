import pytest

from gaugekit.painting import BLUE, RED, Painter, Rect
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


class FakeParent:
    def __init__(self, width=200, height=200):
        self._rect = Rect(0, 0, width, height)
        self.updates = 0

    def rect(self):
        return self._rect

    def update(self):
        self.updates += 1


def test_reset_rect_is_centred_square():
    parent = FakeParent(200, 100)
    item = LabelItem(parent)
    r = item.reset_rect()
    assert r.width == r.height == min(200, 100)
    assert r.center() == pytest.approx(parent.rect().center())
    assert item.rect() == r


def test_adjust_rect_full_and_half():
    item = LabelItem(FakeParent())
    full = item.reset_rect()
    assert item.adjust_rect(100) == full
    half = item.adjust_rect(50)
    assert half.width == pytest.approx(full.width / 2)
    assert half.center() == pytest.approx(full.center())


def test_get_point_zero_is_left_and_ninety_is_top():
    item = LabelItem(FakeParent())
    r = item.reset_rect()
    cx, cy = r.center()
    assert item.get_point(0, r) == pytest.approx((r.left, cy))
    assert item.get_point(90, r) == pytest.approx((cx, r.top))


@pytest.mark.parametrize("deg", [-170, -45, 0, 30, 90, 135, 180])
def test_get_angle_inverts_get_point(deg):
    item = LabelItem(FakeParent())
    r = item.reset_rect()
    assert item.get_angle(item.get_point(deg, r), r) == pytest.approx(deg)


def test_position_is_clamped_and_updates_parent():
    parent = FakeParent()
    item = LabelItem(parent)
    before = parent.updates
    item.position = 150
    assert item.position == 100
    item.position = -5
    assert item.position == 0
    assert parent.updates == before + 2


def test_scale_defaults_map_limits():
    arc = ArcItem()
    assert arc.deg_from_value(arc.min_value) == pytest.approx(arc.min_degree)
    assert arc.deg_from_value(arc.max_value) == pytest.approx(arc.max_degree)
    assert (arc.min_degree, arc.max_degree) == (-45, 225)


def test_scale_value_range_errors():
    arc = ArcItem()
    with pytest.raises(GaugeRangeError) as err:
        arc.set_value_range(5, 5)
    assert err.value.kind is GaugeErrorKind.INVALID_VALUE_RANGE
    with pytest.raises(GaugeRangeError) as err:
        arc.set_degree_range(10, 0)
    assert err.value.kind is GaugeErrorKind.INVALID_VALUE_RANGE
    with pytest.raises(GaugeRangeError) as err:
        arc.set_min_value(arc.max_value + 1)
    assert err.value.kind is GaugeErrorKind.INVALID_VALUE_RANGE


def test_scale_degree_errors():
    arc = ArcItem()
    with pytest.raises(GaugeRangeError) as err:
        arc.set_min_degree(300)
    assert err.value.kind is GaugeErrorKind.INVALID_DEGREE_RANGE
    with pytest.raises(GaugeRangeError) as err:
        arc.set_max_degree(-90)
    assert err.value.kind is GaugeErrorKind.INVALID_DEGREE_RANGE


def test_set_value_range_changes_mapping():
    arc = ArcItem()
    arc.set_value_range(0, 80)
    assert arc.deg_from_value(80) == pytest.approx(arc.max_degree)


def test_background_colors():
    bg = BackgroundItem()
    assert len(bg.colors) == 2
    bg.add_color(1.5, RED)
    assert len(bg.colors) == 2
    bg.clear_colors()
    bg.add_color(1.0, BLUE)
    assert bg.colors == [(1.0, BLUE)]
    assert bg.position == 88


def test_background_draw_fills_center():
    parent = FakeParent()
    bg = BackgroundItem(parent)
    bg.clear_colors()
    bg.add_color(0.0, RED)
    painter = Painter(200, 200)
    bg.draw(painter)
    assert painter.image().getpixel((100, 100)) == RED.rgba


def test_label_defaults_and_set_text():
    parent = FakeParent()
    label = LabelItem(parent)
    assert (label.text, label.angle) == ("%", 270)
    before = parent.updates
    label.set_text("0", False)
    assert label.text == "0"
    assert parent.updates == before
    label.set_text("Km/h")
    assert parent.updates == before + 1


def test_label_draw_records_text():
    label = LabelItem(FakeParent())
    label.set_text("N")
    painter = Painter(200, 200)
    label.draw(painter)
    kind, details = painter.operations[-1]
    assert (kind, details["text"]) == ("text", "N")


def test_arc_draw_uses_degree_range():
    arc = ArcItem(FakeParent())
    painter = Painter(200, 200)
    arc.draw(painter)
    kind, details = painter.operations[0]
    assert kind == "arc"
    assert details["start"] == pytest.approx(-135)
    assert details["span"] == pytest.approx(-270)


def test_color_band_segments_are_contiguous():
    band = ColorBand(FakeParent())
    painter = Painter(200, 200)
    band.draw(painter)
    arcs = [d for k, d in painter.operations if k == "arc"]
    assert [d["color"] for d in arcs] == [c for c, _ in band.band_colors]
    for first, second in zip(arcs, arcs[1:]):
        assert second["start"] == pytest.approx(first["start"] + first["span"])
    total = sum(-d["span"] for d in arcs)
    assert total == pytest.approx(band.deg_from_value(100) - band.deg_from_value(0))


def test_color_band_set_colors():
    band = ColorBand(FakeParent())
    band.set_colors([(RED, 100)])
    painter = Painter(200, 200)
    band.draw(painter)
    assert [d["color"] for k, d in painter.operations] == [RED]


def test_degrees_draws_tick_per_step():
    deg = DegreesItem(FakeParent())
    painter = Painter(200, 200)
    deg.draw(painter)
    assert sum(1 for k, _ in painter.operations if k == "line") == 11


def test_degrees_rejects_non_positive_step():
    deg = DegreesItem(FakeParent())
    with pytest.raises(GaugeRangeError) as err:
        deg.step = 0
    assert err.value.kind is GaugeErrorKind.INVALID_STEP
    assert deg.step == 10
    painter = Painter(200, 200)
    deg.draw(painter)
    assert sum(1 for k, _ in painter.operations if k == "line") == 11


def test_glass_draws_two_pies():
    glass = GlassItem(FakeParent())
    painter = Painter(200, 200)
    glass.draw(painter)
    assert [k for k, _ in painter.operations] == ["pie", "pie"]
    assert glass.position == 88