import math

import pytest

from gaugekit.painting import RED, Color, Painter, Rect, Signal


def test_color_rejects_out_of_range_component():
    with pytest.raises(ValueError):
        Color(256, 0, 0)


def test_with_alpha_extremes():
    assert RED.with_alpha(1.0).a == 255
    assert RED.with_alpha(0.0).rgba == (255, 0, 0, 0)


def test_with_alpha_keeps_rgb():
    c = Color(10, 20, 30).with_alpha(0.4)
    assert (c.r, c.g, c.b) == (10, 20, 30)
    assert 0 < c.a < 255


def test_with_alpha_invalid():
    with pytest.raises(ValueError):
        RED.with_alpha(1.5)


def test_rect_center_is_midpoint():
    r = Rect(3, 7, 40, 18)
    cx, cy = r.center()
    assert cx == pytest.approx((r.left + r.right) / 2)
    assert cy == pytest.approx((r.top + r.bottom) / 2)


def test_rect_moved_center_round_trip():
    r = Rect(0, 0, 30, 20)
    moved = r.moved_center(12.5, -4.0)
    assert moved.center() == pytest.approx((12.5, -4.0))
    assert (moved.width, moved.height) == (r.width, r.height)


def test_rect_adjusted_moves_edges():
    r = Rect(5, 6, 50, 60)
    a = r.adjusted(1, 2, -3, -4)
    assert a.left == r.left + 1
    assert a.top == r.top + 2
    assert a.right == r.right - 3
    assert a.bottom == r.bottom - 4


def test_signal_emit_and_disconnect():
    received = []
    sig = Signal()
    sig.connect(received.append)
    sig.emit(7)
    sig.disconnect(received.append)
    sig.emit(8)
    assert received == [7]


def test_signal_disconnect_unknown_raises():
    with pytest.raises(ValueError):
        Signal().disconnect(print)


def test_map_identity_and_translate():
    p = Painter(10, 10)
    assert p.map(2.0, 3.0) == (2.0, 3.0)
    p.translate(4, 5)
    assert p.map(0, 0) == (4, 5)


def test_rotate_is_clockwise_on_screen():
    p = Painter(10, 10)
    p.rotate(90)
    x, y = p.map(1, 0)
    assert x == pytest.approx(0, abs=1e-9)
    assert y == pytest.approx(1)


def test_scale_maps_point():
    p = Painter(10, 10)
    p.scale(2, 3)
    assert p.map(1, 1) == (2, 3)


def test_save_restore_returns_transform():
    p = Painter(10, 10)
    p.save()
    p.translate(3, 3)
    p.rotate(30)
    p.restore()
    assert p.map(1, 1) == (1, 1)


def test_restore_without_save_raises():
    with pytest.raises(RuntimeError):
        Painter(10, 10).restore()


def test_image_size():
    assert Painter(30, 20).image().size == (30, 20)


def test_ellipse_fills_center():
    p = Painter(100, 100)
    p.draw_ellipse(Rect(10, 10, 80, 80), fill=RED)
    assert p.image().getpixel((50, 50)) == RED.rgba
    assert p.image().getpixel((1, 1))[3] == 0


def test_pie_fills_upper_half_only():
    p = Painter(100, 100)
    p.draw_pie(Rect(10, 10, 80, 80), 0, 180, RED)
    assert p.image().getpixel((50, 30)) == RED.rgba
    assert p.image().getpixel((50, 70))[3] == 0


def test_arc_draws_on_circle():
    p = Painter(100, 100)
    p.draw_arc(Rect(10, 10, 80, 80), 0, 180, RED, 3)
    assert p.image().getpixel((50, 10))[3] > 0
    assert p.image().getpixel((50, 89))[3] == 0


def test_chord_and_polygon_fill():
    p = Painter(100, 100)
    p.draw_chord(Rect(10, 10, 80, 80), 0, 180, RED)
    p.draw_polygon([(0, 80), (20, 80), (10, 99)], fill=RED)
    assert p.image().getpixel((50, 30)) == RED.rgba
    assert p.image().getpixel((10, 85)) == RED.rgba


def test_line_under_translation():
    p = Painter(20, 20)
    p.translate(10, 0)
    p.draw_line(0, 0, 0, 19, RED, 1)
    assert p.image().getpixel((10, 10)) == RED.rgba


def test_text_is_centred():
    p = Painter(100, 100)
    p.draw_text(Rect(0, 0, 100, 100), "W", RED, 20)
    left, top, right, bottom = p.image().getbbox()
    assert left < 50 < right
    assert top < 50 < bottom


def test_operations_are_recorded():
    p = Painter(20, 20)
    p.draw_line(0, 0, 5, 5)
    p.draw_ellipse(Rect(0, 0, 10, 10), fill=RED)
    assert [kind for kind, _ in p.operations] == ["line", "ellipse"]
    assert math.isclose(p.operations[0][1]["to"][0], 5)