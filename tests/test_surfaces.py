"""
Tests for drawing surfaces (recording, SVG, Pillow raster).
"""

import pytest

from structdraw.drawing_generator.surfaces import (
    RasterSurface,
    RecordingSurface,
    SvgSurface,
    dash_segments,
    parse_color,
)


class TestParseColor:

    @pytest.mark.parametrize(
        "color, expected",
        [
            ("#0066CC", (0, 102, 204, 1.0)),
            ("#fff", (255, 255, 255, 1.0)),
            ("rgba(0,0,0,0.1)", (0, 0, 0, 0.1)),
            ("rgb(10, 20, 30)", (10, 20, 30, 1.0)),
            ("red", (255, 0, 0, 1.0)),
        ],
    )
    def test_parse(self, color, expected):
        assert parse_color(color) == pytest.approx(expected)

    @pytest.mark.parametrize("color", [None, "", "none", "None"])
    def test_no_paint(self, color):
        assert parse_color(color) is None

    def test_bad_color(self):
        with pytest.raises(ValueError):
            parse_color("not-a-color")


class TestDashSegments:

    def test_solid(self):
        assert dash_segments(0, 0, 10, 0, ()) == [(0, 0, 10, 0)]

    def test_dashed(self):
        pieces = dash_segments(0, 0, 20, 0, (5, 5))
        assert [p[0] for p in pieces] == pytest.approx([0, 10])
        assert [p[2] for p in pieces] == pytest.approx([5, 15])

    def test_partial_last_dash(self):
        pieces = dash_segments(0, 0, 7, 0, (5, 5))
        assert len(pieces) == 1
        pieces = dash_segments(0, 0, 12, 0, (5, 5))
        assert pieces[-1] == pytest.approx((10, 0, 12, 0))

    def test_zero_length(self):
        assert dash_segments(3, 3, 3, 3, (5, 5)) == [(3, 3, 3, 3)]


class TestRecordingSurface:

    def test_clear_starts_new_log(self):
        surface = RecordingSurface()
        surface.stroke_segment(0, 0, 1, 1)
        surface.clear()
        assert surface.calls == [("clear",)]

    def test_style_state_tracked(self):
        surface = RecordingSurface()
        surface.set_stroke_style("#CC0000", 0.18)
        surface.set_line_dash([5, 5])
        assert surface.stroke_color == "#CC0000"
        assert surface.line_dash == (5, 5)
        assert surface.calls[-1] == ("set_line_dash", (5, 5))

    def test_primitive_calls(self):
        surface = RecordingSurface()
        surface.set_fill_style("#000")
        surface.fill_rect(0, 0, 1, 1)
        assert surface.primitive_calls == [("fill_rect", 0, 0, 1, 1)]


class TestSvgSurface:

    def test_document(self):
        surface = SvgSurface(100, 50)
        surface.set_stroke_style("#0066CC", 0.5)
        surface.set_line_dash((5, 5))
        surface.stroke_segment(0, 0, 10, 10)
        svg = surface.to_svg()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="100" height="50"')
        assert 'stroke="rgb(0,102,204)"' in svg
        assert 'stroke-dasharray="5,5"' in svg
        assert svg.endswith("</svg>")

    def test_translucent_fill(self):
        surface = SvgSurface()
        surface.set_fill_style("rgba(0,0,0,0.1)")
        surface.fill_rect(0, 0, 10, 10)
        assert 'fill-opacity="0.1"' in surface.svg_parts[0]

    def test_text_escaped_and_aligned(self):
        surface = SvgSurface()
        surface.draw_text("A<B & C", 5, 5, align="right")
        part = surface.svg_parts[0]
        assert "A&lt;B &amp; C" in part
        assert 'text-anchor="end"' in part

    def test_font_family_escaped(self):
        surface = SvgSurface()
        surface.set_font(10, 'My "Drafting" Font')
        surface.draw_text("A", 5, 5)
        assert 'font-family="My &quot;Drafting&quot; Font"' in surface.svg_parts[0]

    def test_clear(self):
        surface = SvgSurface()
        surface.stroke_circle(1, 1, 1)
        surface.clear()
        assert surface.svg_parts == []

    def test_save(self, tmp_path):
        surface = SvgSurface()
        surface.stroke_rect(1, 2, 3, 4)
        path = tmp_path / "frame.svg"
        surface.save(path)
        assert "<rect" in path.read_text(encoding="utf-8")


class TestRasterSurface:

    def test_fill_rect(self):
        surface = RasterSurface(20, 20)
        surface.set_fill_style("#FF0000")
        surface.fill_rect(2, 2, 10, 10)
        assert surface.image.getpixel((5, 5)) == (255, 0, 0)
        assert surface.image.getpixel((15, 15)) == (255, 255, 255)

    def test_translucent_fill_blends(self):
        surface = RasterSurface(20, 20)
        surface.set_fill_style("rgba(0,0,0,0.5)")
        surface.fill_rect(0, 0, 20, 20)
        r, g, b = surface.image.getpixel((10, 10))
        assert 120 <= r <= 135
        assert r == g == b

    def test_light_fill_stays_light(self):
        """A 10% black footing fill over white paper is a pale grey."""
        surface = RasterSurface(20, 20)
        surface.set_fill_style("rgba(0,0,0,0.1)")
        surface.fill_rect(0, 0, 20, 20)
        r, g, b = surface.image.getpixel((10, 10))
        assert 225 <= r <= 235
        assert r == g == b

    def test_translucent_fills_stack(self):
        surface = RasterSurface(20, 20)
        surface.set_fill_style("rgba(0,0,0,0.5)")
        surface.fill_rect(0, 0, 20, 20)
        surface.fill_rect(0, 0, 10, 20)
        assert surface.image.getpixel((5, 10))[0] < surface.image.getpixel((15, 10))[0]

    def test_clear(self):
        surface = RasterSurface(10, 10)
        surface.set_fill_style("#000000")
        surface.fill_rect(0, 0, 10, 10)
        surface.clear()
        assert surface.image.getpixel((5, 5)) == (255, 255, 255)

    def test_dashed_segment_has_gaps(self):
        surface = RasterSurface(40, 10)
        surface.set_stroke_style("#000000", 1)
        surface.set_line_dash((5, 5))
        surface.stroke_segment(0, 5, 40, 5)
        assert surface.image.getpixel((2, 5))[:3] == (0, 0, 0)
        assert surface.image.getpixel((7, 5))[:3] == (255, 255, 255)

    def test_save_png(self, tmp_path):
        surface = RasterSurface(10, 10)
        surface.set_font(12, "Arial")
        surface.draw_text("A", 2, 9)
        path = tmp_path / "frame.png"
        surface.save(path)
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
