"""Tests for TextMetricsEngine."""

import pytest

from docpager.engine.text_metrics import TextMetricsEngine, resolve_font_name


class TestFontResolution:

    @pytest.mark.parametrize(
        "family, bold, italic, expected",
        [
            ("sans", False, False, "Helvetica"),
            ("sans", True, True, "Helvetica-BoldOblique"),
            ("serif", True, False, "Times-Bold"),
            ("mono", False, True, "Courier-Oblique"),
            ("unknown", False, False, "Helvetica"),
        ],
    )
    def test_resolve_font_name(self, family, bold, italic, expected):
        assert resolve_font_name(family, bold, italic) == expected


class TestTextMetricsEngine:
    """Width and wrapping."""

    def test_string_width_scales_with_font_size(self):
        engine = TextMetricsEngine()
        small = engine.string_width("Hello", "Helvetica", 10)
        large = engine.string_width("Hello", "Helvetica", 20)

        assert small > 0
        assert large == pytest.approx(2 * small)

    def test_bold_is_wider(self):
        engine = TextMetricsEngine()

        assert engine.string_width("Wide", "Helvetica-Bold", 16) > engine.string_width("Wide", "Helvetica", 16)

    def test_single_line(self):
        layout = TextMetricsEngine().layout_text("Hello world", font_size=16, line_height=1.5, max_width=500)

        assert layout.line_count == 1
        assert layout.lines == ["Hello world"]
        assert layout.height == pytest.approx(24)

    def test_wrapping_respects_width(self):
        engine = TextMetricsEngine()
        layout = engine.layout_text("alpha beta gamma delta " * 20, font_size=16, max_width=200)

        assert layout.line_count > 1
        for line in layout.lines:
            assert engine.string_width(line, "Helvetica", 16) <= 200
        assert layout.height == pytest.approx(layout.line_count * 16 * 1.75)

    def test_long_word_keeps_its_own_line(self):
        layout = TextMetricsEngine().layout_text("a " + "x" * 80 + " b", max_width=100)

        assert layout.lines == ["a", "x" * 80, "b"]
        assert layout.width > 100

    def test_newlines_force_breaks(self):
        layout = TextMetricsEngine().layout_text("one\n\nthree", max_width=500)

        assert layout.lines == ["one", "", "three"]

    def test_blank_text_is_one_empty_line(self):
        layout = TextMetricsEngine().layout_text("   ", font_size=10, line_height=2)

        assert layout.line_count == 1
        assert layout.height == pytest.approx(20)
