"""Tests for the size oracles."""

import base64
import math
from io import BytesIO

import pytest
from PIL import Image

from docpager.engine.size_oracle import BlockStyle, StaticSizeOracle, TextMetricsSizeOracle
from docpager.exceptions import MeasurementError
from docpager.models import Block, BlockKind
from docpager.parser.html_parser import parse_flow_content

CONTENT_WIDTH = 714.0
LINE = 16 * 1.75


def block_for(html, block_id=0):
    node = parse_flow_content(html)[0]
    return Block(kind=BlockKind.CONTENT, payload=node, block_id=block_id)


def png_data_url(width, height):
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(200, 10, 10)).save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def oracle():
    return TextMetricsSizeOracle(CONTENT_WIDTH)


class TestTextMetricsSizeOracle:
    """Font-metrics measurement of flow blocks."""

    def test_single_line_paragraph(self, oracle):
        assert oracle.measure(block_for("<p>Hello</p>")) == pytest.approx(20 + LINE + 20)

    def test_heading_uses_its_own_style(self, oracle):
        assert oracle.measure(block_for("<h1>Title</h1>")) == pytest.approx(36 * 1.11 + 32)

    def test_empty_paragraph_occupies_one_line(self, oracle):
        assert oracle.measure(block_for("<p></p>")) == pytest.approx(20 + LINE + 20)

    def test_line_break_only_paragraph(self, oracle):
        assert oracle.measure(block_for("<p><br></p>")) == pytest.approx(20 + LINE + 20)

    def test_explicit_line_breaks_add_lines(self, oracle):
        assert oracle.measure(block_for("<p>one<br>two<br>three</p>")) == pytest.approx(40 + 3 * LINE)

    def test_long_text_wraps(self, oracle):
        short = oracle.measure(block_for("<p>Short text.</p>"))
        long = oracle.measure(block_for("<p>" + "wrapping words " * 100 + "</p>"))

        assert long > short
        # Whole lines plus margins
        lines = (long - 40) / LINE
        assert lines == pytest.approx(round(lines))
        assert round(lines) > 1

    def test_narrower_width_is_taller(self):
        text = "<p>" + "measure me " * 60 + "</p>"
        wide = TextMetricsSizeOracle(714.0).measure(block_for(text))
        narrow = TextMetricsSizeOracle(300.0).measure(block_for(text))

        assert narrow > wide

    def test_list_sums_items(self, oracle):
        height = oracle.measure(block_for("<ul><li>a</li><li>b</li></ul>"))

        assert height == pytest.approx(20 + 2 * (8 + LINE + 8) + 20)

    def test_table_sums_rows(self, oracle):
        height = oracle.measure(block_for("<table><tr><td>a</td><td>b</td></tr><tr><td>c</td><td>d</td></tr></table>"))
        row = 14 * 1.7 + 16

        assert height == pytest.approx(32 + 2 * row + 32)

    def test_hr_is_thin(self, oracle):
        assert oracle.measure(block_for("<hr>")) == pytest.approx(1.0)

    def test_image_with_attributes(self, oracle):
        assert oracle.measure(block_for('<img width="400" height="200">')) == pytest.approx(32 + 200 + 32)

    def test_wide_image_is_scaled_to_content_width(self, oracle):
        html = f'<img width="{CONTENT_WIDTH * 2}" height="100">'

        assert oracle.measure(block_for(html)) == pytest.approx(32 + 50 + 32)

    def test_image_from_data_url(self, oracle):
        html = f'<img src="{png_data_url(100, 50)}">'

        assert oracle.measure(block_for(html)) == pytest.approx(32 + 50 + 32)

    def test_image_width_attribute_keeps_aspect_ratio(self, oracle):
        html = f'<img src="{png_data_url(100, 50)}" width="300px">'

        assert oracle.measure(block_for(html)) == pytest.approx(32 + 150 + 32)

    def test_remote_image_without_size(self, oracle):
        with pytest.raises(MeasurementError):
            oracle.measure(block_for('<img src="https://example.test/a.png">'))

    def test_undecodable_image(self, oracle):
        with pytest.raises(MeasurementError):
            oracle.measure(block_for('<img src="data:image/png;base64,bm90IGFuIGltYWdl">'))

    @pytest.mark.parametrize("html", ['<iframe src="x"></iframe>', "<p>see <video></video></p>", "<svg></svg>"])
    def test_unsupported_content(self, oracle, html):
        with pytest.raises(MeasurementError):
            oracle.measure(block_for(html))

    def test_deeply_nested_content(self, oracle):
        html = "<div>" * 1200 + "deep" + "</div>" * 1200

        with pytest.raises(MeasurementError):
            oracle.measure(block_for(html))

    def test_non_node_payload(self, oracle):
        with pytest.raises(MeasurementError):
            oracle.measure(Block(kind=BlockKind.CONTENT, payload="raw string"))

    def test_custom_styles_override_defaults(self):
        oracle = TextMetricsSizeOracle(CONTENT_WIDTH, styles={"p": BlockStyle(margin_top=0, margin_bottom=0)})

        assert oracle.measure(block_for("<p>Hello</p>")) == pytest.approx(LINE)

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            TextMetricsSizeOracle(0)


class TestStaticSizeOracle:
    """Lookup-table measurement."""

    def test_mapping(self):
        oracle = StaticSizeOracle({3: 120})

        assert oracle.measure(Block(kind=BlockKind.CONTENT, block_id=3)) == 120.0

    def test_callable(self):
        oracle = StaticSizeOracle(lambda block: block.block_id * 10)

        assert oracle.measure(Block(kind=BlockKind.CONTENT, block_id=4)) == 40.0

    def test_default(self):
        oracle = StaticSizeOracle({}, default=7)

        assert oracle.measure(Block(kind=BlockKind.CONTENT, block_id=1)) == 7.0

    def test_missing_height(self):
        with pytest.raises(MeasurementError):
            StaticSizeOracle({}).measure(Block(kind=BlockKind.CONTENT, block_id=1))

    @pytest.mark.parametrize("height", [-1.0, math.nan])
    def test_invalid_height(self, height):
        with pytest.raises(MeasurementError):
            StaticSizeOracle({0: height}).measure(Block(kind=BlockKind.CONTENT, block_id=0))
