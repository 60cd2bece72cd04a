"""Tests for the node and watermark renderers."""

import pytest

from docpager.models import ContentNode, TEXT_TAG, Watermark
from docpager.parser.html_parser import node_from_dict, parse_flow_content
from docpager.renderers.node_renderer import NodeRenderer
from docpager.renderers.watermark_renderer import WatermarkRenderer


@pytest.fixture
def renderer():
    return NodeRenderer()


def render_html(renderer, html):
    return renderer.render_nodes(parse_flow_content(html))


class TestNodeRenderer:

    def test_round_trip_of_simple_markup(self, renderer):
        html = '<h2>Scope</h2><p class="lead">Hello <strong>world</strong></p><ul><li>a</li></ul>'

        assert render_html(renderer, html) == html

    def test_text_is_escaped(self, renderer):
        node = node_from_dict({"tag": "p", "text": "<b>not bold</b> & more"})

        assert renderer.render(node) == "<p>&lt;b&gt;not bold&lt;/b&gt; &amp; more</p>"

    def test_event_handler_attributes_are_dropped(self, renderer):
        output = render_html(renderer, '<p onclick="steal()" title="ok">x</p>')

        assert output == '<p title="ok">x</p>'

    def test_script_is_dropped_with_contents(self, renderer):
        output = render_html(renderer, "<p>a</p><script>alert(1)</script>")

        assert output == "<p>a</p>"

    def test_unknown_wrapper_keeps_content(self, renderer):
        node = node_from_dict({"tag": "section", "children": [{"tag": "p", "text": "inside"}]})

        assert renderer.render(node) == "<p>inside</p>"

    @pytest.mark.parametrize(
        "href, kept",
        [
            ("https://example.test", True),
            ("mailto:hi@example.test", True),
            ("javascript:alert(1)", False),
            ("  JavaScript:alert(1)", False),
        ],
    )
    def test_link_targets(self, renderer, href, kept):
        node = node_from_dict({"tag": "a", "attrs": {"href": href}, "text": "link"})
        output = renderer.render(node)

        assert ("href=" in output) is kept
        assert ("noopener" in output) is kept

    def test_only_inline_images_are_kept(self, renderer):
        inline = renderer.render(node_from_dict({"tag": "img", "attrs": {"src": "data:image/png;base64,AAAA"}}))
        remote = renderer.render(node_from_dict({"tag": "img", "attrs": {"src": "https://tracker.test/p.gif"}}))

        assert inline == '<img src="data:image/png;base64,AAAA">'
        assert remote == "<img>"

    def test_attribute_values_are_escaped(self, renderer):
        node = node_from_dict({"tag": "p", "attrs": {"title": 'say "hi"'}, "text": "x"})

        assert renderer.render(node) == '<p title="say &quot;hi&quot;">x</p>'

    def test_text_node(self, renderer):
        assert renderer.render(ContentNode(tag=TEXT_TAG, text="a < b")) == "a &lt; b"


class TestWatermarkRenderer:

    def test_no_watermark(self):
        assert WatermarkRenderer().render_html(None) == ""

    def test_stamp(self):
        html = WatermarkRenderer().render_html(Watermark(text="PAID", color="#22c55e"))

        assert 'class="watermark"' in html
        assert "rotate(-12deg)" in html
        assert "color: #22c55e" in html
        assert "opacity: 0.2" in html
        assert ">PAID<" in html

    def test_css(self):
        assert ".watermark-stamp" in WatermarkRenderer.get_watermark_css()
