"""
Size oracles report the rendered height of a block.

Contract shared by every implementation:
- the height is measured at the fixed page content width
- it includes the block's own top and bottom margins (adjacent margins are
  added, never collapsed, so pages break slightly early rather than clip)
- it is never negative

An oracle that cannot measure a block raises ``MeasurementError``; the
paginator degrades that to a full-page block.
"""

from __future__ import annotations

import base64
import binascii
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import MeasurementError
from ..models.block import Block, ContentNode, TEXT_TAG
from .text_metrics import TextMetricsEngine

logger = logging.getLogger(__name__)


class SizeOracle(ABC):
    """Interface for block height measurement."""

    @abstractmethod
    def measure(self, block: Block) -> float:
        """Return the rendered height of ``block`` including its vertical margins."""


@dataclass(frozen=True, slots=True)
class BlockStyle:
    """Vertical metrics of one element type on the printed page."""
    font_size: float = 16.0
    line_height: float = 1.75
    margin_top: float = 0.0
    margin_bottom: float = 0.0
    padding_y: float = 0.0
    indent: float = 0.0
    bold: bool = False
    italic: bool = False


# Mirrors the screen stylesheet of the page body (16px base, 1.75 line height)
DEFAULT_STYLES: Dict[str, BlockStyle] = {
    "p": BlockStyle(margin_top=20.0, margin_bottom=20.0),
    "h1": BlockStyle(font_size=36.0, line_height=1.11, margin_bottom=32.0, bold=True),
    "h2": BlockStyle(font_size=24.0, line_height=1.33, margin_top=48.0, margin_bottom=24.0, bold=True),
    "h3": BlockStyle(font_size=20.0, line_height=1.6, margin_top=32.0, margin_bottom=12.0, bold=True),
    "h4": BlockStyle(line_height=1.5, margin_top=24.0, margin_bottom=8.0, bold=True),
    "h5": BlockStyle(line_height=1.5, margin_top=24.0, margin_bottom=8.0, bold=True),
    "h6": BlockStyle(line_height=1.5, margin_top=24.0, margin_bottom=8.0, bold=True),
    "blockquote": BlockStyle(margin_top=25.6, margin_bottom=25.6, indent=20.0, italic=True),
    "pre": BlockStyle(font_size=14.0, line_height=1.7, margin_top=27.0, margin_bottom=27.0,
                      padding_y=27.0, indent=45.0),
    "ul": BlockStyle(margin_top=20.0, margin_bottom=20.0, indent=26.0),
    "ol": BlockStyle(margin_top=20.0, margin_bottom=20.0, indent=26.0),
    "li": BlockStyle(margin_top=8.0, margin_bottom=8.0),
    "table": BlockStyle(font_size=14.0, line_height=1.7, margin_top=32.0, margin_bottom=32.0),
    "td": BlockStyle(font_size=14.0, line_height=1.7, padding_y=16.0, indent=16.0),
    "th": BlockStyle(font_size=14.0, line_height=1.7, padding_y=16.0, indent=16.0, bold=True),
    "img": BlockStyle(margin_top=32.0, margin_bottom=32.0),
    "figure": BlockStyle(margin_top=32.0, margin_bottom=32.0),
}
CONTAINER_STYLE = BlockStyle()

INLINE_TAGS = frozenset({
    TEXT_TAG, "a", "abbr", "b", "br", "code", "em", "i", "kbd", "mark", "q",
    "s", "small", "span", "strike", "strong", "sub", "sup", "u",
})
# Content the page renderer cannot lay out; measured as unknown
UNSUPPORTED_TAGS = frozenset({
    "audio", "button", "canvas", "embed", "form", "iframe", "input", "object",
    "script", "select", "style", "svg", "textarea", "video",
})


class TextMetricsSizeOracle(SizeOracle):
    """
    Font-metrics oracle.

    Wraps each block's text at the content width with ReportLab metrics and
    adds the element's margins; images are sized from their pixel dimensions.
    """

    def __init__(
        self,
        content_width: float,
        styles: Optional[Mapping[str, BlockStyle]] = None,
        metrics: Optional[TextMetricsEngine] = None,
    ):
        if content_width <= 0:
            raise ValueError(f"content_width must be positive, got {content_width}")
        self.content_width = content_width
        self.styles: Dict[str, BlockStyle] = dict(DEFAULT_STYLES)
        if styles:
            self.styles.update(styles)
        self.metrics = metrics or TextMetricsEngine()

    def measure(self, block: Block) -> float:
        node = block.payload
        if not isinstance(node, ContentNode):
            raise MeasurementError(
                "Block has no measurable content", f"block {block.block_id}: {type(node).__name__}"
            )
        try:
            height = self._measure_node(node, self.content_width)
        except RecursionError as exc:
            raise MeasurementError("Content is nested too deeply", f"block {block.block_id}") from exc
        except (KeyError, ValueError, ZeroDivisionError) as exc:
            # Font lookups and image arithmetic
            raise MeasurementError("Could not measure block", f"block {block.block_id}: {exc}") from exc
        if math.isnan(height) or math.isinf(height) or height < 0:
            raise MeasurementError("Invalid measured height", f"block {block.block_id}: {height}")
        return height

    def style_for(self, tag: str) -> BlockStyle:
        return self.styles.get(tag, CONTAINER_STYLE)

    # ------------------------------------------------------------------
    # Node measurement
    # ------------------------------------------------------------------
    def _measure_node(self, node: ContentNode, width: float) -> float:
        tag = node.tag
        if tag in UNSUPPORTED_TAGS:
            raise MeasurementError("Unsupported content", f"<{tag}>")
        if tag == TEXT_TAG or tag in INLINE_TAGS:
            return self._measure_inline([node], CONTAINER_STYLE, width)

        style = self.style_for(tag)
        if tag == "img":
            body = self._measure_image(node, width)
        elif tag == "table":
            body = self._measure_table(node, width)
        elif tag == "hr":
            body = 1.0
        else:
            body = self._measure_flow(node, style, width - style.indent)
        return style.margin_top + body + style.padding_y + style.margin_bottom

    def _measure_flow(self, node: ContentNode, style: BlockStyle, width: float) -> float:
        """Height of mixed inline runs and nested block children."""
        height = 0.0
        run: List[ContentNode] = []
        for child in node.children:
            if child.tag in INLINE_TAGS:
                run.append(child)
                continue
            height += self._measure_inline(run, style, width)
            run = []
            height += self._measure_node(child, width)
        height += self._measure_inline(run, style, width)

        empty_paragraph = not node.children and node.tag in ("p", "li")
        if empty_paragraph or (height == 0.0 and self._has_line_break(node)):
            # An empty paragraph still occupies one line
            height = style.font_size * style.line_height
        return height

    def _measure_inline(self, nodes: List[ContentNode], style: BlockStyle, width: float) -> float:
        if not nodes:
            return 0.0
        for node in nodes:
            for inner in node.iter_nodes():
                if inner.tag in UNSUPPORTED_TAGS:
                    raise MeasurementError("Unsupported content", f"<{inner.tag}>")
        text = "".join(node.text_content() for node in nodes)
        if text.endswith("\n"):
            text = text[:-1]
        if not text.strip():
            return 0.0
        layout = self.metrics.layout_text(
            text,
            font_size=style.font_size,
            line_height=style.line_height,
            max_width=max(width, 1.0),
            bold=style.bold,
            italic=style.italic,
        )
        return layout.height

    @staticmethod
    def _has_line_break(node: ContentNode) -> bool:
        return any(child.tag == "br" for child in node.children)

    def _measure_table(self, node: ContentNode, width: float) -> float:
        rows = [candidate for candidate in node.iter_nodes() if candidate.tag == "tr"]
        if not rows:
            return 0.0
        cell_rows = [[cell for cell in row.children if cell.tag in ("td", "th")] for row in rows]
        columns = max((len(cells) for cells in cell_rows), default=0) or 1
        column_width = width / columns

        height = 0.0
        for cells in cell_rows:
            row_height = 0.0
            for cell in cells:
                cell_style = self.style_for(cell.tag)
                text_width = column_width - 2 * cell_style.indent
                cell_height = self._measure_flow(cell, cell_style, text_width) + cell_style.padding_y
                row_height = max(row_height, cell_height)
            height += row_height
        return height

    def _measure_image(self, node: ContentNode, width: float) -> float:
        natural_width, natural_height = self._image_dimensions(node)
        if natural_width <= 0:
            raise MeasurementError("Image has no width", node.get_attr("src", "")[:40])
        scale = min(1.0, width / natural_width)
        return natural_height * scale

    def _image_dimensions(self, node: ContentNode) -> Tuple[float, float]:
        width_attr = _parse_dimension(node.get_attr("width"))
        height_attr = _parse_dimension(node.get_attr("height"))
        if width_attr is not None and height_attr is not None:
            return width_attr, height_attr

        src = node.get_attr("src") or ""
        if not src.startswith("data:image/") or ";base64," not in src:
            raise MeasurementError("Image size unknown", src[:40] or "<no src>")

        encoded = src.split(";base64,", 1)[1]
        try:
            with Image.open(BytesIO(base64.b64decode(encoded, validate=True))) as image:
                pixel_width, pixel_height = image.size
        except (binascii.Error, ValueError, UnidentifiedImageError, OSError) as exc:
            raise MeasurementError("Image data could not be decoded", str(exc)) from exc

        if width_attr is not None:
            return width_attr, pixel_height * width_attr / pixel_width
        if height_attr is not None:
            return pixel_width * height_attr / pixel_height, height_attr
        return float(pixel_width), float(pixel_height)


def _parse_dimension(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    text = value.strip().lower()
    if text.endswith("px"):
        text = text[:-2]
    try:
        number = float(text)
    except ValueError:
        return None
    return number if number > 0 else None


HeightSource = Union[Mapping[int, float], Callable[[Block], Optional[float]]]


class StaticSizeOracle(SizeOracle):
    """
    Lookup-table oracle.

    Heights come from a mapping keyed by block id, or from a callable taking
    the block. Blocks without an entry use ``default``; with no default they
    cannot be measured.
    """

    def __init__(self, heights: HeightSource, default: Optional[float] = None):
        self.heights = heights
        self.default = default

    def measure(self, block: Block) -> float:
        if callable(self.heights):
            height = self.heights(block)
        else:
            height = self.heights.get(block.block_id)
        if height is None:
            height = self.default
        if height is None:
            raise MeasurementError("No height known for block", str(block.block_id))
        height = float(height)
        if math.isnan(height) or height < 0:
            raise MeasurementError("Invalid height for block", f"{block.block_id}: {height}")
        return height
