"""
TextMetricsEngine - width and height of wrapped text.

Uses ReportLab font metrics to compute:
- text width
- line breaking at a maximum width
- wrapped text height (line count x line height)

Sizes are in reference units; ReportLab widths scale linearly with the font
size, so passing a font size in reference units yields widths in the same
units.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from reportlab.pdfbase import pdfmetrics

FONT_FAMILIES: Dict[str, Dict[str, str]] = {
    "sans": {
        "regular": "Helvetica",
        "bold": "Helvetica-Bold",
        "italic": "Helvetica-Oblique",
        "bold_italic": "Helvetica-BoldOblique",
    },
    "serif": {
        "regular": "Times-Roman",
        "bold": "Times-Bold",
        "italic": "Times-Italic",
        "bold_italic": "Times-BoldItalic",
    },
    "mono": {
        "regular": "Courier",
        "bold": "Courier-Bold",
        "italic": "Courier-Oblique",
        "bold_italic": "Courier-BoldOblique",
    },
}


def resolve_font_name(family: str = "sans", bold: bool = False, italic: bool = False) -> str:
    """Map a generic family plus weight/slant onto a standard PDF font."""
    variants = FONT_FAMILIES.get(family, FONT_FAMILIES["sans"])
    if bold and italic:
        return variants["bold_italic"]
    if bold:
        return variants["bold"]
    if italic:
        return variants["italic"]
    return variants["regular"]


@dataclass(slots=True)
class TextLayout:
    """Result of laying out a piece of text."""
    width: float
    height: float
    line_count: int = 1
    lines: List[str] = field(default_factory=list)
    font_size: float = 16.0


class TextMetricsEngine:
    """
    Text metrics engine.

    Measures widths with ReportLab and derives heights from the line height
    and the number of wrapped lines.
    """

    def __init__(self, family: str = "sans"):
        self.family = family
        self._width_cache: Dict[tuple, float] = {}

    def font_name(self, bold: bool = False, italic: bool = False) -> str:
        return resolve_font_name(self.family, bold, italic)

    def string_width(self, text: str, font_name: str, font_size: float) -> float:
        key = (text, font_name, font_size)
        width = self._width_cache.get(key)
        if width is None:
            width = pdfmetrics.stringWidth(text, font_name, font_size)
            self._width_cache[key] = width
        return width

    def layout_text(
        self,
        text: str,
        font_size: float = 16.0,
        line_height: float = 1.75,
        max_width: Optional[float] = None,
        bold: bool = False,
        italic: bool = False,
    ) -> TextLayout:
        """
        Lays text out in lines and computes its metrics.

        Args:
            text: Text to lay out; ``\\n`` forces a line break
            font_size: Font size in reference units
            line_height: Line height as a multiple of the font size
            max_width: Maximum line width (no wrapping when ``None``)
            bold: Use the bold variant
            italic: Use the italic variant

        Returns:
            TextLayout with metrics and lines
        """
        font_name = self.font_name(bold, italic)
        line_px = font_size * line_height

        if not text or not text.strip():
            return TextLayout(width=0.0, height=line_px, line_count=1, lines=[""], font_size=font_size)

        lines: List[str] = []
        for segment in text.split("\n"):
            if max_width is None:
                lines.append(" ".join(segment.split()))
            else:
                lines.extend(self._break_text_into_lines(segment, font_name, font_size, max_width))

        widest = max(self.string_width(line, font_name, font_size) for line in lines)
        return TextLayout(
            width=widest,
            height=len(lines) * line_px,
            line_count=len(lines),
            lines=lines,
            font_size=font_size,
        )

    def _break_text_into_lines(
        self,
        text: str,
        font_name: str,
        font_size: float,
        max_width: float
    ) -> List[str]:
        """
        Breaks text into lines no wider than ``max_width``.

        A single word wider than the line is kept whole on its own line.
        """
        words = text.split()
        if not words:
            return [""]

        lines: List[str] = []
        current_line = ""
        for word in words:
            candidate = f"{current_line} {word}" if current_line else word
            if self.string_width(candidate, font_name, font_size) <= max_width:
                current_line = candidate
            elif current_line:
                lines.append(current_line)
                current_line = word
            else:
                lines.append(word)
                current_line = ""

        if current_line:
            lines.append(current_line)

        return lines or [""]
