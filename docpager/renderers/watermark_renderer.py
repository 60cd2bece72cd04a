"""
Watermark renderer for HTML output.
"""

from html import escape
import logging
from typing import Optional

from ..models.page import Watermark

logger = logging.getLogger(__name__)


class WatermarkRenderer:
    """Renderer for the status stamp drawn across a page."""

    def __init__(self, font_size: float = 96.0, border_width: float = 8.0):
        """
        Initialize watermark renderer.

        Args:
            font_size: Stamp text size in px
            border_width: Width of the rounded stamp border in px
        """
        self.font_size = font_size
        self.border_width = border_width

    def render_html(self, watermark: Optional[Watermark]) -> str:
        """
        Render a watermark as an overlay covering the whole page.

        Args:
            watermark: Watermark decoration, or None

        Returns:
            HTML string with the watermark element (empty when there is none)
        """
        if watermark is None or not watermark.text:
            return ""

        color = escape(watermark.color, quote=True)
        return (
            f'<div class="watermark" aria-hidden="true">'
            f'<div class="watermark-stamp" '
            f'style="transform: rotate({watermark.angle:g}deg); '
            f'color: {color}; '
            f'border: {self.border_width:g}px solid {color}; '
            f'opacity: {watermark.opacity:g}; '
            f'font-size: {self.font_size:g}px;">'
            f'{escape(watermark.text)}'
            f'</div></div>'
        )

    @staticmethod
    def get_watermark_css() -> str:
        """
        Get CSS for watermarks.

        Returns:
            CSS string
        """
        return """
        .watermark {
            position: absolute;
            inset: 0;
            display: flex;
            align-items: center;
            justify-content: center;
            pointer-events: none;
            z-index: 20;
            overflow: hidden;
        }
        .watermark-stamp {
            font-weight: 900;
            border-radius: 9999px;
            padding: 16px 32px;
            white-space: nowrap;
            user-select: none;
        }
        """
