"""HTML renderers for composed pages."""

from .node_renderer import NodeRenderer
from .skins import THEMES, DocumentSkin, HtmlSkin, PageSkin, SkinTheme
from .templates import TemplateDispatcher
from .watermark_renderer import WatermarkRenderer

__all__ = [
    "DocumentSkin",
    "HtmlSkin",
    "NodeRenderer",
    "PageSkin",
    "SkinTheme",
    "TemplateDispatcher",
    "THEMES",
    "WatermarkRenderer",
]
