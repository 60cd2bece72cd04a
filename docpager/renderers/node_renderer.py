"""
Safe HTML rendering of structured content nodes.

Only whitelisted tags and attributes are emitted; text is always escaped.
Links are limited to http(s) and mailto targets, images to inline data URLs.
"""

from __future__ import annotations

import logging
from html import escape
from typing import Iterable, List

from ..models.block import ContentNode, TEXT_TAG

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset({
    "a", "b", "blockquote", "br", "code", "div", "em", "figcaption", "figure",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li", "mark", "ol",
    "p", "pre", "s", "small", "span", "strike", "strong", "sub", "sup",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul",
})
VOID_TAGS = frozenset({"br", "hr", "img"})
# Dropped together with their contents
DROPPED_TAGS = frozenset({"script", "style", "template", "noscript"})

ALLOWED_ATTRS = frozenset({"alt", "class", "colspan", "height", "href", "rowspan", "src", "title", "width"})
LINK_SCHEMES = ("http://", "https://", "mailto:")
IMAGE_PREFIX = "data:image/"


class NodeRenderer:
    """Renders ``ContentNode`` trees back to markup."""

    def render(self, node: ContentNode) -> str:
        if node.tag == TEXT_TAG:
            return escape(node.text)
        if node.tag in DROPPED_TAGS:
            logger.debug(f"Dropping <{node.tag}> element from rendered content")
            return ""

        inner = self.render_nodes(node.children)
        if node.tag not in ALLOWED_TAGS:
            # Unknown wrapper: keep the content, lose the element
            return inner

        attrs = self._render_attrs(node)
        if node.tag in VOID_TAGS:
            return f"<{node.tag}{attrs}>"
        return f"<{node.tag}{attrs}>{inner}</{node.tag}>"

    def render_nodes(self, nodes: Iterable[ContentNode]) -> str:
        return "".join(self.render(node) for node in nodes)

    def _render_attrs(self, node: ContentNode) -> str:
        parts: List[str] = []
        for name, value in node.attrs:
            name = name.lower()
            if name not in ALLOWED_ATTRS:
                continue
            if name == "href" and not self._is_safe_link(value):
                continue
            if name == "src" and not (node.tag == "img" and value.strip().lower().startswith(IMAGE_PREFIX)):
                continue
            parts.append(f' {name}="{escape(value, quote=True)}"')
        if node.tag == "a" and node.get_attr("href") and self._is_safe_link(node.get_attr("href")):
            parts.append(' rel="noopener noreferrer"')
        return "".join(parts)

    @staticmethod
    def _is_safe_link(value: str) -> bool:
        return value.strip().lower().startswith(LINK_SCHEMES)
