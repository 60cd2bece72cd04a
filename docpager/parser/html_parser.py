"""
HTML Parser - turns stored rich content into a structured node tree.

Handles:
- Parsing editor HTML into top-level ``ContentNode`` elements
- Implicit closing of optional-end-tag elements (p, li, td, ...)
- Detection of malformed markup (stray or unclosed elements)
- Conversion of already structured node dictionaries
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..exceptions import ContentParseError
from ..models.block import ContentNode, TEXT_TAG

logger = logging.getLogger(__name__)

VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})

# Elements whose end tag may be omitted in HTML
OPTIONAL_END_TAGS = frozenset({
    "p", "li", "dt", "dd", "tr", "td", "th", "thead", "tbody", "tfoot", "option",
})

# Start tags that implicitly close an open element of the same family
_IMPLICIT_CLOSERS: Dict[str, frozenset] = {
    "p": frozenset({"p"}),
    "li": frozenset({"li"}),
    "dt": frozenset({"dt", "dd"}),
    "dd": frozenset({"dt", "dd"}),
    "tr": frozenset({"tr", "td", "th"}),
    "td": frozenset({"td", "th"}),
    "th": frozenset({"td", "th"}),
}


class _OpenElement:
    __slots__ = ("tag", "attrs", "children")

    def __init__(self, tag: str, attrs: Tuple[Tuple[str, str], ...]):
        self.tag = tag
        self.attrs = attrs
        self.children: List[ContentNode] = []

    def freeze(self) -> ContentNode:
        return ContentNode(tag=self.tag, attrs=self.attrs, children=tuple(self.children))


class FlowContentParser(HTMLParser):
    """Parser that builds a tree of ``ContentNode`` from editor HTML."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.nodes: List[ContentNode] = []
        self.stack: List[_OpenElement] = []
        self.errors: List[str] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:
        tag_lower = tag.lower()
        closes = _IMPLICIT_CLOSERS.get(tag_lower)
        while closes and self.stack and self.stack[-1].tag in closes:
            self._close_top()

        attr_tuple = tuple((name.lower(), value if value is not None else "") for name, value in attrs)
        if tag_lower in VOID_TAGS:
            self._append(ContentNode(tag=tag_lower, attrs=attr_tuple))
            return
        self.stack.append(_OpenElement(tag_lower, attr_tuple))

    def handle_startendtag(self, tag: str, attrs: list) -> None:
        tag_lower = tag.lower()
        attr_tuple = tuple((name.lower(), value if value is not None else "") for name, value in attrs)
        self._append(ContentNode(tag=tag_lower, attrs=attr_tuple))

    def handle_endtag(self, tag: str) -> None:
        tag_lower = tag.lower()
        if tag_lower in VOID_TAGS:
            return

        open_tags = [element.tag for element in self.stack]
        if tag_lower not in open_tags:
            self.errors.append(f"unexpected closing tag </{tag_lower}>")
            return

        # Pop implicitly closed elements until the matching one
        while self.stack[-1].tag != tag_lower:
            dangling = self.stack[-1].tag
            if dangling not in OPTIONAL_END_TAGS:
                self.errors.append(f"<{dangling}> closed by </{tag_lower}>")
            self._close_top()
        self._close_top()

    def handle_data(self, data: str) -> None:
        if not data:
            return
        self._append(ContentNode(tag=TEXT_TAG, text=data))

    def close(self) -> None:
        super().close()
        while self.stack:
            dangling = self.stack[-1].tag
            if dangling not in OPTIONAL_END_TAGS:
                self.errors.append(f"<{dangling}> is never closed")
            self._close_top()

    def _append(self, node: ContentNode) -> None:
        if self.stack:
            self.stack[-1].children.append(node)
        else:
            self.nodes.append(node)

    def _close_top(self) -> None:
        element = self.stack.pop()
        self._append(element.freeze())


def parse_flow_content(html_content: str) -> List[ContentNode]:
    """
    Parse editor HTML into top-level nodes.

    Args:
        html_content: HTML fragment as stored by the document editor

    Returns:
        List of top-level nodes in document order (text runs included)

    Raises:
        ContentParseError: If the markup is malformed
    """
    parser = FlowContentParser()
    try:
        parser.feed(html_content)
        parser.close()
    except Exception as exc:
        raise ContentParseError("Could not parse document content", str(exc)) from exc

    if parser.errors:
        raise ContentParseError("Malformed document content", "; ".join(parser.errors[:5]))

    logger.debug(f"Parsed {len(parser.nodes)} top-level nodes from {len(html_content)} characters")
    return parser.nodes


def node_from_dict(data: Any, path: str = "content") -> ContentNode:
    """
    Convert a structured node record into a ``ContentNode``.

    Args:
        data: Mapping with ``tag`` (or ``type``) and optional ``text``,
            ``attrs`` and ``children``; a bare string is a text run
        path: Location used in error messages

    Returns:
        ContentNode
    """
    if isinstance(data, str):
        return ContentNode(tag=TEXT_TAG, text=data)
    if not isinstance(data, Mapping):
        raise ContentParseError("Content node must be a mapping or string", f"{path}: {type(data).__name__}")

    tag = data.get("tag") or data.get("type")
    if not tag or not isinstance(tag, str):
        raise ContentParseError("Content node has no tag", path)
    tag = tag.lower()

    attrs_data = data.get("attrs") or {}
    if not isinstance(attrs_data, Mapping):
        raise ContentParseError("Content node attrs must be a mapping", path)
    attrs = tuple((str(key).lower(), str(value)) for key, value in attrs_data.items())

    if tag == TEXT_TAG:
        return ContentNode(tag=TEXT_TAG, text=str(data.get("text") or ""))

    children: List[ContentNode] = []
    text = data.get("text")
    if text:
        children.append(ContentNode(tag=TEXT_TAG, text=str(text)))
    raw_children = data.get("children") or []
    if not isinstance(raw_children, Sequence) or isinstance(raw_children, (str, bytes)):
        raise ContentParseError("Content node children must be a list", path)
    for position, child in enumerate(raw_children):
        children.append(node_from_dict(child, f"{path}.children[{position}]"))

    return ContentNode(tag=tag, attrs=attrs, children=tuple(children))


def nodes_from_records(records: Sequence[Any]) -> List[ContentNode]:
    """Convert a structured block list into top-level nodes."""
    return [node_from_dict(record, f"content[{position}]") for position, record in enumerate(records)]