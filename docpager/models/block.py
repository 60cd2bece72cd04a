"""
Block model.

A block is the atomic unit of pagination. Flow documents carry a
``ContentNode`` payload, tabular documents a ``LineItem``; forced breaks carry
nothing and are consumed by the paginator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Tuple


TEXT_TAG = "#text"


class BlockKind(Enum):
    """Block kinds produced by the block stream builder."""
    CONTENT = "content"
    FORCED_BREAK = "forced-break"


@dataclass(frozen=True, slots=True)
class ContentNode:
    """Structured markup node.

    Elements carry a tag, attributes and children; text runs are nodes tagged
    ``#text`` whose ``text`` holds the characters.
    """
    tag: str
    text: str = ""
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["ContentNode", ...] = ()

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    @property
    def classes(self) -> Tuple[str, ...]:
        return tuple((self.get_attr("class") or "").split())

    def iter_nodes(self) -> Iterator["ContentNode"]:
        """Depth-first walk including this node."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def text_content(self) -> str:
        """Concatenated text of the node and its descendants, in document order."""
        if self.tag == TEXT_TAG:
            return self.text
        if self.tag == "br":
            return "\n"
        return "".join(child.text_content() for child in self.children)


@dataclass(slots=True)
class Block:
    """Atomic, never-split unit of content."""
    kind: BlockKind
    payload: Any = None
    block_id: int = 0
    measured_height: Optional[float] = field(default=None, compare=False)

    @property
    def is_forced_break(self) -> bool:
        return self.kind is BlockKind.FORCED_BREAK

    @property
    def tag(self) -> Optional[str]:
        return getattr(self.payload, "tag", None)
