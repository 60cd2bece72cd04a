"""Shared builders for docpager tests."""

from docpager.config import PageCapacity
from docpager.models import Block, BlockKind, ContentNode, TEXT_TAG


def capacity_with_usable(usable: float) -> PageCapacity:
    """Default padding (40 per edge) and safety margin (20) take 100 units."""
    return PageCapacity(page_height=usable + 100.0)


def paragraph(text: str) -> ContentNode:
    return ContentNode(tag="p", children=(ContentNode(tag=TEXT_TAG, text=text),))


def content_blocks(count: int, start: int = 0) -> list:
    return [
        Block(kind=BlockKind.CONTENT, payload=paragraph(f"Block {index}"), block_id=index)
        for index in range(start, start + count)
    ]


def forced_break(block_id: int) -> Block:
    return Block(kind=BlockKind.FORCED_BREAK, block_id=block_id)
