"""
Block stream builder.

Converts a document's raw content into the ordered list of atomic blocks the
paginator consumes:

- flow documents (Proposal/Contract/SLA): top-level markup elements, with
  explicit separators turned into ``FORCED_BREAK`` blocks
- tabular documents (Invoice/Quote): one block per line item, grouped into
  fixed-size chunks
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from ..exceptions import ContentParseError
from ..models.block import Block, BlockKind, ContentNode, TEXT_TAG
from ..models.document import Document, LineItem
from .html_parser import nodes_from_records, parse_flow_content

logger = logging.getLogger(__name__)

FORCED_BREAK_TAGS = frozenset({"hr"})
FORCED_BREAK_CLASS = "page-break"


def is_forced_break(node: ContentNode) -> bool:
    """
    Whether a top-level node is an explicit page separator.

    ``<hr>`` always is; a ``page-break`` element only when it carries no text
    or images, so marked content is never dropped.
    """
    if node.tag in FORCED_BREAK_TAGS:
        return True
    return FORCED_BREAK_CLASS in node.classes and _is_blank(node)


def _is_blank(node: ContentNode) -> bool:
    if node.text_content().strip():
        return False
    return not any(inner.tag == "img" for inner in node.iter_nodes())


class BlockStreamBuilder:
    """Builds a fresh block stream for every pagination pass."""

    def build(self, document: Document) -> List[Block]:
        """
        Build the block stream for a document.

        Args:
            document: Document record (metadata plus raw content)

        Returns:
            Ordered list of blocks
        """
        if document.meta.type.is_flow:
            return self.build_flow_blocks(document.content)
        return self.build_item_blocks(document.items)

    def build_flow_blocks(self, content: Any) -> List[Block]:
        """
        Build blocks for a flow document.

        Args:
            content: HTML string, structured node list, or ``None``/empty
                string for a document without content

        Returns:
            Ordered list of content and forced-break blocks

        Raises:
            ContentParseError: If the content cannot be parsed at all
        """
        if content is None:
            return []
        if isinstance(content, str):
            if not content.strip():
                return []
            nodes = parse_flow_content(content)
        elif isinstance(content, (list, tuple)):
            nodes = nodes_from_records(content)
        else:
            raise ContentParseError(
                "Unsupported content type for a flow document", type(content).__name__
            )

        blocks: List[Block] = []
        for node in nodes:
            block = self._node_to_block(node, len(blocks))
            if block is not None:
                blocks.append(block)

        breaks = sum(1 for block in blocks if block.is_forced_break)
        logger.debug(f"Built {len(blocks)} flow blocks ({breaks} forced breaks)")
        return blocks

    def build_item_blocks(self, items: Optional[Sequence[Any]]) -> List[Block]:
        """
        Build one block per line item.

        Args:
            items: Line item records (mappings) or ``LineItem`` objects

        Returns:
            Ordered list of content blocks
        """
        if items is None:
            return []
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
            raise ContentParseError("Line items must be a list", type(items).__name__)

        blocks = []
        for position, record in enumerate(items):
            if isinstance(record, LineItem):
                item = record
            else:
                try:
                    item = LineItem.from_dict(record)
                except ContentParseError as exc:
                    raise ContentParseError(f"Invalid line item #{position + 1}", str(exc)) from exc
            blocks.append(Block(kind=BlockKind.CONTENT, payload=item, block_id=position))

        logger.debug(f"Built {len(blocks)} item blocks")
        return blocks

    def _node_to_block(self, node: ContentNode, block_id: int) -> Optional[Block]:
        if node.tag == TEXT_TAG:
            if not node.text.strip():
                return None
            # Loose top-level text renders as its own paragraph
            node = ContentNode(tag="p", children=(node,))
        if is_forced_break(node):
            return Block(kind=BlockKind.FORCED_BREAK, block_id=block_id)
        if FORCED_BREAK_CLASS in node.classes:
            logger.warning(f"Block {block_id} is marked as a page break but has content; keeping it as content")
        return Block(kind=BlockKind.CONTENT, payload=node, block_id=block_id)


def chunk_blocks(blocks: Sequence[Block], chunk_size: int) -> List[List[Block]]:
    """
    Group blocks into fixed-size chunks.

    An empty input still yields exactly one (empty) chunk so that a document
    always has at least one page.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    chunks = [list(blocks[start:start + chunk_size]) for start in range(0, len(blocks), chunk_size)]
    return chunks or [[]]
