"""
Paginator for block streams.

Greedy, single-pass, deterministic partition of a block stream into pages:
- forced breaks close the current page (never producing an empty one)
- a block that does not fit opens a new page
- a block taller than the page is placed alone and allowed to overflow
- an empty stream yields exactly one empty page
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..config import PageCapacity
from ..exceptions import MeasurementError
from ..models.block import Block
from ..models.page import Page
from ..parser.block_builder import chunk_blocks
from .size_oracle import SizeOracle

logger = logging.getLogger(__name__)


class Paginator:
    """
    Partitions block streams into fixed-capacity pages.

    Holds no state between passes; ``paginate`` is a pure function of the
    block stream, the capacity and the oracle. Heights left on blocks by an
    earlier pass are ignored.
    """

    def __init__(self, capacity: PageCapacity, oracle: SizeOracle):
        """
        Initialize paginator.

        Args:
            capacity: Page geometry; ``capacity.usable_height`` limits each page
            oracle: Size oracle used to measure content blocks
        """
        self.capacity = capacity
        self.oracle = oracle

    @property
    def usable_height(self) -> float:
        return self.capacity.usable_height

    def paginate(self, blocks: Sequence[Block]) -> List[Page]:
        """
        Partition a flow block stream into pages.

        Args:
            blocks: Ordered block stream (content and forced-break blocks)

        Returns:
            Ordered list of pages; forced breaks are consumed and never
            appear on a page
        """
        usable = self.usable_height
        partitions: List[List[Block]] = []
        current: List[Block] = []
        accumulated = 0.0

        for block in blocks:
            if block.is_forced_break:
                if current:
                    partitions.append(current)
                    current = []
                    accumulated = 0.0
                continue

            height = self.measure(block)

            if accumulated + height > usable and current:
                partitions.append(current)
                current = [block]
                accumulated = height
            else:
                current.append(block)
                accumulated += height

            if height > usable:
                logger.debug(
                    f"Block {block.block_id} ({height:.1f}) exceeds usable height {usable:.1f}; "
                    f"placed alone and allowed to overflow"
                )

        if current:
            partitions.append(current)

        pages = self._to_pages(partitions)
        logger.info(f"Paginated {len(blocks)} blocks into {len(pages)} pages")
        return pages

    def paginate_items(self, blocks: Sequence[Block], items_per_page: int) -> List[Page]:
        """
        Partition line-item blocks in fixed-size chunks.

        Rows are uniformly sized, so chunks are counted rather than measured.

        Args:
            blocks: Line-item blocks
            items_per_page: Maximum number of items per page

        Returns:
            Ordered list of pages (at least one)
        """
        pages = self._to_pages(chunk_blocks(blocks, items_per_page))
        logger.info(f"Chunked {len(blocks)} items into {len(pages)} pages ({items_per_page} per page)")
        return pages

    def measure(self, block: Block) -> float:
        """
        Height of a block under this paginator's oracle and capacity.

        Every call asks the oracle; ``block.measured_height`` only records the
        latest result. A block the oracle cannot measure counts as a full
        page, which puts it on a page of its own.
        """
        try:
            height = self.oracle.measure(block)
        except MeasurementError as exc:
            logger.warning(f"Could not measure block {block.block_id}, treating it as a full page: {exc}")
            height = self.usable_height
        block.measured_height = height
        return height

    @staticmethod
    def _to_pages(partitions: List[List[Block]]) -> List[Page]:
        if not partitions:
            partitions = [[]]
        page_count = len(partitions)
        return [
            Page(index=number, page_count=page_count, blocks=page_blocks)
            for number, page_blocks in enumerate(partitions, start=1)
        ]
