"""
Pagination pipeline - main entry point of a pagination pass.

Example:
    from docpager.engine.pipeline import PaginationPipeline
    from docpager.models import Document

    pipeline = PaginationPipeline()
    result = pipeline.process(Document.from_dict(record))
    for page in result.pages:
        print(page.caption, page.decorations())

Flow:
1. Document -> BlockStreamBuilder -> blocks
2. blocks -> Paginator (SizeOracle) -> pages
3. pages -> PageComposer -> composed pages
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..config import PaginationSettings
from ..exceptions import ContentParseError, PaginationError
from ..models.document import Document
from ..models.page import ComposedPage, Page
from ..parser.block_builder import BlockStreamBuilder
from .composer import PageComposer
from .paginator import Paginator
from .size_oracle import SizeOracle, TextMetricsSizeOracle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PaginationResult:
    """Output of one pass: the partition and the composed pages."""
    document: Document
    partition: List[Page] = field(default_factory=list)
    pages: List[ComposedPage] = field(default_factory=list)

    @property
    def content_page_count(self) -> int:
        return len(self.partition)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def summary(self) -> Dict[str, Any]:
        return {
            "document_type": self.document.meta.type.value,
            "doc_number": self.document.meta.doc_number,
            "content_pages": self.content_page_count,
            "total_pages": self.page_count,
            "pages": [
                {
                    "caption": page.caption,
                    "kind": page.kind.value,
                    "blocks": len(page.page.blocks) if page.page is not None else 0,
                    "decorations": page.decorations(),
                }
                for page in self.pages
            ],
        }


class PaginationPipeline:
    """
    Runs Block Stream Builder -> Paginator -> Page Composer in one blocking pass.

    Each call builds a fresh block stream; nothing is shared between passes
    or between documents.
    """

    def __init__(self, settings: Optional[PaginationSettings] = None, oracle: Optional[SizeOracle] = None):
        """
        Args:
            settings: Page capacity and pagination settings
            oracle: Size oracle for flow documents (font metrics by default)
        """
        self.settings = settings or PaginationSettings()
        self.oracle = oracle or TextMetricsSizeOracle(self.settings.capacity.content_width)
        self.builder = BlockStreamBuilder()
        self.paginator = Paginator(self.settings.capacity, self.oracle)
        self.composer = PageComposer(self.settings)

    def process(
        self,
        document: Document,
        show_header: Optional[bool] = None,
        show_footer: Optional[bool] = None,
    ) -> PaginationResult:
        """
        Paginate and compose a document.

        Args:
            document: Document record
            show_header: Whether to render the first-page header
            show_footer: Whether to render the last-page footer

        Returns:
            PaginationResult
        """
        blocks = self.builder.build(document)
        if document.meta.type.is_flow:
            partition = self.paginator.paginate(blocks)
        else:
            partition = self.paginator.paginate_items(blocks, self.settings.items_per_page)

        pages = self.composer.compose(partition, document.meta, show_header, show_footer)
        return PaginationResult(document=document, partition=partition, pages=pages)

    def process_dict(self, data: Mapping[str, Any], **kwargs: Any) -> PaginationResult:
        return self.process(Document.from_dict(data), **kwargs)


class PaginationSession:
    """
    Holds the page set currently on display for one document view.

    A successful pass replaces the page set as a whole; a failed pass leaves
    the previous page set in place and surfaces the error to the caller.
    """

    def __init__(self, pipeline: Optional[PaginationPipeline] = None):
        self.pipeline = pipeline or PaginationPipeline()
        self.result: Optional[PaginationResult] = None
        self.last_error: Optional[Exception] = None

    @property
    def pages(self) -> List[ComposedPage]:
        return list(self.result.pages) if self.result is not None else []

    def refresh(self, document: Document, **kwargs: Any) -> PaginationResult:
        """
        Re-run the whole pagination for changed content.

        Raises:
            ContentParseError: Content could not be parsed into blocks
            PaginationError: Any other failure inside the pass
        """
        try:
            result = self.pipeline.process(document, **kwargs)
        except ContentParseError as exc:
            self.last_error = exc
            logger.error(f"Content could not be parsed, keeping previous pages: {exc}")
            raise
        except Exception as exc:
            self.last_error = exc
            logger.exception("Pagination pass failed, keeping previous pages")
            raise PaginationError("Pagination pass failed", str(exc)) from exc

        self.result = result
        self.last_error = None
        return result
