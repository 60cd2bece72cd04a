"""
docpager - deterministic pagination of business documents.

Splits invoices and quotes (line items) and proposals, contracts and SLAs
(rich content) into fixed-size pages, decorates each page with header,
footer, watermark and signature blocks, and renders the result to HTML.

Example:
    from docpager import Document, PaginationPipeline

    result = PaginationPipeline().process(Document.from_dict(record))
    print([page.caption for page in result.pages])
"""

__version__ = "0.1.0"

from .config import PageCapacity, PaginationSettings
from .engine import (
    PageComposer,
    PaginationPipeline,
    PaginationResult,
    PaginationSession,
    Paginator,
    SizeOracle,
    StaticSizeOracle,
    TextMetricsSizeOracle,
)
from .exceptions import (
    CompositionError,
    ConfigurationError,
    ContentParseError,
    DocPagerError,
    MeasurementError,
    PaginationError,
    TemplateError,
)
from .models import (
    Block,
    BlockKind,
    ComposedPage,
    ContentNode,
    Document,
    DocumentMeta,
    DocumentStatus,
    DocumentType,
    LineItem,
    Page,
)
from .parser import BlockStreamBuilder
from .renderers import TemplateDispatcher

__all__ = [
    "__version__",
    "Block",
    "BlockKind",
    "BlockStreamBuilder",
    "ComposedPage",
    "CompositionError",
    "ConfigurationError",
    "ContentNode",
    "ContentParseError",
    "DocPagerError",
    "Document",
    "DocumentMeta",
    "DocumentStatus",
    "DocumentType",
    "LineItem",
    "MeasurementError",
    "Page",
    "PageCapacity",
    "PageComposer",
    "PaginationError",
    "PaginationPipeline",
    "PaginationResult",
    "PaginationSession",
    "PaginationSettings",
    "Paginator",
    "SizeOracle",
    "StaticSizeOracle",
    "TemplateDispatcher",
    "TemplateError",
]
