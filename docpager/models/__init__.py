"""Data models for docpager."""

from .block import Block, BlockKind, ContentNode, TEXT_TAG
from .document import (
    CompanyInfo,
    Customer,
    DepositType,
    Document,
    DocumentMeta,
    DocumentStatus,
    DocumentType,
    LineItem,
)
from .page import (
    ComposedPage,
    FooterDecoration,
    HeaderDecoration,
    Page,
    PageKind,
    SignatureBlock,
    TotalsBreakdown,
    Watermark,
)

__all__ = [
    "Block",
    "BlockKind",
    "ContentNode",
    "TEXT_TAG",
    "CompanyInfo",
    "Customer",
    "DepositType",
    "Document",
    "DocumentMeta",
    "DocumentStatus",
    "DocumentType",
    "LineItem",
    "ComposedPage",
    "FooterDecoration",
    "HeaderDecoration",
    "Page",
    "PageKind",
    "SignatureBlock",
    "TotalsBreakdown",
    "Watermark",
]
