"""
Page models.

``Page`` is a slice of the block stream produced by the paginator.
``ComposedPage`` is a page with its decorations decided, ready for a skin.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from .block import Block, ContentNode
from .document import Customer, CompanyInfo, DocumentMeta, DocumentType, LineItem


@dataclass(slots=True)
class Page:
    """Ordered run of content blocks on one physical sheet."""
    index: int
    page_count: int
    blocks: List[Block] = field(default_factory=list)

    @property
    def is_first(self) -> bool:
        return self.index == 1

    @property
    def is_last(self) -> bool:
        return self.index == self.page_count

    @property
    def is_empty(self) -> bool:
        return not self.blocks

    @property
    def payloads(self) -> List[Any]:
        return [block.payload for block in self.blocks]

    @property
    def items(self) -> List[LineItem]:
        """Line items on this page (tabular documents)."""
        return [block.payload for block in self.blocks if isinstance(block.payload, LineItem)]

    @property
    def nodes(self) -> List[ContentNode]:
        """Content nodes on this page (flow documents)."""
        return [block.payload for block in self.blocks if isinstance(block.payload, ContentNode)]

    @property
    def content_height(self) -> float:
        return sum(block.measured_height or 0.0 for block in self.blocks)

    def partition_key(self) -> Tuple[int, ...]:
        """Block ids on this page; equal keys mean an identical partition."""
        return tuple(block.block_id for block in self.blocks)


class PageKind(Enum):
    CONTENT = "content"
    SIGNATURE = "signature"


@dataclass(frozen=True, slots=True)
class HeaderDecoration:
    """First-page header: company identity, document identity, recipient and dates."""
    company: CompanyInfo
    document_type: DocumentType
    doc_number: str
    customer: Optional[Customer]
    issue_date: Optional[str]
    due_date: Optional[str]
    due_label: str
    recipient_label: str


@dataclass(frozen=True, slots=True)
class TotalsBreakdown:
    subtotal: float
    tax_rate: float
    tax_amount: float
    total: float
    deposit_label: Optional[str] = None
    deposit_due: Optional[float] = None
    balance_due: Optional[float] = None


@dataclass(frozen=True, slots=True)
class FooterDecoration:
    """Last-page footer: money breakdown, notes, payment call to action."""
    totals: Optional[TotalsBreakdown] = None
    notes: Optional[str] = None
    payment_link: Optional[str] = None
    contact_line: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Watermark:
    text: str
    color: str
    angle: float = -12.0
    opacity: float = 0.2


@dataclass(frozen=True, slots=True)
class SignatureBlock:
    company_name: str
    customer_name: Optional[str] = None
    signature_image: Optional[str] = None


@dataclass(slots=True)
class ComposedPage:
    """A page plus every decoration that applies to it."""
    kind: PageKind
    meta: DocumentMeta
    page: Optional[Page] = None
    caption: str = ""
    header: Optional[HeaderDecoration] = None
    footer: Optional[FooterDecoration] = None
    watermark: Optional[Watermark] = None
    signature: Optional[SignatureBlock] = None

    @property
    def index(self) -> Optional[int]:
        return self.page.index if self.page is not None else None

    @property
    def is_first(self) -> bool:
        return self.page is not None and self.page.is_first

    @property
    def is_last(self) -> bool:
        return self.page is not None and self.page.is_last

    @property
    def is_signature_page(self) -> bool:
        return self.kind is PageKind.SIGNATURE

    def decorations(self) -> List[str]:
        """Names of the decorations present on this page."""
        names = []
        if self.header is not None:
            names.append("header")
        if self.footer is not None:
            names.append("footer")
        if self.watermark is not None:
            names.append("watermark")
        if self.signature is not None:
            names.append("signature")
        return names
