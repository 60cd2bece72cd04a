"""
Page composer - decides which decorations apply to which page.

Decisions depend only on (index, is_first, is_last, document metadata):
- header on the first page only
- footer (totals, notes, payment call to action) on the last page only
- status watermark on the first page only
- "Page N of M" caption on every content page
- signature block on an independent page appended after the content
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..config import PaginationSettings
from ..exceptions import CompositionError
from ..models.document import DepositType, DocumentMeta, DocumentStatus, DocumentType
from ..models.page import (
    ComposedPage,
    FooterDecoration,
    HeaderDecoration,
    Page,
    PageKind,
    SignatureBlock,
    TotalsBreakdown,
    Watermark,
)

logger = logging.getLogger(__name__)

SIGNATURE_CAPTION = "Signature Page"

WATERMARKS = {
    DocumentStatus.PAID: ("PAID", "#22c55e"),
    DocumentStatus.SIGNED: ("SIGNED", "#3b82f6"),
}


class PageComposer:
    """Assembles renderable pages from a page partition and document metadata."""

    def __init__(self, settings: Optional[PaginationSettings] = None):
        self.settings = settings or PaginationSettings()

    def compose(
        self,
        pages: Sequence[Page],
        meta: DocumentMeta,
        show_header: Optional[bool] = None,
        show_footer: Optional[bool] = None,
    ) -> List[ComposedPage]:
        """
        Decorate every page of a finished partition.

        Args:
            pages: Complete page partition (the page count must be final)
            meta: Document metadata
            show_header: Whether the caller wants a header (settings default)
            show_footer: Whether the caller wants a footer (settings default)

        Returns:
            Content pages followed by the signature page where the document
            type requires one
        """
        if show_header is None:
            show_header = self.settings.show_header
        if show_footer is None:
            show_footer = self.settings.show_footer

        self._check_partition(pages)

        composed = [self.compose_page(page, meta, show_header, show_footer) for page in pages]
        if self.settings.requires_signature(meta.type):
            composed.append(self.signature_page(meta))

        logger.debug(
            f"Composed {len(composed)} pages for {meta.type.value} {meta.doc_number or '(unnumbered)'}"
        )
        return composed

    @staticmethod
    def _check_partition(pages: Sequence[Page]) -> None:
        if not pages:
            raise CompositionError("Cannot compose an empty partition", "expected at least one page")
        total = len(pages)
        for position, page in enumerate(pages, start=1):
            if page.index != position or page.page_count != total:
                raise CompositionError(
                    "Page partition is incomplete",
                    f"page {page.index} of {page.page_count} at position {position} of {total}",
                )

    def compose_page(
        self,
        page: Page,
        meta: DocumentMeta,
        show_header: bool = True,
        show_footer: bool = True,
    ) -> ComposedPage:
        return ComposedPage(
            kind=PageKind.CONTENT,
            meta=meta,
            page=page,
            caption=self.caption(page),
            header=self.header(meta) if show_header and page.is_first else None,
            footer=self.footer(meta) if show_footer and page.is_last else None,
            watermark=self.watermark(meta) if page.is_first else None,
        )

    def signature_page(self, meta: DocumentMeta) -> ComposedPage:
        """Stand-alone final page carrying the signature block."""
        return ComposedPage(
            kind=PageKind.SIGNATURE,
            meta=meta,
            caption=SIGNATURE_CAPTION,
            signature=SignatureBlock(
                company_name=meta.company.name,
                customer_name=meta.customer.name if meta.customer else None,
                signature_image=meta.signature_image,
            ),
        )

    @staticmethod
    def caption(page: Page) -> str:
        return f"Page {page.index} of {page.page_count}"

    def header(self, meta: DocumentMeta) -> HeaderDecoration:
        if meta.type is DocumentType.QUOTE:
            due_label = "Valid To"
        elif meta.type.is_flow:
            due_label = "Valid Until"
        else:
            due_label = "Due Date"

        return HeaderDecoration(
            company=meta.company,
            document_type=meta.type,
            doc_number=meta.doc_number,
            customer=meta.customer,
            issue_date=meta.issue_date,
            due_date=meta.due_date,
            due_label=due_label,
            recipient_label="Prepared For" if meta.type.is_flow else "Bill To",
        )

    def footer(self, meta: DocumentMeta) -> FooterDecoration:
        totals = None
        if meta.type.is_tabular or meta.total > 0:
            totals = self.totals(meta)

        payment_link = None
        if (
            meta.type is DocumentType.INVOICE
            and meta.payment_link
            and meta.status is not DocumentStatus.PAID
        ):
            payment_link = meta.payment_link

        contact_line = None
        if meta.type.is_flow:
            parts = [part for part in (meta.company.name, meta.company.email) if part]
            contact_line = " • ".join(parts) or None

        return FooterDecoration(
            totals=totals,
            notes=meta.notes,
            payment_link=payment_link,
            contact_line=contact_line,
        )

    @staticmethod
    def totals(meta: DocumentMeta) -> TotalsBreakdown:
        if not meta.has_deposit:
            return TotalsBreakdown(
                subtotal=meta.subtotal,
                tax_rate=meta.tax_rate,
                tax_amount=meta.tax_amount,
                total=meta.total,
            )

        if meta.deposit_type is DepositType.PERCENTAGE:
            deposit_label = f"Deposit Required ({meta.deposit_amount:g}%)"
        else:
            deposit_label = "Deposit Required (Fixed)"
        return TotalsBreakdown(
            subtotal=meta.subtotal,
            tax_rate=meta.tax_rate,
            tax_amount=meta.tax_amount,
            total=meta.total,
            deposit_label=deposit_label,
            deposit_due=meta.deposit_due,
            balance_due=meta.balance_due,
        )

    @staticmethod
    def watermark(meta: DocumentMeta) -> Optional[Watermark]:
        stamp = WATERMARKS.get(meta.status)
        if stamp is None:
            return None
        text, color = stamp
        return Watermark(text=text, color=color)
