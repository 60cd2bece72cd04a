"""
Page skins.

A skin turns one ``ComposedPage`` into the markup of one physical page. Skins
render whatever decorations the composer attached and never decide on their
own which page gets a header, a footer or a watermark.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from html import escape
from typing import List, Optional

from ..config import PageCapacity
from ..models.document import CompanyInfo, Customer, LineItem
from ..models.page import ComposedPage, FooterDecoration, HeaderDecoration, TotalsBreakdown
from .node_renderer import NodeRenderer
from .watermark_renderer import WatermarkRenderer

logger = logging.getLogger(__name__)


def format_money(value: float) -> str:
    return f"${value:.2f}"


def format_quantity(value: float) -> str:
    return f"{value:g}"


def _text(value: Optional[str]) -> str:
    return escape(value) if value else ""


@dataclass(frozen=True, slots=True)
class SkinTheme:
    """Visual parameters of a skin."""
    name: str
    font_family: str
    accent: str
    text_color: str = "#1e293b"
    muted_color: str = "#64748b"
    background: str = "#ffffff"
    table_header_background: Optional[str] = None
    table_header_color: str = "#ffffff"
    uppercase_title: bool = True


class PageSkin(ABC):
    """Base class of every page skin."""

    name = "base"

    def __init__(self, capacity: Optional[PageCapacity] = None):
        self.capacity = capacity or PageCapacity()
        self.node_renderer = NodeRenderer()
        self.watermark_renderer = WatermarkRenderer()

    @abstractmethod
    def render_page(self, page: ComposedPage) -> str:
        """Render one composed page to HTML."""

    def stylesheet(self) -> str:
        capacity = self.capacity
        padding = capacity.padding
        return f"""
        body {{ margin: 0; background: #e2e8f0; }}
        .page {{
            position: relative;
            box-sizing: border-box;
            width: {capacity.page_width:g}px;
            height: {capacity.page_height:g}px;
            padding: {padding.top:g}px {padding.right:g}px {padding.bottom:g}px {padding.left:g}px;
            margin: 32px auto;
            overflow: hidden;
            display: flex;
            flex-direction: column;
            box-shadow: 0 10px 25px rgba(15, 23, 42, 0.15);
        }}
        .page-body {{ flex-grow: 1; }}
        .page-footer {{ margin-top: auto; }}
        .page-caption {{
            position: absolute;
            bottom: 16px;
            right: 32px;
            font-size: 12px;
            color: #94a3b8;
        }}
        .signatures {{ margin-top: auto; padding-top: 48px; border-top: 1px solid #e2e8f0; }}
        .signature-grid {{ display: grid; grid-template-columns: 1fr 1fr; gap: 48px; }}
        .signature-slot {{ height: 96px; display: flex; flex-direction: column; justify-content: flex-end; position: relative; }}
        .signature-line {{ border-bottom: 1px solid #cbd5e1; margin-bottom: 8px; }}
        .signature-role {{ font-size: 12px; color: #64748b; text-transform: uppercase; letter-spacing: 0.05em; }}
        .signature-image {{ height: 64px; object-fit: contain; position: absolute; bottom: 8px; left: 0; }}
        .sign-here {{ position: absolute; bottom: 16px; left: 0; color: #cbd5e1; font-size: 36px; font-style: italic; }}
        .sign-here span {{ font-size: 14px; font-style: normal; margin-left: 8px; }}
        {self.watermark_renderer.get_watermark_css()}
        """

    # ------------------------------------------------------------------
    # Shared page parts
    # ------------------------------------------------------------------
    def _page(self, page: ComposedPage, inner: List[str]) -> str:
        kind = page.kind.value
        number = page.index if page.index is not None else ""
        return (
            f'<div class="page page-{kind} skin-{self.name}" data-page="{number}">'
            + "".join(part for part in inner if part)
            + f'<div class="page-caption">{escape(page.caption)}</div>'
            + "</div>"
        )

    def _logo(self, company: CompanyInfo) -> str:
        if not company.logo or not company.logo.lower().startswith(("data:image/", "https://", "http://")):
            return ""
        return f'<img class="company-logo" src="{escape(company.logo, quote=True)}" alt="Company Logo">'

    @staticmethod
    def _recipient(label: str, customer: Optional[Customer]) -> str:
        if customer is None:
            return ""
        lines = [f'<h3 class="label">{escape(label)}</h3>']
        lines.append(f'<p class="recipient-name">{_text(customer.name)}</p>')
        if customer.company_name:
            lines.append(f"<p>{escape(customer.company_name)}</p>")
        if customer.address:
            lines.append(f'<p class="address">{escape(customer.address)}</p>')
        if customer.email:
            lines.append(f"<p>{escape(customer.email)}</p>")
        return '<div class="recipient">' + "".join(lines) + "</div>"

    @staticmethod
    def _totals(totals: Optional[TotalsBreakdown]) -> str:
        if totals is None:
            return ""
        rows = [
            ("Subtotal", format_money(totals.subtotal), ""),
            (f"Tax ({totals.tax_rate:g}%)", format_money(totals.tax_amount), ""),
            ("Total", format_money(totals.total), "grand-total"),
        ]
        if totals.deposit_label is not None:
            rows.append((totals.deposit_label, format_money(totals.deposit_due or 0.0), "deposit"))
            rows.append(("Balance Due", format_money(totals.balance_due or 0.0), "balance-due"))
        body = "".join(
            f'<tr class="{css}"><td>{escape(label)}</td><td class="amount">{value}</td></tr>'
            for label, value, css in rows
        )
        return f'<table class="totals">{body}</table>'

    @staticmethod
    def _notes(notes: Optional[str]) -> str:
        if not notes:
            return ""
        return f'<div class="notes"><h3>Notes</h3><p>{escape(notes)}</p></div>'

    @staticmethod
    def _pay_now(link: Optional[str]) -> str:
        if not link or not link.lower().startswith(("https://", "http://")):
            return ""
        return (
            f'<div class="pay-now"><a href="{escape(link, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">Pay Now</a></div>'
        )

    def _signature_block(self, page: ComposedPage) -> str:
        signature = page.signature
        if signature is None:
            return ""
        if signature.signature_image and signature.signature_image.lower().startswith("data:image/"):
            mark = (
                f'<img class="signature-image" src="{escape(signature.signature_image, quote=True)}" '
                f'alt="Customer Signature">'
            )
        else:
            mark = '<div class="sign-here">x <span>Sign Here</span></div>'
        return (
            '<div class="page-body"></div>'
            '<section class="signatures"><h3>Signatures</h3><div class="signature-grid">'
            '<div><div class="signature-slot">'
            f'<p class="signer">{_text(signature.company_name)}</p><div class="signature-line"></div>'
            '</div><p class="signature-role">Authorized Signature</p></div>'
            f'<div><div class="signature-slot">{mark}'
            f'<p class="signer">{_text(signature.customer_name)}</p><div class="signature-line"></div>'
            '</div><p class="signature-role">Customer Signature</p></div>'
            "</div></section>"
        )


class HtmlSkin(PageSkin):
    """Themed skin for itemised documents (invoices and quotes)."""

    def __init__(self, theme: SkinTheme, capacity: Optional[PageCapacity] = None):
        super().__init__(capacity)
        self.theme = theme
        self.name = theme.name

    def stylesheet(self) -> str:
        theme = self.theme
        header_background = theme.table_header_background or theme.accent
        transform = "uppercase" if theme.uppercase_title else "none"
        return super().stylesheet() + f"""
        .skin-{theme.name} {{ background: {theme.background}; color: {theme.text_color}; font-family: {theme.font_family}; }}
        .skin-{theme.name} .doc-title {{ color: {theme.accent}; text-transform: {transform}; letter-spacing: 0.05em; margin: 0; }}
        .skin-{theme.name} .doc-header {{ display: flex; justify-content: space-between; padding-bottom: 32px; border-bottom: 2px solid {theme.accent}; }}
        .skin-{theme.name} .doc-parties {{ display: grid; grid-template-columns: 1fr 1fr; gap: 32px; margin: 32px 0; }}
        .skin-{theme.name} .label {{ font-size: 14px; text-transform: uppercase; color: {theme.muted_color}; }}
        .skin-{theme.name} .muted {{ color: {theme.muted_color}; }}
        .skin-{theme.name} table.items {{ width: 100%; border-collapse: collapse; text-align: left; }}
        .skin-{theme.name} table.items th {{ background: {header_background}; color: {theme.table_header_color}; padding: 12px; text-transform: uppercase; }}
        .skin-{theme.name} table.items td {{ padding: 12px; border-bottom: 1px solid #e2e8f0; }}
        .skin-{theme.name} .amount {{ text-align: right; }}
        .skin-{theme.name} table.totals {{ margin-left: auto; width: 50%; }}
        .skin-{theme.name} .grand-total td {{ font-weight: bold; font-size: 20px; color: {theme.accent}; border-top: 2px solid {theme.accent}; }}
        .skin-{theme.name} .pay-now {{ text-align: center; margin: 24px 0; }}
        .skin-{theme.name} .pay-now a {{ background: {theme.accent}; color: #ffffff; padding: 12px 32px; border-radius: 8px; text-decoration: none; }}
        """

    def render_page(self, page: ComposedPage) -> str:
        if page.is_signature_page:
            return self._page(page, [self._signature_block(page)])

        watermark = self.watermark_renderer.render_html(page.watermark)
        header = self._header(page.header) if page.header is not None else ""
        items = page.page.items if page.page is not None else []
        body = f'<section class="page-body">{self._items_table(items)}</section>'
        footer = self._footer(page.footer) if page.footer is not None else ""
        return self._page(page, [watermark, header, body, footer])

    def _header(self, header: HeaderDecoration) -> str:
        company = header.company
        company_lines = [self._logo(company), f"<h2>{_text(company.name)}</h2>"]
        if company.address:
            company_lines.append(f'<p class="muted address">{escape(company.address)}</p>')
        if company.abn:
            company_lines.append(f'<p class="muted">ABN: {escape(company.abn)}</p>')

        dates = []
        if header.issue_date:
            dates.append(f'<p><strong class="muted">Issue Date:</strong> {escape(header.issue_date)}</p>')
        if header.due_date:
            dates.append(
                f'<p><strong class="muted">{escape(header.due_label)}:</strong> {escape(header.due_date)}</p>'
            )

        return (
            '<header class="doc-header">'
            f'<div><h1 class="doc-title">{escape(header.document_type.value)}</h1>'
            f'<p class="muted doc-number">{_text(header.doc_number) or "..."}</p></div>'
            f'<div class="company">{"".join(company_lines)}</div>'
            "</header>"
            '<section class="doc-parties">'
            f"{self._recipient(header.recipient_label, header.customer)}"
            f'<div class="dates amount">{"".join(dates)}</div>'
            "</section>"
        )

    @staticmethod
    def _items_table(items: List[LineItem]) -> str:
        rows = "".join(
            "<tr>"
            f'<td class="description">{escape(item.description)}</td>'
            f'<td class="quantity">{format_quantity(item.quantity)}</td>'
            f'<td class="amount">{format_money(item.unit_price)}</td>'
            f'<td class="amount">{format_money(item.amount)}</td>'
            "</tr>"
            for item in items
        )
        return (
            '<table class="items"><thead><tr>'
            "<th>Description</th><th>Qty</th>"
            '<th class="amount">Unit Price</th><th class="amount">Total</th>'
            f"</tr></thead><tbody>{rows}</tbody></table>"
        )

    def _footer(self, footer: FooterDecoration) -> str:
        return (
            '<footer class="page-footer">'
            f"{self._pay_now(footer.payment_link)}"
            f"{self._totals(footer.totals)}"
            f"{self._notes(footer.notes)}"
            "</footer>"
        )


class DocumentSkin(PageSkin):
    """Skin for flowed rich-content documents (proposals, contracts, SLAs)."""

    name = "document"

    def stylesheet(self) -> str:
        return super().stylesheet() + """
        .skin-document { background: #ffffff; color: #334155; font-family: Helvetica, Arial, sans-serif; font-size: 16px; line-height: 1.75; }
        .skin-document .doc-header { display: flex; justify-content: space-between; padding-bottom: 24px; border-bottom: 1px solid #e2e8f0; margin-bottom: 24px; }
        .skin-document .doc-meta p { margin: 0; font-size: 14px; }
        .skin-document .label { font-size: 12px; text-transform: uppercase; color: #64748b; }
        .skin-document .content p { margin: 20px 0; }
        .skin-document .content h1 { font-size: 36px; line-height: 1.11; margin: 0 0 32px; }
        .skin-document .content h2 { font-size: 24px; line-height: 1.33; margin: 48px 0 24px; }
        .skin-document .content h3 { font-size: 20px; line-height: 1.6; margin: 32px 0 12px; }
        .skin-document .content ul, .skin-document .content ol { margin: 20px 0; padding-left: 26px; }
        .skin-document .content li { margin: 8px 0; }
        .skin-document .content table { width: 100%; margin: 32px 0; border-collapse: collapse; font-size: 14px; }
        .skin-document .content td, .skin-document .content th { padding: 8px 16px; border-bottom: 1px solid #e2e8f0; }
        .skin-document .content img { max-width: 100%; margin: 32px 0; }
        .skin-document .contact-line { text-align: center; font-size: 12px; color: #94a3b8; margin-top: 24px; }
        """

    def render_page(self, page: ComposedPage) -> str:
        if page.is_signature_page:
            return self._page(page, [self._signature_block(page)])

        watermark = self.watermark_renderer.render_html(page.watermark)
        header = self._header(page.header) if page.header is not None else ""
        nodes = page.page.nodes if page.page is not None else []
        body = f'<section class="page-body content">{self.node_renderer.render_nodes(nodes)}</section>'
        footer = self._footer(page.footer) if page.footer is not None else ""
        return self._page(page, [watermark, header, body, footer])

    def _header(self, header: HeaderDecoration) -> str:
        meta = []
        if header.doc_number:
            meta.append(f'<p><span class="label">Reference:</span> {escape(header.doc_number)}</p>')
        if header.issue_date:
            meta.append(f'<p><span class="label">Date:</span> {escape(header.issue_date)}</p>')
        if header.due_date:
            meta.append(
                f'<p><span class="label">{escape(header.due_label)}:</span> {escape(header.due_date)}</p>'
            )
        return (
            '<header class="doc-header">'
            f'<div>{self._logo(header.company)}<h2>{_text(header.company.name)}</h2>'
            f'<h1 class="doc-title">{escape(header.document_type.value)}</h1></div>'
            f'<div class="doc-meta">{"".join(meta)}</div>'
            "</header>"
            f"{self._recipient(header.recipient_label, header.customer)}"
        )

    def _footer(self, footer: FooterDecoration) -> str:
        contact = ""
        if footer.contact_line:
            contact = f'<p class="contact-line">{escape(footer.contact_line)}</p>'
        return (
            '<footer class="page-footer">'
            f"{self._totals(footer.totals)}"
            f"{self._notes(footer.notes)}"
            f"{contact}"
            "</footer>"
        )


# Named themes for itemised documents
THEMES = {
    theme.name: theme
    for theme in (
        SkinTheme("modern", "Helvetica, Arial, sans-serif", "#0ea5e9"),
        SkinTheme("classic", "Georgia, 'Times New Roman', serif", "#111827",
                  table_header_background="#f3f4f6", table_header_color="#111827", uppercase_title=False),
        SkinTheme("creative", "'Courier New', monospace", "#22d3ee", text_color="#ffffff",
                  muted_color="#94a3b8", background="#0f172a", table_header_background="#d946ef"),
        SkinTheme("minimalist", "Helvetica, Arial, sans-serif", "#9ca3af", text_color="#1f2937",
                  table_header_background="#ffffff", table_header_color="#6b7280"),
        SkinTheme("bold", "'Arial Black', Arial, sans-serif", "#dc2626", text_color="#111827"),
        SkinTheme("retro", "'Courier New', monospace", "#b45309", text_color="#422006",
                  background="#fef3c7", table_header_background="#92400e"),
        SkinTheme("corporate", "Arial, sans-serif", "#1e3a8a", table_header_background="#1e3a8a"),
        SkinTheme("elegant", "Garamond, Georgia, serif", "#7c2d12", uppercase_title=False,
                  table_header_background="#fafaf9", table_header_color="#7c2d12"),
        SkinTheme("friendly", "Verdana, sans-serif", "#16a34a", background="#f0fdf4", uppercase_title=False),
        SkinTheme("technical", "'Courier New', monospace", "#475569", text_color="#0f172a",
                  table_header_background="#0f172a"),
        SkinTheme("earthy", "Georgia, serif", "#65a30d", text_color="#3f3f1f", background="#fefce8"),
        SkinTheme("swiss", "Helvetica, Arial, sans-serif", "#ef4444", text_color="#000000",
                  table_header_background="#000000"),
    )
}
