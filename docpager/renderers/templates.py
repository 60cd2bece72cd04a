"""
Template dispatcher.

Picks the page skin for a document and renders a composed page sequence into
one HTML document.

Example:
    dispatcher = TemplateDispatcher()
    skin = dispatcher.select(DocumentType.INVOICE, "classic")
    html = dispatcher.render_document(result.pages, skin)
"""

from __future__ import annotations

import logging
from html import escape
from typing import Dict, List, Optional, Sequence, Union

from ..config import PaginationSettings
from ..exceptions import TemplateError
from ..models.document import DocumentType
from ..models.page import ComposedPage
from .skins import THEMES, DocumentSkin, HtmlSkin, PageSkin, SkinTheme

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = "modern"


class TemplateDispatcher:
    """Registry of page skins keyed by template id."""

    def __init__(self, settings: Optional[PaginationSettings] = None):
        self.settings = settings or PaginationSettings()
        capacity = self.settings.capacity
        self._skins: Dict[str, PageSkin] = {
            name: HtmlSkin(theme, capacity) for name, theme in THEMES.items()
        }
        self._document_skin = DocumentSkin(capacity)

        default = self.settings.default_template
        if default not in self._skins:
            logger.warning(f"Unknown default template {default!r}, using {FALLBACK_TEMPLATE!r}")
            default = FALLBACK_TEMPLATE
        self.default_template = default

    @property
    def template_ids(self) -> List[str]:
        return sorted(self._skins)

    def register(self, theme: SkinTheme) -> HtmlSkin:
        """Register (or replace) a themed skin."""
        if not theme.name or theme.name == DocumentSkin.name:
            raise TemplateError("Invalid template id", repr(theme.name))
        skin = HtmlSkin(theme, self.settings.capacity)
        self._skins[theme.name] = skin
        return skin

    def select(self, document_type: Union[DocumentType, str], template_id: Optional[str] = None) -> PageSkin:
        """
        Pick the skin for a document.

        Args:
            document_type: Document type
            template_id: Requested template id (itemised documents only)

        Returns:
            Flow documents always get the document skin; itemised documents get
            the requested skin, or the default one when the id is unknown
        """
        try:
            doc_type = DocumentType.parse(document_type)
        except ValueError as exc:
            raise TemplateError("Unknown document type", str(exc)) from exc

        if doc_type.is_flow:
            return self._document_skin

        key = (template_id or "").strip().lower()
        skin = self._skins.get(key)
        if skin is None:
            if key:
                logger.debug(f"Template {template_id!r} not registered, using {self.default_template!r}")
            skin = self._skins[self.default_template]
        return skin

    def render_document(
        self,
        pages: Sequence[ComposedPage],
        skin: PageSkin,
        title: Optional[str] = None,
    ) -> str:
        """
        Render the full page sequence as a standalone HTML document.

        Args:
            pages: Composed pages in order
            skin: Skin returned by ``select``
            title: Document title for ``<head>``

        Returns:
            HTML string
        """
        if not pages:
            raise TemplateError("Nothing to render", "page sequence is empty")

        if title is None:
            meta = pages[0].meta
            title = " ".join(part for part in (meta.type.value, meta.doc_number) if part)

        body = "\n".join(skin.render_page(page) for page in pages)
        logger.info(f"Rendered {len(pages)} pages with skin {skin.name!r}")
        return "\n".join(
            [
                "<!DOCTYPE html>",
                '<html lang="en">',
                "<head>",
                '<meta charset="utf-8" />',
                f"<title>{escape(title)}</title>",
                f"<style>{skin.stylesheet()}</style>",
                "</head>",
                "<body>",
                body,
                "</body>",
                "</html>",
            ]
        )
