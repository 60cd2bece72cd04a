"""Page capacity and pagination settings.

Example:
    from docpager.config import PageCapacity, PaginationSettings

    settings = PaginationSettings(
        capacity=PageCapacity(page_height=1123, safety_margin=20),
        items_per_page=12,
    )
    settings.capacity.usable_height  # 1023.0
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from .utils.geometry import Margins, Size
from .exceptions import ConfigurationError
from .models.document import DocumentType

logger = logging.getLogger(__name__)

# A4 at 96 dpi
A4_WIDTH = 794.0
A4_HEIGHT = 1123.0
PAGE_PADDING = 40.0
SAFETY_MARGIN = 20.0
ITEMS_PER_PAGE = 12

SIGNATURE_TYPES: FrozenSet[DocumentType] = frozenset(
    {DocumentType.PROPOSAL, DocumentType.CONTRACT, DocumentType.SLA}
)


def _positive_number(name: str, value: Any, *, allow_zero: bool = False) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for {name}", repr(value)) from exc
    if math.isnan(number) or math.isinf(number):
        raise ConfigurationError(f"Invalid value for {name}", repr(value))
    if number < 0 or (number == 0 and not allow_zero):
        raise ConfigurationError(f"{name} must be positive", repr(value))
    return number


@dataclass(slots=True)
class PageCapacity:
    """Fixed page geometry used for every pagination pass."""

    page_width: float = A4_WIDTH
    page_height: float = A4_HEIGHT
    padding: Margins = field(default_factory=lambda: Margins.uniform(PAGE_PADDING))
    safety_margin: float = SAFETY_MARGIN

    def __post_init__(self) -> None:
        self.page_width = _positive_number("page_width", self.page_width)
        self.page_height = _positive_number("page_height", self.page_height)
        self.safety_margin = _positive_number("safety_margin", self.safety_margin, allow_zero=True)
        if self.usable_height <= 0:
            raise ConfigurationError(
                "Usable page height must be positive",
                f"page_height={self.page_height}, padding={self.padding.vertical}, "
                f"safety_margin={self.safety_margin}",
            )
        if self.content_width <= 0:
            raise ConfigurationError(
                "Content width must be positive",
                f"page_width={self.page_width}, padding={self.padding.horizontal}",
            )

    @property
    def page_size(self) -> Size:
        return Size(self.page_width, self.page_height)

    @property
    def content_width(self) -> float:
        """Width available to content blocks."""
        return self.page_width - self.padding.horizontal

    @property
    def usable_height(self) -> float:
        """Height available to content blocks, safety margin already removed."""
        return self.page_height - self.padding.vertical - self.safety_margin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageCapacity":
        padding = data.get("padding", PAGE_PADDING)
        if isinstance(padding, Mapping):
            margins = Margins(
                top=_positive_number("padding.top", padding.get("top", PAGE_PADDING), allow_zero=True),
                bottom=_positive_number("padding.bottom", padding.get("bottom", PAGE_PADDING), allow_zero=True),
                left=_positive_number("padding.left", padding.get("left", PAGE_PADDING), allow_zero=True),
                right=_positive_number("padding.right", padding.get("right", PAGE_PADDING), allow_zero=True),
            )
        else:
            margins = Margins.uniform(_positive_number("padding", padding, allow_zero=True))
        return cls(
            page_width=data.get("page_width", A4_WIDTH),
            page_height=data.get("page_height", A4_HEIGHT),
            padding=margins,
            safety_margin=data.get("safety_margin", SAFETY_MARGIN),
        )


@dataclass(slots=True)
class PaginationSettings:
    """Settings shared by the paginator, the composer and the dispatcher."""

    capacity: PageCapacity = field(default_factory=PageCapacity)
    items_per_page: int = ITEMS_PER_PAGE
    signature_types: FrozenSet[DocumentType] = SIGNATURE_TYPES
    show_header: bool = True
    show_footer: bool = True
    default_template: str = "modern"

    def __post_init__(self) -> None:
        if isinstance(self.items_per_page, bool) or not isinstance(self.items_per_page, int):
            raise ConfigurationError("items_per_page must be an integer", repr(self.items_per_page))
        if self.items_per_page < 1:
            raise ConfigurationError("items_per_page must be at least 1", repr(self.items_per_page))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaginationSettings":
        """
        Build settings from a plain mapping (e.g. a parsed JSON file).

        Args:
            data: Mapping with optional ``capacity``, ``items_per_page``,
                ``signature_types``, ``show_header``, ``show_footer`` and
                ``default_template`` keys

        Returns:
            PaginationSettings instance
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Settings must be a mapping", type(data).__name__)

        kwargs: Dict[str, Any] = {}
        if "capacity" in data:
            capacity = data["capacity"]
            if not isinstance(capacity, Mapping):
                raise ConfigurationError("capacity must be a mapping", type(capacity).__name__)
            kwargs["capacity"] = PageCapacity.from_dict(capacity)
        if "items_per_page" in data:
            kwargs["items_per_page"] = data["items_per_page"]
        if "signature_types" in data:
            try:
                kwargs["signature_types"] = frozenset(
                    DocumentType.parse(value) for value in data["signature_types"]
                )
            except (TypeError, ValueError) as exc:
                raise ConfigurationError("Invalid signature_types", str(exc)) from exc
        for key in ("show_header", "show_footer"):
            if key in data:
                kwargs[key] = bool(data[key])
        if "default_template" in data:
            kwargs["default_template"] = str(data["default_template"]).lower()

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PaginationSettings":
        config_path = Path(path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigurationError("Settings file not found", str(config_path)) from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError("Settings file is not valid JSON", f"{config_path}: {exc}") from exc

        settings = cls.from_dict(data)
        logger.debug(f"Loaded pagination settings from {config_path}")
        return settings

    def requires_signature(self, document_type: Optional[DocumentType]) -> bool:
        return document_type in self.signature_types
