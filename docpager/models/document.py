"""
Document metadata model.

Read-only description of the document being paginated: type, numbering,
parties, money totals and status. Supplied by the surrounding CRM and never
mutated by a pagination pass.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from ..exceptions import ContentParseError

logger = logging.getLogger(__name__)


class DocumentType(Enum):
    """Document families handled by the engine."""
    INVOICE = "Invoice"
    QUOTE = "Quote"
    PROPOSAL = "Proposal"
    CONTRACT = "Contract"
    SLA = "SLA"

    @classmethod
    def parse(cls, value: Union[str, "DocumentType"]) -> "DocumentType":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        raise ValueError(f"Unknown document type: {value!r}")

    @property
    def is_flow(self) -> bool:
        """Free-form rich content paginated by measured height."""
        return self in (DocumentType.PROPOSAL, DocumentType.CONTRACT, DocumentType.SLA)

    @property
    def is_tabular(self) -> bool:
        return not self.is_flow


class DocumentStatus(Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    SIGNED = "Signed"
    ACCEPTED = "Accepted"

    @classmethod
    def parse(cls, value: Union[str, "DocumentStatus", None]) -> "DocumentStatus":
        if value is None or value == "":
            return cls.DRAFT
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        logger.warning(f"Unknown document status {value!r}, treating as Draft")
        return cls.DRAFT


class DepositType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _to_float(value: Any, default: float = 0.0) -> float:
    if value in (None, ""):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class Customer:
    name: str = ""
    company_name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Customer":
        return cls(
            name=str(_pick(data, "name", default="")),
            company_name=_optional_text(_pick(data, "company_name", "companyName")),
            email=_optional_text(data.get("email")),
            address=_optional_text(data.get("address")),
        )


@dataclass(frozen=True, slots=True)
class CompanyInfo:
    name: str = ""
    address: Optional[str] = None
    email: Optional[str] = None
    abn: Optional[str] = None
    logo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompanyInfo":
        return cls(
            name=str(_pick(data, "name", "company_name", default="")),
            address=_optional_text(_pick(data, "address", "company_address")),
            email=_optional_text(_pick(data, "email", "company_email")),
            abn=_optional_text(_pick(data, "abn", "company_abn")),
            logo=_optional_text(_pick(data, "logo", "company_logo")),
        )


@dataclass(frozen=True, slots=True)
class LineItem:
    """Priced row of a tabular document."""
    description: str
    quantity: float
    unit_price: float

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LineItem":
        """
        Build a line item from a record.

        Args:
            data: Mapping with ``description``, ``quantity`` and one of
                ``unit_price``, ``unitPrice`` or ``price``

        Returns:
            LineItem

        Raises:
            ContentParseError: If the record is not a mapping or carries a
                non-numeric quantity or price
        """
        if not isinstance(data, Mapping):
            raise ContentParseError("Line item must be a mapping", type(data).__name__)
        price = _pick(data, "unit_price", "unitPrice", "price")
        quantity = data.get("quantity")
        try:
            quantity_value = float(quantity)
            price_value = float(price)
        except (TypeError, ValueError) as exc:
            raise ContentParseError(
                "Line item has a non-numeric quantity or price",
                f"quantity={quantity!r}, price={price!r}",
            ) from exc
        if math.isnan(quantity_value) or math.isnan(price_value):
            raise ContentParseError("Line item quantity or price is NaN")
        return cls(
            description=str(data.get("description") or ""),
            quantity=quantity_value,
            unit_price=price_value,
        )


@dataclass(frozen=True, slots=True)
class DocumentMeta:
    """Metadata consumed by the page composer."""
    type: DocumentType
    doc_number: str = ""
    issue_date: Optional[str] = None
    due_date: Optional[str] = None
    customer: Optional[Customer] = None
    company: CompanyInfo = field(default_factory=CompanyInfo)
    subtotal: float = 0.0
    tax_rate: float = 0.0
    total: float = 0.0
    deposit_amount: Optional[float] = None
    deposit_type: Optional[DepositType] = None
    status: DocumentStatus = DocumentStatus.DRAFT
    notes: Optional[str] = None
    signature_image: Optional[str] = None
    template_id: Optional[str] = None
    payment_link: Optional[str] = None

    @property
    def tax_amount(self) -> float:
        return self.subtotal * self.tax_rate / 100.0

    @property
    def has_deposit(self) -> bool:
        return bool(self.deposit_amount and self.deposit_amount > 0)

    @property
    def deposit_due(self) -> float:
        """Deposit in currency; percentage deposits apply to the total."""
        if not self.has_deposit:
            return 0.0
        if self.deposit_type is DepositType.PERCENTAGE:
            return self.total * (self.deposit_amount / 100.0)
        return float(self.deposit_amount)

    @property
    def balance_due(self) -> float:
        return self.total - self.deposit_due

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentMeta":
        """
        Build metadata from a document record.

        Accepts both snake_case and camelCase keys. Missing optional fields
        stay empty; only an unknown document type is rejected.
        """
        if not isinstance(data, Mapping):
            raise ContentParseError("Document metadata must be a mapping", type(data).__name__)
        try:
            doc_type = DocumentType.parse(_pick(data, "type", "doc_type", "docType", default=""))
        except ValueError as exc:
            raise ContentParseError("Invalid document type", str(exc)) from exc

        customer_data = data.get("customer")
        customer = Customer.from_dict(customer_data) if isinstance(customer_data, Mapping) else None
        company_data = _pick(data, "company", "company_info", "companyInfo", default={})
        company = CompanyInfo.from_dict(company_data) if isinstance(company_data, Mapping) else CompanyInfo()

        deposit_type = None
        raw_deposit_type = _pick(data, "deposit_type", "depositType")
        if raw_deposit_type:
            try:
                deposit_type = DepositType(str(raw_deposit_type).lower())
            except ValueError:
                logger.warning(f"Unknown deposit type {raw_deposit_type!r}, treating as fixed")
                deposit_type = DepositType.FIXED

        deposit_amount = _pick(data, "deposit_amount", "depositAmount")

        return cls(
            type=doc_type,
            doc_number=str(_pick(data, "doc_number", "docNumber", default="")),
            issue_date=_optional_text(_pick(data, "issue_date", "issueDate")),
            due_date=_optional_text(_pick(data, "due_date", "dueDate")),
            customer=customer,
            company=company,
            subtotal=_to_float(data.get("subtotal")),
            tax_rate=_to_float(_pick(data, "tax_rate", "taxRate", "tax")),
            total=_to_float(data.get("total")),
            deposit_amount=_to_float(deposit_amount) if deposit_amount is not None else None,
            deposit_type=deposit_type,
            status=DocumentStatus.parse(data.get("status")),
            notes=_optional_text(data.get("notes")),
            signature_image=_optional_text(
                _pick(data, "signature_image", "signatureImageDataUrl", "signature")
            ),
            template_id=_optional_text(_pick(data, "template_id", "templateId")),
            payment_link=_optional_text(
                _pick(data, "payment_link", "paymentLink", "stripe_payment_link")
            ),
        )


@dataclass(frozen=True, slots=True)
class Document:
    """A document record: metadata plus the raw content that seeds the block stream."""
    meta: DocumentMeta
    content: Any = None
    items: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        meta = DocumentMeta.from_dict(data)
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ContentParseError("items must be a list", type(items).__name__)
        return cls(meta=meta, content=data.get("content"), items=list(items))
