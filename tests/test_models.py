"""Tests for document, block and page models."""

import pytest

from docpager.exceptions import ContentParseError
from docpager.models import (
    Block,
    BlockKind,
    ContentNode,
    DepositType,
    Document,
    DocumentMeta,
    DocumentStatus,
    DocumentType,
    LineItem,
    Page,
    TEXT_TAG,
)

from .helpers import content_blocks, paragraph


class TestDocumentType:

    @pytest.mark.parametrize("value", ["Invoice", "invoice", " INVOICE ", DocumentType.INVOICE])
    def test_parse(self, value):
        assert DocumentType.parse(value) is DocumentType.INVOICE

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            DocumentType.parse("Receipt")

    def test_families(self):
        assert DocumentType.SLA.is_flow
        assert DocumentType.QUOTE.is_tabular
        assert not DocumentType.PROPOSAL.is_tabular


class TestDocumentStatus:

    def test_parse(self):
        assert DocumentStatus.parse("paid") is DocumentStatus.PAID
        assert DocumentStatus.parse(None) is DocumentStatus.DRAFT

    def test_unknown_status_is_draft(self):
        assert DocumentStatus.parse("Archived") is DocumentStatus.DRAFT


class TestLineItem:

    def test_amount(self):
        assert LineItem("Design", 3, 12.5).amount == pytest.approx(37.5)

    @pytest.mark.parametrize("key", ["unit_price", "unitPrice", "price"])
    def test_price_aliases(self, key):
        item = LineItem.from_dict({"description": "x", "quantity": 2, key: "4.5"})

        assert item.unit_price == 4.5
        assert item.quantity == 2.0

    @pytest.mark.parametrize(
        "record",
        [
            {"description": "x", "quantity": None, "price": 1},
            {"description": "x", "quantity": 1},
            {"description": "x", "quantity": "nan", "price": 1},
            "not a mapping",
        ],
    )
    def test_invalid(self, record):
        with pytest.raises(ContentParseError):
            LineItem.from_dict(record)


class TestDocumentMeta:

    def test_from_camel_case_record(self):
        meta = DocumentMeta.from_dict({
            "type": "Quote",
            "docNumber": "Q-9",
            "issueDate": "2024-01-01",
            "dueDate": "2024-02-01",
            "customer": {"name": "Jane", "companyName": "Client Co"},
            "company": {"name": "Acme"},
            "subtotal": "200",
            "taxRate": 10,
            "total": 220,
            "depositAmount": 50,
            "depositType": "fixed",
            "status": "Sent",
            "signatureImageDataUrl": "data:image/png;base64,AAAA",
            "templateId": "swiss",
            "stripe_payment_link": "https://pay.test/q",
        })

        assert meta.type is DocumentType.QUOTE
        assert meta.doc_number == "Q-9"
        assert meta.customer.company_name == "Client Co"
        assert meta.subtotal == 200.0
        assert meta.tax_amount == pytest.approx(20.0)
        assert meta.deposit_type is DepositType.FIXED
        assert meta.deposit_due == 50.0
        assert meta.balance_due == 170.0
        assert meta.signature_image.startswith("data:image/png")
        assert meta.template_id == "swiss"
        assert meta.payment_link == "https://pay.test/q"

    def test_sparse_record(self):
        meta = DocumentMeta.from_dict({"type": "Contract"})

        assert meta.customer is None
        assert meta.company.name == ""
        assert meta.notes is None
        assert meta.status is DocumentStatus.DRAFT
        assert not meta.has_deposit
        assert meta.deposit_due == 0.0
        assert meta.balance_due == 0.0

    def test_percentage_deposit_applies_to_total(self):
        meta = DocumentMeta(
            type=DocumentType.INVOICE,
            subtotal=1000,
            total=1100,
            deposit_amount=25,
            deposit_type=DepositType.PERCENTAGE,
        )

        assert meta.deposit_due == pytest.approx(275.0)
        assert meta.balance_due == pytest.approx(825.0)

    def test_unknown_type(self):
        with pytest.raises(ContentParseError):
            DocumentMeta.from_dict({"type": "Receipt"})

    def test_non_numeric_money_defaults_to_zero(self):
        assert DocumentMeta.from_dict({"type": "Invoice", "total": "lots"}).total == 0.0


class TestDocument:

    def test_from_dict(self):
        document = Document.from_dict({"type": "Invoice", "items": [{"description": "a", "quantity": 1, "price": 1}]})

        assert document.meta.type is DocumentType.INVOICE
        assert len(document.items) == 1
        assert document.content is None

    def test_items_must_be_a_list(self):
        with pytest.raises(ContentParseError):
            Document.from_dict({"type": "Invoice", "items": {"a": 1}})


class TestContentNode:

    def test_text_content_and_walk(self):
        node = ContentNode(
            tag="p",
            children=(
                ContentNode(tag=TEXT_TAG, text="a"),
                ContentNode(tag="br"),
                ContentNode(tag="em", children=(ContentNode(tag=TEXT_TAG, text="b"),)),
            ),
        )

        assert node.text_content() == "a\nb"
        assert [child.tag for child in node.iter_nodes()] == ["p", TEXT_TAG, "br", "em", TEXT_TAG]

    def test_attributes(self):
        node = ContentNode(tag="div", attrs=(("class", "page-break wide"), ("id", "x")))

        assert node.get_attr("id") == "x"
        assert node.get_attr("missing", "fallback") == "fallback"
        assert node.classes == ("page-break", "wide")


class TestBlockAndPage:

    def test_block_kind(self):
        assert Block(kind=BlockKind.FORCED_BREAK).is_forced_break
        assert Block(kind=BlockKind.CONTENT, payload=paragraph("x")).tag == "p"
        assert Block(kind=BlockKind.CONTENT, payload=LineItem("a", 1, 1)).tag is None

    def test_measured_height_is_not_part_of_equality(self):
        first = Block(kind=BlockKind.CONTENT, payload=paragraph("x"), block_id=1)
        second = Block(kind=BlockKind.CONTENT, payload=paragraph("x"), block_id=1, measured_height=10.0)

        assert first == second

    def test_page_views(self):
        blocks = content_blocks(2)
        blocks[0].measured_height = 30.0
        blocks[1].measured_height = 12.5
        page = Page(index=2, page_count=2, blocks=blocks)

        assert page.is_last and not page.is_first
        assert page.content_height == 42.5
        assert page.partition_key() == (0, 1)
        assert [node.tag for node in page.nodes] == ["p", "p"]
        assert page.items == []
