"""
Pytest configuration for docpager
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

from docpager.config import PaginationSettings
from docpager.models import Document, DocumentMeta, DocumentType

from .helpers import capacity_with_usable


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Only show warnings and errors during tests
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as directory:
        yield Path(directory)


@pytest.fixture
def settings_1000():
    """Settings with a usable height of exactly 1000."""
    return PaginationSettings(capacity=capacity_with_usable(1000.0))


@pytest.fixture
def company_record():
    return {
        "name": "Acme Studio",
        "address": "1 Harbour St\nSydney",
        "email": "hello@acme.test",
        "abn": "12 345 678 901",
    }


@pytest.fixture
def customer_record():
    return {
        "name": "Jane Client",
        "company_name": "Client Co",
        "email": "jane@client.test",
        "address": "22 Market Rd",
    }


@pytest.fixture
def invoice_record(company_record, customer_record):
    return {
        "type": "Invoice",
        "doc_number": "INV-0042",
        "issue_date": "2024-05-01",
        "due_date": "2024-05-31",
        "customer": customer_record,
        "company": company_record,
        "subtotal": 1000.0,
        "tax": 10,
        "total": 1100.0,
        "status": "Sent",
        "notes": "Thank you for your business.",
        "items": [
            {"description": f"Item {index}", "quantity": 1, "price": 10.0}
            for index in range(1, 26)
        ],
    }


@pytest.fixture
def proposal_record(company_record, customer_record):
    return {
        "type": "Proposal",
        "doc_number": "PRO-7",
        "issue_date": "2024-05-01",
        "due_date": "2024-06-01",
        "customer": customer_record,
        "company": company_record,
        "status": "Draft",
        "content": "<h1>Website redesign</h1><p>Scope of work.</p><hr><p>Timeline.</p>",
    }


@pytest.fixture
def contract_meta():
    return DocumentMeta(type=DocumentType.CONTRACT, doc_number="CON-1")


@pytest.fixture
def empty_invoice():
    return Document(meta=DocumentMeta(type=DocumentType.INVOICE))
