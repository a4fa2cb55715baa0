"""Shared test fixtures for record-dedupe."""

import tempfile
from pathlib import Path

import pytest

from record_dedupe.models import Contact, Order, Product


@pytest.fixture
def sample_contacts() -> list[Contact]:
    """Two near-duplicate contacts and one unrelated contact."""
    return [
        Contact(id="c1", name="John Doe", email="john@ex.com", phone="5551234567"),
        Contact(id="c2", name="Jon Doe", email="john@ex.com", phone=""),
        Contact(id="c3", name="Unrelated Person", email="", phone=""),
    ]


@pytest.fixture
def sparse_contacts() -> tuple[Contact, Contact]:
    """Complementary contacts where each fills the other's gaps."""
    primary = Contact(
        id="1",
        name="John Doe",
        email="",
        phone="555-1234",
        address="123 Main St",
        city="",
        state="CA",
        zip="90210",
        notes="",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )
    other = Contact(
        id="2",
        name="",
        email="john@example.com",
        phone="",
        address="",
        city="Los Angeles",
        state="",
        zip="",
        notes="VIP customer",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
    )
    return primary, other


@pytest.fixture
def sparse_products() -> tuple[Product, Product]:
    """A product and a more recently updated, mostly empty duplicate."""
    primary = Product(
        id="1",
        name="Solar Panel",
        description="",
        price=299.99,
        image_url="panel1.jpg",
        data_sheet_url="",
        category_id="cat1",
        sku="SP-001",
        is_active=True,
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )
    other = Product(
        id="2",
        name="",
        description="High efficiency solar panel",
        price=0,
        image_url="",
        data_sheet_url="datasheet.pdf",
        category_id="",
        sku="",
        is_active=False,
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
    )
    return primary, other


@pytest.fixture
def sparse_orders() -> tuple[Order, Order]:
    """An order and a more recently updated duplicate holding only notes."""
    primary = Order(
        id="1",
        contact_id="contact1",
        status="proposed",
        total=1500.00,
        order_date="2024-01-01",
        notes="",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )
    other = Order(
        id="2",
        contact_id="",
        status="",
        total=0,
        order_date="",
        notes="Rush order",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-02T00:00:00Z",
    )
    return primary, other


@pytest.fixture
def tmp_dir():
    """Temporary directory that cleans up after test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)
