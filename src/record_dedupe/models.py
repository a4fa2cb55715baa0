"""Pydantic models for the business records being deduplicated.

Records are read-only value objects: the engine never changes them, it only
compares them and produces merged field sets for the caller to persist.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict

EntityType = Literal["contact", "order", "product"]

# Loose input types, parsed lazily by record_dedupe.values
Timestamp = datetime | date | str | None
Amount = Decimal | float | str | None


# ============================================================================
# Records
# ============================================================================


class Record(BaseModel):
    """Fields shared by every record type."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    created_at: Timestamp = None
    updated_at: Timestamp = None


class Contact(Record):
    """A person in the address book."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    notes: str | None = None


class Order(Record):
    """An order, with the contact name denormalized for comparison."""

    contact_id: str | None = None
    contact_name: str | None = None
    status: str | None = None
    total: Amount = None
    order_date: Timestamp = None
    notes: str | None = None


class Product(Record):
    """A catalog product."""

    name: str | None = None
    description: str | None = None
    price: Amount = None
    sku: str | None = None
    image_url: str | None = None
    data_sheet_url: str | None = None
    category_id: str | None = None
    is_active: bool | None = None


RECORD_MODELS: dict[str, type[Record]] = {
    "contact": Contact,
    "order": Order,
    "product": Product,
}


def record_model(entity_type: str) -> type[Record]:
    """Look up the record class for an entity type name.

    Raises:
        ValueError: If the entity type is unknown
    """
    try:
        return RECORD_MODELS[entity_type]
    except KeyError:
        raise ValueError(
            f"Unknown entity type '{entity_type}'. Expected one of: {', '.join(RECORD_MODELS)}"
        ) from None


# ============================================================================
# Merged records (no id, no updated_at)
# ============================================================================


class MergedContact(BaseModel):
    """Canonical contact fields to persist over the primary id."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    notes: str | None = None
    created_at: Timestamp = None


class MergedOrder(BaseModel):
    """Canonical order fields to persist over the primary id."""

    contact_id: str | None = None
    contact_name: str | None = None
    status: str | None = None
    total: Amount = None
    order_date: Timestamp = None
    notes: str | None = None
    created_at: Timestamp = None


class MergedProduct(BaseModel):
    """Canonical product fields to persist over the primary id."""

    name: str | None = None
    description: str | None = None
    price: Amount = None
    sku: str | None = None
    image_url: str | None = None
    data_sheet_url: str | None = None
    category_id: str | None = None
    is_active: bool | None = None
    created_at: Timestamp = None
