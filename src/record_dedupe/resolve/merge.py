"""Field-level merge of two duplicate records into one canonical field set.

For every field the primary's non-blank value wins, then the other record's
non-blank value; when both are blank the more recently updated record's value
is kept. Contacts concatenate differing notes and keep the earliest
created_at. Booleans always follow the more recently updated record.
"""

import logging
from typing import Any

from record_dedupe.models import (
    Contact,
    MergedContact,
    MergedOrder,
    MergedProduct,
    Order,
    Product,
    Record,
)
from record_dedupe.values import is_blank, to_datetime

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = "\n\n"


def more_recent(primary: Record, other: Record) -> Record:
    """Return whichever record was updated later.

    A missing or unparseable updated_at counts as oldest; ties go to primary.
    """
    primary_updated = to_datetime(primary.updated_at)
    other_updated = to_datetime(other.updated_at)
    if other_updated is None:
        return primary
    if primary_updated is None or other_updated > primary_updated:
        return other
    return primary


def _pick(primary: Record, other: Record, latest: Record, field: str, zero_is_blank: bool = False) -> Any:
    primary_value = getattr(primary, field)
    if not is_blank(primary_value, zero_is_blank):
        return primary_value
    other_value = getattr(other, field)
    if not is_blank(other_value, zero_is_blank):
        return other_value
    return getattr(latest, field)


def _merge_notes(primary_notes: str | None, other_notes: str | None) -> str | None:
    if is_blank(primary_notes) and is_blank(other_notes):
        return None
    if is_blank(other_notes):
        return primary_notes
    if is_blank(primary_notes):
        return other_notes
    if primary_notes.strip() == other_notes.strip():
        return primary_notes
    return f"{primary_notes}{NOTES_SEPARATOR}{other_notes}"


def _earliest_created(primary: Record, other: Record) -> Any:
    primary_created = to_datetime(primary.created_at)
    other_created = to_datetime(other.created_at)
    if other_created is not None and (primary_created is None or other_created < primary_created):
        return other.created_at
    if primary_created is None and is_blank(primary.created_at):
        return other.created_at
    return primary.created_at


def smart_merge_contacts(primary: Contact, other: Contact) -> MergedContact:
    """Merge two contacts, keeping the primary's values where present.

    Args:
        primary: The contact that survives
        other: The duplicate being folded in

    Returns:
        Field set to persist over the primary's id
    """
    latest = more_recent(primary, other)
    fields = {
        name: _pick(primary, other, latest, name)
        for name in ("name", "email", "phone", "address", "city", "state", "zip")
    }
    return MergedContact(
        **fields,
        notes=_merge_notes(primary.notes, other.notes),
        created_at=_earliest_created(primary, other),
    )


def smart_merge_orders(primary: Order, other: Order) -> MergedOrder:
    """Merge two orders. A zero total counts as unset."""
    latest = more_recent(primary, other)
    fields = {
        name: _pick(primary, other, latest, name)
        for name in ("contact_id", "contact_name", "status", "order_date", "notes", "created_at")
    }
    return MergedOrder(**fields, total=_pick(primary, other, latest, "total", zero_is_blank=True))


def smart_merge_products(primary: Product, other: Product) -> MergedProduct:
    """Merge two products. A zero price counts as unset; is_active follows recency."""
    latest = more_recent(primary, other)
    fields = {
        name: _pick(primary, other, latest, name)
        for name in (
            "name", "description", "sku", "image_url", "data_sheet_url", "category_id", "created_at",
        )
    }
    return MergedProduct(
        **fields,
        price=_pick(primary, other, latest, "price", zero_is_blank=True),
        is_active=latest.is_active,
    )


_MERGERS = {
    Contact: smart_merge_contacts,
    Order: smart_merge_orders,
    Product: smart_merge_products,
}


def smart_merge(primary: Record, other: Record) -> MergedContact | MergedOrder | MergedProduct:
    """Dispatch to the merge rule for the records' type.

    Raises:
        TypeError: If the records are of different or unsupported types
    """
    if type(primary) is not type(other):
        raise TypeError(f"Cannot merge {type(primary).__name__} with {type(other).__name__}")
    merger = _MERGERS.get(type(primary))
    if merger is None:
        raise TypeError(f"No merge rule for {type(primary).__name__}")
    logger.debug(f"Merging {type(primary).__name__} {other.id} into {primary.id}")
    return merger(primary, other)
