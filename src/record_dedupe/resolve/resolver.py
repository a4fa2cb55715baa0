"""Duplicate-finding entry points per entity type, plus manual pairing.

Callers hand in an already-selected, in-memory list of records. Clustering is
quadratic in the list size, so callers should bound the selection (a page of
results or a user's pick), not pass an entire table.
"""

import logging
from collections.abc import Sequence

from record_dedupe.models import Contact, Order, Product, Record
from record_dedupe.resolve.clustering import cluster_records
from record_dedupe.resolve.models import DuplicateGroup
from record_dedupe.scoring import get_scorer

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 70


def find_duplicates(
    records: Sequence[Record],
    entity_type: str,
    threshold: int = DEFAULT_THRESHOLD,
    manual_fallback: bool = False,
) -> list[DuplicateGroup]:
    """Find duplicate groups among records of one entity type.

    Args:
        records: Records of the given type
        entity_type: "contact", "order" or "product"
        threshold: Minimum score (0-100, inclusive) to group two records
        manual_fallback: Pair the selection up consecutively when nothing
            reaches the threshold

    Returns:
        Duplicate groups, highest score first (empty for fewer than 2 records)

    Raises:
        ValueError: If the entity type is unknown
    """
    scorer = get_scorer(entity_type)
    groups = cluster_records(records, scorer, threshold)
    logger.info(
        f"Found {len(groups)} duplicate group(s) among {len(records)} {entity_type} record(s) "
        f"at threshold {threshold}"
    )

    if not groups and manual_fallback:
        groups = manual_groups(records)
        if groups:
            logger.info(f"No automatic matches; built {len(groups)} manual group(s)")
    return groups


def find_contact_duplicates(
    contacts: Sequence[Contact], threshold: int = DEFAULT_THRESHOLD
) -> list[DuplicateGroup[Contact]]:
    """Find duplicate contacts."""
    return find_duplicates(contacts, "contact", threshold)


def find_order_duplicates(
    orders: Sequence[Order], threshold: int = DEFAULT_THRESHOLD
) -> list[DuplicateGroup[Order]]:
    """Find duplicate orders."""
    return find_duplicates(orders, "order", threshold)


def find_product_duplicates(
    products: Sequence[Product], threshold: int = DEFAULT_THRESHOLD
) -> list[DuplicateGroup[Product]]:
    """Find duplicate products."""
    return find_duplicates(products, "product", threshold)


def manual_groups(records: Sequence[Record]) -> list[DuplicateGroup]:
    """Group a user's selection into consecutive pairs without scoring.

    An odd record left over at the end joins the last pair.

    Args:
        records: The selected records, in selection order

    Returns:
        Groups with match type "manual" and score 0 (empty for fewer than 2)
    """
    if len(records) < 2:
        return []

    model = type(records[0])
    chunks = [list(records[i:i + 2]) for i in range(0, len(records) - 1, 2)]
    if len(records) % 2:
        chunks[-1].append(records[-1])

    return [
        DuplicateGroup[model](
            id=f"manual-group-{n}",
            members=members,
            similarity_score=0,
            match_type="manual",
        )
        for n, members in enumerate(chunks, start=1)
    ]
