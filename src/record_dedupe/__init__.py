"""record-dedupe: duplicate detection and merging for business records.

Scores contacts, orders and products field by field with edit-distance
similarity, clusters near-duplicates into reviewable groups, and merges
confirmed groups into one canonical record per group.
"""

__version__ = "0.1.0"

from record_dedupe.models import Contact, Order, Product
from record_dedupe.pipeline import run_apply_merges, run_compare, run_find
from record_dedupe.resolve import (
    DuplicateGroup,
    find_contact_duplicates,
    find_duplicates,
    find_order_duplicates,
    find_product_duplicates,
    manual_groups,
    smart_merge,
    smart_merge_contacts,
    smart_merge_orders,
    smart_merge_products,
)
from record_dedupe.scoring import Similarity, get_scorer, similarity

__all__ = [
    "__version__",
    "Contact",
    "DuplicateGroup",
    "Order",
    "Product",
    "Similarity",
    "find_contact_duplicates",
    "find_duplicates",
    "find_order_duplicates",
    "find_product_duplicates",
    "get_scorer",
    "manual_groups",
    "run_apply_merges",
    "run_compare",
    "run_find",
    "similarity",
    "smart_merge",
    "smart_merge_contacts",
    "smart_merge_orders",
    "smart_merge_products",
]
