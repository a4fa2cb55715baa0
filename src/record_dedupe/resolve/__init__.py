"""Duplicate resolution: find, review and merge duplicate records.

Greedy anchor clustering over field scores, duplicate groups as YAML for
review, and smart field-level merges for confirmed groups.
"""

from record_dedupe.resolve.clustering import classify_match_type, cluster_records
from record_dedupe.resolve.engine import apply_merges, merge_group
from record_dedupe.resolve.merge import (
    smart_merge,
    smart_merge_contacts,
    smart_merge_orders,
    smart_merge_products,
)
from record_dedupe.resolve.models import DuplicateGroup, GroupFile, MergeResult, MergeResultFile
from record_dedupe.resolve.resolver import (
    find_contact_duplicates,
    find_duplicates,
    find_order_duplicates,
    find_product_duplicates,
    manual_groups,
)

__all__ = [
    "DuplicateGroup",
    "GroupFile",
    "MergeResult",
    "MergeResultFile",
    "apply_merges",
    "classify_match_type",
    "cluster_records",
    "find_contact_duplicates",
    "find_duplicates",
    "find_order_duplicates",
    "find_product_duplicates",
    "manual_groups",
    "merge_group",
    "smart_merge",
    "smart_merge_contacts",
    "smart_merge_orders",
    "smart_merge_products",
]
