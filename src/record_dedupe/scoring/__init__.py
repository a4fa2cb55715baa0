"""Pairwise record scoring: string similarity plus per-entity field scorers."""

from record_dedupe.scoring.base import RecordScorer, Similarity
from record_dedupe.scoring.contact import ContactScorer
from record_dedupe.scoring.order import OrderScorer
from record_dedupe.scoring.product import ProductScorer
from record_dedupe.scoring.similarity import similarity

SCORERS: dict[str, RecordScorer] = {
    "contact": ContactScorer(),
    "order": OrderScorer(),
    "product": ProductScorer(),
}


def get_scorer(entity_type: str) -> RecordScorer:
    """Look up the scorer for an entity type name.

    Raises:
        ValueError: If the entity type is unknown
    """
    try:
        return SCORERS[entity_type]
    except KeyError:
        raise ValueError(
            f"Unknown entity type '{entity_type}'. Expected one of: {', '.join(SCORERS)}"
        ) from None


__all__ = [
    "ContactScorer",
    "OrderScorer",
    "ProductScorer",
    "RecordScorer",
    "SCORERS",
    "Similarity",
    "get_scorer",
    "similarity",
]
