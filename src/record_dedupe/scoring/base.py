"""Shared pieces of the per-entity field scorers.

Each scorer walks a fixed, ordered list of field comparisons. A comparison
that participates adds a credit (what the pair earned) and a weight (the
field's full exact-match credit) to a tally; the pair's score is the
weighted mean of those, as a 0-100 integer.
"""

from collections.abc import Sequence
from decimal import Decimal
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, Field

from record_dedupe.models import Record
from record_dedupe.values import round_half_up

RecordT = TypeVar("RecordT", bound=Record)

# (minimum similarity, credit factor, match reason)
FuzzyTier = tuple[int, float, str]
# (maximum percent difference, credit, match reason)
AmountTier = tuple[Decimal, float, str]

CENT = Decimal("0.01")


class Similarity(BaseModel, Generic[RecordT]):
    """Result of scoring one pair of records."""

    record_a: RecordT
    record_b: RecordT
    similarity_score: int = Field(ge=0, le=100)
    match_reasons: list[str] = Field(default_factory=list)


class RecordScorer(Protocol[RecordT]):
    """Anything that can score two records of one entity type.

    ``categories`` lists the match-type keywords in priority order; the last
    one is the fallback when no reason names a category.
    """

    entity_type: str
    categories: tuple[str, ...]

    def score(self, a: RecordT, b: RecordT) -> Similarity[RecordT]: ...


class FieldTally:
    """Accumulates participating field comparisons for one pair."""

    def __init__(self) -> None:
        self.credit = 0.0
        self.weight = 0.0
        self.reasons: list[str] = []

    def add(self, credit: float, weight: float, reason: str | None = None) -> None:
        self.credit += credit
        self.weight += weight
        if reason:
            self.reasons.append(reason)

    @property
    def score(self) -> int:
        if self.weight <= 0:
            return 0
        return min(100, max(0, round_half_up(100 * self.credit / self.weight)))


def fuzzy_credit(
    score: int,
    exact_credit: float,
    exact_reason: str,
    tiers: Sequence[FuzzyTier],
) -> tuple[float, str | None]:
    """Map a string similarity onto a field's credit tiers.

    Args:
        score: Similarity from 0-100 (100 only for identical strings)
        exact_credit: Credit for an identical match
        exact_reason: Reason recorded for an identical match
        tiers: Fuzzy tiers, highest minimum first; credit is ``score * factor``

    Returns:
        (credit, reason), with reason None when no tier was reached
    """
    if score == 100:
        return exact_credit, exact_reason
    for minimum, factor, reason in tiers:
        if score >= minimum:
            return score * factor, reason
    return 0.0, None


def amount_credit(
    a: Decimal,
    b: Decimal,
    exact: tuple[float, str],
    within_cent: tuple[float, str],
    tiers: Sequence[AmountTier],
) -> tuple[float, str] | None:
    """Map two amounts onto a field's credit tiers.

    The percent difference is measured against the average of the two
    amounts. Returns None when the amounts are too far apart (or average to
    zero), meaning the field does not participate.
    """
    if a == b:
        return exact
    difference = abs(a - b)
    if difference <= CENT:
        return within_cent

    average = abs((a + b) / 2)
    if average == 0:
        return None
    percent = difference / average * 100
    for maximum, credit, reason in tiers:
        if percent <= maximum:
            return credit, reason
    return None
