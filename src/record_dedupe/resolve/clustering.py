"""Greedy anchor clustering of scored records into duplicate groups.

Each not-yet-grouped record becomes an anchor and collects every later
ungrouped record that scores at or above the threshold against it. Members
are only ever compared with the anchor, never with each other, so a group is
a star around its first record rather than a fully connected cluster.
"""

import logging
from collections.abc import Iterable, Sequence

from record_dedupe.resolve.models import DuplicateGroup
from record_dedupe.scoring.base import RecordScorer, RecordT

logger = logging.getLogger(__name__)


def classify_match_type(reasons: Iterable[str], categories: Sequence[str]) -> str:
    """Derive a group's match type from the reasons its pairs matched on.

    Args:
        reasons: Match reasons from every qualifying pair in the group
        categories: Category keywords for the entity type, highest priority first

    Returns:
        "multiple" if reasons mention more than one category, the single
        category if exactly one, otherwise the lowest-priority category
    """
    lowered = [reason.lower() for reason in reasons]
    matched = [c for c in categories if any(c in reason for reason in lowered)]
    if len(matched) > 1:
        return "multiple"
    if matched:
        return matched[0]
    return categories[-1]


def cluster_records(
    records: Sequence[RecordT],
    scorer: RecordScorer[RecordT],
    threshold: int = 70,
) -> list[DuplicateGroup[RecordT]]:
    """Partition records into duplicate groups.

    Args:
        records: Records of one entity type, in the order to anchor them
        scorer: Pairwise scorer for that entity type
        threshold: Minimum score (inclusive) for a record to join a group

    Returns:
        Groups of two or more records, highest score first
    """
    if len(records) < 2:
        return []

    model = type(records[0])
    groups: list[DuplicateGroup[RecordT]] = []
    processed: set[int] = set()

    for i, anchor in enumerate(records):
        if i in processed:
            continue

        member_indexes = [i]
        reasons: list[str] = []
        max_score = 0

        for j in range(i + 1, len(records)):
            if j in processed:
                continue
            result = scorer.score(anchor, records[j])
            if result.similarity_score >= threshold:
                member_indexes.append(j)
                reasons.extend(result.match_reasons)
                max_score = max(max_score, result.similarity_score)

        if len(member_indexes) < 2:
            continue

        processed.update(member_indexes)
        group = DuplicateGroup[model](
            id=f"group-{len(groups) + 1}",
            members=[records[k] for k in member_indexes],
            similarity_score=max_score,
            match_type=classify_match_type(reasons, scorer.categories),
        )
        logger.debug(
            f"{group.id}: anchor {anchor.id} with {len(member_indexes) - 1} match(es), "
            f"score {max_score}, type {group.match_type}"
        )
        groups.append(group)

    return sorted(groups, key=lambda g: g.similarity_score, reverse=True)
