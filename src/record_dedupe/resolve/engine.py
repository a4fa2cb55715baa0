"""Merge engine: fold confirmed duplicate groups into merged records."""

import logging

from record_dedupe.models import Record
from record_dedupe.resolve.merge import more_recent, smart_merge
from record_dedupe.resolve.models import DuplicateGroup, GroupFile, MergeResult, MergeResultFile

logger = logging.getLogger(__name__)


def merge_group(group: DuplicateGroup, entity_type: str) -> MergeResult | None:
    """Merge every member of a group into its primary.

    Members are folded one at a time in group order. After each step the
    primary carries the merged fields and the later updated_at of the pair,
    so recency tiebreaks stay correct for the next member.

    Args:
        group: Group to merge (status is not checked here)
        entity_type: Entity type name recorded on the result

    Returns:
        MergeResult, or None if primary_id names no member of the group
    """
    primary = group.primary
    if primary is None:
        logger.warning(f"Primary {group.primary_id} is not a member of {group.id}, skipping merge")
        return None

    others = [m for m in group.members if m is not primary]
    current: Record = primary
    merged = None
    for other in others:
        merged = smart_merge(current, other)
        latest = more_recent(current, other)
        current = current.model_copy(update={**merged.model_dump(), "updated_at": latest.updated_at})

    return MergeResult(
        group_id=group.id,
        entity_type=entity_type,
        primary_id=primary.id,
        retired_ids=[m.id for m in others if m.id != primary.id],
        merged=merged.model_dump(mode="json") if merged is not None else {},
    )


def apply_merges(group_file: GroupFile) -> MergeResultFile:
    """Merge every CONFIRMED group in a group file.

    Args:
        group_file: GroupFile with reviewed groups (only CONFIRMED are merged)

    Returns:
        MergeResultFile with one result per merged group
    """
    confirmed = group_file.confirmed
    if not confirmed:
        logger.info("No confirmed groups to merge")
        return MergeResultFile()

    result_file = MergeResultFile()
    claimed: dict[str, str] = {}
    for group in confirmed:
        overlap = [m.id for m in group.members if m.id in claimed]
        if overlap:
            logger.warning(
                f"{group.id} shares record(s) {', '.join(overlap)} with an earlier merged group, skipping"
            )
            continue

        result = merge_group(group, group_file.entity_type)
        if result is None:
            continue
        for member in group.members:
            claimed[member.id] = group.id
        result_file.results.append(result)

    logger.info(f"Merged {len(result_file.results)} of {len(confirmed)} confirmed group(s)")
    return result_file
