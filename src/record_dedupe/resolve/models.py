"""Pydantic models for duplicate groups and merge results.

Two files flow through review:
  1. duplicate_groups.yaml: clusterer proposes groups, user confirms/rejects
  2. merge_results.yaml: merged field sets for confirmed groups
"""

from typing import Any, Generic, Literal

from pydantic import BaseModel, Field

from record_dedupe.models import EntityType
from record_dedupe.scoring.base import RecordT

StatusType = Literal["DRAFT", "CONFIRMED", "REJECTED"]


# ============================================================================
# Duplicate Group Models
# ============================================================================


class DuplicateGroup(BaseModel, Generic[RecordT]):
    """Records believed to describe the same real-world entity.

    ``similarity_score`` is the highest anchor-to-member score seen while the
    group was built. ``primary_id`` picks the record that survives a merge;
    when unset the first member is primary.
    """

    id: str
    members: list[RecordT] = Field(min_length=2)
    similarity_score: int = Field(default=0, ge=0, le=100)
    match_type: str
    status: StatusType = "DRAFT"
    primary_id: str | None = None

    @property
    def primary(self) -> RecordT | None:
        """The surviving record, or None if primary_id names no member."""
        if self.primary_id is None:
            return self.members[0]
        for member in self.members:
            if member.id == self.primary_id:
                return member
        return None


class GroupFile(BaseModel, Generic[RecordT]):
    """Top-level model for duplicate_groups.yaml."""

    entity_type: EntityType
    threshold: int = 70
    groups: list[DuplicateGroup[RecordT]] = Field(default_factory=list)

    @property
    def confirmed(self) -> list[DuplicateGroup[RecordT]]:
        return [g for g in self.groups if g.status == "CONFIRMED"]

    @property
    def draft(self) -> list[DuplicateGroup[RecordT]]:
        return [g for g in self.groups if g.status == "DRAFT"]

    @property
    def rejected(self) -> list[DuplicateGroup[RecordT]]:
        return [g for g in self.groups if g.status == "REJECTED"]


# ============================================================================
# Merge Result Models
# ============================================================================


class MergeResult(BaseModel):
    """Merged field set for one confirmed group.

    The caller persists ``merged`` over ``primary_id`` and retires every id in
    ``retired_ids`` (re-pointing any references to the primary).
    """

    group_id: str
    entity_type: EntityType
    primary_id: str
    retired_ids: list[str] = Field(default_factory=list)
    merged: dict[str, Any] = Field(default_factory=dict)


class MergeResultFile(BaseModel):
    """Top-level model for merge_results.yaml."""

    results: list[MergeResult] = Field(default_factory=list)
