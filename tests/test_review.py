"""Tests for the interactive duplicate group reviewer."""

from unittest.mock import patch

from record_dedupe.models import Contact, Order
from record_dedupe.resolve.models import DuplicateGroup, GroupFile
from record_dedupe.resolve.reviewer import review_groups


class TestReviewGroups:
    """Test interactive group review (with mocked input)."""

    def _make_group_file(self, scores=(80, 85, 90)) -> GroupFile:
        """Create a GroupFile with one DRAFT group per score."""
        groups = [
            DuplicateGroup[Contact](
                id=f"group-{i + 1}",
                members=[
                    Contact(id=f"c{i}a", name=f"Person {i}", email=f"p{i}@example.com"),
                    Contact(id=f"c{i}b", name=f"Person {i}", email=f"p{i}@example.com"),
                ],
                similarity_score=score,
                match_type="multiple",
            )
            for i, score in enumerate(scores)
        ]
        return GroupFile[Contact](entity_type="contact", groups=groups)

    def test_approve_all(self):
        group_file = self._make_group_file()
        with patch("builtins.input", side_effect=["a", "a", "a"]):
            stats = review_groups(group_file)
        assert stats["confirmed"] == 3
        assert all(g.status == "CONFIRMED" for g in group_file.groups)

    def test_reject_and_skip(self):
        group_file = self._make_group_file()
        with patch("builtins.input", side_effect=["r", "s", "a"]):
            stats = review_groups(group_file)
        assert stats == {"auto_confirmed": 0, "confirmed": 1, "rejected": 1, "skipped": 1}
        assert [g.status for g in group_file.groups] == ["REJECTED", "DRAFT", "CONFIRMED"]

    def test_quit_skips_remaining(self):
        group_file = self._make_group_file()
        with patch("builtins.input", side_effect=["a", "q"]):
            stats = review_groups(group_file)
        assert stats["confirmed"] == 1
        assert stats["skipped"] == 2
        assert len(group_file.draft) == 2

    def test_invalid_key_reprompts(self):
        group_file = self._make_group_file(scores=(80,))
        with patch("builtins.input", side_effect=["x", "", "approve"]):
            stats = review_groups(group_file)
        assert stats["confirmed"] == 1

    def test_eof_quits(self):
        group_file = self._make_group_file()
        with patch("builtins.input", side_effect=EOFError):
            stats = review_groups(group_file)
        assert stats["skipped"] == 3
        assert len(group_file.draft) == 3

    def test_auto_confirm(self):
        """Groups at or above the auto-confirm score skip the prompt."""
        group_file = self._make_group_file()
        with patch("builtins.input", side_effect=["r"]):
            stats = review_groups(group_file, auto_confirm_threshold=85)
        assert stats["auto_confirmed"] == 2
        assert stats["rejected"] == 1
        assert [g.status for g in group_file.groups] == ["REJECTED", "CONFIRMED", "CONFIRMED"]

    def test_no_drafts(self):
        group_file = self._make_group_file()
        for group in group_file.groups:
            group.status = "REJECTED"
        stats = review_groups(group_file)
        assert stats == {"auto_confirmed": 0, "confirmed": 0, "rejected": 0, "skipped": 0}

    def test_order_groups_render(self):
        group_file = GroupFile[Order](
            entity_type="order",
            groups=[
                DuplicateGroup[Order](
                    id="group-1",
                    members=[Order(id="o1", total=100), Order(id="o2", total="100.01")],
                    similarity_score=95,
                    match_type="total",
                    primary_id="o2",
                )
            ],
        )
        with patch("builtins.input", side_effect=["a"]):
            stats = review_groups(group_file)
        assert stats["confirmed"] == 1
