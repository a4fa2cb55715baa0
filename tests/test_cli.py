"""Tests for the dedupe CLI."""

import json
import os
from unittest.mock import patch

from typer.testing import CliRunner

from record_dedupe.cli import app
from record_dedupe.pipeline import GROUPS_FILE, MERGE_RESULTS_FILE
from record_dedupe.resolve.io import read_groups, write_groups

runner = CliRunner()


def _write_contacts(tmp_dir):
    path = tmp_dir / "contacts.json"
    path.write_text(json.dumps([
        {"id": "c1", "name": "John Doe", "email": "john@ex.com", "phone": "5551234567"},
        {"id": "c2", "name": "Jon Doe", "email": "john@ex.com", "phone": ""},
        {"id": "c3", "name": "Unrelated Person"},
    ]))
    return path


class TestFindCommand:
    """Test `dedupe find`."""

    def test_finds_group(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        out = tmp_dir / "out"
        result = runner.invoke(app, ["find", str(path), "--type", "contact", "-o", str(out)])
        assert result.exit_code == 0
        assert "Found 1 duplicate groups" in result.output
        assert (out / GROUPS_FILE).exists()

    def test_no_duplicates(self, tmp_dir):
        path = tmp_dir / "contacts.json"
        path.write_text(json.dumps([{"id": "a", "name": "Alpha"}, {"id": "b", "name": "Bravo"}]))
        result = runner.invoke(app, ["find", str(path), "-t", "contact", "-o", str(tmp_dir / "out")])
        assert result.exit_code == 0
        assert "No duplicates found" in result.output

    def test_missing_file(self, tmp_dir):
        result = runner.invoke(app, ["find", str(tmp_dir / "nope.json"), "-t", "contact", "-o", str(tmp_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unknown_type(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        result = runner.invoke(app, ["find", str(path), "-t", "invoice", "-o", str(tmp_dir)])
        assert result.exit_code == 1


class TestReviewAndMerge:
    """Test `dedupe review` and `dedupe apply-merges`."""

    def test_review_nothing(self, tmp_dir):
        result = runner.invoke(app, ["review", "-o", str(tmp_dir)])
        assert result.exit_code == 0
        assert "Nothing to review" in result.output

    def test_review_then_apply(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        out = tmp_dir / "out"
        runner.invoke(app, ["find", str(path), "-t", "contact", "-o", str(out)])

        with patch("builtins.input", side_effect=["a"]):
            result = runner.invoke(app, ["review", "-o", str(out)])
        assert result.exit_code == 0
        assert read_groups(out / GROUPS_FILE).groups[0].status == "CONFIRMED"

        result = runner.invoke(app, ["apply-merges", "-o", str(out)])
        assert result.exit_code == 0
        assert "Merged 1 groups" in result.output
        assert (out / MERGE_RESULTS_FILE).exists()

    def test_apply_without_confirmed(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        out = tmp_dir / "out"
        runner.invoke(app, ["find", str(path), "-t", "contact", "-o", str(out)])
        group_file = read_groups(out / GROUPS_FILE)
        group_file.groups[0].status = "REJECTED"
        write_groups(group_file, out / GROUPS_FILE)

        result = runner.invoke(app, ["apply-merges", "-o", str(out)])
        assert result.exit_code == 0
        assert "No changes to apply" in result.output

    def test_apply_without_groups(self, tmp_dir):
        result = runner.invoke(app, ["apply-merges", "-o", str(tmp_dir)])
        assert result.exit_code == 1

    def test_review_malformed_file(self, tmp_dir):
        (tmp_dir / GROUPS_FILE).write_text("- not\n- a mapping\n")
        result = runner.invoke(app, ["review", "-o", str(tmp_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_review_unknown_entity_type(self, tmp_dir):
        (tmp_dir / GROUPS_FILE).write_text("entity_type: invoice\ngroups: []\n")
        result = runner.invoke(app, ["review", "-o", str(tmp_dir)])
        assert result.exit_code == 1
        assert "Unknown entity type" in result.output

    def test_apply_malformed_file(self, tmp_dir):
        (tmp_dir / GROUPS_FILE).write_text("- not\n- a mapping\n")
        result = runner.invoke(app, ["apply-merges", "-o", str(tmp_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestInfoCommand:
    """Test `dedupe info`."""

    def test_info_malformed_file(self, tmp_dir):
        (tmp_dir / GROUPS_FILE).write_text("- not\n- a mapping\n")
        with patch.dict(os.environ, {"DEDUPE_OUTPUT_DIR": str(tmp_dir)}):
            result = runner.invoke(app, ["info"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestCompareCommand:
    """Test `dedupe compare`."""

    def test_compare_pair(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        with patch.dict(os.environ, {"DEDUPE_OUTPUT_DIR": str(tmp_dir / "out")}):
            result = runner.invoke(app, ["compare", str(path), "c1", "c2", "-t", "contact"])
        assert result.exit_code == 0
        assert "Exact email match" in result.output

    def test_compare_unknown_id(self, tmp_dir):
        path = _write_contacts(tmp_dir)
        with patch.dict(os.environ, {"DEDUPE_OUTPUT_DIR": str(tmp_dir / "out")}):
            result = runner.invoke(app, ["compare", str(path), "c1", "zz", "-t", "contact"])
        assert result.exit_code == 1
        assert "zz" in result.output
