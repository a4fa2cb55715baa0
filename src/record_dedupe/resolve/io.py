"""Read record exports and read/write duplicate group and merge result YAML files."""

import csv
import json
import logging
from pathlib import Path

import yaml

from record_dedupe.models import Record, record_model
from record_dedupe.resolve.models import GroupFile, MergeResultFile

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml", ".csv")


# ============================================================================
# Record Loading
# ============================================================================


def _read_rows(path: Path) -> list[dict]:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            # Empty cells are unset, not empty strings (is_active would reject "")
            return [
                {key: value if value != "" else None for key, value in row.items() if key}
                for row in csv.DictReader(f)
            ]

    with open(path, encoding="utf-8") as f:
        if suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("records", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of records or a 'records' list")
    return data


def load_records(path: Path, entity_type: str) -> list[Record]:
    """Load records of one entity type from a JSON, YAML or CSV export.

    JSON and YAML files hold either a list of records or a mapping with a
    ``records`` list. Unknown columns are ignored.

    Args:
        path: File to read
        entity_type: "contact", "order" or "product"

    Returns:
        Validated records in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type or entity type is unsupported
        pydantic.ValidationError: If a record is missing its id
    """
    model = record_model(entity_type)
    if not path.exists():
        raise FileNotFoundError(f"No records file at {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported records file '{path.suffix}'. Use one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    records = [model.model_validate(row) for row in _read_rows(path)]
    logger.info(f"Loaded {len(records)} {entity_type} record(s) from {path}")
    return records


# ============================================================================
# Duplicate Groups
# ============================================================================


def write_groups(group_file: GroupFile, path: Path) -> None:
    """Write duplicate groups to YAML."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = group_file.model_dump(mode="json")
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    logger.info(f"Wrote {len(group_file.groups)} duplicate groups to {path}")


def read_groups(path: Path) -> GroupFile | None:
    """Read duplicate groups from YAML.

    Returns:
        The group file typed for its entity, or None if the file is missing or empty

    Raises:
        ValueError: If the file is not a mapping or names no known entity type
        ValidationError: If the groups do not match the record model
    """
    if not path.exists():
        return None
    with open(path) as f:
        data = yaml.safe_load(f)
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"{path} is not a duplicate groups file")
    model = record_model(data.get("entity_type", ""))
    return GroupFile[model].model_validate(data)


# ============================================================================
# Merge Results
# ============================================================================


def write_merge_results(result_file: MergeResultFile, path: Path) -> None:
    """Write merge results to YAML."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = result_file.model_dump(mode="json")
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
    logger.info(f"Wrote {len(result_file.results)} merge results to {path}")


def read_merge_results(path: Path) -> MergeResultFile:
    """Read merge results from YAML."""
    if not path.exists():
        return MergeResultFile()
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return MergeResultFile()
    return MergeResultFile.model_validate(data)
