"""Library entry points for the find → review → merge workflow.

Each step reads and writes plain files in an output directory so the steps
can be run separately, with human review in between.
"""

import logging
from pathlib import Path

from record_dedupe.models import record_model
from record_dedupe.resolve.engine import apply_merges
from record_dedupe.resolve.io import load_records, read_groups, write_groups, write_merge_results
from record_dedupe.resolve.models import GroupFile, MergeResultFile
from record_dedupe.resolve.resolver import find_duplicates
from record_dedupe.scoring import Similarity, get_scorer

logger = logging.getLogger(__name__)

GROUPS_FILE = "duplicate_groups.yaml"
MERGE_RESULTS_FILE = "merge_results.yaml"


def run_find(
    records_path: Path,
    entity_type: str,
    output_dir: Path,
    threshold: int = 70,
    manual_fallback: bool = False,
) -> GroupFile:
    """Find duplicate groups in a records file.

    Args:
        records_path: JSON, YAML or CSV export of one entity type
        entity_type: "contact", "order" or "product"
        output_dir: Where duplicate_groups.yaml is written
        threshold: Minimum score to group two records
        manual_fallback: Pair records up when nothing reaches the threshold

    Returns:
        GroupFile with DRAFT groups. When there are none, any groups file left
        by an earlier run is removed so its decisions cannot be applied.
    """
    records = load_records(records_path, entity_type)
    groups = find_duplicates(records, entity_type, threshold, manual_fallback=manual_fallback)

    model = record_model(entity_type)
    group_file = GroupFile[model](entity_type=entity_type, threshold=threshold, groups=groups)
    groups_path = output_dir / GROUPS_FILE
    if group_file.groups:
        write_groups(group_file, groups_path)
    elif groups_path.exists():
        groups_path.unlink()
        logger.info(f"Removed stale {groups_path}")
    return group_file


def run_apply_merges(output_dir: Path) -> MergeResultFile:
    """Merge confirmed duplicate groups.

    Args:
        output_dir: Directory with duplicate_groups.yaml

    Returns:
        MergeResultFile (also written to merge_results.yaml when non-empty)

    Raises:
        FileNotFoundError: If there is no duplicate groups file
        ValueError: If the groups file is malformed
    """
    groups_path = output_dir / GROUPS_FILE
    group_file = read_groups(groups_path)
    if group_file is None:
        raise FileNotFoundError(f"No duplicate groups found at {groups_path}")

    result_file = apply_merges(group_file)
    if result_file.results:
        write_merge_results(result_file, output_dir / MERGE_RESULTS_FILE)
    return result_file


def run_compare(records_path: Path, entity_type: str, id_a: str, id_b: str) -> Similarity:
    """Score one pair of records from a records file.

    Raises:
        KeyError: If either id is not in the file
    """
    records = {r.id: r for r in load_records(records_path, entity_type)}
    missing = [record_id for record_id in (id_a, id_b) if record_id not in records]
    if missing:
        raise KeyError(f"No {entity_type} with id {', '.join(missing)} in {records_path}")
    return get_scorer(entity_type).score(records[id_a], records[id_b])
