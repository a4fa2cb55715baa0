"""CLI interface for record-dedupe."""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from record_dedupe.config import PROJECT_FILE, DedupeConfig

app = typer.Typer(
    name="dedupe",
    help="Find, review and merge duplicate contacts, orders and products",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()

ENTITY_TYPES = ("contact", "order", "product")


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _entity_type(value: str | None, config: DedupeConfig) -> str:
    entity_type = (value or config.default_entity_type).lower()
    if entity_type not in ENTITY_TYPES:
        console.print(f"[red]Error:[/red] Unknown type '{entity_type}'. Use one of: {', '.join(ENTITY_TYPES)}")
        raise typer.Exit(1)
    return entity_type


def _summarize_members(group, entity_type: str) -> str:
    """One-line summary of a group's members for tables."""
    label_field = {"contact": "name", "order": "contact_name", "product": "sku"}[entity_type]
    labels = [str(getattr(m, label_field, None) or m.id) for m in group.members]
    return ", ".join(labels)


# ============================================================================
# Pipeline Commands
# ============================================================================


@app.command()
def find(
    records: str = typer.Argument(..., help="JSON, YAML or CSV file of records to check"),
    entity_type: str | None = typer.Option(None, "--type", "-t", help="Record type: contact, order or product"),
    threshold: int | None = typer.Option(None, "--threshold", min=0, max=100, help="Minimum similarity score (0-100)"),
    manual: bool = typer.Option(
        False, "--manual", help="Pair records up consecutively if nothing reaches the threshold",
    ),
    output: str | None = typer.Option(None, "-o", help="Output directory"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Find duplicate groups in a records file."""
    _setup_logging(verbose)
    config = DedupeConfig()
    output_dir = Path(output) if output else config.output_dir
    kind = _entity_type(entity_type, config)
    effective_threshold = threshold if threshold is not None else config.threshold

    from record_dedupe.pipeline import GROUPS_FILE, run_find

    try:
        group_file = run_find(
            Path(records), kind, output_dir,
            threshold=effective_threshold, manual_fallback=manual,
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    if not group_file.groups:
        console.print("[green]No duplicates found![/green]")
        return

    table = Table(title=f"Duplicate {kind} groups", show_header=True, header_style="bold cyan")
    table.add_column("Group", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Match")
    table.add_column("Records")
    for group in group_file.groups:
        table.add_row(
            group.id,
            str(group.similarity_score),
            group.match_type,
            _summarize_members(group, kind),
        )
    console.print(table)

    groups_path = output_dir / GROUPS_FILE
    console.print()
    console.print(f"[green]Found {len(group_file.groups)} duplicate groups[/green]")
    console.print(f"  Threshold: {effective_threshold}")
    console.print(f"  Output: {groups_path}")
    console.print()
    console.print("Next: [cyan]dedupe review[/cyan] to confirm/reject groups interactively")
    console.print(f"  Or edit [cyan]{groups_path}[/cyan] manually (DRAFT → CONFIRMED/REJECTED)")
    console.print("  Then: [cyan]dedupe apply-merges[/cyan]")


@app.command(name="apply-merges")
def apply_merges_cmd(
    output: str | None = typer.Option(None, "-o", help="Output directory"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Merge confirmed duplicate groups into canonical records."""
    _setup_logging(verbose)
    config = DedupeConfig()
    output_dir = Path(output) if output else config.output_dir

    from record_dedupe.pipeline import MERGE_RESULTS_FILE, run_apply_merges

    try:
        result_file = run_apply_merges(output_dir)
    except FileNotFoundError:
        console.print("[yellow]No duplicate groups found.[/yellow] Run [cyan]dedupe find[/cyan] first.")
        raise typer.Exit(1) from None
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    if not result_file.results:
        console.print("[yellow]No changes to apply.[/yellow]")
        console.print("Confirm groups with [cyan]dedupe review[/cyan] or edit duplicate_groups.yaml first.")
        return

    table = Table(title="Merge results", show_header=True, header_style="bold cyan")
    table.add_column("Group", style="dim")
    table.add_column("Keep")
    table.add_column("Retire")
    for result in result_file.results:
        table.add_row(result.group_id, result.primary_id, ", ".join(result.retired_ids))
    console.print(table)

    console.print()
    console.print(f"[green]Merged {len(result_file.results)} groups[/green]")
    console.print(f"  Output: {output_dir / MERGE_RESULTS_FILE}")
    console.print()
    console.print("Next: persist each merged record over its kept id and retire the others")


# ============================================================================
# Review Commands
# ============================================================================


@app.command()
def review(
    output: str | None = typer.Option(None, "-o", help="Output directory"),
    auto_confirm: int | None = typer.Option(
        None, "--auto-confirm", min=0, max=101,
        help="Auto-confirm groups scoring at least this (0-100). Set to 101 to disable.",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
) -> None:
    """Interactively review duplicate groups."""
    _setup_logging(verbose)
    config = DedupeConfig()
    output_dir = Path(output) if output else config.output_dir
    threshold = auto_confirm if auto_confirm is not None else config.auto_confirm_threshold

    from record_dedupe.pipeline import GROUPS_FILE
    from record_dedupe.resolve.io import read_groups, write_groups
    from record_dedupe.resolve.reviewer import review_groups

    groups_path = output_dir / GROUPS_FILE
    try:
        group_file = read_groups(groups_path)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    if group_file is None:
        console.print("[yellow]Nothing to review.[/yellow]")
        console.print("Run [cyan]dedupe find[/cyan] first.")
        raise typer.Exit(0)

    if group_file.draft:
        review_groups(group_file, auto_confirm_threshold=threshold)
        write_groups(group_file, groups_path)
    else:
        console.print("[dim]No DRAFT duplicate groups to review.[/dim]")

    console.print()
    console.print("Next: [cyan]dedupe apply-merges[/cyan] to apply your decisions")


# ============================================================================
# Utility Commands
# ============================================================================


@app.command()
def compare(
    records: str = typer.Argument(..., help="JSON, YAML or CSV file of records"),
    id_a: str = typer.Argument(..., help="First record id"),
    id_b: str = typer.Argument(..., help="Second record id"),
    entity_type: str | None = typer.Option(None, "--type", "-t", help="Record type: contact, order or product"),
) -> None:
    """Show the similarity score and match reasons for two records."""
    config = DedupeConfig()
    kind = _entity_type(entity_type, config)

    from record_dedupe.pipeline import run_compare

    try:
        result = run_compare(Path(records), kind, id_a, id_b)
    except KeyError as e:
        console.print(f"[red]Error:[/red] {e.args[0]}")
        raise typer.Exit(1) from None
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    score = result.similarity_score
    style = "green" if score >= config.threshold else "yellow"
    console.print(f"[bold]{id_a}[/bold] vs [bold]{id_b}[/bold]: [{style}]{score}[/{style}]")
    if result.match_reasons:
        for reason in result.match_reasons:
            console.print(f"  • {reason}")
    else:
        console.print("  [dim]No field matched[/dim]")
    verdict = "duplicates" if score >= config.threshold else "not duplicates"
    console.print(f"  [dim]At threshold {config.threshold}: {verdict}[/dim]")


@app.command()
def init() -> None:
    """Initialize a record-dedupe project in the current directory."""
    env_example_path = Path(".env.example")
    project_path = Path(PROJECT_FILE)

    if not env_example_path.exists() or typer.confirm("Overwrite existing .env.example?", default=False):
        env_template = """# record-dedupe Configuration
# Copy this file to .env to override settings locally

# Minimum similarity score (0-100) for two records to be grouped
DEDUPE_THRESHOLD=70

# Auto-confirm groups at or above this score during review (101 disables)
DEDUPE_AUTO_CONFIRM_THRESHOLD=101
"""
        env_example_path.write_text(env_template)
        console.print("[green]Created .env.example[/green]")

    if not project_path.exists() or typer.confirm(f"Overwrite existing {PROJECT_FILE}?", default=False):
        project_config = (
            "# record-dedupe project config\n"
            "# All commands pick up these settings automatically.\n\n"
            "# entity_type: contact\n"
            "# threshold: 70\n"
            "# auto_confirm: 101\n"
            "# output: output\n"
        )
        project_path.write_text(project_config)
        console.print(f"[green]Created {PROJECT_FILE}[/green]")

    console.print("\nNext steps:")
    console.print(f"  1. Edit {PROJECT_FILE} to set your entity type and threshold")
    console.print("  2. dedupe find contacts.csv --type contact")
    raise typer.Exit(0)


@app.command()
def info() -> None:
    """Display project configuration and review status."""
    config = DedupeConfig()

    table = Table(title="record-dedupe Project Info", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value")

    table.add_row("Entity Type", config.default_entity_type)
    table.add_row("Threshold", str(config.threshold))
    auto_confirm = config.auto_confirm_threshold
    table.add_row("Auto-confirm", "Disabled" if auto_confirm > 100 else str(auto_confirm))
    table.add_row("Output Directory", str(config.output_dir))

    from record_dedupe.pipeline import GROUPS_FILE, MERGE_RESULTS_FILE
    from record_dedupe.resolve.io import read_groups, read_merge_results

    try:
        group_file = read_groups(config.output_dir / GROUPS_FILE)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None
    if group_file is not None:
        table.add_row(
            "Duplicate Groups",
            f"{len(group_file.confirmed)} confirmed, {len(group_file.draft)} draft, "
            f"{len(group_file.rejected)} rejected ({group_file.entity_type})"
        )
    else:
        table.add_row("Duplicate Groups", "None found yet")

    merge_path = config.output_dir / MERGE_RESULTS_FILE
    if merge_path.exists():
        result_file = read_merge_results(merge_path)
        table.add_row("Merged Groups", str(len(result_file.results)))

    console.print(table)
