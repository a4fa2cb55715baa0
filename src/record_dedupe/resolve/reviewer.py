"""Interactive terminal review for duplicate groups.

Presents DRAFT groups one-by-one with Rich panels. User confirms, rejects,
or skips each group. The updated file is written by the caller.
"""

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from record_dedupe.models import Record
from record_dedupe.resolve.models import DuplicateGroup, GroupFile

console = Console()

# Columns shown per entity type, after the id
_DISPLAY_FIELDS = {
    "contact": ("name", "email", "phone", "city"),
    "order": ("contact_name", "total", "order_date", "status"),
    "product": ("sku", "name", "price", "is_active"),
}


def _read_key(prompt: str, valid: str = "arsq") -> str:
    """Read a single valid key from stdin.

    Args:
        prompt: Prompt text to display
        valid: String of valid key characters

    Returns:
        The key pressed (lowercase)
    """
    console.print(prompt, end="")
    while True:
        try:
            line = input().strip().lower()
        except (EOFError, KeyboardInterrupt):
            return "q"
        if line and line[0] in valid:
            return line[0]
        console.print(f"  [dim]Press one of: {', '.join(valid)}[/dim] ", end="")


def _cell(record: Record, field: str) -> str:
    value = getattr(record, field, None)
    return "" if value is None else str(value)


def _group_panel(group: DuplicateGroup, entity_type: str, index: int, total: int) -> Panel:
    primary = group.primary
    fields = _DISPLAY_FIELDS[entity_type]

    header = Text()
    header.append("Match type: ", style="bold")
    header.append(group.match_type)
    header.append("\nScore: ", style="bold")
    score_style = "green" if group.similarity_score >= 90 else "yellow" if group.similarity_score >= 70 else "red"
    header.append(f"{group.similarity_score}", style=score_style)

    member_table = Table(
        show_header=True, header_style="bold", box=None, padding=(0, 2),
        title="Records", title_style="bold yellow",
    )
    member_table.add_column("ID", style="dim")
    for field in fields:
        member_table.add_column(field)
    member_table.add_column("")

    for member in group.members:
        marker = "[green]primary[/green]" if member is primary else ""
        member_table.add_row(member.id, *(_cell(member, f) for f in fields), marker)

    return Panel(
        Group(header, Text(""), member_table),
        title=f"[bold]Group {index + 1}/{total}[/bold]  [dim]{group.id}[/dim]",
        border_style="cyan",
        padding=(1, 2),
    )


def review_groups(group_file: GroupFile, auto_confirm_threshold: int = 101) -> dict[str, int]:
    """Interactively review DRAFT duplicate groups.

    Modifies group_file in place, setting status to CONFIRMED or REJECTED.
    Groups scoring at or above auto_confirm_threshold are confirmed without
    interactive review.

    Args:
        group_file: GroupFile with groups to review
        auto_confirm_threshold: Auto-confirm groups with at least this score.
            Anything above 100 disables auto-confirm.

    Returns:
        Stats dict with counts of auto_confirmed, confirmed, rejected, skipped
    """
    drafts = group_file.draft
    if not drafts:
        console.print("[dim]No duplicate groups to review.[/dim]")
        return {"auto_confirmed": 0, "confirmed": 0, "rejected": 0, "skipped": 0}

    auto_confirmed = []
    manual_review = []
    for group in drafts:
        if group.similarity_score >= auto_confirm_threshold:
            group.status = "CONFIRMED"
            auto_confirmed.append(group)
        else:
            manual_review.append(group)

    stats = {"auto_confirmed": len(auto_confirmed), "confirmed": 0, "rejected": 0, "skipped": 0}

    console.print()
    if auto_confirmed:
        console.print(
            f"[bold green]Auto-confirmed {len(auto_confirmed)} groups[/bold green] "
            f"(score ≥ {auto_confirm_threshold})"
        )
        console.print()

    if not manual_review:
        console.print("[dim]No remaining groups need manual review.[/dim]")
        return stats

    total = len(manual_review)
    console.print(f"[bold cyan]Duplicate Review[/bold cyan]  —  {total} {group_file.entity_type} groups to review")
    console.print("[dim]For each group, decide whether these records are the same.[/dim]")
    console.print()

    for i, group in enumerate(manual_review):
        console.print(_group_panel(group, group_file.entity_type, i, total))

        choice = _read_key(r"  \[a]pprove  \[r]eject  \[s]kip  \[q]uit → ")
        console.print()

        if choice == "a":
            group.status = "CONFIRMED"
            stats["confirmed"] += 1
            console.print("  [green]✓ Confirmed[/green]")
        elif choice == "r":
            group.status = "REJECTED"
            stats["rejected"] += 1
            console.print("  [red]✗ Rejected[/red]")
        elif choice == "s":
            stats["skipped"] += 1
            console.print("  [dim]⏭ Skipped[/dim]")
        elif choice == "q":
            stats["skipped"] += total - i
            console.print(f"  [dim]Quit — skipping remaining {total - i} groups[/dim]")
            break

        console.print()

    console.print(
        f"[bold]Duplicate review complete:[/bold]  "
        f"[green]{stats['auto_confirmed']} auto-confirmed[/green]  "
        f"[green]{stats['confirmed']} confirmed[/green]  "
        f"[red]{stats['rejected']} rejected[/red]  "
        f"[dim]{stats['skipped']} skipped[/dim]"
    )
    return stats
