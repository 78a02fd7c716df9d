"""Terminal timetable view (Rich)."""

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from export.helpers import RICH_STYLES, format_entry, grid_rows
from models.catalog import Catalog
from models.timetable_entry import DAY_NAMES, TimetableEntry


def render_timetable(
    entries: list[TimetableEntry],
    catalog: Catalog,
    title: str = "Timetable",
    console: Optional[Console] = None,
) -> Table:
    """Prints the weekly grid (slots × Mon–Sat) and returns the Rich table.

    Non-regular slots (break, assembly, co-curricular) appear as dimmed rows.
    """
    subjects = catalog.subject_by_id()

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Time", style="bold", no_wrap=True)
    for day in DAY_NAMES:
        table.add_column(day, justify="center")

    for slot, cells in grid_rows(entries, catalog):
        if not slot.is_assignable:
            table.add_row(
                f"[dim]{slot.label}[/dim]",
                *([f"[dim]{slot.slot_type.value}[/dim]"] * len(DAY_NAMES)),
            )
            continue
        row = []
        for entry in cells:
            if entry is None:
                row.append("[dim]—[/dim]")
                continue
            subject = subjects.get(entry.subject_id)
            style = RICH_STYLES.get(subject.category.value, "white") if subject else "white"
            row.append(f"[{style}]{format_entry(entry, catalog)}[/{style}]")
        table.add_row(slot.label, *row)

    (console or Console()).print(table)
    return table
