from __future__ import annotations

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from driver_roster.domain.models import Record
from driver_roster.exporters.abstract import cell_text, cell_value
from driver_roster.projector import ID_COLUMN_WIDTH, ResolvedColumn

# Projected widths are pixel-ish; terminal columns are roughly ten times narrower.
_CHARS_PER_UNIT = 0.1


def build_table(
    rows: Sequence[Record],
    columns: Sequence[ResolvedColumn],
    title: str = "",
    caption: Optional[str] = None,
) -> Table:
    """
    Render the projected driver table.

    Column order and headers come from the projector; the id column is kept
    narrow and right-aligned.
    """
    table = Table(title=title or None, box=box.ROUNDED, caption=caption)
    for column in columns:
        narrow = column.size <= ID_COLUMN_WIDTH
        table.add_column(
            column.header,
            justify="right" if narrow else "left",
            style="cyan" if narrow else None,
            min_width=max(2, int(column.size * _CHARS_PER_UNIT)),
            no_wrap=narrow,
        )
    for row in rows:
        table.add_row(*(cell_text(cell_value(row, c.accessor_key)) for c in columns))
    return table


def print_rows(
    rows: Sequence[Record],
    columns: Sequence[ResolvedColumn],
    title: str = "",
    empty_message: str = "No rows.",
    source_label: str = "",
    console: Optional[Console] = None,
) -> None:
    """
    Print the filtered view as a rich table, or `empty_message` when there is
    nothing to show.
    """
    console = console or Console()
    if not rows:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return
    caption = f"{len(rows)} driver(s)"
    if source_label:
        caption = f"{caption} │ {source_label}"
    console.print(build_table(rows, columns, title=title, caption=caption))
