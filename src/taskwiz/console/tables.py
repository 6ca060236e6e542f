# src/taskwiz/console/tables.py

from __future__ import annotations

import io
from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..tasks.task_models import Task

LISTING_HEADER: tuple[str, ...] = ("Number", "ID", "Title", "Status", "Description", "Due Date")


def render_table(header: Sequence[str], rows: Sequence[Sequence[str]], *, width: int = 120) -> str:
    """
    Render rows as a plain-text ASCII table (no colors, no terminal codes).

    Cells are literal text: brackets and :codes: are never read as markup or emoji.
    """
    table = Table(box=box.ASCII, show_header=True, show_lines=True, header_style=None)
    for name in header:
        table.add_column(name, overflow="fold")
    for row in rows:
        table.add_row(*(Text(str(cell)) for cell in row))

    buf = io.StringIO()
    console = Console(
        file=buf,
        width=width,
        color_system=None,
        force_terminal=False,
        highlight=False,
        markup=False,
        emoji=False,
    )
    console.print(table)
    return buf.getvalue().rstrip("\n")


def render_listing(snapshot: Sequence[Task], *, width: int = 120) -> str:
    rows = [[str(n), *task.display_row()] for n, task in enumerate(snapshot, start=1)]
    return render_table(LISTING_HEADER, rows, width=width)
