from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cm_ui.tui.system.models import TableModel

MIN_COLUMN_WIDTH = 4


def _fit_widths(model: TableModel, available: int) -> list[int]:
    """Longest line per column, shrinking the widest column until it fits."""
    widths = []
    for idx, column in enumerate(model.columns):
        cells = [column] + [row[idx] for row in model.rows if idx < len(row)]
        longest = max(len(line) for cell in cells for line in (str(cell).splitlines() or [""]))
        widths.append(max(MIN_COLUMN_WIDTH, longest))
    overhead = 4 + max(len(widths) - 1, 0) * 3
    while widths and sum(widths) + overhead > available:
        widest = max(range(len(widths)), key=widths.__getitem__)
        if widths[widest] <= MIN_COLUMN_WIDTH:
            break
        widths[widest] -= 1
    return widths


def build_rich_table(
    model: TableModel,
    *,
    console: Console,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold blue",
    title_style: str = "bold blue",
    box_style: box.Box = box.ROUNDED,
) -> Table:
    """Build a Rich Table from a TableModel that fits the console width.

    Cells stay on one line and are truncated with an ellipsis.
    """
    available = max(40, console.size.width - 2)
    title = Text.from_markup(str(model.title))
    title.truncate(max(10, available - 6), overflow="ellipsis")

    table = Table(
        title=title,
        show_lines=show_lines,
        box=box_style,
        border_style=border_style,
        header_style=header_style,
        title_style=title_style,
    )
    for column, width in zip(model.columns, _fit_widths(model, available)):
        table.add_column(
            column,
            overflow="ellipsis",
            no_wrap=True,
            min_width=MIN_COLUMN_WIDTH,
            max_width=width,
        )
    for row in model.rows:
        table.add_row(*row)
    return table
