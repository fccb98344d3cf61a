"""
Rendering of the command results as plain text tables on stdout.

The tables are borderless, kubectl-style: one header row, then one row per item,
with the columns aligned. Booleans are rendered the way K8s spells them.
Cells are never truncated or wrapped, even if the lines are wider than the terminal.
"""
from collections.abc import Iterable, Sequence

from rich.cells import cell_len
from rich.console import Console
from rich.table import Table

# Left & right padding of every cell, as in rich's defaults.
CELL_PADDING = 1


def format_cell(value: object) -> str:
    match value:
        case bool():
            return 'true' if value else 'false'
        case None:
            return ''
        case _:
            return str(value)


def measure_width(columns: Sequence[str], cells: Sequence[Sequence[str]]) -> int:
    widths = [max(cell_len(text) for text in column) for column in zip(columns, *cells)]
    return sum(widths) + 2 * CELL_PADDING * (len(widths) - 1)


def make_table(columns: Sequence[str], cells: Sequence[Sequence[str]]) -> Table:
    table = Table(box=None, pad_edge=False, padding=(0, CELL_PADDING), header_style='')
    for column in columns:
        table.add_column(column, no_wrap=True)
    for row in cells:
        table.add_row(*row)
    return table


def print_table(
        columns: Sequence[str],
        rows: Iterable[Sequence[object]],
        *,
        console: Console | None = None,
) -> None:
    cells = [[format_cell(value) for value in row] for row in rows]
    if console is None:
        # A new console every time: it must write to the current stdout, not the import-time one.
        width = measure_width(columns, cells)
        console = Console(highlight=False, width=max(width, Console().width))
    console.print(make_table(columns, cells))
