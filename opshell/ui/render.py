"""
Query result renderers.

Two output modes: an ASCII bordered table and one JSON object per row.
"""

from __future__ import annotations

import json
from collections.abc import Callable

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..db.interface import QueryResult


def _rows_line(count: int) -> str:
    return f"{count} row(s) returned"


def _cell(value: object) -> str:
    if value is None:
        return "NULL"
    return str(value)


def render_table(console: Console, result: QueryResult) -> None:
    """Print the row count and, when there are rows, a bordered table."""
    console.print(_rows_line(len(result.rows)))
    if not result.rows:
        return

    table = Table(box=box.ASCII, show_header=True, header_style="bold")
    for column in result.columns:
        table.add_column(Text(column))
    for row in result.rows:
        table.add_row(*(Text(_cell(v)) for v in row))
    console.print(table)


def render_json(console: Console, result: QueryResult) -> None:
    """Print one "[i] = {...}" line per row followed by the row count."""
    for i, row in enumerate(result.as_dicts()):
        console.print(f"[{i}] = {json.dumps(row, default=str)}", markup=False)
    console.print(_rows_line(len(result.rows)))


RENDERERS: dict[str, Callable[[Console, QueryResult], None]] = {
    "table": render_table,
    "json": render_json,
}
