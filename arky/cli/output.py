"""
Output rendering.

Command results go to stdout in one of three formats:
    json   - Pretty JSON (default, best for scripts and agents)
    table  - Human-readable table
    plain  - key=value lines for piping

Status lines (OK / ERROR) go to stderr so stdout stays parseable.
"""

import json
from enum import Enum
from typing import Any

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

TABLE_CELL_WIDTH = 40
OBJECT_VALUE_WIDTH = 80


class OutputFormat(str, Enum):
    JSON = "json"
    TABLE = "table"
    PLAIN = "plain"

    @classmethod
    def from_str(cls, value: str) -> "OutputFormat":
        """Map a format name to an OutputFormat. Unknown names fall back to JSON."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.JSON


def format_cell(value: Any) -> str:
    """Render one JSON value as a single table cell."""
    if value is None:
        return "-"
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return f"[{len(value)} items]"
    if isinstance(value, dict):
        return "{...}"
    return json.dumps(value)


def _truncate(text: str, width: int) -> str:
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def print_output(value: Any, fmt: OutputFormat) -> None:
    """Print a command result in the requested format."""
    if fmt is OutputFormat.TABLE:
        _print_table(value)
    elif fmt is OutputFormat.PLAIN:
        _print_plain(value)
    else:
        typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


def print_success(message: str) -> None:
    err_console.print(f"[bold green]OK[/bold green] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    err_console.print(f"[bold red]ERROR[/bold red] {escape(message)}", soft_wrap=True)


def _print_table(value: Any) -> None:
    if isinstance(value, list):
        _print_rows(value)
    elif isinstance(value, dict):
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="right", style="bold")
        grid.add_column()
        for key, item in value.items():
            grid.add_row(Text(key), Text(_truncate(format_cell(item), OBJECT_VALUE_WIDTH)))
        console.print(grid)
    else:
        typer.echo(format_cell(value))


def _print_rows(items: list[Any]) -> None:
    if not items:
        typer.echo("(empty)")
        return

    first = items[0]
    if not isinstance(first, dict):
        for item in items:
            typer.echo(format_cell(item))
        return

    # Nested values are skipped; they do not fit in a cell.
    keys = [key for key, item in first.items() if not isinstance(item, (list, dict))]
    if not keys:
        typer.echo("(no scalar fields)")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold")
    for key in keys:
        table.add_column(key.upper(), no_wrap=True)

    for item in items:
        row = item if isinstance(item, dict) else {}
        table.add_row(*(
            Text(_truncate(format_cell(row.get(key)), TABLE_CELL_WIDTH)) for key in keys
        ))

    console.print(table)


def _print_plain(value: Any) -> None:
    if isinstance(value, list):
        for item in value:
            _print_plain(item)
    elif isinstance(value, dict):
        for key, item in value.items():
            typer.echo(f"{key}={format_cell(item)}")
    elif value is None:
        typer.echo("null")
    else:
        typer.echo(format_cell(value))
