"""Trace command for the annotext CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from annotext.cli.utils import loading
from annotext.exceptions import RenderError
from annotext.rendering.debug_tools import annotate_units_html, map_transitions

console = Console()


def main(
    path: Path = typer.Argument(..., help="JSON document to trace"),
    registry: Optional[Path] = typer.Option(
        None, "--registry", "-r", help="JSON rule file extending the built-in rules"
    ),
    html_out: Optional[Path] = typer.Option(
        None, "--html", help="Write an annotated HTML page instead of a table"
    ),
    changes_only: bool = typer.Option(
        True, "--changes-only/--all", help="Only list units where tags change"
    ),
):
    """Show which annotations close and open before each unit."""
    units = loading.get_units(path)
    rules = loading.get_registry(registry)

    try:
        if html_out is not None:
            html_out.write_text(annotate_units_html(units, rules), encoding="utf-8")
            loading.console.print(f"Wrote [bold]{html_out}[/bold]")
            return
        rows = map_transitions(units, rules)
    except RenderError as e:
        raise loading.fail(str(e))

    table = Table("Index", "Char", "Close", "Open", "Markup")
    for row in rows:
        if changes_only and not (row["closes"] or row["opens"]):
            continue
        char = str(row["char"])
        table.add_row(
            str(row["index"]),
            repr(char) if char else "(end)",
            "\n".join(row["closes"]),  # type: ignore[arg-type]
            "\n".join(row["opens"]),  # type: ignore[arg-type]
            Text(str(row["markup"])),
        )
    console.print(table)
