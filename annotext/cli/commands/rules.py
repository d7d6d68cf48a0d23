"""Rules command for the annotext CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from annotext.cli.utils import loading
from annotext.rendering.renderer_iface import Literal, Markup

console = Console()


def _describe(markup: Markup) -> str:
    if isinstance(markup, Literal):
        return markup.text
    return "(computed)"


def main(
    registry: Optional[Path] = typer.Option(
        None, "--registry", "-r", help="JSON rule file extending the built-in rules"
    ),
):
    """List registered annotation types."""
    rules = loading.get_registry(registry)

    if not len(rules):
        console.print("No rules registered")
        return

    table = Table("Type", "Open", "Close")
    for type_, rule in rules.items():
        table.add_row(type_, _describe(rule.open), _describe(rule.close))
    console.print(table)
