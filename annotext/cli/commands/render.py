"""Render command for the annotext CLI."""

from pathlib import Path
from typing import Optional

import typer

from annotext.cli.utils import loading
from annotext.domain import Range
from annotext.exceptions import RenderError
from annotext.rendering.options import RenderConfig
from annotext.rendering.renderer import render, render_page


def main(
    path: Path = typer.Argument(..., help="JSON document to render"),
    registry: Optional[Path] = typer.Option(
        None, "--registry", "-r", help="JSON rule file extending the built-in rules"
    ),
    page: bool = typer.Option(False, "--page", help="Wrap output in a full HTML page"),
    title: str = typer.Option("", "--title", help="Page title (with --page)"),
    whitespace_markers: bool = typer.Option(
        True,
        "--whitespace-markers/--no-whitespace-markers",
        help="Render newline and tab as visible placeholders",
    ),
    start: int = typer.Option(0, "--start", help="First unit to render"),
    end: Optional[int] = typer.Option(None, "--end", help="Unit to stop before"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout"
    ),
):
    """Render a document to HTML."""
    units = loading.get_units(path)
    rules = loading.get_registry(registry)
    config = RenderConfig(whitespace_markers=whitespace_markers)

    try:
        out = render(units, rules, config, span=Range(start, end))
    except RenderError as e:
        raise loading.fail(str(e))

    if page:
        out = render_page(out, title=title or path.stem, config=config)

    if output is None:
        typer.echo(out)
        return
    output.write_text(out, encoding="utf-8")
    loading.console.print(f"Wrote [bold]{output}[/bold]")
