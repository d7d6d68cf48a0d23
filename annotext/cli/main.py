#!/usr/bin/env python
"""Command line interface for annotext."""

import typer

from annotext.cli.commands import render, rules, trace
from annotext.cli.utils import loading

app = typer.Typer(help="Render annotated content to nested HTML")

app.command("render")(render.main)
app.command("trace")(trace.main)
app.command("rules")(rules.main)


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
):
    """Render annotated character sequences to correctly nested markup."""
    loading.configure_logging(verbose)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
