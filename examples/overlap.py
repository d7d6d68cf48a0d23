"""Example: render overlapping annotations and show how the stack resolves them."""

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

from annotext import Annotation, ContentUnit, render, render_page
from annotext.rendering.debug_tools import dump_transitions_text

install(show_locals=True)

console = Console()


def build_units():
    """'bold italic link': bold ends inside the italic run, link starts inside it."""
    bold = Annotation("textStyle/bold")
    italic = Annotation("textStyle/italic")
    link = Annotation("link/external", {"href": "https://example.com"})

    units = []
    for ch in "bold ":
        units.append(ContentUnit(ch, (bold,)))
    for ch in "ital":
        units.append(ContentUnit(ch, (bold, italic)))
    for ch in "ic ":
        units.append(ContentUnit(ch, (italic,)))
    for ch in "li":
        units.append(ContentUnit(ch, (italic, link)))
    for ch in "nk":
        units.append(ContentUnit(ch, (link,)))
    units.append("\n")
    return units


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="annotext overlap example.")
    parser.add_argument("--page", action="store_true", help="Print a full HTML page.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console)],
    )

    units = build_units()
    fragment = render(units)

    console.rule("Transitions")
    console.print(dump_transitions_text(units), markup=False)
    console.rule("HTML")
    console.print(render_page(fragment, title="overlap") if args.page else fragment, markup=False)


if __name__ == "__main__":
    main()
