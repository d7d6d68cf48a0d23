"""Utility functions shared by the annotext CLI commands."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from annotext.decoding import load_document, load_registry
from annotext.domain import ContentUnit
from annotext.exceptions import AnnotextException
from annotext.rendering.registry import AnnotationRegistry, default_registry

console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route library logs through rich; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def fail(message: str) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {message}")
    return typer.Exit(1)


def get_units(path: Path) -> List[ContentUnit]:
    """Load a document, exiting with a readable error when it is invalid."""
    try:
        return load_document(path)
    except OSError as e:
        raise fail(f"Could not read {path}: {e}")
    except AnnotextException as e:
        raise fail(str(e))


def get_registry(path: Optional[Path]) -> AnnotationRegistry:
    """Return the built-in rules, extended by ``path`` when given."""
    if path is None:
        return default_registry()
    try:
        return load_registry(path)
    except OSError as e:
        raise fail(f"Could not read {path}: {e}")
    except AnnotextException as e:
        raise fail(str(e))
