"""Command modules for the annotext CLI."""

from annotext.cli.commands import render, rules, trace

__all__ = ["render", "rules", "trace"]
