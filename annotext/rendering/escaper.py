"""
Character escaping for rendered content.

Every literal character the renderer emits goes through an ``Escaper``.
Markup metacharacters become entities; newline and tab become visible
placeholder spans so the editing surface shows them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .options import RenderConfig

WHITESPACE_CLASS = "ve-ce-content-whitespace"

MARKUP_CHARACTERS: Mapping[str, str] = MappingProxyType(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "'": "&#039;",
        '"': "&quot;",
    }
)

WHITESPACE_CHARACTERS: Mapping[str, str] = MappingProxyType(
    {
        "\n": f'<span class="{WHITESPACE_CLASS}">&#182;</span>',
        "\t": f'<span class="{WHITESPACE_CLASS}">&#8702;</span>',
    }
)


class Escaper:
    """Maps single characters to markup substitutions."""

    def __init__(self, table: Optional[Mapping[str, str]] = None):
        if table is None:
            table = {**MARKUP_CHARACTERS, **WHITESPACE_CHARACTERS}
        for ch in table:
            if len(ch) != 1:
                raise ValueError(f"escape table keys must be single characters: {ch!r}")
        self._table: Mapping[str, str] = MappingProxyType(dict(table))

    @classmethod
    def from_config(cls, config: Optional[RenderConfig]) -> "Escaper":
        table: Dict[str, str] = dict(MARKUP_CHARACTERS)
        if config is None or config.whitespace_markers:
            table.update(WHITESPACE_CHARACTERS)
        if config is not None and config.extra_characters:
            table.update(config.extra_characters)
        return cls(table)

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def escape(self, char: str) -> Optional[str]:
        """Return the substitution for ``char``, or None to render it as-is."""
        return self._table.get(char)

    def render(self, char: str) -> str:
        sub = self._table.get(char)
        return char if sub is None else sub


DEFAULT_ESCAPER = Escaper()
