"""
Rule interface for the annotation renderer.

Defines the two markup variants a rule side can take:
  - ``Literal``: a fixed string, the common case (``<b>``, ``</span>``), and
  - ``Computed``: a function of the annotation payload (a link's target).

``resolve_markup`` is the single place that turns either variant into text.
The renderer only ever talks to a ``RuleLookup``; it never inspects how rules
were registered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Union

Payload = Mapping[str, Any]


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Computed:
    func: Callable[[Payload], str]


Markup = Union[Literal, Computed]


def resolve_markup(markup: Markup, payload: Payload) -> str:
    if isinstance(markup, Literal):
        return markup.text
    if isinstance(markup, Computed):
        return markup.func(payload)
    raise TypeError(f"unsupported markup variant: {type(markup).__name__}")


@dataclass(frozen=True)
class RenderRule:
    """Open/close markup registered for one annotation type."""

    open: Markup
    close: Markup

    def render_open(self, payload: Payload) -> str:
        return resolve_markup(self.open, payload)

    def render_close(self, payload: Payload) -> str:
        return resolve_markup(self.close, payload)


class RuleLookup(Protocol):
    """Minimal registry seam required by the renderer."""

    def lookup(self, type_: str) -> Optional[RenderRule]: ...
