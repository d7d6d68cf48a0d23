"""
Annotation type -> render rule registry.

A registry is built up front (defaults, config file, or ``register`` calls)
and frozen before the first render. Rendering never mutates it, so one frozen
registry can back any number of concurrent renders.
"""

from __future__ import annotations

import html
import logging
import string
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple, Union

from annotext.exceptions import RegistryFrozenError

from .renderer_iface import Computed, Literal, Markup, Payload, RenderRule

LOGGER = logging.getLogger(__name__)

MarkupSpec = Union[str, Callable[[Payload], str], Literal, Computed]


def as_markup(spec: MarkupSpec) -> Markup:
    if isinstance(spec, (Literal, Computed)):
        return spec
    if isinstance(spec, str):
        return Literal(spec)
    if callable(spec):
        return Computed(spec)
    raise TypeError(f"markup must be a string or a callable, got {type(spec).__name__}")


class _EscapedPayload(dict):
    def __missing__(self, key: str) -> str:
        return ""


def check_template(template: str) -> None:
    """Raise ``ValueError`` unless every field in ``template`` is a bare payload key."""
    for _, field_name, format_spec, conversion in string.Formatter().parse(template):
        if field_name is None:
            continue
        if not field_name or field_name.isdigit():
            raise ValueError(f"template {template!r} uses a positional field")
        if "." in field_name or "[" in field_name:
            raise ValueError(
                f"template {template!r} field {field_name!r} must be a plain key"
            )
        if format_spec or conversion:
            raise ValueError(
                f"template {template!r} field {field_name!r} takes no format options"
            )


def template_markup(template: str) -> Computed:
    """Build a ``Computed`` markup from a ``str.format`` template.

    Payload values are HTML-escaped before substitution; missing keys render
    as an empty string. Malformed templates raise ``ValueError`` here rather
    than at render time.
    """
    check_template(template)

    def _render(payload: Payload) -> str:
        values = _EscapedPayload(
            (str(k), html.escape(str(v))) for k, v in (payload or {}).items()
        )
        return template.format_map(values)

    return Computed(_render)


class AnnotationRegistry:
    """Maps annotation types to ``RenderRule`` values."""

    def __init__(self, rules: Optional[Mapping[str, RenderRule]] = None):
        self._rules: Dict[str, RenderRule] = dict(rules or {})
        self._frozen = False

    def register(
        self, type_: str, open: MarkupSpec, close: MarkupSpec
    ) -> RenderRule:
        if self._frozen:
            raise RegistryFrozenError(
                f"cannot register {type_!r}: registry is frozen"
            )
        rule = RenderRule(open=as_markup(open), close=as_markup(close))
        if type_ in self._rules:
            LOGGER.debug("annotext.registry.override type=%s", type_)
        self._rules[type_] = rule
        return rule

    def lookup(self, type_: str) -> Optional[RenderRule]:
        return self._rules.get(type_)

    def freeze(self) -> "AnnotationRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "AnnotationRegistry":
        """Return an unfrozen registry holding the same rules."""
        return AnnotationRegistry(self._rules)

    def items(self) -> Iterator[Tuple[str, RenderRule]]:
        return iter(sorted(self._rules.items()))

    def __contains__(self, type_: object) -> bool:
        return type_ in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._rules))

    def __len__(self) -> int:
        return len(self._rules)


# ----------------------------- Built-in rules --------------------------------

_SPAN_CLOSE = "</span>"

_TEXT_STYLE_CLASSES = (
    "strong",
    "emphasize",
    "big",
    "small",
    "superScript",
    "subScript",
)


def _object_open(data: Payload) -> str:
    # Inline objects carry pre-rendered markup from the content model
    return '<span class="ve-ce-content-format-object">' + str(data.get("html", ""))


def _external_link_open(data: Payload) -> str:
    href = html.escape(str(data.get("href", "")))
    return f'<span class="ve-ce-content-format-link" data-href="{href}">'


def _internal_link_open(data: Payload) -> str:
    title = html.escape(str(data.get("title", "")))
    return f'<span class="ve-ce-content-format-link" data-title="wiki/{title}">'


def build_default_registry() -> AnnotationRegistry:
    """Return a fresh, unfrozen registry holding the built-in rules."""
    registry = AnnotationRegistry()
    registry.register("object/template", _object_open, _SPAN_CLOSE)
    registry.register("object/hook", _object_open, _SPAN_CLOSE)
    registry.register("textStyle/bold", "<b>", "</b>")
    registry.register("textStyle/italic", "<i>", "</i>")
    for name in _TEXT_STYLE_CLASSES:
        registry.register(
            f"textStyle/{name}",
            f'<span class="ve-ce-content-format-textStyle-{name}">',
            _SPAN_CLOSE,
        )
    registry.register("link/external", _external_link_open, _SPAN_CLOSE)
    registry.register("link/internal", _internal_link_open, _SPAN_CLOSE)
    return registry


_DEFAULT_REGISTRY = build_default_registry().freeze()


def default_registry() -> AnnotationRegistry:
    """Return the shared, frozen registry of built-in rules."""
    return _DEFAULT_REGISTRY
