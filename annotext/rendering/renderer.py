"""
Pure renderer for annotated content.

Converts a flat sequence of content units into an HTML string in which every
annotation is a properly nested open/close pair, even when the annotation
ranges overlap without nesting. No I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from tinyhtml import h, raw

from annotext.domain import Annotation, ContentUnit, Range, UnitLike, as_unit

from .escaper import DEFAULT_ESCAPER, Escaper
from .options import RenderConfig
from .registry import AnnotationRegistry, default_registry
from .renderer_iface import RuleLookup
from .stack import NestingStack

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """What the renderer emitted for one unit.

    ``markup`` holds the tags emitted before the character; ``text`` is the
    escaped character. The trailing transition that drains the stack has
    ``char == ""`` and ``index`` equal to the end of the walked range.
    """

    index: int
    char: str
    closes: Tuple[Annotation, ...]
    opens: Tuple[Annotation, ...]
    markup: str
    text: str


def _contains(anns: Sequence[Annotation], target: Annotation) -> bool:
    return any(a is target for a in anns)


def _diff(
    left: Tuple[Annotation, ...], right: Tuple[Annotation, ...]
) -> Tuple[Tuple[Annotation, ...], Tuple[Annotation, ...]]:
    """Return ``(closes, opens)`` for the step from ``left`` to ``right``."""
    if not left and not right:
        return (), ()
    if left and not right:
        # [annotated][plain]: close everything left had
        return left, ()
    if not left and right:
        # [plain][annotated]: open everything right has
        return (), right
    closes = tuple(a for a in left if not _contains(right, a))
    opens = tuple(a for a in right if not _contains(left, a))
    return closes, opens


def _prepare(
    registry: Optional[RuleLookup], config: Optional[RenderConfig]
) -> Tuple[RuleLookup, Escaper]:
    if registry is None:
        registry = default_registry()
    elif isinstance(registry, AnnotationRegistry):
        registry.freeze()
    escaper = DEFAULT_ESCAPER if config is None else Escaper.from_config(config)
    return registry, escaper


def walk(
    units: Iterable[UnitLike],
    registry: Optional[RuleLookup] = None,
    config: Optional[RenderConfig] = None,
    *,
    span: Optional[Range] = None,
) -> Iterator[Transition]:
    """Yield one ``Transition`` per unit, then one for the final drain."""
    registry, escaper = _prepare(registry, config)
    debug = bool(config and config.debug)
    items: List[UnitLike] = list(units)
    start, end = (span or Range()).normalize(len(items))

    stack = NestingStack()
    previous: Tuple[Annotation, ...] = ()
    for index in range(start, end):
        unit: ContentUnit = as_unit(items[index])
        closes, opens = _diff(previous, unit.annotations)
        parts: List[str] = []
        for ann in closes:
            if registry.lookup(ann.type) is None:
                continue
            parts.append(stack.close(ann, index))
        for ann in opens:
            rule = registry.lookup(ann.type)
            if rule is None:
                LOGGER.debug(
                    "annotext.renderer.unknown_type type=%s index=%d", ann.type, index
                )
                continue
            parts.append(stack.open(ann, rule, index))
        if debug and (closes or opens):
            LOGGER.debug(
                "annotext.renderer.transition index=%d closes=%d opens=%d depth=%d",
                index,
                len(closes),
                len(opens),
                len(stack),
            )
        yield Transition(
            index=index,
            char=unit.char,
            closes=closes,
            opens=opens,
            markup="".join(parts),
            text=escaper.render(unit.char),
        )
        previous = unit.annotations

    if len(stack):
        remaining = tuple(reversed(list(stack)))
        yield Transition(
            index=end,
            char="",
            closes=remaining,
            opens=(),
            markup=stack.drain(),
            text="",
        )


def iter_markup(
    units: Iterable[UnitLike],
    registry: Optional[RuleLookup] = None,
    config: Optional[RenderConfig] = None,
    *,
    span: Optional[Range] = None,
) -> Iterator[str]:
    """Incremental form of ``render``: yields markup fragments in order."""
    for step in walk(units, registry, config, span=span):
        if step.markup:
            yield step.markup
        if step.text:
            yield step.text


def render(
    units: Iterable[UnitLike],
    registry: Optional[RuleLookup] = None,
    config: Optional[RenderConfig] = None,
    *,
    span: Optional[Range] = None,
) -> str:
    """Render ``units`` to an HTML fragment string.

    Raises ``StackConsistencyError`` if the annotation sequence closes an
    instance that was never opened; no partial output is returned.
    """
    return "".join(iter_markup(units, registry, config, span=span))


_PAGE_CSS = (
    "body{font-family:-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,sans-serif;line-height:1.4}"
    ".ve-ce-content{white-space:pre-wrap}"
    ".ve-ce-content-whitespace{color:#aaa}"
    ".ve-ce-content-format-object{background:#f3f3f3}"
    ".ve-ce-content-format-link{color:#36c;text-decoration:underline}"
    ".ve-ce-content-format-textStyle-strong{font-weight:bold}"
    ".ve-ce-content-format-textStyle-emphasize{font-style:italic}"
    ".ve-ce-content-format-textStyle-big{font-size:1.2em}"
    ".ve-ce-content-format-textStyle-small{font-size:.8em}"
    ".ve-ce-content-format-textStyle-superScript{vertical-align:super;font-size:.8em}"
    ".ve-ce-content-format-textStyle-subScript{vertical-align:sub;font-size:.8em}"
    "@media (prefers-color-scheme: dark){"
    "body{background:#111;color:#eee}"
    ".ve-ce-content-whitespace{color:#666}"
    ".ve-ce-content-format-object{background:#222}"
    ".ve-ce-content-format-link{color:#8ab4f8}"
    "}"
)


def render_page(
    html_fragment: str,
    title: str = "",
    extra_css: str = "",
    config: Optional[RenderConfig] = None,
) -> str:
    container = (config or RenderConfig()).page_container_class
    return (
        '<!doctype html><meta charset="utf-8">'
        '<meta name="color-scheme" content="light dark">'
        + h("title")(title).render()
        + h("style")(raw(_PAGE_CSS + extra_css)).render()
        + h("div", **{"class": container})(raw(html_fragment)).render()
    )


class ContentRenderer:
    """Class-based interface for content rendering."""

    def __init__(
        self,
        registry: Optional[RuleLookup] = None,
        config: Optional[RenderConfig] = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.config = config or RenderConfig()

    def render(self, units: Iterable[UnitLike]) -> str:
        """Render all units to an HTML fragment string."""
        return render(units, self.registry, self.config)

    def render_range(
        self, units: Iterable[UnitLike], start: int = 0, end: Optional[int] = None
    ) -> str:
        """Render the units in ``[start, end)``; reversed bounds are swapped."""
        return render(units, self.registry, self.config, span=Range(start, end))

    def render_page(self, html_fragment: str, title: str = "") -> str:
        """Wrap an HTML fragment in a full page with CSS."""
        return render_page(html_fragment, title=title, config=self.config)
