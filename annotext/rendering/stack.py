"""
Nesting stack for one render pass.

Tracks which annotations are open in the output so far, outermost first.
Closing an annotation that is not innermost closes everything above it,
closes the target, then reopens the rest so the output stays a valid tree.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from annotext.domain import Annotation
from annotext.exceptions import AnnotationReuseError, StackConsistencyError

from .renderer_iface import RenderRule

LOGGER = logging.getLogger(__name__)


class NestingStack:
    def __init__(self) -> None:
        self._entries: List[Tuple[Annotation, RenderRule]] = []
        # Instances already removed during this pass, keyed by id() and held
        # here so the key cannot be reused by a new object
        self._closed: Dict[int, Annotation] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Annotation]:
        return (ann for ann, _ in self._entries)

    def index_of(self, annotation: Annotation) -> int:
        for i, (ann, _) in enumerate(self._entries):
            if ann is annotation:
                return i
        return -1

    def open(
        self, annotation: Annotation, rule: RenderRule, index: Optional[int] = None
    ) -> str:
        if id(annotation) in self._closed:
            raise AnnotationReuseError(
                f"annotation {annotation!r} reopened after it was closed",
                annotation=annotation,
                index=index,
            )
        self._entries.append((annotation, rule))
        return rule.render_open(annotation.data)

    def close(self, annotation: Annotation, index: Optional[int] = None) -> str:
        if self._entries and self._entries[-1][0] is annotation:
            _, rule = self._entries.pop()
            self._closed[id(annotation)] = annotation
            return rule.render_close(annotation.data)

        depth = self.index_of(annotation)
        if depth == -1:
            raise StackConsistencyError(
                f"invalid stack: {annotation!r} is missing from the stack",
                annotation=annotation,
                index=index,
            )
        above = self._entries[depth + 1 :]
        _, rule = self._entries[depth]
        LOGGER.debug(
            "annotext.stack.buried_close type=%s id=%d depth=%d above=%d",
            annotation.type,
            annotation.id,
            depth,
            len(above),
        )
        parts = [r.render_close(a.data) for a, r in reversed(above)]
        parts.append(rule.render_close(annotation.data))
        parts.extend(r.render_open(a.data) for a, r in above)
        del self._entries[depth]
        self._closed[id(annotation)] = annotation
        return "".join(parts)

    def drain(self) -> str:
        """Close everything still open, innermost first."""
        parts: List[str] = []
        while self._entries:
            ann, rule = self._entries.pop()
            self._closed[id(ann)] = ann
            parts.append(rule.render_close(ann.data))
        return "".join(parts)
