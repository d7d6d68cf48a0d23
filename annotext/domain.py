# annotext/domain.py
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union

_ids = itertools.count(1)


def _next_id() -> int:
    return next(_ids)


@dataclass(frozen=True, eq=False)
class Annotation:
    """A typed marker applied to one or more contiguous characters.

    Equality and hashing are by identity: two bold spans built from equal
    values are still two annotations. ``id`` is assigned at creation, is
    unique within the process, and is only there to make identity visible in
    logs and traces.
    """

    type: str
    data: Mapping[str, Any] = field(default_factory=dict)
    id: int = field(default_factory=_next_id, init=False)

    def __repr__(self) -> str:
        return f"Annotation(type={self.type!r}, id={self.id})"


@dataclass(frozen=True)
class ContentUnit:
    """One character plus the annotation instances applied to it."""

    char: str
    annotations: Tuple[Annotation, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ValueError(f"content unit must hold one character, got {self.char!r}")
        anns = tuple(self.annotations)
        seen = set()
        for ann in anns:
            if id(ann) in seen:
                raise ValueError(
                    f"annotation {ann!r} appears twice on character {self.char!r}"
                )
            seen.add(id(ann))
        object.__setattr__(self, "annotations", anns)

    @property
    def is_plain(self) -> bool:
        return not self.annotations


UnitLike = Union[str, ContentUnit]


def as_unit(item: UnitLike) -> ContentUnit:
    if isinstance(item, ContentUnit):
        return item
    if isinstance(item, str):
        return ContentUnit(item)
    raise TypeError(f"expected str or ContentUnit, got {type(item).__name__}")


@dataclass(frozen=True)
class Range:
    """Half-open ``[start, end)`` span of unit indexes."""

    start: int = 0
    end: Optional[int] = None

    def normalize(self, length: int) -> Tuple[int, int]:
        """Return clamped ``(start, end)``, swapping reversed bounds."""
        start = self.start
        end = length if self.end is None else self.end
        if start > end:
            start, end = end, start
        start = max(0, min(start, length))
        end = max(0, min(end, length))
        return start, end
