"""
Render configuration for annotated-content HTML output.

Centralizes behavior flags so callers can tune defaults without touching
core logic. A ``None`` config at call sites means "use module defaults".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class RenderConfig:
    # Logging/debug: emit a debug record for every stack transition
    debug: bool = False

    # Newline and tab render as visible placeholder spans. When False they
    # render as the bare characters.
    whitespace_markers: bool = True

    # Extra or overriding character -> substitution entries for the escaper.
    extra_characters: Mapping[str, str] = field(default_factory=dict)

    # Class on the wrapper <div> produced by render_page()
    page_container_class: str = "ve-ce-content"
