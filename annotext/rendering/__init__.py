"""Rendering support for annotated content, framework-agnostic.

Contains:
- escaper: single-character markup substitutions
- renderer_iface: RenderRule and its Literal/Computed markup variants
- registry: annotation type -> RenderRule lookup and the built-in rules
- stack: per-pass nesting stack with buried-close handling
- renderer: pure HTML renderer (fragment + page)
"""

from .escaper import Escaper
from .options import RenderConfig
from .registry import AnnotationRegistry, default_registry
from .renderer import ContentRenderer, iter_markup, render, render_page
from .renderer_iface import Computed, Literal, RenderRule, resolve_markup

__all__ = [
    "AnnotationRegistry",
    "Computed",
    "ContentRenderer",
    "Escaper",
    "Literal",
    "RenderConfig",
    "RenderRule",
    "default_registry",
    "iter_markup",
    "render",
    "render_page",
    "resolve_markup",
]
