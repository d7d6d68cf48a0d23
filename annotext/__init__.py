"""Render annotated character sequences to correctly nested markup."""

from .decoding import ContentDecoder, decode_registry, load_document, load_registry
from .domain import Annotation, ContentUnit, Range
from .exceptions import (
    AnnotationReuseError,
    AnnotextException,
    ContentDecodeError,
    RegistryFrozenError,
    RenderError,
    StackConsistencyError,
)
from .rendering import (
    AnnotationRegistry,
    ContentRenderer,
    RenderConfig,
    default_registry,
    iter_markup,
    render,
    render_page,
)

__all__ = [
    "Annotation",
    "AnnotationRegistry",
    "AnnotationReuseError",
    "AnnotextException",
    "ContentDecodeError",
    "ContentDecoder",
    "ContentRenderer",
    "ContentUnit",
    "Range",
    "RegistryFrozenError",
    "RenderConfig",
    "RenderError",
    "StackConsistencyError",
    "decode_registry",
    "default_registry",
    "iter_markup",
    "load_document",
    "load_registry",
    "render",
    "render_page",
]
