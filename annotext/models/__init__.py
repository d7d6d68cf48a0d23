"""Public exports for input-file data models."""

from __future__ import annotations

from .document import AnnotationModel, ContentDocument, RegistryConfig, RuleConfig

__all__ = [
    "AnnotationModel",
    "ContentDocument",
    "RegistryConfig",
    "RuleConfig",
]
