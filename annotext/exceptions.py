"""Library exceptions."""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from annotext.domain import Annotation


class AnnotextException(Exception):
    """Generic annotext exception."""


# ----------------------------- Render Errors ---------------------------------


class RenderError(AnnotextException):
    """Base render-time error."""


class StackConsistencyError(RenderError):
    """A close was requested for an annotation that is not open.

    The content model handed the renderer an annotation sequence in which an
    instance disappears without ever having been recorded as open. The render
    call is aborted; there is no partial output.
    """

    def __init__(
        self,
        message: str,
        annotation: Optional["Annotation"] = None,
        index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.annotation = annotation
        self.index = index


class AnnotationReuseError(StackConsistencyError):
    """An annotation instance was opened again after it had been closed."""


# ----------------------------- Config Errors ---------------------------------


class RegistryFrozenError(AnnotextException):
    """Rules cannot be registered once a registry is frozen."""


class ContentDecodeError(AnnotextException):
    """A document or registry configuration could not be decoded."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload
