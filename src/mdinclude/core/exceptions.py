from __future__ import annotations

from typing import Any, Dict, Mapping


class MdIncludeError(Exception):
    """Base exception for the mdinclude preprocessor."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class UnreadableFileError(MdIncludeError, OSError):
    """Raised when an include target is missing or cannot be decoded."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        MdIncludeError.__init__(self, message, context=context)
        OSError.__init__(self, message)


class DepthExceededError(MdIncludeError, RecursionError):
    """Describes an include chain that hit the nesting limit.

    The substitution engine records it as a diagnostic; it is never raised
    out of a document.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        MdIncludeError.__init__(self, message, context=context)
        RecursionError.__init__(self, message)


class ConfigError(MdIncludeError, ValueError):
    """Raised when preprocessor settings fail validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        MdIncludeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class BookFormatError(MdIncludeError, ValueError):
    """Raised when the host's ``[context, book]`` payload is malformed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        MdIncludeError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "MdIncludeError",
    "UnreadableFileError",
    "DepthExceededError",
    "ConfigError",
    "BookFormatError",
]
