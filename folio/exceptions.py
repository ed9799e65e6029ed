"""Exceptions shared across FOLIO contexts."""

from pathlib import Path
from typing import Optional


class FolioError(Exception):
    """Base class for all FOLIO errors."""


class CompositionError(FolioError):
    """Raised when request data cannot be turned into a document."""


class InvalidFilenameError(CompositionError):
    """
    Raised in strict mode when a filename does not follow the <course>_<assignment> convention.

    Attributes:
        filename: The offending filename
    """

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"Filename '{filename}' does not match '<course code>_<assignment number>'"
        )


class ProtectedResourceError(FolioError):
    """Raised when attempting to remove a resource that must always exist (the Default theme)."""


class ThemeNotFoundError(FolioError, KeyError):
    """Raised when activating a theme name that is not stored for the language."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class RenderFailure(FolioError):
    """
    Raised when the headless browser cannot produce a PDF.

    Covers browser launch, navigation, font-readiness timeouts and capture errors.

    Attributes:
        reason: Human-readable failure description
        original_error: The underlying exception, when there is one
    """

    def __init__(self, reason: str, original_error: Optional[Exception] = None):
        self.reason = reason
        self.original_error = original_error

        message = reason
        if original_error is not None:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class PathTraversalError(FolioError, ValueError):
    """Raised when a caller-supplied path resolves outside the documents root."""

    def __init__(self, path: str, root: Path):
        self.path = path
        self.root = root
        super().__init__(f"Path '{path}' escapes documents root {root}")
