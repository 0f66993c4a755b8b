"""langbundle exception hierarchy.

Translation resolution itself never raises: every error below is either
raised at construction time (configuration) or caught and recovered
inside the package (resource loading, template rendering). They are
public so that custom loaders and callers of the lower-level APIs can
raise and catch the same types.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "InvalidLanguageTagError",
    "LocalizationError",
    "ResourceLoadError",
    "TemplateError",
    "TemplateRenderError",
    "TemplateSyntaxError",
]


class LocalizationError(Exception):
    """Base exception for all langbundle errors."""


class InvalidLanguageTagError(LocalizationError, ValueError):
    """Language identifier is not a well-formed BCP-47 / POSIX locale code.

    Subclasses ValueError so that callers validating user input with
    ``except ValueError`` keep working.

    Attributes:
        identifier: The rejected identifier
    """

    def __init__(self, identifier: str, reason: str | None = None) -> None:
        """Initialize InvalidLanguageTagError.

        Args:
            identifier: The rejected identifier
            reason: Optional parser detail appended to the message
        """
        self.identifier = identifier
        msg = f"Invalid language identifier: {identifier!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class ResourceLoadError(LocalizationError):
    """A translation resource could not be decoded.

    Raised by the resource codecs; DirectoryResourceLoader catches it,
    logs it, and skips the offending file.

    Attributes:
        path: Human-readable path of the resource, if known
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize ResourceLoadError.

        Args:
            message: Error description
            path: Human-readable path of the resource
        """
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class TemplateError(LocalizationError):
    """Base class for {{.Field}} template failures.

    The format resolver catches this and returns the unrendered text.
    """


class TemplateSyntaxError(TemplateError):
    """Template source is malformed (unclosed or unsupported action).

    Attributes:
        position: Offset of the offending action in the template source
    """

    def __init__(self, message: str, position: int) -> None:
        """Initialize TemplateSyntaxError.

        Args:
            message: Error description
            position: Offset of the offending action
        """
        self.position = position
        super().__init__(f"{message} at offset {position}")


class TemplateRenderError(TemplateError):
    """Template referenced a field or key the data does not provide."""
