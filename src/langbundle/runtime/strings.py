"""Deferred translatable strings and errors.

Bundle.string() does not translate. It captures the text and arguments
and returns a LocalizedString; the language is negotiated only when the
final consumer renders it. The same value can therefore be rendered for
several audiences, e.g. logged in the default language and returned to
a user in theirs.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from langbundle.runtime.language_context import get_accept_languages

if TYPE_CHECKING:
    from contextvars import Context

    from langbundle.core import LanguageTag
    from langbundle.runtime.bundle import Bundle

__all__ = ["LocalizedError", "LocalizedString", "Translatable", "localize"]


@runtime_checkable
class Translatable(Protocol):
    """Anything that renders itself for a list of accepted languages."""

    def t(self, context: Context | None = None) -> str:
        """Render for the accepted languages stored in context."""
        ...  # pylint: disable=unnecessary-ellipsis

    def tl(self, *languages: str | LanguageTag) -> str:
        """Render for an explicit list of accepted languages."""
        ...  # pylint: disable=unnecessary-ellipsis


class LocalizedString:
    """Text plus arguments, translated when rendered.

    str() renders in the bundle's default language; t() and tl() negotiate.

    Example:
        >>> greeting = bundle.string("Hello %s", "Ann")
        >>> str(greeting)
        'Hello Ann'
        >>> greeting.tl("zh-CN")
        '你好 Ann'
    """

    __slots__ = ("_args", "_bundle", "_text")

    def __init__(self, bundle: Bundle, text: str, *args: object) -> None:
        self._bundle = bundle
        self._text = text
        self._args = args

    @property
    def bundle(self) -> Bundle:
        """Bundle the text is translated with."""
        return self._bundle

    @property
    def text(self) -> str:
        """Untranslated text (the message key)."""
        return self._text

    @property
    def args(self) -> tuple[object, ...]:
        """Call-time arguments."""
        return self._args

    def t(self, context: Context | None = None) -> str:
        """Translate for the accepted languages in context (current if None)."""
        return self._bundle.translate(get_accept_languages(context), self._text, *self._args)

    def tl(self, *languages: str | LanguageTag) -> str:
        """Translate for an explicit list of accepted languages."""
        return self._bundle.translate(languages, self._text, *self._args)

    def __str__(self) -> str:
        """Render in the bundle's default language."""
        return self._bundle.translate((), self._text, *self._args)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"LocalizedString(bundle={self._bundle.name!r}, text={self._text!r})"


class LocalizedError(Exception):
    """Exception whose message is a LocalizedString.

    str(error) is the default-language rendering, so logging and tracebacks
    work unchanged; t() / tl() give the negotiated rendering for display.

    Example:
        >>> try:
        ...     raise bundle.error("File %s not found", "a.txt")
        ... except LocalizedError as e:
        ...     message = e.tl("de")
    """

    def __init__(self, message: LocalizedString) -> None:
        super().__init__(message.text)
        self._message = message

    @property
    def message(self) -> LocalizedString:
        """The deferred message."""
        return self._message

    def t(self, context: Context | None = None) -> str:
        """Translate for the accepted languages in context (current if None)."""
        return self._message.t(context)

    def tl(self, *languages: str | LanguageTag) -> str:
        """Translate for an explicit list of accepted languages."""
        return self._message.tl(*languages)

    def __str__(self) -> str:
        """Render in the bundle's default language."""
        return str(self._message)


def localize(value: object, context: Context | None = None) -> str:
    """Render any value for the accepted languages in context.

    Translatable values (LocalizedString, LocalizedError, or any object
    with t()/tl()) are translated; everything else falls back to str().
    """
    if isinstance(value, Translatable):
        return value.t(context)
    return str(value)
