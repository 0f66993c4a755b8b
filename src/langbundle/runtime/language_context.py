"""Request-scoped carrier for the caller's accepted languages.

Whatever extracts a user's language preferences (a web middleware, a bot
handler, a CLI flag) stores them here; LocalizedString.t() reads them
back. A ContextVar follows the usual contextvars rules: each thread and
each asyncio task sees its own value.

Example:
    >>> with accept_languages("de-AT", "en"):
    ...     greeting.t()
    'Servus'

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import Context, ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "accept_languages",
    "get_accept_languages",
    "reset_accept_languages",
    "set_accept_languages",
]

_accept_languages: ContextVar[tuple[str, ...]] = ContextVar(
    "langbundle_accept_languages", default=()
)


def get_accept_languages(context: Context | None = None) -> tuple[str, ...]:
    """Return the accepted languages, most preferred first.

    Args:
        context: Context to read from; the current context if None

    Returns:
        Accepted language identifiers; empty if none were set
    """
    if context is None:
        return _accept_languages.get()
    return context.get(_accept_languages, ())


def set_accept_languages(*languages: str) -> Token[tuple[str, ...]]:
    """Set the accepted languages in the current context.

    Returns:
        Token for reset_accept_languages()
    """
    return _accept_languages.set(tuple(languages))


def reset_accept_languages(token: Token[tuple[str, ...]]) -> None:
    """Restore the value that was current before set_accept_languages()."""
    _accept_languages.reset(token)


@contextmanager
def accept_languages(*languages: str) -> Generator[tuple[str, ...]]:
    """Set the accepted languages for the duration of a with block."""
    token = set_accept_languages(*languages)
    try:
        yield tuple(languages)
    finally:
        reset_accept_languages(token)
