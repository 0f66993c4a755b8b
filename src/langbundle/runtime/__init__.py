"""Bundle resolution engine: negotiation, lazy loading and formatting.

Exports:
    Bundle: Addressable unit of translations
    Matcher: Confidence-scored language negotiation
    LocalizedString / LocalizedError: Deferred translatable values
    resolve_format / FormatRequest: Argument substitution
    accept_languages: Context carrier for the caller's languages

Python 3.13+.
"""

from .bundle import Bundle, is_singular
from .formatter import FormatRequest, classify_argument, resolve_format
from .language_context import (
    accept_languages,
    get_accept_languages,
    reset_accept_languages,
    set_accept_languages,
)
from .matcher import Matcher, score_match
from .rwlock import RWLock
from .strings import LocalizedError, LocalizedString, Translatable, localize
from .template import Template, compile_template, render_template

__all__ = [
    "Bundle",
    "FormatRequest",
    "LocalizedError",
    "LocalizedString",
    "Matcher",
    "RWLock",
    "Template",
    "Translatable",
    "accept_languages",
    "classify_argument",
    "compile_template",
    "get_accept_languages",
    "is_singular",
    "localize",
    "render_template",
    "reset_accept_languages",
    "resolve_format",
    "score_match",
    "set_accept_languages",
]
