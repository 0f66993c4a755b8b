"""Core types shared across the runtime and localization layers.

This package provides the language tag type that both the runtime layer
(matching, bundles) and the localization layer (loaders, registry)
depend on. By isolating it here, we maintain a clean dependency graph:

    core <- runtime <- localization

Exports:
    LanguageTag: Normalized language identifier
    UND: The undefined language tag
    parse_language_tag: Cached, non-raising identifier parser

Python 3.13+.
"""

from .language_tag import (
    UND,
    LanguageTag,
    coerce_language_tag,
    parse_language_tag,
    parse_language_tags,
)

__all__ = [
    "UND",
    "LanguageTag",
    "coerce_language_tag",
    "parse_language_tag",
    "parse_language_tags",
]
