"""Normalized language tags and the process-wide tag parse cache.

LanguageTag is the unit every other component compares: the Matcher
scores tags, translation tables are keyed by tags, and resource folder
names are parsed into tags. Parsing is delegated to Babel's locale
identifier parser, which already normalizes subtag case.

Python 3.13+. External dependency: Babel.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass

from langbundle.constants import MAX_LANGUAGE_TAG_CACHE_SIZE, UNDEFINED_LANGUAGE
from langbundle.diagnostics import InvalidLanguageTagError
from langbundle.locale_utils import get_likely_subtags, normalize_locale

__all__ = [
    "UND",
    "LanguageTag",
    "coerce_language_tag",
    "parse_language_tag",
    "parse_language_tags",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageTag:
    """Normalized language identifier.

    Equality is structural over the normalized subtags, so "zh-cn",
    "zh_CN" and "ZH-cn" all parse to the same tag.

    Attributes:
        language: Primary language subtag, lower-case ("zh")
        script: Script subtag, title-case ("Hant"), or None
        territory: Region subtag, upper-case ("TW"), or None
        variant: Variant subtag, upper-case, or None

    Example:
        >>> tag = LanguageTag.parse("zh_hant_tw")
        >>> str(tag)
        'zh-Hant-TW'
        >>> tag.posix
        'zh_Hant_TW'
        >>> tag == LanguageTag.parse("ZH-Hant-tw")
        True
    """

    language: str
    script: str | None = None
    territory: str | None = None
    variant: str | None = None

    @classmethod
    def parse(cls, identifier: str) -> LanguageTag:
        """Parse a BCP-47 or POSIX identifier.

        Hyphens and underscores are both accepted; an encoding suffix
        (".UTF-8") or modifier ("@euro") is dropped.

        Args:
            identifier: Language identifier (e.g., "en", "zh-CN", "pt_BR")

        Returns:
            Normalized LanguageTag

        Raises:
            InvalidLanguageTagError: If identifier is empty or malformed
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise InvalidLanguageTagError(str(identifier), "empty identifier")

        # Lazy import: Babel loads CLDR data at import time; defer until needed
        from babel.core import parse_locale  # noqa: PLC0415

        try:
            language, territory, script, variant, *_ = parse_locale(
                normalize_locale(identifier.strip())
            )
        except ValueError as e:
            raise InvalidLanguageTagError(identifier, str(e)) from e

        if not (language.isascii() and 2 <= len(language) <= 8):
            raise InvalidLanguageTagError(identifier, "primary subtag must be 2-8 ASCII letters")

        return cls(language, script, territory, variant)

    @property
    def is_undefined(self) -> bool:
        """True for the distinguished undefined tag ("und")."""
        return self.language == UNDEFINED_LANGUAGE

    @property
    def posix(self) -> str:
        """Babel/POSIX form with underscores (e.g., "zh_Hant_TW")."""
        return "_".join(self._subtags())

    def maximize(self) -> LanguageTag:
        """Return the tag with CLDR likely script and territory filled in.

        Used only for matching: "en" and "en-US" both maximize to
        "en-Latn-US". Tags CLDR knows nothing about are returned unchanged.
        """
        if self.is_undefined:
            return self
        script, territory = get_likely_subtags(self.language, self.script, self.territory)
        if script == self.script and territory == self.territory:
            return self
        return LanguageTag(self.language, script, territory, self.variant)

    def _subtags(self) -> tuple[str, ...]:
        return tuple(
            part
            for part in (self.language, self.script, self.territory, self.variant)
            if part
        )

    def __str__(self) -> str:
        """Return BCP-47 form with hyphens (e.g., "zh-Hant-TW")."""
        return "-".join(self._subtags())


UND = LanguageTag(UNDEFINED_LANGUAGE)
"""The undefined tag; result of parsing a malformed identifier."""


@functools.lru_cache(maxsize=MAX_LANGUAGE_TAG_CACHE_SIZE)
def parse_language_tag(identifier: str) -> LanguageTag:
    """Parse a language identifier, memoizing the result.

    This is the hot-path parser: accepted-language lists are parsed on
    every translation call. Unlike LanguageTag.parse(), it never raises;
    malformed identifiers map to UND so callers can simply skip them.

    Thread-safe via lru_cache internal locking.

    Args:
        identifier: Language identifier (e.g., "en-US")

    Returns:
        Parsed LanguageTag, or UND if the identifier is malformed
    """
    try:
        return LanguageTag.parse(identifier)
    except InvalidLanguageTagError as e:
        logger.debug("Ignoring language identifier: %s", e)
        return UND


def coerce_language_tag(value: str | LanguageTag) -> LanguageTag:
    """Return value unchanged if it is a LanguageTag, else parse it (cached)."""
    if isinstance(value, LanguageTag):
        return value
    return parse_language_tag(value)


def parse_language_tags(*identifiers: str | LanguageTag) -> tuple[LanguageTag, ...]:
    """Parse several identifiers, keeping order and UND placeholders.

    Args:
        identifiers: Language identifiers or already-parsed tags

    Returns:
        Tuple of tags, one per input
    """
    return tuple(coerce_language_tag(identifier) for identifier in identifiers)
