"""Registry configuration.

A single frozen dataclass holding what every Matcher built by a
BundleRegistry starts from. Values are validated at construction so a
typo in a language identifier fails at startup, not on first request.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from langbundle.constants import DEFAULT_LANGUAGE
from langbundle.core import LanguageTag
from langbundle.runtime.matcher import Matcher

__all__ = ["LocalizationConfig"]


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Immutable configuration for bundles created by a registry.

    Constructing ``LocalizationConfig()`` with no arguments gives an
    English-default, non-strict setup where every language found on disk
    is served.

    Attributes:
        default_language: Fallback language (default: "en").
        languages: Languages to limit loading and matching to. A non-empty
            tuple makes every matcher strict: resources for other languages
            are not loaded and never registered (default: empty).

    Example:
        >>> config = LocalizationConfig(default_language="en", languages=("zh-CN",))
        >>> config.strict
        True
        >>> [str(tag) for tag in config.build_matcher().languages]
        ['en', 'zh-CN']
    """

    default_language: str = DEFAULT_LANGUAGE
    languages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate language identifiers at construction time.

        Raises:
            InvalidLanguageTagError: If default_language or any entry of
                languages is malformed
        """
        # Accept lists for convenience; store an immutable tuple
        object.__setattr__(self, "languages", tuple(self.languages))
        LanguageTag.parse(self.default_language)
        for language in self.languages:
            LanguageTag.parse(language)

    @property
    def strict(self) -> bool:
        """Whether matchers built from this config are strict."""
        return bool(self.languages)

    def build_matcher(self) -> Matcher:
        """Create a fresh Matcher for one bundle."""
        return Matcher(self.default_language, *self.languages)

    def with_default_language(self, language: str) -> LocalizationConfig:
        """Return a copy with a different default language.

        Raises:
            InvalidLanguageTagError: If language is malformed
        """
        return dataclasses.replace(self, default_language=language)
