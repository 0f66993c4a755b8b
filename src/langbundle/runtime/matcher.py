"""Language negotiation between caller preferences and known languages.

A Matcher owns the ordered list of languages a Bundle can serve. Index 0
is the default: it is what negotiation falls back to and what every
lookup falls back to when a key is missing in the negotiated language.

Scoring compares tags after CLDR likely-subtag expansion, so "en" and
"en-US" are an exact match while "zh-TW" (zh-Hant-TW) and "zh-CN"
(zh-Hans-CN) share only their base language:

    EXACT  language, script, territory and variant equal
    HIGH   language and script equal
    LOW    language equal
    NO     different language

Thread Safety:
    Reads (match, negotiate, languages) share an RWLock; mutations
    (match_or_add, set_default) take it exclusively and swap in a new
    immutable state, so a reader never sees a half-updated list.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from langbundle.core import LanguageTag, coerce_language_tag
from langbundle.enums import Confidence
from langbundle.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ["Matcher", "score_match"]

logger = logging.getLogger(__name__)


def score_match(wanted: LanguageTag, supported: LanguageTag) -> Confidence:
    """Score how well a supported language serves a wanted one.

    Both tags must already be maximized (see LanguageTag.maximize) for
    script and territory comparisons to be meaningful. A subtag missing
    on either side is treated as compatible.

    Args:
        wanted: Maximized tag from the caller's preference list
        supported: Maximized tag from the matcher's language list

    Returns:
        Confidence of the pairing
    """
    if wanted.is_undefined or wanted.language != supported.language:
        return Confidence.NO
    if wanted.script and supported.script and wanted.script != supported.script:
        return Confidence.LOW
    if wanted.territory == supported.territory and wanted.variant == supported.variant:
        return Confidence.EXACT
    return Confidence.HIGH


@dataclass(frozen=True, slots=True)
class _MatcherState:
    """Immutable snapshot: languages plus their maximized match index."""

    languages: tuple[LanguageTag, ...]
    index: tuple[LanguageTag, ...]

    @classmethod
    def build(cls, languages: Iterable[LanguageTag]) -> _MatcherState:
        # dict.fromkeys() removes duplicates while maintaining insertion order
        unique = tuple(dict.fromkeys(languages))
        return cls(unique, tuple(tag.maximize() for tag in unique))


class Matcher:
    """Ordered set of known languages with confidence-scored negotiation.

    Attributes:
        languages: Snapshot of known languages; index 0 is the default
        default_language: The current default (fallback) language
        strict: When True, match_or_add never registers new languages

    Example:
        >>> matcher = Matcher(LanguageTag.parse("en"), strict=False)
        >>> matcher.match_or_add(LanguageTag.parse("zh-CN"))
        LanguageTag(language='zh', script=None, territory='CN', variant=None)
        >>> str(matcher.match("zh-TW"))
        'zh-CN'
        >>> str(matcher.match("fr"))
        'en'
    """

    __slots__ = ("_lock", "_state", "_strict")

    def __init__(
        self,
        default_language: str | LanguageTag,
        *limits: str | LanguageTag,
        strict: bool | None = None,
    ) -> None:
        """Initialize matcher.

        Args:
            default_language: Default (fallback) language, stored at index 0
            limits: Additional known languages; a non-empty list makes the
                matcher strict unless strict is given explicitly
            strict: Override for strictness

        Raises:
            ValueError: If default_language is not a well-formed identifier
        """
        default = coerce_language_tag(default_language)
        if default.is_undefined:
            msg = f"Invalid default language: {default_language!r}"
            raise ValueError(msg)

        tags = [default]
        for limit in limits:
            tag = coerce_language_tag(limit)
            if tag.is_undefined:
                logger.warning("Ignoring malformed limit language: %r", limit)
                continue
            tags.append(tag)

        self._strict = bool(limits) if strict is None else strict
        self._state = _MatcherState.build(tags)
        self._lock = RWLock()

    @property
    def strict(self) -> bool:
        """Whether negotiation may register newly discovered languages."""
        return self._strict

    @property
    def languages(self) -> tuple[LanguageTag, ...]:
        """Known languages in priority order (index 0 is the default)."""
        with self._lock.read():
            return self._state.languages

    @property
    def default_language(self) -> LanguageTag:
        """The current default language."""
        with self._lock.read():
            return self._state.languages[0]

    def match(self, *preferences: str | LanguageTag) -> LanguageTag:
        """Return the known language that best satisfies the preferences.

        Args:
            preferences: Caller's languages, most preferred first. Strings
                are parsed; malformed entries are ignored.

        Returns:
            Best known language, or the default if nothing is related
        """
        tag, _ = self.negotiate(*preferences)
        return tag

    def negotiate(self, *preferences: str | LanguageTag) -> tuple[LanguageTag, Confidence]:
        """Like match(), also reporting the confidence of the result.

        Returns:
            (language, confidence); confidence is NO when the default was
            returned because nothing matched
        """
        wanted = [tag for tag in map(coerce_language_tag, preferences) if not tag.is_undefined]

        with self._lock.read():
            state = self._state

        if not wanted:
            return (state.languages[0], Confidence.NO)

        return self._negotiate(state, wanted)

    @staticmethod
    def _negotiate(
        state: _MatcherState, wanted: Iterable[LanguageTag]
    ) -> tuple[LanguageTag, Confidence]:
        best_tag = state.languages[0]
        best_confidence = Confidence.NO

        for preference in wanted:
            maximized = preference.maximize()
            tag, confidence = state.languages[0], Confidence.NO
            for position, candidate in enumerate(state.index):
                score = score_match(maximized, candidate)
                if score > confidence:
                    tag, confidence = state.languages[position], score
                    if score == Confidence.EXACT:
                        break

            # A strong match for an earlier preference beats anything later
            if confidence >= Confidence.HIGH:
                return (tag, confidence)
            if confidence > best_confidence:
                best_tag, best_confidence = tag, confidence

        return (best_tag, best_confidence)

    def match_or_add(self, tag: str | LanguageTag) -> LanguageTag:
        """Match a single language, registering it if nothing is close.

        If no known language scores above LOW and the matcher is not
        strict, the tag is appended and returned. A strict matcher never
        changes; it returns the plain match result instead.

        Args:
            tag: Language discovered while loading resources

        Returns:
            The known language the tag's translations belong to

        Raises:
            ValueError: If tag is malformed (parses to UND)
        """
        candidate = coerce_language_tag(tag)
        if candidate.is_undefined:
            msg = f"Cannot register undefined language: {tag!r}"
            raise ValueError(msg)

        with self._lock.write():
            state = self._state
            matched, confidence = self._negotiate(state, (candidate,))
            if confidence > Confidence.LOW or self._strict:
                return matched

            self._state = _MatcherState.build((*state.languages, candidate))

        logger.debug(
            "Registered language %s (closest was %s, %s)", candidate, matched, confidence.name
        )
        return candidate

    def set_default(self, tag: str | LanguageTag) -> None:
        """Make tag the default language.

        A known language is swapped into index 0 (the old default takes its
        place); an unknown one is prepended. No-op if already default.

        Raises:
            ValueError: If tag is malformed (parses to UND)
        """
        default = coerce_language_tag(tag)
        if default.is_undefined:
            msg = f"Invalid default language: {tag!r}"
            raise ValueError(msg)

        with self._lock.write():
            languages = list(self._state.languages)
            if languages[0] == default:
                return
            if default in languages:
                position = languages.index(default)
                languages[0], languages[position] = default, languages[0]
            else:
                languages.insert(0, default)
            self._state = _MatcherState.build(languages)

        logger.debug("Default language set to %s", default)

    def __contains__(self, tag: object) -> bool:
        """Check whether tag (string or LanguageTag) is a known language."""
        if not isinstance(tag, (str, LanguageTag)):
            return False
        return coerce_language_tag(tag) in self.languages

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        languages = ", ".join(str(tag) for tag in self.languages)
        return f"Matcher(languages=[{languages}], strict={self._strict})"
