"""Bundle: the addressable unit of translations.

A Bundle owns one translation table (language -> key -> text) and the
Matcher that negotiates against it. The table is loaded from a
ResourceLoader on first use and again after every reload().

Resolution never fails. A key resolves through:

    1. the negotiated language's table
    2. the default language's table
    3. the key itself

and the resulting text is then handed to the format resolver together
with the call-time arguments.

Thread Safety:
    Loading follows a NOT_LOADED -> LOADING -> LOADED protocol on a
    threading.Condition. Exactly one caller runs the loader per load
    generation; concurrent callers wait for it. reload() starts a new
    generation, and a load that finishes for an old generation is
    discarded. The table itself is replaced, never mutated in place.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from decimal import Decimal
from numbers import Real
from typing import TYPE_CHECKING

from langbundle.constants import DEFAULT_LANGUAGE
from langbundle.core import LanguageTag, coerce_language_tag
from langbundle.enums import LoadState
from langbundle.runtime.formatter import FormatRequest
from langbundle.runtime.matcher import Matcher
from langbundle.runtime.strings import LocalizedError, LocalizedString

if TYPE_CHECKING:
    from langbundle.localization.loading import ResourceLoader
    from langbundle.localization.types import TranslationTable

__all__ = ["Bundle", "is_singular"]

logger = logging.getLogger(__name__)


def is_singular(quantity: object) -> bool:
    """Two-form plural selection: True or a number equal to 1 is singular.

    Not CLDR plural rules. Languages with more than two plural
    categories get the "other" form for everything but one.

    Example:
        >>> is_singular(1), is_singular(1.0), is_singular(True)
        (True, True, True)
        >>> is_singular(0), is_singular(2), is_singular("1")
        (False, False, False)
    """
    if quantity is True:
        return True
    if isinstance(quantity, bool):
        return False
    if isinstance(quantity, (Real, Decimal)):
        return quantity == 1
    return False


def _as_preferences(
    preferences: str | LanguageTag | Iterable[str | LanguageTag] | None,
) -> tuple[str | LanguageTag, ...]:
    match preferences:
        case None:
            return ()
        case str() | LanguageTag():
            return (preferences,)
        case _:
            return tuple(preferences)


class Bundle:
    """Named collection of translations for one logical message group.

    Bundles are normally obtained from a BundleRegistry, which guarantees
    one instance per name.

    Attributes:
        name: Bundle name (the resource file stem)
        matcher: Language matcher owned by this bundle
        languages: Known languages, default first
        load_state: Current state of the lazy load protocol

    Example:
        >>> bundle = Bundle("app", MappingResourceLoader({
        ...     "en": {"Hello %s": "Hello %s"},
        ...     "zh-CN": {"Hello %s": "你好 %s"},
        ... }))
        >>> bundle.translate(["zh-TW"], "Hello %s", "Ann")
        '你好 Ann'
        >>> bundle.translate([], "Bye")
        'Bye'
    """

    __slots__ = (
        "_condition",
        "_generation",
        "_loader",
        "_matcher",
        "_name",
        "_state",
        "_table",
    )

    def __init__(
        self,
        name: str,
        loader: ResourceLoader,
        matcher: Matcher | None = None,
    ) -> None:
        """Initialize bundle. Nothing is loaded until first use.

        Args:
            name: Bundle name passed to the loader
            loader: Source of translation tables
            matcher: Language matcher; a non-strict matcher defaulting to
                "en" if None

        Raises:
            ValueError: If name is empty
        """
        if not name:
            msg = "Bundle name must not be empty"
            raise ValueError(msg)

        self._name = name
        self._loader = loader
        self._matcher = matcher if matcher is not None else Matcher(DEFAULT_LANGUAGE)
        self._condition = threading.Condition()
        self._state = LoadState.NOT_LOADED
        self._generation = 0
        self._table: TranslationTable = {}

    @property
    def name(self) -> str:
        """Bundle name."""
        return self._name

    @property
    def matcher(self) -> Matcher:
        """Language matcher owned by this bundle."""
        return self._matcher

    @property
    def languages(self) -> tuple[LanguageTag, ...]:
        """Known languages, default first (does not trigger a load)."""
        return self._matcher.languages

    @property
    def load_state(self) -> LoadState:
        """Current state of the lazy load protocol."""
        with self._condition:
            return self._state

    # ------------------------------------------------------------------
    # Deferred values
    # ------------------------------------------------------------------

    def string(self, text: str, *args: object) -> LocalizedString:
        """Capture text and arguments for translation at render time."""
        return LocalizedString(self, text, *args)

    def error(self, text: str, *args: object) -> LocalizedError:
        """Like string(), wrapped in an exception."""
        return LocalizedError(LocalizedString(self, text, *args))

    def nstring(self, quantity: object, one: str, other: str, *args: object) -> LocalizedString:
        """Pick the singular or plural text by quantity, then defer like string().

        Args:
            quantity: Count deciding the form (see is_singular)
            one: Singular text
            other: Plural text
            args: Call-time arguments

        Example:
            >>> str(bundle.nstring(3, "%d file", "%d files", 3))
            '3 files'
        """
        return LocalizedString(self, one if is_singular(quantity) else other, *args)

    def nerror(self, quantity: object, one: str, other: str, *args: object) -> LocalizedError:
        """Like nstring(), wrapped in an exception."""
        return LocalizedError(self.nstring(quantity, one, other, *args))

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def translate(
        self,
        preferences: str | LanguageTag | Iterable[str | LanguageTag] | None,
        key: str,
        *args: object,
    ) -> str:
        """Resolve key for the caller's preferences and substitute arguments.

        Args:
            preferences: Accepted languages, most preferred first.
                Malformed entries are ignored; empty means the default.
            key: Message key (the untranslated text)
            args: Call-time arguments for the format resolver

        Returns:
            Translated, substituted text. Never raises for missing keys,
            unknown languages or unusable arguments.
        """
        return FormatRequest(self.lookup(preferences, key), args).resolve()

    def lookup(
        self,
        preferences: str | LanguageTag | Iterable[str | LanguageTag] | None,
        key: str,
    ) -> str:
        """Resolve key to raw text without argument substitution.

        Returns:
            Text from the negotiated language, else from the default
            language, else the key itself
        """
        table = self._ensure_loaded()
        language = self._matcher.match(*_as_preferences(preferences))

        entries = table.get(language)
        if entries is not None and key in entries:
            return entries[key]

        default = self._matcher.default_language
        if default != language:
            entries = table.get(default)
            if entries is not None and key in entries:
                return entries[key]

        return key

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_default_language(self, language: str | LanguageTag) -> bool:
        """Make language the default (fallback) language.

        Returns:
            True on success, False if language is malformed (nothing changes)
        """
        tag = coerce_language_tag(language)
        if tag.is_undefined:
            logger.warning("Bundle %r: rejected default language %r", self._name, language)
            return False
        self._matcher.set_default(tag)
        return True

    def add_translations(
        self, language: str | LanguageTag, entries: Mapping[str, str]
    ) -> Bundle:
        """Merge entries into one language's table.

        Loads the bundle first if needed. Entries added here are replaced
        by the loader's content on the next reload().

        Args:
            language: Language the entries are written in
            entries: Message key -> translated text

        Returns:
            self, for chaining

        Raises:
            ValueError: If language is malformed
        """
        tag = coerce_language_tag(language)
        if tag.is_undefined:
            msg = f"Invalid language identifier: {language!r}"
            raise ValueError(msg)

        if not entries:
            return self

        self._ensure_loaded()
        canonical = self._register(tag)
        if canonical is None:
            return self

        cleaned = _clean_entries(self._name, tag, entries)
        with self._condition:
            merged = {**self._table.get(canonical, {}), **cleaned}
            self._table = {**self._table, canonical: merged}

        logger.debug(
            "Bundle %r: added %d messages for %s", self._name, len(cleaned), canonical
        )
        return self

    def reload(self) -> None:
        """Discard the table; the next resolution runs the loader again."""
        with self._condition:
            self._generation += 1
            generation = self._generation
            self._state = LoadState.NOT_LOADED
            self._condition.notify_all()
        logger.debug("Bundle %r: reload requested (generation %d)", self._name, generation)

    # ------------------------------------------------------------------
    # Lazy load protocol
    # ------------------------------------------------------------------

    def _ensure_loaded(self) -> TranslationTable:
        """Return the loaded table, loading it first if necessary."""
        while True:
            with self._condition:
                while self._state is LoadState.LOADING:
                    self._condition.wait()
                if self._state is LoadState.LOADED:
                    return self._table
                self._state = LoadState.LOADING
                generation = self._generation

            try:
                table = self._load()
            except BaseException:
                with self._condition:
                    if self._generation == generation:
                        self._state = LoadState.NOT_LOADED
                    self._condition.notify_all()
                raise

            with self._condition:
                if self._generation == generation:
                    self._table = table
                    self._state = LoadState.LOADED
                    self._condition.notify_all()
                    return table
                # reload() ran while loading; this result is stale
                self._condition.notify_all()

            logger.debug("Bundle %r: discarded stale load (generation %d)", self._name, generation)

    def _load(self) -> TranslationTable:
        try:
            resources = self._loader.load(self._name, self._matcher)
        except (OSError, ValueError) as e:
            logger.error("Bundle %r: failed to load resources: %s", self._name, e)
            return {}

        table: TranslationTable = {}
        for language, entries in resources.items():
            tag = coerce_language_tag(language)
            if tag.is_undefined:
                logger.warning("Bundle %r: skipping malformed language %r", self._name, language)
                continue
            canonical = self._register(tag)
            if canonical is None:
                continue
            merged = table.setdefault(canonical, {})
            cleaned = _clean_entries(self._name, tag, entries)
            if tag == canonical:
                merged.update(cleaned)
            else:
                # A related language only fills keys the language itself lacks
                for key, text in cleaned.items():
                    merged.setdefault(key, text)

        logger.info(
            "Bundle %r loaded: %d languages, %d messages",
            self._name,
            len(table),
            sum(len(entries) for entries in table.values()),
        )
        return table

    def _register(self, tag: LanguageTag) -> LanguageTag | None:
        """Map tag to the known language its entries belong to.

        Returns None when a strict matcher has no language sharing the
        tag's base language.
        """
        canonical = self._matcher.match_or_add(tag)
        if canonical.language != tag.language:
            logger.warning(
                "Bundle %r: language %s not among %s, skipped",
                self._name,
                tag,
                ", ".join(map(str, self._matcher.languages)),
            )
            return None
        return canonical

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"Bundle(name={self._name!r}, state={self.load_state.value})"


def _clean_entries(
    bundle: str, language: LanguageTag, entries: Mapping[str, object]
) -> dict[str, str]:
    """Keep string key -> string text pairs, dropping anything else."""
    cleaned: dict[str, str] = {}
    for key, text in entries.items():
        if isinstance(key, str) and isinstance(text, str):
            cleaned[key] = text
        else:
            logger.debug("Bundle %r: skipping non-string entry %r in %s", bundle, key, language)
    return cleaned
