"""Resource loading infrastructure for Bundle.

Provides the protocol a Bundle loads its translation table through, a
filesystem implementation with path-traversal checks, and an in-memory
implementation for tests and programmatic setups.

Components:
    ResourceLoader - Protocol for loading a bundle's translations
    DirectoryResourceLoader - Disk-based loader for JSON/YAML/TOML/INI files
    MappingResourceLoader - Loader over an in-memory mapping

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from langbundle.constants import SUPPORTED_EXTENSIONS
from langbundle.core import LanguageTag, coerce_language_tag
from langbundle.diagnostics import ResourceLoadError
from langbundle.enums import Confidence
from langbundle.localization.codecs import decode_resource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from langbundle.localization.types import BundleName, LanguageCode, ResourceTable
    from langbundle.runtime.matcher import Matcher

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loaders
    "DirectoryResourceLoader",
    "MappingResourceLoader",
]

logger = logging.getLogger(__name__)


class ResourceLoader(Protocol):
    """Protocol for loading all translations of one bundle.

    Implementations return every language they have for the bundle in one
    call; Bundle invokes load() at most once per load generation.

    This is a Protocol (structural typing) rather than ABC so that any
    object with a matching load() method can be used.

    Contract:
        - Safe to call from any thread.
        - Must not mutate the matcher; may read matcher.strict and
          matcher.languages to decide what to load.
        - Problems with individual resources are handled internally:
          the resource is skipped, the rest still loads.

    Example:
        >>> class StaticLoader:
        ...     def load(self, bundle_name, matcher):
        ...         return {"en": {"Hello": "Hello"}, "de": {"Hello": "Hallo"}}
        ...
        >>> bundle = Bundle("app", StaticLoader())
    """

    def load(self, bundle_name: BundleName, matcher: Matcher) -> ResourceTable:
        """Load translations for a bundle.

        Args:
            bundle_name: Bundle name (e.g., 'app', 'errors')
            matcher: The bundle's matcher (read-only)

        Returns:
            Language -> message key -> translated text

        Raises:
            OSError: If the source as a whole is unavailable
            ValueError: If the source as a whole is unusable
        """
        ...  # pylint: disable=unnecessary-ellipsis


def _accepts(matcher: Matcher, tag: LanguageTag) -> bool:
    """Whether a strict matcher has a language related to tag."""
    if not matcher.strict:
        return True
    _, confidence = matcher.negotiate(tag)
    return confidence > Confidence.NO


@dataclass(frozen=True, slots=True)
class DirectoryResourceLoader:
    """File system loader for translation files.

    Two layouts are recognized and may be mixed:

        <root>/<language>/<bundle>.<ext>     (e.g., locales/zh-CN/app.json)
        <root>/<bundle>.<language>.<ext>     (e.g., locales/app.zh_CN.yaml)

    Directory and file language names accept hyphens or underscores.
    Extensions are tried in SUPPORTED_EXTENSIONS order; when one language
    has several files for the same bundle, later files override earlier
    keys.

    Security:
        Bundle names containing path separators or ".." are rejected.
        Every resolved file path is verified to stay under the root.

    Attributes:
        root: Resource root directory

    Example:
        >>> loader = DirectoryResourceLoader("locales")
        >>> registry = BundleRegistry(loader)
    """

    root: Path | str
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root).resolve())

    @staticmethod
    def _validate_bundle_name(bundle_name: BundleName) -> None:
        """Validate bundle name for path traversal and whitespace.

        Raises:
            ValueError: If bundle_name is empty or contains unsafe path components
        """
        if not bundle_name or bundle_name.strip() != bundle_name:
            msg = f"Bundle name must be non-empty without surrounding whitespace: {bundle_name!r}"
            raise ValueError(msg)
        if ".." in bundle_name:
            msg = f"Path traversal sequences not allowed in bundle name: '{bundle_name}'"
            raise ValueError(msg)
        if "/" in bundle_name or "\\" in bundle_name:
            msg = f"Path separators not allowed in bundle name: '{bundle_name}'"
            raise ValueError(msg)

    def _is_safe_path(self, path: Path) -> bool:
        try:
            path.resolve().relative_to(self._resolved_root)
        except ValueError:
            return False
        return True

    def _candidates(self, bundle_name: BundleName) -> list[tuple[LanguageCode, Path]]:
        """List (language name, file) pairs for a bundle, in load order."""
        candidates: list[tuple[LanguageCode, Path]] = []
        prefix = f"{bundle_name}."

        for entry in sorted(self._resolved_root.iterdir()):
            if entry.is_dir():
                for extension in SUPPORTED_EXTENSIONS:
                    path = entry / f"{bundle_name}{extension}"
                    if path.is_file():
                        candidates.append((entry.name, path))
            elif entry.is_file() and entry.name.startswith(prefix):
                extension = entry.suffix.lower()
                language = entry.name[len(prefix) : -len(entry.suffix) or None]
                if extension in SUPPORTED_EXTENSIONS and language and "." not in language:
                    candidates.append((language, entry))

        return candidates

    def _read(self, path: Path) -> dict[str, object] | None:
        if not self._is_safe_path(path):
            logger.warning("Skipping %s: resolves outside %s", path, self._resolved_root)
            return None
        try:
            return decode_resource(path.read_text(encoding="utf-8"), path.suffix, str(path))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable resource %s: %s", path, e)
        except ResourceLoadError as e:
            logger.warning("Skipping invalid resource: %s", e)
        return None

    def load(self, bundle_name: BundleName, matcher: Matcher) -> ResourceTable:
        """Load every language's file for the bundle.

        Args:
            bundle_name: File stem to look for (e.g., 'app')
            matcher: Bundle's matcher; when strict, unrelated languages
                are not read at all

        Returns:
            Language -> key -> text for every readable file. Empty if
            root does not exist.

        Raises:
            ValueError: If bundle_name contains path traversal sequences
        """
        self._validate_bundle_name(bundle_name)

        if not self._resolved_root.is_dir():
            logger.debug("Resource root %s does not exist", self._resolved_root)
            return {}

        table: dict[LanguageTag, dict[str, str]] = {}
        for language, path in self._candidates(bundle_name):
            tag = coerce_language_tag(language)
            if tag.is_undefined:
                logger.warning("Skipping %s: %r is not a language identifier", path, language)
                continue
            if not _accepts(matcher, tag):
                logger.debug("Skipping %s: language %s not configured", path, tag)
                continue

            data = self._read(path)
            if data is None:
                continue

            entries = table.setdefault(tag, {})
            for key, text in data.items():
                if isinstance(text, str):
                    entries[key] = text
                else:
                    logger.debug("Skipping non-string value for %r in %s", key, path)

            logger.debug("Loaded %d entries for %s from %s", len(data), tag, path)

        return table


class MappingResourceLoader:
    """Loader over an in-memory {language: {key: text}} mapping.

    Applies the same strict-language filtering as DirectoryResourceLoader.

    Example:
        >>> loader = MappingResourceLoader({
        ...     "en": {"Hello %s": "Hello %s"},
        ...     "de": {"Hello %s": "Hallo %s"},
        ... })
        >>> Bundle("app", loader).translate(["de"], "Hello %s", "Ann")
        'Hallo Ann'
    """

    __slots__ = ("_translations",)

    def __init__(
        self, translations: Mapping[LanguageCode | LanguageTag, Mapping[str, str]]
    ) -> None:
        """Initialize loader.

        Args:
            translations: Language -> key -> text; copied on construction
        """
        self._translations = {
            language: dict(entries) for language, entries in translations.items()
        }

    def load(self, bundle_name: BundleName, matcher: Matcher) -> ResourceTable:
        """Return the configured translations (the same for every bundle)."""
        table: dict[LanguageCode | LanguageTag, dict[str, str]] = {}
        for language, entries in self._translations.items():
            tag = coerce_language_tag(language)
            if tag.is_undefined or not _accepts(matcher, tag):
                logger.debug("Bundle %r: skipping language %r", bundle_name, language)
                continue
            table[language] = dict(entries)
        return table
