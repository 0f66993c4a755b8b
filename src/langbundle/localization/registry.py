"""Bundle registry: one Bundle instance per name.

A registry pairs one ResourceLoader (typically one resource root) with
one LocalizationConfig and hands out Bundles by name. Asking twice for
the same name returns the same object, so a language added or a default
changed through one reference is visible through every other.

Registries are ordinary objects: applications and tests can construct as
many isolated registries as they need. get_default_registry() provides
the process-wide registry per resource root for code that wants the
``bundle = registry.bundle("app")`` at module level pattern.

Thread Safety:
    get-or-create and configuration changes are serialized by a
    threading.Lock; Bundle and Matcher handle their own synchronization.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from langbundle.constants import DEFAULT_RESOURCES_DIR
from langbundle.core import coerce_language_tag
from langbundle.localization.config import LocalizationConfig
from langbundle.localization.loading import DirectoryResourceLoader, MappingResourceLoader
from langbundle.runtime.bundle import Bundle

if TYPE_CHECKING:
    from collections.abc import Mapping

    from langbundle.core import LanguageTag
    from langbundle.localization.loading import ResourceLoader
    from langbundle.localization.types import BundleName, LanguageCode

__all__ = ["BundleRegistry", "get_bundle", "get_default_registry"]

logger = logging.getLogger(__name__)


class BundleRegistry:
    """Get-or-create cache of Bundles sharing one loader and configuration.

    Attributes:
        loader: Resource loader every bundle loads through
        config: Configuration new bundles are built from

    Example:
        >>> registry = BundleRegistry.from_directory("locales")
        >>> app = registry.bundle("app")
        >>> app is registry.bundle("app")
        True
        >>> app.string("Hello %s", "Ann").tl("zh-CN")
        '你好 Ann'
    """

    __slots__ = ("_bundles", "_config", "_loader", "_lock")

    def __init__(self, loader: ResourceLoader, config: LocalizationConfig | None = None) -> None:
        """Initialize registry.

        Args:
            loader: Resource loader for all bundles of this registry
            config: Bundle configuration; LocalizationConfig() if None
        """
        self._loader = loader
        self._config = config if config is not None else LocalizationConfig()
        self._bundles: dict[BundleName, Bundle] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_directory(
        cls, root: Path | str = DEFAULT_RESOURCES_DIR, config: LocalizationConfig | None = None
    ) -> BundleRegistry:
        """Create a registry loading from a resource directory.

        Args:
            root: Resource root (see DirectoryResourceLoader for layouts)
            config: Bundle configuration
        """
        return cls(DirectoryResourceLoader(root), config)

    @classmethod
    def from_mapping(
        cls,
        translations: Mapping[LanguageCode | LanguageTag, Mapping[str, str]],
        config: LocalizationConfig | None = None,
    ) -> BundleRegistry:
        """Create a registry whose bundles all load the given translations.

        Args:
            translations: Language -> key -> text
            config: Bundle configuration
        """
        return cls(MappingResourceLoader(translations), config)

    @property
    def loader(self) -> ResourceLoader:
        """Resource loader shared by all bundles."""
        return self._loader

    @property
    def config(self) -> LocalizationConfig:
        """Configuration new bundles are built from."""
        with self._lock:
            return self._config

    def bundle(self, name: BundleName) -> Bundle:
        """Return the bundle for name, creating it on first request.

        Creation is cheap: resources are loaded on first translation.

        Raises:
            ValueError: If name is empty
        """
        with self._lock:
            bundle = self._bundles.get(name)
            if bundle is None:
                bundle = Bundle(name, self._loader, self._config.build_matcher())
                self._bundles[name] = bundle
                logger.info(
                    "Created bundle %r (default language %s)", name, self._config.default_language
                )
            return bundle

    def set_default_language(self, language: str | LanguageTag) -> bool:
        """Change the default language of every bundle, present and future.

        Returns:
            True on success, False if language is malformed (nothing changes)
        """
        tag = coerce_language_tag(language)
        if tag.is_undefined:
            logger.warning("Rejected default language %r", language)
            return False

        with self._lock:
            self._config = self._config.with_default_language(str(tag))
            bundles = tuple(self._bundles.values())

        for bundle in bundles:
            bundle.set_default_language(tag)
        logger.info("Default language set to %s for %d bundles", tag, len(bundles))
        return True

    def reload(self) -> None:
        """Reload every bundle created so far."""
        with self._lock:
            bundles = tuple(self._bundles.values())
        for bundle in bundles:
            bundle.reload()

    def names(self) -> tuple[BundleName, ...]:
        """Names of the bundles created so far, in creation order."""
        with self._lock:
            return tuple(self._bundles)

    def __contains__(self, name: object) -> bool:
        """Check whether a bundle with this name has been created."""
        with self._lock:
            return name in self._bundles

    def __len__(self) -> int:
        """Number of bundles created so far."""
        with self._lock:
            return len(self._bundles)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"BundleRegistry(loader={self._loader!r}, bundles={len(self)})"


_default_registries: dict[Path, BundleRegistry] = {}
_default_registries_lock = threading.Lock()


def get_default_registry(resources_dir: Path | str = DEFAULT_RESOURCES_DIR) -> BundleRegistry:
    """Return the process-wide registry for a resource root.

    One registry per resolved root path, created on first request with
    the default LocalizationConfig. Together with BundleRegistry.bundle()
    this guarantees one Bundle per (resource root, bundle name).

    Example:
        >>> app = get_default_registry().bundle("app")
        >>> app is get_default_registry("locales").bundle("app")
        True
    """
    root = Path(resources_dir).resolve()
    with _default_registries_lock:
        registry = _default_registries.get(root)
        if registry is None:
            registry = BundleRegistry.from_directory(root)
            _default_registries[root] = registry
            logger.info("Created default registry for %s", root)
        return registry


def get_bundle(name: BundleName, resources_dir: Path | str = DEFAULT_RESOURCES_DIR) -> Bundle:
    """Return the process-wide Bundle for (resources_dir, name).

    Shorthand for ``get_default_registry(resources_dir).bundle(name)``,
    meant for module-level declarations:

        >>> app = get_bundle("app")
        >>> app.string("Hello %s", "Ann").tl("de")  # doctest: +SKIP
    """
    return get_default_registry(resources_dir).bundle(name)
