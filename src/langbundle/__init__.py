"""langbundle - lazy, negotiated translation bundles.

Looks up a message key for a caller's ranked language preferences,
falling back to the default language and finally to the key itself, and
substitutes call-time arguments either printf-style ("Hello %s") or into
field templates ("Hello {{.Name}}"). Translation files (JSON, YAML, TOML
or INI) are loaded on first use, once per bundle.

Public API:
    Bundle - Named collection of translations with lazy loading
    BundleRegistry - One Bundle per name for a resource source
    get_bundle - Process-wide Bundle for (resource root, name)
    LocalizationConfig - Default and allowed languages
    LocalizedString / LocalizedError - Deferred translatable values
    accept_languages - Context carrier for the caller's languages
    localize - Render any value for the current accepted languages

Exceptions:
    LocalizationError - Base exception class
    InvalidLanguageTagError - Malformed language identifier in configuration
    ResourceLoadError - Undecodable resource file
    TemplateError - Field template failures (recovered internally)

Submodules:
    langbundle.core - LanguageTag and the tag parse cache
    langbundle.runtime - Matcher, Bundle, format resolver, templates
    langbundle.localization - Loaders, codecs, configuration, registry
    langbundle.diagnostics - Error types
"""

# Essential Public API - Minimal exports for clean namespace
from .core import LanguageTag
from .diagnostics import (
    InvalidLanguageTagError,
    LocalizationError,
    ResourceLoadError,
    TemplateError,
)
from .localization import (
    BundleRegistry,
    DirectoryResourceLoader,
    LocalizationConfig,
    MappingResourceLoader,
    ResourceLoader,
    get_bundle,
    get_default_registry,
)
from .runtime import (
    Bundle,
    LocalizedError,
    LocalizedString,
    Matcher,
    Translatable,
    accept_languages,
    localize,
    resolve_format,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("langbundle")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Bundle",
    "BundleRegistry",
    "DirectoryResourceLoader",
    "InvalidLanguageTagError",
    "LanguageTag",
    "LocalizationConfig",
    "LocalizationError",
    "LocalizedError",
    "LocalizedString",
    "MappingResourceLoader",
    "Matcher",
    "ResourceLoadError",
    "ResourceLoader",
    "TemplateError",
    "Translatable",
    "__version__",
    "accept_languages",
    "get_bundle",
    "get_default_registry",
    "localize",
    "resolve_format",
]
