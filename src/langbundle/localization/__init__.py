"""Resource loading, configuration and the bundle registry.

Submodules:
    types    - PEP 695 type aliases (BundleName, LanguageCode, MessageKey, ...)
    codecs   - JSON/YAML/TOML/INI resource decoding
    loading  - ResourceLoader protocol, DirectoryResourceLoader,
               MappingResourceLoader
    config   - LocalizationConfig
    registry - BundleRegistry, get_default_registry, get_bundle

Python 3.13+. External dependency: PyYAML (via codecs).
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from langbundle.localization.codecs import decode_resource
from langbundle.localization.config import LocalizationConfig
from langbundle.localization.loading import (
    DirectoryResourceLoader,
    MappingResourceLoader,
    ResourceLoader,
)
from langbundle.localization.registry import BundleRegistry, get_bundle, get_default_registry
from langbundle.localization.types import (
    BundleName,
    LanguageCode,
    MessageKey,
    ResourceTable,
    TranslationTable,
)

__all__ = [
    # Registry
    "BundleRegistry",
    "get_bundle",
    "get_default_registry",
    "LocalizationConfig",
    # Loader protocol and implementations
    "ResourceLoader",
    "DirectoryResourceLoader",
    "MappingResourceLoader",
    "decode_resource",
    # Type aliases for user code type annotations
    "BundleName",
    "LanguageCode",
    "MessageKey",
    "ResourceTable",
    "TranslationTable",
]
