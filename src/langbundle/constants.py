"""Shared constants for langbundle.

This module provides centralized configuration constants used across the
runtime and localization packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Language defaults: Fallback language and resource root
- Cache limits: Memory bounds for the process-wide parse caches
- Resource files: Extensions understood by the directory loader, nesting bound

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Language defaults
    "DEFAULT_LANGUAGE",
    "DEFAULT_RESOURCES_DIR",
    "UNDEFINED_LANGUAGE",
    # Cache limits
    "MAX_LANGUAGE_TAG_CACHE_SIZE",
    "MAX_LIKELY_SUBTAGS_CACHE_SIZE",
    "MAX_TEMPLATE_CACHE_SIZE",
    # Resource files
    "SUPPORTED_EXTENSIONS",
    "MAX_RESOURCE_DEPTH",
]

# ============================================================================
# LANGUAGE DEFAULTS
# ============================================================================

# Language every registry falls back to unless configured otherwise.
DEFAULT_LANGUAGE: str = "en"

# Resource root used by get_default_registry() when none is given.
DEFAULT_RESOURCES_DIR: str = "locales"

# BCP-47 "undetermined" primary subtag; what unparseable identifiers become.
UNDEFINED_LANGUAGE: str = "und"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Parsed language identifiers. Accept-Language values repeat heavily on the
# translation hot path, so a small bound covers nearly all traffic.
MAX_LANGUAGE_TAG_CACHE_SIZE: int = 1024

# Likely-subtag expansions (one per distinct language/territory pair).
MAX_LIKELY_SUBTAGS_CACHE_SIZE: int = 512

# Compiled {{.Field}} templates, keyed by template source text.
MAX_TEMPLATE_CACHE_SIZE: int = 512

# ============================================================================
# RESOURCE FILES
# ============================================================================

# Extensions recognized by DirectoryResourceLoader, in lookup priority order.
SUPPORTED_EXTENSIONS: tuple[str, ...] = (".json", ".yaml", ".yml", ".toml", ".tml", ".ini")

# Nesting levels flatten_mapping() follows in one resource document. Deeper
# documents (or YAML aliases that refer back to an enclosing mapping) are
# rejected as invalid resources instead of exhausting the interpreter stack.
MAX_RESOURCE_DEPTH: int = 32
