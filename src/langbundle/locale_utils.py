"""Locale utilities for BCP-47 / POSIX conversion and CLDR likely subtags.

Centralizes locale format normalization used throughout the codebase.
Provides canonical locale handling to ensure consistent cache keys and lookups.

Python 3.13+. External dependency: Babel (CLDR data).
"""

from __future__ import annotations

import functools

from langbundle.constants import MAX_LIKELY_SUBTAGS_CACHE_SIZE

__all__ = [
    "get_likely_subtags",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Resource folder names may use either, so every identifier is normalized
    at the boundary before it is parsed or compared.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("zh-Hant-TW")
        'zh_Hant_TW'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=MAX_LIKELY_SUBTAGS_CACHE_SIZE)
def get_likely_subtags(
    language: str, script: str | None = None, territory: str | None = None
) -> tuple[str | None, str | None]:
    """Fill in the script and territory CLDR considers likely for a language.

    Lookup order follows the CLDR "add likely subtags" algorithm:
    language_territory, language_script, then language alone. Subtags the
    caller already supplied are never replaced.

    Thread-safe via lru_cache internal locking.

    Args:
        language: Lower-case primary language subtag (e.g., "zh")
        script: Title-case script subtag, if known (e.g., "Hant")
        territory: Upper-case territory subtag, if known (e.g., "TW")

    Returns:
        (script, territory) with missing values filled where CLDR knows them

    Example:
        >>> get_likely_subtags("zh", None, "TW")
        ('Hant', 'TW')
        >>> get_likely_subtags("en")
        ('Latn', 'US')
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import get_global, parse_locale  # noqa: PLC0415

    likely = get_global("likely_subtags")
    candidates = []
    if territory:
        candidates.append(f"{language}_{territory}")
    if script:
        candidates.append(f"{language}_{script}")
    candidates.append(language)

    for key in candidates:
        expanded = likely.get(key)
        if expanded is None:
            continue
        _, likely_territory, likely_script, *_ = parse_locale(expanded)
        return (script or likely_script, territory or likely_territory)

    return (script, territory)
