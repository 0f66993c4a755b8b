"""Type aliases for the localization domain.

Semantic aliases shared by the loaders, the registry and Bundle, and
available to user code that implements its own ResourceLoader.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

from langbundle.core import LanguageTag

__all__ = [
    "BundleName",
    "LanguageCode",
    "MessageKey",
    "ResourceTable",
    "TranslationTable",
]

type BundleName = str
"""Bundle identifier, the resource file stem (e.g., 'app', 'errors')."""

type LanguageCode = str
"""Language identifier as written by users or on disk (e.g., 'zh-CN', 'pt_BR')."""

type MessageKey = str
"""Message key: the untranslated source text (e.g., 'Hello %s')."""

type TranslationTable = dict[LanguageTag, dict[MessageKey, str]]
"""Loaded translations of one bundle, keyed by canonical language."""

type ResourceTable = Mapping[LanguageTag | LanguageCode, Mapping[MessageKey, str]]
"""What a ResourceLoader returns: language -> key -> translated text."""
