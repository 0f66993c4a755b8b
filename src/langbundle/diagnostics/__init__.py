"""Error types for langbundle.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    InvalidLanguageTagError,
    LocalizationError,
    ResourceLoadError,
    TemplateError,
    TemplateRenderError,
    TemplateSyntaxError,
)

__all__ = [
    "InvalidLanguageTagError",
    "LocalizationError",
    "ResourceLoadError",
    "TemplateError",
    "TemplateRenderError",
    "TemplateSyntaxError",
]
