"""Field-placeholder templates: "Hello {{.Name}}".

Translated texts that take a single structured argument name its fields
with double-brace actions. Only field access is supported:

    {{.Name}}          field or key "Name" of the argument
    {{ .User.Name }}   nested access, whitespace inside braces ignored
    {{.}}              the argument itself
    {{- .Name -}}      trim whitespace before / after the action

Mapping arguments are read by key, everything else by attribute.
Underscore-prefixed names are private and never rendered.

Compiled templates are cached process-wide, keyed by source text.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping
from dataclasses import dataclass

from langbundle.constants import MAX_TEMPLATE_CACHE_SIZE
from langbundle.diagnostics import TemplateRenderError, TemplateSyntaxError

__all__ = ["Template", "compile_template", "render_template"]

_ACTION_OPEN = "{{"
_ACTION_CLOSE = "}}"
_FIELD_PATH = re.compile(r"\.|(?:\.[A-Za-z_][A-Za-z0-9_]*)+")


@dataclass(frozen=True, slots=True)
class _Field:
    """Compiled {{.A.B}} action; empty path means {{.}}."""

    path: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Template:
    """Compiled template: literal text interleaved with field actions.

    Attributes:
        source: Original template text
        segments: Literal strings and field actions in output order
    """

    source: str
    segments: tuple[str | _Field, ...]

    @property
    def fields(self) -> tuple[str, ...]:
        """Dotted names of the fields the template reads, in order."""
        return tuple(".".join(seg.path) for seg in self.segments if isinstance(seg, _Field))

    def render(self, data: object) -> str:
        """Render the template against data.

        Args:
            data: Mapping or object providing the referenced fields

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If a referenced field or key is missing or private
        """
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, _Field):
                parts.append(str(_resolve_field(data, segment.path)))
            else:
                parts.append(segment)
        return "".join(parts)


def _resolve_field(data: object, path: tuple[str, ...]) -> object:
    value = data
    for name in path:
        if name.startswith("_"):
            msg = f"cannot access private field {name!r}"
            raise TemplateRenderError(msg)
        if isinstance(value, Mapping):
            try:
                value = value[name]
            except KeyError:
                msg = f"map has no entry for key {name!r}"
                raise TemplateRenderError(msg) from None
        else:
            try:
                value = getattr(value, name)
            except AttributeError:
                msg = f"can't evaluate field {name} in type {type(value).__name__}"
                raise TemplateRenderError(msg) from None
    return value


@functools.lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def compile_template(source: str) -> Template:
    """Compile template source, memoizing the result.

    Thread-safe via lru_cache internal locking. Failed compilations are
    not cached.

    Args:
        source: Template text

    Returns:
        Compiled Template

    Raises:
        TemplateSyntaxError: If an action is unclosed or is not a field access

    Example:
        >>> compile_template("Hi {{.Name}}").fields
        ('Name',)
    """
    segments: list[str | _Field] = []
    literal_start = 0
    trim_next = False

    while (start := source.find(_ACTION_OPEN, literal_start)) != -1:
        end = source.find(_ACTION_CLOSE, start + len(_ACTION_OPEN))
        if end == -1:
            msg = "unclosed action"
            raise TemplateSyntaxError(msg, start)

        literal = source[literal_start:start]
        action = source[start + len(_ACTION_OPEN) : end]

        if action.startswith("- "):
            literal = literal.rstrip()
            action = action[1:]
        if trim_next:
            literal = literal.lstrip()
        trim_next = action.endswith(" -")
        if trim_next:
            action = action[:-1]

        if literal:
            segments.append(literal)

        action = action.strip()
        if not _FIELD_PATH.fullmatch(action):
            msg = f"unsupported action {action!r}"
            raise TemplateSyntaxError(msg, start)
        segments.append(_Field(tuple(action.split(".")[1:]) if action != "." else ()))

        literal_start = end + len(_ACTION_CLOSE)

    tail = source[literal_start:]
    if trim_next:
        tail = tail.lstrip()
    if tail:
        segments.append(tail)

    return Template(source, tuple(segments))


def render_template(source: str, data: object) -> str:
    """Compile (cached) and render a template in one step.

    Raises:
        TemplateSyntaxError: If the template is malformed
        TemplateRenderError: If data lacks a referenced field
    """
    return compile_template(source).render(data)
