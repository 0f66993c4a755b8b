"""Format resolver: substitute call-time arguments into resolved text.

Callers pass either printf-style positional arguments
(``bundle.string("Hello %s", name)``) or a single structured value for a
field template (``bundle.string("Hello {{.Name}}", user)``) without
declaring which. The resolver decides from the argument count and the
kind of a lone argument:

    no arguments              text unchanged
    one None                  text unchanged
    one record or mapping     template rendering (unchanged if empty)
    one sequence              elements expanded as positional arguments
    one scalar                text % (value,)
    several arguments         text % args

Every failure path returns the text as-is: a caller never gets an
exception out of substitution, only unsubstituted text.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Number
from types import ModuleType, SimpleNamespace

from langbundle.diagnostics import TemplateError
from langbundle.enums import ArgumentKind
from langbundle.runtime.template import render_template

__all__ = ["FormatRequest", "classify_argument", "resolve_format"]

logger = logging.getLogger(__name__)

# Values that are "zero" when falsy; other objects are never zero.
_ZERO_COMPARABLE = (str, bytes, bytearray, int, float, complex, Decimal, Fraction)
_COLLECTIONS = (list, tuple, dict, set, frozenset)

# Nested records deeper than this are treated as non-zero
_MAX_RECORD_DEPTH = 16


def _is_named_tuple(value: object) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _public_attributes(value: object) -> dict[str, object]:
    return {name: attr for name, attr in vars(value).items() if not name.startswith("_")}


def _is_plain_object(value: object) -> bool:
    if isinstance(value, (type, ModuleType, BaseException, Number)) or callable(value):
        return False
    try:
        return bool(_public_attributes(value))
    except TypeError:
        # No instance __dict__ (builtins, __slots__ classes)
        return False


def classify_argument(value: object) -> ArgumentKind:
    """Determine how a lone argument is substituted.

    Records are dataclass instances, named tuples, SimpleNamespace
    objects and instances of ordinary classes with at least one public
    instance attribute. Exceptions, numbers, classes, modules and
    callables stay scalars, as do strings and bytes (not sequences).

    Example:
        >>> classify_argument({"Name": "Ann"})
        <ArgumentKind.MAPPING: 'mapping'>
        >>> classify_argument(["a", "b"])
        <ArgumentKind.SEQUENCE: 'sequence'>
        >>> classify_argument("a")
        <ArgumentKind.SCALAR: 'scalar'>
    """
    match value:
        case None:
            return ArgumentKind.NONE
        case _ if _is_named_tuple(value) or isinstance(value, SimpleNamespace):
            return ArgumentKind.RECORD
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return ArgumentKind.RECORD
        case Mapping():
            return ArgumentKind.MAPPING
        case str() | bytes() | bytearray():
            return ArgumentKind.SCALAR
        case Sequence():
            return ArgumentKind.SEQUENCE
        case _ if _is_plain_object(value):
            return ArgumentKind.RECORD
        case _:
            return ArgumentKind.SCALAR


def _record_fields(value: object) -> dict[str, object]:
    if _is_named_tuple(value):
        return dict(zip(type(value)._fields, value, strict=True))  # type: ignore[attr-defined]
    if isinstance(value, SimpleNamespace):
        return dict(vars(value))
    if dataclasses.is_dataclass(value):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    return _public_attributes(value)


def _is_zero(value: object, depth: int = 0) -> bool:
    """Report whether value is an "empty" field value (None, 0, "", [], zero record)."""
    if value is None:
        return True
    if isinstance(value, _ZERO_COMPARABLE) or type(value) in _COLLECTIONS:
        return not value
    if depth < _MAX_RECORD_DEPTH and classify_argument(value) is ArgumentKind.RECORD:
        return all(_is_zero(field, depth + 1) for field in _record_fields(value).values())
    return False


def _render(text: str, data: object) -> str:
    try:
        return render_template(text, data)
    except TemplateError as e:
        logger.debug("Template rendering failed, returning text unchanged: %s", e)
        return text


def _format_positional(text: str, args: tuple[object, ...]) -> str:
    try:
        return text % args
    except (TypeError, ValueError, KeyError, OverflowError) as e:
        logger.debug("Positional formatting failed, returning text unchanged: %s", e)
        return text


def resolve_format(text: str, args: Sequence[object] = ()) -> str:
    """Substitute arguments into text, choosing the strategy from the arguments.

    Args:
        text: Resolved (translated or fallback) text
        args: Call-time arguments

    Returns:
        Substituted text, or text unchanged when substitution is not
        possible

    Example:
        >>> resolve_format("Hello %s", ["world"])
        'Hello world'
        >>> resolve_format("Hello {{.Name}}", [{"Name": "Ann"}])
        'Hello Ann'
        >>> resolve_format("%s and %s", [["a", "b"]])
        'a and b'
    """
    if not args:
        return text

    if len(args) > 1:
        return _format_positional(text, tuple(args))

    (value,) = args
    match classify_argument(value):
        case ArgumentKind.NONE:
            return text
        case ArgumentKind.RECORD:
            fields = _record_fields(value)
            if not fields or all(_is_zero(field) for field in fields.values()):
                return text
            return _render(text, value)
        case ArgumentKind.MAPPING:
            if not value:
                return text
            return _render(text, value)
        case ArgumentKind.SEQUENCE:
            elements = tuple(value)  # type: ignore[arg-type]
            if not elements:
                return text
            return resolve_format(text, elements)
        case _:
            return _format_positional(text, (value,))


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """One substitution: resolved text plus the call-time arguments.

    Created per translation call and discarded afterwards.

    Attributes:
        template: Resolved text (translation, default-language text or key)
        args: Call-time arguments in order
    """

    template: str
    args: tuple[object, ...] = ()

    def resolve(self) -> str:
        """Produce the final string (see resolve_format)."""
        return resolve_format(self.template, self.args)
