"""Resource file codecs: decode one translation file into a flat mapping.

Supported formats, selected by file extension:

    .json          JSON object
    .yaml / .yml   YAML mapping (PyYAML safe loader)
    .toml / .tml   TOML table
    .ini           INI file; keys before the first section header are
                   top-level, keys in [section] become "section.key"

Nested mappings (JSON/YAML/TOML) are flattened with dots, so
``{"errors": {"missing": "Not found"}}`` yields the key "errors.missing".
Values are returned as decoded; the loader decides what to keep.

Nesting is bounded by MAX_RESOURCE_DEPTH. Documents nested deeper, or
YAML aliases that point back into an enclosing mapping, are reported as
ResourceLoadError like any other malformed file.

Python 3.13+. External dependency: PyYAML.
"""

from __future__ import annotations

import configparser
import json
import tomllib
from collections.abc import Callable, Mapping

import yaml

from langbundle.constants import MAX_RESOURCE_DEPTH
from langbundle.diagnostics import ResourceLoadError

__all__ = ["decode_resource", "flatten_mapping"]

# Holds the keys before the first [section]. NUL cannot appear in a
# section header written in a text file, so no user section collides.
_INI_TOP_LEVEL = "\x00top-level"
_INI_NO_DEFAULTS = "\x00no-defaults"


def flatten_mapping(
    data: Mapping[object, object], prefix: str = "", max_depth: int = MAX_RESOURCE_DEPTH
) -> dict[str, object]:
    """Flatten nested mappings into dotted keys.

    Args:
        data: Decoded document
        prefix: Prepended to every key (used for recursion)
        max_depth: Nested mappings followed below data

    Raises:
        ResourceLoadError: If nesting exceeds max_depth (this includes
            self-referencing mappings)

    Example:
        >>> flatten_mapping({"a": {"b": "x"}, "c": "y"})
        {'a.b': 'x', 'c': 'y'}
    """
    flat: dict[str, object] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            if max_depth <= 0:
                msg = f"Nesting deeper than {MAX_RESOURCE_DEPTH} levels at key {name!r}"
                raise ResourceLoadError(msg)
            flat.update(flatten_mapping(value, f"{name}.", max_depth - 1))
        else:
            flat[name] = value
    return flat


def _decode_json(source: str) -> object:
    return json.loads(source)


def _decode_yaml(source: str) -> object:
    # An empty YAML document is None, not an error
    data = yaml.safe_load(source)
    return {} if data is None else data


def _decode_toml(source: str) -> object:
    return tomllib.loads(source)


def _decode_ini(source: str) -> object:
    parser = configparser.ConfigParser(
        interpolation=None, delimiters=("=",), default_section=_INI_NO_DEFAULTS
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string(f"[{_INI_TOP_LEVEL}]\n{source}")

    data: dict[str, object] = {}
    for section in parser.sections():
        prefix = "" if section == _INI_TOP_LEVEL else f"{section}."
        for key, value in parser.items(section, raw=True):
            data[f"{prefix}{key}"] = value
    return data


_DECODERS: dict[str, Callable[[str], object]] = {
    ".json": _decode_json,
    ".yaml": _decode_yaml,
    ".yml": _decode_yaml,
    ".toml": _decode_toml,
    ".tml": _decode_toml,
    ".ini": _decode_ini,
}

# RecursionError: json and PyYAML parse nested containers recursively
_DECODE_ERRORS = (
    json.JSONDecodeError,
    yaml.YAMLError,
    tomllib.TOMLDecodeError,
    configparser.Error,
    RecursionError,
)


def decode_resource(source: str, extension: str, path: str | None = None) -> dict[str, object]:
    """Decode resource text into a flat key -> value mapping.

    Args:
        source: File content
        extension: File extension including the dot (e.g., ".yaml");
            case-insensitive
        path: Human-readable path, used in error messages

    Returns:
        Flattened mapping of the document

    Raises:
        ResourceLoadError: If the extension is unsupported, the content is
            malformed or too deeply nested, or the document is not a mapping
    """
    decoder = _DECODERS.get(extension.lower())
    if decoder is None:
        msg = f"Unsupported resource format: {extension!r}"
        raise ResourceLoadError(msg, path)

    try:
        data = decoder(source)
    except _DECODE_ERRORS as e:
        msg = f"Invalid {extension.lstrip('.').upper()} content: {e}"
        raise ResourceLoadError(msg, path) from e

    if not isinstance(data, Mapping):
        msg = f"Expected a mapping at top level, got {type(data).__name__}"
        raise ResourceLoadError(msg, path)

    try:
        return flatten_mapping(data)
    except ResourceLoadError as e:
        raise ResourceLoadError(str(e), path) from e
