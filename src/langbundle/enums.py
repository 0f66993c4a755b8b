"""Enumerations for langbundle type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import IntEnum, StrEnum


class Confidence(IntEnum):
    """Negotiation confidence between a requested and a known language.

    IntEnum so that confidences compare and sort naturally:
    Confidence.EXACT > Confidence.HIGH > Confidence.LOW > Confidence.NO
    """

    NO = 0
    """Different base language: en vs fr"""

    LOW = 1
    """Same base language, different script: zh-Hant vs zh-Hans"""

    HIGH = 2
    """Same language and script, different region: en-GB vs en-US"""

    EXACT = 3
    """Equal after likely-subtag expansion: en vs en-US"""


class LoadState(StrEnum):
    """Lazy load state of a Bundle's translation table.

    StrEnum provides automatic string conversion: str(LoadState.LOADED) == "loaded"
    """

    NOT_LOADED = "not_loaded"
    """No table yet, or reload() requested a fresh one"""

    LOADING = "loading"
    """One caller is running the resource loader; others wait"""

    LOADED = "loaded"
    """Table is populated for the current load generation"""


class ArgumentKind(StrEnum):
    """Kind of a single call-time argument, as seen by the format resolver.

    StrEnum provides automatic string conversion: str(ArgumentKind.RECORD) == "record"
    """

    NONE = "none"
    """Absent value: None"""

    SCALAR = "scalar"
    """Anything substituted positionally: 'world', 42, Decimal('1.5')"""

    RECORD = "record"
    """Named-field aggregate: dataclass instance, named tuple, SimpleNamespace"""

    MAPPING = "mapping"
    """Key-value mapping: {'Name': 'Ann'}"""

    SEQUENCE = "sequence"
    """Ordered non-string sequence: ['a', 'b'], ('a', 'b')"""


__all__ = [
    "ArgumentKind",
    "Confidence",
    "LoadState",
]
