"""
spectable.values - Tagged parameter values.

Data table cells and reported iteration parameters are sniffed from text
into one of four kinds: boolean, number, string, or null. Carrying the
kind alongside the payload keeps display formatting Groovy-like
(``true`` rather than ``True``, ``2`` rather than ``2.0``) and makes
equality in tests unambiguous.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

Number = Union[int, float]

# Groovy-ish numeric literal without type suffixes: 1, -2, 3.5, .5, 1e3, 2.5E-1
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class ValueKind(Enum):
    """Kind of a parsed parameter value."""

    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    NULL = "null"


@dataclass(frozen=True)
class Value:
    """
    A parameter value tagged with its kind.

    Attributes:
        kind: Which variant this value is
        raw: Python payload (bool, int/float, str, or None)
    """

    kind: ValueKind
    raw: Any = None

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOLEAN, bool(flag))

    @classmethod
    def number(cls, number: Number) -> "Value":
        return cls(ValueKind.NUMBER, number)

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, text)

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL, None)

    @classmethod
    def of(cls, obj: Any) -> "Value":
        """Wrap a plain Python object, passing existing Values through."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        # bool is a subclass of int, so it must be checked first
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, (int, float)):
            return cls.number(obj)
        return cls.string(str(obj))

    def to_python(self) -> Any:
        return self.raw

    def __str__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "null"
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.raw else "false"
        if self.kind is ValueKind.NUMBER:
            return format_number(self.raw)
        return str(self.raw)


def format_number(number: Number) -> str:
    """Render a number the way the test runner prints it (``2.0`` -> ``2``)."""
    if isinstance(number, float):
        if number.is_integer():
            return str(int(number))
        return repr(number)
    return str(number)


def parse_number(text: str) -> Number | None:
    """Parse a numeric literal, returning None when text is not one."""
    if not NUMBER_PATTERN.match(text):
        return None
    if any(ch in text for ch in ".eE"):
        return float(text)
    return int(text)


def parse_literal(text: str | None, allow_null: bool = True) -> Value:
    """
    Sniff a literal's kind from its text.

    Args:
        text: Cell or parameter text (surrounding whitespace is ignored)
        allow_null: Treat empty text and ``null`` as Null. Reported
            parameters keep ``null`` as plain text.

    Returns:
        Tagged Value
    """
    trimmed = (text or "").strip()

    if allow_null and trimmed in ("", "null"):
        return Value.null()
    if trimmed == "true":
        return Value.boolean(True)
    if trimmed == "false":
        return Value.boolean(False)

    number = parse_number(trimmed)
    if number is not None:
        return Value.number(number)

    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ("'", '"'):
        return Value.string(trimmed[1:-1])

    return Value.string(trimmed)


def to_python_dict(values: dict[str, Value]) -> dict[str, Any]:
    """Unwrap a mapping of Values into plain Python payloads."""
    return {key: value.to_python() for key, value in values.items()}


def format_values(values: dict[str, Value]) -> str:
    """Render ``k1: v1, k2: v2`` in insertion order."""
    return ", ".join(f"{key}: {value}" for key, value in values.items())
