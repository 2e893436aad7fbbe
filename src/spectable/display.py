"""
spectable.display - Iteration display names.

Mirrors how the test runner unrolls data-driven feature names: ``#key``
placeholders in the method name are replaced by row values, and names
without usable placeholders get a bracketed parameter list appended.
"""

from __future__ import annotations

import re
from typing import Mapping

from spectable.values import Value, format_values

# #a, #person.age, #_x
PLACEHOLDER_PATTERN = re.compile(r"#[a-zA-Z_][a-zA-Z0-9_.]*")


def generate_display_name(method_name: str, data_values: Mapping[str, Value]) -> str:
    """
    Render the display name of one data table row.

    Args:
        method_name: Declared method name, possibly containing ``#key`` placeholders
        data_values: Row values in column order

    Returns:
        The substituted name when at least one placeholder was filled,
        otherwise ``"name [k: v, ...]"``, or the bare name for an empty row.

    Examples:
        >>> generate_display_name("max of #a and #b", {"a": Value.number(1), "b": Value.number(3)})
        'max of 1 and 3'
        >>> generate_display_name("test method", {"x": Value.number(1)})
        'test method [x: 1]'
    """
    substituted = False

    def _substitute(match: re.Match[str]) -> str:
        nonlocal substituted
        key = match.group(0)[1:]
        if key not in data_values:
            return match.group(0)
        substituted = True
        return str(data_values[key])

    name = PLACEHOLDER_PATTERN.sub(_substitute, method_name)
    if substituted:
        return name

    if not data_values:
        return method_name
    return f"{method_name} [{format_values(dict(data_values))}]"
