"""
spectable.results.params - Parse the ``[k: v, ..., #i]`` iteration suffix.

The test runner names each unrolled iteration ``<feature> [<params>, #<index>]``
in both console output and XML reports.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from spectable.values import Value, parse_literal

# "should add [a: 1, b: 2, #0]" -> base, params, index
ITERATION_NAME_PATTERN = re.compile(r"^(.+?)\s*\[([^\]]+),\s*#(\d+)\]$")


class IterationInfo(NamedTuple):
    """Base name, parameters and index recovered from an iteration name."""

    base_name: str
    index: int
    parameters: dict[str, Value]
    parameters_text: str


def parse_parameters(parameters_text: str) -> dict[str, Value]:
    """
    Parse ``a: 1, name: "x", flag: true`` into tagged values.

    Pairs without a key before the colon are skipped. ``null`` stays plain
    text since the runner prints it the same way as any other word.

    Examples:
        >>> parse_parameters("a: 1, b: true")
        {'a': Value(kind=<ValueKind.NUMBER: 'number'>, raw=1), 'b': Value(kind=<ValueKind.BOOLEAN: 'boolean'>, raw=True)}
    """
    parameters: dict[str, Value] = {}
    for pair in parameters_text.split(","):
        pair = pair.strip()
        colon = pair.find(":")
        if colon <= 0:
            continue
        key = pair[:colon].strip()
        parameters[key] = parse_literal(pair[colon + 1 :], allow_null=False)
    return parameters


def extract_iteration_info(test_name: str) -> Optional[IterationInfo]:
    """
    Split an unrolled iteration name into its parts.

    Returns:
        IterationInfo, or None if the name has no ``[..., #n]`` suffix
    """
    match = ITERATION_NAME_PATTERN.match(test_name.strip())
    if not match:
        return None
    parameters_text = match.group(2)
    return IterationInfo(
        base_name=match.group(1),
        index=int(match.group(3)),
        parameters=parse_parameters(parameters_text),
        parameters_text=parameters_text,
    )
