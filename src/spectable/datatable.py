"""
spectable.datatable - Parse ``where:`` data tables into iterations.

Supports pipe-separated tables (``a | b || c``) and semicolon-separated
tables (``a ; b ;; c``). The first row is the header; ``_`` header cells
are placeholders whose column is ignored.
"""

from __future__ import annotations

import re

from spectable.display import generate_display_name
from spectable.line_helpers import find_method_bounds, is_comment
from spectable.models import DataIteration, SourceRange
from spectable.values import Value, parse_literal

PIPE_SPLIT = re.compile(r"\|+")
SEMICOLON_SPLIT = re.compile(r";+")

PLACEHOLDER_COLUMN = "_"


def parse_value(text: str) -> Value:
    """Coerce a table cell into a tagged value (empty/``null`` become Null)."""
    return parse_literal(text, allow_null=True)


def parse_data_table_row(row: str) -> list[str]:
    """
    Split a table row into trimmed, non-empty cells.

    Pipes take precedence over semicolons; runs of a separator count as one.

    Examples:
        >>> parse_data_table_row("a | b || c")
        ['a', 'b', 'c']
        >>> parse_data_table_row("1 ;; 2")
        ['1', '2']
        >>> parse_data_table_row("no separators")
        []
    """
    trimmed = (row or "").strip()
    if not trimmed:
        return []
    if "|" in trimmed:
        parts = PIPE_SPLIT.split(trimmed)
    elif ";" in trimmed:
        parts = SEMICOLON_SPLIT.split(trimmed)
    else:
        return []
    return [part.strip() for part in parts if part.strip()]


def parse_where_block(lines: list[str], method_start: int, method_name: str) -> list[DataIteration]:
    """
    Parse the data table of the method starting at method_start.

    Args:
        lines: All lines of the file
        method_start: Index of the method header line
        method_name: Method name used for display names

    Returns:
        One DataIteration per data row in table order; empty if the method
        has no ``where:`` label or no table rows.
    """
    bounds = find_method_bounds(lines, method_start)
    if bounds.where_line is None:
        return []

    header: list[str] = []
    iterations: list[DataIteration] = []

    for j in range(bounds.where_line + 1, min(bounds.end_line + 1, len(lines))):
        line = lines[j]
        stripped = line.strip()

        if not stripped or is_comment(stripped):
            continue
        if stripped == "}":
            break
        if "|" not in stripped and ";" not in stripped:
            continue

        cells = parse_data_table_row(stripped)
        if not cells:
            continue

        if not header:
            header = cells
            continue

        data_values: dict[str, Value] = {}
        for column, cell in zip(header, cells):
            if column != PLACEHOLDER_COLUMN:
                data_values[column] = parse_value(cell)

        iterations.append(
            DataIteration(
                index=len(iterations),
                data_values=data_values,
                display_name=generate_display_name(method_name, data_values),
                range=SourceRange.for_line(j, line),
                method_name=method_name,
            )
        )

    return iterations
