"""
spectable.line_helpers - Line classification shared by the scanner and table parser.

Brace counting is purely textual: braces inside strings or comments are
counted too. Scanning is best-effort and never needs a lexer.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

# given: / when: / then: / expect: / where:, optionally with a
# description string and a trailing line comment.
BLOCK_LABEL_PATTERN = re.compile(
    r"^(given|when|then|expect|where)\s*:\s*(?:(['\"]).*\2)?\s*(?://.*)?$"
)


def count_brace_delta(line: str) -> int:
    """Return (count of ``{``) - (count of ``}``) for a line."""
    return line.count("{") - line.count("}")


def block_label(stripped: str) -> Optional[str]:
    """Return the block label name if the stripped line is a label, else None."""
    match = BLOCK_LABEL_PATTERN.match(stripped)
    return match.group(1) if match else None


def is_comment(stripped: str) -> bool:
    """True for lines starting a line or block comment (or continuing one)."""
    return stripped.startswith(("//", "/*", "*"))


class MethodBounds(NamedTuple):
    """Where a method body ends and where its ``where:`` label is."""

    end_line: int
    where_line: Optional[int]


def find_method_bounds(lines: list[str], start: int) -> MethodBounds:
    """
    Walk forward from a method header until its braces balance.

    The balance is tracked independently of any enclosing class. The end
    is the first line at which the balance drops back to zero or below
    after an opening brace has been seen; truncated methods end at the
    last line of the file.

    Args:
        lines: All lines of the file
        start: Index of the method header line

    Returns:
        MethodBounds with the end line and the last ``where:`` label seen
        before it (None if there is none)
    """
    balance = 0
    seen_opening = False
    where_line: Optional[int] = None

    for j in range(start, len(lines)):
        line = lines[j]
        delta = count_brace_delta(line)
        if "{" in line:
            seen_opening = True
        balance += delta

        if seen_opening and balance <= 0:
            return MethodBounds(j, where_line)

        if block_label(line.strip()) == "where":
            where_line = j

    return MethodBounds(max(len(lines) - 1, start), where_line)
