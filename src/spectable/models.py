"""
spectable.models - Records produced by scanning and result reconciliation.

All records are value-like: a fresh scan or test run produces a new set
and fully supersedes the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from spectable.values import Value


@dataclass(frozen=True)
class SourceRange:
    """
    Zero-based line/column span in a source file.

    Attributes:
        start_line: First line (0-based)
        start_column: Column on the first line
        end_line: Last line (0-based, inclusive)
        end_column: Column on the last line
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def for_line(cls, line_index: int, line: str) -> "SourceRange":
        """Span a whole single line."""
        return cls(line_index, 0, line_index, len(line))


@dataclass(frozen=True)
class DataIteration:
    """
    One row of a ``where:`` data table.

    Attributes:
        index: Ordinal of the row in table order (0-based)
        data_values: Column name to value, ``_`` columns dropped
        display_name: Rendered iteration label
        range: Span of the data row
        method_name: Name of the method the table belongs to
    """

    index: int
    data_values: dict[str, Value]
    display_name: str
    range: SourceRange
    method_name: str


@dataclass
class TestMethod:
    """
    A feature method discovered inside a specification class.

    Attributes:
        name: Declared identifier or quoted display string
        line: Header line (0-based)
        range: Span of the header line
        is_data_driven: True if the body has a ``where:`` block
        iterations: Parsed data table rows, None if there are none
        where_line: Line of the ``where:`` label, if any
    """

    __test__ = False

    name: str
    line: int
    range: SourceRange
    is_data_driven: bool = False
    iterations: Optional[list[DataIteration]] = None
    where_line: Optional[int] = None


@dataclass
class TestClass:
    """
    A top-level specification class.

    Attributes:
        name: Class name
        line: Header line (0-based)
        range: Span of the header line
        methods: Feature methods in source order
        is_abstract: True for ``abstract class`` declarations
    """

    __test__ = False

    name: str
    line: int
    range: SourceRange
    methods: list[TestMethod] = field(default_factory=list)
    is_abstract: bool = False

    def find_method(self, name: str) -> Optional[TestMethod]:
        """Return the first method with the given name."""
        for method in self.methods:
            if method.name == name:
                return method
        return None


@dataclass(frozen=True)
class ErrorLocation:
    """Where a failure was reported (path plus 0-based line)."""

    path: str
    line: int


@dataclass(frozen=True)
class ErrorInfo:
    """Failure message with an optional source location."""

    message: str
    location: Optional[ErrorLocation] = None


@dataclass(frozen=True)
class IterationResult:
    """
    Outcome of one executed iteration.

    Attributes:
        index: Ordinal of the iteration
        display_name: Name as reported by the test runner
        parameters: Parameter values recovered from the report
        success: True if the iteration passed
        duration: Seconds, 0.0 when the source does not report it
        output: Raw line or testcase name the result was read from
        error: Failure details when success is False
    """

    index: int
    display_name: str
    parameters: dict[str, Value]
    success: bool
    duration: float = 0.0
    output: Optional[str] = None
    error: Optional[ErrorInfo] = None
