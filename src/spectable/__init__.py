"""
spectable - Data table discovery and iteration result reconciliation

spectable finds data-driven feature methods in Specification classes,
unrolls their ``where:`` tables into iterations, and maps test run output
(console logs and JUnit XML reports) back onto those iterations.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("spectable")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from spectable.datatable import parse_data_table_row, parse_where_block
from spectable.display import generate_display_name
from spectable.models import (
    DataIteration,
    ErrorInfo,
    IterationResult,
    SourceRange,
    TestClass,
    TestMethod,
)
from spectable.results import ResultReconciler, parse_test_results
from spectable.scanner import SourceScanner, scan_file, scan_source
from spectable.values import Value, ValueKind, parse_literal

__all__ = [
    "__version__",
    "DataIteration",
    "ErrorInfo",
    "IterationResult",
    "ResultReconciler",
    "SourceRange",
    "SourceScanner",
    "TestClass",
    "TestMethod",
    "Value",
    "ValueKind",
    "generate_display_name",
    "parse_data_table_row",
    "parse_literal",
    "parse_test_results",
    "parse_where_block",
    "scan_file",
    "scan_source",
]
