"""Serialization - Export scan and result records to JSON-compatible dicts.

Parameter values are emitted as their plain Python payloads, so
``true`` becomes ``True`` (JSON ``true``) and ``null`` becomes ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spectable.values import to_python_dict

if TYPE_CHECKING:
    from spectable.models import (
        DataIteration,
        ErrorInfo,
        IterationResult,
        SourceRange,
        TestClass,
        TestMethod,
    )
    from spectable.results.matching import RunSummary


def serialize_range(source_range: SourceRange) -> dict[str, int]:
    """Serialize a SourceRange."""
    return {
        "start_line": source_range.start_line,
        "start_column": source_range.start_column,
        "end_line": source_range.end_line,
        "end_column": source_range.end_column,
    }


def serialize_iteration(iteration: DataIteration) -> dict[str, Any]:
    """Serialize a DataIteration to a JSON-compatible dict."""
    return {
        "index": iteration.index,
        "display_name": iteration.display_name,
        "data_values": to_python_dict(iteration.data_values),
        "range": serialize_range(iteration.range),
        "method_name": iteration.method_name,
    }


def serialize_method(method: TestMethod) -> dict[str, Any]:
    """Serialize a TestMethod, including its iterations when present."""
    result: dict[str, Any] = {
        "name": method.name,
        "line": method.line,
        "range": serialize_range(method.range),
        "is_data_driven": method.is_data_driven,
    }
    if method.where_line is not None:
        result["where_line"] = method.where_line
    if method.iterations:
        result["iterations"] = [serialize_iteration(it) for it in method.iterations]
    return result


def serialize_class(test_class: TestClass) -> dict[str, Any]:
    """Serialize a TestClass with its methods."""
    return {
        "name": test_class.name,
        "line": test_class.line,
        "range": serialize_range(test_class.range),
        "is_abstract": test_class.is_abstract,
        "methods": [serialize_method(m) for m in test_class.methods],
    }


def serialize_error(error: ErrorInfo) -> dict[str, Any]:
    """Serialize an ErrorInfo."""
    result: dict[str, Any] = {"message": error.message}
    if error.location is not None:
        result["location"] = {"path": error.location.path, "line": error.location.line}
    return result


def serialize_result(result: IterationResult) -> dict[str, Any]:
    """Serialize an IterationResult to a JSON-compatible dict."""
    data: dict[str, Any] = {
        "index": result.index,
        "display_name": result.display_name,
        "parameters": to_python_dict(result.parameters),
        "success": result.success,
        "duration": result.duration,
    }
    if result.output is not None:
        data["output"] = result.output
    if result.error is not None:
        data["error"] = serialize_error(result.error)
    return data


def serialize_summary(summary: RunSummary) -> dict[str, Any]:
    """Serialize a RunSummary."""
    return {
        "total": summary.total,
        "failed": summary.failed,
        "all_passed": summary.all_passed,
        "message": summary.message,
    }
