"""Tests for spectable.serialize module."""

import json

from spectable.models import ErrorInfo, ErrorLocation, IterationResult
from spectable.results.matching import summarize
from spectable.scanner import scan_source
from spectable.serialize import (
    serialize_class,
    serialize_error,
    serialize_result,
    serialize_summary,
)
from spectable.values import Value


class TestSerializeClass:
    """Tests for scan record serialization."""

    def test_class_with_iterations(self, data_driven_source):
        data = serialize_class(scan_source(data_driven_source)[0])

        assert data["name"] == "DataDrivenSpec"
        assert data["is_abstract"] is False
        method = data["methods"][0]
        assert method["name"] == "maximum of two numbers"
        assert method["where_line"] == 16
        assert method["iterations"][0]["data_values"] == {"a": 1, "b": 3, "c": 3}
        assert method["iterations"][0]["range"]["start_line"] == 18

    def test_plain_values_are_json_ready(self, data_driven_source):
        data = serialize_class(scan_source(data_driven_source)[0])
        mixed = next(m for m in data["methods"] if m["name"] == "mixed value types")

        assert mixed["iterations"][0]["data_values"] == {
            "text": "hello",
            "number": 42,
            "decimal": 3.5,
            "flag": True,
            "nothing": None,
        }
        json.dumps(data)

    def test_method_without_table_omits_optional_keys(self):
        content = 'class ASpec extends Specification {\n  def "x"() {\n    expect:\n    true\n  }\n}\n'
        method = serialize_class(scan_source(content)[0])["methods"][0]

        assert method["is_data_driven"] is False
        assert "iterations" not in method
        assert "where_line" not in method


class TestSerializeResult:
    """Tests for result serialization."""

    def test_passing_result(self):
        result = IterationResult(
            index=0,
            display_name="m [a: 1, #0]",
            parameters={"a": Value.number(1)},
            success=True,
            duration=0.25,
        )
        assert serialize_result(result) == {
            "index": 0,
            "display_name": "m [a: 1, #0]",
            "parameters": {"a": 1},
            "success": True,
            "duration": 0.25,
        }

    def test_failing_result(self):
        result = IterationResult(
            index=1,
            display_name="m [a: 2, #1]",
            parameters={"a": Value.number(2)},
            success=False,
            output="Spec > m [a: 2, #1] FAILED",
            error=ErrorInfo("Iteration 1 FAILED"),
        )
        data = serialize_result(result)

        assert data["output"] == "Spec > m [a: 2, #1] FAILED"
        assert data["error"] == {"message": "Iteration 1 FAILED"}

    def test_error_location(self):
        error = ErrorInfo("boom", ErrorLocation("MathSpec.groovy", 14))
        assert serialize_error(error) == {
            "message": "boom",
            "location": {"path": "MathSpec.groovy", "line": 14},
        }

    def test_summary(self):
        assert serialize_summary(summarize([])) == {
            "total": 0,
            "failed": 0,
            "all_passed": False,
            "message": "no iterations",
        }
