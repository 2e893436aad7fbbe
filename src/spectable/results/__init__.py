"""Iteration result sources and reconciliation."""

from spectable.results.base import ResultRequest, ResultSource
from spectable.results.console import ConsoleResultSource
from spectable.results.junit_xml import JUnitXMLResultSource
from spectable.results.matching import (
    MatchedIteration,
    RunSummary,
    iteration_id,
    iteration_label,
    match_iterations,
    sort_results,
    summarize,
)
from spectable.results.params import extract_iteration_info, parse_parameters
from spectable.results.reconcile import ResultReconciler, parse_test_results

__all__ = [
    "ConsoleResultSource",
    "JUnitXMLResultSource",
    "MatchedIteration",
    "ResultReconciler",
    "ResultRequest",
    "ResultSource",
    "RunSummary",
    "extract_iteration_info",
    "iteration_id",
    "iteration_label",
    "match_iterations",
    "parse_parameters",
    "parse_test_results",
    "sort_results",
    "summarize",
]
