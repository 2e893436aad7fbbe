"""
spectable.commands.results_cmd - Resolve iteration results of a test run.

Reads captured build output (a file or stdin) and the class's XML report,
then prints the reconciled per-iteration results. With ``--spec`` the
results are matched to the feature's data table rows and failures point
at the row that produced them.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from spectable.config import ResultsConfig, ScannerConfig, load_config
from spectable.models import ErrorLocation, IterationResult
from spectable.results import (
    ResultReconciler,
    iteration_label,
    match_iterations,
    sort_results,
    summarize,
)
from spectable.scanner import SourceScanner
from spectable.serialize import serialize_result, serialize_summary


def run(args: argparse.Namespace) -> int:
    """Run the results command.

    Returns 1 when any iteration failed, 0 otherwise (including when no
    iterations were found).
    """
    config = load_config(getattr(args, "config", None))
    reconciler = ResultReconciler(ResultsConfig.from_dict(config.get("results", {})))

    console_output = _read_output(args.output)
    root = args.root or Path.cwd()

    results = sort_results(
        reconciler.reconcile(console_output, args.method, args.class_name, root)
    )
    spec_path = getattr(args, "spec", None)
    if spec_path is not None:
        scanner = SourceScanner(ScannerConfig.from_dict(config.get("scanner", {})))
        results = locate_failures(results, scanner, spec_path, args.class_name, args.method)
    summary = summarize(results)

    if getattr(args, "json", False):
        print(
            json.dumps(
                {
                    "class": args.class_name,
                    "method": args.method,
                    "results": [serialize_result(r) for r in results],
                    "summary": serialize_summary(summary),
                },
                indent=2,
            )
        )
    else:
        _output_text(args.method, results)
        print(summary.message)

    return 1 if summary.failed else 0


def locate_failures(
    results: list[IterationResult],
    scanner: SourceScanner,
    spec_path: Path,
    class_name: str,
    method_name: str,
) -> list[IterationResult]:
    """
    Attach the data table row location to each failed result.

    The class is looked up by its simple name. Results are returned
    unchanged when the class, the method or a matching row is not found.
    """
    simple_name = class_name.rsplit(".", 1)[-1]
    test_class = next((c for c in scanner.scan_file(spec_path) if c.name == simple_name), None)
    method = test_class.find_method(method_name) if test_class is not None else None
    if method is None:
        print(f"Warning: {simple_name}.{method_name} not found in {spec_path}", file=sys.stderr)
        return results

    located: list[IterationResult] = []
    for matched in match_iterations(method, results):
        result = matched.result
        if result.error is not None and matched.iteration is not None:
            location = ErrorLocation(str(spec_path), matched.iteration.range.start_line)
            result = replace(result, error=replace(result.error, location=location))
        located.append(result)
    return located


def _read_output(source: Optional[str]) -> str:
    """Read console output from a file, ``-`` for stdin, or nothing."""
    if source is None:
        return ""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _output_text(method_name: str, results: list[IterationResult]) -> None:
    for result in results:
        status = "PASSED" if result.success else "FAILED"
        line = f"{status}  {iteration_label(method_name, result)}"
        if result.duration:
            line += f"  ({result.duration:.3f}s)"
        print(line)
        if result.error is not None:
            print(f"    {result.error.message}")
            if result.error.location is not None:
                print(f"    at {_format_location(result.error.location)}")


def _format_location(location: ErrorLocation) -> str:
    return f"{location.path}:{location.line + 1}"

