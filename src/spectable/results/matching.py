"""Relate reported iteration results to discovered data table rows.

Results are matched to iterations by ordinal index first and by
parameter signature when the index does not line up (for example when
the console fallback had to synthesize indexes).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

from spectable.models import DataIteration, IterationResult, TestMethod
from spectable.values import Value, format_values


class MatchedIteration(NamedTuple):
    """A result paired with the table row it came from, if found."""

    result: IterationResult
    iteration: Optional[DataIteration]


@dataclass(frozen=True)
class RunSummary:
    """Roll-up of a feature method's iteration results."""

    total: int
    failed: int
    message: str

    @property
    def all_passed(self) -> bool:
        return self.total > 0 and self.failed == 0


def parameter_signature(values: dict[str, Value]) -> tuple[tuple[str, str], ...]:
    """Order-insensitive, display-based signature of a parameter mapping."""
    return tuple(sorted((key, str(value)) for key, value in values.items()))


def sort_results(results: list[IterationResult]) -> list[IterationResult]:
    """Order results by index, breaking ties by their parameter values."""
    return sorted(
        results,
        key=lambda r: (r.index, ",".join(str(v) for v in r.parameters.values())),
    )


def summarize(results: list[IterationResult]) -> RunSummary:
    """Summarize pass/fail counts the way the parent test reports them."""
    total = len(results)
    failed = sum(1 for r in results if not r.success)
    if total == 0:
        message = "no iterations"
    elif failed:
        message = f"{failed} of {total} iterations failed"
    else:
        message = f"all {total} iterations passed"
    return RunSummary(total=total, failed=failed, message=message)


def iteration_label(test_name: str, result: IterationResult) -> str:
    """Label for one iteration: ``name [#i] k: v, ...``."""
    label = f"{test_name} [#{result.index}]"
    parameters = format_values(result.parameters)
    return f"{label} {parameters}" if parameters else label


def iteration_id(parent_id: str, index: int) -> str:
    """Stable identifier for an iteration under its parent test."""
    return f"{parent_id}#iteration-{index}"


def match_iterations(method: TestMethod, results: list[IterationResult]) -> list[MatchedIteration]:
    """
    Pair each result with the discovered iteration it reports on.

    A result matches the iteration with the same index when their
    parameters agree (or the result carries none that overlap). Otherwise
    the first unused iteration with an equal parameter signature is used.

    Args:
        method: Scanned method with its parsed iterations
        results: Reconciled results for that method

    Returns:
        One MatchedIteration per result, in result order
    """
    iterations = method.iterations or []
    by_index = {iteration.index: iteration for iteration in iterations}
    used: set[int] = set()
    matched: list[MatchedIteration] = []

    for result in results:
        candidate = by_index.get(result.index)
        if candidate is not None and candidate.index not in used and _parameters_agree(candidate, result):
            used.add(candidate.index)
            matched.append(MatchedIteration(result, candidate))
            continue

        signature = parameter_signature(result.parameters)
        fallback = next(
            (
                it
                for it in iterations
                if it.index not in used and parameter_signature(it.data_values) == signature
            ),
            None,
        )
        if fallback is not None:
            used.add(fallback.index)
        matched.append(MatchedIteration(result, fallback))

    return matched


def _parameters_agree(iteration: DataIteration, result: IterationResult) -> bool:
    """True if every parameter name both sides share renders the same."""
    shared = set(iteration.data_values) & set(result.parameters)
    return all(str(iteration.data_values[key]) == str(result.parameters[key]) for key in shared)
