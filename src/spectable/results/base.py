"""Result source protocol.

Every source of iteration results (XML report, console log) implements
the same ``collect`` capability so the reconciler can try them in a
configured order without knowing what each one reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from spectable.models import IterationResult


@dataclass(frozen=True)
class ResultRequest:
    """Everything a result source may need for one feature method.

    Attributes:
        console_output: Captured stdout and stderr of the test run.
        method_name: Declared feature name being resolved.
        class_name: Fully qualified specification class name.
        workspace_root: Project root used to locate the XML report.
    """

    console_output: str
    method_name: str
    class_name: str
    workspace_root: Path


@runtime_checkable
class ResultSource(Protocol):
    """Protocol for all result sources."""

    name: str

    def collect(self, request: ResultRequest) -> list[IterationResult]:
        """Return iteration results for the request, empty if none.

        Must not raise for missing or malformed input.
        """
        ...
