"""
spectable.results.console - Recover iteration results from console output.

Reads the plain-console test log the build tool prints, e.g.::

    com.example.MathSpec > maximum [a: 1, b: 3, c: 3, #0] PASSED
    com.example.MathSpec > maximum of #a and #b is #c > maximum of 1 and 3 is 3 PASSED

Console output carries no durations, so every result has duration 0.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from spectable.config.sections import ResultsConfig
from spectable.models import ErrorInfo, IterationResult
from spectable.results.base import ResultRequest
from spectable.results.params import parse_parameters
from spectable.values import Value, parse_number

logger = logging.getLogger(__name__)

STATUS_PASSED = "PASSED"

# <suite> > <original name> > <unrolled name> <STATUS>
UNROLLED_LINE_PATTERN = re.compile(r"^.*>\s*([^>]+?)\s*>\s*([^>]+?)\s*(PASSED|FAILED|SKIPPED)$")

# Parameter key used when no phrase shape matches an unrolled name
UNROLLED_NAME_KEY = "unrolledName"


class ConsoleResultSource:
    """
    Result source for human-readable build output.

    Two line shapes are understood:
    - ``<suite> > <name> [<params>, #<index>] <STATUS>`` for features
      without placeholders in their name
    - ``<suite> > <name with #placeholders> > <unrolled name> <STATUS>``
      for features whose name is unrolled by the runner; the index is
      synthesized from line order and parameters are recovered on a
      best-effort basis from configured phrase shapes
    """

    name = "console"

    def __init__(self, config: Optional[ResultsConfig] = None) -> None:
        self.config = config or ResultsConfig()

    def collect(self, request: ResultRequest) -> list[IterationResult]:
        return self.extract(request.console_output, request.method_name)

    def extract(self, output: str, method_name: str) -> list[IterationResult]:
        """
        Extract iteration results for one feature method.

        Args:
            output: Captured stdout and stderr of the test run
            method_name: Declared feature name

        Returns:
            Results in output order; empty if nothing matched
        """
        if not output:
            return []

        lines = output.split("\n")
        if "#" in method_name:
            results = self._extract_unrolled(lines, method_name)
        else:
            results = self._extract_indexed(lines, method_name)

        logger.debug("Parsed %d iterations of %r from console output", len(results), method_name)
        return results

    def _extract_indexed(self, lines: list[str], method_name: str) -> list[IterationResult]:
        pattern = re.compile(
            rf"^.*>\s*{re.escape(method_name)}\s*\[([^\]]+),\s*#(\d+)\]\s*(PASSED|FAILED|SKIPPED)"
        )
        results: list[IterationResult] = []

        for line in lines:
            match = pattern.match(line.strip())
            if not match:
                continue

            parameters_text = match.group(1)
            index = int(match.group(2))
            status = match.group(3)
            success = status == STATUS_PASSED

            results.append(
                IterationResult(
                    index=index,
                    display_name=f"{method_name} [{parameters_text}, #{index}]",
                    parameters=parse_parameters(parameters_text),
                    success=success,
                    duration=0.0,
                    output=line.strip(),
                    error=None if success else ErrorInfo(f"Iteration {index} {status}"),
                )
            )

        return results

    def _extract_unrolled(self, lines: list[str], method_name: str) -> list[IterationResult]:
        results: list[IterationResult] = []

        for line in lines:
            match = UNROLLED_LINE_PATTERN.match(line.strip())
            if not match or match.group(1).strip() != method_name:
                continue

            unrolled = match.group(2).strip()
            success = match.group(3) == STATUS_PASSED

            results.append(
                IterationResult(
                    index=len(results),
                    display_name=f"{method_name} > {unrolled}",
                    parameters=self.parameters_from_unrolled_name(unrolled),
                    success=success,
                    duration=0.0,
                    output=line.strip(),
                    error=None if success else ErrorInfo(f"Test failed: {unrolled}"),
                )
            )

        return results

    def parameters_from_unrolled_name(self, unrolled: str) -> dict[str, Value]:
        """
        Recover parameters from an unrolled feature name.

        Every configured phrase shape that matches contributes its named
        groups; numeric captures become numbers. When no shape matches,
        the whole name is kept under ``unrolledName``.
        """
        parameters: dict[str, Value] = {}
        for phrase in self.config.phrases.values():
            match = phrase.match(unrolled)
            if not match:
                continue
            for key, text in match.groupdict().items():
                if text is None:
                    continue
                text = text.strip()
                number = parse_number(text)
                parameters[key] = Value.number(number) if number is not None else Value.string(text)

        if not parameters:
            parameters[UNROLLED_NAME_KEY] = Value.string(unrolled)
        return parameters
