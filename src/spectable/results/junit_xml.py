"""JUnit XML parser for data-driven iteration results.

This parser extracts per-iteration results from the JUnit-style XML report
the build tool writes for each specification class.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from spectable.config.sections import ResultsConfig
from spectable.models import ErrorInfo, IterationResult
from spectable.results.base import ResultRequest
from spectable.results.params import extract_iteration_info

logger = logging.getLogger(__name__)

# Testcases missing any of these are not iteration results
REQUIRED_ATTRIBUTES = ("name", "classname", "time")


class JUnitXMLResultSource:
    """Result source for JUnit XML report files.

    Only testcases carrying ``name``, ``classname`` and ``time`` and named
    like unrolled iterations (``<feature> [<params>, #<index>]``) produce
    results. A testcase is successful unless it has a ``failure`` or
    ``error`` child, whose text is kept verbatim as the error message.
    """

    name = "junit_xml"

    def __init__(self, config: Optional[ResultsConfig] = None) -> None:
        """Initialize JUnitXMLResultSource.

        Args:
            config: Results settings locating the report. Defaults when None.
        """
        self.config = config or ResultsConfig()

    def report_path(self, workspace_root: Path, class_name: str) -> Path:
        """Conventional report location for a class.

        Args:
            workspace_root: Project root.
            class_name: Fully qualified class name.

        Returns:
            ``<root>/build/test-results/test/TEST-<class_name>.xml`` with the
            default configuration.
        """
        file_name = self.config.report_name.replace("{class_name}", class_name)
        return Path(workspace_root) / self.config.report_dir / file_name

    def collect(self, request: ResultRequest) -> list[IterationResult]:
        """Read the class's report and extract its iterations.

        A missing, unreadable or undecodable report yields an empty list.
        """
        path = self.report_path(request.workspace_root, request.class_name)
        if not path.is_file():
            logger.debug("XML report not found at %s", path)
            return []

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read XML report %s: %s", path, e)
            return []

        return self.extract(content, request.class_name)

    def extract(self, content: str, class_name: str) -> list[IterationResult]:
        """Parse JUnit XML content and return iteration results.

        Args:
            content: XML file content.
            class_name: Class the report belongs to (used for diagnostics).

        Returns:
            List of IterationResults in document order. Empty for empty or
            malformed content.
        """
        results: list[IterationResult] = []

        if not content or not content.strip():
            logger.debug("Empty XML content for %s", class_name)
            return results

        try:
            root = ET.fromstring(content.strip())
        except ET.ParseError as e:
            logger.debug("Malformed XML report for %s: %s", class_name, e)
            return results

        # Handle <testsuites>, <testsuite>, or a bare <testcase> root
        testcases = root.findall(".//testcase")
        if root.tag == "testcase":
            testcases.insert(0, root)

        for testcase in testcases:
            if any(testcase.get(attr) is None for attr in REQUIRED_ATTRIBUTES):
                continue
            name = testcase.get("name", "")
            info = extract_iteration_info(name)
            if info is None:
                continue

            time_str = testcase.get("time", "0")
            try:
                duration = float(time_str)
            except ValueError:
                duration = 0.0

            error = None
            failure = testcase.find("failure")
            if failure is None:
                failure = testcase.find("error")
            if failure is not None:
                error = ErrorInfo(_failure_message(failure))

            results.append(
                IterationResult(
                    index=info.index,
                    display_name=name,
                    parameters=info.parameters,
                    success=error is None,
                    duration=duration,
                    output=name,
                    error=error,
                )
            )

        logger.debug("Parsed %d iterations from XML report for %s", len(results), class_name)
        return results


def _failure_message(element: ET.Element) -> str:
    """Text content of a failure/error element, falling back to its message attribute."""
    text = element.text or ""
    if text.strip():
        return text
    message: Optional[str] = element.get("message")
    return message or ""
