"""Reconcile iteration results from several sources.

Sources are tried in preference order (XML report first by default) and
the first one that yields results wins outright. Results from different
sources are never interleaved or deduplicated against each other.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from spectable.config.sections import ResultsConfig
from spectable.exceptions import ConfigError
from spectable.models import IterationResult
from spectable.results.base import ResultRequest, ResultSource
from spectable.results.console import ConsoleResultSource
from spectable.results.junit_xml import JUnitXMLResultSource

logger = logging.getLogger(__name__)

SOURCE_FACTORIES: dict[str, Callable[[ResultsConfig], ResultSource]] = {
    JUnitXMLResultSource.name: JUnitXMLResultSource,
    ConsoleResultSource.name: ConsoleResultSource,
}


def create_source(name: str, config: ResultsConfig) -> ResultSource:
    """Create a result source by name.

    Raises:
        ConfigError: If no source is registered under that name.
    """
    factory = SOURCE_FACTORIES.get(name)
    if factory is None:
        known = ", ".join(sorted(SOURCE_FACTORIES))
        raise ConfigError(f"Unknown result source {name!r} (known: {known})")
    return factory(config)


class ResultReconciler:
    """Selects one authoritative result list per test run.

    The XML report is preferred because it records exact per-iteration
    status and duration; console output is the fallback. The last source
    in the order is returned even when it is empty.
    """

    def __init__(
        self,
        config: Optional[ResultsConfig] = None,
        sources: Optional[Sequence[ResultSource]] = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            config: Results settings. Defaults when None.
            sources: Explicit source order. Built from ``config.sources`` when None.
        """
        self.config = config or ResultsConfig()
        if sources is None:
            sources = [create_source(name, self.config) for name in self.config.sources]
        self.sources: list[ResultSource] = list(sources)

    def reconcile(
        self,
        console_output: str,
        method_name: str,
        class_name: str,
        workspace_root: Union[str, Path],
    ) -> list[IterationResult]:
        """Resolve the iteration results of one feature method.

        Args:
            console_output: Captured stdout and stderr of the test run.
            method_name: Declared feature name.
            class_name: Fully qualified specification class name.
            workspace_root: Project root used to locate the XML report.

        Returns:
            Results from the first source that produced any, else the
            (possibly empty) results of the last source.
        """
        request = ResultRequest(
            console_output=console_output or "",
            method_name=method_name,
            class_name=class_name,
            workspace_root=Path(workspace_root),
        )
        logger.debug("Resolving results for %s.%s", class_name, method_name)

        results: list[IterationResult] = []
        for source in self.sources:
            results = source.collect(request)
            if results:
                logger.debug("Using %d results from %s", len(results), source.name)
                return results
            logger.debug("No results from %s", source.name)

        return results


def parse_test_results(
    console_output: str,
    method_name: str,
    class_name: str,
    workspace_root: Union[str, Path],
    config: Optional[ResultsConfig] = None,
) -> list[IterationResult]:
    """Reconcile results with a default-ordered reconciler."""
    return ResultReconciler(config).reconcile(console_output, method_name, class_name, workspace_root)
