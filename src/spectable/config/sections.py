"""
spectable.config.sections - Typed views of configuration sections.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from spectable.config.defaults import DEFAULT_CONFIG
from spectable.exceptions import ConfigError

_SCANNER_DEFAULTS = DEFAULT_CONFIG["scanner"]
_RESULTS_DEFAULTS = DEFAULT_CONFIG["results"]


def _as_int(section: str, key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"[{section}] {key} must be an integer, got {value!r}") from e
    if number < 1:
        raise ConfigError(f"[{section}] {key} must be positive, got {number}")
    return number


def _as_str_list(section: str, key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"[{section}] {key} must be a list of strings, got {value!r}")
    return [str(item) for item in value]


@dataclass
class ScannerConfig:
    """
    Settings for source scanning.

    Attributes:
        label_window: Lines searched after a method header for a block label
        brace_window: Lines (header included) searched for the opening brace
        lifecycle_methods: Fixture hooks never reported as feature methods
        patterns: Glob patterns for specification files
        ignore: Directory names skipped when globbing
    """

    label_window: int = _SCANNER_DEFAULTS["label_window"]
    brace_window: int = _SCANNER_DEFAULTS["brace_window"]
    lifecycle_methods: frozenset[str] = frozenset(_SCANNER_DEFAULTS["lifecycle_methods"])
    patterns: list[str] = field(default_factory=lambda: list(_SCANNER_DEFAULTS["patterns"]))
    ignore: list[str] = field(default_factory=lambda: list(_SCANNER_DEFAULTS["ignore"]))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScannerConfig":
        """
        Create ScannerConfig from the ``[scanner]`` config table.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        return cls(
            label_window=_as_int(
                "scanner", "label_window", data.get("label_window", _SCANNER_DEFAULTS["label_window"])
            ),
            brace_window=_as_int(
                "scanner", "brace_window", data.get("brace_window", _SCANNER_DEFAULTS["brace_window"])
            ),
            lifecycle_methods=frozenset(
                _as_str_list(
                    "scanner",
                    "lifecycle_methods",
                    data.get("lifecycle_methods", _SCANNER_DEFAULTS["lifecycle_methods"]),
                )
            ),
            patterns=_as_str_list("scanner", "patterns", data.get("patterns", _SCANNER_DEFAULTS["patterns"])),
            ignore=_as_str_list("scanner", "ignore", data.get("ignore", _SCANNER_DEFAULTS["ignore"])),
        )


@dataclass
class ResultsConfig:
    """
    Settings for result extraction and reconciliation.

    Attributes:
        report_dir: Report directory relative to the workspace root
        report_name: Report file name template with a ``{class_name}`` field
        sources: Result source names in preference order
        phrases: Unrolled-name regexes (named groups become parameters)
    """

    report_dir: str = _RESULTS_DEFAULTS["report_dir"]
    report_name: str = _RESULTS_DEFAULTS["report_name"]
    sources: list[str] = field(default_factory=lambda: list(_RESULTS_DEFAULTS["sources"]))
    phrases: dict[str, re.Pattern[str]] = field(
        default_factory=lambda: compile_phrases(_RESULTS_DEFAULTS["phrases"])
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultsConfig":
        """
        Create ResultsConfig from the ``[results]`` config table.

        Raises:
            ConfigError: If a value has the wrong type or a phrase is not a valid regex.
        """
        report_name = str(data.get("report_name", _RESULTS_DEFAULTS["report_name"]))
        if "{class_name}" not in report_name:
            raise ConfigError(f"[results] report_name must contain {{class_name}}, got {report_name!r}")

        phrases = data.get("phrases", _RESULTS_DEFAULTS["phrases"])
        if not isinstance(phrases, dict):
            raise ConfigError(f"[results] phrases must be a table, got {phrases!r}")

        return cls(
            report_dir=str(data.get("report_dir", _RESULTS_DEFAULTS["report_dir"])),
            report_name=report_name,
            sources=_as_str_list("results", "sources", data.get("sources", _RESULTS_DEFAULTS["sources"])),
            phrases=compile_phrases(phrases),
        )


def compile_phrases(phrases: dict[str, str]) -> dict[str, re.Pattern[str]]:
    """Compile named phrase regexes, reporting the offending entry on error."""
    compiled: dict[str, re.Pattern[str]] = {}
    for name, pattern in phrases.items():
        try:
            compiled[name] = re.compile(str(pattern))
        except re.error as e:
            raise ConfigError(f"[results.phrases] {name}: invalid regex: {e}") from e
    return compiled
