"""
spectable.scanner - Discover specification classes and feature methods.

Scans source text line by line without a grammar. Class and method
boundaries are found by tracking brace balance, so partially edited or
truncated files still yield whatever could be recognized. Nothing in
this module raises on malformed input.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set

from spectable.config.sections import ScannerConfig
from spectable.datatable import parse_where_block
from spectable.line_helpers import block_label, count_brace_delta, find_method_bounds, is_comment
from spectable.models import SourceRange, TestClass, TestMethod

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """Where the scanner is relative to class bodies."""

    TOP = "top"
    IN_CLASS = "in_class"
    IN_NESTED_CLASS = "in_nested_class"


@dataclass
class _ClassContext:
    """Mutable state for the class currently being scanned."""

    test_class: TestClass
    balance: int = 0
    seen_opening: bool = False
    nested_balance: int = 0
    nested_seen_opening: bool = False


@dataclass
class ScanResult:
    """
    Result of scanning a set of files.

    Attributes:
        classes_by_file: Discovered classes keyed by file path
        files_scanned: Number of files read
        errors: Files that could not be read
    """

    classes_by_file: Dict[Path, List[TestClass]] = field(default_factory=dict)
    files_scanned: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def class_count(self) -> int:
        return sum(len(classes) for classes in self.classes_by_file.values())


def has_opening_brace_nearby(lines: List[str], index: int, window: int = 5) -> bool:
    """
    Check for a method's opening brace on its header line or just below.

    Blank and comment lines are skipped; the first other line
    within the window decides.
    """
    if index < len(lines) and "{" in lines[index]:
        return True
    for j in range(index + 1, min(len(lines), index + window)):
        stripped = lines[j].strip()
        if not stripped or is_comment(stripped):
            continue
        return stripped.startswith("{")
    return False


def has_block_label_nearby(lines: List[str], index: int, window: int = 50) -> bool:
    """
    Check whether a block label follows a method header.

    Stops at the first label found (True) or a lone ``}`` (False).
    """
    for j in range(index + 1, min(len(lines), index + window)):
        stripped = lines[j].strip()
        if not stripped:
            continue
        if block_label(stripped):
            return True
        if stripped == "}":
            return False
    return False


def has_where_block(lines: List[str], index: int) -> bool:
    """True if a ``where:`` label appears before the method's closing brace."""
    return find_method_bounds(lines, index).where_line is not None


class SourceScanner:
    """
    Scans specification source text for test classes and methods.

    Recognizes:
    - Top-level classes extending ``Specification`` (optionally qualified
      or abstract)
    - Feature methods declared with ``def``/``void`` and either a quoted
      name or a nearby block label
    - ``where:`` data tables, parsed into iterations

    Nested specification classes are tracked only so they can be skipped.
    """

    CLASS_PATTERN = re.compile(
        r"^(?P<abstract>abstract\s+)?class\s+(?P<name>\w+)\s+extends\s+(?:[\w.]*\.)?Specification\b"
    )

    METHOD_HEADER_PATTERN = re.compile(
        r"^(?:def|void)\s+"
        r"(?:(?P<quote>['\"])(?P<quoted>(?:(?!(?P=quote)).)+)(?P=quote)"
        r"|(?P<ident>[a-zA-Z_][a-zA-Z0-9_]*))"
        r"\s*(?:\([^)]*\))?\s*(?P<brace>\{)?\s*$"
    )

    def __init__(self, config: Optional[ScannerConfig] = None) -> None:
        """
        Initialize the scanner.

        Args:
            config: Scanner settings. Defaults are used when None.
        """
        self.config = config or ScannerConfig()

    def scan(self, content: str) -> List[TestClass]:
        """
        Scan one file's full text.

        Args:
            content: Source text

        Returns:
            Top-level specification classes in source order
        """
        lines = content.split("\n")
        classes: List[TestClass] = []
        state = ScanState.TOP
        context: Optional[_ClassContext] = None

        for i, line in enumerate(lines):
            stripped = line.strip()
            class_match = self.CLASS_PATTERN.match(stripped)

            if state is ScanState.TOP:
                if class_match:
                    test_class = TestClass(
                        name=class_match.group("name"),
                        line=i,
                        range=SourceRange.for_line(i, line),
                        is_abstract=class_match.group("abstract") is not None,
                    )
                    classes.append(test_class)
                    context = _ClassContext(test_class)
                    state = ScanState.IN_CLASS
            elif state is ScanState.IN_CLASS and context is not None:
                if class_match:
                    context.nested_balance = 0
                    context.nested_seen_opening = False
                    state = ScanState.IN_NESTED_CLASS
                else:
                    method = self._detect_method(lines, i)
                    if method is not None:
                        context.test_class.methods.append(method)

            if state is ScanState.TOP or context is None:
                continue

            delta = count_brace_delta(line)
            if "{" in line:
                context.seen_opening = True

            if state is ScanState.IN_NESTED_CLASS:
                context.nested_balance += delta
                if "{" in line:
                    context.nested_seen_opening = True
                if context.nested_seen_opening and context.nested_balance <= 0:
                    state = ScanState.IN_CLASS

            context.balance += delta
            if context.seen_opening and context.balance <= 0:
                state = ScanState.TOP
                context = None

        return classes

    def _detect_method(self, lines: List[str], index: int) -> Optional[TestMethod]:
        """Return a TestMethod if the line at index is an accepted feature header."""
        match = self.METHOD_HEADER_PATTERN.match(lines[index].strip())
        if not match:
            return None

        quoted = match.group("quoted")
        name = (quoted or match.group("ident") or "").strip()
        if not name or name in self.config.lifecycle_methods:
            return None

        accepted = quoted is not None or has_block_label_nearby(
            lines, index, self.config.label_window
        )
        brace_ok = match.group("brace") is not None or has_opening_brace_nearby(
            lines, index, self.config.brace_window
        )
        if not (accepted and brace_ok):
            return None

        bounds = find_method_bounds(lines, index)
        is_data_driven = bounds.where_line is not None
        iterations = parse_where_block(lines, index, name) if is_data_driven else []

        return TestMethod(
            name=name,
            line=index,
            range=SourceRange.for_line(index, lines[index]),
            is_data_driven=is_data_driven,
            iterations=iterations or None,
            where_line=bounds.where_line,
        )

    def scan_file(self, file_path: Path) -> List[TestClass]:
        """
        Read and scan a single file.

        Unreadable files yield an empty list.
        """
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Cannot read %s: %s", file_path, e)
            return []
        return self.scan(content)

    def scan_paths(
        self,
        base_path: Path,
        patterns: Optional[List[str]] = None,
        ignore: Optional[List[str]] = None,
    ) -> ScanResult:
        """
        Scan every specification file under base_path.

        Args:
            base_path: Directory to search
            patterns: Glob patterns relative to base_path (default: configured patterns)
            ignore: Directory names to skip (default: configured ignore list)

        Returns:
            ScanResult with classes grouped by file
        """
        result = ScanResult()
        ignore_set = set(self.config.ignore if ignore is None else ignore)
        seen_files: Set[Path] = set()

        for pattern in patterns or self.config.patterns:
            for file_path in sorted(base_path.glob(pattern)):
                if file_path in seen_files or not file_path.is_file():
                    continue
                relative_parts = file_path.relative_to(base_path).parts[:-1]
                if any(part in ignore_set for part in relative_parts):
                    continue
                seen_files.add(file_path)

                try:
                    content = file_path.read_text(encoding="utf-8", errors="replace")
                except OSError as e:
                    logger.warning("Cannot read %s: %s", file_path, e)
                    result.errors.append(f"{file_path}: {e}")
                    continue

                result.files_scanned += 1
                classes = self.scan(content)
                if classes:
                    result.classes_by_file[file_path] = classes

        return result


def scan_source(content: str, config: Optional[ScannerConfig] = None) -> List[TestClass]:
    """Scan source text with a fresh scanner."""
    return SourceScanner(config).scan(content)


def scan_file(file_path: Path, config: Optional[ScannerConfig] = None) -> List[TestClass]:
    """Read and scan one file with a fresh scanner."""
    return SourceScanner(config).scan_file(file_path)
