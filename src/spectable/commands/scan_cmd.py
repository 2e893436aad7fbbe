"""
spectable.commands.scan_cmd - Discover specification classes and data tables.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from spectable.config import ScannerConfig, load_config
from spectable.models import TestClass
from spectable.scanner import ScanResult, SourceScanner
from spectable.serialize import serialize_class


def run(args: argparse.Namespace) -> int:
    """Run the scan command.

    Files are scanned directly; directories are searched with the
    configured glob patterns.
    """
    config = load_config(getattr(args, "config", None))
    scanner = SourceScanner(ScannerConfig.from_dict(config.get("scanner", {})))

    result = ScanResult()
    for path in args.paths or default_paths():
        if path.is_dir():
            found = scanner.scan_paths(path)
            result.classes_by_file.update(found.classes_by_file)
            result.files_scanned += found.files_scanned
            result.errors.extend(found.errors)
        elif path.is_file():
            result.files_scanned += 1
            result.classes_by_file[path] = scanner.scan_file(path)
        else:
            result.errors.append(f"{path}: no such file or directory")

    for error in result.errors:
        print(f"Warning: {error}", file=sys.stderr)

    if getattr(args, "json", False):
        _output_json(result)
    else:
        _output_text(result)

    return 1 if result.errors and not result.files_scanned else 0


def _output_json(result: ScanResult) -> None:
    data = {
        "files_scanned": result.files_scanned,
        "files": {
            str(path): [serialize_class(c) for c in classes]
            for path, classes in result.classes_by_file.items()
        },
        "errors": result.errors,
    }
    print(json.dumps(data, indent=2))


def _output_text(result: ScanResult) -> None:
    if not result.class_count:
        print(f"No specification classes found ({result.files_scanned} files scanned).")
        return

    for path, classes in result.classes_by_file.items():
        if not classes:
            continue
        print(f"{path}")
        for test_class in classes:
            _print_class(test_class)

    print(f"\n{result.class_count} classes in {result.files_scanned} files scanned.")


def _print_class(test_class: TestClass) -> None:
    marker = " (abstract)" if test_class.is_abstract else ""
    print(f"  {test_class.name}{marker}  line {test_class.line + 1}")
    for method in test_class.methods:
        kind = "data-driven" if method.is_data_driven else "feature"
        print(f"    {method.name}  [{kind}]  line {method.line + 1}")
        for iteration in method.iterations or []:
            print(f"      #{iteration.index} {iteration.display_name}  line {iteration.range.start_line + 1}")


def default_paths() -> list[Path]:
    """Paths scanned when none are given."""
    return [Path.cwd()]
