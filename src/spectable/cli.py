"""
spectable.cli - Command-line interface.

Main entry point for the spectable CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from spectable import __version__
from spectable.commands import results_cmd, scan_cmd
from spectable.exceptions import SpectableError


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="spectable",
        description="Data table discovery and iteration result reconciliation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  spectable scan src/test/groovy             # List specs, features and iterations
  spectable scan MathSpec.groovy -j          # Same, as JSON
  spectable results --class com.example.MathSpec --method maximum --output build.log
  ./gradlew test --console=plain | spectable results --class com.example.MathSpec \\
      --method maximum --output -

Configuration:
  Settings are read from the nearest .spectable.toml and can be
  overridden with SPECTABLE_<SECTION>_<KEY> environment variables,
  e.g. SPECTABLE_RESULTS_REPORT_DIR=target/surefire-reports

For detailed command help: spectable <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"spectable {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging on stderr)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # scan command
    scan_parser = subparsers.add_parser(
        "scan",
        help="Find specification classes, feature methods and data tables",
    )
    scan_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to scan (default: current directory)",
        metavar="PATH",
    )
    scan_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # results command
    results_parser = subparsers.add_parser(
        "results",
        help="Resolve per-iteration results of a test run",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The XML report <root>/build/test-results/test/TEST-<class>.xml is used
when it has iteration results; otherwise the console output is parsed.
""",
    )
    results_parser.add_argument(
        "--class",
        dest="class_name",
        required=True,
        help="Fully qualified specification class name",
        metavar="NAME",
    )
    results_parser.add_argument(
        "--method",
        required=True,
        help="Feature method name as declared",
        metavar="NAME",
    )
    results_parser.add_argument(
        "--output",
        help="File with captured console output, or - for stdin",
        metavar="FILE",
    )
    results_parser.add_argument(
        "--spec",
        type=Path,
        help="Specification source file; failures are located on their data table rows",
        metavar="FILE",
    )
    results_parser.add_argument(
        "--root",
        type=Path,
        help="Workspace root containing the build directory (default: cwd)",
        metavar="DIR",
    )
    results_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Print the lines that enable shell tab-completion",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Print the line for one shell only",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install spectable[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "scan":
            return scan_cmd.run(args)
        elif args.command == "results":
            return results_cmd.run(args)
        elif args.command == "version":
            return version_command(args)
        elif args.command == "completion":
            return completion_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except SpectableError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def version_command(args: argparse.Namespace) -> int:
    """Handle version command."""
    print(f"spectable {__version__}")
    return 0


# Line that enables argcomplete for spectable in each supported shell
COMPLETION_SNIPPETS = {
    "bash": 'eval "$(register-python-argcomplete spectable)"',
    "zsh": 'autoload -U bashcompinit && bashcompinit && eval "$(register-python-argcomplete spectable)"',
    "fish": "register-python-argcomplete --shell fish spectable | source",
    "tcsh": "eval `register-python-argcomplete --shell tcsh spectable`",
}


def completion_command(args: argparse.Namespace) -> int:
    """Print the completion line for one shell, or for every supported shell."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install spectable[completion]", file=sys.stderr)
        return 1

    if args.shell:
        print(COMPLETION_SNIPPETS[args.shell])
        return 0

    for shell, snippet in COMPLETION_SNIPPETS.items():
        print(f"# {shell}")
        print(snippet)
    return 0


if __name__ == "__main__":
    sys.exit(main())
