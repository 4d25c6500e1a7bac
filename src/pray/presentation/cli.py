"""Command line interface.

    % pray -src mylib myapp.services myapp.cli
    /src/mylib/config.py:10:5: check is unused
    /src/mylib/config.py:113:5: write_config_file is unused

Targets can use ``...`` to include subpackages:

    % pray -src mylib myapp/...
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

from pray import __version__
from pray.application.reporters import ConsoleReporter, JSONReporter, PlainTextReporter
from pray.application.services.pipeline import run
from pray.domain.exceptions import PackageNotFoundError, ParseError
from pray.domain.model.configuration import PrayConfig, default_search_paths
from pray.domain.model.report import ExitStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pray.domain.ports.reporter import FindingSinkProtocol

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for ``pray``."""
    parser = argparse.ArgumentParser(
        prog="pray",
        description=(
            "Search for public declarations of the source package that are "
            "unused in the given import paths."
        ),
    )
    parser.add_argument(
        "-src",
        "--src",
        dest="source",
        required=True,
        help="Source package (import path or directory) to load declarations from",
    )
    parser.add_argument(
        "targets",
        nargs="+",
        metavar="import_path",
        help="Packages to search for usages; append ... to include subpackages",
    )
    parser.add_argument(
        "--include-tests",
        action="store_true",
        help="Also check declarations in test modules of the source package",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Max concurrent verifications (default: one per declaration)",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        type=Path,
        help="Extra root to locate import paths in (repeatable, searched first)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json", "rich"),
        default="text",
        help="Output format (default: text, one line per finding on stderr)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run pray and return the exit status.

    0: no findings, 1: findings, 2: fatal error.
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        config = PrayConfig(
            source=args.source,
            targets=tuple(args.targets),
            include_tests=args.include_tests,
            max_workers=args.jobs,
            search_paths=(*args.path, *default_search_paths()),
        )
    except ValueError as e:
        return _fatal(str(e))

    try:
        report = run(config, _make_sink(args.format))
    except ParseError as e:
        return _fatal(f"parse error: {e}")
    except PackageNotFoundError as e:
        return _fatal(str(e))
    except Exception as e:
        logger.debug("run aborted", exc_info=True)
        return _fatal(f"internal error: {e!r}")

    return int(report.status)


def configure_logging(*, verbose: bool) -> None:
    """Log to stderr through rich. WARNING by default, DEBUG with -v."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=Console(stderr=True), show_path=verbose, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("pray")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def _make_sink(output_format: str) -> FindingSinkProtocol:
    match output_format:
        case "json":
            return JSONReporter()
        case "rich":
            return ConsoleReporter()
    return PlainTextReporter()


def _fatal(message: str) -> int:
    print(f"pray: {message}", file=sys.stderr)
    return int(ExitStatus.FATAL)
