"""Catalog service: source package directory → declaration records.

FAIL-FIRST: ParseError on any unreadable or invalid file, before any
record is returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pray.domain.exceptions import ParseError
from pray.infrastructure.analyzers import DeclarationAnalyzer
from pray.infrastructure.analyzers.base import is_test_module, load_module

if TYPE_CHECKING:
    import pathlib

    from pray.domain.model.declaration import DeclarationRecord

logger = logging.getLogger(__name__)


def build_catalog(
    directory: pathlib.Path,
    *,
    include_tests: bool = False,
) -> tuple[DeclarationRecord, ...]:
    """Collect public declarations of every module in a package directory.

    Only files directly inside directory are read (a package is one
    directory). Modules are processed in file name order.

    Args:
        directory: Package directory.
        include_tests: Also read test modules (test_*.py, *_test.py, conftest.py).

    Returns:
        Declaration records, grouped by module.

    Raises:
        ParseError: Directory missing, or any file unreadable or invalid.
    """
    if not directory.is_dir():
        raise ParseError(path=str(directory), reason="not a directory")

    files = _find_module_files(directory, include_tests=include_tests)

    # Parse everything first: a broken file aborts with no partial catalog
    parsed = [load_module(path) for path in files]

    analyzer = DeclarationAnalyzer()
    records: list[DeclarationRecord] = []
    for source, tree in parsed:
        records.extend(analyzer.analyze(tree, source))

    logger.info(
        "%s: %d public declaration(s) in %d module(s)", directory, len(records), len(files)
    )
    return tuple(records)


def _find_module_files(directory: pathlib.Path, *, include_tests: bool) -> list[pathlib.Path]:
    """Find .py files directly inside directory."""
    result = [
        item
        for item in directory.iterdir()
        if item.is_file() and item.suffix == ".py"
        if include_tests or not is_test_module(item.name)
    ]
    return sorted(result, key=lambda p: p.name)
