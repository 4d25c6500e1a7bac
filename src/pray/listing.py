"""Package listing tool: expands wildcard import patterns.

Run as ``python -m pray.listing [--path root ...] [-e] <pattern> ...``.
Prints one package per line. ``--path`` roots are searched before the
current directory and sys.path.

``X/...`` (or ``X...``) lists ``X`` and every subpackage below it; any
other pattern is printed when it resolves.

Exit status 1 when a pattern does not resolve, unless ``-e`` is given,
in which case the pattern itself is printed instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pray.domain.exceptions import PackageNotFoundError
from pray.domain.model.configuration import default_search_paths
from pray.infrastructure.adapters.package_locator import PackageLocator

if TYPE_CHECKING:
    from collections.abc import Sequence

WILDCARD = "..."

# Directories never descended into
DEFAULT_EXCLUDES = frozenset(
    {
        "__pycache__",
        ".venv",
        ".git",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "node_modules",
        ".tox",
        ".nox",
        "build",
        "dist",
        ".eggs",
    },
)


def split_wildcard(pattern: str) -> tuple[str, bool]:
    """Strip a trailing ``...`` / ``/...``.

    Examples:
        "app/..." → ("app", True)
        "app..." → ("app", True)
        "app.core" → ("app.core", False)
    """
    if not pattern.endswith(WILDCARD):
        return pattern, False
    base = pattern.removesuffix(WILDCARD).rstrip("/.")
    return base, True


def list_pattern(pattern: str, locator: PackageLocator) -> list[str]:
    """Concrete packages a pattern denotes.

    Raises:
        PackageNotFoundError: If the (base of the) pattern does not resolve
    """
    base, recursive = split_wildcard(pattern)
    if not base:
        raise PackageNotFoundError(pattern)

    location = locator.locate(base)
    if not recursive or location.is_file():
        return [base]

    packages = [base]
    for subdir in _subpackages(location):
        parts = subdir.relative_to(location).parts
        packages.append(_join(base, parts))
    return packages


def _subpackages(root: Path) -> list[Path]:
    """Package directories below root, depth-first in name order."""
    result: list[Path] = []
    for item in sorted(root.iterdir()):
        if not item.is_dir() or item.name in DEFAULT_EXCLUDES:
            continue
        if not item.name.isidentifier() or not (item / "__init__.py").is_file():
            continue
        result.append(item)
        result.extend(_subpackages(item))
    return result


def _join(base: str, parts: tuple[str, ...]) -> str:
    """Append subpackage parts: dotted for import paths, joined paths otherwise."""
    if all(part.isidentifier() for part in base.split(".")):
        return ".".join([base, *parts])
    return str(Path(base, *parts))


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the listing tool."""
    parser = argparse.ArgumentParser(
        prog="pray.listing",
        description="List Python packages matching import path patterns.",
    )
    parser.add_argument(
        "-e",
        dest="tolerate_errors",
        action="store_true",
        help="Print unresolvable patterns verbatim instead of failing",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        type=Path,
        help="Extra root to locate import paths in (repeatable, searched first)",
    )
    parser.add_argument("patterns", nargs="+", help="Import paths, optionally ending in ...")
    args = parser.parse_args(argv)

    locator = PackageLocator([*args.path, *default_search_paths()])
    status = 0
    seen: set[str] = set()

    for pattern in args.patterns:
        try:
            packages = list_pattern(pattern, locator)
        except PackageNotFoundError as e:
            if not args.tolerate_errors:
                print(f"pray.listing: {e}", file=sys.stderr)
                status = 1
                continue
            packages = [pattern]

        for package in packages:
            if package not in seen:
                seen.add(package)
                print(package)

    return status


if __name__ == "__main__":
    sys.exit(main())
