"""Run configuration.

Built explicitly by the caller (CLI or tests) and passed to the pipeline.
No process-global state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path


def default_search_paths() -> tuple[Path, ...]:
    """Current directory followed by sys.path directories."""
    roots = [Path.cwd()]
    roots.extend(Path(entry) for entry in sys.path if entry and Path(entry).is_dir())
    return tuple(roots)


def default_lister_command() -> tuple[str, ...]:
    """Command running the bundled package-listing tool."""
    return (sys.executable, "-m", "pray.listing")


@dataclass(frozen=True, slots=True)
class PrayConfig:
    """Configuration DTO for one run.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        source: Import path (or directory) of the package whose public
            declarations are checked.
        targets: Import paths or wildcard patterns to search for usages.
        include_tests: Also catalog declarations from test modules.
        max_workers: Concurrent verification ceiling. None = one worker
            per declaration (unbounded fan-out).
        search_paths: Roots used to locate import paths.
        lister_command: External package-listing command.
    """

    source: str
    targets: tuple[str, ...]
    include_tests: bool = False
    max_workers: int | None = None
    search_paths: tuple[Path, ...] = field(default_factory=default_search_paths)
    lister_command: tuple[str, ...] = field(default_factory=default_lister_command)

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.source:
            raise ValueError("source must not be empty")

        if isinstance(self.targets, str):
            raise TypeError("targets must be a tuple of strings, got str")
        if not self.targets:
            raise ValueError("targets must contain at least one import path")
        if any(not target for target in self.targets):
            raise ValueError("targets must not contain empty import paths")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

        if not self.lister_command:
            raise ValueError("lister_command must not be empty")
