"""Package lister backed by an external listing command."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from pray.domain.exceptions import PackageListingError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


class SubprocessPackageLister:
    """Runs ``<command> [--path root ...] -e <patterns...>``, one package per line.

    Listing runs out of process so that resolving subpackages never
    imports the user's code into pray.
    """

    def __init__(self, command: Sequence[str], search_paths: Sequence[Path] = ()) -> None:
        """Initialize lister.

        Args:
            command: Listing command and leading arguments
            search_paths: Roots handed to the command as ``--path`` options,
                so it resolves patterns where pray locates packages

        Raises:
            ValueError: If command is empty
        """
        if not command:
            raise ValueError("command must not be empty")

        self._command = tuple(command)
        self._search_paths = tuple(search_paths)

    def list_packages(self, patterns: Sequence[str]) -> tuple[str, ...]:
        """List packages matching patterns.

        The command's stderr is passed through to ours.

        Raises:
            PackageListingError: Command missing, not runnable, or non-zero exit
        """
        argv = [*self._command]
        for root in self._search_paths:
            argv.extend(("--path", str(root)))
        argv.extend(("-e", *patterns))
        logger.debug("running %s", argv)

        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=None,
                text=True,
                check=False,
            )
        except OSError as e:
            raise PackageListingError(tuple(patterns), str(e)) from e

        if proc.returncode != 0:
            raise PackageListingError(tuple(patterns), f"exit status {proc.returncode}")

        return tuple(line.strip() for line in proc.stdout.splitlines() if line.strip())
