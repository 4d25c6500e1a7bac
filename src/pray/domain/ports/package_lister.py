"""Package lister protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence


class PackageListerProtocol(Protocol):
    """Contract for wildcard package expansion.

    Turns patterns like ``mylib/...`` into concrete package paths.
    """

    def list_packages(self, patterns: Sequence[str]) -> tuple[str, ...]:
        """List concrete packages matching patterns.

        Args:
            patterns: Import paths, possibly ending in ``...``

        Returns:
            Concrete package paths

        Raises:
            PackageListingError: If listing is unavailable or fails
        """
        ...
