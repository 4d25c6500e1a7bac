"""Reference finder protocol.

The "find all references to a symbol across a set of packages" capability.
pray treats it as opaque: only the result shape matters. Any resolution
algorithm (syntactic search, type-aware search, language server) can be
plugged in behind this boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pray.domain.model.reference import Reference

# Error message meaning "position does not address an identifier"
NO_IDENTIFIER = "no identifier here"


class ReferenceFinderProtocol(Protocol):
    """Contract for reference finders.

    Called concurrently from worker threads, one call per declaration.
    Implementations must not share mutable state between calls.

    Example:
        class GrepFinder:
            def find_references(self, targets, position):
                file, offset = parse_position(position)
                ...
                return tuple(refs)
    """

    def find_references(
        self,
        targets: Sequence[str],
        position: str,
    ) -> tuple[Reference, ...]:
        """Find every reference to the symbol at position.

        Args:
            targets: Import paths of packages to search
            position: Position token of the symbol (``<file>:#<offset>``)

        Returns:
            All references found, possibly empty

        Raises:
            ReferenceQueryError: If the query cannot be answered. The
                message ``"no identifier here"`` means position does not
                address an identifier.
        """
        ...
