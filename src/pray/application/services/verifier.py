"""Usage verifier: one reference query per declaration, and the finding policy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pray.domain.exceptions import ReferenceQueryError
from pray.domain.model.finding import Finding, FindingKind
from pray.domain.model.usage_result import UsageResult
from pray.domain.ports.reference_finder import NO_IDENTIFIER

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pray.domain.model.declaration import DeclarationRecord
    from pray.domain.ports.reference_finder import ReferenceFinderProtocol

logger = logging.getLogger(__name__)


class UsageVerifier:
    """Adapts a reference finder to produce one UsageResult per declaration.

    Holds only immutable state (finder and targets), so verify() can be
    called from many threads at once as long as the finder allows it.
    """

    def __init__(self, finder: ReferenceFinderProtocol, targets: Sequence[str]) -> None:
        """Initialize verifier.

        Args:
            finder: Reference finding capability
            targets: Packages to search for usages

        Raises:
            TypeError: If finder is None
            ValueError: If targets is empty
        """
        if finder is None:
            raise TypeError("finder must not be None")
        if not targets:
            raise ValueError("targets must not be empty")

        self._finder = finder
        self._targets = tuple(targets)

    @property
    def targets(self) -> tuple[str, ...]:
        """Packages searched for usages."""
        return self._targets

    def verify(self, record: DeclarationRecord) -> UsageResult:
        """Run exactly one reference query for record.

        ReferenceQueryError is captured in the result, never raised.
        """
        try:
            references = self._finder.find_references(self._targets, record.position)
        except ReferenceQueryError as e:
            logger.debug("%s: query failed: %s", record.qualified_name, e)
            return UsageResult(declaration=record, error=str(e) or type(e).__name__)

        return UsageResult(declaration=record, references=tuple(references))


def finding_for(result: UsageResult) -> Finding | None:
    """Decide whether a usage result is reported.

    - "no identifier here" error → ``file:line:col - no identifier here``
    - any other error → message verbatim
    - zero references → ``file:line:col: name is unused``
    - one or more references → no finding
    """
    record = result.declaration

    if result.error is not None:
        message = result.error
        if message == NO_IDENTIFIER:
            message = f"{record.location} - {message}"
        return Finding(declaration=record, kind=FindingKind.ERROR, message=message)

    if not result.references:
        return Finding(
            declaration=record,
            kind=FindingKind.UNUSED,
            message=f"{record.location}: {record.identifier} is unused",
        )

    return None
