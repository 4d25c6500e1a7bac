"""Finding sink protocol for output formatting.

Users extend pray by implementing this Protocol.
NOT rich-specific - users can adapt to any output format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pray.domain.model.finding import Finding
    from pray.domain.model.report import Report


class FindingSinkProtocol(Protocol):
    """Contract for reporters.

    emit() is called by the single aggregation loop as each finding
    arrives, so implementations need no locking. finish() is called once
    after every declaration has been verified.

    Example:
        class CountingSink:
            def __init__(self) -> None:
                self.count = 0

            def emit(self, finding: Finding) -> None:
                self.count += 1

            def finish(self, report: Report) -> None:
                print(f"{self.count} of {report.checked} unused")
    """

    def emit(self, finding: Finding) -> None:
        """Receive one finding, in arrival order.

        Args:
            finding: Unused declaration or query error
        """
        ...

    def finish(self, report: Report) -> None:
        """Receive the final report.

        Args:
            report: All findings and the number of checked declarations
        """
        ...
