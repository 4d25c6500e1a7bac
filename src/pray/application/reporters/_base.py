"""Base reporter class for output formatting.

Provides default implementation of FindingSinkProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pray.domain.model.finding import Finding
    from pray.domain.model.report import Report


class BaseReporter(ABC):  # noqa: B024
    """Base class for reporters implementing FindingSinkProtocol.

    Both hooks default to no-ops: streaming reporters override emit(),
    summary reporters override finish().

    Example:
        class MyReporter(BaseReporter):
            def finish(self, report: Report) -> None:
                print(f"Unused: {report.unused_count}")
    """

    def emit(self, finding: Finding) -> None:  # noqa: B027
        """Receive one finding as soon as it is produced.

        Args:
            finding: Unused declaration or query error
        """

    def finish(self, report: Report) -> None:  # noqa: B027
        """Receive the final report once all declarations are verified.

        Args:
            report: Complete report
        """
