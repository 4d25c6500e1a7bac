"""Plain text reporter using print().

Stdlib-only reporter: one line per finding, written as findings arrive.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from pray.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from pray.domain.model.finding import Finding


class PlainTextReporter(BaseReporter):
    """Writes ``str(finding)`` per finding.

    Outputs to stderr by default, can be configured for any TextIO.
    Lines look like:
        pkg/core.py:5:5: Foo is unused
        pkg/core.py:9:1 - no identifier here
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stderr)
        """
        self._output = output if output is not None else sys.stderr

    def emit(self, finding: Finding) -> None:
        """Write finding line and flush, so it shows up immediately."""
        print(finding, file=self._output)
        self._output.flush()
