"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from pray.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from pray.domain.model.finding import Finding
    from pray.domain.model.report import Report


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Writes one document when the run finishes, for CI/CD integration
    or parsing by other tools. Findings are sorted by location so the
    document is stable across runs.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def finish(self, report: Report) -> None:
        """Report results as JSON.

        Args:
            report: Complete report
        """
        data = self._report_to_dict(report)
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def _report_to_dict(self, report: Report) -> dict[str, object]:
        """Convert Report to JSON-serializable dict."""
        findings = sorted(
            report.findings,
            key=lambda f: (f.declaration.filename, f.declaration.line, f.declaration.column),
        )
        return {
            "passed": report.passed,
            "summary": {
                "checked": report.checked,
                "unused_count": report.unused_count,
                "error_count": report.error_count,
            },
            "findings": [self._finding_to_dict(f) for f in findings],
        }

    def _finding_to_dict(self, finding: Finding) -> dict[str, object]:
        """Convert Finding to JSON-serializable dict."""
        record = finding.declaration
        return {
            "kind": finding.kind.name,
            "identifier": record.qualified_name,
            "declaration": record.kind.name,
            "location": {
                "file": record.filename,
                "line": record.line,
                "column": record.column,
            },
            "message": finding.message,
        }
