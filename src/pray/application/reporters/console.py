"""Console reporter: Report → rich table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pray.application.reporters._base import BaseReporter
from pray.domain.model.finding import FindingKind

if TYPE_CHECKING:
    from pray.domain.model.finding import Finding
    from pray.domain.model.report import Report


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_errors: Include ERROR findings in the table.
        max_rows: Max findings to display. None = unlimited.
    """

    show_errors: bool = True
    max_rows: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_rows is not None and self.max_rows < 1:
            raise ValueError(f"max_rows must be >= 1, got {self.max_rows}")


class ConsoleReporter(BaseReporter):
    """Console reporter: renders findings as a table once the run finishes.

    Rows are sorted by file, line and column.
    """

    def __init__(
        self,
        console: Console | None = None,
        config: ConsoleConfig | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            console: Rich console (default: stderr console)
            config: Reporter configuration. Uses defaults if None.
        """
        self._console = console if console is not None else Console(stderr=True)
        self._config = config or ConsoleConfig()

    def finish(self, report: Report) -> None:
        """Render findings table and summary."""
        findings = self._select(report.findings)

        if findings:
            self._console.print(self._build_table(findings))
            self._console.print()

        self._render_summary(report)

    def _select(self, findings: tuple[Finding, ...]) -> list[Finding]:
        """Filter and order findings by config."""
        selected = [
            f for f in findings if self._config.show_errors or f.kind is not FindingKind.ERROR
        ]
        selected.sort(key=_location_key)
        if self._config.max_rows is not None:
            selected = selected[: self._config.max_rows]
        return selected

    def _build_table(self, findings: list[Finding]) -> Table:
        table = Table(show_header=True, header_style="bold", box=None, title="Findings")
        table.add_column("Location", style="cyan")
        table.add_column("Declaration")
        table.add_column("Kind", style="yellow")
        table.add_column("Result")

        for finding in findings:
            record = finding.declaration
            if finding.kind is FindingKind.UNUSED:
                result = "[red]unused[/red]"
            else:
                result = f"[magenta]{escape(finding.message)}[/magenta]"
            table.add_row(
                escape(str(record.location)),
                record.qualified_name,
                record.kind.name.lower(),
                result,
            )
        return table

    def _render_summary(self, report: Report) -> None:
        if report.passed:
            status = "[bold green]PASSED[/bold green]"
        else:
            status = "[bold red]FAILED[/bold red]"
        self._console.print(
            f"{status} [bold]Checked:[/bold] {report.checked} "
            f"[bold]Unused:[/bold] {report.unused_count} "
            f"[bold]Errors:[/bold] {report.error_count}"
        )


def _location_key(finding: Finding) -> tuple[str, int, int]:
    record = finding.declaration
    return record.filename, record.line, record.column
