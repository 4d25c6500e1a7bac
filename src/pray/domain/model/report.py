"""Report aggregate and exit status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pray.domain.model.finding import Finding, FindingKind


class ExitStatus(IntEnum):
    """Process exit codes."""

    SUCCESS = 0  # no findings
    FINDINGS = 1  # at least one unused declaration or query error
    FATAL = 2  # run aborted (parse failure, bad configuration)


@dataclass(frozen=True, slots=True)
class Report:
    """Result of one run.

    Immutable aggregate returned by the aggregator.
    Findings are in arrival (completion) order.

    Attributes:
        findings: All findings produced
        checked: Number of declarations verified
    """

    findings: tuple[Finding, ...]
    checked: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.checked < 0:
            raise ValueError(f"checked must be >= 0, got {self.checked}")
        if len(self.findings) > self.checked:
            raise ValueError(
                f"findings ({len(self.findings)}) exceed checked declarations ({self.checked})"
            )

    @property
    def passed(self) -> bool:
        """Check if run passed (no findings)."""
        return len(self.findings) == 0

    @property
    def status(self) -> ExitStatus:
        """Exit status: depends only on whether findings is empty."""
        return ExitStatus.SUCCESS if self.passed else ExitStatus.FINDINGS

    @property
    def unused_count(self) -> int:
        """Number of UNUSED findings."""
        return sum(1 for f in self.findings if f.kind is FindingKind.UNUSED)

    @property
    def error_count(self) -> int:
        """Number of ERROR findings."""
        return sum(1 for f in self.findings if f.kind is FindingKind.ERROR)

    @classmethod
    def empty(cls) -> Report:
        """Create empty report (passed, nothing checked)."""
        return cls(findings=(), checked=0)
