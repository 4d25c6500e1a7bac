"""Outcome of wildcard package expansion."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExpansionResult:
    """Packages to search, and whether they came from the lister.

    Attributes:
        packages: Concrete packages, or the input patterns on fallback
        expanded: True if the lister produced the list
        reason: Why expansion fell back, None when expanded
    """

    packages: tuple[str, ...]
    expanded: bool
    reason: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.expanded and self.reason is not None:
            raise ValueError("expanded result must not carry a fallback reason")
        if not self.expanded and not self.reason:
            raise ValueError("fallback result requires a reason")
