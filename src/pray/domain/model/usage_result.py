"""Outcome of one usage query."""

from __future__ import annotations

from dataclasses import dataclass

from pray.domain.model.declaration import DeclarationRecord
from pray.domain.model.reference import Reference


@dataclass(frozen=True, slots=True)
class UsageResult:
    """Result of verifying one declaration.

    Exactly one UsageResult exists per DeclarationRecord in a run.

    Attributes:
        declaration: The verified declaration
        references: References found (empty when unused or on error)
        error: Query error message, None on success
    """

    declaration: DeclarationRecord
    references: tuple[Reference, ...] = ()
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.declaration is None:
            raise TypeError("declaration must not be None")
        if self.error is not None and self.references:
            raise ValueError("failed query must not carry references")
        if self.error == "":
            raise ValueError("error must be None or non-empty")

    @property
    def is_used(self) -> bool:
        """Query succeeded and found at least one reference."""
        return self.error is None and len(self.references) > 0
