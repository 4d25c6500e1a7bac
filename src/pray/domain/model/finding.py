"""Finding: the unit of output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from pray.domain.model.declaration import DeclarationRecord


class FindingKind(Enum):
    """Why a declaration was reported."""

    UNUSED = auto()  # zero references in the target set
    ERROR = auto()  # usage query failed


@dataclass(frozen=True, slots=True)
class Finding:
    """Reported declaration with its output line.

    Attributes:
        declaration: Declaration the finding is about
        kind: UNUSED or ERROR
        message: Full output line
    """

    declaration: DeclarationRecord
    kind: FindingKind
    message: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.declaration is None:
            raise TypeError("declaration must not be None")
        if not self.message:
            raise ValueError("message must not be empty")

    def __str__(self) -> str:
        return self.message
