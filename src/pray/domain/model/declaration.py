"""Public declaration record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from pray.domain.model.location import Location


class DeclarationKind(Enum):
    """Kind of public declaration."""

    CONSTANT = auto()  # UPPER_CASE or Final
    VARIABLE = auto()
    TYPE = auto()  # class or type alias
    METHOD = auto()  # public method of a public class
    FUNCTION = auto()


@dataclass(frozen=True, slots=True)
class DeclarationRecord:
    """One public symbol's identity and source location.

    Immutable. Created once per declaration while building the catalog.

    Attributes:
        identifier: Declared name
        kind: What was declared
        position: Opaque position token, ``<file>:#<offset>``
        filename: Source file path as string
        line: Line of the identifier (1-based)
        column: Column of the identifier (1-based)
        owner: Class name for methods, None otherwise
    """

    identifier: str
    kind: DeclarationKind
    position: str
    filename: str
    line: int
    column: int
    owner: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.identifier:
            raise ValueError("identifier must not be empty")
        if not self.position:
            raise ValueError("position must not be empty")
        if not self.filename:
            raise ValueError("filename must not be empty")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column <= 0:
            raise ValueError(f"column must be > 0, got {self.column}")
        if (self.kind is DeclarationKind.METHOD) != (self.owner is not None):
            raise ValueError("owner must be set for methods and only for methods")

    @property
    def location(self) -> Location:
        """Source location of the identifier."""
        return Location(file=Path(self.filename), line=self.line, column=self.column)

    @property
    def qualified_name(self) -> str:
        """``Owner.name`` for methods, plain name otherwise."""
        if self.owner is None:
            return self.identifier
        return f"{self.owner}.{self.identifier}"
