"""Source code location value object."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Location:
    """Exact position in source code.

    Attributes:
        file: Path to source file
        line: Line number (1-based, must be > 0)
        column: Column number (1-based, must be > 0)
    """

    file: Path
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.file is None:
            raise TypeError("file must not be None")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column <= 0:
            raise ValueError(f"column must be > 0, got {self.column}")

    def __str__(self) -> str:
        """Format as file:line:column."""
        return f"{self.file}:{self.line}:{self.column}"


def format_position(file: Path | str, offset: int) -> str:
    """Build the opaque position token ``<file>:#<offset>``.

    Args:
        file: Source file path
        offset: Character offset of the identifier in the file (0-based)

    Raises:
        ValueError: If offset is negative
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    return f"{file}:#{offset}"


def parse_position(position: str) -> tuple[Path, int]:
    """Split a position token into file and offset.

    Raises:
        ValueError: If token is not ``<file>:#<offset>``
    """
    file, sep, offset = position.rpartition(":#")
    if not sep or not file or not offset.isdigit():
        raise ValueError(f"invalid position: {position!r}")
    return Path(file), int(offset)
