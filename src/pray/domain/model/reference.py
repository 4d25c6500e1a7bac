"""Cross-package reference to a declaration."""

from dataclasses import dataclass

from pray.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class Reference:
    """One use of a symbol found in a target package.

    Attributes:
        location: Where the symbol is used
        text: Source form of the use (e.g. ``mod.name``)
    """

    location: Location
    text: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.location is None:
            raise TypeError("location must not be None")
        if not self.text:
            raise ValueError("text must not be empty")

    def __str__(self) -> str:
        return f"{self.location}: {self.text}"
