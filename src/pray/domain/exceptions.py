"""Domain exceptions: all public errors of pray.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""


class PrayError(Exception):
    """Base for all pray error exceptions.

    Allows: except PrayError to catch all library errors.
    """


class ParseError(PrayError, SyntaxError):
    """Failed to read or parse a source package.

    FAIL-FIRST: aborts the run before any verification starts.
    Inherits SyntaxError for semantic correctness.

    Attributes:
        path: Path to file (or directory) that failed.
        reason: Error description.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize with file path and error reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class PackageNotFoundError(PrayError, LookupError):
    """Import path does not resolve to a package directory or module.

    Attributes:
        import_path: The path that could not be located.
    """

    def __init__(self, import_path: str) -> None:
        """Initialize with the unresolved import path."""
        self.import_path = import_path
        super().__init__(f"cannot find package {import_path}")


class ReferenceQueryError(PrayError):
    """A single usage query failed.

    Recoverable: reported as a finding for one declaration,
    sibling queries keep running. The message is surfaced verbatim.
    """


class PackageListingError(PrayError):
    """External package listing failed or is unavailable.

    Attributes:
        patterns: Patterns that were being expanded.
        reason: Why listing failed.
    """

    def __init__(self, patterns: tuple[str, ...], reason: str) -> None:
        """Initialize with patterns and failure reason."""
        self.patterns = patterns
        self.reason = reason
        super().__init__(f"listing {' '.join(patterns)} failed: {reason}")
