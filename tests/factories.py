"""Test factories for creating domain objects and source trees.

Centralized factory functions to avoid duplication across test modules.
All factories follow the same pattern: accept simplified parameters,
return fully constructed domain objects.
"""

from __future__ import annotations

import textwrap
import threading
from pathlib import Path

from pray.domain.exceptions import ReferenceQueryError
from pray.domain.model.declaration import DeclarationKind, DeclarationRecord
from pray.domain.model.finding import Finding, FindingKind
from pray.domain.model.location import Location, format_position
from pray.domain.model.reference import Reference
from pray.domain.model.report import Report

# Default test file path - consistent across all tests
DEFAULT_TEST_FILE = Path("/test/file.py")


def make_record(
    identifier: str = "Foo",
    kind: DeclarationKind = DeclarationKind.FUNCTION,
    line: int = 1,
    column: int = 1,
    file: Path = DEFAULT_TEST_FILE,
    offset: int | None = None,
    owner: str | None = None,
) -> DeclarationRecord:
    """Create a DeclarationRecord for tests.

    Args:
        identifier: Declared name
        kind: Declaration kind (default FUNCTION)
        line: Line number (default 1)
        column: Column number (default 1)
        file: File path (default test file)
        offset: Offset for the position token (default derived from line)
        owner: Class name, required for METHOD

    Returns:
        DeclarationRecord instance
    """
    if kind is DeclarationKind.METHOD and owner is None:
        owner = "Owner"
    return DeclarationRecord(
        identifier=identifier,
        kind=kind,
        position=format_position(file, offset if offset is not None else line * 100 + column),
        filename=str(file),
        line=line,
        column=column,
        owner=owner,
    )


def make_finding(
    record: DeclarationRecord | None = None,
    kind: FindingKind = FindingKind.UNUSED,
    message: str | None = None,
) -> Finding:
    """Create a Finding with the message the verifier would produce."""
    if record is None:
        record = make_record()
    if message is None:
        if kind is FindingKind.UNUSED:
            message = f"{record.location}: {record.identifier} is unused"
        else:
            message = f"{record.location} - no identifier here"
    return Finding(declaration=record, kind=kind, message=message)


def make_reference(line: int = 1, column: int = 1, text: str = "Foo") -> Reference:
    """Create a Reference in the default test file."""
    return Reference(location=Location(file=DEFAULT_TEST_FILE, line=line, column=column), text=text)


def write_package(root: Path, name: str, files: dict[str, str], *, init: bool = True) -> Path:
    """Write a package directory with dedented module sources.

    Args:
        root: Directory to create the package in
        name: Package path relative to root, "/" separated for nesting
        files: File name → source
        init: Create an empty __init__.py unless files provides one

    Returns:
        Package directory
    """
    package = root / name
    package.mkdir(parents=True, exist_ok=True)
    if init and "__init__.py" not in files:
        (package / "__init__.py").write_text("")
    for filename, source in files.items():
        (package / filename).write_text(textwrap.dedent(source).lstrip("\n"))
    return package


class RecordingSink:
    """FindingSinkProtocol implementation that remembers everything."""

    def __init__(self) -> None:
        self.emitted: list[Finding] = []
        self.reports: list[Report] = []

    def emit(self, finding: Finding) -> None:
        self.emitted.append(finding)

    def finish(self, report: Report) -> None:
        self.reports.append(report)


class FakeFinder:
    """ReferenceFinderProtocol implementation driven by a position → answer map.

    An answer is a tuple of references, or a string raised as
    ReferenceQueryError. Unknown positions have no references.
    Thread-safe call log for concurrency assertions.
    """

    def __init__(self, answers: dict[str, tuple[Reference, ...] | str] | None = None) -> None:
        self._answers = answers or {}
        self._lock = threading.Lock()
        self.calls: list[tuple[tuple[str, ...], str]] = []

    def find_references(self, targets, position):  # noqa: ANN001, ANN201
        with self._lock:
            self.calls.append((tuple(targets), position))
        answer = self._answers.get(position, ())
        if isinstance(answer, str):
            raise ReferenceQueryError(answer)
        return answer
