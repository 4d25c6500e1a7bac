"""Tests for adapters/ast_reference_finder.py."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import pytest

from pray.domain.exceptions import ReferenceQueryError
from pray.domain.model.location import format_position
from pray.domain.ports.reference_finder import NO_IDENTIFIER
from pray.infrastructure.adapters.ast_reference_finder import ASTReferenceFinder
from pray.infrastructure.adapters.package_locator import PackageLocator
from tests.factories import write_package

if TYPE_CHECKING:
    from pathlib import Path

LIBRARY = """
def Foo():
    pass


class Server:
    def start(self):
        pass


def orphan():
    pass
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Library ``praylib`` and consumer packages ``app`` and ``app.cli``."""
    write_package(tmp_path / "src", "praylib", {"core.py": LIBRARY})
    write_package(
        tmp_path / "consumer",
        "app",
        {
            "main.py": """
            from praylib.core import Foo

            Foo()
            """,
        },
    )
    write_package(
        tmp_path / "consumer",
        "app/cli",
        {
            "run.py": """
            import praylib.core as core

            def go(server):
                core.Foo()
                server.start()
            """,
        },
    )
    return tmp_path


@pytest.fixture
def finder(workspace: Path) -> ASTReferenceFinder:
    return ASTReferenceFinder(PackageLocator([workspace / "consumer"]))


def _position(workspace: Path, name: str, keyword: str = "def ") -> str:
    core = workspace / "src" / "praylib" / "core.py"
    text = core.read_text()
    return format_position(core, text.index(f"{keyword}{name}") + len(keyword))


class TestFindReferences:
    """Tests for ASTReferenceFinder.find_references()."""

    def test_function_references(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        refs = finder.find_references(["app"], _position(workspace, "Foo"))
        assert [r.text for r in refs] == ["from praylib.core import Foo"]
        assert refs[0].location.file == workspace / "consumer" / "app" / "main.py"
        assert refs[0].location.line == 1

    def test_targets_searched_in_order(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        refs = finder.find_references(["app", "app.cli"], _position(workspace, "Foo"))
        assert [r.text for r in refs] == ["from praylib.core import Foo", "core.Foo"]

    def test_duplicate_targets_searched_once(
        self, finder: ASTReferenceFinder, workspace: Path
    ) -> None:
        refs = finder.find_references(
            ["app", str(workspace / "consumer" / "app")], _position(workspace, "Foo")
        )
        assert len(refs) == 1

    def test_method_references(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        refs = finder.find_references(["app.cli"], _position(workspace, "start"))
        assert [r.text for r in refs] == ["server.start"]

    def test_unused(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        assert finder.find_references(["app", "app.cli"], _position(workspace, "orphan")) == ()

    def test_no_identifier_at_position(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        core = workspace / "src" / "praylib" / "core.py"
        with pytest.raises(ReferenceQueryError) as exc_info:
            finder.find_references(["app"], format_position(core, 1))
        assert str(exc_info.value) == NO_IDENTIFIER

    def test_unknown_target(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        with pytest.raises(ReferenceQueryError, match="cannot find package nowhere"):
            finder.find_references(["nowhere"], _position(workspace, "Foo"))

    def test_malformed_position(self, finder: ASTReferenceFinder) -> None:
        with pytest.raises(ReferenceQueryError, match="invalid position"):
            finder.find_references(["app"], "no-offset")

    def test_missing_declaring_file(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        with pytest.raises(ReferenceQueryError, match="file not found"):
            finder.find_references(["app"], format_position(workspace / "gone.py", 0))

    def test_broken_target_file(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        (workspace / "consumer" / "app" / "broken.py").write_text("def broken(\n")
        with pytest.raises(ReferenceQueryError, match="syntax error"):
            finder.find_references(["app"], _position(workspace, "Foo"))

    def test_none_locator_raises(self) -> None:
        with pytest.raises(TypeError, match="locator"):
            ASTReferenceFinder(None)  # type: ignore[arg-type]


class TestConcurrency:
    """Queries share no mutable state."""

    def test_parallel_queries_agree(self, finder: ASTReferenceFinder, workspace: Path) -> None:
        position = _position(workspace, "Foo")
        expected = finder.find_references(["app", "app.cli"], position)
        results: list[object] = []
        lock = threading.Lock()

        def query() -> None:
            refs = finder.find_references(["app", "app.cli"], position)
            with lock:
                results.append(refs)

        threads = [threading.Thread(target=query) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [expected] * 8
