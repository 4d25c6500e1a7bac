"""Base utilities for AST analyzers."""

from __future__ import annotations

import ast
import bisect
import keyword
import re
import tokenize
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pray.domain.exceptions import ParseError

if TYPE_CHECKING:
    from pathlib import Path

_NEWLINE = re.compile(r"\n")
_IDENTIFIER = re.compile(r"[^\W\d]\w*")


@dataclass(frozen=True, slots=True)
class SourceText:
    """Decoded source file with character-offset arithmetic.

    AST columns are UTF-8 byte offsets; everything pray reports is in
    characters, so conversions go through here.

    Attributes:
        path: Source file path
        text: Decoded file contents
        line_starts: Character offset of each line start (index 0 = line 1)
    """

    path: Path
    text: str
    line_starts: tuple[int, ...]

    @classmethod
    def from_text(cls, path: Path, text: str) -> SourceText:
        """Index line starts of text."""
        starts = [0]
        starts.extend(match.end() for match in _NEWLINE.finditer(text))
        return cls(path=path, text=text, line_starts=tuple(starts))

    def line_text(self, line: int) -> str:
        """Text of 1-based line, without trailing newline."""
        start = self.line_starts[line - 1]
        end = self.line_starts[line] if line < len(self.line_starts) else len(self.text)
        return self.text[start:end].rstrip("\r\n")

    def node_offset(self, node: ast.stmt | ast.expr) -> int:
        """Character offset where node starts."""
        line = self.line_text(node.lineno)
        char_col = len(line.encode("utf-8")[: node.col_offset].decode("utf-8", errors="replace"))
        return self.line_starts[node.lineno - 1] + char_col

    def node_end_offset(self, node: ast.expr) -> int:
        """Character offset just past the end of node."""
        if node.end_lineno is None or node.end_col_offset is None:
            raise ValueError(f"node has no end position: {ast.dump(node)}")
        line = self.line_text(node.end_lineno)
        char_col = len(
            line.encode("utf-8")[: node.end_col_offset].decode("utf-8", errors="replace")
        )
        return self.line_starts[node.end_lineno - 1] + char_col

    def line_column(self, offset: int) -> tuple[int, int]:
        """Convert character offset to (line, column), both 1-based."""
        index = bisect.bisect_right(self.line_starts, offset) - 1
        return index + 1, offset - self.line_starts[index] + 1

    def identifier_at(self, offset: int) -> str | None:
        """Identifier starting exactly at offset, or None."""
        if offset < 0 or offset >= len(self.text):
            return None
        if offset > 0 and (self.text[offset - 1].isalnum() or self.text[offset - 1] == "_"):
            return None
        match = _IDENTIFIER.match(self.text, offset)
        if match is None or keyword.iskeyword(match.group()):
            return None
        return match.group()


def load_module(path: Path) -> tuple[SourceText, ast.Module]:
    """Read and parse a Python file.

    Decoding follows the interpreter: a UTF-8 BOM or a PEP 263 coding
    declaration selects the encoding, UTF-8 otherwise.

    FAIL-FIRST: raises ParseError on file errors, syntax errors.

    Args:
        path: Path to .py file

    Returns:
        Source text and parsed module

    Raises:
        ParseError: If file cannot be read or parsed
    """
    try:
        with tokenize.open(path) as f:
            text = f.read()
    except FileNotFoundError as e:
        raise ParseError(path=str(path), reason="file not found") from e
    except PermissionError as e:
        raise ParseError(path=str(path), reason="permission denied") from e
    except (SyntaxError, UnicodeDecodeError) as e:
        # SyntaxError here comes from a bad or missing encoding declaration
        raise ParseError(path=str(path), reason=f"encoding error: {e}") from e

    try:
        tree = ast.parse(text, filename=str(path))
    except SyntaxError as e:
        raise ParseError(path=str(path), reason=f"syntax error: {e}") from e

    return SourceText.from_text(path, text), tree


def name_offset(
    node: ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef,
    source: SourceText,
) -> int:
    """Character offset of the name in a def/class statement.

    The AST only records where the statement starts (the ``def``/``class``
    keyword, after decorators), so the name is located from there.
    """
    keyword_ = "class" if isinstance(node, ast.ClassDef) else "def"
    pattern = re.compile(rf"{keyword_}(?:\s|\\)+({re.escape(node.name)})\b")
    match = pattern.search(source.text, source.node_offset(node))
    if match is None:
        raise ParseError(
            path=str(source.path),
            reason=f"cannot locate name {node.name!r} at line {node.lineno}",
        )
    return match.start(1)


def is_public(name: str) -> bool:
    """Public by Python naming convention: no leading underscore."""
    return not name.startswith("_")


def is_test_module(filename: str) -> bool:
    """pytest/unittest test module naming conventions."""
    stem = filename.removesuffix(".py")
    return stem.startswith("test_") or stem.endswith("_test") or stem == "conftest"


def compute_module_name(file_path: Path) -> str:
    """Compute fully qualified module name from file path.

    Walks up parent directories while they contain ``__init__.py``.

    Examples:
        /src/app/utils.py (app is a package) → app.utils
        /src/app/__init__.py → app
        /scripts/tool.py (no package) → tool
    """
    parts = [] if file_path.stem == "__init__" else [file_path.stem]
    directory = file_path.parent
    while (directory / "__init__.py").is_file():
        parts.insert(0, directory.name)
        if directory.parent == directory:
            break
        directory = directory.parent
    return ".".join(parts)


def resolve_relative_import(
    node_module: str | None,
    node_level: int,
    current_module: str,
    *,
    is_package: bool = False,
) -> str | None:
    """Resolve relative import to absolute module path.

    Args:
        node_module: Module part of import (after dots)
        node_level: Number of dots (0=absolute, 1=., 2=..)
        current_module: Current module's fully qualified name
        is_package: Current module is a package ``__init__``

    Returns:
        Absolute module path, None if the import escapes the package
    """
    if node_level == 0:
        return node_module

    parts = current_module.split(".") if current_module else []
    if is_package:
        parts.append("__init__")

    if node_level > len(parts):
        return None

    base_parts = parts[:-node_level]

    if node_module:
        return ".".join([*base_parts, node_module])

    if not base_parts:
        return None

    return ".".join(base_parts)


def module_ancestors(module_name: str) -> tuple[str, ...]:
    """Module and its parent packages, innermost first.

    Example:
        "app.services.user" → ("app.services.user", "app.services", "app")
    """
    parts = module_name.split(".")
    return tuple(".".join(parts[:i]) for i in range(len(parts), 0, -1))
