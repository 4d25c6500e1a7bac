"""AST-based reference finder adapter.

Implements ReferenceFinderProtocol with a syntactic, import-aware search
over the target packages' source files.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from pray.domain.exceptions import PackageNotFoundError, ParseError, ReferenceQueryError
from pray.domain.model.location import parse_position
from pray.domain.ports.reference_finder import NO_IDENTIFIER
from pray.infrastructure.analyzers.base import (
    SourceText,
    compute_module_name,
    load_module,
    name_offset,
)
from pray.infrastructure.analyzers.reference_analyzer import ReferenceAnalyzer, SymbolQuery

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pray.domain.model.reference import Reference
    from pray.infrastructure.adapters.package_locator import PackageLocator

logger = logging.getLogger(__name__)


class ASTReferenceFinder:
    """Finds references by parsing every file of the target packages.

    Every call re-reads its files: no caches, no shared mutable state,
    so calls can run concurrently from any number of threads.

    All failures surface as ReferenceQueryError, one per query.
    """

    def __init__(self, locator: PackageLocator) -> None:
        """Initialize finder.

        Args:
            locator: Resolves target import paths to files

        Raises:
            TypeError: If locator is None
        """
        if locator is None:
            raise TypeError("locator must not be None")

        self._locator = locator
        self._analyzer = ReferenceAnalyzer()

    def find_references(
        self,
        targets: Sequence[str],
        position: str,
    ) -> tuple[Reference, ...]:
        """Find references to the symbol at position in targets.

        Args:
            targets: Import paths of packages to search
            position: Position token ``<file>:#<offset>``

        Returns:
            References in target order, then source order

        Raises:
            ReferenceQueryError: Invalid position, no identifier at
                position, unknown target, or unreadable target file
        """
        query = self._query_at(position)

        references: list[Reference] = []
        for path in self._target_files(targets):
            try:
                source, tree = load_module(path)
            except ParseError as e:
                raise ReferenceQueryError(str(e)) from e

            references.extend(
                self._analyzer.analyze(
                    tree,
                    source,
                    compute_module_name(path),
                    query,
                    is_package=path.stem == "__init__",
                )
            )

        logger.debug("%s.%s: %d reference(s)", query.module, query.name, len(references))
        return tuple(references)

    def _query_at(self, position: str) -> SymbolQuery:
        """Identify the symbol a position token addresses."""
        try:
            file, offset = parse_position(position)
        except ValueError as e:
            raise ReferenceQueryError(str(e)) from e

        try:
            source, tree = load_module(file)
        except ParseError as e:
            raise ReferenceQueryError(str(e)) from e

        name = source.identifier_at(offset)
        if name is None:
            raise ReferenceQueryError(NO_IDENTIFIER)

        return SymbolQuery(
            name=name,
            module=compute_module_name(file),
            is_method=_is_method_name(tree, source, offset),
        )

    def _target_files(self, targets: Sequence[str]) -> list[Path]:
        """Files of every target, each file once."""
        seen: set[Path] = set()
        files: list[Path] = []
        for target in targets:
            try:
                paths = self._locator.source_files(target)
            except PackageNotFoundError as e:
                raise ReferenceQueryError(str(e)) from e

            for path in paths:
                key = path.resolve()
                if key not in seen:
                    seen.add(key)
                    files.append(path)
        return files


def _is_method_name(tree: ast.Module, source: SourceText, offset: int) -> bool:
    """Offset is the name of a def directly inside a top-level class."""
    for node in tree.body:
        if not isinstance(node, ast.ClassDef):
            continue
        for item in node.body:
            if not isinstance(item, ast.FunctionDef | ast.AsyncFunctionDef):
                continue
            try:
                if name_offset(item, source) == offset:
                    return True
            except ParseError as e:
                raise ReferenceQueryError(str(e)) from e
    return False
