"""Reference analyzer: finds uses of one symbol in a module."""

from __future__ import annotations

import ast
from dataclasses import dataclass

from pray.domain.model.location import Location
from pray.domain.model.reference import Reference
from pray.infrastructure.analyzers.base import (
    SourceText,
    module_ancestors,
    resolve_relative_import,
)


@dataclass(frozen=True, slots=True)
class SymbolQuery:
    """Symbol being searched for.

    Attributes:
        name: Declared identifier
        module: Fully qualified module that declares it
        is_method: Declared inside a class body
    """

    name: str
    module: str
    is_method: bool = False

    @property
    def exporters(self) -> frozenset[str]:
        """Modules the symbol can be imported from (module and its packages)."""
        return frozenset(module_ancestors(self.module)) if self.module else frozenset()


class ReferenceAnalyzer:
    """Collects references to a symbol from a module AST.

    Syntactic and import-aware, not type-aware:
    - module-level symbols match through ``from M import N``, ``M.N``
      via import bindings, and bare names under ``from M import *``
    - methods match any attribute access ``.N``

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(
        self,
        tree: ast.Module,
        source: SourceText,
        module_name: str,
        query: SymbolQuery,
        *,
        is_package: bool = False,
    ) -> tuple[Reference, ...]:
        """Find references to query in one module.

        Args:
            tree: Parsed AST module
            source: Source text the tree was parsed from
            module_name: Fully qualified name of the analyzed module
            query: Symbol to look for
            is_package: Analyzed module is a package ``__init__``

        Returns:
            Tuple of Reference in source order
        """
        visitor = _ReferenceVisitor(source, module_name, query, is_package)
        if not query.is_method:
            visitor.collect_bindings(tree)
        visitor.visit(tree)
        return tuple(sorted(visitor.references, key=_sort_key))


class _ReferenceVisitor(ast.NodeVisitor):
    """Matches imports, attribute chains and names against a SymbolQuery."""

    def __init__(
        self,
        source: SourceText,
        module_name: str,
        query: SymbolQuery,
        is_package: bool,
    ) -> None:
        self.source = source
        self.module_name = module_name
        self.query = query
        self.is_package = is_package
        self.references: list[Reference] = []
        # local name → dotted module it is bound to
        self.bindings: dict[str, str] = {}
        self.star_imported = False

    def collect_bindings(self, tree: ast.Module) -> None:
        """Record import bindings anywhere in the module (flow-insensitive)."""
        for node in ast.walk(tree):
            match node:
                case ast.Import(names=names):
                    for alias in names:
                        if alias.asname:
                            self.bindings[alias.asname] = alias.name
                        else:
                            head = alias.name.split(".", 1)[0]
                            self.bindings[head] = head

                case ast.ImportFrom(names=names):
                    resolved = self._resolve(node)
                    if resolved is None:
                        continue
                    for alias in names:
                        if alias.name == "*":
                            if resolved in self.query.exporters:
                                self.star_imported = True
                            continue
                        self.bindings[alias.asname or alias.name] = f"{resolved}.{alias.name}"

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        """Handle: from M import N, from . import N."""
        if self.query.is_method:
            return
        resolved = self._resolve(node)
        if resolved not in self.query.exporters:
            return
        for alias in node.names:
            if alias.name != self.query.name:
                continue
            anchor: ast.AST = alias if getattr(alias, "lineno", None) else node
            offset = self.source.node_offset(anchor)  # type: ignore[arg-type]
            self._add(offset, f"from {resolved} import {alias.name}")

    def visit_Attribute(self, node: ast.Attribute) -> None:
        """Handle: M.N through import bindings, obj.N for methods."""
        if node.attr == self.query.name:
            if self.query.is_method or self._dotted(node.value) in self.query.exporters:
                offset = self.source.node_end_offset(node) - len(node.attr)
                self._add(offset, ast.unparse(node))
        self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> None:
        """Handle: bare N after ``from M import *``."""
        if (
            self.star_imported
            and node.id == self.query.name
            and not isinstance(node.ctx, ast.Store)
        ):
            self._add(self.source.node_offset(node), node.id)

    def _resolve(self, node: ast.ImportFrom) -> str | None:
        return resolve_relative_import(
            node.module,
            node.level,
            self.module_name,
            is_package=self.is_package,
        )

    def _dotted(self, node: ast.expr) -> str | None:
        """Dotted module path an expression denotes through bindings."""
        match node:
            case ast.Name(id=name):
                return self.bindings.get(name)
            case ast.Attribute(value=value, attr=attr):
                base = self._dotted(value)
                return f"{base}.{attr}" if base is not None else None
        return None

    def _add(self, offset: int, text: str) -> None:
        line, column = self.source.line_column(offset)
        location = Location(file=self.source.path, line=line, column=column)
        self.references.append(Reference(location=location, text=text))


def _sort_key(reference: Reference) -> tuple[int, int]:
    return reference.location.line, reference.location.column
