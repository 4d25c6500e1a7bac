"""Public declaration analyzer."""

from __future__ import annotations

import ast
from dataclasses import dataclass, field

from pray.domain.model.declaration import DeclarationKind, DeclarationRecord
from pray.domain.model.location import format_position
from pray.infrastructure.analyzers.base import SourceText, is_public, name_offset

_FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)


class DeclarationAnalyzer:
    """Extracts public top-level declarations from a module AST.

    Stateless analyzer - no state between analyze() calls.
    """

    def analyze(self, tree: ast.Module, source: SourceText) -> tuple[DeclarationRecord, ...]:
        """Extract public declarations of one module.

        Order: constants, variables, types (each followed by its
        methods), functions. Source order within each group.

        Each name is declared once: the first binding wins, except that an
        implementation takes the place of the ``@overload`` stubs before it.

        Args:
            tree: Parsed AST module
            source: Source text the tree was parsed from

        Returns:
            Tuple of DeclarationRecord
        """
        exported = _extract_dunder_all(tree)
        groups = _Groups()

        for node in tree.body:
            match node:
                case ast.Assign(targets=targets):
                    for target in targets:
                        for name in _target_names(target):
                            self._add_value(groups, name, source, exported, is_final=False)

                case ast.AnnAssign(target=ast.Name() as name, annotation=annotation):
                    self._add_value(groups, name, source, exported, is_final=_is_final(annotation))

                case ast.ClassDef(name=class_name) if _exported(class_name, exported):
                    record = _record(
                        class_name, DeclarationKind.TYPE, name_offset(node, source), source
                    )
                    if groups.add(groups.types, record):
                        groups.types.extend(self._methods(node, source))

                case ast.FunctionDef(name=func_name) | ast.AsyncFunctionDef(name=func_name):
                    if _exported(func_name, exported):
                        record = _record(
                            func_name, DeclarationKind.FUNCTION, name_offset(node, source), source
                        )
                        groups.add(groups.functions, record, overload=_is_overload(node))

                case _ if _is_type_alias(node):
                    alias_name = node.name  # type: ignore[attr-defined]
                    if _exported(alias_name.id, exported):
                        record = _record(
                            alias_name.id,
                            DeclarationKind.TYPE,
                            source.node_offset(alias_name),
                            source,
                        )
                        groups.add(groups.types, record)

        return (*groups.constants, *groups.variables, *groups.types, *groups.functions)

    def _add_value(
        self,
        groups: _Groups,
        name: ast.Name,
        source: SourceText,
        exported: frozenset[str] | None,
        *,
        is_final: bool,
    ) -> None:
        """Record a module-level assignment target."""
        if name.id == "__all__" or not _exported(name.id, exported):
            return
        offset = source.node_offset(name)
        if is_final or name.id.isupper():
            record = _record(name.id, DeclarationKind.CONSTANT, offset, source)
            groups.add(groups.constants, record)
        else:
            record = _record(name.id, DeclarationKind.VARIABLE, offset, source)
            groups.add(groups.variables, record)

    def _methods(self, node: ast.ClassDef, source: SourceText) -> list[DeclarationRecord]:
        """Public methods defined directly in the class body, one per name."""
        chosen: dict[str, ast.FunctionDef | ast.AsyncFunctionDef] = {}
        for item in node.body:
            if isinstance(item, _FUNCTION_NODES) and is_public(item.name):
                current = chosen.get(item.name)
                if current is None or (_is_overload(current) and not _is_overload(item)):
                    chosen[item.name] = item
        return [
            _record(
                item.name,
                DeclarationKind.METHOD,
                name_offset(item, source),
                source,
                owner=node.name,
            )
            for item in chosen.values()
        ]


@dataclass(slots=True)
class _Groups:
    """Declarations bucketed by output group."""

    constants: list[DeclarationRecord] = field(default_factory=list)
    variables: list[DeclarationRecord] = field(default_factory=list)
    types: list[DeclarationRecord] = field(default_factory=list)
    functions: list[DeclarationRecord] = field(default_factory=list)
    _slots: dict[str, tuple[list[DeclarationRecord], int, bool]] = field(default_factory=dict)

    def add(
        self,
        group: list[DeclarationRecord],
        record: DeclarationRecord,
        *,
        overload: bool = False,
    ) -> bool:
        """Append record unless its name is already declared.

        An implementation replaces an earlier ``@overload`` stub in place.

        Returns:
            True if record was appended as a new declaration
        """
        slot = self._slots.get(record.identifier)
        if slot is None:
            group.append(record)
            self._slots[record.identifier] = (group, len(group) - 1, overload)
            return True

        existing, index, is_stub = slot
        if is_stub and not overload and existing is group:
            group[index] = record
            self._slots[record.identifier] = (group, index, False)
        return False


def _record(
    identifier: str,
    kind: DeclarationKind,
    offset: int,
    source: SourceText,
    owner: str | None = None,
) -> DeclarationRecord:
    line, column = source.line_column(offset)
    return DeclarationRecord(
        identifier=identifier,
        kind=kind,
        position=format_position(source.path, offset),
        filename=str(source.path),
        line=line,
        column=column,
        owner=owner,
    )


def _exported(name: str, exported: frozenset[str] | None) -> bool:
    if exported is not None:
        return name in exported
    return is_public(name)


def _target_names(target: ast.expr) -> list[ast.Name]:
    """Plain names bound by an assignment target, unpacking tuples."""
    match target:
        case ast.Name():
            return [target]
        case ast.Tuple(elts=elts) | ast.List(elts=elts):
            return [name for elt in elts for name in _target_names(elt)]
        case ast.Starred(value=value):
            return _target_names(value)
    return []


def _extract_dunder_all(tree: ast.Module) -> frozenset[str] | None:
    """Names listed in a literal ``__all__``, None if absent or computed."""
    for node in tree.body:
        match node:
            case ast.Assign(
                targets=[ast.Name(id="__all__")],
                value=ast.List(elts=elts) | ast.Tuple(elts=elts),
            ):
                names = [elt.value for elt in elts if isinstance(elt, ast.Constant)]
                if all(isinstance(name, str) for name in names) and len(names) == len(elts):
                    return frozenset(names)
                return None
    return None


def _is_final(annotation: ast.expr) -> bool:
    """``Final``, ``typing.Final`` or ``Final[...]``."""
    match annotation:
        case ast.Subscript(value=value):
            return _is_final(value)
        case ast.Name(id="Final") | ast.Attribute(attr="Final"):
            return True
    return False


def _is_overload(node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
    """Decorated with ``overload`` or ``typing.overload``."""
    return any(
        (isinstance(decorator, ast.Name) and decorator.id == "overload")
        or (isinstance(decorator, ast.Attribute) and decorator.attr == "overload")
        for decorator in node.decorator_list
    )


def _is_type_alias(node: ast.stmt) -> bool:
    """PEP 695 ``type X = ...`` statement (Python 3.12+)."""
    type_alias = getattr(ast, "TypeAlias", None)
    return type_alias is not None and isinstance(node, type_alias)
