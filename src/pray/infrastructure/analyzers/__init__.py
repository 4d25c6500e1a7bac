"""AST analyzers for declarations and references."""

from pray.infrastructure.analyzers.declaration_analyzer import DeclarationAnalyzer
from pray.infrastructure.analyzers.reference_analyzer import ReferenceAnalyzer, SymbolQuery

__all__ = [
    "DeclarationAnalyzer",
    "ReferenceAnalyzer",
    "SymbolQuery",
]
