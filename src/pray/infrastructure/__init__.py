"""Infrastructure layer: AST analyzers and adapters for external capabilities."""
