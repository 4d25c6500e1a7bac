"""Infrastructure adapters for external interfaces."""

from pray.infrastructure.adapters.ast_reference_finder import ASTReferenceFinder
from pray.infrastructure.adapters.package_locator import PackageLocator
from pray.infrastructure.adapters.subprocess_lister import SubprocessPackageLister

__all__ = [
    "ASTReferenceFinder",
    "PackageLocator",
    "SubprocessPackageLister",
]
