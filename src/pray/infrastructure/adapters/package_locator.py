"""Import path → filesystem location."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pray.domain.exceptions import PackageNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable


class PackageLocator:
    """Locates packages and modules under a list of search roots.

    An existing directory or ``.py`` file path is used as is. A dotted
    import path ``a.b`` is looked up as ``<root>/a/b`` (package directory),
    then ``<root>/a/b.py`` (module), for each root in order.

    Stateless after construction - safe to share between threads.
    """

    def __init__(self, search_paths: Iterable[Path]) -> None:
        """Initialize locator.

        Args:
            search_paths: Roots to search, in priority order
        """
        self._search_paths = tuple(search_paths)

    @property
    def search_paths(self) -> tuple[Path, ...]:
        """Configured search roots."""
        return self._search_paths

    def locate(self, import_path: str) -> Path:
        """Resolve an import path to a directory or module file.

        Args:
            import_path: Dotted import path, or a filesystem path

        Returns:
            Package directory or module file

        Raises:
            PackageNotFoundError: If nothing matches
        """
        as_path = Path(import_path)
        if as_path.is_dir() or (as_path.suffix == ".py" and as_path.is_file()):
            return as_path

        parts = import_path.replace("/", ".").split(".")
        if not all(part.isidentifier() for part in parts):
            raise PackageNotFoundError(import_path)

        relative = Path(*parts)
        for root in self._search_paths:
            candidate = root / relative
            if candidate.is_dir():
                return candidate
            module = candidate.with_name(candidate.name + ".py")
            if module.is_file():
                return module

        raise PackageNotFoundError(import_path)

    def source_files(self, import_path: str) -> tuple[Path, ...]:
        """Python files making up a package (non-recursive) or module.

        Raises:
            PackageNotFoundError: If import path cannot be located
        """
        location = self.locate(import_path)
        if location.is_file():
            return (location,)
        return tuple(sorted(p for p in location.glob("*.py") if p.is_file()))
