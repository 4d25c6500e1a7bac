"""Package path expander."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pray.domain.exceptions import PackageListingError
from pray.domain.model.expansion import ExpansionResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pray.domain.ports.package_lister import PackageListerProtocol

logger = logging.getLogger(__name__)


def expand_packages(
    patterns: Sequence[str],
    lister: PackageListerProtocol,
) -> ExpansionResult:
    """Expand wildcard import patterns into concrete packages.

    When the lister is unavailable or fails, the patterns are returned
    unchanged (expanded=False) and the run goes on treating them as
    literal import paths. The fallback is not an error: callers decide
    whether to mention it.

    Args:
        patterns: Import paths, possibly ending in ``...``
        lister: External package-listing capability

    Returns:
        ExpansionResult with the packages to search
    """
    try:
        packages = lister.list_packages(patterns)
    except PackageListingError as e:
        logger.debug("package expansion fell back to arguments: %s", e)
        return ExpansionResult(packages=tuple(patterns), expanded=False, reason=str(e))

    return ExpansionResult(packages=tuple(packages), expanded=True)
