"""Pipeline entry point: configuration → Report.

Control flow: expand targets → locate source → build catalog →
verify every declaration concurrently.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pray.application.services.aggregator import Aggregator
from pray.application.services.catalog import build_catalog
from pray.application.services.expander import expand_packages
from pray.application.services.verifier import UsageVerifier
from pray.domain.exceptions import ParseError
from pray.infrastructure.adapters import (
    ASTReferenceFinder,
    PackageLocator,
    SubprocessPackageLister,
)

if TYPE_CHECKING:
    from pray.domain.model.configuration import PrayConfig
    from pray.domain.model.report import Report
    from pray.domain.ports.package_lister import PackageListerProtocol
    from pray.domain.ports.reference_finder import ReferenceFinderProtocol
    from pray.domain.ports.reporter import FindingSinkProtocol

logger = logging.getLogger(__name__)


def run(
    config: PrayConfig,
    sink: FindingSinkProtocol,
    *,
    finder: ReferenceFinderProtocol | None = None,
    lister: PackageListerProtocol | None = None,
) -> Report:
    """Check config.source's public declarations for usage in config.targets.

    Args:
        config: Run configuration.
        sink: Receives findings as they arrive, then the report.
        finder: Reference finder. Default: ASTReferenceFinder.
        lister: Package lister. Default: SubprocessPackageLister running
            config.lister_command over config.search_paths.

    Returns:
        Report; report.status is the exit status.

    Raises:
        PackageNotFoundError: Source package cannot be located.
        ParseError: Source package is not a directory or fails to parse.
    """
    locator = PackageLocator(config.search_paths)
    if lister is None:
        lister = SubprocessPackageLister(config.lister_command, config.search_paths)
    if finder is None:
        finder = ASTReferenceFinder(locator)

    expansion = expand_packages(config.targets, lister)
    if not expansion.expanded:
        logger.debug("using target arguments verbatim: %s", expansion.reason)
    logger.debug("target packages: %s", ", ".join(expansion.packages))

    source_dir = locator.locate(config.source)
    if not source_dir.is_dir():
        raise ParseError(path=str(source_dir), reason="source must be a package directory")

    records = build_catalog(source_dir, include_tests=config.include_tests)

    verifier = UsageVerifier(finder, expansion.packages or config.targets)
    aggregator = Aggregator(verifier, max_workers=config.max_workers)
    return aggregator.run(records, sink)
