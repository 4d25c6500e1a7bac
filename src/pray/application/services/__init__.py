"""Application services."""

from pray.application.services.aggregator import Aggregator, AggregatorState
from pray.application.services.catalog import build_catalog
from pray.application.services.expander import expand_packages
from pray.application.services.pipeline import run
from pray.application.services.verifier import UsageVerifier, finding_for

__all__ = [
    "Aggregator",
    "AggregatorState",
    "UsageVerifier",
    "build_catalog",
    "expand_packages",
    "finding_for",
    "run",
]
