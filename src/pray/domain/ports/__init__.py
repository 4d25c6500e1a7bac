"""Domain ports (interfaces/protocols)."""

from pray.domain.ports.package_lister import PackageListerProtocol
from pray.domain.ports.reference_finder import ReferenceFinderProtocol
from pray.domain.ports.reporter import FindingSinkProtocol

__all__ = [
    "FindingSinkProtocol",
    "PackageListerProtocol",
    "ReferenceFinderProtocol",
]
