"""Domain model: immutable value objects."""

from pray.domain.model.configuration import PrayConfig
from pray.domain.model.declaration import DeclarationKind, DeclarationRecord
from pray.domain.model.expansion import ExpansionResult
from pray.domain.model.finding import Finding, FindingKind
from pray.domain.model.location import Location, format_position, parse_position
from pray.domain.model.reference import Reference
from pray.domain.model.report import ExitStatus, Report
from pray.domain.model.usage_result import UsageResult

__all__ = [
    "DeclarationKind",
    "DeclarationRecord",
    "ExitStatus",
    "ExpansionResult",
    "Finding",
    "FindingKind",
    "Location",
    "PrayConfig",
    "Reference",
    "Report",
    "UsageResult",
    "format_position",
    "parse_position",
]
