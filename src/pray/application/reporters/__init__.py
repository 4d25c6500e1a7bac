"""Reporters for unused declaration findings.

PlainTextReporter and JSONReporter use stdlib only,
ConsoleReporter renders with rich.
"""

from pray.application.reporters._base import BaseReporter
from pray.application.reporters.console import ConsoleReporter
from pray.application.reporters.json_reporter import JSONReporter
from pray.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "ConsoleReporter",
    "JSONReporter",
    "PlainTextReporter",
]
