"""pray - find unused public declarations of a package across its consumers."""

__version__ = "0.1.0"

from pray.application.services.pipeline import run
from pray.domain.model.configuration import PrayConfig
from pray.domain.model.report import ExitStatus, Report

__all__ = ["ExitStatus", "PrayConfig", "Report", "__version__", "run"]
