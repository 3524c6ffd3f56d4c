"""
Report types produced by the suggestion pipeline.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


class ReportStatus(str, Enum):
    """Outcome of a single suggestion."""
    APPLIED = "applied"
    SKIPPED = "skipped"
    ERROR = "error"
    NOTE = "note"


@dataclass
class SuggestionReport:
    """Per-suggestion outcome returned to the caller."""
    type: str
    title: str
    message: str
    status: ReportStatus
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class MutationResult:
    """Page content after a mutation attempt, plus its report."""
    content: Optional[str]
    report: SuggestionReport

    @property
    def changed(self) -> bool:
        return self.report.status == ReportStatus.APPLIED
