"""
Feedback orchestrator - turns a feedback submission into suggestion reports.

Steps:
1. Validate the feedback text
2. Log the feedback (a failed write is reported, not fatal)
3. Classify the text against the suggestion rules
4. Apply each matching rule to the target page, or report it as a note
   when no page was given
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from src.errors import ValidationError
from src.feedback.storage import FeedbackEntry, FeedbackStorage
from src.pages.storage import PageStore
from src.suggestions.engine import SuggestionEngine
from src.suggestions.models import ReportStatus, SuggestionReport
from src.suggestions.mutator import PageMutator


logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    """Outcome of a feedback submission."""
    persisted: bool
    reports: list[SuggestionReport] = field(default_factory=list)
    entry: Optional[FeedbackEntry] = None

    @property
    def applied(self) -> list[SuggestionReport]:
        return [r for r in self.reports if r.status == ReportStatus.APPLIED]

    def to_dict(self) -> dict:
        return {
            "persisted": self.persisted,
            "reports": [r.to_dict() for r in self.reports],
            "entry": self.entry.to_dict() if self.entry else None,
        }


class FeedbackOrchestrator:
    """
    Runs the feedback pipeline for one submission at a time.

    The caller always gets one report per matched rule (or a single
    note when nothing matched), even if some of them failed.
    """

    def __init__(
        self,
        feedback_storage: FeedbackStorage,
        page_storage: PageStore,
        engine: Optional[SuggestionEngine] = None,
        mutator: Optional[PageMutator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.feedback_storage = feedback_storage
        self.page_storage = page_storage
        self.engine = engine or SuggestionEngine()
        self.mutator = mutator or PageMutator(page_storage)
        self.clock = clock

    def _validate(self, text: Optional[str]) -> str:
        if text is None or not text.strip():
            raise ValidationError("Feedback text must not be empty.")
        return text.strip()

    def submit(self, text: str, target_page: Optional[str] = None) -> SubmissionResult:
        """
        Submit feedback, optionally about a specific page.

        Args:
            text: Free-text feedback
            target_page: Slug of the page to improve (already sanitized)

        Returns:
            SubmissionResult with the persistence flag and ordered reports
        """
        try:
            text = self._validate(text)
        except ValidationError as e:
            logger.info("Rejected empty feedback")
            return SubmissionResult(
                persisted=False,
                reports=[SuggestionReport(
                    type="validation",
                    title="Invalid feedback",
                    message=e.message,
                    status=ReportStatus.ERROR,
                    error=type(e).__name__,
                )],
            )

        target_page = target_page or None
        entry = FeedbackEntry(
            text=text,
            created_at=self.clock().isoformat(),
            target_page=target_page,
        )
        persisted = self.feedback_storage.append([entry])
        if not persisted:
            logger.warning("Feedback could not be logged, continuing with suggestions")

        rules = self.engine.classify(text)
        logger.info(f"Feedback for '{target_page or '-'}' matched {len(rules)} rule(s)")

        if not rules:
            return SubmissionResult(
                persisted=persisted,
                reports=[SuggestionReport(
                    type="none",
                    title="No suggestion found",
                    message="No improvement rule matched this feedback. It has been recorded.",
                    status=ReportStatus.NOTE,
                )],
                entry=entry,
            )

        reports = []
        for rule in rules:
            if target_page is None:
                reports.append(SuggestionReport(
                    type=rule.type,
                    title=rule.title,
                    message=rule.description,
                    status=ReportStatus.NOTE,
                ))
            else:
                reports.append(self.mutator.apply(rule, target_page).report)

        return SubmissionResult(persisted=persisted, reports=reports, entry=entry)
