"""
Feedback - page feedback intake and the suggestion pipeline.

Feedback is logged, classified into suggestions, and the suggestions
are applied to the target page when one is given.
"""

from src.feedback.storage import FeedbackStorage, FeedbackEntry
from src.feedback.orchestrator import FeedbackOrchestrator, SubmissionResult
from src.feedback.runner import FeedbackRunner

__all__ = [
    "FeedbackStorage",
    "FeedbackEntry",
    "FeedbackOrchestrator",
    "SubmissionResult",
    "FeedbackRunner",
]
