"""
Error types for the feedback pipeline.

These are raised inside the pipeline and captured into per-suggestion
reports; none of them is meant to escape a submission.
"""


class FeedbackError(Exception):
    """Base class for failures that end up in a suggestion report."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackError):
    """Feedback text was empty or whitespace only."""


class PersistenceError(FeedbackError):
    """Writing the feedback log or a page failed."""


class TargetMissingError(FeedbackError):
    """Target page does not exist or could not be read."""
