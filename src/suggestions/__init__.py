"""
Suggestions - rule-based page improvements from user feedback.

Feedback text is matched against a static rule table; matching rules
can be applied to a stored page by inserting a marked markup block.
"""

from src.suggestions.models import MutationResult, ReportStatus, SuggestionReport
from src.suggestions.rules import SUGGESTION_RULES, SuggestionRule, get_rule, normalize_text
from src.suggestions.engine import SuggestionEngine
from src.suggestions.mutator import PageMutator, insert_block

__all__ = [
    "SuggestionEngine",
    "PageMutator",
    "SuggestionRule",
    "SuggestionReport",
    "ReportStatus",
    "MutationResult",
    "SUGGESTION_RULES",
    "get_rule",
    "normalize_text",
    "insert_block",
]
