"""
Suggestion engine - maps feedback text to suggestion rules.

Classification is plain keyword matching against the static rule table:
the same text always yields the same rules, in table order.
"""

import logging

from src.suggestions.rules import SUGGESTION_RULES, SuggestionRule, normalize_text


logger = logging.getLogger(__name__)


class SuggestionEngine:
    """
    Rule-based feedback classifier.

    A feedback text may match any number of rules; no match is a normal
    outcome and returns an empty list.
    """

    def __init__(self, rules: tuple[SuggestionRule, ...] = SUGGESTION_RULES):
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[SuggestionRule, ...]:
        return self._rules

    def classify(self, text: str) -> list[SuggestionRule]:
        """Return every rule whose trigger occurs in the text, in table order."""
        normalized = normalize_text(text)
        matched = [rule for rule in self._rules if rule.matches(normalized)]
        logger.debug(f"Classified feedback into {[r.type for r in matched]}")
        return matched


if __name__ == "__main__":
    import sys

    text = " ".join(sys.argv[1:]) or "The page is slow and I can't find a contact button"
    engine = SuggestionEngine()

    print(f"Feedback: {text}")
    print("-" * 40)
    matches = engine.classify(text)
    if not matches:
        print("No suggestion found.")
    for rule in matches:
        print(f"[{rule.type}] {rule.title}")
        print(f"  {rule.description}")
