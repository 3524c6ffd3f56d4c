"""
Suggestion rule table.

Each rule pairs a keyword trigger with an improvement that can be inserted
into a page. The table is built once at import and never changes at runtime.

Rules (in evaluation order):
- cta: add a call-to-action button
- performance: lazy-load images
- readability: larger text and line height
- mobile: fluid media and small-screen padding
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional


def normalize_text(text: str) -> str:
    """Fold full-width characters to half-width and case-fold."""
    return unicodedata.normalize("NFKC", text).casefold()


def build_trigger(*keywords: str) -> re.Pattern:
    """
    Compile keywords into a single case-insensitive pattern.

    ASCII keywords match on word boundaries; other keywords (e.g. Japanese)
    match as plain substrings since they have no word separators.
    Spaces inside a keyword match any run of whitespace.
    """
    parts = []
    for keyword in keywords:
        body = r"\s+".join(re.escape(word) for word in normalize_text(keyword).split())
        if keyword.isascii():
            body = rf"\b{body}\b"
        parts.append(body)
    return re.compile("|".join(parts), re.IGNORECASE)


@dataclass(frozen=True)
class SuggestionRule:
    """A static improvement rule."""
    type: str
    title: str
    description: str
    trigger_pattern: re.Pattern
    marker_attribute: str
    insertion_block: str

    def matches(self, normalized_text: str) -> bool:
        """Check the trigger against already-normalized text."""
        return self.trigger_pattern.search(normalized_text) is not None

    def is_applied(self, content: str) -> bool:
        """A page already carries this rule's block if the marker is present."""
        return self.marker_attribute in content

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
        }


SUGGESTION_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        type="cta",
        title="Add a call-to-action button",
        description=(
            "Visitors have no clear next step. A prominent button near the end "
            "of the page makes it easy to get in touch."
        ),
        trigger_pattern=build_trigger(
            "call to action", "cta", "button", "sign up", "contact",
            "問い合わせ", "ボタン",
        ),
        marker_attribute='data-suggestion="cta"',
        insertion_block=(
            '<section data-suggestion="cta" style="margin: 32px 0; text-align: center;">\n'
            '    <a href="#contact" style="display: inline-block; padding: 12px 28px; '
            'border-radius: 6px; background: #2563eb; color: #fff; text-decoration: none;">'
            "Contact us</a>\n"
            "</section>"
        ),
    ),
    SuggestionRule(
        type="performance",
        title="Improve page load speed",
        description=(
            "The page feels slow. Deferring off-screen images with lazy loading "
            "reduces the work done on first paint."
        ),
        trigger_pattern=build_trigger(
            "slow", "slowly", "speed", "performance", "load", "loading",
            "遅い", "重い", "表示速度",
        ),
        marker_attribute='data-suggestion="performance"',
        insertion_block=(
            '<script data-suggestion="performance">\n'
            "document.querySelectorAll('img:not([loading])').forEach(function (img) {\n"
            "    img.setAttribute('loading', 'lazy');\n"
            "});\n"
            "</script>"
        ),
    ),
    SuggestionRule(
        type="readability",
        title="Improve readability",
        description=(
            "Text is hard to read. A slightly larger font, more line spacing and "
            "a narrower text column make paragraphs easier to follow."
        ),
        trigger_pattern=build_trigger(
            "hard to read", "readability", "font", "text size", "small text",
            "読みにくい", "文字が小さい",
        ),
        marker_attribute='data-suggestion="readability"',
        insertion_block=(
            '<style data-suggestion="readability">\n'
            "body { font-size: 1.0625rem; line-height: 1.8; }\n"
            "p { max-width: 40em; }\n"
            "</style>"
        ),
    ),
    SuggestionRule(
        type="mobile",
        title="Improve the mobile layout",
        description=(
            "The page does not adapt to small screens. Fluid media and extra "
            "padding keep content inside the viewport on phones."
        ),
        trigger_pattern=build_trigger(
            "mobile", "smartphone", "responsive", "phone", "スマホ",
        ),
        marker_attribute='data-suggestion="mobile"',
        insertion_block=(
            '<style data-suggestion="mobile">\n'
            "img, video, iframe { max-width: 100%; height: auto; }\n"
            "@media (max-width: 600px) { body { padding: 0 16px; } }\n"
            "</style>"
        ),
    ),
)


def _check_rules(rules: tuple[SuggestionRule, ...]):
    seen = set()
    for rule in rules:
        if rule.type in seen:
            raise ValueError(f"Duplicate suggestion rule type: {rule.type}")
        if rule.marker_attribute not in rule.insertion_block:
            raise ValueError(f"Insertion block for '{rule.type}' does not carry its marker")
        seen.add(rule.type)


_check_rules(SUGGESTION_RULES)


def get_rule(rule_type: str) -> Optional[SuggestionRule]:
    """Get a rule by type."""
    for rule in SUGGESTION_RULES:
        if rule.type == rule_type:
            return rule
    return None
