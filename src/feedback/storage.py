"""
Feedback storage - Persists submitted page feedback.

Stores:
- The page the feedback is about (if any)
- The feedback text
- When it was submitted

The log is best-effort history: a missing or corrupt file reads as an
empty log, and a failed write is reported rather than raised.
Entries are kept in submission order; nothing is ever edited or removed.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Optional

from src.config import FEEDBACK_FILE


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedbackEntry:
    """A single feedback entry."""
    text: str
    created_at: str
    target_page: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "FeedbackEntry":
        text = data["text"]
        created_at = data["created_at"]
        target_page = data.get("target_page")
        if not isinstance(text, str) or not isinstance(created_at, str):
            raise TypeError("text and created_at must be strings")
        if target_page is not None and not isinstance(target_page, str):
            raise TypeError("target_page must be a string or null")
        return cls(text=text, created_at=created_at, target_page=target_page)


class FeedbackStorage:
    """
    Manages feedback storage and retrieval.

    Feedback is stored as JSON for easy inspection and editing.
    Every append rewrites the whole file.
    """

    def __init__(self, feedback_file: Path = FEEDBACK_FILE):
        self.feedback_file = Path(feedback_file)

    def load(self) -> list[FeedbackEntry]:
        """Load all entries in submission order."""
        if not self.feedback_file.exists():
            return []

        try:
            with open(self.feedback_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read feedback log {self.feedback_file}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Feedback log {self.feedback_file} is not a list, ignoring it")
            return []

        entries = []
        for record in data:
            try:
                entries.append(FeedbackEntry.from_dict(record))
            except (KeyError, TypeError, AttributeError):
                logger.warning(f"Skipping malformed feedback record: {record!r}")
        return entries

    def _save(self, entries: list[FeedbackEntry]):
        """Save feedback to file."""
        self.feedback_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.feedback_file, "w", encoding="utf-8") as f:
            json.dump([e.to_dict() for e in entries], f, indent=2, ensure_ascii=False)

    def append(self, entries: list[FeedbackEntry]) -> bool:
        """
        Append entries to the log.

        Returns False if the log could not be written.
        """
        all_entries = self.load() + list(entries)
        try:
            self._save(all_entries)
        except OSError as e:
            logger.error(f"Failed to write feedback log {self.feedback_file}: {e}")
            return False
        logger.debug(f"Feedback log now has {len(all_entries)} entries")
        return True

    def recent(self, limit: int = 10) -> list[FeedbackEntry]:
        """Get most recent entries, newest first."""
        return list(reversed(self.load()))[:limit]

    def for_page(self, slug: str) -> list[FeedbackEntry]:
        """Get entries about a specific page."""
        return [e for e in self.load() if e.target_page == slug]

    def search(self, query: str) -> list[FeedbackEntry]:
        """Search entries by feedback text."""
        query_lower = query.lower()
        return [e for e in self.load() if query_lower in e.text.lower()]

    def count(self) -> int:
        return len(self.load())

    def stats(self) -> dict:
        """Get feedback statistics."""
        entries = self.load()

        by_page = {}
        for entry in entries:
            page = entry.target_page or "(none)"
            by_page[page] = by_page.get(page, 0) + 1

        return {
            "total": len(entries),
            "by_page": by_page,
        }


# CLI for viewing feedback
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Feedback Storage Manager")
    parser.add_argument("--stats", action="store_true", help="Show statistics")
    parser.add_argument("--recent", type=int, default=0, help="Show N recent entries")
    parser.add_argument("--page", type=str, help="Show entries for a page")
    parser.add_argument("--search", type=str, help="Search entries")

    args = parser.parse_args()

    storage = FeedbackStorage()

    if args.stats:
        stats = storage.stats()
        print("Feedback Statistics")
        print("=" * 40)
        print(f"Total entries: {stats['total']}")
        print(f"\nBy page:")
        for page, count in stats['by_page'].items():
            print(f"  {page}: {count}")

    elif args.recent:
        entries = storage.recent(args.recent)
        for e in entries:
            print(f"\n[{e.created_at}] {e.target_page or '(no page)'}")
            print(f"  {e.text[:80]}")

    elif args.page:
        entries = storage.for_page(args.page)
        print(f"Found {len(entries)} entries for '{args.page}':")
        for e in entries:
            print(f"  [{e.created_at}] {e.text[:60]}")

    elif args.search:
        entries = storage.search(args.search)
        print(f"Found {len(entries)} matching entries:")
        for e in entries:
            print(f"  [{e.created_at}] {e.target_page or '(no page)'}: {e.text[:60]}")

    else:
        parser.print_help()
