"""
Feedback Runner - command-line feedback mode for the site editor.

Provides a CLI for:
- Submitting feedback about a page and applying the suggestions
- Previewing suggestions without touching any page
- Reviewing recent feedback and statistics

Usage:
    python -m src.feedback.runner --page home --submit "The page is slow"
    python -m src.feedback.runner --page home --interactive
"""

import argparse
import logging
from typing import Optional

from src.config import LOG_FORMAT, LOG_LEVEL
from src.feedback.orchestrator import FeedbackOrchestrator, SubmissionResult
from src.feedback.storage import FeedbackStorage
from src.pages.storage import FilePageStorage, sanitize_page_name


STATUS_ICONS = {
    "applied": "+",
    "skipped": "=",
    "error": "!",
    "note": "i",
}


class FeedbackRunner:
    """
    Interactive feedback system.

    Submits feedback through the orchestrator and prints the
    per-suggestion reports.
    """

    def __init__(
        self,
        feedback_storage: Optional[FeedbackStorage] = None,
        page_storage: Optional[FilePageStorage] = None,
    ):
        self.storage = feedback_storage or FeedbackStorage()
        self.pages = page_storage or FilePageStorage()
        self.orchestrator = FeedbackOrchestrator(self.storage, self.pages)

    def submit(self, text: str, page: Optional[str] = None) -> SubmissionResult:
        """Submit feedback and return the result."""
        return self.orchestrator.submit(text, target_page=page)

    def print_result(self, result: SubmissionResult):
        """Display the reports for a submission."""
        print("\n" + "-" * 60)
        for report in result.reports:
            icon = STATUS_ICONS.get(report.status.value, "?")
            print(f"[{icon}] {report.title} ({report.status.value})")
            print(f"    {report.message}")
        print("-" * 60)
        if not result.persisted and result.entry is not None:
            print("Warning: feedback could not be saved to the log.")

    def interactive(self, page: Optional[str] = None):
        """Run interactive feedback mode."""
        print("\n" + "=" * 60)
        print("Site Editor - Feedback Mode")
        print("=" * 60)
        print(f"\nTarget page: {page or '(none, suggestions only)'}")
        print("\nCommands:")
        print("  Type feedback to submit it")
        print("  'page NAME' - Switch target page ('page -' for none)")
        print("  'stats' - Show feedback statistics")
        print("  'recent' - Show recent feedback")
        print("  'quit' - Exit\n")

        while True:
            try:
                user_input = input("Feedback: ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\nGoodbye!")
                break

            if not user_input:
                continue

            if user_input.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if user_input.lower() == "stats":
                self._show_stats()
                continue

            if user_input.lower() == "recent":
                self._show_recent()
                continue

            if user_input.lower().startswith("page "):
                name = user_input[5:].strip()
                if name == "-":
                    page = None
                    print("Target page cleared.")
                    continue
                slug = sanitize_page_name(name)
                if not slug or not self.pages.exists(slug):
                    print(f"Unknown page: {name}")
                    continue
                page = slug
                print(f"Target page: {page}")
                continue

            self.print_result(self.submit(user_input, page))

    def _show_stats(self):
        """Display feedback statistics."""
        stats = self.storage.stats()
        print("\nFeedback Statistics")
        print("=" * 40)
        print(f"Total entries: {stats['total']}")
        print(f"\nBy page:")
        for page, count in stats['by_page'].items():
            pct = count / stats['total'] * 100 if stats['total'] > 0 else 0
            print(f"  {page}: {count} ({pct:.1f}%)")

    def _show_recent(self, n: int = 5):
        """Show recent entries."""
        entries = self.storage.recent(n)
        print(f"\nLast {n} entries:")
        print("-" * 40)
        for e in entries:
            print(f"[{e.created_at}] {e.target_page or '(no page)'}")
            print(f"  {e.text[:60]}")
            print()


def main():
    parser = argparse.ArgumentParser(description="Site Editor Feedback Runner")
    parser.add_argument("--page", "-p", type=str, help="Target page slug")
    parser.add_argument("--submit", "-s", type=str, help="Submit a single feedback text")
    parser.add_argument("--interactive", "-i", action="store_true", help="Interactive mode")
    parser.add_argument("--recent", type=int, default=0, help="Show N recent entries")
    parser.add_argument("--stats", action="store_true", help="Show statistics")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    page = None
    if args.page:
        page = sanitize_page_name(args.page)
        if not page:
            print("Page names may only contain letters, digits, hyphens and underscores.")
            return 2

    runner = FeedbackRunner()

    if args.stats:
        runner._show_stats()
    elif args.recent:
        runner._show_recent(args.recent)
    elif args.interactive:
        runner.interactive(page)
    elif args.submit is not None:
        result = runner.submit(args.submit, page)
        runner.print_result(result)
        if any(r.status.value == "error" for r in result.reports):
            return 1
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
