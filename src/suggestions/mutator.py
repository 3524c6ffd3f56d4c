"""
Page mutator - applies a suggestion rule to a stored page.

Insertion is idempotent: a rule whose marker is already present in the
page is skipped. Blocks go right before the first </body> (any case), or
at the end of the document when there is no closing body tag.
"""

import logging
import re
import threading
from contextlib import contextmanager

from src.errors import FeedbackError, PersistenceError, TargetMissingError
from src.pages.storage import PageStore
from src.suggestions.models import MutationResult, ReportStatus, SuggestionReport
from src.suggestions.rules import SuggestionRule


logger = logging.getLogger(__name__)

BODY_CLOSE_PATTERN = re.compile(r"</body>", re.IGNORECASE)


def insert_block(content: str, block: str) -> str:
    """Insert a markup block before the closing body tag, or append it."""
    match = BODY_CLOSE_PATTERN.search(content)
    if match:
        index = match.start()
        return content[:index] + block + "\n" + content[index:]

    if content and not content.endswith("\n"):
        content += "\n"
    return content + block + "\n"


class PageMutator:
    """
    Read-modify-write of page content through a page storage port.

    Failures never raise; they come back as an error report so the
    caller can keep going with other suggestions.
    """

    def __init__(self, page_storage: PageStore):
        self.page_storage = page_storage
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _page_lock(self, slug: str):
        """Serialize mutations of one page. The lock is dropped once nobody holds or waits for it."""
        with self._locks_guard:
            lock = self._locks.setdefault(slug, threading.Lock())
            self._holders[slug] = self._holders.get(slug, 0) + 1
        try:
            with lock:
                yield lock
        finally:
            with self._locks_guard:
                self._holders[slug] -= 1
                if self._holders[slug] == 0:
                    del self._holders[slug]
                    del self._locks[slug]

    def _read(self, slug: str) -> str:
        try:
            content = self.page_storage.read(slug)
        except (OSError, UnicodeDecodeError) as e:
            raise TargetMissingError(f"Page '{slug}' could not be read: {e}")
        if content is None:
            raise TargetMissingError(f"Page '{slug}' does not exist")
        return content

    def _write(self, slug: str, content: str):
        try:
            ok = self.page_storage.write(slug, content)
        except OSError as e:
            raise PersistenceError(f"Page '{slug}' could not be saved: {e}")
        if not ok:
            raise PersistenceError(f"Page '{slug}' could not be saved")

    def apply(self, rule: SuggestionRule, slug: str) -> MutationResult:
        """Apply a single rule to the page stored under slug."""
        with self._page_lock(slug):
            content = None
            try:
                content = self._read(slug)

                if rule.is_applied(content):
                    logger.info(f"Suggestion '{rule.type}' already present on '{slug}'")
                    return MutationResult(
                        content=content,
                        report=SuggestionReport(
                            type=rule.type,
                            title=rule.title,
                            message=f"Already applied to {slug}.html, nothing changed.",
                            status=ReportStatus.SKIPPED,
                        ),
                    )

                updated = insert_block(content, rule.insertion_block)
                self._write(slug, updated)

            except FeedbackError as e:
                logger.error(f"Suggestion '{rule.type}' failed on '{slug}': {e.message}")
                return MutationResult(
                    content=content,
                    report=SuggestionReport(
                        type=rule.type,
                        title=rule.title,
                        message=e.message,
                        status=ReportStatus.ERROR,
                        error=type(e).__name__,
                    ),
                )

        logger.info(f"Applied suggestion '{rule.type}' to '{slug}'")
        return MutationResult(
            content=updated,
            report=SuggestionReport(
                type=rule.type,
                title=rule.title,
                message=f"{rule.description} Applied to {slug}.html.",
                status=ReportStatus.APPLIED,
            ),
        )
