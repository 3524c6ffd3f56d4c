"""
Pytest configuration and fixtures for Site Editor tests.
"""

import pytest
from datetime import datetime
from pathlib import Path
from typing import Optional
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


SAMPLE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Home</title>
</head>
<body>
    <h1>Welcome</h1>
</body>
</html>"""


class InMemoryPageStorage:
    """Page store backed by a dict, with switchable failures."""

    def __init__(self, pages: Optional[dict] = None):
        self.pages = dict(pages or {})
        self.writes = []
        self.fail_writes = False
        self.fail_reads = False

    def read(self, slug: str) -> Optional[str]:
        if self.fail_reads:
            raise PermissionError(f"Permission denied: {slug}")
        return self.pages.get(slug)

    def write(self, slug: str, content: str) -> bool:
        if self.fail_writes:
            return False
        self.pages[slug] = content
        self.writes.append(slug)
        return True


FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def fixed_time():
    return FIXED_TIME


@pytest.fixture
def sample_page():
    return SAMPLE_PAGE


@pytest.fixture
def page_store():
    """In-memory page store with a 'home' page."""
    return InMemoryPageStorage({"home": SAMPLE_PAGE})


@pytest.fixture
def feedback_storage(tmp_path):
    """Feedback storage writing to a temp file."""
    from src.feedback.storage import FeedbackStorage
    return FeedbackStorage(tmp_path / "feedback" / "feedback_log.json")


@pytest.fixture
def orchestrator(feedback_storage, page_store):
    """Orchestrator wired to temp feedback storage and in-memory pages."""
    from src.feedback.orchestrator import FeedbackOrchestrator
    return FeedbackOrchestrator(feedback_storage, page_store, clock=lambda: FIXED_TIME)


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Provide a test client for API tests, isolated to temp storage."""
    from fastapi.testclient import TestClient
    import src.api.main as api_main

    monkeypatch.setattr(api_main, "PAGES_DIR", tmp_path / "pages")
    monkeypatch.setattr(api_main, "FEEDBACK_FILE", tmp_path / "feedback_log.json")

    with TestClient(api_main.app) as c:
        yield c
