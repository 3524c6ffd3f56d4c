"""
API endpoint tests for the Site Editor.

Each test runs against its own temporary pages directory and feedback log.
"""

import inspect

import pytest


@pytest.fixture
def home(client, sample_page):
    """Client with a saved 'home' page."""
    response = client.put("/pages/home", json={"content": sample_page})
    assert response.status_code == 200
    return client


class TestInfoEndpoints:
    """Tests for info endpoints."""

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Site Editor API"

    def test_health_endpoint(self, home):
        response = home.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["page_count"] == 1
        assert data["feedback_count"] == 0
        assert data["rule_count"] == 4


class TestPageEndpoints:
    """Tests for page management."""

    def test_create_and_list(self, client):
        response = client.post("/pages", json={"name": "About"})
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "about"
        assert data["title"] == "about"

        response = client.get("/pages")
        assert response.json() == [{"slug": "about", "title": "about"}]

    def test_create_duplicate(self, client):
        client.post("/pages", json={"name": "about"})
        response = client.post("/pages", json={"name": "about"})
        assert response.status_code == 409

    def test_create_invalid_name(self, client):
        response = client.post("/pages", json={"name": "not valid"})
        assert response.status_code == 400

    def test_get_page(self, home, sample_page):
        response = home.get("/pages/home")
        assert response.status_code == 200
        data = response.json()
        assert data["content"] == sample_page
        assert data["title"] == "Home"

    def test_get_missing_page(self, client):
        response = client.get("/pages/missing")
        assert response.status_code == 404

    def test_get_invalid_slug(self, client):
        response = client.get("/pages/bad.name")
        assert response.status_code == 400

    def test_save_overwrites(self, home):
        response = home.put("/pages/home", json={"content": "<p>replaced</p>"})
        assert response.status_code == 200
        assert home.get("/pages/home").json()["content"] == "<p>replaced</p>"

    def test_undecodable_page(self, home, tmp_path):
        """A page with invalid UTF-8 is listed without a title and rejected on read."""
        (tmp_path / "pages" / "broken.html").write_bytes(b"<title>\xff</title>")

        response = home.get("/pages")
        assert response.status_code == 200
        assert {"slug": "broken", "title": None} in response.json()

        response = home.get("/pages/broken")
        assert response.status_code == 422
        assert "UTF-8" in response.json()["detail"]

        response = home.post("/feedback", json={"text": "too slow", "target_page": "broken"})
        assert response.status_code == 200
        assert response.json()["reports"][0]["error"] == "TargetMissingError"


class TestFeedbackEndpoint:
    """Tests for feedback submission."""

    def test_apply_then_skip(self, home):
        payload = {"text": "Add a contact button, and the page is slow", "target_page": "home"}

        first = home.post("/feedback", json=payload).json()
        second = home.post("/feedback", json=payload).json()

        assert first["persisted"] is True
        assert [(r["type"], r["status"]) for r in first["reports"]] == [
            ("cta", "applied"),
            ("performance", "applied"),
        ]
        assert [r["status"] for r in second["reports"]] == ["skipped", "skipped"]

        content = home.get("/pages/home").json()["content"]
        assert content.count('data-suggestion="cta"') == 1
        assert content.count('data-suggestion="performance"') == 1

    def test_without_target(self, home, sample_page):
        response = home.post("/feedback", json={"text": "slow page, please improve speed"})
        data = response.json()

        assert response.status_code == 200
        assert data["persisted"] is True
        assert [(r["type"], r["status"]) for r in data["reports"]] == [("performance", "note")]
        assert home.get("/pages/home").json()["content"] == sample_page

    def test_empty_text(self, home):
        response = home.post("/feedback", json={"text": "   ", "target_page": "home"})
        data = response.json()

        assert response.status_code == 200
        assert data["persisted"] is False
        assert data["reports"][0]["error"] == "ValidationError"
        assert home.get("/feedback").json() == []

    def test_invalid_target(self, client):
        response = client.post("/feedback", json={"text": "slow", "target_page": "../secret"})
        assert response.status_code == 400

    def test_missing_text(self, client):
        response = client.post("/feedback", json={"target_page": "home"})
        assert response.status_code == 422

    def test_submit_runs_off_event_loop(self, home):
        """Feedback submission does blocking file I/O, so it must not be a coroutine."""
        import src.api.main as api_main

        assert not inspect.iscoroutinefunction(api_main.submit_feedback)
        assert not inspect.iscoroutinefunction(api_main.get_page)
        response = home.post("/feedback", json={"text": "too slow", "target_page": "home"})
        assert response.json()["reports"][0]["status"] == "applied"

    def test_feedback_log(self, home):
        home.post("/feedback", json={"text": "first", "target_page": "home"})
        home.post("/feedback", json={"text": "second"})

        entries = home.get("/feedback").json()
        assert [e["text"] for e in entries] == ["second", "first"]

        entries = home.get("/feedback?page=home").json()
        assert [e["text"] for e in entries] == ["first"]

        assert home.get("/health").json()["feedback_count"] == 2


class TestSuggestionEndpoints:
    """Tests for rule listing and preview."""

    def test_list_rules(self, client):
        rules = client.get("/suggestions/rules").json()
        assert [r["type"] for r in rules] == ["cta", "performance", "readability", "mobile"]

    def test_preview(self, home, sample_page):
        rules = home.get("/suggestions?q=hard+to+read+on+mobile").json()
        assert [r["type"] for r in rules] == ["readability", "mobile"]
        assert home.get("/feedback").json() == []
        assert home.get("/pages/home").json()["content"] == sample_page

    def test_preview_requires_query(self, client):
        response = client.get("/suggestions")
        assert response.status_code == 422
