"""
Tests for the command-line feedback runner.
"""

import sys

import pytest
import src.feedback.runner as runner_module
from src.feedback.runner import FeedbackRunner, main
from src.pages.storage import FilePageStorage


@pytest.fixture
def runner(tmp_path, feedback_storage, sample_page):
    pages = FilePageStorage(tmp_path / "pages")
    pages.write("home", sample_page)
    return FeedbackRunner(feedback_storage=feedback_storage, page_storage=pages)


class TestFeedbackRunner:
    """Tests for FeedbackRunner."""

    def test_submit_applies(self, runner):
        result = runner.submit("the page is slow", "home")
        assert [r.status.value for r in result.reports] == ["applied"]
        assert 'data-suggestion="performance"' in runner.pages.read("home")

    def test_print_result(self, runner, capsys):
        runner.print_result(runner.submit("needs a button"))
        out = capsys.readouterr().out
        assert "[i] Add a call-to-action button (note)" in out

    def test_show_recent(self, runner, capsys):
        runner.submit("first remark", "home")
        runner._show_recent()
        out = capsys.readouterr().out
        assert "first remark" in out
        assert "home" in out


class TestMain:
    """Tests for the CLI entry point."""

    def test_invalid_page(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["runner", "--page", "bad name", "--submit", "slow"])
        assert main() == 2
        assert "letters, digits" in capsys.readouterr().out

    def test_submit(self, runner, monkeypatch, capsys):
        monkeypatch.setattr(runner_module, "FeedbackRunner", lambda: runner)
        monkeypatch.setattr(sys, "argv", ["runner", "--page", "home", "--submit", "hard to read"])

        assert main() == 0
        assert "(applied)" in capsys.readouterr().out

    def test_submit_error_exit_code(self, runner, monkeypatch):
        monkeypatch.setattr(runner_module, "FeedbackRunner", lambda: runner)
        monkeypatch.setattr(sys, "argv", ["runner", "--page", "ghost", "--submit", "slow"])

        assert main() == 1
