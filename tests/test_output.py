"""Tests for the JSON shapes and the Rich terminal renderer."""

import json
from datetime import datetime, timedelta, timezone

from rich.console import Console

from gitglass.git.diff_parser import classify_diff
from gitglass.git.models import Branch, Commit, WorkingTreeStatus
from gitglass.git.status_parser import parse_status
from gitglass.output import json_report, terminal


def _commit() -> Commit:
    return Commit(
        full_hash="a3f5c2e9b1d4f6a8c0e2b4d6f8a0c2e4b6d8f0a2",
        author_name="Ada Lovelace",
        author_email="ada@example.com",
        date="2024-03-01T10:15:00+00:00",
        message="Fix parser",
    )


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False)


class TestJsonReport:
    def test_branch_shape(self):
        assert json_report.branch_to_dict(Branch("main", True)) == {
            "name": "main", "current": True,
        }
        remote = json_report.branch_to_dict(Branch("main", remote="origin"))
        assert remote == {"name": "main", "current": False, "remote": "origin"}

    def test_commit_shape(self):
        assert json_report.commit_to_dict(_commit()) == {
            "hash": "a3f5c2e9",
            "fullHash": "a3f5c2e9b1d4f6a8c0e2b4d6f8a0c2e4b6d8f0a2",
            "author": "Ada Lovelace <ada@example.com>",
            "date": "2024-03-01T10:15:00+00:00",
            "message": "Fix parser",
        }

    def test_compact_commit_shape(self):
        (entry,) = json_report.commits_to_list([_commit()], compact=True)
        assert entry == {
            "hash": "a3f5c2e9",
            "author": "Ada Lovelace",
            "date": "2024-03-01T10:15:00+00:00",
            "message": "Fix parser",
        }

    def test_diff_to_dict(self, sample_diff):
        data = json_report.diff_to_dict(classify_diff(sample_diff))
        assert data["files"] == ["hello.py"]
        assert (data["added"], data["removed"]) == (1, 1)
        assert data["lines"][0] == {"type": "header", "text": "diff --git a/hello.py b/hello.py"}

    def test_status_entries(self):
        status = parse_status("R  new.py\x00old.py\x00?? scratch.txt\x00")
        assert json_report.status_entries(status) == [
            {"path": "new.py", "index": "R", "worktree": " ",
             "category": "staged", "origPath": "old.py"},
            {"path": "scratch.txt", "index": "?", "worktree": "?", "category": "untracked"},
        ]

    def test_render_is_json(self):
        text = json_report.render({"success": True, "status": WorkingTreeStatus().as_dict()})
        assert json.loads(text)["status"]["staged"] == []


class TestRelativeTime:
    NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

    def _ago(self, **delta) -> str:
        return (self.NOW - timedelta(**delta)).isoformat()

    def test_just_now(self):
        assert terminal.relative_time(self._ago(seconds=20), self.NOW) == "just now"

    def test_minutes_hours_days(self):
        assert terminal.relative_time(self._ago(minutes=5), self.NOW) == "5 minutes ago"
        assert terminal.relative_time(self._ago(hours=1), self.NOW) == "1 hour ago"
        assert terminal.relative_time(self._ago(days=3), self.NOW) == "3 days ago"

    def test_older_than_a_week(self):
        assert terminal.relative_time("2024-01-02T08:30:00+00:00", self.NOW) == "2024-01-02 08:30"

    def test_unparseable_passthrough(self):
        assert terminal.relative_time("yesterday-ish", self.NOW) == "yesterday-ish"


class TestTerminal:
    def test_branches(self):
        console = _console()
        terminal.render_branches([Branch("main", True), Branch("dev")], console)
        text = console.export_text()
        assert "main" in text and "dev" in text and "*" in text

    def test_commits(self):
        console = _console()
        terminal.render_commits([_commit()], console)
        text = console.export_text()
        assert "a3f5c2e9" in text
        assert "Fix parser" in text

    def test_clean_status(self):
        console = _console()
        terminal.render_status(WorkingTreeStatus(), console)
        assert "clean" in console.export_text()

    def test_status_groups(self):
        console = _console()
        terminal.render_status(parse_status(" M foo.txt\n?? baz.txt\n"), console)
        text = console.export_text()
        assert "Modified (1)" in text
        assert "Untracked (1)" in text
        assert "Staged" not in text

    def test_status_detail(self):
        console = _console()
        terminal.render_status(parse_status("RM new.py\x00old.py\x00"), console, detail=True)
        assert "RM  old.py -> new.py" in console.export_text()

    def test_diff(self, sample_diff):
        console = _console()
        terminal.render_diff(classify_diff(sample_diff), console)
        text = console.export_text()
        assert '+    return f"Hello, {name}!"' in text
        assert "+1" in text and "-1" in text

    def test_empty_diff(self):
        console = _console()
        terminal.render_diff(classify_diff(""), console)
        assert "No differences" in console.export_text()
