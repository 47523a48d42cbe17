"""Tests for porcelain status parsing and categorisation."""

from gitglass.git.models import FileChange, StatusCategory
from gitglass.git.status_parser import parse_status


class TestScenarios:
    def test_worktree_modified(self):
        status = parse_status(" M foo.txt\n")
        assert status.modified == ["foo.txt"]
        assert status.staged == []

    def test_added_is_staged(self):
        assert parse_status("A  bar.txt\n").staged == ["bar.txt"]

    def test_untracked(self):
        assert parse_status("?? baz.txt\n").untracked == ["baz.txt"]

    def test_clean_stream(self):
        status = parse_status("")
        assert status.is_clean
        assert status.as_dict() == {
            "staged": [], "modified": [], "untracked": [], "deleted": [],
        }


class TestClassification:
    def test_full_sample(self, sample_status_output):
        status = parse_status(sample_status_output)
        assert status.staged == ["staged.py", "both.py", "bar.txt"]
        assert status.modified == ["foo.txt"]
        assert status.deleted == ["gone.txt", "removed.txt"]
        assert status.untracked == ["baz.txt"]

    def test_every_path_in_exactly_one_category(self, sample_status_output):
        status = parse_status(sample_status_output)
        buckets = status.as_dict().values()
        paths = [p for bucket in buckets for p in bucket]
        assert len(paths) == len(set(paths)) == len(status.changes)

    def test_index_and_worktree_kept_independently(self):
        change = parse_status("MM both.py\n").changes[0]
        assert change.index == "M"
        assert change.worktree == "M"
        assert change.category is StatusCategory.STAGED

    def test_worktree_m_with_other_index_char(self):
        # index-side M only counts as staged in the first column
        assert FileChange("x", "D", "M").category is StatusCategory.MODIFIED

    def test_added_then_deleted_in_worktree(self):
        assert parse_status("AD tmp.txt\n").staged == ["tmp.txt"]

    def test_rename_falls_back_to_staged(self):
        status = parse_status("R  old.py -> new.py\n")
        assert status.staged == ["new.py"]
        assert status.changes[0].orig_path == "old.py"

    def test_unmerged_falls_back(self):
        assert parse_status("UU conflict.txt\n").staged == ["conflict.txt"]

    def test_ignored_entries_skipped(self):
        assert parse_status("!! build/\n").is_clean

    def test_path_with_spaces_verbatim(self):
        assert parse_status("?? my file.txt\n").untracked == ["my file.txt"]


class TestNulSeparated:
    def test_basic_entries(self):
        status = parse_status(" M foo.txt\x00A  bar.txt\x00?? baz.txt\x00")
        assert status.modified == ["foo.txt"]
        assert status.staged == ["bar.txt"]
        assert status.untracked == ["baz.txt"]

    def test_rename_consumes_source_field(self):
        status = parse_status("R  new name.py\x00old name.py\x00 M other.py\x00")
        assert [c.path for c in status.changes] == ["new name.py", "other.py"]
        assert status.changes[0].orig_path == "old name.py"

    def test_arrow_in_filename_not_split(self):
        status = parse_status("?? a -> b.txt\x00")
        assert status.untracked == ["a -> b.txt"]
