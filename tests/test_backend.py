"""Tests for the GitPython repository backend and patch helpers."""

from __future__ import annotations

import pytest
from git import Repo

from gitstory.core.models import ChangeAction
from gitstory.errors import BranchNotFoundError, NotAGitRepoError, RepoAccessError
from gitstory.git.backend import GitPythonBackend, changed_lines, open_repository, patch_stats


PATCH = """\
--- a/app.py
+++ b/app.py
@@ -1,3 +1,3 @@
 unchanged
-old line
+new line
+---not a header
--- also a deletion
"""


# ---------------------------------------------------------------------------
# Patch helpers
# ---------------------------------------------------------------------------

class TestChangedLines:
    def test_skips_file_headers(self):
        lines = list(changed_lines(PATCH))
        assert "--- a/app.py" not in lines
        assert "+++ b/app.py" not in lines

    def test_keeps_marked_lines_inside_hunk(self):
        assert list(changed_lines(PATCH)) == [
            "-old line",
            "+new line",
            "+---not a header",
            "--- also a deletion",
        ]

    def test_patch_stats(self):
        assert patch_stats(PATCH) == (2, 2)

    def test_empty_patch(self):
        assert patch_stats("") == (0, 0)


# ---------------------------------------------------------------------------
# Opening repositories
# ---------------------------------------------------------------------------

class TestOpen:
    def test_plain_directory_is_rejected(self, tmp_path):
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(NotAGitRepoError) as exc_info:
            open_repository(plain)
        assert exc_info.value.path == str(plain)

    def test_missing_path_is_rejected(self, tmp_path):
        with pytest.raises(NotAGitRepoError):
            open_repository(tmp_path / "does-not-exist")

    def test_subdirectory_finds_repository(self, three_commit_repo):
        sub = three_commit_repo.path / "nested"
        sub.mkdir()
        backend = open_repository(sub)
        assert backend.path == str(three_commit_repo.path.resolve())

    def test_empty_repository_has_no_head(self, tmp_path):
        backend = GitPythonBackend(Repo.init(tmp_path / "empty"))
        with pytest.raises(RepoAccessError):
            backend.head()


# ---------------------------------------------------------------------------
# References and commits
# ---------------------------------------------------------------------------

class TestReferences:
    def test_head_reports_branch(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        sha, branch = backend.head()
        assert branch == "main"
        assert sha == three_commit_repo.repo.head.commit.hexsha

    def test_detached_head_has_empty_branch(self, three_commit_repo):
        repo = three_commit_repo.repo
        repo.git.checkout(repo.head.commit.hexsha)
        _, branch = open_repository(three_commit_repo.path).head()
        assert branch == ""

    def test_resolve_missing_branch(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        with pytest.raises(BranchNotFoundError) as exc_info:
            backend.resolve_branch("nope")
        assert exc_info.value.branch == "nope"

    def test_log_is_newest_first(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        sha, _ = backend.head()
        subjects = [c.subject for c in backend.log(sha)]
        assert subjects == ["Add Go helper", "Add greeting", "Initial commit"]

    def test_record_fields(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        sha, _ = backend.head()
        record = backend.get_commit(sha)
        assert record.short_hash == sha[:7]
        assert record.author_name == "Ada Lovelace"
        assert record.author_email == "ada@example.com"
        assert len(record.parents) == 1
        assert record.authored_at.tzinfo is not None

    def test_remote_url(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        assert backend.remote_url() == ""
        three_commit_repo.repo.create_remote("origin", "https://example.com/demo.git")
        assert backend.remote_url() == "https://example.com/demo.git"


# ---------------------------------------------------------------------------
# Tree diffs
# ---------------------------------------------------------------------------

class TestDiffTrees:
    def test_root_against_empty_tree(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        root = list(backend.log(backend.head()[0]))[-1]
        changes = backend.diff_trees(None, root.tree)
        assert len(changes) == 1
        assert changes[0].action is ChangeAction.ADDED
        assert changes[0].to_path == "app.py"
        assert (changes[0].additions, changes[0].deletions) == (1, 0)

    def test_modification_and_addition(self, three_commit_repo):
        backend = open_repository(three_commit_repo.path)
        second = list(backend.log(backend.head()[0]))[1]
        parent = backend.parent_of(second)
        changes = {c.to_path: c for c in backend.diff_trees(parent.tree, second.tree)}
        assert changes["app.py"].action is ChangeAction.MODIFIED
        assert (changes["app.py"].additions, changes["app.py"].deletions) == (1, 0)
        assert changes["README.md"].action is ChangeAction.ADDED

    def test_deletion(self, repo_builder):
        repo_builder.commit("add", {"gone.txt": "a\nb\n"})
        repo_builder.commit("remove", {"gone.txt": None})
        backend = open_repository(repo_builder.path)
        head = backend.get_commit(backend.head()[0])
        [change] = backend.diff_trees(backend.parent_of(head).tree, head.tree)
        assert change.action is ChangeAction.DELETED
        assert change.from_path == "gone.txt"
        assert (change.additions, change.deletions) == (0, 2)
