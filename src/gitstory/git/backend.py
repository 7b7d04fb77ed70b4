"""Read-only repository backends.

``RepositoryBackend`` is the capability the analysis core depends on;
``GitPythonBackend`` implements it on top of a local working copy via
GitPython.  Any other conforming backend (a remote clone, an in-memory
fixture) can be passed in its place.

Usage::

    from gitstory.git.backend import open_repository

    backend = open_repository(".")
    head_sha, branch = backend.head()
    for commit in backend.log(head_sha, limit=5):
        print(commit.short_hash, commit.subject)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from ..core.models import ChangeAction, CommitRecord, RawChange
from ..errors import BranchNotFoundError, NoParentError, NotAGitRepoError, RepoAccessError

logger = logging.getLogger("gitstory.git.backend")

# Object id git reserves for a tree with no entries.
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def changed_lines(patch: str) -> Iterator[str]:
    """Yield the ``+`` / ``-`` lines of a unified diff body.

    ``---`` / ``+++`` file headers before the first hunk are skipped;
    inside a hunk every marked line counts, even one whose content
    itself starts with ``--``.
    """
    in_hunk = False
    for line in patch.split("\n"):
        if line.startswith("@@"):
            in_hunk = True
        elif not in_hunk and line.startswith(("+++", "---")):
            continue
        elif line.startswith(("+", "-")):
            yield line


def patch_stats(patch: str) -> tuple[int, int]:
    """Count added and deleted lines in a unified diff body."""
    additions = deletions = 0
    for line in changed_lines(patch):
        if line.startswith("+"):
            additions += 1
        else:
            deletions += 1
    return additions, deletions


# ══════════════════════════════════════════════════════════════════════════
# Abstract capability
# ══════════════════════════════════════════════════════════════════════════


class RepositoryBackend(ABC):
    """Read-only primitives over a commit graph."""

    path: str = ""

    @abstractmethod
    def head(self) -> tuple[str, str]:
        """Return ``(hexsha, branch_name)`` for HEAD.

        ``branch_name`` is empty when HEAD is detached.  Raises
        ``RepoAccessError`` when the repository has no commits.
        """

    @abstractmethod
    def resolve_branch(self, name: str) -> str:
        """Return the commit hash a local branch points to."""

    @abstractmethod
    def get_commit(self, hexsha: str) -> CommitRecord:
        """Look up a single commit."""

    @abstractmethod
    def log(self, from_hash: str, limit: int | None = None) -> Iterator[CommitRecord]:
        """Iterate commits reachable from *from_hash*, newest first."""

    @abstractmethod
    def diff_trees(self, tree_a: str | None, tree_b: str) -> list[RawChange]:
        """Changes turning *tree_a* into *tree_b* (``None`` = empty tree)."""

    @abstractmethod
    def branches(self) -> list[str]:
        """Names of the local branches."""

    def remote_url(self) -> str:
        """URL of the first configured remote, or ``""``."""
        return ""

    def parent_of(self, commit: CommitRecord, index: int = 0) -> CommitRecord:
        """Return the *index*-th parent of *commit*."""
        if index >= len(commit.parents):
            raise NoParentError(commit.hexsha)
        return self.get_commit(commit.parents[index])


# ══════════════════════════════════════════════════════════════════════════
# GitPython
# ══════════════════════════════════════════════════════════════════════════


class GitPythonBackend(RepositoryBackend):
    """Backend over a local git working copy."""

    def __init__(self, repo) -> None:
        self._repo = repo
        self.path = str(Path(repo.working_tree_dir or repo.git_dir).resolve())

    @classmethod
    def open(cls, path: str | Path) -> GitPythonBackend:
        """Open the repository containing *path* (parents are searched)."""
        from git import InvalidGitRepositoryError, NoSuchPathError, Repo

        try:
            repo = Repo(str(path), search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise NotAGitRepoError(str(path)) from exc
        logger.debug("Opened repository at %s", repo.working_tree_dir)
        return cls(repo)

    # ── References ────────────────────────────────────────────────────

    def head(self) -> tuple[str, str]:
        try:
            sha = self._repo.head.commit.hexsha
        except ValueError as exc:
            raise RepoAccessError(f"repository at {self.path} has no commits yet") from exc
        branch = "" if self._repo.head.is_detached else self._repo.active_branch.name
        return sha, branch

    def resolve_branch(self, name: str) -> str:
        try:
            return self._repo.heads[name].commit.hexsha
        except (IndexError, AttributeError, ValueError) as exc:
            raise BranchNotFoundError(name, str(exc) or "no such local branch") from exc

    def branches(self) -> list[str]:
        return [h.name for h in self._repo.heads]

    def remote_url(self) -> str:
        for remote in self._repo.remotes:
            for url in remote.urls:
                return url
        return ""

    # ── Commits ───────────────────────────────────────────────────────

    def get_commit(self, hexsha: str) -> CommitRecord:
        return self._to_record(self._repo.commit(hexsha))

    def log(self, from_hash: str, limit: int | None = None) -> Iterator[CommitRecord]:
        kwargs = {}
        if limit is not None:
            kwargs["max_count"] = limit
        for commit in self._repo.iter_commits(from_hash, **kwargs):
            yield self._to_record(commit)

    @staticmethod
    def _to_record(commit) -> CommitRecord:
        return CommitRecord(
            hexsha=commit.hexsha,
            author_name=commit.author.name or "",
            author_email=commit.author.email or "",
            authored_at=commit.authored_datetime,
            message=commit.message,
            parents=tuple(p.hexsha for p in commit.parents),
            tree=commit.tree.hexsha,
        )

    # ── Diffs ─────────────────────────────────────────────────────────

    def diff_trees(self, tree_a: str | None, tree_b: str) -> list[RawChange]:
        old = self._repo.tree(tree_a or EMPTY_TREE_SHA)
        new = self._repo.tree(tree_b)
        return [self._to_raw_change(d) for d in old.diff(new, create_patch=True)]

    @staticmethod
    def _to_raw_change(diff) -> RawChange:
        if diff.new_file:
            action = ChangeAction.ADDED
        elif diff.deleted_file:
            action = ChangeAction.DELETED
        elif diff.renamed_file:
            action = ChangeAction.RENAMED
        elif diff.copied_file:
            action = ChangeAction.COPIED
        elif diff.change_type == "T":
            action = ChangeAction.TYPE_CHANGED
        else:
            action = ChangeAction.MODIFIED

        raw = diff.diff or b""
        patch = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        additions, deletions = patch_stats(patch)
        return RawChange(
            action=action,
            from_path=diff.a_path or diff.b_path or "",
            to_path=diff.b_path or diff.a_path or "",
            patch=patch,
            additions=additions,
            deletions=deletions,
        )


def open_repository(path: str | Path = ".") -> GitPythonBackend:
    """Open the git repository containing *path*."""
    return GitPythonBackend.open(path)
