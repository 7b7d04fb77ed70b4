"""Bounded, ordered walks over commit history."""

from __future__ import annotations

import logging

from ..core.models import CommitRecord, RepoInfo
from ..errors import BranchNotFoundError, RepoAccessError
from .ancestry import merge_base
from .backend import RepositoryBackend

logger = logging.getLogger("gitstory.git.history")

# Branch names tried, in order, when the base branch is "auto".
DEFAULT_BRANCH_CANDIDATES = ("main", "master")


class CommitHistoryWalker:
    """Produce newest-first commit sequences starting at HEAD."""

    def __init__(self, backend: RepositoryBackend) -> None:
        self.backend = backend

    def list_commits(self, n: int) -> list[CommitRecord]:
        """Return up to *n* commits from HEAD, HEAD included."""
        if n <= 0:
            return []
        head_sha, _ = self.backend.head()
        commits = list(self.backend.log(head_sha, limit=n))
        logger.debug("Listed %d commit(s) from %s", len(commits), head_sha[:7])
        return commits

    def list_unique_commits(self, base_branch: str, n: int) -> list[CommitRecord]:
        """Return up to *n* commits on HEAD that are not in *base_branch*.

        The walk stops at the merge-base of HEAD and the base branch,
        which is excluded, or after *n* commits.
        """
        head_sha, _ = self.backend.head()
        base_sha = self.backend.resolve_branch(base_branch)
        stop_at = merge_base(self.backend, head_sha, base_sha)

        commits: list[CommitRecord] = []
        if n <= 0:
            return commits
        for commit in self.backend.log(head_sha):
            if commit.hexsha == stop_at or len(commits) >= n:
                break
            commits.append(commit)
        logger.debug(
            "Listed %d commit(s) unique to HEAD vs '%s' (merge-base %s)",
            len(commits), base_branch, stop_at[:7],
        )
        return commits

    def current_branch(self) -> str:
        _, branch = self.backend.head()
        return branch

    def detect_default_branch(self) -> str:
        """Guess the repository's main line: main, master, else the first branch."""
        found = self.backend.branches()
        for candidate in DEFAULT_BRANCH_CANDIDATES:
            if candidate in found:
                return candidate
        if found:
            return found[0]
        raise BranchNotFoundError("auto", "no branches found in the repository")

    def repo_info(self) -> RepoInfo:
        """Collect the facts shown by ``gitstory status``.

        A repository without commits reports no branch and a zero count.
        """
        info = RepoInfo(path=self.backend.path, remote_url=self.backend.remote_url())
        try:
            head_sha, branch = self.backend.head()
        except RepoAccessError as exc:
            logger.debug("No HEAD commit: %s", exc)
            return info
        info.current_branch = branch
        info.commit_count = sum(1 for _ in self.backend.log(head_sha))
        return info
