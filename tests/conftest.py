"""Shared fixtures: throwaway git repositories and an in-memory backend."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

import pytest
from git import Actor, Repo

from gitstory.core.models import CommitRecord, RawChange
from gitstory.errors import BranchNotFoundError, RepoAccessError
from gitstory.git.backend import RepositoryBackend

AUTHOR = Actor("Ada Lovelace", "ada@example.com")


# ---------------------------------------------------------------------------
# Real repositories (GitPython)
# ---------------------------------------------------------------------------

class RepoBuilder:
    """Build commits in a fresh repository under ``tmp_path``.

    The first commit lands on a branch renamed to ``main`` regardless of
    the local git default.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.repo = Repo.init(path)
        self._has_commits = False

    def commit(self, message: str, files: dict[str, str | None]) -> str:
        """Write (or, for ``None``, delete) *files* and commit them."""
        for rel, content in files.items():
            if content is None:
                self.repo.index.remove([rel], working_tree=True)
                continue
            target = self.path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            self.repo.index.add([rel])
        commit = self.repo.index.commit(message, author=AUTHOR, committer=AUTHOR)
        if not self._has_commits:
            self.repo.git.branch("-M", "main")
            self._has_commits = True
        return commit.hexsha

    def branch(self, name: str) -> None:
        self.repo.git.checkout("-b", name)

    def checkout(self, name: str) -> None:
        self.repo.git.checkout(name)


@pytest.fixture
def repo_builder(tmp_path) -> RepoBuilder:
    return RepoBuilder(tmp_path / "repo")


@pytest.fixture
def three_commit_repo(repo_builder) -> RepoBuilder:
    """main: add app.py → extend app.py + add README.md → add utils.go."""
    repo_builder.commit("Initial commit", {"app.py": "print('hello')\n"})
    repo_builder.commit(
        "Add greeting\n\nLonger body text.",
        {
            "app.py": "print('hello')\nprint('world')\n",
            "README.md": "# Demo\n",
        },
    )
    repo_builder.commit("Add Go helper", {"utils.go": "package main\n\nfunc Add() {}\n"})
    return repo_builder


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

class MemoryBackend(RepositoryBackend):
    """Parent graph held in dicts; trees and diffs are supplied by tests."""

    def __init__(self) -> None:
        self.path = "/memory"
        self.commits: dict[str, CommitRecord] = {}
        self.heads: dict[str, str] = {}
        self.diffs: dict[tuple[str | None, str], list[RawChange]] = {}
        self.current = ""
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def add(self, sha: str, *parents: str, message: str = "", branch: str | None = None) -> str:
        self._clock += timedelta(minutes=1)
        self.commits[sha] = CommitRecord(
            hexsha=sha,
            author_name="Test",
            authored_at=self._clock,
            message=message or f"commit {sha}",
            parents=tuple(parents),
            tree=f"tree-{sha}",
        )
        if branch:
            self.heads[branch] = sha
            self.current = branch
        return sha

    # RepositoryBackend

    def head(self) -> tuple[str, str]:
        if not self.current:
            raise RepoAccessError("no commits")
        return self.heads[self.current], self.current

    def resolve_branch(self, name: str) -> str:
        try:
            return self.heads[name]
        except KeyError:
            raise BranchNotFoundError(name) from None

    def get_commit(self, hexsha: str) -> CommitRecord:
        return self.commits[hexsha]

    def log(self, from_hash: str, limit: int | None = None) -> Iterator[CommitRecord]:
        # Newest first by author time, over everything reachable.
        seen, stack = set(), [from_hash]
        while stack:
            sha = stack.pop()
            if sha not in seen:
                seen.add(sha)
                stack.extend(self.commits[sha].parents)
        ordered = sorted((self.commits[s] for s in seen), key=lambda c: c.authored_at, reverse=True)
        return iter(ordered[:limit] if limit is not None else ordered)

    def diff_trees(self, tree_a: str | None, tree_b: str) -> list[RawChange]:
        return self.diffs.get((tree_a, tree_b), [])

    def branches(self) -> list[str]:
        return list(self.heads)


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()
