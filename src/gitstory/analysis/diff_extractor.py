"""Per-commit file changes and aggregate statistics.

The extractor diffs each commit against its first parent, keeps only
the changed lines of every patch, and tallies languages so the prompt
can say what the commit was mostly about.
"""

from __future__ import annotations

import logging
from enum import Enum

from ..core.models import (
    ChangeAction,
    CommitRecord,
    CommitStats,
    CommitSummary,
    FileChange,
    RawChange,
)
from ..errors import NoParentError
from ..git.backend import RepositoryBackend, changed_lines
from .languages import classify

logger = logging.getLogger("gitstory.analysis.diff")


class RootCommitPolicy(str, Enum):
    """What to do with a commit that has no parent."""
    EMPTY_TREE = "empty-tree"  # diff against the empty tree: every file is Added
    SKIP = "skip"              # keep the commit, report no file changes
    STRICT = "strict"          # raise NoParentError


def extract_changed_lines(patch: str) -> str:
    """Reduce a unified diff to its changed lines.

    Deleted lines come first under ``DELETIONS:``, added lines after
    under ``ADDITIONS:``; each keeps its ``-`` / ``+`` marker.  Context
    lines and ``---`` / ``+++`` file headers are dropped.
    """
    additions: list[str] = []
    deletions: list[str] = []
    for line in changed_lines(patch):
        if line.startswith("+"):
            additions.append(line)
        else:
            deletions.append(line)

    parts: list[str] = []
    if deletions:
        parts.append("DELETIONS:\n" + "\n".join(deletions) + "\n")
    if additions:
        parts.append("ADDITIONS:\n" + "\n".join(additions))
    return "\n".join(parts).strip()


def to_file_change(change: RawChange) -> FileChange:
    path = change.from_path if change.action is ChangeAction.DELETED else change.to_path
    return FileChange(
        path=path,
        status=change.action,
        additions=change.additions,
        deletions=change.deletions,
        content=extract_changed_lines(change.patch),
    )


def aggregate_stats(files: list[FileChange]) -> CommitStats:
    """Sum line counts and pick the primary language.

    The language tally is kept in first-seen order; on equal counts the
    language seen first is primary.
    """
    additions = sum(f.additions for f in files)
    deletions = sum(f.deletions for f in files)

    tally: dict[str, int] = {}
    for f in files:
        lang = classify(f.path)
        if lang:
            tally[lang] = tally.get(lang, 0) + 1

    primary, best = "", 0
    for lang, count in tally.items():
        if count > best:
            primary, best = lang, count

    return CommitStats(
        total_files=len(files),
        total_lines=additions + deletions,
        additions=additions,
        deletions=deletions,
        languages=list(tally),
        primary_language=primary,
    )


class DiffExtractor:
    """Turn ``CommitRecord`` objects into ``CommitSummary`` objects."""

    def __init__(
        self,
        backend: RepositoryBackend,
        root_policy: RootCommitPolicy | str = RootCommitPolicy.EMPTY_TREE,
    ) -> None:
        self.backend = backend
        self.root_policy = RootCommitPolicy(root_policy)

    def file_changes(self, commit: CommitRecord) -> list[FileChange]:
        """Changes introduced by *commit* relative to its first parent."""
        if commit.parents:
            parent_tree = self.backend.parent_of(commit, 0).tree
        elif self.root_policy is RootCommitPolicy.EMPTY_TREE:
            parent_tree = None
        elif self.root_policy is RootCommitPolicy.SKIP:
            logger.warning("Skipping diff of root commit %s", commit.short_hash)
            return []
        else:
            raise NoParentError(commit.hexsha)

        raw = self.backend.diff_trees(parent_tree, commit.tree)
        return [to_file_change(change) for change in raw]

    def summarize(self, commit: CommitRecord) -> CommitSummary:
        files = self.file_changes(commit)
        stats = aggregate_stats(files)
        logger.debug(
            "%s: %d file(s), +%d -%d, primary=%s",
            commit.short_hash, stats.total_files, stats.additions,
            stats.deletions, stats.primary_language or "-",
        )
        return CommitSummary(
            hash=commit.short_hash,
            author=commit.author_name,
            date=commit.authored_at.isoformat(),
            message=commit.message,
            files=files,
            stats=stats,
        )

    def summarize_commits(self, commits: list[CommitRecord]) -> list[CommitSummary]:
        """Summaries for *commits*, in the same order.

        Any failure aborts the whole batch; no partial list is returned.
        """
        return [self.summarize(c) for c in commits]
