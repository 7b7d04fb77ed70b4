"""Plain-text digest of commits for the ``analyze`` command."""

from __future__ import annotations

from ..core.models import CommitSummary


def digest_commits(commits: list[CommitSummary]) -> str:
    """One ``- <hash>: <subject>`` line per commit."""
    if not commits:
        return "No commits to summarize."
    lines = []
    for c in commits:
        subject = c.message.split("\n", 1)[0]
        lines.append(f"- {c.hash}: {subject}")
    return "\n".join(lines)
