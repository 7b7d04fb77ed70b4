"""Render commit summaries into a provider-agnostic user prompt."""

from __future__ import annotations

from ..core.models import CommitSummary, SummaryRequest
from .platforms import CODE_ANALYSIS_INSTRUCTIONS, platform_instructions

MAX_PREVIEW_LINES = 15
TRUNCATION_MARKER = "... (truncated)"


def _content_preview(content: str) -> list[str]:
    """Non-empty lines of *content*, capped at ``MAX_PREVIEW_LINES``."""
    lines = [line for line in content.split("\n") if line]
    if len(lines) > MAX_PREVIEW_LINES:
        return lines[:MAX_PREVIEW_LINES] + [TRUNCATION_MARKER]
    return lines


def _render_commit(index: int, commit: CommitSummary) -> list[str]:
    out = [
        f"=== Commit {index} ===",
        f"• Author: {commit.author}",
        f"• Date: {commit.date}",
        f"• Message: {commit.message}",
    ]

    stats = commit.stats
    if stats.total_files > 0:
        out.append(f"• Files changed: {stats.total_files}")
        out.append(f"• Lines: +{stats.additions} -{stats.deletions}")
        if stats.primary_language:
            out.append(f"• Primary language: {stats.primary_language}")
        if len(stats.languages) > 1:
            out.append(f"• Languages: {', '.join(stats.languages)}")

    if commit.files:
        out.append("• File changes:")
        for f in commit.files:
            line = f"  - {f.path} ({f.status.value})"
            if f.additions > 0 or f.deletions > 0:
                line += f" [+{f.additions} -{f.deletions}]"
            out.append(line)
            if f.content:
                out.append("    Code changes:")
                out.extend(f"    {l}" for l in _content_preview(f.content))
                out.append("")

    out.append("")
    return out


def build_prompt(request: SummaryRequest) -> str:
    """Build the user prompt for *request*.

    Pure and deterministic: the same request always renders to the same
    text, and commits appear in the order given.
    """
    lines: list[str] = []
    if request.user_context:
        lines.append(f"Project Context: {request.user_context}")
        lines.append("")

    lines.append(f"Analyzing {len(request.commits)} git commit(s) with code changes:")
    lines.append("")

    for i, commit in enumerate(request.commits, start=1):
        lines.extend(_render_commit(i, commit))

    body = "\n".join(lines) + "\n"
    return (
        body
        + "Please create a summary following these guidelines:"
        + platform_instructions(request.platform)
        + CODE_ANALYSIS_INSTRUCTIONS
    )
