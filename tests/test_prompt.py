"""Tests for user-prompt synthesis."""

from __future__ import annotations

from gitstory.core.models import (
    ChangeAction,
    CommitStats,
    CommitSummary,
    FileChange,
    Platform,
    SummaryRequest,
)
from gitstory.llm.platforms import CODE_ANALYSIS_INSTRUCTIONS, platform_instructions
from gitstory.llm.prompt import MAX_PREVIEW_LINES, TRUNCATION_MARKER, build_prompt


def _commit(hash_: str, message: str, files: list[FileChange] | None = None) -> CommitSummary:
    files = files or []
    adds = sum(f.additions for f in files)
    dels = sum(f.deletions for f in files)
    return CommitSummary(
        hash=hash_,
        author="Ada Lovelace",
        date="2024-05-01T10:00:00+00:00",
        message=message,
        files=files,
        stats=CommitStats(
            total_files=len(files),
            total_lines=adds + dels,
            additions=adds,
            deletions=dels,
            languages=["Python", "Go"] if files else [],
            primary_language="Python" if files else "",
        ),
    )


def _file(path: str, content: str = "ADDITIONS:\n+x = 1", adds: int = 1, dels: int = 0) -> FileChange:
    return FileChange(path=path, status=ChangeAction.MODIFIED, additions=adds, deletions=dels, content=content)


class TestBuildPrompt:
    def test_deterministic(self):
        request = SummaryRequest(commits=[_commit("abc1234", "Fix bug", [_file("a.py")])])
        assert build_prompt(request) == build_prompt(request)

    def test_commit_order_is_preserved(self):
        request = SummaryRequest(commits=[_commit("1111111", "first"), _commit("2222222", "second")])
        prompt = build_prompt(request)
        assert prompt.index("=== Commit 1 ===") < prompt.index("=== Commit 2 ===")
        assert prompt.index("first") < prompt.index("second")

    def test_header_counts_commits(self):
        request = SummaryRequest(commits=[_commit("1111111", "a"), _commit("2222222", "b")])
        assert "Analyzing 2 git commit(s) with code changes:" in build_prompt(request)

    def test_user_context_first(self):
        request = SummaryRequest(commits=[_commit("1111111", "a")], user_context="Sprint 23")
        assert build_prompt(request).startswith("Project Context: Sprint 23\n\n")

    def test_no_context_line_when_empty(self):
        request = SummaryRequest(commits=[_commit("1111111", "a")])
        assert "Project Context" not in build_prompt(request)

    def test_commit_details(self):
        request = SummaryRequest(
            commits=[_commit("abc1234", "Add parser", [_file("a.py", adds=3, dels=2)])]
        )
        prompt = build_prompt(request)
        assert "• Author: Ada Lovelace" in prompt
        assert "• Date: 2024-05-01T10:00:00+00:00" in prompt
        assert "• Message: Add parser" in prompt
        assert "• Files changed: 1" in prompt
        assert "• Lines: +3 -2" in prompt
        assert "• Primary language: Python" in prompt
        assert "• Languages: Python, Go" in prompt
        assert "  - a.py (Modified) [+3 -2]" in prompt
        assert "    Code changes:" in prompt
        assert "    +x = 1" in prompt

    def test_no_stats_block_without_files(self):
        prompt = build_prompt(SummaryRequest(commits=[_commit("abc1234", "Empty")]))
        assert "Files changed" not in prompt
        assert "File changes" not in prompt

    def test_content_preview_is_truncated(self):
        body = "ADDITIONS:\n" + "\n".join(f"+line {i}" for i in range(40))
        prompt = build_prompt(SummaryRequest(commits=[_commit("abc1234", "Big", [_file("a.py", body)])]))
        assert "+line 13" in prompt
        assert "+line 14" not in prompt
        assert TRUNCATION_MARKER in prompt

    def test_short_content_not_truncated(self):
        body = "\n".join(f"+l{i}" for i in range(MAX_PREVIEW_LINES))
        prompt = build_prompt(SummaryRequest(commits=[_commit("abc1234", "Ok", [_file("a.py", body)])]))
        assert TRUNCATION_MARKER not in prompt

    def test_ends_with_platform_guidance(self):
        request = SummaryRequest(commits=[_commit("1111111", "a")], platform=Platform.BLOG)
        prompt = build_prompt(request)
        assert prompt.endswith(
            "Please create a summary following these guidelines:"
            + platform_instructions(Platform.BLOG)
            + CODE_ANALYSIS_INSTRUCTIONS
        )

    def test_empty_request(self):
        prompt = build_prompt(SummaryRequest())
        assert "Analyzing 0 git commit(s)" in prompt
