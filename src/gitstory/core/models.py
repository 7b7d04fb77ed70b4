"""Pydantic models for commit history, diffs and summaries.

These models are the intermediate representation between the version
control backend and the prompt synthesizer.  The walker yields
``CommitRecord`` objects, the diff extractor turns them into
``CommitSummary`` objects, and a ``SummaryRequest`` bundles those for a
summarization provider.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChangeAction(str, Enum):
    """How a file changed between two trees."""
    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    RENAMED = "Renamed"
    COPIED = "Copied"
    TYPE_CHANGED = "TypeChanged"


class Provider(str, Enum):
    """Summarization backends, in auto-detection priority order."""
    OPENAI = "openai"
    GEMINI = "gemini"
    CLAUDE = "claude"


class Platform(str, Enum):
    """Target audiences for a generated summary."""
    BLOG = "blog"
    TWITTER = "twitter"
    LINKEDIN = "linkedin"
    TECHNICAL = "technical"
    NOTE = "note"


class PlatformLimits(BaseModel):
    """Length thresholds a summary is checked against."""
    model_config = ConfigDict(frozen=True)

    min_words: int = 0
    max_words: int = 1000
    max_chars: int = 5000


PLATFORM_LIMITS: dict[Platform, PlatformLimits] = {
    Platform.TWITTER: PlatformLimits(min_words=0, max_words=40, max_chars=280),
    Platform.LINKEDIN: PlatformLimits(min_words=20, max_words=400, max_chars=3000),
    Platform.BLOG: PlatformLimits(min_words=100, max_words=800, max_chars=5000),
    Platform.TECHNICAL: PlatformLimits(min_words=50, max_words=600, max_chars=4000),
    Platform.NOTE: PlatformLimits(min_words=0, max_words=400, max_chars=2000),
}
DEFAULT_LIMITS = PlatformLimits()


# ---------------------------------------------------------------------------
# Version-control records
# ---------------------------------------------------------------------------

class CommitRecord(BaseModel):
    """Read-only view of a commit as exposed by a repository backend."""
    model_config = ConfigDict(frozen=True)

    hexsha: str
    author_name: str = ""
    author_email: str = ""
    authored_at: datetime
    message: str = ""
    parents: tuple[str, ...] = ()
    tree: str = ""

    @property
    def short_hash(self) -> str:
        return self.hexsha[:7]

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]


class RawChange(BaseModel):
    """One entry of a tree diff, before it is resolved to a ``FileChange``."""
    model_config = ConfigDict(frozen=True)

    action: ChangeAction
    from_path: str = ""
    to_path: str = ""
    patch: str = ""
    additions: int = 0
    deletions: int = 0


class RepoInfo(BaseModel):
    """Basic facts about a working copy (``gitstory status``)."""
    path: str
    is_git_repo: bool = True
    current_branch: str = ""
    remote_url: str = ""
    commit_count: int = 0


# ---------------------------------------------------------------------------
# Per-commit analysis
# ---------------------------------------------------------------------------

class FileChange(BaseModel):
    """A single file modified by a commit."""
    model_config = ConfigDict(frozen=True)

    path: str
    status: ChangeAction
    additions: int = 0
    deletions: int = 0
    content: str = ""  # changed lines only, grouped DELETIONS / ADDITIONS


class CommitStats(BaseModel):
    """Aggregate line and language statistics for one commit."""
    model_config = ConfigDict(frozen=True)

    total_files: int = 0
    total_lines: int = 0
    additions: int = 0
    deletions: int = 0
    languages: list[str] = Field(default_factory=list)
    primary_language: str = ""

    @model_validator(mode="after")
    def check_invariants(self) -> CommitStats:
        if self.total_lines != self.additions + self.deletions:
            raise ValueError("total_lines must equal additions + deletions")
        if len(set(self.languages)) != len(self.languages):
            raise ValueError("languages must not contain duplicates")
        if self.primary_language and self.primary_language not in self.languages:
            raise ValueError("primary_language must be one of languages")
        return self


class CommitSummary(BaseModel):
    """Everything the prompt synthesizer needs to know about a commit."""
    model_config = ConfigDict(frozen=True)

    hash: str
    author: str
    date: str
    message: str
    files: list[FileChange] = Field(default_factory=list)
    stats: CommitStats = Field(default_factory=CommitStats)


# ---------------------------------------------------------------------------
# Summarization request / response
# ---------------------------------------------------------------------------

class SummaryRequest(BaseModel):
    """Ordered commit summaries plus the audience they are written for."""
    commits: list[CommitSummary] = Field(default_factory=list)
    platform: Platform = Platform.TECHNICAL
    user_context: str = ""


class SummaryResponse(BaseModel):
    """Text returned by a provider, with platform length checks."""
    summary: str
    platform: Platform

    @property
    def char_count(self) -> int:
        return len(self.summary)

    @property
    def word_count(self) -> int:
        return len(self.summary.split())

    @property
    def limits(self) -> PlatformLimits:
        return PLATFORM_LIMITS.get(self.platform, DEFAULT_LIMITS)

    def meets_requirements(self) -> bool:
        """Check the summary against the platform's length rules.

        Short-form platforms are bounded by characters, long-form ones by
        a word range.
        """
        chars, words = self.char_count, self.word_count
        limits = self.limits
        if self.platform in (Platform.TWITTER, Platform.LINKEDIN):
            return chars <= limits.max_chars
        return limits.min_words <= words <= limits.max_words

    def stats_line(self) -> str:
        status = "✅" if self.meets_requirements() else "⚠️"
        return f"{status} {self.char_count} characters, {self.word_count} words"


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------

class GenerationResult(BaseModel):
    """Result of writing a summary to disk."""
    output_path: Path
    success: bool = True
    error: Optional[str] = None


class SummarizeResult(BaseModel):
    """Everything produced by one ``summarize`` run."""
    provider: Provider
    model: str
    commits: list[CommitSummary] = Field(default_factory=list)
    response: SummaryResponse
    output: Optional[GenerationResult] = None
