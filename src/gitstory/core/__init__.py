"""Core data model shared by the git, analysis and llm layers."""

from .models import (  # noqa: F401
    ChangeAction,
    CommitRecord,
    CommitStats,
    CommitSummary,
    FileChange,
    GenerationResult,
    Platform,
    PlatformLimits,
    Provider,
    RawChange,
    RepoInfo,
    SummarizeResult,
    SummaryRequest,
    SummaryResponse,
)
