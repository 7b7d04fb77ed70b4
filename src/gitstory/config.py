"""Run configuration for the gitstory pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .analysis.diff_extractor import RootCommitPolicy
from .core.models import Platform
from .llm.platforms import normalize_platform

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_COMMIT_COUNT = 5
DEFAULT_BASE_BRANCH = "main"
AUTO_BRANCH = "auto"
DEFAULT_PLATFORM = "technical"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0


@dataclass
class GitStoryConfig:
    """Options for one gitstory run.  Click options map onto these fields."""

    repo_path: Path = field(default_factory=Path.cwd)
    commit_count: int = DEFAULT_COMMIT_COUNT
    unique: bool = False
    base_branch: str = DEFAULT_BASE_BRANCH
    platform: str = DEFAULT_PLATFORM
    provider: str | None = None
    model: str | None = None
    temperature: float = DEFAULT_TEMPERATURE
    user_context: str = ""
    output_path: Path | None = None
    root_commit_policy: str = RootCommitPolicy.EMPTY_TREE.value
    timeout: float = DEFAULT_TIMEOUT

    # ------------------------------------------------------------------
    # Normalized views
    # ------------------------------------------------------------------
    @property
    def count(self) -> int:
        """Commit count; anything below 1 falls back to the default."""
        return self.commit_count if self.commit_count >= 1 else DEFAULT_COMMIT_COUNT

    @property
    def detect_base_branch(self) -> bool:
        """True when the base branch should be detected from the repository."""
        return self.base_branch.strip().lower() in ("", AUTO_BRANCH)

    @property
    def platform_enum(self) -> Platform:
        return normalize_platform(self.platform)

    @property
    def root_policy(self) -> RootCommitPolicy:
        return RootCommitPolicy(self.root_commit_policy)
