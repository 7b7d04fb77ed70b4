"""Exception hierarchy shared by every gitstory layer.

Each error carries the identifiers needed to diagnose it (abbreviated
hash, branch, provider or platform name) both as attributes and in its
message.  The CLI catches ``GitStoryError`` and turns it into an exit
status; everything else propagates.
"""

from __future__ import annotations


class GitStoryError(Exception):
    """Base class for all gitstory failures."""


# ---------------------------------------------------------------------------
# Repository access
# ---------------------------------------------------------------------------

class RepoAccessError(GitStoryError):
    """Opening the repository or resolving HEAD / a branch failed."""


class NotAGitRepoError(RepoAccessError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"not a git repository (or any of the parent directories): {path}"
        )


class BranchNotFoundError(RepoAccessError):
    def __init__(self, branch: str, reason: str = "") -> None:
        self.branch = branch
        msg = f"branch '{branch}' not found"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# Ancestry
# ---------------------------------------------------------------------------

class AncestryError(GitStoryError):
    """Ancestry resolution between two commits failed."""


class NoCommonAncestorError(AncestryError):
    def __init__(self, hash_a: str, hash_b: str) -> None:
        self.hash_a = hash_a
        self.hash_b = hash_b
        super().__init__(
            f"no common ancestor found between {hash_a[:7]} and {hash_b[:7]}"
        )


# ---------------------------------------------------------------------------
# Diffing
# ---------------------------------------------------------------------------

class DiffError(GitStoryError):
    """Computing the changes introduced by a commit failed."""


class NoParentError(DiffError):
    def __init__(self, commit_hash: str) -> None:
        self.short_hash = commit_hash[:7]
        super().__init__(f"commit ({self.short_hash}) has no parent")


# ---------------------------------------------------------------------------
# Providers / platforms
# ---------------------------------------------------------------------------

class ProviderConfigError(GitStoryError):
    """The summarization backend cannot be configured as requested."""


class NoProviderConfiguredError(ProviderConfigError):
    def __init__(self, env_vars: list[str]) -> None:
        self.env_vars = env_vars
        super().__init__(
            "no LLM providers configured. Please set one of: " + ", ".join(env_vars)
        )


class UnsupportedProviderError(ProviderConfigError):
    def __init__(self, provider: str, supported: list[str]) -> None:
        self.provider = provider
        super().__init__(
            f"unsupported provider '{provider}'. Supported: {', '.join(supported)}"
        )


class UnsupportedPlatformError(ProviderConfigError):
    def __init__(self, platform: str, supported: list[str]) -> None:
        self.platform = platform
        super().__init__(
            f"unsupported platform '{platform}'. Supported: {', '.join(supported)}"
        )


class ProviderCallError(GitStoryError):
    """A single summarization call failed (network, auth, empty reply)."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class ProviderNotImplementedError(ProviderCallError):
    def __init__(self, provider: str) -> None:
        super().__init__(provider, f"{provider} isn't yet implemented")
