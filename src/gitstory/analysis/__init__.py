"""Diff extraction, language classification and commit digests."""

from .diff_extractor import DiffExtractor, RootCommitPolicy, aggregate_stats
from .digest import digest_commits
from .languages import classify

__all__ = [
    "DiffExtractor",
    "RootCommitPolicy",
    "aggregate_stats",
    "classify",
    "digest_commits",
]
