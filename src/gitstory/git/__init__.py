"""Version-control access: backends, merge-base and history walks."""

from .ancestry import merge_base
from .backend import GitPythonBackend, RepositoryBackend, open_repository
from .history import CommitHistoryWalker

__all__ = [
    "CommitHistoryWalker",
    "GitPythonBackend",
    "RepositoryBackend",
    "merge_base",
    "open_repository",
]
