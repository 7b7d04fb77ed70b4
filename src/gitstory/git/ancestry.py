"""Merge-base resolution over a repository backend's parent graph."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator

from ..errors import NoCommonAncestorError
from .backend import RepositoryBackend

logger = logging.getLogger("gitstory.git.ancestry")


def _breadth_first(backend: RepositoryBackend, start: str) -> Iterator[str]:
    """Yield every commit reachable from *start* once, in BFS order.

    Nodes are marked when enqueued, so a commit reached through several
    merge paths is visited a single time.
    """
    seen = {start}
    queue = deque([start])
    while queue:
        sha = queue.popleft()
        yield sha
        for parent in backend.get_commit(sha).parents:
            if parent not in seen:
                seen.add(parent)
                queue.append(parent)


def merge_base(backend: RepositoryBackend, hash_a: str, hash_b: str) -> str:
    """Return a common ancestor of *hash_a* and *hash_b*.

    Collects the full ancestry of *hash_a*, then walks *hash_b*'s
    ancestry breadth-first and returns the first member of that set.
    With criss-cross merges there can be several merge-bases; the one
    reached earliest from *hash_b* wins, which is not necessarily the
    unique lowest common ancestor.
    """
    if hash_a == hash_b:
        return hash_a

    ancestors = set(_breadth_first(backend, hash_a))
    for sha in _breadth_first(backend, hash_b):
        if sha in ancestors:
            logger.debug("merge-base(%s, %s) = %s", hash_a[:7], hash_b[:7], sha[:7])
            return sha
    raise NoCommonAncestorError(hash_a, hash_b)
