"""Commit history traversal."""

import logging
from typing import Iterator, Optional, Set

from sgit.errors import BrokenChainError, CommitNotFoundError
from sgit.storage import Commit, CommitBuilder

logger = logging.getLogger(__name__)


class HistoryWalker:
    """Walks the commit chain from head to root, newest first.

    Each call to walk() resolves the head once and then only follows parent
    links, so a concurrently advancing HEAD does not affect a walk in
    progress.
    """

    def __init__(self, commit_builder: CommitBuilder):
        self.commit_builder = commit_builder

    def walk(
        self,
        start: Optional[str] = None,
        max_count: Optional[int] = None,
    ) -> Iterator[Commit]:
        """Yield commits from start (default: current head) to the root.

        Args:
            start: Commit hash to start from instead of HEAD
            max_count: Stop after this many commits

        Raises:
            CommitNotFoundError: If the starting commit cannot be read
            BrokenChainError: If a parent link cannot be resolved or loops
        """
        commit_hash = start if start is not None else self.commit_builder.current_head()
        if commit_hash is None:
            return

        seen: Set[str] = set()
        child: Optional[Commit] = None
        yielded = 0

        while commit_hash is not None:
            if max_count is not None and yielded >= max_count:
                return

            if commit_hash in seen:
                raise BrokenChainError(f"History loops back to commit {commit_hash}")
            seen.add(commit_hash)

            try:
                commit = self.commit_builder.read_commit(commit_hash)
            except CommitNotFoundError as e:
                if child is None:
                    raise
                raise BrokenChainError(
                    f"Broken history: parent {commit_hash} of commit {child.hash} "
                    f"cannot be read ({e.message})"
                ) from e

            logger.debug("Walked to commit %s", commit.hash)
            yield commit
            yielded += 1
            child = commit
            commit_hash = commit.parent
