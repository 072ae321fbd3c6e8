"""Core engine layer for SGit.

This module provides the business logic for version control operations:
staging, locking, history traversal, line diffs, and the repository
context that ties them together.
"""

from sgit.core.diff_engine import ChangeKind, DiffChunk, DiffEngine
from sgit.core.history import HistoryWalker
from sgit.core.lock import RepositoryLock
from sgit.core.repository import (
    FileChange,
    FileStatus,
    Repository,
    ShowResult,
    StatusReport,
)
from sgit.core.staging import StagingManager

__all__ = [
    "ChangeKind",
    "DiffChunk",
    "DiffEngine",
    "HistoryWalker",
    "RepositoryLock",
    "FileChange",
    "FileStatus",
    "Repository",
    "ShowResult",
    "StatusReport",
    "StagingManager",
]
