"""Repository context tying the storage and core layers together.

A Repository is created at the start of a command, used for exactly one
operation, and discarded. There is no process-wide repository state; the
filesystem under .sgit/ is the only shared state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from sgit.constants import HEAD_FILE, INDEX_FILE, OBJECTS_DIR, SGIT_DIR
from sgit.core.diff_engine import DiffChunk, DiffEngine
from sgit.core.history import HistoryWalker
from sgit.core.lock import RepositoryLock
from sgit.core.staging import StagingManager
from sgit.errors import (
    AlreadyInitializedError,
    BrokenChainError,
    CommitNotFoundError,
    NotARepositoryError,
    NothingToCommitError,
)
from sgit.storage import Commit, CommitBuilder, ObjectStore, StagingEntry
from sgit.storage.records import serialize_entries

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    """How a file in a shown commit relates to the parent commit."""

    FIRST_COMMIT = "first_commit"
    NEW_FILE = "new_file"
    MODIFIED = "modified"


@dataclass(frozen=True)
class FileChange:
    """One file of a shown commit.

    Attributes:
        path: File path as recorded in the commit
        hash: Content hash of the file in this commit
        content: Decoded file content
        status: Relation to the parent commit
        chunks: Line diff against the parent's version (MODIFIED only)
    """

    path: str
    hash: str
    content: str
    status: FileStatus
    chunks: Tuple[DiffChunk, ...] = ()


@dataclass(frozen=True)
class ShowResult:
    commit: Commit
    files: Tuple[FileChange, ...]


@dataclass(frozen=True)
class StatusReport:
    head: Optional[str]
    staged: Tuple[StagingEntry, ...]


def _decode(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


class Repository:
    """An SGit repository rooted at a workspace directory.

    Attributes:
        workspace_root: Root directory of the workspace
        sgit_dir: Path to the .sgit directory
        object_store: Content store for files and commits
        staging: Staging index manager
        commits: Commit builder / head reference owner
        history: Commit chain walker
    """

    def __init__(self, workspace_root: Path):
        self.workspace_root = Path(workspace_root).resolve()
        self.sgit_dir = self.workspace_root / SGIT_DIR

        if not self.sgit_dir.is_dir():
            raise NotARepositoryError(
                f"Not an SGit repository (no {SGIT_DIR}/ found in {self.workspace_root})"
            )

        self.object_store = ObjectStore(self.sgit_dir)
        self.staging = StagingManager(self.workspace_root, self.object_store)
        self.commits = CommitBuilder(self.sgit_dir, self.object_store, self.staging)
        self.history = HistoryWalker(self.commits)
        self.diff_engine = DiffEngine()

    @classmethod
    def init(cls, workspace_root: Path) -> "Repository":
        """Create the repository layout.

        Creates .sgit/objects/, an empty HEAD and an empty index.

        Raises:
            AlreadyInitializedError: If .sgit/ already exists
        """
        workspace_root = Path(workspace_root).resolve()
        sgit_dir = workspace_root / SGIT_DIR

        if sgit_dir.exists():
            raise AlreadyInitializedError(
                f"SGit repository already initialized in {workspace_root}"
            )

        (sgit_dir / OBJECTS_DIR).mkdir(parents=True)
        (sgit_dir / HEAD_FILE).write_bytes(b"")
        (sgit_dir / INDEX_FILE).write_bytes(serialize_entries([]))
        logger.debug("Initialized repository at %s", sgit_dir)
        return cls(workspace_root)

    @classmethod
    def open(cls, workspace_root: Path) -> "Repository":
        return cls(workspace_root)

    def lock(self) -> RepositoryLock:
        return RepositoryLock(self.sgit_dir)

    def add(self, path: Path) -> StagingEntry:
        """Stage a file under the repository lock."""
        with self.lock():
            return self.staging.add(Path(path))

    def commit(self, message: str, allow_empty: bool = True) -> Commit:
        """Commit the staged entries under the repository lock.

        The commit is written, HEAD is advanced, and the index is cleared,
        in that order.

        Raises:
            NothingToCommitError: If nothing is staged and allow_empty is False
        """
        with self.lock():
            staged = self.staging.load()
            if not staged and not allow_empty:
                raise NothingToCommitError("Nothing to commit (staging area is empty)")
            return self.commits.create_commit(message, staged)

    def head(self) -> Optional[str]:
        return self.commits.current_head()

    def log(self, max_count: Optional[int] = None) -> Iterator[Commit]:
        """Iterate over history, newest first, from a fixed head snapshot."""
        return self.history.walk(max_count=max_count)

    def read_commit(self, commit_hash: str) -> Commit:
        return self.commits.read_commit(commit_hash)

    def show(self, commit_hash: str) -> ShowResult:
        """Describe every file of a commit relative to its parent.

        A root commit reports FIRST_COMMIT for every file. Otherwise each
        file is looked up by path in the parent commit (first matching
        entry); missing files are NEW_FILE and the rest are diffed.

        Raises:
            CommitNotFoundError: If commit_hash does not name a commit
            BrokenChainError: If the commit's parent cannot be read
        """
        commit = self.commits.read_commit(commit_hash)

        parent: Optional[Commit] = None
        if commit.parent is not None:
            try:
                parent = self.commits.read_commit(commit.parent)
            except CommitNotFoundError as e:
                raise BrokenChainError(
                    f"Broken history: parent {commit.parent} of commit {commit.hash} "
                    f"cannot be read ({e.message})"
                ) from e

        changes: List[FileChange] = []
        for entry in commit.files:
            content = _decode(self.object_store.get(entry.hash))

            if parent is None:
                changes.append(
                    FileChange(entry.path, entry.hash, content, FileStatus.FIRST_COMMIT)
                )
                continue

            parent_entry = parent.find_file(entry.path)
            if parent_entry is None:
                changes.append(FileChange(entry.path, entry.hash, content, FileStatus.NEW_FILE))
                continue

            parent_content = _decode(self.object_store.get(parent_entry.hash))
            chunks = self.diff_engine.diff(parent_content, content)
            changes.append(
                FileChange(
                    entry.path, entry.hash, content, FileStatus.MODIFIED, tuple(chunks)
                )
            )

        return ShowResult(commit=commit, files=tuple(changes))

    def status(self) -> StatusReport:
        return StatusReport(head=self.head(), staged=tuple(self.staging.load()))
