"""Commit object builder and head management.

This module creates, persists and reads commit objects, and owns the HEAD
reference that points at the most recent commit.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from sgit.constants import HEAD_FILE
from sgit.errors import (
    CommitNotFoundError,
    MalformedRecordError,
    ObjectCorruptedError,
    ObjectNotFoundError,
)
from sgit.storage.object_store import ObjectStore, write_atomic
from sgit.storage.records import Commit, StagingEntry, serialize_commit

if TYPE_CHECKING:
    from sgit.core.staging import StagingManager

logger = logging.getLogger(__name__)


class CommitBuilder:
    """Builder for creating and reading commit objects.

    Commits are stored in the object store like any other object, keyed by
    the hash of their serialized form. HEAD holds the latest commit hash.

    Attributes:
        sgit_dir: Path to .sgit directory
        head_path: Path to the HEAD file
        object_store: ObjectStore used for commit records
        staging: StagingManager cleared after each commit, if given
    """

    def __init__(
        self,
        sgit_dir: Path,
        object_store: ObjectStore,
        staging: Optional["StagingManager"] = None,
    ):
        self.sgit_dir = Path(sgit_dir)
        self.head_path = self.sgit_dir / HEAD_FILE
        self.object_store = object_store
        self.staging = staging

    def current_head(self) -> Optional[str]:
        """Return the head commit hash, or None if nothing was committed yet.

        A missing or empty HEAD file means "no commits"; it is not an error.
        """
        try:
            content = self.head_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return content or None

    def create_commit(self, message: str, staged_files: Sequence[StagingEntry]) -> Commit:
        """Create a new commit on top of the current head.

        The commit object is persisted before HEAD moves, so a crash in
        between leaves HEAD on the previous (valid) commit.

        Args:
            message: Commit message
            staged_files: Entries to record; copied into the commit

        Returns:
            The new Commit
        """
        parent = self.current_head()
        timestamp = datetime.now(timezone.utc).isoformat()
        files = tuple(StagingEntry(entry.path, entry.hash) for entry in staged_files)

        data = serialize_commit(timestamp, message, files, parent)
        commit_hash = self.object_store.put(data)
        self._update_head(commit_hash)

        if self.staging is not None:
            self.staging.clear()

        logger.debug(
            "Created commit %s (parent=%s, %d file(s))", commit_hash, parent, len(files)
        )
        return Commit(
            hash=commit_hash,
            timestamp=timestamp,
            message=message,
            files=files,
            parent=parent,
        )

    def read_commit(self, commit_hash: str) -> Commit:
        """Read a commit object.

        Args:
            commit_hash: Full commit hash

        Returns:
            The decoded Commit

        Raises:
            CommitNotFoundError: If the hash is unknown, corrupted, or not a commit
        """
        try:
            data = self.object_store.get(commit_hash)
        except (ObjectNotFoundError, ObjectCorruptedError) as e:
            raise CommitNotFoundError(f"Commit not found: {commit_hash} ({e.message})") from e

        try:
            return Commit.from_bytes(commit_hash, data)
        except MalformedRecordError as e:
            raise CommitNotFoundError(
                f"Commit not found: {commit_hash} is not a valid commit ({e.message})"
            ) from e

    def commit_exists(self, commit_hash: str) -> bool:
        try:
            self.read_commit(commit_hash)
        except CommitNotFoundError:
            return False
        return True

    def _update_head(self, commit_hash: str) -> None:
        write_atomic(self.head_path, commit_hash.encode("utf-8"))
