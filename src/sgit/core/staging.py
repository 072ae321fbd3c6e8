"""Staging area management for SGit.

The staging area (index) is the ordered list of (path, hash) entries that
the next commit will record. It is persisted to .sgit/index after every
change, since each CLI invocation runs in a fresh process.

Index format (JSON array, entries in staging order):
[
    {"path": "notes.txt", "hash": "f572d396..."},
    ...
]
"""

import logging
from pathlib import Path
from typing import List

from sgit.constants import INDEX_FILE, SGIT_DIR
from sgit.errors import FileReadError, MalformedRecordError, StagingError
from sgit.storage import ObjectStore, StagingEntry
from sgit.storage.object_store import write_atomic
from sgit.storage.records import deserialize_entries, serialize_entries

logger = logging.getLogger(__name__)


class StagingManager:
    """Manager for the staging area (index).

    Re-adding a path appends another entry rather than replacing the
    earlier one, so a commit can record the same path more than once.

    Attributes:
        workspace_root: Root directory of the workspace
        index_path: Path to the index file (.sgit/index)
        object_store: ObjectStore instance for file contents
    """

    def __init__(self, workspace_root: Path, object_store: ObjectStore):
        """Initialize StagingManager.

        Args:
            workspace_root: Root directory of workspace
            object_store: ObjectStore for file contents

        Raises:
            StagingError: If the workspace has no .sgit directory
        """
        self.workspace_root = Path(workspace_root).resolve()
        self.sgit_dir = self.workspace_root / SGIT_DIR
        self.index_path = self.sgit_dir / INDEX_FILE
        self.object_store = object_store

        if not self.sgit_dir.exists():
            raise StagingError(
                f"Not an SGit repository (no {SGIT_DIR}/ found in {workspace_root})"
            )

    def add(self, path: Path) -> StagingEntry:
        """Store a file's contents and stage it.

        Args:
            path: File path, absolute or relative to the workspace root

        Returns:
            The appended StagingEntry

        Raises:
            FileReadError: If the file is missing, a directory, unreadable,
                outside the workspace, or inside the repository directory
        """
        abs_path = self._resolve_path(Path(path))
        rel_path = abs_path.relative_to(self.workspace_root).as_posix()

        if abs_path.is_dir():
            raise FileReadError(f"Cannot add {path}: is a directory")

        try:
            content = abs_path.read_bytes()
        except FileNotFoundError as e:
            raise FileReadError(f"Cannot add {path}: file not found") from e
        except OSError as e:
            raise FileReadError(f"Cannot add {path}: {e.strerror or e}") from e

        blob_hash = self.object_store.put(content)
        return self.stage(rel_path, blob_hash)

    def stage(self, path: str, blob_hash: str) -> StagingEntry:
        """Append an entry to the index and persist it."""
        entries = self.load()
        entry = StagingEntry(path=path, hash=blob_hash)
        entries.append(entry)
        self._save(entries)
        logger.debug("Staged %s -> %s (%d entries)", path, blob_hash, len(entries))
        return entry

    def load(self) -> List[StagingEntry]:
        """Load staged entries; empty when the index does not exist yet.

        Raises:
            StagingError: If the index file is corrupted
        """
        try:
            data = self.index_path.read_bytes()
        except FileNotFoundError:
            return []

        if not data.strip():
            return []

        try:
            return list(deserialize_entries(data))
        except MalformedRecordError as e:
            raise StagingError(f"Corrupted index file {self.index_path}: {e.message}") from e

    def clear(self) -> None:
        """Clear all staged entries."""
        self._save([])

    def is_empty(self) -> bool:
        return not self.load()

    def _save(self, entries: List[StagingEntry]) -> None:
        write_atomic(self.index_path, serialize_entries(entries))

    def _resolve_path(self, path: Path) -> Path:
        """Resolve path to absolute path within workspace."""
        if path.is_absolute():
            abs_path = path.resolve()
        else:
            abs_path = (self.workspace_root / path).resolve()

        try:
            abs_path.relative_to(self.workspace_root)
        except ValueError:
            raise FileReadError(
                f"Cannot add {path}: outside workspace root {self.workspace_root}"
            )

        try:
            abs_path.relative_to(self.sgit_dir)
        except ValueError:
            return abs_path
        raise FileReadError(f"Cannot add {path}: path is inside {SGIT_DIR}/")
