"""Fixed-shape records persisted by SGit.

Both record types serialize to JSON with an explicit key order and compact
separators, so identical records always produce identical bytes. The commit
hash is computed over those bytes, which makes this ordering part of the
on-disk format.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from sgit.errors import MalformedRecordError


def _dump(obj: Any) -> bytes:
    """Encode an object as compact UTF-8 JSON without reordering keys."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _require_str(data: Dict[str, Any], key: str, record: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedRecordError(
            f"Malformed {record}: field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class StagingEntry:
    """A single (path, content hash) pair in the staging index.

    Attributes:
        path: File path relative to the workspace root (POSIX form)
        hash: Content hash of the staged file contents
    """

    path: str
    hash: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "hash": self.hash}

    @classmethod
    def from_dict(cls, data: Any) -> "StagingEntry":
        if not isinstance(data, dict):
            raise MalformedRecordError(
                f"Malformed staging entry: expected object, got {type(data).__name__}"
            )
        return cls(
            path=_require_str(data, "path", "staging entry"),
            hash=_require_str(data, "hash", "staging entry"),
        )


def serialize_entries(entries: Sequence[StagingEntry]) -> bytes:
    """Serialize a sequence of staging entries as a JSON array."""
    return _dump([entry.to_dict() for entry in entries])


def deserialize_entries(data: bytes) -> Tuple[StagingEntry, ...]:
    """Parse a JSON array of staging entries.

    Raises:
        MalformedRecordError: If the data is not a JSON array of entries
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedRecordError(f"Malformed staging entries: {e}") from e

    if not isinstance(raw, list):
        raise MalformedRecordError(
            f"Malformed staging entries: expected array, got {type(raw).__name__}"
        )
    return tuple(StagingEntry.from_dict(item) for item in raw)


@dataclass(frozen=True)
class Commit:
    """An immutable snapshot of the staged files.

    The hash is not part of the serialized form; it is the content hash of
    the bytes returned by to_bytes().

    Attributes:
        hash: Content hash of the serialized commit
        timestamp: ISO-8601 creation time (UTC)
        message: Commit message
        files: Staged entries captured by this commit, in staging order
        parent: Hash of the previous commit, or None for the root commit
    """

    hash: str
    timestamp: str
    message: str
    files: Tuple[StagingEntry, ...]
    parent: Optional[str]

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def to_bytes(self) -> bytes:
        return serialize_commit(self.timestamp, self.message, self.files, self.parent)

    def find_file(self, path: str) -> Optional[StagingEntry]:
        """Return the first entry recorded for path, or None."""
        return next((entry for entry in self.files if entry.path == path), None)

    @classmethod
    def from_bytes(cls, commit_hash: str, data: bytes) -> "Commit":
        """Decode a stored commit record.

        Raises:
            MalformedRecordError: If the data is not a well-formed commit
        """
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedRecordError(f"Malformed commit {commit_hash}: {e}") from e

        if not isinstance(raw, dict):
            raise MalformedRecordError(
                f"Malformed commit {commit_hash}: expected object, got {type(raw).__name__}"
            )

        files = raw.get("files")
        if not isinstance(files, list):
            raise MalformedRecordError(
                f"Malformed commit {commit_hash}: field 'files' must be an array"
            )

        if "parent" not in raw:
            raise MalformedRecordError(
                f"Malformed commit {commit_hash}: missing field 'parent'"
            )
        parent = raw["parent"]
        if parent is not None and (not isinstance(parent, str) or not parent):
            raise MalformedRecordError(
                f"Malformed commit {commit_hash}: field 'parent' must be a commit hash or null"
            )

        return cls(
            hash=commit_hash,
            timestamp=_require_str(raw, "timestamp", "commit"),
            message=_require_str(raw, "message", "commit"),
            files=tuple(StagingEntry.from_dict(item) for item in files),
            parent=parent,
        )


def serialize_commit(
    timestamp: str,
    message: str,
    files: Sequence[StagingEntry],
    parent: Optional[str],
) -> bytes:
    """Serialize commit fields in canonical order.

    Key order is timestamp, message, files, parent. Entries keep their
    path, hash order.
    """
    return _dump(
        {
            "timestamp": timestamp,
            "message": message,
            "files": [entry.to_dict() for entry in files],
            "parent": parent,
        }
    )
