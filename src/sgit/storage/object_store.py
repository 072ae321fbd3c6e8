"""Content-addressable object storage for SGit.

This module implements a flat, Git-like object store using SHA-1 hashing
for content addressing. Objects (file contents and serialized commits) are
stored in .sgit/objects/<hash> and are written at most once per hash.
"""

import hashlib
import logging
import os
import tempfile
from pathlib import Path

from sgit.constants import HASH_ALGORITHM, HASH_LENGTH, OBJECTS_DIR
from sgit.errors import ObjectCorruptedError, ObjectNotFoundError

logger = logging.getLogger(__name__)


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to path via a temp file and atomic rename.

    The temp file lives in the target directory so os.replace never
    crosses filesystems.

    Raises:
        OSError: If the write fails (permissions, disk full, etc.)
    """
    path = Path(path)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(tmp_fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def hash_content(content: bytes) -> str:
    """Compute the content hash of a byte sequence.

    Args:
        content: Binary data to hash

    Returns:
        Hex string of hash (40 characters for SHA-1)
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(content)
    return hasher.hexdigest()


def is_valid_hash(value: object) -> bool:
    """Check that value looks like a full lowercase hex content hash."""
    if not isinstance(value, str) or len(value) != HASH_LENGTH:
        return False
    return all(c in "0123456789abcdef" for c in value)


class ObjectStore:
    """Content-addressable storage for objects.

    Storage layout:
        .sgit/objects/<hash>

    Attributes:
        sgit_dir: Path to the .sgit directory
        objects_dir: Path to the objects directory

    Example:
        >>> store = ObjectStore(Path(".sgit"))
        >>> object_hash = store.put(b"hello\\n")
        >>> assert store.get(object_hash) == b"hello\\n"
    """

    def __init__(self, sgit_dir: Path) -> None:
        """Initialize the object store.

        Args:
            sgit_dir: Path to .sgit directory

        Raises:
            ValueError: If sgit_dir doesn't exist
        """
        self.sgit_dir = Path(sgit_dir)
        self.objects_dir = self.sgit_dir / OBJECTS_DIR

        if not self.sgit_dir.exists():
            raise ValueError(f"SGit directory not found: {sgit_dir}")

    def put(self, content: bytes) -> str:
        """Store content and return its hash.

        If an object with the same hash already exists, nothing is written.

        Args:
            content: Binary content to store

        Returns:
            Content hash (40 hex characters)

        Raises:
            OSError: If write fails
        """
        object_hash = hash_content(content)
        object_path = self._object_path(object_hash)

        if object_path.exists():
            logger.debug("Object %s already stored", object_hash)
            return object_hash

        object_path.parent.mkdir(parents=True, exist_ok=True)
        write_atomic(object_path, content)
        logger.debug("Stored object %s (%d bytes)", object_hash, len(content))
        return object_hash

    def get(self, object_hash: str, verify_hash: bool = True) -> bytes:
        """Read an object from the store.

        Args:
            object_hash: Content hash of the object
            verify_hash: Whether to recompute and verify hash (default: True)

        Returns:
            Stored bytes

        Raises:
            ObjectNotFoundError: If no object is stored under the hash
            ObjectCorruptedError: If hash verification fails
        """
        if not is_valid_hash(object_hash):
            raise ObjectNotFoundError(f"Object not found: {object_hash!r} is not a valid hash")

        object_path = self._object_path(object_hash)
        try:
            content = object_path.read_bytes()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"Object not found: {object_hash}") from e

        if verify_hash:
            actual_hash = hash_content(content)
            if actual_hash != object_hash:
                raise ObjectCorruptedError(
                    f"Object corrupted: expected {object_hash}, got {actual_hash}"
                )

        return content

    def exists(self, object_hash: str) -> bool:
        """Check if an object exists in the store."""
        if not is_valid_hash(object_hash):
            return False
        return self._object_path(object_hash).is_file()

    def _object_path(self, object_hash: str) -> Path:
        return self.objects_dir / object_hash
