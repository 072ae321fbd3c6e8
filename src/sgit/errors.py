"""Exception hierarchy for SGit.

Every error raised by the storage and core layers derives from SgitError.
Messages are user-facing: the CLI prints them as-is, so they name the
operation and the hash or path involved.
"""


class SgitError(Exception):
    """Base exception for all SGit errors.

    Attributes:
        message: User-friendly error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotARepositoryError(SgitError):
    """Raised when no .sgit/ directory exists at the workspace root."""


class AlreadyInitializedError(SgitError):
    """Raised by init when repository metadata already exists."""


class ObjectNotFoundError(SgitError):
    """Raised when no object is stored under the requested hash."""


class ObjectCorruptedError(SgitError):
    """Raised when a stored object's content no longer matches its hash."""


class MalformedRecordError(SgitError):
    """Raised when a stored record does not have the expected shape."""


class CommitNotFoundError(SgitError):
    """Raised when a hash does not resolve to a readable commit."""


class BrokenChainError(SgitError):
    """Raised when a commit's parent cannot be resolved during a walk."""


class FileReadError(SgitError):
    """Raised when a file given to add() is missing or unreadable."""


class StagingError(SgitError):
    """Raised when the staging index cannot be read or updated."""


class RepositoryLockedError(SgitError):
    """Raised when another process holds the repository lock."""


class NothingToCommitError(SgitError):
    """Raised when a commit is requested with an empty staging area."""
