"""Exclusive repository lock.

Mutating operations (add, commit) hold .sgit/lock for their whole duration
so that two processes never interleave index or HEAD updates. The lock file
is created with O_CREAT | O_EXCL, which is atomic on local filesystems.
"""

import logging
import os
import time
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from sgit.constants import LOCK_FILE, LOCK_POLL_INTERVAL, LOCK_TIMEOUT_SECONDS
from sgit.errors import RepositoryLockedError

logger = logging.getLogger(__name__)


class RepositoryLock:
    """Context manager holding the repository lock file.

    Example:
        >>> with RepositoryLock(Path(".sgit")):
        ...     staging.add(Path("notes.txt"))
    """

    def __init__(
        self,
        sgit_dir: Path,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> None:
        self.lock_path = Path(sgit_dir) / LOCK_FILE
        self.timeout = LOCK_TIMEOUT_SECONDS if timeout is None else timeout
        self.poll_interval = LOCK_POLL_INTERVAL if poll_interval is None else poll_interval
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        """Create the lock file, waiting up to timeout seconds.

        Raises:
            RepositoryLockedError: If the lock is still held after timeout
        """
        deadline = time.monotonic() + self.timeout
        warned = False
        while True:
            try:
                fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                if time.monotonic() >= deadline:
                    raise RepositoryLockedError(
                        f"Repository is locked by another process ({self.lock_path}). "
                        "If no other sgit command is running, remove the lock file."
                    )
                if not warned:
                    logger.warning("Waiting for repository lock %s", self.lock_path)
                    warned = True
                time.sleep(self.poll_interval)
                continue

            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(str(os.getpid()))
            self._held = True
            logger.debug("Acquired repository lock %s", self.lock_path)
            return

    def release(self) -> None:
        if not self._held:
            return
        try:
            os.unlink(self.lock_path)
        except FileNotFoundError:
            logger.warning("Repository lock %s vanished before release", self.lock_path)
        self._held = False
        logger.debug("Released repository lock %s", self.lock_path)

    def __enter__(self) -> "RepositoryLock":
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()
