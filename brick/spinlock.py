"""A lock that spins with exponential back-off instead of blocking."""

from __future__ import annotations

import threading
import time

_MAX_BACKOFF = 16


class SpinLock:
    """A mutual-exclusion lock acquired by spinning with exponential back-off.

    Releasing a lock that is not held does nothing.
    """

    def __init__(self) -> None:
        self._flag = threading.Lock()

    def acquire(self) -> None:
        """Spin until the lock is taken."""
        backoff = 1
        while not self._flag.acquire(blocking=False):
            for _ in range(backoff):
                time.sleep(0)
            if backoff < _MAX_BACKOFF:
                backoff <<= 1

    def release(self) -> None:
        """Release the lock."""
        try:
            self._flag.release()
        except RuntimeError:
            pass

    def locked(self) -> bool:
        """Report whether the lock is currently held."""
        return self._flag.locked()

    def __enter__(self) -> SpinLock:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()