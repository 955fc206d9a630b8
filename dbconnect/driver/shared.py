"""Mutual-exclusion wrapper for a connection with several logical owners."""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..errors import ConnectionBusyError
from .base import Connection


class SharedConnection:
    """Hand out exclusive borrows of one connection.

    At most one borrow is in progress at a time. Other callers block until it
    ends, or fail with :class:`ConnectionBusyError` after ``timeout`` seconds.
    This serializes access; it does not make concurrent execution possible.
    """

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    @contextmanager
    def borrow(self, timeout: Optional[float] = None) -> Iterator[Connection]:
        """Borrow the connection for the duration of a ``with`` block.

        Args:
            timeout: Seconds to wait for the current borrow to end (must not be
                negative); None waits forever

        Yields:
            The wrapped connection

        Raises:
            ValueError: If timeout is negative
            ConnectionBusyError: If the timeout elapses first
        """
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be >= 0 or None, got {timeout}")
        acquired = self._lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            raise ConnectionBusyError(f"Connection still borrowed after {timeout}s")
        try:
            yield self._connection
        finally:
            self._lock.release()

    @property
    def closed(self) -> bool:
        return self._connection.closed

    def close(self) -> None:
        """Close the wrapped connection once no borrow is in progress."""
        with self._lock:
            self._connection.close()
