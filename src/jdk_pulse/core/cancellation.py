"""Cooperative cancellation for blocking operations."""

import threading


class CancelToken:
    """Caller-owned cancellation flag shared with worker threads.

    Operations that spawn subprocesses poll the token and kill the child
    process once it is cancelled.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; True if cancelled meanwhile."""
        return self._event.wait(timeout)
