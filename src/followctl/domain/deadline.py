"""Caller-supplied deadline and cancellation signal.

The engines call :meth:`Deadline.check` before every statement. When it
raises inside ``engine.begin()`` the surrounding transaction rolls back,
so an interrupted mutation never leaves partial state behind.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from followctl.domain.errors import DeadlineExceeded, OperationCancelled


@dataclass
class Deadline:
    """Timeout (seconds from construction) and/or an explicit cancel switch.

    Usage::

        deadline = Deadline(timeout=2.0)
        repo.follow(1, 2, deadline=deadline)

        # from another thread
        deadline.cancel()
    """

    timeout: float | None = None
    _started: float = field(default_factory=time.monotonic, repr=False)
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def check(self) -> None:
        """Raise if the caller cancelled or the timeout elapsed."""
        if self._cancelled.is_set():
            raise OperationCancelled()
        if self.timeout is not None and time.monotonic() - self._started >= self.timeout:
            raise DeadlineExceeded(self.timeout)


def checkpoint(deadline: Deadline | None) -> None:
    """Check *deadline* if one was given."""
    if deadline is not None:
        deadline.check()
