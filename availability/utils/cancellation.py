"""Cooperative cancellation for long-running engine calls."""

import time
from typing import Optional

from ..errors import OperationCancelled


class CancellationToken:
    """Cancel flag with an optional monotonic deadline.

    Engine loops call ``check()`` between day iterations; a cancelled or
    expired token raises ``OperationCancelled`` so no partial result is
    returned.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._cancelled = False
        self._deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self, operation: str = "operation") -> None:
        if self.cancelled:
            raise OperationCancelled(f"{operation} was cancelled")


def check_cancelled(token: Optional[CancellationToken], operation: str) -> None:
    """No-op when no token was supplied."""
    if token is not None:
        token.check(operation)
