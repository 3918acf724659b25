# control-plane/core/deadline.py
"""
Deadline carried through the store calls of one reconcile
"""

import time

from .errors import StoreError


class Deadline:
    """Monotonic time budget; store calls fail once it is spent"""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        self.expires_at = time.monotonic() + timeout_seconds

    @property
    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, operation: str) -> None:
        """Raise StoreError if the budget is spent before `operation` starts"""
        if self.expired:
            raise StoreError(
                f"Deadline of {self.timeout_seconds}s exceeded before {operation}"
            )
