"""Reentrancy lock for a pair's mutating operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from amm_pair.errors import ReentrancyDetected

logger = structlog.get_logger()


class ReentrancyGuard:
    """Single-holder lock, acquired on entry and released on exit.

    Re-entering while held raises ReentrancyDetected immediately, before
    the nested operation reads or writes anything.
    """

    def __init__(self) -> None:
        self._held_by: str | None = None

    @property
    def locked(self) -> bool:
        return self._held_by is not None

    @contextmanager
    def acquire(self, operation: str) -> Iterator[None]:
        """Hold the lock for the duration of ``operation``.

        Raises:
            ReentrancyDetected: If another operation already holds the lock
        """
        if self._held_by is not None:
            logger.warning("reentrancy_rejected", operation=operation, held_by=self._held_by)
            raise ReentrancyDetected(f"{operation} called while {self._held_by} is in progress")
        self._held_by = operation
        try:
            yield
        finally:
            self._held_by = None
