"""All-or-nothing execution for pair operations.

A pair operation touches several independent objects (its reserves, three
token ledgers, the event sink). ``savepoint`` snapshots every participant that
implements the Transactional protocol and restores all of them if the block
raises, so no partial balance or reserve change survives a failure.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()


@runtime_checkable
class Transactional(Protocol):
    """Object whose state can be captured and put back."""

    def snapshot(self) -> Any:
        """Return an opaque copy of the current state."""
        ...

    def restore(self, snapshot: Any) -> None:
        """Replace the current state with a previously taken snapshot."""
        ...


@contextmanager
def savepoint(*participants: object) -> Iterator[None]:
    """Run a block atomically over the given participants.

    Participants that do not implement Transactional are ignored; their
    atomicity is the responsibility of whoever hosts them. Savepoints nest:
    an inner failure only rolls back to the inner savepoint.

    Raises:
        Whatever the block raises, after all participants are restored.
    """
    # Deduplicate by identity, one shared event log is common
    unique: dict[int, Transactional] = {}
    for participant in participants:
        if isinstance(participant, Transactional):
            unique.setdefault(id(participant), participant)

    snapshots = [(participant, participant.snapshot()) for participant in unique.values()]
    try:
        yield
    except BaseException:
        for participant, snap in reversed(snapshots):
            participant.restore(snap)
        logger.debug("savepoint_rolled_back", participants=len(snapshots))
        raise
