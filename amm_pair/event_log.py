"""Append-only event sink.

The pair and its ledgers only emit typed records; what happens to them
(storage, indexing, transport) belongs to whoever implements EventSink.
EventLog is the in-memory implementation used by deployments and tests.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

import structlog

from amm_pair.models.events import Event
from amm_pair.models.types import normalize_address

logger = structlog.get_logger()

E = TypeVar("E", bound=Event)


@runtime_checkable
class EventSink(Protocol):
    """Output channel for emitted events."""

    def emit(self, emitter: str, event: Event) -> None:
        """Record ``event`` as emitted by the contract at ``emitter``."""
        ...


@dataclass(frozen=True)
class LogEntry:
    """A single recorded event."""

    index: int
    emitter: str
    event: Event


class EventLog:
    """In-memory append-only event log.

    Entries are never modified or removed except by restoring a transaction
    snapshot, which only truncates entries appended after that snapshot.
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def emit(self, emitter: str, event: Event) -> None:
        entry = LogEntry(index=len(self._entries), emitter=emitter, event=event)
        self._entries.append(entry)
        logger.debug("event_emitted", index=entry.index, emitter=emitter, event_name=event.name)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))

    @property
    def entries(self) -> list[LogEntry]:
        """Copy of all entries in emission order."""
        return list(self._entries)

    def select(
        self,
        event_type: type[Event] | None = None,
        *,
        emitter: str | None = None,
        **indexed: object,
    ) -> list[LogEntry]:
        """Return entries matching a type, an emitter and indexed field values.

        Args:
            event_type: Only return events of this class (default: all)
            emitter: Only return events emitted by this address
            **indexed: Field equality filters, by python field name
                (e.g. ``sender=...``, ``from_=None``)

        Returns:
            Matching entries in emission order
        """
        if emitter is not None:
            emitter = normalize_address(emitter)
        result = []
        for entry in self._entries:
            if event_type is not None and not isinstance(entry.event, event_type):
                continue
            if emitter is not None and entry.emitter != emitter:
                continue
            fields = entry.event.indexed()
            if all(name in fields and fields[name] == value for name, value in indexed.items()):
                result.append(entry)
        return result

    def query(
        self,
        event_type: type[E] | None = None,
        *,
        emitter: str | None = None,
        **indexed: object,
    ) -> list[E]:
        """Like select, but return the events themselves."""
        entries = self.select(event_type, emitter=emitter, **indexed)
        return [entry.event for entry in entries]  # type: ignore[misc]

    def last(self, event_type: type[E] | None = None) -> E | None:
        """Most recent event (of the given type), or None."""
        for entry in reversed(self._entries):
            if event_type is None or isinstance(entry.event, event_type):
                return entry.event  # type: ignore[return-value]
        return None

    # --- Transactional ---

    def snapshot(self) -> int:
        return len(self._entries)

    def restore(self, snapshot: int) -> None:
        del self._entries[snapshot:]
