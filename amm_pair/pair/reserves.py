"""Reserve bookkeeping for a pair."""

from __future__ import annotations

import structlog

from amm_pair.constants import UINT112_MAX
from amm_pair.errors import ArithmeticOverflow
from amm_pair.event_log import EventSink
from amm_pair.models.events import Sync

logger = structlog.get_logger()


class ReserveLedger:
    """Last-recorded balances of the pair's two tokens.

    Reserves are a cached snapshot of what the pair holds. They may lag the
    actual balances (tokens sent straight to the pair) until the next
    update(), and are never written any other way.
    """

    def __init__(
        self,
        owner_address: str,
        *,
        events: EventSink | None = None,
        max_reserve: int = UINT112_MAX,
    ) -> None:
        self._owner_address = owner_address
        self._events = events
        self._max_reserve = max_reserve
        self._reserve0 = 0
        self._reserve1 = 0

    @property
    def reserve0(self) -> int:
        return self._reserve0

    @property
    def reserve1(self) -> int:
        return self._reserve1

    def get_reserves(self) -> tuple[int, int]:
        return self._reserve0, self._reserve1

    def update(self, balance0: int, balance1: int) -> None:
        """Overwrite both reserves and emit Sync.

        Raises:
            ArithmeticOverflow: If a balance exceeds the reserve width
        """
        if balance0 < 0 or balance1 < 0:
            raise ValueError(f"Balances must be non-negative: ({balance0}, {balance1})")
        if balance0 > self._max_reserve or balance1 > self._max_reserve:
            raise ArithmeticOverflow(
                f"Balances ({balance0}, {balance1}) exceed reserve maximum {self._max_reserve}"
            )
        self._reserve0 = balance0
        self._reserve1 = balance1
        if self._events is not None:
            self._events.emit(self._owner_address, Sync(reserve0=balance0, reserve1=balance1))
        logger.debug("reserves_updated", pair=self._owner_address, reserve0=balance0, reserve1=balance1)

    # --- Transactional ---

    def snapshot(self) -> tuple[int, int]:
        return self._reserve0, self._reserve1

    def restore(self, snapshot: tuple[int, int]) -> None:
        self._reserve0, self._reserve1 = snapshot

    def __repr__(self) -> str:
        return f"ReserveLedger(reserve0={self._reserve0}, reserve1={self._reserve1})"
