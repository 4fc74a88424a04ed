"""Typed event records emitted by the pair and its token ledgers.

Events are immutable pydantic models. Every field of every event is indexed
(queryable through EventLog.query), matching the topics of the deployed pair.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from amm_pair.models.types import Address, Uint128


class Event(BaseModel):
    """Base class for all events."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: ClassVar[str] = "Event"

    def indexed(self) -> dict[str, object]:
        """Field values keyed by python field name, for log queries."""
        return {field: getattr(self, field) for field in type(self).model_fields}


class Sync(Event):
    """Reserves were overwritten with the pair's current balances."""

    name: ClassVar[str] = "Sync"

    reserve0: Uint128
    reserve1: Uint128


class Mint(Event):
    """Liquidity was added."""

    name: ClassVar[str] = "Mint"

    sender: Address
    amount0: Uint128
    amount1: Uint128


class Burn(Event):
    """Liquidity was removed and underlying tokens paid out."""

    name: ClassVar[str] = "Burn"

    sender: Address
    amount0: Uint128
    amount1: Uint128
    to: Address


class Swap(Event):
    """A swap passed the fee-adjusted constant-product check."""

    name: ClassVar[str] = "Swap"

    sender: Address
    amount0_in: Uint128 = Field(alias="amount0In")
    amount1_in: Uint128 = Field(alias="amount1In")
    amount0_out: Uint128 = Field(alias="amount0Out")
    amount1_out: Uint128 = Field(alias="amount1Out")
    to: Address


class Transfer(Event):
    """Token movement. ``from_`` is None on mint, ``to`` is None on burn."""

    name: ClassVar[str] = "Transfer"

    from_: Address | None = Field(default=None, alias="from")
    to: Address | None = None
    value: Uint128


class Approval(Event):
    """Allowance of ``spender`` over ``owner``'s tokens was set."""

    name: ClassVar[str] = "Approval"

    owner: Address
    spender: Address
    value: Uint128


EVENT_TYPES: dict[str, type[Event]] = {
    cls.name: cls for cls in (Sync, Mint, Burn, Swap, Transfer, Approval)
}

__all__ = ["Event", "Sync", "Mint", "Burn", "Swap", "Transfer", "Approval", "EVENT_TYPES"]
