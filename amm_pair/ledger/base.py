"""Token ledger interface consumed by the pair."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenLedger(Protocol):
    """Balance and supply tracking for one fungible token.

    The pair depends only on these operations. They are synchronous and
    immediately consistent; a failure is raised as a PairError subclass
    (InsufficientBalance, InsufficientAllowance, ArithmeticOverflow) and
    aborts the enclosing pair operation.

    Any conforming object can be used, no inheritance required.
    """

    @property
    def address(self) -> str:
        """Address of the token contract."""
        ...

    def balance_of(self, account: str) -> int:
        """Balance of ``account`` (0 if unknown)."""
        ...

    def total_supply(self) -> int:
        """Total amount in circulation."""
        ...

    def transfer_from(self, from_: str, to: str, amount: int, *, spender: str | None = None) -> None:
        """Move ``amount`` from ``from_`` to ``to``.

        With ``spender=None`` the call is made by the capability holder moving
        its own holdings (no allowance involved). Otherwise ``spender``'s
        allowance over ``from_`` is checked and decremented.
        """
        ...

    def mint(self, to: str, amount: int) -> None:
        """Create ``amount`` new tokens for ``to``."""
        ...

    def burn(self, from_: str, amount: int) -> None:
        """Destroy ``amount`` tokens held by ``from_``."""
        ...


@runtime_checkable
class LiquidityToken(TokenLedger, Protocol):
    """TokenLedger that also exposes the holder-facing token operations.

    The pair's liquidity-receipt token must implement this, since the pair
    passes its own transfer/approve/allowance calls through to it.
    """

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, owner: str, spender: str, value: int) -> None: ...

    def transfer(self, sender: str, to: str, value: int) -> None: ...


# Called after ``to`` was credited: hook(ledger, from_, to, amount).
# May call back into other contracts, including the pair.
ReceiveHook = Callable[["TokenLedger", str, str, int], None]
