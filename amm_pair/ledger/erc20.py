"""In-memory ERC-20 style token ledger.

Implements the TokenLedger interface plus the user-facing token surface
(transfer, approve, allowance). Used for the pair's two underlying tokens and
for its liquidity-receipt (LP) token.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from amm_pair.errors import InsufficientAllowance, InsufficientBalance
from amm_pair.event_log import EventSink
from amm_pair.ledger.base import ReceiveHook
from amm_pair.models.events import Approval, Transfer
from amm_pair.models.types import normalize_address
from amm_pair.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class _LedgerSnapshot:
    balances: dict[str, int]
    allowances: dict[tuple[str, str], int]
    total_supply: int


class Erc20Ledger:
    """Balances, allowances and supply of one fungible token.

    Notes:
    - Balances and the total supply are uint128; crediting past the maximum
      raises ArithmeticOverflow instead of wrapping.
    - Zero balances and allowances are omitted to keep the tables sparse.
    - Receive hooks run after a credit has been fully applied, so a hook
      observes the post-transfer balances.
    """

    def __init__(
        self,
        address: str,
        *,
        symbol: str = "",
        events: EventSink | None = None,
    ) -> None:
        self._address = normalize_address(address, validate=True)
        self.symbol = symbol
        self._events = events
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        self._hooks: dict[str, ReceiveHook] = {}

    @property
    def address(self) -> str:
        return self._address

    @property
    def events(self) -> EventSink | None:
        return self._events

    # --- Read-only accessors ---

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        """Amount ``spender`` may still move out of ``owner``'s balance."""
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    # --- Mutations ---

    def transfer(self, sender: str, to: str, value: int) -> None:
        """Transfer ``value`` from the caller's own balance to ``to``.

        Raises:
            InsufficientBalance: If ``sender`` holds less than ``value``
        """
        self._move(sender, to, value)

    def approve(self, owner: str, spender: str, value: int) -> None:
        """Set ``spender``'s allowance over ``owner``'s tokens to ``value``.

        Overwrites any previous allowance and emits Approval.
        """
        owner_n = normalize_address(owner)
        spender_n = normalize_address(spender)
        amount = S(value).to_uint128()
        if amount == 0:
            self._allowances.pop((owner_n, spender_n), None)
        else:
            self._allowances[(owner_n, spender_n)] = amount
        self._emit(Approval(owner=owner_n, spender=spender_n, value=amount))

    def transfer_from(self, from_: str, to: str, amount: int, *, spender: str | None = None) -> None:
        """Move tokens out of ``from_``.

        Raises:
            InsufficientAllowance: If ``spender`` is allowed less than ``amount``
            InsufficientBalance: If ``from_`` holds less than ``amount``
        """
        if spender is None:
            self._move(from_, to, amount)
            return

        current = self.allowance(from_, spender)
        if current < amount:
            raise InsufficientAllowance(
                f"{self.symbol or self._address}: allowance {current} < {amount} "
                f"for spender {spender}"
            )
        balance = self.balance_of(from_)
        if balance < amount:
            raise InsufficientBalance(
                f"{self.symbol or self._address}: balance of {from_} is {balance}, need {amount}"
            )
        # Allowance is spent before the move so receive hooks see the final value
        key = (normalize_address(from_), normalize_address(spender))
        remaining = (S(current) - amount).value
        if remaining == 0:
            self._allowances.pop(key, None)
        else:
            self._allowances[key] = remaining
        self._move(from_, to, amount)

    def mint(self, to: str, amount: int) -> None:
        """Create tokens for ``to`` and emit Transfer(from=None).

        Raises:
            ArithmeticOverflow: If the supply or balance would exceed uint128
        """
        to_n = normalize_address(to)
        value = S(amount).to_uint128()
        self._total_supply = (S(self._total_supply) + value).to_uint128()
        self._set_balance(to_n, (S(self.balance_of(to_n)) + value).to_uint128())
        self._emit(Transfer(from_=None, to=to_n, value=value))

    def burn(self, from_: str, amount: int) -> None:
        """Destroy tokens held by ``from_`` and emit Transfer(to=None).

        Raises:
            InsufficientBalance: If ``from_`` holds less than ``amount``
        """
        from_n = normalize_address(from_)
        value = S(amount).to_uint128()
        balance = self.balance_of(from_n)
        if balance < value:
            raise InsufficientBalance(
                f"{self.symbol or self._address}: cannot burn {value}, balance is {balance}"
            )
        self._set_balance(from_n, balance - value)
        self._total_supply = (S(self._total_supply) - value).value
        self._emit(Transfer(from_=from_n, to=None, value=value))

    # --- Receive hooks ---

    def register_receiver(self, account: str, hook: ReceiveHook) -> None:
        """Call ``hook`` every time ``account`` is credited by a transfer."""
        self._hooks[normalize_address(account)] = hook

    def unregister_receiver(self, account: str) -> None:
        self._hooks.pop(normalize_address(account), None)

    # --- Transactional ---

    def snapshot(self) -> _LedgerSnapshot:
        return _LedgerSnapshot(
            balances=dict(self._balances),
            allowances=dict(self._allowances),
            total_supply=self._total_supply,
        )

    def restore(self, snapshot: _LedgerSnapshot) -> None:
        self._balances = dict(snapshot.balances)
        self._allowances = dict(snapshot.allowances)
        self._total_supply = snapshot.total_supply

    # --- Internal ---

    def _move(self, from_: str, to: str, amount: int) -> None:
        from_n = normalize_address(from_)
        to_n = normalize_address(to)
        value = S(amount).to_uint128()

        from_balance = self.balance_of(from_n)
        if from_balance < value:
            raise InsufficientBalance(
                f"{self.symbol or self._address}: balance of {from_n} is {from_balance}, "
                f"need {value}"
            )
        self._set_balance(from_n, from_balance - value)
        self._set_balance(to_n, (S(self.balance_of(to_n)) + value).to_uint128())
        self._emit(Transfer(from_=from_n, to=to_n, value=value))

        hook = self._hooks.get(to_n)
        if hook is not None:
            logger.debug("receive_hook_called", token=self._address, account=to_n, amount=value)
            hook(self, from_n, to_n, value)

    def _set_balance(self, account: str, amount: int) -> None:
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def _emit(self, event: Transfer | Approval) -> None:
        if self._events is not None:
            self._events.emit(self._address, event)

    def __repr__(self) -> str:
        return (
            f"Erc20Ledger({self.symbol or self._address}, "
            f"supply={self._total_supply}, holders={len(self._balances)})"
        )
