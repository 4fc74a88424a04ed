"""Constant-product pair: the public mint/burn/swap/skim/sync operations.

Every mutating operation follows the same shape:

    lock -> savepoint -> read balances -> math -> ledger mutations
         -> update reserves -> emit event

The lock rejects nested mutating calls (ReentrancyDetected). The savepoint
restores reserves, ledgers and the event log if anything raises, so a failed
operation leaves no trace.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, runtime_checkable

import structlog

from amm_pair.config import DEFAULT_PAIR_CONFIG, PairConfig
from amm_pair.constants import MINIMUM_LIQUIDITY, ZERO_ADDRESS
from amm_pair.errors import AuthorizationError, InvalidRecipient, PairError
from amm_pair.event_log import EventSink
from amm_pair.ledger.base import LiquidityToken, TokenLedger
from amm_pair.math.liquidity import (
    compute_burn_amounts,
    compute_deposits,
    compute_liquidity_minted,
)
from amm_pair.math.swap import (
    SwapOutcome,
    check_invariant,
    compute_amounts_in,
    get_amount_out,
    validate_outputs,
)
from amm_pair.models.events import Burn, Event, Mint, Swap
from amm_pair.models.types import normalize_address
from amm_pair.pair.lock import ReentrancyGuard
from amm_pair.pair.reserves import ReserveLedger
from amm_pair.safe_int import S
from amm_pair.transaction import savepoint

logger = structlog.get_logger()


@runtime_checkable
class FlashSwapCallee(Protocol):
    """Receiver of a flash swap.

    Called after the outputs were transferred and before the inputs are
    checked. The callee pays the input (through the token ledgers) before
    returning. Calling back into the pair's mutating operations fails with
    ReentrancyDetected.
    """

    def on_flash_swap(
        self,
        pair: Pair,
        sender: str,
        amount0_out: int,
        amount1_out: int,
        data: bytes,
    ) -> None: ...


class Pair:
    """A constant-product liquidity pool for two tokens.

    The liquidity-receipt token lives on an external LP ledger; the pair
    mints and burns on it and passes holder-facing token calls through.
    Caller identity is supplied by the host as the ``sender`` keyword.
    """

    def __init__(
        self,
        address: str,
        token0: TokenLedger,
        token1: TokenLedger,
        lp_token: LiquidityToken,
        *,
        owner: str,
        events: EventSink | None = None,
        config: PairConfig = DEFAULT_PAIR_CONFIG,
    ) -> None:
        """Create an empty pair.

        Args:
            address: Address of the pair itself (holder of the reserves)
            token0: Ledger of the first token
            token1: Ledger of the second token
            lp_token: Ledger of the liquidity-receipt token
            owner: Account allowed to skim/sync (see PairConfig)
            events: Sink for Mint/Burn/Swap/Sync events
            config: Access control and width limits

        Raises:
            ValueError: If both tokens share an address
        """
        if normalize_address(token0.address) == normalize_address(token1.address):
            raise ValueError(f"Identical token addresses: {token0.address}")

        self._address = normalize_address(address, validate=True)
        self._token0 = token0
        self._token1 = token1
        self._lp_token = lp_token
        self._owner = normalize_address(owner, validate=True)
        self._events = events
        self._config = config
        self._reserves = ReserveLedger(self._address, events=events, max_reserve=config.max_reserve)
        self._lock = ReentrancyGuard()

    # --- Read-only accessors ---

    @property
    def address(self) -> str:
        return self._address

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def token0(self) -> TokenLedger:
        return self._token0

    @property
    def token1(self) -> TokenLedger:
        return self._token1

    @property
    def lp_token(self) -> LiquidityToken:
        return self._lp_token

    @property
    def config(self) -> PairConfig:
        return self._config

    @property
    def locked(self) -> bool:
        """True while a mutating operation is in progress."""
        return self._lock.locked

    def get_reserves(self) -> tuple[int, int]:
        """Last-recorded reserves (reserve0, reserve1)."""
        return self._reserves.get_reserves()

    def quote(self, amount_in: int, zero_for_one: bool = True) -> int:
        """Output a swap of ``amount_in`` would receive at current reserves.

        Args:
            amount_in: Input amount
            zero_for_one: True to sell token0 for token1, False for the reverse
        """
        reserve0, reserve1 = self.get_reserves()
        if zero_for_one:
            return get_amount_out(amount_in, reserve0, reserve1)
        return get_amount_out(amount_in, reserve1, reserve0)

    # --- Liquidity ---

    def mint(self, to: str, *, sender: str) -> int:
        """Mint liquidity for the tokens deposited since the last update.

        Deposits are whatever the pair holds above its reserves, so the
        depositor transfers both tokens to the pair first.

        Returns:
            Liquidity minted to ``to``

        Raises:
            InsufficientLiquidityMinted: If the deposit mints nothing
        """
        with self._operation("mint", sender):
            reserve0, reserve1 = self._reserves.get_reserves()
            balance0, balance1 = self._balances()
            amount0, amount1 = compute_deposits(balance0, balance1, reserve0, reserve1)

            total_supply = self._lp_token.total_supply()
            liquidity = compute_liquidity_minted(amount0, amount1, reserve0, reserve1, total_supply)

            if total_supply == 0:
                # Permanently lock the first MINIMUM_LIQUIDITY units
                self._lp_token.mint(ZERO_ADDRESS, MINIMUM_LIQUIDITY)
            self._lp_token.mint(to, liquidity)

            self._reserves.update(balance0, balance1)
            self._emit(Mint(sender=sender, amount0=amount0, amount1=amount1))

        logger.debug(
            "pair_mint",
            pair=self._address,
            sender=sender,
            to=to,
            amount0=amount0,
            amount1=amount1,
            liquidity=liquidity,
        )
        return liquidity

    def burn(self, to: str, *, sender: str) -> tuple[int, int]:
        """Redeem all of ``to``'s liquidity for the underlying tokens.

        Returns:
            (amount0, amount1) transferred to ``to``

        Raises:
            AuthorizationError: If ``sender`` is not ``to``
            InsufficientLiquidityBurned: If either payout would be zero
        """
        with self._operation("burn", sender):
            if normalize_address(sender) != normalize_address(to):
                raise AuthorizationError(f"{sender} cannot burn liquidity of {to}")

            balance0, balance1 = self._balances()
            liquidity = self._lp_token.balance_of(to)
            total_supply = self._lp_token.total_supply()
            amount0, amount1 = compute_burn_amounts(liquidity, balance0, balance1, total_supply)

            self._lp_token.burn(to, liquidity)
            self._token0.transfer_from(self._address, to, amount0)
            self._token1.transfer_from(self._address, to, amount1)

            balance0, balance1 = self._balances()
            self._reserves.update(balance0, balance1)
            self._emit(Burn(sender=sender, amount0=amount0, amount1=amount1, to=to))

        logger.debug(
            "pair_burn",
            pair=self._address,
            to=to,
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        return amount0, amount1

    # --- Swap ---

    def swap(
        self,
        amount0_out: int,
        amount1_out: int,
        to: str,
        *,
        sender: str,
        callee: FlashSwapCallee | None = None,
        data: bytes = b"",
    ) -> SwapOutcome:
        """Send outputs to ``to`` and verify the fee-adjusted invariant.

        Outputs are transferred before inputs are verified. Inputs are
        whatever the pair holds above (reserve - output) once the transfers
        and the optional flash-swap callback have run.

        Args:
            amount0_out: Amount of token0 to send out
            amount1_out: Amount of token1 to send out
            to: Recipient of the outputs
            sender: Caller
            callee: Flash-swap receiver, called after the optimistic transfers
            data: Opaque bytes passed to the callee

        Returns:
            SwapOutcome with the attributed inputs and the outputs

        Raises:
            InsufficientOutputAmount: If both outputs are zero
            InsufficientLiquidity: If an output is not below its reserve
            InvalidRecipient: If ``to`` is one of the token contracts
            InsufficientInputAmount: If nothing was paid in
            InvariantViolation: If the fee-adjusted product decreased
        """
        with self._operation("swap", sender):
            reserve0, reserve1 = self._reserves.get_reserves()
            validate_outputs(amount0_out, amount1_out, reserve0, reserve1)

            to_n = normalize_address(to)
            if to_n in (normalize_address(self._token0.address), normalize_address(self._token1.address)):
                raise InvalidRecipient(f"Swap recipient {to} is a pair token")

            # Optimistic transfer
            if amount0_out > 0:
                self._token0.transfer_from(self._address, to_n, amount0_out)
            if amount1_out > 0:
                self._token1.transfer_from(self._address, to_n, amount1_out)
            if callee is not None:
                callee.on_flash_swap(self, sender, amount0_out, amount1_out, data)

            balance0, balance1 = self._balances()
            amount0_in, amount1_in = compute_amounts_in(
                balance0, balance1, reserve0, reserve1, amount0_out, amount1_out
            )
            check_invariant(balance0, balance1, amount0_in, amount1_in, reserve0, reserve1)

            self._reserves.update(balance0, balance1)
            self._emit(
                Swap(
                    sender=sender,
                    amount0_in=amount0_in,
                    amount1_in=amount1_in,
                    amount0_out=amount0_out,
                    amount1_out=amount1_out,
                    to=to_n,
                )
            )

        logger.debug(
            "pair_swap",
            pair=self._address,
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
        )
        return SwapOutcome(
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
        )

    # --- Reserve maintenance ---

    def skim(self, to: str, *, sender: str) -> tuple[int, int]:
        """Send balances held above the reserves to ``to``.

        Reserves are not changed.

        Returns:
            (excess0, excess1) transferred

        Raises:
            AuthorizationError: If maintenance is owner-only and ``sender`` is not the owner
        """
        with self._operation("skim", sender):
            self._require_maintainer(sender, "skim")
            reserve0, reserve1 = self._reserves.get_reserves()
            balance0, balance1 = self._balances()
            excess0 = (S(balance0) - reserve0).value
            excess1 = (S(balance1) - reserve1).value
            if excess0 > 0:
                self._token0.transfer_from(self._address, to, excess0)
            if excess1 > 0:
                self._token1.transfer_from(self._address, to, excess1)

        logger.debug("pair_skim", pair=self._address, to=to, excess0=excess0, excess1=excess1)
        return excess0, excess1

    def sync(self, *, sender: str) -> tuple[int, int]:
        """Set the reserves to the current balances without moving tokens.

        Returns:
            The new (reserve0, reserve1)

        Raises:
            AuthorizationError: If maintenance is owner-only and ``sender`` is not the owner
        """
        with self._operation("sync", sender):
            self._require_maintainer(sender, "sync")
            balance0, balance1 = self._balances()
            self._reserves.update(balance0, balance1)

        return balance0, balance1

    # --- Liquidity-receipt token pass-through ---

    def total_supply(self) -> int:
        return self._lp_token.total_supply()

    def balance_of(self, owner: str) -> int:
        return self._lp_token.balance_of(owner)

    def allowance(self, owner: str, spender: str) -> int:
        return self._lp_token.allowance(owner, spender)

    def transfer(self, to: str, value: int, *, sender: str) -> None:
        """Transfer liquidity-receipt tokens from ``sender`` to ``to``.

        Raises:
            InsufficientBalance: If ``sender`` holds less than ``value``
        """
        self._require_caller(sender)
        with savepoint(self._lp_token, self._events):
            self._lp_token.transfer(sender, to, value)

    def approve(self, spender: str, value: int, *, sender: str) -> None:
        """Allow ``spender`` to move up to ``value`` of ``sender``'s liquidity tokens."""
        self._require_caller(sender)
        with savepoint(self._lp_token, self._events):
            self._lp_token.approve(sender, spender, value)

    def transfer_from(self, from_: str, to: str, value: int, *, sender: str) -> None:
        """Move liquidity tokens out of ``from_`` using ``sender``'s allowance.

        Raises:
            InsufficientAllowance: If ``sender`` is allowed less than ``value``
            InsufficientBalance: If ``from_`` holds less than ``value``
        """
        self._require_caller(sender)
        with savepoint(self._lp_token, self._events):
            self._lp_token.transfer_from(from_, to, value, spender=sender)

    # --- Internal ---

    @contextmanager
    def _operation(self, name: str, sender: str) -> Iterator[None]:
        """Lock and savepoint around one mutating operation."""
        self._require_caller(sender)
        with self._lock.acquire(name):
            try:
                with savepoint(self._reserves, self._token0, self._token1, self._lp_token, self._events):
                    yield
            except PairError as exc:
                logger.warning(
                    "pair_operation_failed",
                    pair=self._address,
                    operation=name,
                    sender=sender,
                    reason=exc.reason,
                    error=str(exc),
                )
                raise

    def _require_caller(self, sender: str) -> None:
        if normalize_address(sender) == ZERO_ADDRESS:
            raise AuthorizationError("The zero address cannot act as a caller")

    def _require_maintainer(self, sender: str, operation: str) -> None:
        if self._config.owner_only_maintenance and normalize_address(sender) != self._owner:
            raise AuthorizationError(f"{operation} is restricted to the pair owner")

    def _balances(self) -> tuple[int, int]:
        return self._token0.balance_of(self._address), self._token1.balance_of(self._address)

    def _emit(self, event: Event) -> None:
        if self._events is not None:
            self._events.emit(self._address, event)

    def __repr__(self) -> str:
        reserve0, reserve1 = self.get_reserves()
        return f"Pair({self._address}, reserves=({reserve0}, {reserve1}))"
