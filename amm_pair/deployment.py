"""Wiring of a pair with in-memory token ledgers and an event log.

``deploy_pair`` is the ``new(token0, token1, lp_token)`` constructor of the
pair together with everything it needs to run outside a chain: one shared
event log, and fresh ledgers for any token given by address only.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

import structlog

from amm_pair.config import DEFAULT_PAIR_CONFIG, PairConfig
from amm_pair.event_log import EventLog
from amm_pair.ledger.erc20 import Erc20Ledger
from amm_pair.models.types import normalize_address
from amm_pair.pair.pair import Pair

logger = structlog.get_logger()


def compute_pair_address(token0: str, token1: str, lp_token: str) -> str:
    """Deterministic pair address for a token triple."""
    data = (
        b"ConstantProductPair"
        + normalize_address(token0).encode("utf-8")
        + normalize_address(token1).encode("utf-8")
        + normalize_address(lp_token).encode("utf-8")
    )
    return "0x" + hashlib.sha256(data).hexdigest()[:40]


@dataclass
class Deployment:
    """A pair and the collaborators it was deployed with."""

    pair: Pair
    token0: Erc20Ledger
    token1: Erc20Ledger
    lp_token: Erc20Ledger
    events: EventLog
    tokens_by_name: dict[str, Erc20Ledger] = field(default_factory=dict)

    def token(self, name: str) -> Erc20Ledger:
        """Look up a ledger by symbol or address.

        Raises:
            KeyError: If no ledger matches
        """
        if name in self.tokens_by_name:
            return self.tokens_by_name[name]
        address = normalize_address(name)
        for ledger in (self.token0, self.token1, self.lp_token):
            if ledger.address == address:
                return ledger
        raise KeyError(name)


def deploy_pair(
    token0: str | Erc20Ledger,
    token1: str | Erc20Ledger,
    lp_token: str | Erc20Ledger,
    *,
    owner: str,
    address: str | None = None,
    events: EventLog | None = None,
    config: PairConfig = DEFAULT_PAIR_CONFIG,
) -> Deployment:
    """Deploy a pair over the given tokens.

    Tokens given as addresses get a fresh in-memory ledger wired to the
    shared event log. Reserves start at zero and the token references are
    fixed for the lifetime of the pair.

    Args:
        token0: First token (ledger or address)
        token1: Second token (ledger or address)
        lp_token: Liquidity-receipt token (ledger or address)
        owner: Pair owner (deployer)
        address: Pair address (default: derived from the token addresses)
        events: Event log shared by the pair and new ledgers
        config: Pair configuration

    Returns:
        Deployment holding the pair and its collaborators
    """
    log = events if events is not None else EventLog()

    def as_ledger(token: str | Erc20Ledger, symbol: str) -> Erc20Ledger:
        if isinstance(token, Erc20Ledger):
            return token
        return Erc20Ledger(token, symbol=symbol, events=log)

    ledger0 = as_ledger(token0, "TOKEN0")
    ledger1 = as_ledger(token1, "TOKEN1")
    lp_ledger = as_ledger(lp_token, "LP")

    pair_address = address or compute_pair_address(ledger0.address, ledger1.address, lp_ledger.address)
    pair = Pair(
        pair_address,
        ledger0,
        ledger1,
        lp_ledger,
        owner=owner,
        events=log,
        config=config,
    )

    logger.info(
        "pair_deployed",
        pair=pair.address,
        token0=ledger0.address,
        token1=ledger1.address,
        lp_token=lp_ledger.address,
        owner=pair.owner,
    )

    tokens_by_name = {
        ledger.symbol: ledger for ledger in (ledger0, ledger1, lp_ledger) if ledger.symbol
    }
    return Deployment(
        pair=pair,
        token0=ledger0,
        token1=ledger1,
        lp_token=lp_ledger,
        events=log,
        tokens_by_name=tokens_by_name,
    )
