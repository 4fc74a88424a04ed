"""Constant-product AMM pair - Python implementation."""

from amm_pair.config import DEFAULT_PAIR_CONFIG, PairConfig
from amm_pair.constants import MINIMUM_LIQUIDITY, ZERO_ADDRESS
from amm_pair.deployment import Deployment, deploy_pair
from amm_pair.event_log import EventLog, EventSink
from amm_pair.ledger import Erc20Ledger, LiquidityToken, TokenLedger
from amm_pair.math.swap import SwapOutcome
from amm_pair.pair import FlashSwapCallee, Pair

__version__ = "0.1.0"
__all__ = [
    "Pair",
    "FlashSwapCallee",
    "SwapOutcome",
    "PairConfig",
    "DEFAULT_PAIR_CONFIG",
    "MINIMUM_LIQUIDITY",
    "ZERO_ADDRESS",
    "Deployment",
    "deploy_pair",
    "EventLog",
    "EventSink",
    "TokenLedger",
    "LiquidityToken",
    "Erc20Ledger",
    "__version__",
]
