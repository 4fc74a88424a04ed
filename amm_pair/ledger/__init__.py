"""Token ledgers consumed by the pair."""

from amm_pair.ledger.base import LiquidityToken, ReceiveHook, TokenLedger
from amm_pair.ledger.erc20 import Erc20Ledger

__all__ = ["TokenLedger", "LiquidityToken", "ReceiveHook", "Erc20Ledger"]
