"""Pair state and operations."""

from amm_pair.pair.lock import ReentrancyGuard
from amm_pair.pair.pair import FlashSwapCallee, Pair
from amm_pair.pair.reserves import ReserveLedger

__all__ = ["Pair", "FlashSwapCallee", "ReserveLedger", "ReentrancyGuard"]
