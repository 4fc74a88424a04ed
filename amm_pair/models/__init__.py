"""Pydantic models for pair events and shared types."""

from amm_pair.models.events import (
    EVENT_TYPES,
    Approval,
    Burn,
    Event,
    Mint,
    Swap,
    Sync,
    Transfer,
)
from amm_pair.models.types import Address, Uint128, normalize_address, validate_uint128

__all__ = [
    # Events
    "Event",
    "Sync",
    "Mint",
    "Burn",
    "Swap",
    "Transfer",
    "Approval",
    "EVENT_TYPES",
    # Types
    "Address",
    "Uint128",
    "normalize_address",
    "validate_uint128",
]
