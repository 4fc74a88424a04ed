"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Addresses and common amounts
- factories: Deployment and liquidity factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    LP_TOKEN,
    OWNER,
    PAIR,
    SEED_AMOUNT,
    TOKEN0,
    TOKEN1,
    ZERO,
)
from tests.helpers.factories import add_liquidity, deposit, make_deployment, pay_in

__all__ = [
    # Constants
    "TOKEN0",
    "TOKEN1",
    "LP_TOKEN",
    "PAIR",
    "OWNER",
    "ALICE",
    "BOB",
    "CAROL",
    "ZERO",
    "SEED_AMOUNT",
    # Factories
    "make_deployment",
    "deposit",
    "add_liquidity",
    "pay_in",
]
