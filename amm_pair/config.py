"""Pair configuration."""

from dataclasses import dataclass

from amm_pair.constants import UINT112_MAX


@dataclass(frozen=True)
class PairConfig:
    """Deployment-time configuration for a pair.

    The fee and the minimum liquidity are protocol constants and are not
    configurable; this only covers access control and width limits.

    Attributes:
        owner_only_maintenance: If True, skim and sync may only be called by
            the pair owner. If False, anyone may call them (UniswapV2 behavior).
        max_reserve: Upper bound for a stored reserve (default: uint112 max).
            update() raises ArithmeticOverflow for balances above it.
    """

    owner_only_maintenance: bool = True
    max_reserve: int = UINT112_MAX


# Default configuration instance
DEFAULT_PAIR_CONFIG = PairConfig()
