"""Pure math for liquidity issuance and swap validation."""

from amm_pair.math.liquidity import (
    compute_burn_amounts,
    compute_deposits,
    compute_liquidity_minted,
)
from amm_pair.math.swap import (
    SwapOutcome,
    check_invariant,
    compute_amount_in,
    compute_amounts_in,
    get_amount_in,
    get_amount_out,
    validate_outputs,
)

__all__ = [
    # Liquidity
    "compute_deposits",
    "compute_liquidity_minted",
    "compute_burn_amounts",
    # Swap
    "SwapOutcome",
    "validate_outputs",
    "compute_amount_in",
    "compute_amounts_in",
    "check_invariant",
    "get_amount_out",
    "get_amount_in",
]
