"""Swap math for the constant-product pair.

The pair uses the constant product formula: x * y = k
with a 0.3% fee on input amounts. The check performed after every swap is

    (balance0 * 1000 - amount0_in * 3) * (balance1 * 1000 - amount1_in * 3)
        >= reserve0 * reserve1 * 1000^2

i.e. the product, net of the fee on whatever was paid in, never decreases.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm_pair.constants import FEE_DENOMINATOR, FEE_MULTIPLIER, FEE_NUMERATOR
from amm_pair.errors import (
    InsufficientInputAmount,
    InsufficientLiquidity,
    InsufficientOutputAmount,
    InvariantViolation,
)
from amm_pair.safe_int import S


@dataclass(frozen=True)
class SwapOutcome:
    """Amounts attributed to a completed swap."""

    amount0_in: int
    amount1_in: int
    amount0_out: int
    amount1_out: int


def validate_outputs(amount0_out: int, amount1_out: int, reserve0: int, reserve1: int) -> None:
    """Check requested outputs against the current reserves.

    Raises:
        InsufficientOutputAmount: If both outputs are zero
        InsufficientLiquidity: If an output is not strictly below its reserve
    """
    if amount0_out <= 0 and amount1_out <= 0:
        raise InsufficientOutputAmount("Swap must request a positive output")
    if amount0_out >= reserve0 or amount1_out >= reserve1:
        raise InsufficientLiquidity(
            f"Outputs ({amount0_out}, {amount1_out}) must be below "
            f"reserves ({reserve0}, {reserve1})"
        )


def compute_amount_in(balance: int, reserve: int, amount_out: int) -> int:
    """Input attributed to the caller for one token.

    Anything held above the expected post-output reserve counts as paid in.
    """
    expected = S(reserve) - S(amount_out)
    return S(balance).saturating_sub(expected).value


def compute_amounts_in(
    balance0: int,
    balance1: int,
    reserve0: int,
    reserve1: int,
    amount0_out: int,
    amount1_out: int,
) -> tuple[int, int]:
    """Inputs for both tokens.

    Raises:
        InsufficientInputAmount: If nothing was paid in
    """
    amount0_in = compute_amount_in(balance0, reserve0, amount0_out)
    amount1_in = compute_amount_in(balance1, reserve1, amount1_out)
    if amount0_in == 0 and amount1_in == 0:
        raise InsufficientInputAmount("Swap received no input")
    return amount0_in, amount1_in


def check_invariant(
    balance0: int,
    balance1: int,
    amount0_in: int,
    amount1_in: int,
    reserve0: int,
    reserve1: int,
) -> None:
    """Enforce the fee-adjusted constant product.

    Raises:
        InvariantViolation: If the adjusted product is below the old one
    """
    balance0_adjusted = S(balance0) * FEE_DENOMINATOR - S(amount0_in) * FEE_NUMERATOR
    balance1_adjusted = S(balance1) * FEE_DENOMINATOR - S(amount1_in) * FEE_NUMERATOR
    k_after = balance0_adjusted * balance1_adjusted
    k_before = S(reserve0) * S(reserve1) * (FEE_DENOMINATOR * FEE_DENOMINATOR)
    if k_after < k_before:
        raise InvariantViolation(f"Invariant violation: k_after ({k_after}) < k_before ({k_before})")


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate output amount using constant product formula.

    Formula: amount_out = (in * 997 * res_out) / (res_in * 1000 + in * 997)

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool

    Returns:
        Largest output that passes the invariant check, 0 for empty input or reserves
    """
    if amount_in <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0

    amount_in_with_fee = S(amount_in) * FEE_MULTIPLIER
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * FEE_DENOMINATOR + amount_in_with_fee

    return (numerator // denominator).value


def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate required input for desired output.

    Formula: amount_in = (res_in * out * 1000) / ((res_out - out) * 997) + 1

    Args:
        amount_out: Desired output token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool

    Returns:
        Required input token amount, 0 for empty output or reserves

    Raises:
        InsufficientLiquidity: If amount_out is not below reserve_out
    """
    if amount_out <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"Cannot take {amount_out} out of a reserve of {reserve_out}"
        )

    numerator = S(reserve_in) * S(amount_out) * FEE_DENOMINATOR
    denominator = (S(reserve_out) - S(amount_out)) * FEE_MULTIPLIER

    return ((numerator // denominator) + 1).value
