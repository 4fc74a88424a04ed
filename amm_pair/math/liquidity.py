"""Liquidity issuance math for the constant-product pair.

Pure functions: they read nothing and mutate nothing. All arithmetic goes
through SafeInt, so underflow, overflow and division by zero raise instead of
producing a bad amount.

Mint:
    first deposit (total_supply == 0):
        liquidity = isqrt(amount0 * amount1) - MINIMUM_LIQUIDITY
    later deposits:
        liquidity = min(amount0 * total_supply // reserve0,
                        amount1 * total_supply // reserve1)

Burn:
    amount_i = liquidity * balance_i // total_supply
"""

from __future__ import annotations

from amm_pair.constants import MINIMUM_LIQUIDITY
from amm_pair.errors import InsufficientLiquidityBurned, InsufficientLiquidityMinted
from amm_pair.safe_int import S


def compute_deposits(
    balance0: int,
    balance1: int,
    reserve0: int,
    reserve1: int,
) -> tuple[int, int]:
    """Amounts deposited since the last reserve snapshot.

    Raises:
        ArithmeticUnderflow: If a balance is below its reserve
    """
    amount0 = S(balance0) - S(reserve0)
    amount1 = S(balance1) - S(reserve1)
    return amount0.value, amount1.value


def compute_liquidity_minted(
    amount0: int,
    amount1: int,
    reserve0: int,
    reserve1: int,
    total_supply: int,
) -> int:
    """Compute liquidity-receipt units to mint for a deposit.

    On the first deposit MINIMUM_LIQUIDITY is subtracted; the caller is
    responsible for minting it to the zero address.

    Taking the smaller of the two ratios means a lopsided deposit mints no
    more than the scarcer side justifies; the excess is donated to the pool.

    Args:
        amount0: Deposited amount of token0
        amount1: Deposited amount of token1
        reserve0: Reserve of token0 before the deposit
        reserve1: Reserve of token1 before the deposit
        total_supply: Liquidity-receipt supply before the deposit

    Returns:
        Liquidity to mint to the depositor (always > 0)

    Raises:
        InsufficientLiquidityMinted: If the result would be zero or negative
        DivisionByZero: If supply exists but a reserve is zero
    """
    if total_supply == 0:
        root = (S(amount0) * S(amount1)).isqrt()
        if root <= MINIMUM_LIQUIDITY:
            raise InsufficientLiquidityMinted(
                f"isqrt({amount0} * {amount1}) = {root.value} does not exceed "
                f"MINIMUM_LIQUIDITY ({MINIMUM_LIQUIDITY})"
            )
        liquidity = root - MINIMUM_LIQUIDITY
    else:
        supply = S(total_supply)
        liquidity0 = (S(amount0) * supply) // S(reserve0)
        liquidity1 = (S(amount1) * supply) // S(reserve1)
        liquidity = liquidity0.min(liquidity1)

    if liquidity <= 0:
        raise InsufficientLiquidityMinted(
            f"Deposit ({amount0}, {amount1}) mints no liquidity at supply {total_supply}"
        )
    return liquidity.to_uint128()


def compute_burn_amounts(
    liquidity: int,
    balance0: int,
    balance1: int,
    total_supply: int,
) -> tuple[int, int]:
    """Compute the underlying amounts returned for burning ``liquidity``.

    Redemption is pro rata against actual balances (not reserves), rounding
    down, so the pool never pays out more than it holds.

    Raises:
        InsufficientLiquidityBurned: If either amount is zero, or nothing
            is outstanding
    """
    if total_supply == 0:
        raise InsufficientLiquidityBurned("No liquidity outstanding")

    supply = S(total_supply)
    amount0 = (S(liquidity) * S(balance0)) // supply
    amount1 = (S(liquidity) * S(balance1)) // supply

    if amount0 <= 0 or amount1 <= 0:
        raise InsufficientLiquidityBurned(
            f"Burning {liquidity} of {total_supply} returns ({amount0.value}, {amount1.value})"
        )
    return amount0.to_uint128(), amount1.to_uint128()
