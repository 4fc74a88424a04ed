"""Protocol constants for the constant-product pair.

Centralizes widths, fee parameters and well-known addresses.
"""

# Fixed integer widths. Balances and supplies are uint128, reserves are
# uint112 so that reserve0 * reserve1 * 1000**2 always fits the uint256
# used for intermediate products in the pair math.
UINT112_MAX = 2**112 - 1
UINT128_MAX = 2**128 - 1
UINT256_MAX = 2**256 - 1

# Liquidity locked forever on the first mint
MINIMUM_LIQUIDITY = 10**3

# 0.3% fee on input, expressed against a 1000 base:
# balance_adjusted = balance * FEE_DENOMINATOR - amount_in * FEE_NUMERATOR
FEE_DENOMINATOR = 1000
FEE_NUMERATOR = 3
# Multiplier applied to inputs when quoting (1000 - 3)
FEE_MULTIPLIER = FEE_DENOMINATOR - FEE_NUMERATOR

# Nobody controls this account, so liquidity minted to it is unrecoverable
ZERO_ADDRESS = "0x" + "00" * 20
