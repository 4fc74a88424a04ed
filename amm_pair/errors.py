"""Pair error classes.

Every failure raised by a pair operation derives from PairError and carries a
short ``reason`` code, so callers can discriminate failures without parsing
messages. The codes match the revert strings of the UniswapV2 pair.
"""

from typing import ClassVar


class PairError(Exception):
    """Base error for pair operations."""

    reason: ClassVar[str] = "PAIR_ERROR"


class AuthorizationError(PairError):
    """Caller is not allowed to perform the operation."""

    reason = "FORBIDDEN"


class InsufficientLiquidityMinted(PairError):
    """Deposit would mint zero (or negative) liquidity."""

    reason = "INSUFFICIENT_LIQUIDITY_MINTED"


class InsufficientLiquidityBurned(PairError):
    """Burn would return zero of at least one token."""

    reason = "INSUFFICIENT_LIQUIDITY_BURNED"


class InsufficientOutputAmount(PairError):
    """Swap requested no output at all."""

    reason = "INSUFFICIENT_OUTPUT_AMOUNT"


class InsufficientLiquidity(PairError):
    """Swap output is not strictly below the reserve."""

    reason = "INSUFFICIENT_LIQUIDITY"


class InvalidRecipient(PairError):
    """Swap recipient is one of the pair's own tokens."""

    reason = "INVALID_TO"


class InsufficientInputAmount(PairError):
    """Nothing was paid in for a swap."""

    reason = "INSUFFICIENT_INPUT_AMOUNT"


class InvariantViolation(PairError):
    """Fee-adjusted constant product would decrease."""

    reason = "K"


class InsufficientAllowance(PairError):
    """Spender allowance is below the requested amount."""

    reason = "INSUFFICIENT_ALLOWANCE"


class InsufficientBalance(PairError):
    """Account balance is below the requested amount."""

    reason = "INSUFFICIENT_BALANCE"


class ReentrancyDetected(PairError):
    """A mutating operation was entered while another one holds the lock."""

    reason = "LOCKED"


class PairArithmeticError(PairError, ArithmeticError):
    """Base class for checked-arithmetic failures."""

    reason = "ARITHMETIC"


class ArithmeticOverflow(PairArithmeticError):
    """Value exceeds the fixed-width maximum."""

    reason = "OVERFLOW"


class ArithmeticUnderflow(PairArithmeticError):
    """Subtraction would produce a negative result."""

    reason = "UNDERFLOW"


class DivisionByZero(PairArithmeticError):
    """Division or modulo by zero."""

    reason = "DIVISION_BY_ZERO"
