"""Request and response bodies for the pair API."""

from typing import Any

from pydantic import BaseModel, Field

from amm_pair.models.types import Address, Uint128


class PairState(BaseModel):
    """Addresses, reserves and liquidity supply of the pair."""

    address: Address
    token0: Address
    token1: Address
    lp_token: Address = Field(alias="lpToken")
    owner: Address
    reserve0: int
    reserve1: int
    total_supply: int = Field(alias="totalSupply")

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount_in: int = Field(alias="amountIn")
    amount_out: int = Field(alias="amountOut")
    zero_for_one: bool = Field(alias="zeroForOne")

    model_config = {"populate_by_name": True}


class CallerRequest(BaseModel):
    """Body carrying only the caller identity (sync)."""

    sender: Address


class RecipientRequest(CallerRequest):
    """Body for mint, burn and skim."""

    to: Address


class SwapRequest(RecipientRequest):
    """Body for swap. Inputs must already have been sent to the pair."""

    amount0_out: Uint128 = Field(default=0, alias="amount0Out")
    amount1_out: Uint128 = Field(default=0, alias="amount1Out")

    model_config = {"populate_by_name": True}


class TransferRequest(RecipientRequest):
    """Body for token transfers and faucet drips."""

    value: Uint128


class MintResponse(BaseModel):
    liquidity: int


class AmountsResponse(BaseModel):
    """Pair of token amounts (burn payout, skimmed excess)."""

    amount0: int
    amount1: int


class SwapResponse(BaseModel):
    amount0_in: int = Field(alias="amount0In")
    amount1_in: int = Field(alias="amount1In")
    amount0_out: int = Field(alias="amount0Out")
    amount1_out: int = Field(alias="amount1Out")

    model_config = {"populate_by_name": True}


class ReservesResponse(BaseModel):
    reserve0: int
    reserve1: int


class BalanceResponse(BaseModel):
    token: Address
    account: Address
    balance: int


class EventRecord(BaseModel):
    """One entry of the event log."""

    index: int
    emitter: Address
    name: str
    fields: dict[str, Any]


class ErrorResponse(BaseModel):
    """Discriminated failure of a pair or ledger operation."""

    error: str
    detail: str
