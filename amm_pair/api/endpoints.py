"""API endpoints for the pair devnet."""

import os

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from amm_pair.api.schemas import (
    AmountsResponse,
    BalanceResponse,
    CallerRequest,
    ErrorResponse,
    EventRecord,
    MintResponse,
    PairState,
    QuoteResponse,
    RecipientRequest,
    ReservesResponse,
    SwapRequest,
    SwapResponse,
    TransferRequest,
)
from amm_pair.deployment import Deployment, deploy_pair
from amm_pair.ledger.erc20 import Erc20Ledger
from amm_pair.models.events import EVENT_TYPES
from amm_pair.models.types import is_valid_address, normalize_address

logger = structlog.get_logger()

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Pair or ledger operation failed"},
        403: {"model": ErrorResponse, "description": "Caller not authorized"},
    }
)

# Devnet deployment addresses, configurable via environment variables
TOKEN0_ADDRESS = os.environ.get("AMM_TOKEN0", "0x" + "11" * 20)
TOKEN1_ADDRESS = os.environ.get("AMM_TOKEN1", "0x" + "22" * 20)
LP_TOKEN_ADDRESS = os.environ.get("AMM_LP_TOKEN", "0x" + "33" * 20)
OWNER_ADDRESS = os.environ.get("AMM_OWNER", "0x" + "aa" * 20)

# Faucet mints test tokens out of thin air, keep it off outside devnets
FAUCET_ENABLED = os.environ.get("AMM_ENABLE_FAUCET", "false").lower() in ("true", "1", "yes")

# Query parameters of /events that are not event field filters
_EVENT_QUERY_RESERVED = {"name", "emitter", "limit"}

# Event field filters of /events, by python field name and by alias
_EVENT_FIELDS: dict[str, str] = {
    key: field
    for event_type in EVENT_TYPES.values()
    for field, info in event_type.model_fields.items()
    for key in (field, info.alias or field)
}

_default_deployment: Deployment | None = None


def get_default_deployment() -> Deployment:
    """Get or create the process-wide devnet deployment."""
    global _default_deployment
    if _default_deployment is None:
        _default_deployment = deploy_pair(
            TOKEN0_ADDRESS, TOKEN1_ADDRESS, LP_TOKEN_ADDRESS, owner=OWNER_ADDRESS
        )
    return _default_deployment


def get_deployment() -> Deployment:
    """Dependency provider for the deployment.

    Override this in tests to inject a fresh deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment
    """
    return get_default_deployment()


def _pair_state(deployment: Deployment) -> PairState:
    pair = deployment.pair
    reserve0, reserve1 = pair.get_reserves()
    return PairState(
        address=pair.address,
        token0=pair.token0.address,
        token1=pair.token1.address,
        lp_token=pair.lp_token.address,
        owner=pair.owner,
        reserve0=reserve0,
        reserve1=reserve1,
        total_supply=pair.total_supply(),
    )


def _ledger(deployment: Deployment, token: str) -> Erc20Ledger:
    try:
        return deployment.token(token)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown token: {token}") from None


def _parse_filter_value(value: str) -> int | str | None:
    """Event field value from a query string: amount, address or none."""
    if value.lower() in ("none", "null"):
        return None
    if value.isdigit():
        return int(value)
    return normalize_address(value)


@router.get("/pair")
async def get_pair(deployment: Deployment = Depends(get_deployment)) -> PairState:
    """Addresses, reserves and liquidity supply."""
    return _pair_state(deployment)


@router.get("/pair/quote")
async def quote(
    amount_in: int,
    zero_for_one: bool = True,
    deployment: Deployment = Depends(get_deployment),
) -> QuoteResponse:
    """Output a swap would receive at the current reserves."""
    if amount_in < 0:
        raise HTTPException(status_code=422, detail="amount_in must be non-negative")
    amount_out = deployment.pair.quote(amount_in, zero_for_one)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out, zero_for_one=zero_for_one)


@router.post("/pair/mint")
async def mint(
    body: RecipientRequest,
    deployment: Deployment = Depends(get_deployment),
) -> MintResponse:
    """Mint liquidity for tokens already sent to the pair."""
    liquidity = deployment.pair.mint(body.to, sender=body.sender)
    logger.info("api_mint", sender=body.sender, to=body.to, liquidity=liquidity)
    return MintResponse(liquidity=liquidity)


@router.post("/pair/burn")
async def burn(
    body: RecipientRequest,
    deployment: Deployment = Depends(get_deployment),
) -> AmountsResponse:
    """Redeem the caller's whole liquidity position."""
    amount0, amount1 = deployment.pair.burn(body.to, sender=body.sender)
    logger.info("api_burn", sender=body.sender, amount0=amount0, amount1=amount1)
    return AmountsResponse(amount0=amount0, amount1=amount1)


@router.post("/pair/swap")
async def swap(
    body: SwapRequest,
    deployment: Deployment = Depends(get_deployment),
) -> SwapResponse:
    """Swap against inputs already sent to the pair."""
    outcome = deployment.pair.swap(body.amount0_out, body.amount1_out, body.to, sender=body.sender)
    logger.info(
        "api_swap",
        sender=body.sender,
        amount0_in=outcome.amount0_in,
        amount1_in=outcome.amount1_in,
        amount0_out=outcome.amount0_out,
        amount1_out=outcome.amount1_out,
    )
    return SwapResponse(
        amount0_in=outcome.amount0_in,
        amount1_in=outcome.amount1_in,
        amount0_out=outcome.amount0_out,
        amount1_out=outcome.amount1_out,
    )


@router.post("/pair/skim")
async def skim(
    body: RecipientRequest,
    deployment: Deployment = Depends(get_deployment),
) -> AmountsResponse:
    """Send balances above the reserves to ``to`` (owner only)."""
    amount0, amount1 = deployment.pair.skim(body.to, sender=body.sender)
    return AmountsResponse(amount0=amount0, amount1=amount1)


@router.post("/pair/sync")
async def sync(
    body: CallerRequest,
    deployment: Deployment = Depends(get_deployment),
) -> ReservesResponse:
    """Set reserves to the current balances (owner only)."""
    reserve0, reserve1 = deployment.pair.sync(sender=body.sender)
    return ReservesResponse(reserve0=reserve0, reserve1=reserve1)


@router.get("/tokens/{token}/balance/{account}")
async def balance_of(
    token: str,
    account: str,
    deployment: Deployment = Depends(get_deployment),
) -> BalanceResponse:
    if not is_valid_address(normalize_address(account)):
        raise HTTPException(status_code=422, detail=f"Invalid address: {account}")
    ledger = _ledger(deployment, token)
    return BalanceResponse(token=ledger.address, account=account, balance=ledger.balance_of(account))


@router.post("/tokens/{token}/transfer")
async def transfer(
    token: str,
    body: TransferRequest,
    deployment: Deployment = Depends(get_deployment),
) -> BalanceResponse:
    """Transfer tokens from the caller, e.g. to fund a mint or a swap."""
    ledger = _ledger(deployment, token)
    if ledger is deployment.lp_token:
        deployment.pair.transfer(body.to, body.value, sender=body.sender)
    else:
        ledger.transfer(body.sender, body.to, body.value)
    return BalanceResponse(token=ledger.address, account=body.sender, balance=ledger.balance_of(body.sender))


@router.post("/tokens/{token}/faucet")
async def faucet(
    token: str,
    body: TransferRequest,
    deployment: Deployment = Depends(get_deployment),
) -> BalanceResponse:
    """Mint test tokens to ``to`` (devnet only, never the LP token)."""
    if not FAUCET_ENABLED:
        raise HTTPException(status_code=404, detail="Faucet is disabled")
    ledger = _ledger(deployment, token)
    if ledger is deployment.lp_token:
        raise HTTPException(status_code=400, detail="Liquidity tokens are only minted by the pair")
    ledger.mint(body.to, body.value)
    logger.info("faucet_drip", token=ledger.address, to=body.to, value=body.value)
    return BalanceResponse(token=ledger.address, account=body.to, balance=ledger.balance_of(body.to))


@router.get("/events")
async def events(
    request: Request,
    name: str | None = None,
    emitter: str | None = None,
    limit: int = 100,
    deployment: Deployment = Depends(get_deployment),
) -> list[EventRecord]:
    """Query the event log.

    Any query parameter other than name/emitter/limit filters on an event
    field, by field name or wire name, e.g. ``/events?name=Transfer&from=0x...``.
    ``none`` matches an absent address (mints and burns). Returns the most
    recent ``limit`` matches in emission order.
    """
    if name is not None and name not in EVENT_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown event: {name}")
    event_type = EVENT_TYPES[name] if name is not None else None

    filters = {}
    for key, value in request.query_params.items():
        if key in _EVENT_QUERY_RESERVED:
            continue
        if key not in _EVENT_FIELDS:
            raise HTTPException(status_code=422, detail=f"Unknown event field: {key}")
        filters[_EVENT_FIELDS[key]] = _parse_filter_value(value)

    entries = deployment.events.select(event_type, emitter=emitter, **filters)
    if limit <= 0:
        return []
    return [
        EventRecord(index=entry.index, emitter=entry.emitter, name=entry.event.name, fields=entry.event.indexed())
        for entry in entries[-limit:]
    ]
