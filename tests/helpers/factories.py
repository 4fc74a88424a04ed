"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_deployment, add_liquidity

    deployment = make_deployment()
    add_liquidity(deployment, ALICE, 10_000, 10_000)
"""

from amm_pair.config import DEFAULT_PAIR_CONFIG, PairConfig
from amm_pair.deployment import Deployment, deploy_pair
from tests.helpers.constants import LP_TOKEN, OWNER, PAIR, TOKEN0, TOKEN1


def make_deployment(
    owner: str = OWNER,
    config: PairConfig = DEFAULT_PAIR_CONFIG,
) -> Deployment:
    """Deploy an empty pair over fresh in-memory ledgers.

    Args:
        owner: Pair owner (default: OWNER)
        config: Pair configuration (default: owner-only skim/sync)

    Returns:
        Deployment with zero reserves and zero liquidity supply
    """
    return deploy_pair(TOKEN0, TOKEN1, LP_TOKEN, owner=owner, address=PAIR, config=config)


def deposit(deployment: Deployment, provider: str, amount0: int, amount1: int) -> None:
    """Fund ``provider`` and send both amounts to the pair without minting."""
    pair_address = deployment.pair.address
    if amount0:
        deployment.token0.mint(provider, amount0)
        deployment.token0.transfer(provider, pair_address, amount0)
    if amount1:
        deployment.token1.mint(provider, amount1)
        deployment.token1.transfer(provider, pair_address, amount1)


def add_liquidity(
    deployment: Deployment,
    provider: str,
    amount0: int,
    amount1: int,
    to: str | None = None,
) -> int:
    """Deposit both tokens and mint liquidity to ``to`` (default: provider).

    Returns:
        Liquidity minted
    """
    deposit(deployment, provider, amount0, amount1)
    return deployment.pair.mint(to or provider, sender=provider)


def pay_in(deployment: Deployment, trader: str, amount0_in: int = 0, amount1_in: int = 0) -> None:
    """Fund ``trader`` and send swap inputs to the pair."""
    deposit(deployment, trader, amount0_in, amount1_in)
