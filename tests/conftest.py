"""Pytest configuration and fixtures."""

import pytest

from amm_pair.config import PairConfig
from amm_pair.deployment import Deployment
from amm_pair.event_log import EventLog
from amm_pair.ledger.erc20 import Erc20Ledger
from amm_pair.pair.pair import Pair
from tests.helpers import ALICE, SEED_AMOUNT, add_liquidity, make_deployment


@pytest.fixture
def deployment() -> Deployment:
    """An empty pair with zero reserves and no liquidity."""
    return make_deployment()


@pytest.fixture
def seeded(deployment: Deployment) -> Deployment:
    """A pair seeded by ALICE with SEED_AMOUNT of each token."""
    add_liquidity(deployment, ALICE, SEED_AMOUNT, SEED_AMOUNT)
    return deployment


@pytest.fixture
def open_deployment() -> Deployment:
    """An empty pair whose skim and sync anyone may call."""
    return make_deployment(config=PairConfig(owner_only_maintenance=False))


@pytest.fixture
def pair(deployment: Deployment) -> Pair:
    return deployment.pair


@pytest.fixture
def token0(deployment: Deployment) -> Erc20Ledger:
    return deployment.token0


@pytest.fixture
def token1(deployment: Deployment) -> Erc20Ledger:
    return deployment.token1


@pytest.fixture
def lp_token(deployment: Deployment) -> Erc20Ledger:
    return deployment.lp_token


@pytest.fixture
def events(deployment: Deployment) -> EventLog:
    return deployment.events
