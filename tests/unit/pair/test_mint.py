"""Tests for Pair.mint."""

import pytest

from amm_pair.config import PairConfig
from amm_pair.constants import MINIMUM_LIQUIDITY, ZERO_ADDRESS
from amm_pair.errors import ArithmeticOverflow, AuthorizationError, InsufficientLiquidityMinted
from amm_pair.models.events import Mint, Sync, Transfer
from tests.helpers import ALICE, BOB, OWNER, add_liquidity, deposit, make_deployment


class TestBootstrapMint:
    """First deposit into an empty pair."""

    def test_mints_root_minus_locked_liquidity(self, deployment):
        liquidity = add_liquidity(deployment, ALICE, 10_000, 10_000)

        assert liquidity == 9_000
        assert deployment.pair.balance_of(ALICE) == 9_000
        assert deployment.pair.balance_of(ZERO_ADDRESS) == MINIMUM_LIQUIDITY
        assert deployment.pair.total_supply() == 10_000
        assert deployment.pair.get_reserves() == (10_000, 10_000)

    def test_emits_sync_then_mint(self, deployment):
        add_liquidity(deployment, ALICE, 10_000, 10_000)
        pair_events = deployment.events.query(emitter=deployment.pair.address)

        assert pair_events == [
            Sync(reserve0=10_000, reserve1=10_000),
            Mint(sender=ALICE, amount0=10_000, amount1=10_000),
        ]
        lp_mints = deployment.events.query(Transfer, emitter=deployment.lp_token.address, from_=None)
        assert [(event.to, event.value) for event in lp_mints] == [
            (ZERO_ADDRESS, MINIMUM_LIQUIDITY),
            (ALICE, 9_000),
        ]

    def test_mint_to_other_recipient(self, deployment):
        add_liquidity(deployment, ALICE, 10_000, 10_000, to=BOB)
        assert deployment.pair.balance_of(BOB) == 9_000
        assert deployment.pair.balance_of(ALICE) == 0
        assert deployment.events.last(Mint).sender == ALICE

    def test_root_not_above_minimum_fails(self, deployment):
        """1000/1000 cannot mint anything and leaves no trace."""
        deposit(deployment, ALICE, 1_000, 1_000)
        events_before = len(deployment.events)

        with pytest.raises(InsufficientLiquidityMinted):
            deployment.pair.mint(ALICE, sender=ALICE)

        assert deployment.pair.total_supply() == 0
        assert deployment.pair.balance_of(ZERO_ADDRESS) == 0
        assert deployment.pair.get_reserves() == (0, 0)
        assert len(deployment.events) == events_before
        # The deposit stays with the pair and can be topped up
        deposit(deployment, ALICE, 1, 1)
        assert deployment.pair.mint(ALICE, sender=ALICE) == 1

    def test_one_sided_deposit_fails(self, deployment):
        deposit(deployment, ALICE, 50_000, 0)
        with pytest.raises(InsufficientLiquidityMinted):
            deployment.pair.mint(ALICE, sender=ALICE)


class TestProportionalMint:
    """Deposits into a pair with outstanding liquidity."""

    def test_proportional_deposit(self, deployment):
        add_liquidity(deployment, ALICE, 10_000, 40_000)  # isqrt = 20000
        supply = deployment.pair.total_supply()

        liquidity = add_liquidity(deployment, BOB, 1_000, 4_000)

        assert liquidity == 1_000 * supply // 10_000
        assert deployment.pair.total_supply() == supply + liquidity
        assert deployment.pair.get_reserves() == (11_000, 44_000)

    def test_lopsided_deposit_donates_excess(self, deployment):
        add_liquidity(deployment, ALICE, 10_000, 10_000)

        liquidity = add_liquidity(deployment, BOB, 1_000, 5_000)

        assert liquidity == 1_000
        # The whole deposit is in the reserves, the excess token1 belongs to every holder
        assert deployment.pair.get_reserves() == (11_000, 15_000)

    @pytest.fixture
    def reference_pool(self, deployment):
        """Reserves (1000, 2000) backed by the locked 1000 units only."""
        add_liquidity(deployment, ALICE, 2_000, 2_000)
        deployment.pair.burn(ALICE, sender=ALICE)
        deposit(deployment, BOB, 0, 1_000)
        deployment.pair.sync(sender=OWNER)
        assert deployment.pair.get_reserves() == (1_000, 2_000)
        assert deployment.pair.total_supply() == MINIMUM_LIQUIDITY
        return deployment

    def test_reference_pool_deposit(self, reference_pool):
        liquidity = add_liquidity(reference_pool, BOB, 100, 200)

        assert liquidity == 100
        assert reference_pool.pair.balance_of(BOB) == 100
        assert reference_pool.pair.get_reserves() == (1_100, 2_200)

    def test_reference_pool_mismatched_deposit(self, reference_pool):
        assert add_liquidity(reference_pool, BOB, 100, 150) == 75

    def test_nothing_deposited_fails(self, seeded):
        with pytest.raises(InsufficientLiquidityMinted):
            seeded.pair.mint(BOB, sender=BOB)


class TestMintFailures:
    def test_zero_address_caller_rejected(self, deployment):
        deposit(deployment, ALICE, 10_000, 10_000)
        with pytest.raises(AuthorizationError):
            deployment.pair.mint(ALICE, sender=ZERO_ADDRESS)

    def test_reserve_overflow_rolls_back(self):
        deployment = make_deployment(config=PairConfig(max_reserve=10**6))
        deposit(deployment, ALICE, 2 * 10**6, 10**6)

        with pytest.raises(ArithmeticOverflow):
            deployment.pair.mint(ALICE, sender=ALICE)

        assert deployment.pair.total_supply() == 0
        assert deployment.pair.balance_of(ALICE) == 0
        assert deployment.pair.get_reserves() == (0, 0)
        assert not deployment.pair.locked
