"""Tests for the liquidity-receipt token pass-through on Pair."""

import pytest

from amm_pair.constants import MINIMUM_LIQUIDITY, ZERO_ADDRESS
from amm_pair.errors import AuthorizationError, InsufficientAllowance, InsufficientBalance
from amm_pair.models.events import Approval, Transfer
from tests.helpers import ALICE, BOB, CAROL, SEED_AMOUNT

ALICE_LIQUIDITY = SEED_AMOUNT - MINIMUM_LIQUIDITY


class TestLiquidityTokenPassThrough:
    def test_views_match_lp_ledger(self, seeded):
        assert seeded.pair.total_supply() == seeded.lp_token.total_supply() == SEED_AMOUNT
        assert seeded.pair.balance_of(ALICE) == ALICE_LIQUIDITY
        assert seeded.pair.allowance(ALICE, BOB) == 0

    def test_transfer(self, seeded):
        seeded.pair.transfer(BOB, 1_000, sender=ALICE)

        assert seeded.pair.balance_of(ALICE) == ALICE_LIQUIDITY - 1_000
        assert seeded.pair.balance_of(BOB) == 1_000
        assert seeded.events.last(Transfer) == Transfer(from_=ALICE, to=BOB, value=1_000)
        assert seeded.events.entries[-1].emitter == seeded.lp_token.address

    def test_transfer_more_than_balance(self, seeded):
        events_before = len(seeded.events)
        with pytest.raises(InsufficientBalance):
            seeded.pair.transfer(BOB, ALICE_LIQUIDITY + 1, sender=ALICE)
        assert seeded.pair.balance_of(BOB) == 0
        assert len(seeded.events) == events_before

    def test_approve_and_transfer_from(self, seeded):
        seeded.pair.approve(BOB, 5_000, sender=ALICE)
        assert seeded.events.last(Approval) == Approval(owner=ALICE, spender=BOB, value=5_000)

        seeded.pair.transfer_from(ALICE, CAROL, 2_000, sender=BOB)

        assert seeded.pair.allowance(ALICE, BOB) == 3_000
        assert seeded.pair.balance_of(CAROL) == 2_000

    def test_transfer_from_without_allowance(self, seeded):
        with pytest.raises(InsufficientAllowance):
            seeded.pair.transfer_from(ALICE, CAROL, 1, sender=BOB)
        assert seeded.pair.balance_of(CAROL) == 0

    def test_zero_address_cannot_move_locked_liquidity(self, seeded):
        with pytest.raises(AuthorizationError):
            seeded.pair.transfer(BOB, 1, sender=ZERO_ADDRESS)
        assert seeded.pair.balance_of(ZERO_ADDRESS) == MINIMUM_LIQUIDITY

    def test_transferred_liquidity_can_be_burned(self, seeded):
        seeded.pair.transfer(BOB, 100_000, sender=ALICE)

        assert seeded.pair.burn(BOB, sender=BOB) == (100_000, 100_000)
