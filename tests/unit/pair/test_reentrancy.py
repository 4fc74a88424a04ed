"""Tests for the reentrancy lock on mutating pair operations."""

import pytest

from amm_pair.errors import ReentrancyDetected
from tests.helpers import ALICE, BOB, OWNER, SEED_AMOUNT, pay_in


class Reenter:
    """Flash-swap callee that calls back into the pair."""

    address = "0x7e3e000000000000000000000000000000000007"

    def __init__(self, action) -> None:
        self.action = action
        self.errors: list[Exception] = []
        self.observed: dict[str, object] = {}

    def on_flash_swap(self, pair, sender, amount0_out, amount1_out, data):
        self.observed["locked"] = pair.locked
        self.observed["reserves"] = pair.get_reserves()
        try:
            self.action(pair)
        except ReentrancyDetected as exc:
            self.errors.append(exc)
        # Repay enough to pass the invariant check
        pair.token1.transfer(self.address, pair.address, 20)


REENTRY_ACTIONS = {
    "swap": lambda pair: pair.swap(0, 1, BOB, sender=BOB),
    "mint": lambda pair: pair.mint(BOB, sender=BOB),
    "burn": lambda pair: pair.burn(ALICE, sender=ALICE),
    "skim": lambda pair: pair.skim(OWNER, sender=OWNER),
    "sync": lambda pair: pair.sync(sender=OWNER),
}


class TestFlashSwapReentry:
    @pytest.mark.parametrize("operation", sorted(REENTRY_ACTIONS))
    def test_nested_operation_rejected(self, seeded, operation):
        callee = Reenter(REENTRY_ACTIONS[operation])
        seeded.token1.mint(callee.address, 10)

        seeded.pair.swap(0, 10, callee.address, sender=BOB, callee=callee)

        assert len(callee.errors) == 1
        assert callee.errors[0].reason == "LOCKED"
        assert not seeded.pair.locked

    def test_reads_allowed_while_locked(self, seeded):
        callee = Reenter(lambda pair: None)
        seeded.token1.mint(callee.address, 10)

        seeded.pair.swap(0, 10, callee.address, sender=BOB, callee=callee)

        assert callee.observed["locked"] is True
        assert callee.observed["reserves"] == (SEED_AMOUNT, SEED_AMOUNT)


class TestLedgerHookReentry:
    """A token receiver calling back into the pair during a transfer."""

    def test_uncaught_reentry_aborts_outer_operation(self, seeded):
        def hook(token, from_, to, amount):
            seeded.pair.sync(sender=OWNER)

        seeded.token1.register_receiver(BOB, hook)
        pay_in(seeded, BOB, amount0_in=1_000)

        with pytest.raises(ReentrancyDetected):
            seeded.pair.swap(0, 996, BOB, sender=BOB)

        assert seeded.token1.balance_of(BOB) == 0
        assert seeded.pair.get_reserves() == (SEED_AMOUNT, SEED_AMOUNT)
        assert not seeded.pair.locked

    def test_caught_reentry_leaves_outer_operation_intact(self, seeded):
        rejected = []

        def hook(token, from_, to, amount):
            try:
                seeded.pair.swap(0, 1, BOB, sender=BOB)
            except ReentrancyDetected as exc:
                rejected.append(exc)

        seeded.token1.register_receiver(BOB, hook)
        pay_in(seeded, BOB, amount0_in=1_000)

        outcome = seeded.pair.swap(0, 996, BOB, sender=BOB)

        assert len(rejected) == 1
        assert outcome.amount1_out == 996
        assert seeded.token1.balance_of(BOB) == 996

    def test_burn_payout_hook_cannot_reenter(self, seeded):
        rejected = []

        def hook(token, from_, to, amount):
            try:
                seeded.pair.mint(ALICE, sender=ALICE)
            except ReentrancyDetected as exc:
                rejected.append(exc)

        seeded.token0.register_receiver(ALICE, hook)
        seeded.pair.burn(ALICE, sender=ALICE)

        assert len(rejected) == 1
        assert seeded.pair.get_reserves() == (1_000, 1_000)
