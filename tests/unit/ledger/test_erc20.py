"""Tests for the in-memory ERC-20 ledger."""

import pytest

from amm_pair.constants import UINT128_MAX
from amm_pair.errors import ArithmeticOverflow, InsufficientAllowance, InsufficientBalance
from amm_pair.event_log import EventLog
from amm_pair.ledger import Erc20Ledger, LiquidityToken, TokenLedger
from amm_pair.models.events import Approval, Transfer
from tests.helpers import ALICE, BOB, CAROL, TOKEN0


@pytest.fixture
def log() -> EventLog:
    return EventLog()


@pytest.fixture
def ledger(log: EventLog) -> Erc20Ledger:
    token = Erc20Ledger(TOKEN0, symbol="TOKEN0", events=log)
    token.mint(ALICE, 1_000)
    return token


class TestProtocols:
    def test_satisfies_ledger_protocols(self, ledger):
        assert isinstance(ledger, TokenLedger)
        assert isinstance(ledger, LiquidityToken)

    def test_invalid_address_rejected(self):
        with pytest.raises(ValueError):
            Erc20Ledger("0x1234")


class TestMintBurn:
    def test_mint(self, ledger, log):
        assert ledger.balance_of(ALICE) == 1_000
        assert ledger.total_supply() == 1_000
        assert log.last(Transfer) == Transfer(from_=None, to=ALICE, value=1_000)

    def test_mint_overflow(self, ledger):
        with pytest.raises(ArithmeticOverflow):
            ledger.mint(BOB, UINT128_MAX)
        assert ledger.balance_of(BOB) == 0

    def test_burn(self, ledger, log):
        ledger.burn(ALICE, 400)
        assert ledger.balance_of(ALICE) == 600
        assert ledger.total_supply() == 600
        assert log.last(Transfer) == Transfer(from_=ALICE, to=None, value=400)

    def test_burn_more_than_balance(self, ledger):
        with pytest.raises(InsufficientBalance):
            ledger.burn(ALICE, 1_001)


class TestTransfer:
    def test_transfer(self, ledger, log):
        ledger.transfer(ALICE, BOB, 250)
        assert ledger.balance_of(ALICE) == 750
        assert ledger.balance_of(BOB) == 250
        assert ledger.total_supply() == 1_000
        assert log.last(Transfer) == Transfer(from_=ALICE, to=BOB, value=250)

    def test_transfer_insufficient_balance(self, ledger):
        with pytest.raises(InsufficientBalance):
            ledger.transfer(ALICE, BOB, 1_001)
        assert ledger.balance_of(ALICE) == 1_000

    def test_addresses_are_case_insensitive(self, ledger):
        ledger.transfer(ALICE.upper().replace("0X", "0x"), BOB, 1)
        assert ledger.balance_of(BOB.upper().replace("0X", "0x")) == 1

    def test_zero_balances_are_dropped(self, ledger):
        ledger.transfer(ALICE, BOB, 1_000)
        assert ledger.balance_of(ALICE) == 0
        assert "holders=1" in repr(ledger)


class TestAllowance:
    def test_approve(self, ledger, log):
        ledger.approve(ALICE, BOB, 300)
        assert ledger.allowance(ALICE, BOB) == 300
        assert log.last(Approval) == Approval(owner=ALICE, spender=BOB, value=300)

    def test_approve_overwrites(self, ledger):
        ledger.approve(ALICE, BOB, 300)
        ledger.approve(ALICE, BOB, 50)
        assert ledger.allowance(ALICE, BOB) == 50

    def test_transfer_from_spends_allowance(self, ledger):
        ledger.approve(ALICE, BOB, 300)
        ledger.transfer_from(ALICE, CAROL, 200, spender=BOB)
        assert ledger.allowance(ALICE, BOB) == 100
        assert ledger.balance_of(CAROL) == 200

    def test_transfer_from_insufficient_allowance(self, ledger):
        ledger.approve(ALICE, BOB, 100)
        with pytest.raises(InsufficientAllowance):
            ledger.transfer_from(ALICE, CAROL, 101, spender=BOB)
        assert ledger.allowance(ALICE, BOB) == 100
        assert ledger.balance_of(CAROL) == 0

    def test_transfer_from_insufficient_balance(self, ledger):
        """A large allowance does not allow spending more than the balance."""
        ledger.approve(ALICE, BOB, 5_000)
        with pytest.raises(InsufficientBalance):
            ledger.transfer_from(ALICE, CAROL, 2_000, spender=BOB)
        assert ledger.allowance(ALICE, BOB) == 5_000

    def test_transfer_from_without_spender_is_a_raw_move(self, ledger):
        ledger.transfer_from(ALICE, BOB, 10)
        assert ledger.balance_of(BOB) == 10


class TestReceiveHooks:
    def test_hook_sees_post_transfer_state(self, ledger):
        seen = []

        def hook(token, from_, to, amount):
            seen.append((from_, to, amount, token.balance_of(to)))

        ledger.register_receiver(BOB, hook)
        ledger.transfer(ALICE, BOB, 10)
        assert seen == [(ALICE, BOB, 10, 10)]

    def test_hook_not_called_for_mint(self, ledger):
        seen = []
        ledger.register_receiver(BOB, lambda *args: seen.append(args))
        ledger.mint(BOB, 10)
        assert seen == []

    def test_unregister(self, ledger):
        seen = []
        ledger.register_receiver(BOB, lambda *args: seen.append(args))
        ledger.unregister_receiver(BOB)
        ledger.transfer(ALICE, BOB, 10)
        assert seen == []


class TestSnapshot:
    def test_restore(self, ledger):
        snap = ledger.snapshot()
        ledger.transfer(ALICE, BOB, 10)
        ledger.approve(ALICE, BOB, 10)
        ledger.mint(CAROL, 5)
        ledger.restore(snap)
        assert ledger.balance_of(ALICE) == 1_000
        assert ledger.balance_of(BOB) == 0
        assert ledger.allowance(ALICE, BOB) == 0
        assert ledger.total_supply() == 1_000
