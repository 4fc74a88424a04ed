#!/usr/bin/env python3
"""Run a scripted session against an in-memory pair and print the outcome.

Seeds the pair, runs a series of alternating swaps (optionally a flash swap),
redeems the seed position and reports reserves, fees earned and events.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from amm_pair.deployment import Deployment, deploy_pair
from amm_pair.errors import PairError
from amm_pair.log_config import configure_logging
from amm_pair.math.swap import get_amount_in, get_amount_out
from amm_pair.pair import Pair

TOKEN0 = "0x" + "11" * 20
TOKEN1 = "0x" + "22" * 20
LP_TOKEN = "0x" + "33" * 20
OWNER = "0x" + "aa" * 20
PROVIDER = "0x" + "a1" * 20
TRADER = "0x" + "b2" * 20
BORROWER = "0x" + "c3" * 20


class FlashBorrower:
    """Repays the minimum input in the borrowed token, minting the fee it lacks."""

    address = BORROWER

    def on_flash_swap(self, pair: Pair, sender: str, amount0_out: int, amount1_out: int, data: bytes) -> None:
        reserve0, reserve1 = pair.get_reserves()
        # Repaying in the same token: in * 997 >= out * 1000
        repay = (amount1_out * 1000 + 996) // 997
        shortfall = repay - pair.token1.balance_of(self.address)
        if shortfall > 0:
            pair.token1.mint(self.address, shortfall)
        pair.token1.transfer(self.address, pair.address, repay)
        print(f"  flash swap: borrowed {amount1_out}, repaid {repay} (reserves {reserve0}/{reserve1})")


def seed(deployment: Deployment, amount0: int, amount1: int) -> int:
    pair = deployment.pair
    for ledger, amount in ((deployment.token0, amount0), (deployment.token1, amount1)):
        ledger.mint(PROVIDER, amount)
        ledger.transfer(PROVIDER, pair.address, amount)
    return pair.mint(PROVIDER, sender=PROVIDER)


def swap_exact_in(deployment: Deployment, amount_in: int, zero_for_one: bool) -> int:
    pair = deployment.pair
    reserve0, reserve1 = pair.get_reserves()
    if zero_for_one:
        amount_out = get_amount_out(amount_in, reserve0, reserve1)
        ledger, outputs = deployment.token0, (0, amount_out)
    else:
        amount_out = get_amount_out(amount_in, reserve1, reserve0)
        ledger, outputs = deployment.token1, (amount_out, 0)
    ledger.mint(TRADER, amount_in)
    ledger.transfer(TRADER, pair.address, amount_in)
    pair.swap(*outputs, TRADER, sender=TRADER)
    return amount_out


def main():
    parser = argparse.ArgumentParser(description="Simulate a constant-product pair session")
    parser.add_argument("--reserve0", type=int, default=10**24, help="Seed amount of token0")
    parser.add_argument("--reserve1", type=int, default=2 * 10**24, help="Seed amount of token1")
    parser.add_argument("--swaps", type=int, default=10, help="Number of alternating swaps")
    parser.add_argument(
        "--trade-bps",
        type=int,
        default=50,
        help="Trade size as basis points of the input reserve (default: 50)",
    )
    parser.add_argument("--flash", action="store_true", help="Also run a flash swap")
    parser.add_argument("--log-level", default="WARNING", help="structlog level (default: WARNING)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    args = parser.parse_args()

    configure_logging(args.log_level, json=args.json_logs)

    deployment = deploy_pair(TOKEN0, TOKEN1, LP_TOKEN, owner=OWNER)
    pair = deployment.pair

    try:
        liquidity = seed(deployment, args.reserve0, args.reserve1)
    except PairError as exc:
        print(f"Seeding failed: {exc.reason} ({exc})")
        return 1
    k_start = args.reserve0 * args.reserve1
    print(f"Seeded {pair.address}: liquidity {liquidity}, reserves {pair.get_reserves()}")

    for i in range(args.swaps):
        zero_for_one = i % 2 == 0
        reserve_in = pair.get_reserves()[0 if zero_for_one else 1]
        amount_in = reserve_in * args.trade_bps // 10_000
        amount_out = swap_exact_in(deployment, amount_in, zero_for_one)
        direction = "0->1" if zero_for_one else "1->0"
        print(f"  swap {i + 1:3d} {direction}: in {amount_in}, out {amount_out}")

    if args.flash:
        reserve0, reserve1 = pair.get_reserves()
        borrow = reserve1 // 100
        pair.swap(0, borrow, BORROWER, sender=BORROWER, callee=FlashBorrower())

    reserve0, reserve1 = pair.get_reserves()
    print(f"Reserves: {reserve0} / {reserve1}")
    print(f"K growth from fees: {reserve0 * reserve1 / k_start:.6f}x")
    print(f"token0 needed to buy 1000 token1: {get_amount_in(1000, reserve0, reserve1)}")

    amount0, amount1 = pair.burn(PROVIDER, sender=PROVIDER)
    print(f"Redeemed seed position: {amount0} token0, {amount1} token1")
    print(f"Events emitted: {len(deployment.events)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
