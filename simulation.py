#!/usr/bin/env python3
"""
simulation.py - Staking Simulation

Stakes a fixed amount on every tick and prints the lock ledger after each
one, the way a block-by-block console view would.

Run:
    python simulation.py                      # rebuild sweep, 200 ticks
    python simulation.py --strategy sliding   # sliding-index sweep
    python simulation.py --ticks 500 --step 3 --amount 25 --quick

Options:
    --strategy NAME   rebuild | sliding (default: rebuild)
    --ticks N         number of ticks to run (default: 200)
    --step S          clock increment per tick (default: 1)
    --amount X        amount staked per tick (default: 100)
    --quick           no screen clearing or sleeping between ticks
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
import sys
import time

from staker import (
    LockLedger, LockConfig, ManualClock, StakingDriver,
    STRATEGY_REBUILD, available_strategies,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class SimulationConfig:
    """Configuration for the simulation. Modify these to experiment."""
    strategy: str = STRATEGY_REBUILD
    ticks: int = 200
    step: int = 1
    amount: Decimal = Decimal("100")
    quick: bool = False
    # Seconds between ticks in interactive mode
    tick_interval: float = 0.1


def parse_args(argv: List[str]) -> SimulationConfig:
    """Read --flag value pairs from argv into a SimulationConfig."""
    config = SimulationConfig(quick="--quick" in argv)

    def value_of(flag: str) -> Optional[str]:
        if flag not in argv:
            return None
        index = argv.index(flag)
        if index + 1 >= len(argv):
            raise SystemExit(f"{flag} needs a value")
        return argv[index + 1]

    strategy = value_of("--strategy")
    if strategy is not None:
        if strategy not in available_strategies():
            raise SystemExit(f"--strategy must be one of {available_strategies()}, got {strategy!r}")
        config.strategy = strategy
    ticks = value_of("--ticks")
    if ticks is not None:
        config.ticks = int(ticks)
    step = value_of("--step")
    if step is not None:
        config.step = int(step)
    amount = value_of("--amount")
    if amount is not None:
        config.amount = Decimal(amount)
    return config


def clear_screen():
    print("\033[2J\033[H", end="")


def main(argv: Optional[List[str]] = None):
    config = parse_args(sys.argv[1:] if argv is None else argv)

    ledger = LockLedger(LockConfig(), strategy=config.strategy)
    clock = ManualClock(start=0, step=config.step)

    def render(text: str):
        if not config.quick:
            clear_screen()
        print(text)

    def pause(_snapshot):
        if not config.quick:
            time.sleep(config.tick_interval)

    driver = StakingDriver(ledger, clock, amount=config.amount, render=render)
    snapshots = driver.run(config.ticks, on_tick=pause)

    final = snapshots[-1] if snapshots else ledger.snapshot()
    print()
    print("=" * 70)
    print(f"Ticks: {driver.ticks}  Active locks: {final.active_count}  "
          f"Stored: {final.stored_count}  Locked: {final.total_locked()}")
    print("=" * 70)


if __name__ == "__main__":
    main()
