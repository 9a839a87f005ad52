"""
driver.py - Staking Driver

Per-tick glue between a clock source and a lock ledger. The ledger never
schedules itself; the driver owns the loop.

Execution order each step():
1. Read the clock and set ledger time
2. Sweep expired entries
3. Stake the fixed amount
4. Render the ledger (verbose only)
"""

from __future__ import annotations
from decimal import Decimal
from typing import Callable, List, Optional

from .core import LockView, LedgerSnapshot, Amount, to_amount
from .clock import ClockSource
from .lock_ledger import LockLedger


def format_ledger(view: LockView) -> str:
    """
    Render the ledger as text: a header line, then one line per active entry.

    Example output:
        BlockTimestamp: 14  LocksLength: 2  LocksIndex: 0  Strategy: sliding
          #1  amount=700  unlockTime=91
          #2  amount=100  unlockTime=105
    """
    snap = view.snapshot()
    lines = [
        f"BlockTimestamp: {snap.current_time}  LocksLength: {snap.stored_count}  "
        f"LocksIndex: {snap.sweep_cursor}  Strategy: {snap.strategy}"
    ]
    if not snap.entries:
        lines.append("  (no locks)")
    for entry in snap.entries:
        marker = "  [withdrawn]" if entry.withdrawn else ""
        lines.append(f"  #{entry.id}  amount={entry.amount}  unlockTime={entry.unlock_time}{marker}")
    return "\n".join(lines)


class StakingDriver:
    """
    Drives one ledger through clock ticks, staking a fixed amount each tick.

    The driver is stateless apart from its collaborators; all business logic
    lives in LockLedger.
    """

    def __init__(
        self,
        ledger: LockLedger,
        clock: ClockSource,
        amount: Amount = Decimal("100"),
        verbose: bool = True,
        render: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the driver.

        Args:
            ledger: The ledger to operate on
            clock: Source of one timestamp per tick
            amount: Amount staked every tick
            verbose: Render the ledger after each tick
            render: Output callable for rendered text (default: print)
        """
        self.ledger = ledger
        self.clock = clock
        self.amount = to_amount(amount)
        self.verbose = verbose
        self.render = render or print
        self.ticks = 0

    def step(self) -> LedgerSnapshot:
        """Run one tick and return the ledger state after it."""
        self.ledger.set_time(self.clock.now())
        self.ledger.sweep()
        self.ledger.stake(self.amount)
        self.ticks += 1

        if self.verbose:
            self.render(format_ledger(self.ledger))
        return self.ledger.snapshot()

    def run(self, ticks: int, on_tick: Optional[Callable[[LedgerSnapshot], None]] = None) -> List[LedgerSnapshot]:
        """
        Run a number of ticks.

        Args:
            ticks: Number of ticks to run
            on_tick: Optional callback receiving each snapshot (e.g. to sleep
                or trigger withdrawals between ticks)

        Returns:
            Snapshot after every tick
        """
        snapshots: List[LedgerSnapshot] = []
        for _ in range(ticks):
            snapshot = self.step()
            snapshots.append(snapshot)
            if on_tick is not None:
                on_tick(snapshot)
        return snapshots
