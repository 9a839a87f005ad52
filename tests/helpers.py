"""
helpers.py - Test helpers for driving lock ledgers

Plain functions shared by unit, functional and conformance tests.
"""

from decimal import Decimal
from typing import Iterable, List, Tuple

from staker import LockLedger, LedgerSnapshot


def stake_at(ledger: LockLedger, timestamp: int, amount=Decimal("100")):
    """Set the time and stake, as one driver tick would."""
    ledger.set_time(timestamp)
    ledger.sweep()
    return ledger.stake(amount)


def stake_ticks(ledger: LockLedger, timestamps: Iterable[int], amount=Decimal("100")) -> List[LedgerSnapshot]:
    """Stake once at each timestamp; return the snapshot after every tick."""
    snapshots = []
    for t in timestamps:
        stake_at(ledger, t, amount)
        snapshots.append(ledger.snapshot())
    return snapshots


def observable(ledger: LockLedger) -> Tuple[Tuple[int, Decimal, int], ...]:
    """Active entries as (id, amount, unlock_time) tuples."""
    return ledger.snapshot().observable()


def active_ids(ledger: LockLedger) -> List[int]:
    return [e.id for e in ledger.active_entries()]
