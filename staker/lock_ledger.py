"""
lock_ledger.py - Time-Locked Staking Ledger

The LockLedger is the single stateful component of the system. A caller
repeatedly stakes amounts that unlock a fixed lock duration after the
settlement window they were made in; the ledger coalesces stakes sharing an
unlock time and purges entries whose lock has expired.

Key responsibilities:
    - Owns the ordered entry sequence, the id counter and the current time
    - Delegates expiry sweeps to a pluggable SweepStrategy
    - Implements the LockView protocol for read-only access by the driver

Ordering invariant:
    Entries are only ever appended, and a new entry's unlock_time is never
    below the tail's while tick time is non-decreasing. Entries zeroed by
    withdraw_lock are the only exception; they are purged on the next sweep.

Thread Safety:
    Not thread-safe. Operations must be called sequentially, one tick at a time.
"""

from __future__ import annotations
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from .core import (
    LockEntry, LockConfig, LedgerSnapshot, Amount,
    WITHDRAWN_UNLOCK_TIME, STRATEGY_REBUILD,
    compute_unlock_time, to_amount,
)
from .sweep import SweepStrategy, create_sweep_strategy


class LockLedger:
    """
    Ordered ledger of time-locked stakes with a pluggable expiry sweep.

    Example:
        ledger = LockLedger(LockConfig(rewards_duration=7, lock_duration_multiplier=13))
        ledger.set_time(0)
        ledger.stake(100)          # -> LockEntry(#1 100 unlock@91)
        ledger.set_time(3)
        ledger.stake(50)           # same window: coalesced into #1, amount 150
        ledger.set_time(91)
        ledger.sweep()             # #1 expired and removed
    """

    def __init__(
        self,
        config: Optional[LockConfig] = None,
        strategy: Union[str, SweepStrategy] = STRATEGY_REBUILD,
        initial_time: int = 0,
        verbose: bool = False,
    ):
        """
        Create an empty ledger.

        Args:
            config: Settlement window configuration (default: 7 x 13)
            strategy: Sweep strategy name ("rebuild" or "sliding") or an instance
            initial_time: Starting tick time
            verbose: Print a line for every mutation (default: False)
        """
        self.config = config or LockConfig()
        if isinstance(strategy, str):
            strategy = create_sweep_strategy(strategy)
        self.strategy: SweepStrategy = strategy
        self.verbose = verbose
        self._entries: List[LockEntry] = []
        self._current_time: int = initial_time
        # Last id handed out; the first entry gets id 1
        self._next_id: int = 0

    # ========================================================================
    # LockView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def current_time(self) -> int:
        """Last observed tick time."""
        return self._current_time

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def strategy_name(self) -> str:
        return self.strategy.name

    @property
    def sweep_cursor(self) -> int:
        """Start of the active range inside storage (always 0 for rebuild)."""
        return self.strategy.active_start

    @property
    def stored_count(self) -> int:
        """Physical storage length, including logically expired entries."""
        return len(self._entries)

    def active_entries(self) -> Tuple[LockEntry, ...]:
        """Copies of the active entries, oldest first."""
        return tuple(e.copy() for e in self._active())

    def __len__(self) -> int:
        return len(self._entries) - self.strategy.active_start

    def get_entry(self, entry_id: int) -> Optional[LockEntry]:
        """Return a copy of the active entry with this id, or None."""
        index = self._find(entry_id)
        return None if index is None else self._entries[index].copy()

    def total_locked(self) -> Decimal:
        return sum((e.amount for e in self._active()), Decimal("0"))

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            current_time=self._current_time,
            entries=self.active_entries(),
            stored_count=len(self._entries),
            strategy=self.strategy.name,
            sweep_cursor=self.strategy.active_start,
            next_id=self._next_id,
        )

    # ========================================================================
    # TIME MANAGEMENT
    # ========================================================================

    def set_time(self, timestamp: int) -> None:
        """
        Record the current tick time.

        PRECONDITION: timestamp is non-decreasing across calls. This is not
        checked; moving time backwards may leave entries out of order.
        """
        self._current_time = timestamp

    # ========================================================================
    # MUTATING OPERATIONS
    # ========================================================================

    def sweep(self) -> int:
        """
        Remove every entry whose unlock_time is at or before the current time.

        Returns:
            Number of entries that left the active range.
        """
        before = len(self)
        self._entries = self.strategy.sweep(self._entries, self._current_time)
        removed = before - len(self)
        if removed and self.verbose:
            print(f"[SWEEP] t={self._current_time}: {removed} expired, {len(self)} locked")
        return removed

    def stake(self, amount: Amount) -> LockEntry:
        """
        Stake an amount, locked until the current window plus the lock duration.

        Sweeps first. If the tail entry already unlocks at the computed time the
        amount is added to it; otherwise a new entry is appended.

        Returns:
            Copy of the entry that received the amount.

        Raises:
            ValueError: If amount is not a finite positive number. The ledger
                is not modified in that case.
        """
        value = to_amount(amount)
        self.sweep()

        unlock_time = compute_unlock_time(self._current_time, self.config)
        if len(self) == 0 or self._entries[-1].unlock_time < unlock_time:
            self._next_id += 1
            entry = LockEntry(id=self._next_id, amount=value, unlock_time=unlock_time)
            self._entries.append(entry)
            if self.verbose:
                print(f"[STAKE] #{entry.id} {value} locked until {unlock_time}")
        else:
            entry = self._entries[-1]
            entry.amount += value
            if self.verbose:
                print(f"[STAKE] +{value} coalesced into #{entry.id} (now {entry.amount})")
        return entry.copy()

    def withdraw_lock(self, entry_id: int) -> bool:
        """
        Force one entry to unlock immediately.

        Sweeps first, then zeroes the matching entry's unlock_time so the next
        sweep removes it. The entry itself stays in place until then.

        Returns:
            True if an active entry was marked, False if the id is unknown or
            already expired (silently ignored).
        """
        self.sweep()
        index = self._find(entry_id)
        if index is None:
            return False

        entry = self._entries[index]
        entry.unlock_time = WITHDRAWN_UNLOCK_TIME
        entry.withdrawn = True
        self.strategy.mark_withdrawn(index)
        if self.verbose:
            print(f"[WITHDRAW] #{entry.id} {entry.amount} unlocked")
        return True

    def withdraw_all(self) -> Decimal:
        """
        Sweep, then forfeit every remaining locked entry.

        Returns:
            Total amount of the discarded (still locked) entries.
        """
        self.sweep()
        forfeited = self.total_locked()
        count = len(self)
        self._entries = []
        self.strategy.reset()
        if count and self.verbose:
            print(f"[FORFEIT] {count} locks, {forfeited} discarded")
        return forfeited

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _active(self) -> List[LockEntry]:
        start = self.strategy.active_start
        return self._entries[start:] if start else self._entries

    def _find(self, entry_id: int) -> Optional[int]:
        for index in range(self.strategy.active_start, len(self._entries)):
            if self._entries[index].id == entry_id:
                return index
        return None

    def __repr__(self) -> str:
        return (
            f"LockLedger(t={self._current_time}, locks={len(self)}, "
            f"stored={len(self._entries)}, strategy={self.strategy!r})"
        )
