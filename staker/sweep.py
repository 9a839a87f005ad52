"""
sweep.py - Expiry sweep strategies for the lock ledger

Two interchangeable algorithms remove expired entries. They must leave the
same active entries behind after every call; only their cost differs.

- RebuildSweep: filters the whole sequence every tick, O(n) per call.
- SlidingIndexSweep: advances a persistent cursor past expired entries and
  leaves them in storage until the ledger is cleared. O(1) amortized.

Both rely on the ledger ordering invariant: entries are appended in
non-decreasing unlock_time, so if the tail is expired every entry is expired.
The one exception is an entry zeroed by withdraw_lock. A withdrawn tail
therefore never triggers the clear-everything shortcut.
"""

from __future__ import annotations
from typing import List, Protocol, runtime_checkable

from .core import (
    LockEntry, UnknownSweepStrategy,
    STRATEGY_REBUILD, STRATEGY_SLIDING,
)


def _tail_expired(entries: List[LockEntry], current_time: int) -> bool:
    tail = entries[-1]
    return tail.is_expired(current_time) and not tail.withdrawn


@runtime_checkable
class SweepStrategy(Protocol):
    """
    Protocol for expiry sweep algorithms.

    A strategy instance belongs to exactly one ledger; it may keep private
    state (such as a cursor) between calls.
    """
    name: str

    @property
    def active_start(self) -> int:
        """Index of the first entry that is not known to be expired."""
        ...

    def sweep(self, entries: List[LockEntry], current_time: int) -> List[LockEntry]:
        """Drop expired entries; return the storage list the ledger should keep."""
        ...

    def mark_withdrawn(self, index: int) -> None:
        """Notification that entries[index] was zeroed by a withdrawal."""
        ...

    def reset(self) -> None:
        """Forget all state; called when the ledger is cleared."""
        ...


class RebuildSweep:
    """
    Rebuild the entry list whenever at least one entry has expired.

    Scans every entry on every call, even when nothing expires.
    """

    name = STRATEGY_REBUILD

    @property
    def active_start(self) -> int:
        return 0

    def sweep(self, entries: List[LockEntry], current_time: int) -> List[LockEntry]:
        if not entries:
            return entries
        if _tail_expired(entries, current_time):
            return []

        survivors = [e for e in entries if not e.is_expired(current_time)]
        if len(survivors) != len(entries):
            return survivors
        return entries

    def mark_withdrawn(self, index: int) -> None:
        pass

    def reset(self) -> None:
        pass

    def __repr__(self) -> str:
        return "RebuildSweep()"


class SlidingIndexSweep:
    """
    Skip expired entries with a cursor instead of rebuilding.

    Entries before the cursor are logically expired but stay in storage; the
    ledger reads from active_start onwards. Storage is only released when the
    tail expires and the whole list is cleared.

    A withdrawal of an entry beyond the cursor cannot be reached by advancing
    the cursor (a still-locked entry sits in front of it). Such a withdrawal
    schedules one stable compaction of the active range on the next sweep.
    """

    name = STRATEGY_SLIDING

    def __init__(self):
        self.cursor = 0
        self._compaction_pending = False

    @property
    def active_start(self) -> int:
        return self.cursor

    def sweep(self, entries: List[LockEntry], current_time: int) -> List[LockEntry]:
        if not entries:
            self.reset()
            return entries
        if _tail_expired(entries, current_time):
            self.reset()
            return []

        if self._compaction_pending:
            survivors = [e for e in entries[self.cursor:] if not e.is_expired(current_time)]
            self.reset()
            return survivors

        length = len(entries)
        while self.cursor < length and entries[self.cursor].is_expired(current_time):
            self.cursor += 1
        return entries

    def mark_withdrawn(self, index: int) -> None:
        # The entry at the cursor is picked up by the normal advance.
        if index > self.cursor:
            self._compaction_pending = True

    def reset(self) -> None:
        self.cursor = 0
        self._compaction_pending = False

    def __repr__(self) -> str:
        return f"SlidingIndexSweep(cursor={self.cursor})"


_STRATEGIES = {
    STRATEGY_REBUILD: RebuildSweep,
    STRATEGY_SLIDING: SlidingIndexSweep,
}


def available_strategies() -> List[str]:
    return sorted(_STRATEGIES)


def create_sweep_strategy(name: str) -> SweepStrategy:
    """
    Build a fresh sweep strategy by name.

    Raises:
        UnknownSweepStrategy: If name is not "rebuild" or "sliding".
    """
    try:
        factory = _STRATEGIES[name]
    except KeyError:
        raise UnknownSweepStrategy(
            f"Unknown sweep strategy {name!r}; expected one of {available_strategies()}"
        ) from None
    return factory()
