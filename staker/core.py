"""
Core types and pure functions for the time-locked staking ledger.

This module provides the foundational data structures for the lock ledger:
1. Data structures: LockEntry (mutable deposit record), LockConfig, LedgerSnapshot
2. Exceptions: LockLedgerError and its subclasses
3. Protocols: LockView for read-only ledger access
4. Pure functions: settlement-window arithmetic (compute_unlock_time)

Nothing in this module mutates a ledger. LockLedger in lock_ledger.py is the
only stateful component.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple, Protocol, Union, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

# Length of one settlement window, in ticks.
DEFAULT_REWARDS_DURATION = 7

# Number of settlement windows a stake stays locked.
DEFAULT_LOCK_DURATION_MULTIPLIER = 13

# unlock_time assigned to an entry by an explicit withdrawal request.
WITHDRAWN_UNLOCK_TIME = 0

STRATEGY_REBUILD = "rebuild"
STRATEGY_SLIDING = "sliding"

Amount = Union[Decimal, int, float, str]


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LockLedgerError(Exception):
    """Base exception for all lock ledger errors."""
    pass


class UnknownSweepStrategy(LockLedgerError):
    """Raised when a sweep strategy name is not recognised."""
    pass


class ClockExhausted(LockLedgerError):
    """Raised when a finite clock source has no timestamps left."""
    pass


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass(frozen=True, slots=True)
class LockConfig:
    """
    Settlement window configuration.

    Attributes:
        rewards_duration: Length of a settlement window. Stakes made within the
            same (rounded) window share one unlock time.
        lock_duration_multiplier: Number of windows a stake stays locked.
    """
    rewards_duration: int = DEFAULT_REWARDS_DURATION
    lock_duration_multiplier: int = DEFAULT_LOCK_DURATION_MULTIPLIER

    def __post_init__(self):
        for name in ("rewards_duration", "lock_duration_multiplier"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {type(value).__name__}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @property
    def lock_duration(self) -> int:
        """Ticks between the windowed stake time and its unlock time."""
        return self.rewards_duration * self.lock_duration_multiplier


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(slots=True)
class LockEntry:
    """
    One deposit record.

    Mutable on purpose: coalescing adds to amount in place, and withdraw_lock
    forces unlock_time to zero. The id is never changed after creation.

    Attributes:
        id: Unique, strictly increasing in creation order.
        amount: Accumulated stake.
        unlock_time: Timestamp at or after which the entry is withdrawable.
        withdrawn: True once withdraw_lock has zeroed this entry.
    """
    id: int
    amount: Decimal
    unlock_time: int
    withdrawn: bool = False

    def is_expired(self, current_time: int) -> bool:
        return self.unlock_time <= current_time

    def as_tuple(self) -> Tuple[int, Decimal, int]:
        """(id, amount, unlock_time) - the externally observable fields."""
        return (self.id, self.amount, self.unlock_time)

    def copy(self) -> 'LockEntry':
        return replace(self)

    def __repr__(self) -> str:
        flag = " withdrawn" if self.withdrawn else ""
        return f"LockEntry(#{self.id} {self.amount} unlock@{self.unlock_time}{flag})"


@dataclass(frozen=True, slots=True)
class LedgerSnapshot:
    """
    Read-only picture of a ledger after a tick, used for display and comparison.

    entries holds copies, so mutating the ledger afterwards does not change
    a snapshot already taken.
    """
    current_time: int
    entries: Tuple[LockEntry, ...]
    stored_count: int
    strategy: str
    sweep_cursor: int = 0
    next_id: int = field(default=0)

    @property
    def active_count(self) -> int:
        return len(self.entries)

    def observable(self) -> Tuple[Tuple[int, Decimal, int], ...]:
        """Active entries reduced to (id, amount, unlock_time), ignoring internals."""
        return tuple(e.as_tuple() for e in self.entries)

    def total_locked(self) -> Decimal:
        return sum((e.amount for e in self.entries), Decimal("0"))


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LockView(Protocol):
    """
    Read-only interface to lock ledger state.

    Driver code and renderers accept a LockView to declare that they only read.
    """

    @property
    def current_time(self) -> int:
        ...

    def active_entries(self) -> Tuple[LockEntry, ...]:
        ...

    def snapshot(self) -> LedgerSnapshot:
        ...


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def to_amount(value: Amount) -> Decimal:
    """
    Coerce a stake amount to Decimal and validate it.

    Floats go through str() so that 0.1 becomes Decimal("0.1"), not its
    binary expansion.

    Raises:
        ValueError: If the amount is not a finite, strictly positive number.
    """
    if isinstance(value, bool):
        raise ValueError("Stake amount must be numeric, got bool")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value))
        except ArithmeticError:
            raise ValueError(f"Stake amount is not a number: {value!r}") from None
    else:
        raise ValueError(f"Stake amount must be numeric, got {type(value).__name__}")
    if amount.is_nan() or amount.is_infinite():
        raise ValueError(f"Stake amount must be finite, got {amount}")
    if amount <= 0:
        raise ValueError(f"Stake amount must be positive, got {amount}")
    return amount


def windowed_time(current_time: int, rewards_duration: int) -> int:
    """
    Snap current_time to the nearest settlement window boundary.

    The quotient is rounded half away from zero (Decimal ROUND_HALF_UP), so
    3/7 -> 0 and 4/7 -> 1, and an exact half always rounds outward.
    """
    quotient = Decimal(current_time) / Decimal(rewards_duration)
    windows = int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return windows * rewards_duration


def compute_unlock_time(current_time: int, config: LockConfig) -> int:
    """
    Unlock time for a stake made at current_time.

    Example:
        >>> compute_unlock_time(3, LockConfig(7, 13))
        91
    """
    return windowed_time(current_time, config.rewards_duration) + config.lock_duration
