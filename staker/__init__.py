"""
staker - Time-Locked Staking Ledger

A lock ledger for repeated stakes that unlock after a fixed lock duration,
with two interchangeable expiry sweep algorithms.

Usage:
    from staker import LockLedger, LockConfig

    ledger = LockLedger(LockConfig(rewards_duration=7, lock_duration_multiplier=13),
                        strategy="sliding")
    ledger.set_time(0)
    ledger.stake(100)              # one entry: 100 unlocking at 91
    ledger.set_time(3)
    ledger.stake(50)               # same settlement window: amount becomes 150
    ledger.set_time(91)
    ledger.sweep()                 # expired: active list is empty
"""

# Core types
from .core import (
    LockEntry,
    LockConfig,
    LedgerSnapshot,
    LockView,
    LockLedgerError,
    UnknownSweepStrategy,
    ClockExhausted,
    compute_unlock_time,
    windowed_time,
    to_amount,
    DEFAULT_REWARDS_DURATION,
    DEFAULT_LOCK_DURATION_MULTIPLIER,
    WITHDRAWN_UNLOCK_TIME,
    STRATEGY_REBUILD,
    STRATEGY_SLIDING,
)

# Sweep strategies
from .sweep import (
    SweepStrategy,
    RebuildSweep,
    SlidingIndexSweep,
    create_sweep_strategy,
    available_strategies,
)

# Ledger
from .lock_ledger import LockLedger

# Clock and driver
from .clock import ClockSource, ManualClock, SequenceClock
from .driver import StakingDriver, format_ledger

# Benchmark
from .benchmark import SweepTiming, BenchmarkResult, benchmark_strategies


__all__ = [
    # Core
    'LockEntry', 'LockConfig', 'LedgerSnapshot', 'LockView',
    'LockLedgerError', 'UnknownSweepStrategy', 'ClockExhausted',
    'compute_unlock_time', 'windowed_time', 'to_amount',
    'DEFAULT_REWARDS_DURATION', 'DEFAULT_LOCK_DURATION_MULTIPLIER',
    'WITHDRAWN_UNLOCK_TIME', 'STRATEGY_REBUILD', 'STRATEGY_SLIDING',
    # Sweep
    'SweepStrategy', 'RebuildSweep', 'SlidingIndexSweep',
    'create_sweep_strategy', 'available_strategies',
    # Ledger
    'LockLedger',
    # Clock / driver
    'ClockSource', 'ManualClock', 'SequenceClock',
    'StakingDriver', 'format_ledger',
    # Benchmark
    'SweepTiming', 'BenchmarkResult', 'benchmark_strategies',
]
