"""
benchmark.py - Sweep strategy comparison

Runs the same tick sequence through one ledger per strategy, times every
sweep() call and checks that all strategies observed identical active
entries after every tick.

Run:
    python -m staker.benchmark            # 5,000 ticks, step 1
    python -m staker.benchmark 20000 3    # 20,000 ticks, step 3
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
import sys
import time

import numpy as np

from .core import LockConfig, Amount
from .lock_ledger import LockLedger
from .sweep import available_strategies


@dataclass(frozen=True, slots=True)
class SweepTiming:
    """
    Per-strategy sweep timings in microseconds.

    Attributes:
        strategy: Strategy name
        ticks: Number of sweeps timed
        mean_us, median_us, p99_us, max_us: Distribution of single sweep times
        total_ms: Sum of all sweep times
        peak_stored: Largest physical storage length seen
    """
    strategy: str
    ticks: int
    mean_us: float
    median_us: float
    p99_us: float
    max_us: float
    total_ms: float
    peak_stored: int

    def __str__(self) -> str:
        return (
            f"{self.strategy:>8}: mean {self.mean_us:8.2f}us  median {self.median_us:8.2f}us  "
            f"p99 {self.p99_us:8.2f}us  total {self.total_ms:9.2f}ms  peak stored {self.peak_stored}"
        )


@dataclass(frozen=True)
class BenchmarkResult:
    timings: Dict[str, SweepTiming]
    equivalent: bool
    # First tick index where strategies disagreed, if any
    first_divergence: Optional[int] = None


def summarize(strategy: str, samples: Sequence[float], peak_stored: int) -> SweepTiming:
    """Reduce raw per-sweep durations (seconds) to a SweepTiming."""
    arr = np.asarray(samples, dtype=float) * 1e6
    if arr.size == 0:
        return SweepTiming(strategy, 0, 0.0, 0.0, 0.0, 0.0, 0.0, peak_stored)
    return SweepTiming(
        strategy=strategy,
        ticks=int(arr.size),
        mean_us=float(np.mean(arr)),
        median_us=float(np.median(arr)),
        p99_us=float(np.percentile(arr, 99)),
        max_us=float(np.max(arr)),
        total_ms=float(np.sum(arr) / 1000.0),
        peak_stored=peak_stored,
    )


def benchmark_strategies(
    ticks: int = 5_000,
    step: int = 1,
    config: Optional[LockConfig] = None,
    amount: Amount = Decimal("100"),
    strategies: Optional[List[str]] = None,
) -> BenchmarkResult:
    """
    Time sweep() for each strategy over an identical tick sequence.

    Each tick sets the time, times one sweep, then stakes (the stake's own
    sweep is a no-op at that point and is not timed).

    Args:
        ticks: Number of ticks to run
        step: Time increment per tick
        config: Window configuration (default: 7 x 13)
        amount: Amount staked per tick
        strategies: Strategy names to compare (default: all)

    Returns:
        BenchmarkResult with per-strategy timings and the equivalence verdict
    """
    config = config or LockConfig()
    names = strategies or available_strategies()
    ledgers = {name: LockLedger(config, strategy=name) for name in names}
    samples: Dict[str, List[float]] = {name: [] for name in names}
    peak: Dict[str, int] = {name: 0 for name in names}
    first_divergence: Optional[int] = None

    for tick in range(ticks):
        timestamp = tick * step
        observed = []
        for name in names:
            ledger = ledgers[name]
            ledger.set_time(timestamp)
            started = time.perf_counter()
            ledger.sweep()
            samples[name].append(time.perf_counter() - started)
            ledger.stake(amount)
            peak[name] = max(peak[name], ledger.stored_count)
            observed.append(ledger.snapshot().observable())

        if first_divergence is None and any(o != observed[0] for o in observed[1:]):
            first_divergence = tick

    timings = {name: summarize(name, samples[name], peak[name]) for name in names}
    return BenchmarkResult(
        timings=timings,
        equivalent=first_divergence is None,
        first_divergence=first_divergence,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    ticks = int(args[0]) if len(args) > 0 else 5_000
    step = int(args[1]) if len(args) > 1 else 1

    print("=" * 70)
    print(f"    SWEEP STRATEGY BENCHMARK  ({ticks:,} ticks, step {step})")
    print("=" * 70)
    result = benchmark_strategies(ticks=ticks, step=step)
    for timing in result.timings.values():
        print(timing)
    if result.equivalent:
        print("✓ Strategies produced identical active entries on every tick")
    else:
        print(f"✗ Strategies diverged at tick {result.first_divergence}")
    return 0 if result.equivalent else 1


if __name__ == "__main__":
    sys.exit(main())
