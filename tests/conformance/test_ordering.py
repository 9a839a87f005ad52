"""
Ordering Conformance Tests

INVARIANT: With non-decreasing tick times, the active entries are strictly
increasing in unlock_time and in id.

    ∀ stake sequences S with non-decreasing times:
        unlock_time(e[i]) < unlock_time(e[i+1]) and id(e[i]) < id(e[i+1])

Strictness follows from coalescing: a stake whose unlock time equals the
tail's is merged into it, so no two active entries share an unlock time.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from decimal import Decimal

from staker import LockLedger, LockConfig

from tests.helpers import stake_at


STRATEGY_NAMES = st.sampled_from(["rebuild", "sliding"])

# Time increments between ticks; zero means another stake in the same tick
TIME_STEPS = st.lists(st.integers(min_value=0, max_value=30), min_size=1, max_size=80)

AMOUNTS = st.decimals(
    min_value=Decimal("0.01"), max_value=Decimal("10000"),
    places=2, allow_nan=False, allow_infinity=False,
)


class TestOrderingProperties:
    """Property-based ordering tests."""

    @given(STRATEGY_NAMES, TIME_STEPS)
    @settings(max_examples=100)
    def test_active_entries_strictly_ordered(self, strategy, steps):
        """
        PROPERTY: After every stake, unlock times and ids strictly increase.
        """
        ledger = LockLedger(LockConfig(7, 13), strategy=strategy)
        t = 0
        for dt in steps:
            t += dt
            stake_at(ledger, t)
            entries = ledger.active_entries()
            unlocks = [e.unlock_time for e in entries]
            ids = [e.id for e in entries]
            assert unlocks == sorted(set(unlocks))
            assert ids == sorted(set(ids))

    @given(STRATEGY_NAMES, TIME_STEPS,
           st.integers(min_value=1, max_value=20), st.integers(min_value=1, max_value=20))
    @settings(max_examples=100)
    def test_ordering_holds_for_any_window_config(self, strategy, steps, rewards_duration, multiplier):
        """
        PROPERTY: Ordering does not depend on the window configuration.
        """
        ledger = LockLedger(LockConfig(rewards_duration, multiplier), strategy=strategy)
        t = 0
        for dt in steps:
            t += dt
            stake_at(ledger, t)
            unlocks = [e.unlock_time for e in ledger.active_entries()]
            assert all(a < b for a, b in zip(unlocks, unlocks[1:]))

    @given(STRATEGY_NAMES, TIME_STEPS)
    @settings(max_examples=50)
    def test_ids_unique_over_lifetime(self, strategy, steps):
        """
        PROPERTY: No id is ever handed out twice, even after expiry.
        """
        ledger = LockLedger(strategy=strategy)
        seen = set()
        t = 0
        for dt in steps:
            t += dt
            entry = stake_at(ledger, t)
            if entry.id not in seen:
                assert entry.id == ledger.next_id
                assert entry.id == len(seen) + 1
                seen.add(entry.id)


class TestCoalescing:
    """Stakes in the same tick merge into one entry."""

    @given(STRATEGY_NAMES, st.integers(min_value=0, max_value=10_000), AMOUNTS, AMOUNTS)
    @settings(max_examples=100)
    def test_two_stakes_same_tick_single_entry(self, strategy, t, first, second):
        """
        PROPERTY: stake(a); stake(b) at the same time yields one entry of a + b.
        """
        ledger = LockLedger(LockConfig(7, 13), strategy=strategy)
        ledger.set_time(t)
        ledger.stake(first)
        ledger.stake(second)
        entries = ledger.active_entries()
        assert len(entries) == 1
        assert entries[0].amount == first + second
        assert entries[0].id == 1

    @given(STRATEGY_NAMES, st.lists(AMOUNTS, min_size=1, max_size=20))
    @settings(max_examples=50)
    def test_many_stakes_same_tick_sum(self, strategy, amounts):
        ledger = LockLedger(strategy=strategy)
        ledger.set_time(100)
        for amount in amounts:
            ledger.stake(amount)
        assert ledger.total_locked() == sum(amounts, Decimal("0"))
        assert len(ledger) == 1

    @pytest.mark.parametrize("strategy", ["rebuild", "sliding"])
    def test_same_window_different_ticks_coalesce(self, strategy):
        ledger = LockLedger(LockConfig(7, 13), strategy=strategy)
        stake_at(ledger, 4, 1)
        stake_at(ledger, 10, 2)
        assert ledger.snapshot().observable() == ((1, Decimal("3"), 98),)
