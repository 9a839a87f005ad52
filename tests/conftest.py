"""
conftest.py - Shared pytest fixtures for lock ledger tests

Provides common fixtures used across unit, functional and conformance tests:
- Window configuration matching the reference scenario (7 x 13)
- Ledgers for each sweep strategy, and a fixture parametrized over both
"""

import pytest

from staker import (
    LockLedger, LockConfig,
    STRATEGY_REBUILD, STRATEGY_SLIDING,
)


STRATEGIES = [STRATEGY_REBUILD, STRATEGY_SLIDING]


@pytest.fixture
def config():
    """Reference window configuration: 7-tick windows, locked for 13 windows (91 ticks)."""
    return LockConfig(rewards_duration=7, lock_duration_multiplier=13)


@pytest.fixture
def rebuild_ledger(config):
    return LockLedger(config, strategy=STRATEGY_REBUILD)


@pytest.fixture
def sliding_ledger(config):
    return LockLedger(config, strategy=STRATEGY_SLIDING)


@pytest.fixture(params=STRATEGIES)
def ledger(request, config):
    """Empty ledger, once per sweep strategy."""
    return LockLedger(config, strategy=request.param)


@pytest.fixture
def ledger_pair(config):
    """One ledger per strategy, for side-by-side comparison."""
    return (
        LockLedger(config, strategy=STRATEGY_REBUILD),
        LockLedger(config, strategy=STRATEGY_SLIDING),
    )
