"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the lock ledger.
Both sweep strategies MUST pass every test.

The tests are organized by invariant:
1. test_ordering.py - Active entries sorted by unlock_time, one entry per window
2. test_expiry.py - Entries visible exactly while locked
3. test_equivalence.py - Rebuild and sliding-index sweeps agree after every operation
4. test_withdrawal.py - withdraw_lock / withdraw_all semantics

These tests use hypothesis for property-based testing.
"""
