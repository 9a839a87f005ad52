"""
clock.py - Logical clock sources for the staking driver

A clock source supplies one integer timestamp per tick. The ledger never reads
a clock itself; the driver asks the clock and passes the value to set_time().

Classes:
- ClockSource: Protocol defining the clock interface
- ManualClock: Fixed-step logical clock
- SequenceClock: Replays a predefined list of timestamps
"""

from typing import Iterable, List, Protocol, runtime_checkable

from .core import ClockExhausted


@runtime_checkable
class ClockSource(Protocol):
    """
    Protocol for clock sources.

    Successive now() calls must return non-decreasing integers.
    """

    def now(self) -> int:
        ...


class ManualClock:
    """
    Logical clock that advances by a fixed step after every reading.

    Example:
        clock = ManualClock(start=0, step=3)
        clock.now()   # 0
        clock.now()   # 3
        clock.advance(10)
        clock.now()   # 16
    """

    def __init__(self, start: int = 0, step: int = 1):
        if step < 0:
            raise ValueError(f"step cannot be negative, got {step}")
        self.time = start
        self.step = step

    def now(self) -> int:
        current = self.time
        self.time += self.step
        return current

    def peek(self) -> int:
        """Next value now() will return, without advancing."""
        return self.time

    def advance(self, delta: int) -> None:
        if delta < 0:
            raise ValueError(f"Cannot move time backwards by {delta}")
        self.time += delta

    def set(self, timestamp: int) -> None:
        if timestamp < self.time:
            raise ValueError(f"Cannot move time backwards: {timestamp} < {self.time}")
        self.time = timestamp

    def __repr__(self):
        return f"ManualClock(t={self.time}, step={self.step})"


class SequenceClock:
    """
    Clock that replays a fixed, non-decreasing list of timestamps.

    Raises:
        ValueError: At construction, if the timestamps ever decrease.
        ClockExhausted: From now(), once the sequence is used up.
    """

    def __init__(self, timestamps: Iterable[int]):
        self.timestamps: List[int] = list(timestamps)
        for earlier, later in zip(self.timestamps, self.timestamps[1:]):
            if later < earlier:
                raise ValueError(f"Timestamps must be non-decreasing: {later} after {earlier}")
        self._position = 0

    def now(self) -> int:
        if self._position >= len(self.timestamps):
            raise ClockExhausted(f"SequenceClock exhausted after {len(self.timestamps)} ticks")
        current = self.timestamps[self._position]
        self._position += 1
        return current

    def remaining(self) -> int:
        return len(self.timestamps) - self._position

    def __repr__(self):
        return f"SequenceClock({self.remaining()} of {len(self.timestamps)} remaining)"
