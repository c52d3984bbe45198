"""Monotonic elapsed-time measurement for pipeline stages."""

import time
from typing import Callable

Clock = Callable[[], float]


class Stopwatch:
    """Captures a monotonic reference point and reports time elapsed since it.

    ``clock`` must be monotonic and return seconds, ``time.perf_counter`` by
    default. One instance per stage invocation; nothing to clean up.
    """

    __slots__ = ("_clock", "_started_at")

    def __init__(self, clock: Clock = time.perf_counter):
        self._clock = clock
        self._started_at = clock()

    @classmethod
    def start(cls, clock: Clock = time.perf_counter) -> "Stopwatch":
        return cls(clock)

    def elapsed(self) -> float:
        """Seconds since start."""
        return self._clock() - self._started_at

    def elapsed_ms(self) -> float:
        return self.elapsed() * 1000
