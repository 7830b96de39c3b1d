"""Cooperative deadlines for timed recognition."""

from __future__ import annotations

import time

from inkrec.errors import InvalidArgumentError, RecognitionTimedOut


class Deadline:
    """Wall-clock budget started at construction.

    Long-running work calls ``check()`` between steps; nothing is interrupted
    preemptively. ``max_ms=None`` never expires.
    """

    def __init__(self, max_ms: float | None) -> None:
        if max_ms is not None and max_ms < 0:
            raise InvalidArgumentError(f"Deadline must be non-negative, got {max_ms}ms")
        self.max_ms = max_ms
        self._start = time.perf_counter()

    @classmethod
    def none(cls) -> Deadline:
        return cls(None)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000

    @property
    def remaining_ms(self) -> float:
        if self.max_ms is None:
            return float("inf")
        return max(0.0, self.max_ms - self.elapsed_ms)

    @property
    def expired(self) -> bool:
        return self.max_ms is not None and self.elapsed_ms >= self.max_ms

    def check(self) -> None:
        """Raise RecognitionTimedOut once the budget is spent."""
        if self.max_ms is None:
            return
        elapsed = self.elapsed_ms
        if elapsed >= self.max_ms:
            raise RecognitionTimedOut(
                f"Recognition exceeded {self.max_ms:.0f}ms (ran {elapsed:.1f}ms)",
                elapsed_ms=elapsed,
                max_ms=self.max_ms,
            )
