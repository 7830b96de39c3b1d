"""Error taxonomy shared across the analysis core."""

from __future__ import annotations


class InkrecError(Exception):
    """Base class for every error raised by inkrec."""


class InvalidArgumentError(InkrecError, ValueError):
    """A caller passed parameters that can never produce a result."""


class InvalidParametersError(InvalidArgumentError):
    """A recognizer or combiner was asked to work on unusable input (e.g. an empty stroke)."""


class RecognitionTimedOut(InkrecError):
    """Recognition did not finish inside its time budget.

    This is an expected outcome of the timed recognition contract, not a defect.
    The instance that raised it holds partial state and must be reset before reuse.
    """

    DEFAULT_MESSAGE = "The recognizer has exceeded its maximum allotted run-time."

    def __init__(
        self,
        message: str | None = None,
        *,
        elapsed_ms: float | None = None,
        max_ms: float | None = None,
    ) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)
        self.elapsed_ms = elapsed_ms
        self.max_ms = max_ms
