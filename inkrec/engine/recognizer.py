"""Recognizer capabilities and the stroke segmentation recognizer.

The three capabilities are independent: a recognizer may be synchronous only,
or also pipelined (incremental, with snapshot/restore of its state), or also
timed (bounded run-time, raising RecognitionTimedOut).
"""

from __future__ import annotations

import abc
import logging
import threading
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from inkrec.engine.combiner import SegmentationCombiner
from inkrec.engine.timing import Deadline
from inkrec.errors import InvalidParametersError, RecognitionTimedOut
from inkrec.models.segmentation import Segmentation
from inkrec.models.stroke import Stroke

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
ResultT = TypeVar("ResultT")
StateT = TypeVar("StateT")


class Recognizer(abc.ABC, Generic[InputT, ResultT]):
    """Accumulate input, then recognize it in one call."""

    @abc.abstractmethod
    def submit(self, item: InputT) -> None: ...

    @abc.abstractmethod
    def recognize(self) -> ResultT: ...


class PipelinedRecognizer(abc.ABC, Generic[InputT, ResultT, StateT]):
    """Recognize input incrementally; state can be captured and restored."""

    @abc.abstractmethod
    def append_to_recognition(self, item: InputT) -> ResultT: ...

    @abc.abstractmethod
    def get_recognition_state(self) -> StateT: ...

    @abc.abstractmethod
    def set_recognition_state(self, state: StateT) -> None: ...


class TimedRecognizer(abc.ABC, Generic[ResultT]):
    """Recognize within a time budget or raise RecognitionTimedOut."""

    @abc.abstractmethod
    def recognize_timed(self, max_millis: float) -> ResultT: ...


@dataclass(frozen=True)
class RecognitionState:
    """Snapshot of a pipelined recognizer: submitted strokes and the results so far.

    ``results[i]`` belongs to ``strokes[i]``; strokes past ``len(results)`` are
    still pending.
    """

    strokes: tuple[Stroke, ...] = field(default_factory=tuple)
    results: tuple[tuple[Segmentation, ...], ...] = field(default_factory=tuple)

    @property
    def pending(self) -> int:
        return len(self.strokes) - len(self.results)


class StrokeSegmentationRecognizer(
    Recognizer[Stroke, list[list[Segmentation]]],
    PipelinedRecognizer[Stroke, list[Segmentation], RecognitionState],
    TimedRecognizer[list[list[Segmentation]]],
):
    """Ranks segmentations for each submitted stroke with a SegmentationCombiner.

    Mutations are serialized per instance. A timed-out instance keeps whatever
    it finished before the deadline and refuses further work until ``reset()``
    or ``set_recognition_state()`` is called.
    """

    def __init__(
        self,
        combiner: SegmentationCombiner | None = None,
        default_timeout_ms: float | None = None,
    ) -> None:
        self.combiner = combiner or SegmentationCombiner()
        self.default_timeout_ms = default_timeout_ms
        self._lock = threading.RLock()
        self._strokes: list[Stroke] = []
        self._results: list[tuple[Segmentation, ...]] = []
        self._timed_out = False

    def submit(self, item: Stroke) -> None:
        if len(item) == 0:
            raise InvalidParametersError("Cannot submit a stroke with no points")
        with self._lock:
            self._strokes.append(item)

    def recognize(self) -> list[list[Segmentation]]:
        with self._lock:
            return self._run(Deadline.none())

    def recognize_timed(self, max_millis: float | None = None) -> list[list[Segmentation]]:
        budget = max_millis if max_millis is not None else self.default_timeout_ms
        with self._lock:
            return self._run(Deadline(budget))

    def append_to_recognition(self, item: Stroke) -> list[Segmentation]:
        with self._lock:
            self.submit(item)
            return self._run(Deadline.none())[-1]

    def get_recognition_state(self) -> RecognitionState:
        with self._lock:
            return RecognitionState(strokes=tuple(self._strokes), results=tuple(self._results))

    def set_recognition_state(self, state: RecognitionState) -> None:
        if len(state.results) > len(state.strokes):
            raise InvalidParametersError(
                f"State has {len(state.results)} results for {len(state.strokes)} strokes"
            )
        with self._lock:
            self._strokes = list(state.strokes)
            self._results = list(state.results)
            self._timed_out = False

    def reset(self) -> None:
        with self._lock:
            self._strokes.clear()
            self._results.clear()
            self._timed_out = False

    def _run(self, deadline: Deadline) -> list[list[Segmentation]]:
        if self._timed_out:
            raise InvalidParametersError("Recognizer timed out earlier; reset it before reuse")

        try:
            for stroke in self._strokes[len(self._results) :]:
                ranked = self.combiner.combine(stroke, deadline)
                self._results.append(tuple(ranked))
        except RecognitionTimedOut as e:
            self._timed_out = True
            logger.warning(
                "Recognition timed out after %d/%d strokes: %s",
                len(self._results),
                len(self._strokes),
                e,
            )
            raise

        return [list(r) for r in self._results]
