"""Tests for the recognizer contracts and the stroke segmentation recognizer."""

import threading

import pytest

from inkrec.engine.combiner import SegmentationCombiner
from inkrec.engine.recognizer import (
    PipelinedRecognizer,
    RecognitionState,
    Recognizer,
    StrokeSegmentationRecognizer,
    TimedRecognizer,
)
from inkrec.engine.segmenters.ray_squared import RaySquaredSegmenter
from inkrec.engine.timing import Deadline
from inkrec.errors import InvalidParametersError, RecognitionTimedOut


@pytest.fixture
def recognizer() -> StrokeSegmentationRecognizer:
    return StrokeSegmentationRecognizer(SegmentationCombiner(segmenters=[RaySquaredSegmenter()]))


def test_implements_all_capabilities(recognizer):
    assert isinstance(recognizer, Recognizer)
    assert isinstance(recognizer, PipelinedRecognizer)
    assert isinstance(recognizer, TimedRecognizer)


def test_capabilities_are_abstract():
    with pytest.raises(TypeError):
        Recognizer()


def test_submit_then_recognize(recognizer, l_stroke, u_stroke):
    recognizer.submit(l_stroke)
    recognizer.submit(u_stroke)
    results = recognizer.recognize()
    assert len(results) == 2
    assert results[0][0].num_corners == 3
    assert results[1][0].num_corners == 4


def test_recognize_is_incremental(recognizer, l_stroke, u_stroke):
    recognizer.submit(l_stroke)
    first = recognizer.recognize()
    recognizer.submit(u_stroke)
    second = recognizer.recognize()
    assert second[0] == first[0]
    assert len(second) == 2


def test_submit_empty_stroke_raises(recognizer, empty_stroke):
    with pytest.raises(InvalidParametersError):
        recognizer.submit(empty_stroke)


def test_append_to_recognition_returns_latest(recognizer, l_stroke, u_stroke):
    recognizer.append_to_recognition(l_stroke)
    latest = recognizer.append_to_recognition(u_stroke)
    assert latest[0].num_corners == 4
    assert recognizer.get_recognition_state().pending == 0


def test_state_snapshot_and_restore(recognizer, l_stroke, u_stroke):
    recognizer.append_to_recognition(l_stroke)
    snapshot = recognizer.get_recognition_state()
    recognizer.append_to_recognition(u_stroke)
    assert len(recognizer.get_recognition_state().strokes) == 2

    recognizer.set_recognition_state(snapshot)
    state = recognizer.get_recognition_state()
    assert state == snapshot
    assert len(state.strokes) == 1


def test_state_is_immutable(recognizer, l_stroke):
    recognizer.submit(l_stroke)
    state = recognizer.get_recognition_state()
    assert state.pending == 1
    with pytest.raises(AttributeError):
        state.strokes = ()


def test_restore_rejects_inconsistent_state(recognizer, l_stroke):
    bad = RecognitionState(strokes=(), results=((),))
    with pytest.raises(InvalidParametersError):
        recognizer.set_recognition_state(bad)


def test_timed_out_recognizer_needs_reset(recognizer, l_stroke):
    recognizer.submit(l_stroke)
    with pytest.raises(RecognitionTimedOut) as exc_info:
        recognizer.recognize_timed(0)
    assert exc_info.value.max_ms == 0
    assert exc_info.value.elapsed_ms >= 0

    with pytest.raises(InvalidParametersError):
        recognizer.recognize()

    recognizer.reset()
    recognizer.submit(l_stroke)
    assert len(recognizer.recognize()) == 1


def test_restoring_state_clears_timeout(recognizer, l_stroke):
    snapshot = recognizer.get_recognition_state()
    recognizer.submit(l_stroke)
    with pytest.raises(RecognitionTimedOut):
        recognizer.recognize_timed(0)
    recognizer.set_recognition_state(snapshot)
    assert recognizer.recognize() == []


def test_generous_budget_completes(recognizer, l_stroke):
    recognizer.submit(l_stroke)
    results = recognizer.recognize_timed(60_000)
    assert results[0][0].num_corners == 3


def test_default_timeout_used(l_stroke):
    rec = StrokeSegmentationRecognizer(
        SegmentationCombiner(segmenters=[RaySquaredSegmenter()]), default_timeout_ms=0
    )
    rec.submit(l_stroke)
    with pytest.raises(RecognitionTimedOut):
        rec.recognize_timed()


def test_concurrent_submissions(recognizer, l_stroke):
    threads = [threading.Thread(target=recognizer.append_to_recognition, args=(l_stroke,)) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    state = recognizer.get_recognition_state()
    assert len(state.strokes) == 4
    assert state.pending == 0


class TestDeadline:
    def test_none_never_expires(self):
        deadline = Deadline.none()
        deadline.check()
        assert not deadline.expired
        assert deadline.remaining_ms == float("inf")

    def test_zero_budget_expires(self):
        deadline = Deadline(0)
        assert deadline.expired
        assert deadline.remaining_ms == 0.0
        with pytest.raises(RecognitionTimedOut):
            deadline.check()

    def test_generous_budget(self):
        deadline = Deadline(60_000)
        deadline.check()
        assert 0 < deadline.remaining_ms <= 60_000

    def test_negative_budget_rejected(self):
        with pytest.raises(ValueError):
            Deadline(-1)
