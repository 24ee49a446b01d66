"""Shared fixtures: a manual clock, synchronous executors and a scripted classifier."""

from concurrent.futures import Executor, Future
from typing import Any, Callable, List, Tuple

import pytest

from napping.detection.pipeline import DetectionPipeline
from napping.models.detection import DetectorConfig, FaceSample


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class ImmediateExecutor(Executor):
    """Runs submitted work on the calling thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as e:
            future.set_exception(e)
        return future


class ManualExecutor(Executor):
    """Holds submitted work until run_pending() is called."""

    def __init__(self):
        self.pending: List[Tuple[Callable, tuple, dict]] = []

    def submit(self, fn, *args, **kwargs):
        self.pending.append((fn, args, kwargs))
        return Future()

    def run_pending(self) -> None:
        pending, self.pending = self.pending, []
        for fn, args, kwargs in pending:
            fn(*args, **kwargs)


class ScriptedClassifier:
    """Classifier whose result is carried by the frame itself.

    A list frame is returned as the face list, an exception frame is
    raised, anything else returns ``default``.
    """

    def __init__(self, default=None):
        self.default = default if default is not None else []
        self.calls = 0

    def classify(self, frame: Any) -> List[FaceSample]:
        self.calls += 1
        if isinstance(frame, BaseException):
            raise frame
        if isinstance(frame, list):
            return frame
        return self.default


def closed_face(confidence: float = 0.9) -> FaceSample:
    return FaceSample(confidence=confidence, left_eye_ratio=0.05, right_eye_ratio=0.07)


def open_face(confidence: float = 0.9) -> FaceSample:
    return FaceSample(confidence=confidence, left_eye_ratio=0.35, right_eye_ratio=0.33)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def classifier():
    return ScriptedClassifier()


@pytest.fixture
def config():
    return DetectorConfig()


@pytest.fixture
def pipeline(classifier, config, clock):
    pipeline = DetectionPipeline(
        classifier,
        config,
        clock=clock,
        classify_executor=ImmediateExecutor(),
        notify_executor=ImmediateExecutor(),
    )
    yield pipeline
    pipeline.shutdown()
