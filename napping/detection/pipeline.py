# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Detection pipeline orchestrator.

Composes the frame gate, the eye state classifier and the sleep state
machine into one unit with an enable/disable switch.

Threading:
    - submit_frame() runs on the producer's thread. It only takes the gate
      decision and never blocks on classification.
    - Classification runs on a single worker thread.
    - The worker's completion takes the same lock as submit_frame() before
      touching the gate or the state machine, so state changes are strictly
      sequential.
    - Subscribers are called on a separate notifier thread, in the order
      values were produced.
"""

import logging
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

from napping.detection.eye_state import EyeStateClassifier, any_eyes_closed
from napping.detection.frame_gate import FrameGate
from napping.detection.sleep_state import SleepStateMachine
from napping.models.detection import (
    DetectorConfig,
    FaceSample,
    PipelineStatus,
    SleepObservation,
)

logger = logging.getLogger(__name__)

StateCallback = Callable[[bool], None]
SleepCallback = Callable[[float], None]


class DetectionPipeline:
    """Frame-in, sleep-signal-out detection unit.

    Outputs:
        - is_sleeping updates (may repeat the same value), via subscribe_state()
        - one sleep-detected event per qualifying episode, via
          subscribe_sleep_detected()
    """

    def __init__(
        self,
        classifier: EyeStateClassifier,
        config: Optional[DetectorConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        classify_executor: Optional[Executor] = None,
        notify_executor: Optional[Executor] = None,
        enabled: bool = True,
    ):
        """Initialize detection pipeline.

        Args:
            classifier: Face/eye classifier with a classify(frame) method
            config: Detector configuration (defaults if not provided)
            clock: Monotonic time source in seconds
            classify_executor: Executor for classification (single worker
                thread if not provided)
            notify_executor: Executor for subscriber callbacks (single worker
                thread if not provided)
            enabled: Whether detection starts enabled
        """
        self.config = config or DetectorConfig()
        self._classifier = classifier
        self._clock = clock

        self._gate = FrameGate(self.config.processing_interval_seconds)
        self._machine = SleepStateMachine(self.config)
        self._lock = threading.RLock()

        self._owned_executors: List[Executor] = []
        if classify_executor is None:
            classify_executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="SleepClassifier"
            )
            self._owned_executors.append(classify_executor)
        if notify_executor is None:
            notify_executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="SleepNotifier"
            )
            self._owned_executors.append(notify_executor)
        self._classify_executor = classify_executor
        self._notify_executor = notify_executor

        # Enable switch; generation invalidates in-flight results on toggle
        self._enabled = enabled
        self._generation = 0

        # Subscribers
        self._state_callbacks: List[StateCallback] = []
        self._sleep_callbacks: List[SleepCallback] = []
        self._is_sleeping = False

        # Counters
        self._frames_received = 0
        self._frames_dropped = 0
        self._classifications = 0
        self._classification_failures = 0
        self._events_fired = 0
        self._last_event_time: Optional[datetime] = None

        self._start_time = datetime.now()

    # ==================== Properties ====================

    @property
    def is_enabled(self) -> bool:
        """Whether detection is enabled."""
        return self._enabled

    @property
    def is_sleeping(self) -> bool:
        """Last is_sleeping value published to subscribers."""
        return self._is_sleeping

    # ==================== Subscriptions ====================

    def subscribe_state(self, callback: StateCallback) -> Callable[[], None]:
        """Register a callback for is_sleeping updates.

        Returns:
            Function that removes the callback
        """
        with self._lock:
            self._state_callbacks.append(callback)
        return lambda: self._unsubscribe(self._state_callbacks, callback)

    def subscribe_sleep_detected(self, callback: SleepCallback) -> Callable[[], None]:
        """Register a callback for sleep-detected events.

        The callback receives the sample timestamp (clock seconds).

        Returns:
            Function that removes the callback
        """
        with self._lock:
            self._sleep_callbacks.append(callback)
        return lambda: self._unsubscribe(self._sleep_callbacks, callback)

    def _unsubscribe(self, callbacks: List[Callable], callback: Callable) -> None:
        with self._lock:
            if callback in callbacks:
                callbacks.remove(callback)

    # ==================== Control ====================

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable detection.

        Disabling clears the current episode and publishes is_sleeping=False.
        The cooldown clock is kept. A classification still running when the
        switch flips has its result discarded.
        """
        with self._lock:
            if enabled != self._enabled:
                self._enabled = enabled
                self._generation += 1
                logger.info(f"Sleep detection {'enabled' if enabled else 'disabled'}")

            if not enabled:
                self._machine.reset()
                self._publish_state(False)

    def trigger_test_event(self) -> None:
        """Publish a sleep-detected event without touching detector state."""
        logger.info("Publishing test sleep-detected event")
        with self._lock:
            self._dispatch(list(self._sleep_callbacks), self._clock())

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker threads this pipeline created."""
        for executor in self._owned_executors:
            executor.shutdown(wait=wait)
        logger.info("Detection pipeline stopped")

    # ==================== Frame path ====================

    def submit_frame(self, frame: Any) -> bool:
        """Offer a camera frame to the pipeline.

        Never blocks on classification. Frames are dropped while disabled,
        while a classification is in flight, or within the processing
        interval of the last admitted frame.

        Args:
            frame: Opaque image buffer handed to the classifier

        Returns:
            True if the frame was dispatched for classification
        """
        now = self._clock()

        with self._lock:
            self._frames_received += 1
            if not self._enabled or not self._gate.try_acquire(now):
                self._frames_dropped += 1
                return False
            generation = self._generation

        try:
            self._classify_executor.submit(self._classify, frame, now, generation)
        except RuntimeError as e:
            # Executor already shut down
            logger.warning(f"Cannot dispatch frame: {e}")
            with self._lock:
                self._gate.release()
                self._frames_dropped += 1
            return False

        return True

    def _classify(self, frame: Any, at: float, generation: int) -> None:
        """Worker-side classification and completion."""
        faces: Optional[List[FaceSample]] = None
        try:
            faces = self._classifier.classify(frame)
        except Exception as e:
            logger.warning(f"Classification failed, sample dropped: {e}")
        finally:
            with self._lock:
                self._gate.release()
                self._complete(faces, at, generation)

    def _complete(
        self,
        faces: Optional[List[FaceSample]],
        at: float,
        generation: int,
    ) -> None:
        """Apply a finished classification. Caller holds the lock."""
        if faces is None:
            self._classification_failures += 1
            return

        self._classifications += 1

        if not self._enabled or generation != self._generation:
            logger.debug("Discarding classification finished after detection was toggled")
            return

        self._observe(faces, at)

    def process_faces(
        self,
        faces: Sequence[FaceSample],
        at: Optional[float] = None,
    ) -> Optional[SleepObservation]:
        """Feed an already-classified sample to the state machine.

        Args:
            faces: Faces found in the sample (empty for no face)
            at: Sample timestamp (now if not provided)

        Returns:
            SleepObservation, or None if detection is disabled
        """
        if at is None:
            at = self._clock()

        with self._lock:
            if not self._enabled:
                return None
            return self._observe(faces, at)

    def _observe(self, faces: Sequence[FaceSample], at: float) -> SleepObservation:
        closed = any_eyes_closed(faces, self.config)
        observation = self._machine.observe(closed, at)
        logger.debug(
            f"Sample at {at:.2f}: faces={len(faces)} closed={closed} "
            f"sleeping={observation.is_sleeping}"
        )

        self._publish_state(observation.is_sleeping)

        if observation.fired:
            self._events_fired += 1
            self._last_event_time = datetime.now()
            self._dispatch(list(self._sleep_callbacks), at)

        return observation

    # ==================== Publication ====================

    def _publish_state(self, is_sleeping: bool) -> None:
        """Record and publish an is_sleeping value. Caller holds the lock."""
        self._is_sleeping = is_sleeping
        self._dispatch(list(self._state_callbacks), is_sleeping)

    def _dispatch(self, callbacks: List[Callable], value: Any) -> None:
        """Hand callbacks to the notifier thread without waiting."""
        if not callbacks:
            return
        try:
            self._notify_executor.submit(_run_callbacks, callbacks, value)
        except RuntimeError as e:
            logger.debug(f"Notifier unavailable, update not delivered: {e}")

    # ==================== Status ====================

    def get_status(self) -> PipelineStatus:
        """Get a snapshot of the pipeline state and counters."""
        with self._lock:
            return PipelineStatus(
                enabled=self._enabled,
                is_sleeping=self._is_sleeping,
                closed_seconds=self._machine.closed_seconds(self._clock()),
                last_event_time=self._last_event_time,
                frames_received=self._frames_received,
                frames_dropped=self._frames_dropped,
                classifications=self._classifications,
                classification_failures=self._classification_failures,
                events_fired=self._events_fired,
                uptime_seconds=(datetime.now() - self._start_time).total_seconds(),
            )


def _run_callbacks(callbacks: List[Callable], value: Any) -> None:
    for callback in callbacks:
        try:
            callback(value)
        except Exception as e:
            logger.error(f"Subscriber callback error: {e}")
