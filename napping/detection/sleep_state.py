# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Sleep state machine.

Turns a stream of "eyes closed in this sample" booleans into a debounced
sleeping/awake signal and a one-shot sleep-detected event.

State Flow:
    AWAKE -> CLOSING (first closed sample, episode starts)
    CLOSING -> AWAKE (any open or no-face sample)
    CLOSING -> SLEEPING (closed for minimum_closed_seconds)
    SLEEPING -> AWAKE (any open or no-face sample)

    The event fires on entering SLEEPING, at most once per episode, and only
    if cooldown_seconds have passed since the previous event. A suppressed
    episode keeps trying on each later sample until the cooldown passes.

Usage:
    machine = SleepStateMachine(DetectorConfig())
    observation = machine.observe(any_eyes_closed=True, at=time.monotonic())
    if observation.fired:
        notify()
"""

import logging
from typing import Optional

from napping.models.detection import DetectorConfig, SleepObservation

logger = logging.getLogger(__name__)


class SleepStateMachine:
    """Hysteresis filter over per-sample eye-closed observations.

    Not thread-safe; the owning pipeline serializes calls.

    Attributes:
        config: Immutable detector configuration
    """

    def __init__(self, config: DetectorConfig):
        """Initialize state machine.

        Args:
            config: Detector thresholds and durations
        """
        self.config = config

        # Closure window: start of the current closed-eyes episode
        self._closed_eyes_since: Optional[float] = None

        # Detector state
        self._is_sleeping = False
        self._has_fired_for_current_episode = False
        self._last_event_at = float("-inf")

    # ==================== Properties ====================

    @property
    def closed_eyes_since(self) -> Optional[float]:
        """When the current closed-eyes episode started."""
        return self._closed_eyes_since

    @property
    def is_sleeping(self) -> bool:
        """Result of the most recent observation."""
        return self._is_sleeping

    @property
    def has_fired_for_current_episode(self) -> bool:
        """Whether the event already fired for this episode."""
        return self._has_fired_for_current_episode

    @property
    def last_event_at(self) -> float:
        """When the last event fired (-inf if never)."""
        return self._last_event_at

    def closed_seconds(self, now: float) -> Optional[float]:
        """Length of the current episode, or None when eyes are open."""
        if self._closed_eyes_since is None:
            return None
        return now - self._closed_eyes_since

    # ==================== Transitions ====================

    def observe(self, any_eyes_closed: bool, at: float) -> SleepObservation:
        """Feed one classified sample.

        Args:
            any_eyes_closed: True if any trusted face had closed eyes
            at: Sample timestamp in clock seconds

        Returns:
            SleepObservation with the sleeping signal and whether the
            event fired on this sample
        """
        now = at

        if any_eyes_closed:
            if self._closed_eyes_since is None:
                self._closed_eyes_since = now
                logger.debug(f"Closed-eyes episode started at {now:.2f}")
        else:
            self._closed_eyes_since = None
            self._has_fired_for_current_episode = False

        closed_duration = self.closed_seconds(now) or 0.0
        sleeping_now = closed_duration >= self.config.minimum_closed_seconds

        if not sleeping_now:
            self._has_fired_for_current_episode = False

        self._is_sleeping = sleeping_now

        if (
            sleeping_now
            and not self._has_fired_for_current_episode
            and (now - self._last_event_at) >= self.config.cooldown_seconds
        ):
            self._last_event_at = now
            self._has_fired_for_current_episode = True
            logger.info(f"Sleep detected after {closed_duration:.1f}s of closed eyes")
            return SleepObservation(is_sleeping=True, fired=True)

        return SleepObservation(is_sleeping=sleeping_now, fired=False)

    def reset(self) -> None:
        """Clear the current episode and force the awake state.

        The cooldown clock is kept, so re-enabling cannot bypass it.
        """
        self._closed_eyes_since = None
        self._has_fired_for_current_episode = False
        self._is_sleeping = False
