# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Frame throttling and single-flight gate.

Frames arrive at whatever rate the producer delivers them. The gate admits
at most one frame per processing interval and never while a classification
is still running. Rejected frames are dropped, never queued.
"""

from typing import Optional


class FrameGate:
    """Decides which frames get classified.

    Not thread-safe on its own; the pipeline holds its lock around
    ``try_acquire`` and ``release``.
    """

    def __init__(self, processing_interval_seconds: float):
        self.processing_interval_seconds = processing_interval_seconds
        self._in_flight = False
        self._last_processed_at: Optional[float] = None

    @property
    def in_flight(self) -> bool:
        """Whether a classification is currently running."""
        return self._in_flight

    @property
    def last_processed_at(self) -> Optional[float]:
        """When the last admitted frame arrived (None if never)."""
        return self._last_processed_at

    def try_acquire(self, now: float) -> bool:
        """Admit a frame arriving at ``now``.

        Returns:
            True if the caller should classify the frame and later call
            ``release``; False if the frame must be dropped
        """
        if self._in_flight:
            return False

        if (
            self._last_processed_at is not None
            and now - self._last_processed_at < self.processing_interval_seconds
        ):
            return False

        self._in_flight = True
        self._last_processed_at = now
        return True

    def release(self) -> None:
        """Mark the in-flight classification as finished (success or failure)."""
        self._in_flight = False
