# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Log-based sinks for the pipeline's sleep outputs."""

import logging
from typing import Callable, List, Optional

from napping.detection.pipeline import DetectionPipeline

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Logs sleep-detected events and sleeping/awake transitions.

    The pipeline may repeat the same is_sleeping value; only changes are
    logged.
    """

    def __init__(self):
        self._last_state: Optional[bool] = None
        self.events_seen = 0

    def on_state(self, is_sleeping: bool) -> None:
        if is_sleeping == self._last_state:
            return
        self._last_state = is_sleeping
        logger.info(f"Sleep state: {'SLEEPING' if is_sleeping else 'AWAKE'}")

    def on_sleep_detected(self, at: float) -> None:
        self.events_seen += 1
        logger.warning(f"Sleep detected (t={at:.2f})")

    def attach(self, pipeline: DetectionPipeline) -> List[Callable[[], None]]:
        """Subscribe to a pipeline.

        Returns:
            Unsubscribe functions
        """
        return [
            pipeline.subscribe_state(self.on_state),
            pipeline.subscribe_sleep_detected(self.on_sleep_detected),
        ]
