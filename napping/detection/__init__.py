# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Frame gating, eye state measurement and sleep detection."""

from napping.detection.eye_state import FaceMeshClassifier, any_eyes_closed, eye_open_ratio
from napping.detection.frame_gate import FrameGate
from napping.detection.pipeline import DetectionPipeline
from napping.detection.sleep_state import SleepStateMachine

__all__ = [
    "DetectionPipeline",
    "FaceMeshClassifier",
    "FrameGate",
    "SleepStateMachine",
    "any_eyes_closed",
    "eye_open_ratio",
]
