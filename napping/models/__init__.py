# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Data models for the sleep detector."""

from napping.models.detection import (
    DetectorConfig,
    FaceSample,
    PipelineStatus,
    SleepObservation,
)

__all__ = ["DetectorConfig", "FaceSample", "PipelineStatus", "SleepObservation"]
