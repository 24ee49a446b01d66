# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Status endpoint."""

from fastapi import APIRouter, Depends

from napping.api.dependencies import get_pipeline
from napping.detection.pipeline import DetectionPipeline

router = APIRouter()


@router.get("/status")
async def get_status(pipeline: DetectionPipeline = Depends(get_pipeline)):
    """Get the detector status.

    Returns:
        PipelineStatus as a dictionary:
        - enabled: Whether sleep detection is on
        - is_sleeping: Current sleeping signal
        - closed_seconds: Length of the current closed-eyes episode
        - last_event_time: When the last sleep-detected event fired
        - counters: Frame and classification counters
    """
    return pipeline.get_status().to_dict()
