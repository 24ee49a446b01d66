# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Sleep detection on/off switch and test event."""

from fastapi import APIRouter, Depends

from napping.api.dependencies import get_pipeline
from napping.detection.pipeline import DetectionPipeline

router = APIRouter()


@router.post("/enable")
async def enable_detection(pipeline: DetectionPipeline = Depends(get_pipeline)):
    """Turn sleep detection on."""
    pipeline.set_enabled(True)
    return pipeline.get_status().to_dict()


@router.post("/disable")
async def disable_detection(pipeline: DetectionPipeline = Depends(get_pipeline)):
    """Turn sleep detection off.

    Clears any episode in progress and reports awake. The cooldown
    since the last event still applies after re-enabling.
    """
    pipeline.set_enabled(False)
    return pipeline.get_status().to_dict()


@router.post("/test-event")
async def test_event(pipeline: DetectionPipeline = Depends(get_pipeline)):
    """Send a sleep-detected event to subscribers, for checking notifications."""
    pipeline.trigger_test_event()
    return {"sent": True}
