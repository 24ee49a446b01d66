# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Configuration endpoint."""

from fastapi import APIRouter, Depends

from napping.api.dependencies import get_pipeline
from napping.detection.pipeline import DetectionPipeline

router = APIRouter()


@router.get("")
async def get_config(pipeline: DetectionPipeline = Depends(get_pipeline)):
    """Get the detector configuration.

    The configuration is fixed for the pipeline's lifetime; change it with
    NAPPING_DETECTION_* environment variables and restart.
    """
    return {"detection": pipeline.config.to_dict()}
