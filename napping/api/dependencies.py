# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Shared FastAPI dependencies."""

from fastapi import HTTPException, Request

from napping.detection.pipeline import DetectionPipeline


def get_pipeline(request: Request) -> DetectionPipeline:
    """Return the pipeline owned by the application.

    Raises:
        HTTPException: 503 if the pipeline is not running
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise HTTPException(
            status_code=503,
            detail="Detection pipeline not running",
        )
    return pipeline
