# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Frame ingestion endpoint for external frame producers."""

import logging

import cv2
import numpy as np
from fastapi import APIRouter, Depends, HTTPException, Request

from napping.api.dependencies import get_pipeline
from napping.detection.pipeline import DetectionPipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/frames")
async def submit_frame(
    request: Request,
    pipeline: DetectionPipeline = Depends(get_pipeline),
):
    """Submit one encoded camera frame (JPEG/PNG request body).

    Frames are throttled by the pipeline: a frame that arrives while a
    classification is running, or too soon after the last one, is dropped.

    Returns:
        accepted: True if the frame was dispatched for classification
    """
    contents = await request.body()
    if not contents:
        raise HTTPException(status_code=400, detail="Empty request body")

    nparr = np.frombuffer(contents, np.uint8)
    frame = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
    if frame is None:
        raise HTTPException(status_code=400, detail="Invalid image format")

    accepted = pipeline.submit_frame(frame)
    if not accepted:
        logger.debug("Frame dropped by pipeline")
    return {"accepted": accepted}
