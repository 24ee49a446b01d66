# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""FastAPI application factory for the sleep detection service."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from napping.api.routes import config_routes, detection, frames, health, status
from napping.config import Settings, get_settings
from napping.detection.eye_state import FaceMeshClassifier
from napping.detection.pipeline import DetectionPipeline
from napping.notifications import LoggingNotifier

logger = logging.getLogger(__name__)


def build_pipeline(settings: Settings) -> DetectionPipeline:
    """Create the Face Mesh classifier and the pipeline around it."""
    classifier = FaceMeshClassifier()
    if not classifier.load_model():
        logger.error("Failed to load eye detection model")

    return DetectionPipeline(
        classifier,
        settings.detection.to_detector_config(),
        enabled=settings.detection.enabled_on_start,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Sleep detection service starting...")

    settings: Settings = app.state.settings

    owns_pipeline = app.state.pipeline is None
    if owns_pipeline:
        app.state.pipeline = build_pipeline(settings)
    pipeline: DetectionPipeline = app.state.pipeline

    notifier = LoggingNotifier()
    unsubscribers = notifier.attach(pipeline)

    logger.info(
        f"Sleep detection service ready on {settings.server.host}:{settings.server.port} "
        f"(detection {'enabled' if pipeline.is_enabled else 'disabled'})"
    )

    yield

    logger.info("Sleep detection service shutting down...")
    for unsubscribe in unsubscribers:
        unsubscribe()
    if owns_pipeline:
        pipeline.shutdown(wait=False)
        app.state.pipeline = None
    logger.info("Sleep detection service stopped")


def create_app(
    settings: Optional[Settings] = None,
    pipeline: Optional[DetectionPipeline] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings (uses global if not provided)
        pipeline: Pipeline to serve; built at startup if not provided.
            A provided pipeline is not shut down by the app.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Napping Sleep Detection Service",
        description=(
            "Watches camera frames for sustained eye closure and raises a "
            "debounced sleep-detected event. "
            "NOT FOR MEDICAL USE - proof of concept only."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings or get_settings()
    app.state.pipeline = pipeline

    app.include_router(health.router, tags=["Health"])
    app.include_router(status.router, tags=["Status"])
    app.include_router(detection.router, prefix="/detection", tags=["Detection"])
    app.include_router(frames.router, tags=["Frames"])
    app.include_router(config_routes.router, prefix="/config", tags=["Configuration"])

    return app
