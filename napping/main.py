# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Sleep detection service entry point.

Starts the FastAPI server with uvicorn.

Usage:
    python -m napping.main
    python -m napping.main --host 0.0.0.0 --port 8110 --disabled
"""

import argparse
import logging
import sys

import uvicorn

from napping.api.server import create_app
from napping.config import get_settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def main():
    """Main entry point for the sleep detection service."""
    parser = argparse.ArgumentParser(
        description="Napping - camera-based sleep detection service"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind to (default: from settings)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from settings)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from settings)",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Start with sleep detection switched off",
    )

    args = parser.parse_args()

    settings = get_settings()

    log_level = args.log_level or settings.server.log_level
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    # Override with CLI args if provided
    host = args.host or settings.server.host
    port = args.port or settings.server.port
    if args.disabled:
        settings.detection.enabled_on_start = False

    logger.info("=" * 60)
    logger.info("Napping Sleep Detection Service")
    logger.info("NOT FOR MEDICAL USE - Proof of concept only")
    logger.info("=" * 60)
    logger.info(f"Starting server on {host}:{port}")

    uvicorn.run(
        create_app(settings=settings),
        host=host,
        port=port,
        log_level=log_level.lower(),
    )


if __name__ == "__main__":
    main()
