# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""API route handlers for the sleep detection service."""

from napping.api.routes import config_routes, detection, frames, health, status

__all__ = ["health", "status", "detection", "frames", "config_routes"]
