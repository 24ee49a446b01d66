# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Configuration management for the sleep detection service.

Uses Pydantic Settings for environment variable and .env file support.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from napping.models.detection import DetectorConfig


class DetectionSettings(BaseSettings):
    """Sleep detector timing and threshold settings."""

    model_config = SettingsConfigDict(
        env_prefix="NAPPING_DETECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    minimum_closed_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Seconds of continuously closed eyes before declaring sleep"
    )
    cooldown_seconds: float = Field(
        default=12.0,
        ge=0.0,
        description="Minimum seconds between two sleep-detected events"
    )
    processing_interval_seconds: float = Field(
        default=0.18,
        ge=0.0,
        description="Minimum seconds between two classified frames"
    )
    closed_ratio_threshold: float = Field(
        default=0.16,
        gt=0.0,
        description="Eye openness ratio below this = eye closed"
    )
    minimum_face_confidence: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Faces below this detection confidence are ignored"
    )
    enabled_on_start: bool = Field(
        default=True,
        description="Whether sleep detection is enabled when the service starts"
    )

    def to_detector_config(self) -> DetectorConfig:
        """Build the immutable detector configuration."""
        return DetectorConfig(
            minimum_closed_seconds=self.minimum_closed_seconds,
            cooldown_seconds=self.cooldown_seconds,
            processing_interval_seconds=self.processing_interval_seconds,
            closed_ratio_threshold=self.closed_ratio_threshold,
            minimum_face_confidence=self.minimum_face_confidence,
        )


class ServerSettings(BaseSettings):
    """FastAPI server settings."""

    model_config = SettingsConfigDict(
        env_prefix="NAPPING_SERVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(
        default="127.0.0.1",
        description="Host to bind to"
    )
    port: int = Field(
        default=8110,
        description="Port to listen on"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )


class Settings(BaseSettings):
    """Root settings for the sleep detection service.

    Settings are loaded from environment variables with NAPPING_ prefix,
    or from a .env file in the working directory.

    Example environment variables:
        NAPPING_SERVER_PORT=8110
        NAPPING_DETECTION_MINIMUM_CLOSED_SECONDS=3
        NAPPING_DETECTION_COOLDOWN_SECONDS=30
    """

    model_config = SettingsConfigDict(
        env_prefix="NAPPING_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
