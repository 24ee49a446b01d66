# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Data models for detector configuration, face samples and status."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DetectorConfig:
    """Immutable sleep detector configuration.

    Attributes:
        minimum_closed_seconds: Sustained eye closure before declaring sleep
        cooldown_seconds: Minimum gap between consecutive sleep events
        processing_interval_seconds: Minimum spacing between classifications
        closed_ratio_threshold: Openness ratio below which an eye is closed
        minimum_face_confidence: Confidence floor for a face to be trusted
    """

    minimum_closed_seconds: float = 2.0
    cooldown_seconds: float = 12.0
    processing_interval_seconds: float = 0.18
    closed_ratio_threshold: float = 0.16
    minimum_face_confidence: float = 0.4

    def __post_init__(self):
        """Validate configuration values."""
        for name, value in self.to_dict().items():
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
        if self.minimum_closed_seconds < 0:
            raise ValueError("minimum_closed_seconds must be >= 0")
        if self.cooldown_seconds < 0:
            raise ValueError("cooldown_seconds must be >= 0")
        if self.processing_interval_seconds < 0:
            raise ValueError("processing_interval_seconds must be >= 0")
        if self.closed_ratio_threshold <= 0:
            raise ValueError("closed_ratio_threshold must be > 0")
        if not 0.0 <= self.minimum_face_confidence <= 1.0:
            raise ValueError("minimum_face_confidence must be between 0 and 1")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "minimum_closed_seconds": self.minimum_closed_seconds,
            "cooldown_seconds": self.cooldown_seconds,
            "processing_interval_seconds": self.processing_interval_seconds,
            "closed_ratio_threshold": self.closed_ratio_threshold,
            "minimum_face_confidence": self.minimum_face_confidence,
        }


@dataclass(frozen=True)
class FaceSample:
    """One face found by the classifier in a single frame.

    Eye ratios are None when that eye could not be measured.
    """

    confidence: float
    left_eye_ratio: Optional[float] = None
    right_eye_ratio: Optional[float] = None


@dataclass(frozen=True)
class SleepObservation:
    """Outcome of feeding one sample to the sleep state machine."""

    is_sleeping: bool
    fired: bool = False


@dataclass
class PipelineStatus:
    """Snapshot of the detection pipeline for status reporting."""

    timestamp: datetime = field(default_factory=datetime.now)

    enabled: bool = True
    is_sleeping: bool = False
    closed_seconds: Optional[float] = None
    last_event_time: Optional[datetime] = None

    # Counters
    frames_received: int = 0
    frames_dropped: int = 0
    classifications: int = 0
    classification_failures: int = 0
    events_fired: int = 0

    uptime_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "enabled": self.enabled,
            "is_sleeping": self.is_sleeping,
            "closed_seconds": self.closed_seconds,
            "last_event_time": (
                self.last_event_time.isoformat() if self.last_event_time else None
            ),
            "counters": {
                "frames_received": self.frames_received,
                "frames_dropped": self.frames_dropped,
                "classifications": self.classifications,
                "classification_failures": self.classification_failures,
                "events_fired": self.events_fired,
            },
            "uptime_seconds": self.uptime_seconds,
        }
