# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Camera-based sleep detection service.

Watches a stream of camera frames, decides when the person in front of the
camera has had their eyes closed long enough to count as asleep, and raises
a debounced "sleep detected" event.
"""

__version__ = "0.1.0"
