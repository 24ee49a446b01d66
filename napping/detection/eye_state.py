# =============================================================================
# DISCLAIMER: This software is NOT a medical device and is NOT intended for
# medical monitoring, diagnosis, or treatment. This is a proof of concept for
# educational purposes only. Do not rely on this system for health decisions.
# =============================================================================
"""Eye openness measurement and per-sample eye-closed aggregation.

An eye's openness ratio is the height-to-width ratio of the bounding box
around its landmark points. Lower values indicate a more closed eye.

The classifier itself is an external capability: anything with a
``classify(frame) -> List[FaceSample]`` method. ``FaceMeshClassifier`` is
the MediaPipe Face Mesh implementation used by the service.
"""

import logging
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from napping.models.detection import DetectorConfig, FaceSample

logger = logging.getLogger(__name__)

# Floor for the bounding box width so a degenerate point set cannot divide by zero
MIN_EYE_WIDTH = 0.0001

# An eye needs at least this many landmark points to be measurable
MIN_EYE_POINTS = 4

# MediaPipe Face Mesh eye contour landmark indices (16 points each)
# Reference: mediapipe.solutions.face_mesh_connections.FACEMESH_LEFT_EYE / RIGHT_EYE
LEFT_EYE_CONTOUR = (
    263, 249, 390, 373, 374, 380, 381, 382,
    362, 466, 388, 387, 386, 385, 384, 398,
)
RIGHT_EYE_CONTOUR = (
    33, 7, 163, 144, 145, 153, 154, 155,
    133, 246, 161, 160, 159, 158, 157, 173,
)


def eye_open_ratio(points: Sequence[Tuple[float, float]]) -> Optional[float]:
    """Calculate the openness ratio for one eye.

    Args:
        points: (x, y) landmark points around the eye, in any uniform scale

    Returns:
        Bounding box height / width, or None if the eye is untrackable
    """
    if len(points) < MIN_EYE_POINTS:
        return None

    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] < 2:
        return None

    width = max(float(np.ptp(pts[:, 0])), MIN_EYE_WIDTH)
    height = float(np.ptp(pts[:, 1]))
    return height / width


def face_eyes_closed(face: FaceSample, closed_ratio_threshold: float) -> bool:
    """Check whether a single face has its eyes closed.

    Uses the average of the measurable eye ratios. A face with neither eye
    measurable never counts as closed.
    """
    ratios = [r for r in (face.left_eye_ratio, face.right_eye_ratio) if r is not None]
    if not ratios:
        return False
    return (sum(ratios) / len(ratios)) < closed_ratio_threshold


def any_eyes_closed(faces: Iterable[FaceSample], config: DetectorConfig) -> bool:
    """Check whether any trusted face in a sample has its eyes closed.

    Faces below the confidence floor are ignored. No faces at all is an
    eyes-open sample.
    """
    return any(
        face.confidence >= config.minimum_face_confidence
        and face_eyes_closed(face, config.closed_ratio_threshold)
        for face in faces
    )


class EyeStateClassifier(Protocol):
    """External capability that finds faces and measures their eyes."""

    def classify(self, frame: Any) -> List[FaceSample]:
        """Return zero or more face samples for an image frame.

        May raise on failure; callers treat that as a dropped sample.
        """
        ...


class FaceMeshClassifier:
    """Eye state classifier built on MediaPipe Face Mesh.

    Face Mesh only returns faces that passed ``min_detection_confidence``
    and does not report a per-face score, so every returned face carries
    confidence 1.0.
    """

    def __init__(
        self,
        max_faces: int = 4,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ):
        """Initialize the classifier.

        Args:
            max_faces: Maximum number of faces to return per frame
            min_detection_confidence: Face Mesh detection confidence floor
            min_tracking_confidence: Face Mesh tracking confidence floor
        """
        self.max_faces = max_faces
        self.min_detection_confidence = min_detection_confidence
        self.min_tracking_confidence = min_tracking_confidence
        self._face_mesh = None

    def load_model(self) -> bool:
        """Load the MediaPipe Face Mesh model.

        Returns:
            True if model loaded successfully
        """
        if self._face_mesh is not None:
            return True
        try:
            import mediapipe as mp

            self._face_mesh = mp.solutions.face_mesh.FaceMesh(
                static_image_mode=False,
                max_num_faces=self.max_faces,
                refine_landmarks=False,
                min_detection_confidence=self.min_detection_confidence,
                min_tracking_confidence=self.min_tracking_confidence,
            )
            logger.info("MediaPipe Face Mesh loaded successfully")
            return True
        except Exception as e:
            logger.error(f"Failed to load MediaPipe Face Mesh: {e}")
            return False

    @property
    def is_model_loaded(self) -> bool:
        """Check if model is loaded."""
        return self._face_mesh is not None

    def classify(self, frame: np.ndarray) -> List[FaceSample]:
        """Find faces in a BGR frame and measure both eyes of each.

        Raises:
            RuntimeError: If the Face Mesh model could not be loaded
        """
        if not self.load_model():
            raise RuntimeError("Face Mesh model is not available")

        import cv2

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        height, width = frame.shape[:2]
        results = self._face_mesh.process(rgb_frame)

        if not results.multi_face_landmarks:
            return []

        faces = []
        for face_landmarks in results.multi_face_landmarks:
            landmarks = face_landmarks.landmark
            faces.append(
                FaceSample(
                    confidence=1.0,
                    left_eye_ratio=eye_open_ratio(
                        self._eye_points(landmarks, LEFT_EYE_CONTOUR, width, height)
                    ),
                    right_eye_ratio=eye_open_ratio(
                        self._eye_points(landmarks, RIGHT_EYE_CONTOUR, width, height)
                    ),
                )
            )
        return faces

    @staticmethod
    def _eye_points(
        landmarks,
        indices: Sequence[int],
        image_width: int,
        image_height: int,
    ) -> List[Tuple[float, float]]:
        """Collect eye landmarks in pixel units.

        Face Mesh normalizes x and y by different image dimensions, so the
        points are rescaled to keep the ratio aspect-correct.
        """
        return [
            (landmarks[idx].x * image_width, landmarks[idx].y * image_height)
            for idx in indices
            if idx < len(landmarks)
        ]

    def close(self) -> None:
        """Release the Face Mesh graph."""
        if self._face_mesh is not None:
            self._face_mesh.close()
            self._face_mesh = None
