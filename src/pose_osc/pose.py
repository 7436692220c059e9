"""
MediaPipe Pose wrapper.
"""

from typing import List, Optional

from .config import PoseModelConfig
from .log import get_logger
from .models import LandmarkPoint

log = get_logger(__name__)


class PoseEstimator:
    """
    Runs MediaPipe Pose on one RGB frame at a time.

    Notes:
    - Coordinates stay normalized (x, y in [0, 1], z relative to the hips).
    - Any malformed result is reported as "no pose" (None).
    """

    def __init__(self, config: Optional[PoseModelConfig] = None):
        config = config or PoseModelConfig()
        try:
            import mediapipe as mp  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "MediaPipe is not installed. Install pose deps with: pip install 'pose-osc[pose]'"
            ) from e

        self._pose = mp.solutions.pose.Pose(
            static_image_mode=False,
            model_complexity=int(config.model_complexity),
            smooth_landmarks=config.smooth_landmarks,
            enable_segmentation=config.enable_segmentation,
            smooth_segmentation=False,
            min_detection_confidence=float(config.min_detection_confidence),
            min_tracking_confidence=float(config.min_tracking_confidence),
        )

    def infer(self, rgb) -> Optional[List[LandmarkPoint]]:
        # rgb: HxWx3 uint8
        results = self._pose.process(rgb)
        return landmarks_from_results(results)

    def close(self):
        if self._pose is not None:
            self._pose.close()
            self._pose = None


def _visibility(lm) -> Optional[float]:
    # protobuf 랜드마크는 값이 없어도 0.0 을 돌려주므로 HasField 로 구분
    has_field = getattr(lm, "HasField", None)
    if has_field is not None and not has_field("visibility"):
        return None
    visibility = getattr(lm, "visibility", None)
    return float(visibility) if visibility is not None else None


def landmarks_from_results(results) -> Optional[List[LandmarkPoint]]:
    """MediaPipe 결과 객체에서 랜드마크 목록 추출"""
    pose_landmarks = getattr(results, "pose_landmarks", None)
    if pose_landmarks is None:
        return None
    try:
        points = [
            LandmarkPoint(x=float(lm.x), y=float(lm.y), z=float(lm.z), visibility=_visibility(lm))
            for lm in pose_landmarks.landmark
        ]
    except (AttributeError, TypeError, ValueError) as e:
        log.debug("Malformed pose result treated as no pose: %s", e)
        return None
    return points or None
