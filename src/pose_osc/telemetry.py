"""
Rolling counters shown in the stats panel.
"""

import time
from typing import List, Optional

from .models import LandmarkPoint


def average_visibility(landmarks: Optional[List[LandmarkPoint]]) -> float:
    """visibility 평균 (값이 없으면 0 으로 계산)"""
    if not landmarks:
        return 0.0
    total = sum(lm.visibility or 0.0 for lm in landmarks)
    return total / len(landmarks)


def visibility_percent(landmarks: Optional[List[LandmarkPoint]]) -> int:
    return round(average_visibility(landmarks) * 100)


class Telemetry:
    """FPS, 전송한 OSC 메시지 수, 랜드마크 수, 평균 visibility"""

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.fps: int = 0
        self.osc_message_count: int = 0
        self.landmark_count: int = 0
        self.confidence_percent: int = 0
        self.dropped_frames: int = 0
        self._frame_count: int = 0
        self._window_start: float = clock()

    def record_frame(self, landmarks: Optional[List[LandmarkPoint]], now: Optional[float] = None):
        if landmarks:
            self.landmark_count = len(landmarks)
            self.confidence_percent = visibility_percent(landmarks)
        else:
            self.landmark_count = 0
            self.confidence_percent = 0
        self._tick(self.clock() if now is None else now)

    def _tick(self, now: float):
        self._frame_count += 1
        if now - self._window_start >= 1.0:
            self.fps = self._frame_count
            self._frame_count = 0
            self._window_start = now

    def record_dropped(self):
        self.dropped_frames += 1

    def add_messages(self, count: int):
        self.osc_message_count += count
