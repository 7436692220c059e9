"""
VideoCanvas - camera frame with pose overlay.
"""

import math
from typing import List, Optional

import numpy as np
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QImage

from .models import LandmarkPoint
from .constants import (
    BODY_PART_COLORS, LANDMARK_OUTLINE_COLOR, LANDMARK_FILL_COLOR,
    get_skeleton_connections,
)


def frame_to_qimage(rgb: np.ndarray) -> QImage:
    """HxWx3 RGB 배열을 QImage 로 변환 (데이터 복사)"""
    rgb = np.ascontiguousarray(rgb)
    height, width = rgb.shape[:2]
    image = QImage(rgb.data, width, height, rgb.strides[0], QImage.Format.Format_RGB888)
    return image.copy()


class VideoCanvas(QWidget):
    """비디오 프레임과 스켈레톤/랜드마크 오버레이를 그리는 위젯"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.surface: Optional[QImage] = None
        self.show_skeleton: bool = True
        self.show_landmarks: bool = True
        self.placeholder_text: str = "Waiting for camera..."

        # 시각화 옵션
        self.skeleton_width: int = 4
        self.landmark_radius: int = 6
        self.landmark_outline_width: int = 2

        self.connections = get_skeleton_connections()

        self.setMinimumSize(640, 360)
        self.setStyleSheet("background-color: #1a1a2e;")

    def set_show_skeleton(self, show: bool):
        self.show_skeleton = show

    def set_show_landmarks(self, show: bool):
        self.show_landmarks = show

    def set_placeholder_text(self, text: str):
        self.placeholder_text = text
        self.update()

    def clear(self):
        self.surface = None
        self.update()

    def set_frame(self, rgb: np.ndarray, landmarks: Optional[List[LandmarkPoint]]):
        """프레임마다 호출: 원본 해상도 surface 에 프레임과 오버레이를 그림"""
        self.surface = self.render_frame(rgb, landmarks)
        self.update()

    def render_frame(self, rgb: np.ndarray, landmarks: Optional[List[LandmarkPoint]]) -> QImage:
        # surface 크기 = 비디오 원본 크기
        surface = frame_to_qimage(rgb)
        if not landmarks:
            return surface

        painter = QPainter(surface)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            if self.show_skeleton:
                self._draw_connectors(painter, landmarks, surface.width(), surface.height())
            if self.show_landmarks:
                self._draw_landmarks(painter, landmarks, surface.width(), surface.height())
        finally:
            painter.end()
        return surface

    def _is_valid_coord(self, x: float, y: float) -> bool:
        return not (math.isnan(x) or math.isinf(x) or math.isnan(y) or math.isinf(y))

    def _draw_connectors(self, painter: QPainter, landmarks: List[LandmarkPoint],
                         width: int, height: int):
        for start, end, part in self.connections:
            if start >= len(landmarks) or end >= len(landmarks):
                continue
            lm1 = landmarks[start]
            lm2 = landmarks[end]
            if not self._is_valid_coord(lm1.x, lm1.y) or not self._is_valid_coord(lm2.x, lm2.y):
                continue

            color = QColor(BODY_PART_COLORS.get(part, BODY_PART_COLORS["center"]))
            painter.setPen(QPen(color, self.skeleton_width))
            painter.drawLine(int(lm1.x * width), int(lm1.y * height),
                             int(lm2.x * width), int(lm2.y * height))

    def _draw_landmarks(self, painter: QPainter, landmarks: List[LandmarkPoint],
                        width: int, height: int):
        radius = self.landmark_radius
        painter.setPen(QPen(QColor(LANDMARK_OUTLINE_COLOR), self.landmark_outline_width))
        painter.setBrush(QBrush(QColor(LANDMARK_FILL_COLOR)))
        for lm in landmarks:
            if not self._is_valid_coord(lm.x, lm.y):
                continue
            cx, cy = int(lm.x * width), int(lm.y * height)
            painter.drawEllipse(cx - radius, cy - radius, radius * 2, radius * 2)

    def _target_rect(self) -> QRectF:
        """종횡비를 유지한 채 위젯 중앙에 맞춘 영역"""
        sw, sh = self.surface.width(), self.surface.height()
        scale = min(self.width() / sw, self.height() / sh)
        w, h = sw * scale, sh * scale
        return QRectF((self.width() - w) / 2, (self.height() - h) / 2, w, h)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
            painter.fillRect(self.rect(), QColor("#1a1a2e"))

            if self.surface is None or self.surface.isNull():
                painter.setPen(QColor("#ffffff"))
                painter.setFont(QFont("Segoe UI", 14))
                painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self.placeholder_text)
                return

            painter.drawImage(self._target_rect(), self.surface)
        finally:
            painter.end()
