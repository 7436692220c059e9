"""
CaptureLoop - camera stream, per-frame inference and OSC fan-out.

The loop has no timer of its own: the window calls step() once per display
tick, so capture, inference, encoding and rendering share one thread.

State machine:
    stopped -> cameraActive -> tracking -> cameraActive -> stopped
"""

from typing import Any, Callable, List, Optional

import cv2
import numpy as np

from .camera import CameraError, open_camera
from .encoder import encode_landmarks
from .log import get_logger
from .models import LandmarkPoint, OscPacket, TrackingState
from .telemetry import Telemetry

log = get_logger(__name__)

STATUS_TRACKING = "Tracking active - Sending OSC data"
STATUS_CAMERA_READY = 'Camera ready - Click "Start Tracking" to send OSC'
STATUS_STOPPED = "Camera stopped"


class CaptureLoop:
    """카메라 하나에서 프레임을 읽어 포즈 추정 후 렌더링/전송"""

    def __init__(self, estimator, sink: Callable[[OscPacket], Any],
                 camera_factory: Callable = open_camera,
                 telemetry: Optional[Telemetry] = None,
                 width: int = 1280, height: int = 720):
        self.estimator = estimator
        self.sink = sink
        self.camera_factory = camera_factory
        self.telemetry = telemetry or Telemetry()
        self.width = width
        self.height = height

        self.device_id: Optional[str] = None
        self.camera_active: bool = False
        self.tracking: bool = False
        # 피드 루프는 하나뿐. False 이면 step() 이 아무것도 하지 않음
        self.running: bool = False
        self.last_error: Optional[str] = None

        # 렌더링 콜백: (rgb 프레임, 랜드마크 또는 None)
        self.on_frame: Optional[Callable[[np.ndarray, Optional[List[LandmarkPoint]]], None]] = None

        self._cap = None

    @property
    def state(self) -> TrackingState:
        return TrackingState.derive(self.camera_active, self.tracking)

    def status_text(self) -> str:
        if not self.camera_active and self.last_error:
            return f"Error: {self.last_error}"
        state = self.state
        if state is TrackingState.TRACKING:
            return STATUS_TRACKING
        if state is TrackingState.CAMERA_READY:
            return STATUS_CAMERA_READY
        return STATUS_STOPPED

    def _release(self):
        if self._cap is not None:
            log.info("Stopping existing video stream...")
            self._cap.release()
            self._cap = None

    def start(self, device_id: Optional[str] = None) -> bool:
        """스트림을 (재)시작. 실패해도 예외 없이 False 반환"""
        self._release()
        self.camera_active = False
        self.device_id = device_id
        log.info("Starting camera with deviceId: %s", device_id or "default")

        try:
            cap = self.camera_factory(device_id, self.width, self.height)
            # 첫 프레임이 나올 때까지 대기
            ok, frame = cap.read()
            if not ok or frame is None:
                cap.release()
                raise CameraError(f"Camera {device_id or 'default'} returned no frames")
        except (CameraError, cv2.error) as e:
            log.error("Error starting camera: %s", e)
            self.last_error = str(e)
            self.running = False
            return False

        self._cap = cap
        self.last_error = None
        self.camera_active = True
        if not self.running:
            log.info("Starting frame processing loop...")
            self.running = True
        log.info("Camera started successfully (%dx%d)", frame.shape[1], frame.shape[0])
        return True

    def switch_device(self, device_id: Optional[str]) -> bool:
        return self.start(device_id)

    def stop(self):
        self._release()
        self.running = False
        self.camera_active = False
        self.tracking = False

    def arm_tracking(self) -> bool:
        if not self.camera_active:
            self.start(self.device_id)
        self.tracking = True
        return self.tracking

    def disarm_tracking(self) -> bool:
        self.tracking = False
        return self.tracking

    def toggle_tracking(self) -> bool:
        if self.tracking:
            return self.disarm_tracking()
        return self.arm_tracking()

    def _infer(self, rgb: np.ndarray) -> Optional[List[LandmarkPoint]]:
        try:
            return self.estimator.infer(rgb)
        except (RuntimeError, ValueError) as e:
            log.warning("Pose inference failed, treating as no pose: %s", e)
            return None

    def step(self) -> bool:
        """프레임 하나 처리. 처리했으면 True"""
        if not self.running or self._cap is None:
            return False

        try:
            ok, frame = self._cap.read()
        except cv2.error as e:
            # 장치가 분리되면 read() 가 예외를 던짐
            log.warning("Camera read failed: %s", e)
            ok, frame = False, None
        if not ok or frame is None:
            self.telemetry.record_dropped()
            return False

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        landmarks = self._infer(rgb)
        self.telemetry.record_frame(landmarks)

        if self.tracking and landmarks:
            packets = encode_landmarks(landmarks)
            for packet in packets:
                self.sink(packet)
            self.telemetry.add_messages(len(packets))

        if self.on_frame:
            self.on_frame(rgb, landmarks)
        return True

    def close(self):
        self.stop()
        close = getattr(self.estimator, "close", None)
        if close:
            close()
