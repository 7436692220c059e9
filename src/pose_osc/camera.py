"""
Camera access through OpenCV: opening a device and listing the available ones.
"""

from typing import Callable, List, Optional

import cv2

from .log import get_logger
from .models import CameraDescriptor

log = get_logger(__name__)


class CameraError(RuntimeError):
    """카메라를 열 수 없음 (권한 거부, 사용 중, 장치 없음)"""


def _capture_source(device_id: Optional[str]):
    # 숫자면 장치 번호, 아니면 경로(/dev/video0 등)로 OpenCV 에 그대로 전달
    if device_id is None or device_id == "":
        return 0
    if device_id.isdigit():
        return int(device_id)
    return device_id


def open_camera(device_id: Optional[str] = None, width: int = 1280, height: int = 720):
    """장치를 열고 선호 해상도를 요청. 실패 시 CameraError"""
    source = _capture_source(device_id)
    try:
        cap = cv2.VideoCapture(source)
    except cv2.error as e:
        raise CameraError(f"Could not open camera {source}: {e}") from e
    if not cap.isOpened():
        cap.release()
        raise CameraError(f"Could not open camera {source}")
    # 요청일 뿐, 장치가 다른 해상도를 줄 수 있음
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    log.info("Camera %s opened (%dx%d requested)", source, width, height)
    return cap


def probe_camera(index: int) -> bool:
    """장치를 잠깐 열었다 닫아 사용 가능 여부 확인"""
    cap = cv2.VideoCapture(index)
    try:
        return cap.isOpened()
    finally:
        cap.release()


class CameraSelector:
    """카메라 목록과 현재 선택된 장치 관리"""

    def __init__(self, probe: Callable[[int], bool] = probe_camera, max_devices: int = 5):
        self.probe = probe
        self.max_devices = max_devices
        self.cameras: List[CameraDescriptor] = []
        self.selected_id: Optional[str] = None
        self.on_selection_changed: Optional[Callable[[Optional[str]], None]] = None

    def enumerate(self) -> List[CameraDescriptor]:
        found = []
        for index in range(self.max_devices):
            try:
                available = self.probe(index)
            except (cv2.error, OSError) as e:
                log.warning("Probing camera %d failed: %s", index, e)
                continue
            if available:
                found.append(CameraDescriptor(device_id=str(index), label=f"Camera {index}"))

        # 내장 카메라가 목록 끝에 오는 경우가 많아 순서를 뒤집음
        found.reverse()
        self.cameras = found
        self.selected_id = found[0].device_id if found else None
        log.info("Found %d camera(s): %s", len(found), [c.label for c in found])
        return found

    def select(self, device_id: Optional[str]):
        previous = self.selected_id
        self.selected_id = device_id or None
        log.info("Camera selection changed: %s -> %s",
                 previous or "default", self.selected_id or "default")
        if self.on_selection_changed:
            self.on_selection_changed(self.selected_id)
