import cv2
import pytest

from pose_osc.camera import CameraError, CameraSelector, open_camera


def test_enumerate_reverses_platform_order_and_selects_first():
    selector = CameraSelector(probe=lambda index: index in (0, 2), max_devices=4)

    cameras = selector.enumerate()

    assert [c.device_id for c in cameras] == ["2", "0"]
    assert [c.label for c in cameras] == ["Camera 2", "Camera 0"]
    assert selector.selected_id == "2"


def test_enumerate_with_no_devices():
    selector = CameraSelector(probe=lambda index: False)

    assert selector.enumerate() == []
    assert selector.cameras == []
    assert selector.selected_id is None


def test_enumerate_skips_devices_that_error():
    def probe(index):
        if index == 1:
            raise cv2.error("backend failure")
        return index < 3

    selector = CameraSelector(probe=probe, max_devices=5)

    assert [c.device_id for c in selector.enumerate()] == ["2", "0"]


def test_select_notifies_listener():
    selector = CameraSelector(probe=lambda index: True, max_devices=2)
    selector.enumerate()
    changes = []
    selector.on_selection_changed = changes.append

    selector.select("0")
    selector.select("")

    assert changes == ["0", None]
    assert selector.selected_id is None


def test_open_camera_raises_for_missing_device(monkeypatch):
    class ClosedCapture:
        released = False

        def __init__(self, index):
            self.index = index

        def isOpened(self):
            return False

        def release(self):
            ClosedCapture.released = True

    monkeypatch.setattr(cv2, "VideoCapture", ClosedCapture)

    with pytest.raises(CameraError):
        open_camera("7")
    assert ClosedCapture.released


def test_open_camera_requests_resolution(monkeypatch):
    props = {}

    class OpenCapture:
        def __init__(self, index):
            self.index = index

        def isOpened(self):
            return True

        def set(self, prop, value):
            props[prop] = value
            return True

    monkeypatch.setattr(cv2, "VideoCapture", OpenCapture)

    cap = open_camera(None, width=1280, height=720)

    assert cap.index == 0
    assert props[cv2.CAP_PROP_FRAME_WIDTH] == 1280
    assert props[cv2.CAP_PROP_FRAME_HEIGHT] == 720


def test_open_camera_accepts_device_path(monkeypatch):
    sources = []

    class OpenCapture:
        def __init__(self, source):
            sources.append(source)

        def isOpened(self):
            return True

        def set(self, prop, value):
            return True

    monkeypatch.setattr(cv2, "VideoCapture", OpenCapture)

    open_camera("/dev/video2")
    open_camera("3")
    open_camera("")

    assert sources == ["/dev/video2", 3, 0]
