import os

# Qt 위젯 테스트는 디스플레이 없이 실행
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from pose_osc.models import LandmarkPoint

from fakes import FakeCamera, FakeEstimator


@pytest.fixture
def make_landmarks():
    def _make(count=33, visibility=0.9):
        return [
            LandmarkPoint(x=i / 100.0, y=i / 50.0, z=-i / 200.0, visibility=visibility)
            for i in range(count)
        ]
    return _make


@pytest.fixture
def camera_factory():
    """열린 카메라를 기록하는 팩토리"""
    class Factory:
        def __init__(self):
            self.opened = []

        def __call__(self, device_id, width, height):
            cam = FakeCamera(device_id)
            self.opened.append(cam)
            return cam

    return Factory()


@pytest.fixture
def fake_estimator():
    return FakeEstimator()
