from types import SimpleNamespace

from pose_osc.pose import landmarks_from_results


class ProtoLandmark:
    """protobuf NormalizedLandmark 처럼 HasField 를 지원하는 대역"""

    def __init__(self, x, y, z, visibility=None):
        self.x, self.y, self.z = x, y, z
        self._visibility = visibility

    @property
    def visibility(self):
        return 0.0 if self._visibility is None else self._visibility

    def HasField(self, name):
        return name == "visibility" and self._visibility is not None


def results_with(points):
    return SimpleNamespace(pose_landmarks=SimpleNamespace(landmark=points))


def test_no_pose_returns_none():
    assert landmarks_from_results(SimpleNamespace(pose_landmarks=None)) is None
    assert landmarks_from_results(None) is None


def test_converts_landmarks():
    results = results_with([ProtoLandmark(0.1, 0.2, -0.3, 0.9), ProtoLandmark(0.4, 0.5, 0.6)])

    landmarks = landmarks_from_results(results)

    assert len(landmarks) == 2
    assert (landmarks[0].x, landmarks[0].y, landmarks[0].z) == (0.1, 0.2, -0.3)
    assert landmarks[0].visibility == 0.9
    # 값이 비어 있는 visibility 는 0.0 이 아니라 None
    assert landmarks[1].visibility is None


def test_plain_objects_without_hasfield():
    results = results_with([SimpleNamespace(x=1, y=2, z=3, visibility=0.5)])

    assert landmarks_from_results(results)[0].visibility == 0.5


def test_malformed_result_is_no_pose():
    results = results_with([SimpleNamespace(x="nan?", y=2, z=3)])

    assert landmarks_from_results(results) is None


def test_empty_landmark_list_is_no_pose():
    assert landmarks_from_results(results_with([])) is None
