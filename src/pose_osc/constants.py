"""
Landmark tables and drawing constants for the MediaPipe Pose model.
"""

from typing import List, Tuple


# MediaPipe Pose 랜드마크 이름 (33개, 순서는 모델 출력 순서와 동일)
POSE_LANDMARKS = [
    'nose', 'left_eye_inner', 'left_eye', 'left_eye_outer',
    'right_eye_inner', 'right_eye', 'right_eye_outer',
    'left_ear', 'right_ear', 'mouth_left', 'mouth_right',
    'left_shoulder', 'right_shoulder', 'left_elbow', 'right_elbow',
    'left_wrist', 'right_wrist', 'left_pinky', 'right_pinky',
    'left_index', 'right_index', 'left_thumb', 'right_thumb',
    'left_hip', 'right_hip', 'left_knee', 'right_knee',
    'left_ankle', 'right_ankle', 'left_heel', 'right_heel',
    'left_foot_index', 'right_foot_index',
]

NUM_LANDMARKS = len(POSE_LANDMARKS)

# mp.solutions.pose.POSE_CONNECTIONS 와 동일한 연결
POSE_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 7), (0, 4), (4, 5), (5, 6), (6, 8),
    (9, 10),
    (11, 12), (11, 13), (13, 15), (15, 17), (15, 19), (15, 21), (17, 19),
    (12, 14), (14, 16), (16, 18), (16, 20), (16, 22), (18, 20),
    (11, 23), (12, 24), (23, 24),
    (23, 25), (24, 26), (25, 27), (26, 28),
    (27, 29), (28, 30), (29, 31), (30, 32), (27, 31), (28, 32),
]

# 신체 부위별 색상
BODY_PART_COLORS = {
    'right': "#FF6B6B",
    'left': "#4ECDC4",
    'center': "#00FF88",
    'face': "#DDA0DD",
    'hand': "#95E1D3",
    'foot': "#FF8E53",
}

LANDMARK_OUTLINE_COLOR = "#FF0000"
LANDMARK_FILL_COLOR = "#00FF88"


def get_body_part(name: str) -> str:
    """랜드마크 이름으로 신체 부위 분류"""
    if any(x in name for x in ['eye', 'ear', 'nose', 'mouth']):
        return 'face'
    if any(x in name for x in ['pinky', 'index', 'thumb']) and 'foot' not in name:
        return 'hand'
    if any(x in name for x in ['heel', 'foot', 'ankle']):
        return 'foot'
    if name.startswith('right'):
        return 'right'
    if name.startswith('left'):
        return 'left'
    return 'center'


def get_skeleton_connections() -> List[Tuple[int, int, str]]:
    """
    연결 정보에 신체 부위를 붙여 반환
    Returns: [(start_id, end_id, body_part), ...]
    """
    connections = []
    for start, end in POSE_CONNECTIONS:
        part_a = get_body_part(POSE_LANDMARKS[start])
        part_b = get_body_part(POSE_LANDMARKS[end])
        if part_a == part_b:
            part = part_a
        elif {part_a, part_b} == {'left', 'right'}:
            # 어깨-어깨, 골반-골반
            part = 'center'
        else:
            part = part_b if part_a in ('left', 'right') else part_a
        connections.append((start, end, part))
    return connections
