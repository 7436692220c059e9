"""
Landmark encoder - maps one landmark set to its OSC packets.

Per frame:
- /pose/<joint>/position   x, y, z
- /pose/<joint>/visibility visibility (only when the model reported it)
- /pose/all                x, y, z of every joint, in index order
"""

from typing import List

from .constants import POSE_LANDMARKS
from .models import LandmarkPoint, OscArg, OscPacket

ADDRESS_PREFIX = "/pose"
ALL_POSITIONS_ADDRESS = f"{ADDRESS_PREFIX}/all"


def joint_name(index: int) -> str:
    if 0 <= index < len(POSE_LANDMARKS):
        return POSE_LANDMARKS[index]
    return f"landmark_{index}"


def _floats(*values: float) -> List[OscArg]:
    return [OscArg(type='f', value=float(v)) for v in values]


def encode_landmarks(landmarks: List[LandmarkPoint]) -> List[OscPacket]:
    """랜드마크 세트 하나를 OSC 패킷 목록으로 변환"""
    packets = []
    all_positions = []

    for index, lm in enumerate(landmarks):
        name = joint_name(index)
        packets.append(OscPacket(
            address=f"{ADDRESS_PREFIX}/{name}/position",
            args=_floats(lm.x, lm.y, lm.z),
        ))
        if lm.has_visibility:
            packets.append(OscPacket(
                address=f"{ADDRESS_PREFIX}/{name}/visibility",
                args=_floats(lm.visibility),
            ))
        all_positions.extend((lm.x, lm.y, lm.z))

    packets.append(OscPacket(address=ALL_POSITIONS_ADDRESS, args=_floats(*all_positions)))
    return packets
