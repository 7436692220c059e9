"""
Data models for pose capture and OSC transport.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class LandmarkPoint:
    """단일 랜드마크 (정규화 좌표 + visibility)"""
    x: float
    y: float
    z: float
    visibility: Optional[float] = None

    @property
    def has_visibility(self) -> bool:
        return self.visibility is not None


@dataclass
class OscArg:
    """타입 태그가 붙은 OSC 인자 ('f', 'i', 's')"""
    type: str
    value: Any


@dataclass
class OscPacket:
    """주소 + 인자 목록으로 된 OSC 메시지 하나"""
    address: str
    args: List[OscArg] = field(default_factory=list)


@dataclass(frozen=True)
class TransportConfig:
    """UDP 송신 설정"""
    local_address: str = "0.0.0.0"
    local_port: int = 57121
    remote_address: str = "127.0.0.1"
    remote_port: int = 8000
    metadata: bool = True

    def merged(self, remote_address: Optional[str] = None,
               remote_port: Optional[int] = None) -> "TransportConfig":
        """빈 값은 이전 값을 유지한 채 새 설정 반환"""
        return replace(
            self,
            remote_address=remote_address or self.remote_address,
            remote_port=int(remote_port) if remote_port else self.remote_port,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "localAddress": self.local_address,
            "localPort": self.local_port,
            "remoteAddress": self.remote_address,
            "remotePort": self.remote_port,
            "metadata": self.metadata,
        }


class TrackingState(Enum):
    IDLE = "idle"
    CAMERA_READY = "cameraReady"
    TRACKING = "tracking"

    @classmethod
    def derive(cls, camera_active: bool, tracking_armed: bool) -> "TrackingState":
        if not camera_active:
            return cls.IDLE
        if tracking_armed:
            return cls.TRACKING
        return cls.CAMERA_READY


@dataclass(frozen=True)
class CameraDescriptor:
    """카메라 장치 정보"""
    device_id: str
    label: str
