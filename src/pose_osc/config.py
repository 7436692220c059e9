"""
Application configuration: frozen defaults plus command-line overrides.
"""

import argparse
from dataclasses import dataclass, field
from typing import List, Optional

from .models import TransportConfig


@dataclass(frozen=True)
class OscConfig:
    local_address: str = "0.0.0.0"
    local_port: int = 57121
    remote_address: str = "127.0.0.1"
    remote_port: int = 8000
    # True: 인자마다 명시적 타입 태그 사용
    metadata: bool = True

    def transport(self) -> TransportConfig:
        return TransportConfig(
            local_address=self.local_address,
            local_port=self.local_port,
            remote_address=self.remote_address,
            remote_port=self.remote_port,
            metadata=self.metadata,
        )


@dataclass(frozen=True)
class CaptureConfig:
    # None 이면 카메라 목록의 첫 번째 장치
    device_id: Optional[str] = None
    width: int = 1280
    height: int = 720
    # 화면 갱신 주기 (~60Hz)
    frame_interval_ms: int = 16
    max_devices: int = 5


@dataclass(frozen=True)
class PoseModelConfig:
    model_complexity: int = 1
    smooth_landmarks: bool = True
    enable_segmentation: bool = False
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass(frozen=True)
class AppConfig:
    osc: OscConfig = field(default_factory=OscConfig)
    capture: CaptureConfig = field(default_factory=CaptureConfig)
    pose: PoseModelConfig = field(default_factory=PoseModelConfig)
    log_level: str = "INFO"


def build_parser() -> argparse.ArgumentParser:
    defaults = AppConfig()
    parser = argparse.ArgumentParser(
        prog="pose-osc",
        description="Track body pose from a webcam and send landmarks over OSC.",
    )
    parser.add_argument("--osc-host", default=defaults.osc.remote_address,
                        help="Remote OSC host (default: %(default)s)")
    parser.add_argument("--osc-port", type=int, default=defaults.osc.remote_port,
                        help="Remote OSC port (default: %(default)s)")
    parser.add_argument("--local-port", type=int, default=defaults.osc.local_port,
                        help="Local UDP port to bind (default: %(default)s)")
    parser.add_argument("--no-metadata", action="store_true",
                        help="Infer OSC type tags from values instead of sending them explicitly")
    parser.add_argument("--camera", default=None,
                        help="Camera device index to start with (default: first detected)")
    parser.add_argument("--width", type=int, default=defaults.capture.width)
    parser.add_argument("--height", type=int, default=defaults.capture.height)
    parser.add_argument("--model-complexity", type=int, choices=(0, 1, 2),
                        default=defaults.pose.model_complexity)
    parser.add_argument("--log-level", default=defaults.log_level,
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser


def parse_args(argv: Optional[List[str]] = None) -> AppConfig:
    args = build_parser().parse_args(argv)
    defaults = AppConfig()
    return AppConfig(
        osc=OscConfig(
            local_address=defaults.osc.local_address,
            local_port=args.local_port,
            remote_address=args.osc_host,
            remote_port=args.osc_port,
            metadata=not args.no_metadata,
        ),
        capture=CaptureConfig(
            device_id=args.camera,
            width=args.width,
            height=args.height,
            frame_interval_ms=defaults.capture.frame_interval_ms,
            max_devices=defaults.capture.max_devices,
        ),
        pose=PoseModelConfig(model_complexity=args.model_complexity),
        log_level=args.log_level,
    )
