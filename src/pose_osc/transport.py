"""
TransportBridge - owns the single UDP endpoint used to send OSC packets.
"""

import socket
from typing import Iterable, Optional

from pythonosc.osc_message_builder import BuildError, OscMessageBuilder

from .log import get_logger
from .models import OscArg, TransportConfig

log = get_logger(__name__)

_SUPPORTED_TYPES = (
    OscMessageBuilder.ARG_TYPE_FLOAT,
    OscMessageBuilder.ARG_TYPE_INT,
    OscMessageBuilder.ARG_TYPE_STRING,
)


def build_message(address: str, args: Iterable[OscArg], metadata: bool = True) -> bytes:
    """OSC 메시지 하나를 직렬화 (metadata=False 이면 타입을 값에서 추론)"""
    builder = OscMessageBuilder(address=address)
    for arg in args:
        if metadata:
            if arg.type not in _SUPPORTED_TYPES:
                raise ValueError(f"unsupported OSC type tag: {arg.type!r}")
            builder.add_arg(arg.value, arg.type)
        else:
            builder.add_arg(arg.value)
    return builder.build().dgram


class TransportBridge:
    """UDP 소켓 하나를 열고 원격 주소로 OSC 패킷을 전송"""

    def __init__(self, config: Optional[TransportConfig] = None):
        self.config = config or TransportConfig()
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def open(self):
        if self._sock is not None:
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.config.local_address, self.config.local_port))
        except OSError as e:
            # 수신은 쓰지 않으므로 바인드 실패해도 송신은 계속
            log.error("OSC bind to %s:%s failed: %s",
                      self.config.local_address, self.config.local_port, e)
        self._sock = sock
        log.info("OSC ready. Sending to %s:%s",
                 self.config.remote_address, self.config.remote_port)

    def close(self):
        if self._sock is None:
            return
        try:
            self._sock.close()
        finally:
            self._sock = None

    def send(self, address: str, args: Iterable[OscArg]) -> bool:
        """패킷 하나 전송. 실패는 로그만 남기고 False 반환"""
        if self._sock is None:
            log.warning("OSC send to %s dropped: socket is closed", address)
            return False
        try:
            dgram = build_message(address, args, self.config.metadata)
        except (BuildError, ValueError) as e:
            log.error("OSC message %s could not be built: %s", address, e)
            return False
        try:
            self._sock.sendto(dgram, (self.config.remote_address, self.config.remote_port))
        except OSError as e:
            log.error("OSC send to %s:%s failed: %s",
                      self.config.remote_address, self.config.remote_port, e)
            return False
        return True

    def reconfigure(self, remote_address: Optional[str] = None,
                    remote_port: Optional[int] = None) -> TransportConfig:
        """소켓을 닫고 병합된 설정으로 다시 연다"""
        self.config = self.config.merged(remote_address, remote_port)
        self.close()
        self.open()
        return self.config

    def current_config(self) -> TransportConfig:
        return self.config
