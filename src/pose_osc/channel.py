"""
Message channel between the GUI process and the bridge host process.

The GUI never touches the UDP socket. It sends typed messages over a
multiprocessing Pipe to a host process that owns the TransportBridge:

    SendData      GUI -> host   (no reply)
    GetConfig     GUI -> host   -> Config
    UpdateConfig  GUI -> host   -> ConfigUpdated
    Shutdown      GUI -> host   (host closes the socket and exits)
"""

import multiprocessing
import time
from dataclasses import dataclass, field
from multiprocessing.connection import Connection
from typing import Callable, List, Optional, Tuple, Union

from .log import get_logger
from .models import OscArg, TransportConfig
from .transport import TransportBridge

log = get_logger(__name__)

DEFAULT_TIMEOUT = 2.0


@dataclass
class SendData:
    address: str
    args: List[OscArg] = field(default_factory=list)


@dataclass
class GetConfig:
    pass


@dataclass
class UpdateConfig:
    remote_address: Optional[str] = None
    remote_port: Optional[int] = None


@dataclass
class Shutdown:
    pass


@dataclass
class Config:
    config: TransportConfig


@dataclass
class ConfigUpdated:
    config: TransportConfig


Request = Union[SendData, GetConfig, UpdateConfig, Shutdown]
Reply = Union[Config, ConfigUpdated]


class ChannelTimeout(Exception):
    """요청에 대한 응답이 제한 시간 안에 오지 않음"""


class BridgeHost:
    """TransportBridge 를 소유하고 파이프로 들어온 메시지를 순서대로 처리"""

    def __init__(self, bridge: TransportBridge, conn: Connection):
        self.bridge = bridge
        self.conn = conn

    def handle(self, message: Request) -> Optional[Reply]:
        if isinstance(message, SendData):
            self.bridge.send(message.address, message.args)
            return None
        if isinstance(message, GetConfig):
            return Config(self.bridge.current_config())
        if isinstance(message, UpdateConfig):
            config = self.bridge.reconfigure(message.remote_address, message.remote_port)
            return ConfigUpdated(config)
        log.warning("Unknown channel message ignored: %r", message)
        return None

    def serve_forever(self):
        self.bridge.open()
        try:
            while True:
                try:
                    message = self.conn.recv()
                except EOFError:
                    log.info("Channel closed by GUI process")
                    break
                if isinstance(message, Shutdown):
                    break
                reply = self.handle(message)
                if reply is not None:
                    self.conn.send(reply)
        finally:
            self.bridge.close()
            self.conn.close()


def run_bridge_host(conn: Connection, config: TransportConfig, log_level: str = "INFO"):
    """브리지 프로세스 진입점"""
    get_logger(level=log_level)
    BridgeHost(TransportBridge(config), conn).serve_forever()


class ChannelClient:
    """GUI 쪽 채널. 송신은 비동기, 응답은 poll() 로 콜백에 전달"""

    def __init__(self, conn: Connection, clock: Callable[[], float] = time.monotonic):
        self.conn = conn
        self.clock = clock
        self.on_config: Optional[Callable[[TransportConfig], None]] = None
        self.on_config_updated: Optional[Callable[[TransportConfig], None]] = None
        self._closed = False

    def _post(self, message: Request) -> bool:
        if self._closed:
            return False
        try:
            self.conn.send(message)
        except (BrokenPipeError, EOFError, OSError) as e:
            log.error("Bridge unreachable, dropping %s: %s", type(message).__name__, e)
            self._closed = True
            return False
        return True

    def send_data(self, address: str, args: List[OscArg]) -> bool:
        return self._post(SendData(address, list(args)))

    def get_config(self) -> bool:
        return self._post(GetConfig())

    def update_config(self, remote_address: Optional[str] = None,
                      remote_port: Optional[int] = None) -> bool:
        return self._post(UpdateConfig(remote_address, remote_port))

    def _dispatch(self, reply: Reply):
        if isinstance(reply, ConfigUpdated):
            if self.on_config_updated:
                self.on_config_updated(reply.config)
        elif isinstance(reply, Config):
            if self.on_config:
                self.on_config(reply.config)
        else:
            log.warning("Unknown channel reply ignored: %r", reply)

    def poll(self) -> int:
        """도착한 응답을 모두 꺼내 콜백 호출. 처리한 개수 반환"""
        handled = 0
        if self._closed:
            return handled
        try:
            while self.conn.poll():
                self._dispatch(self.conn.recv())
                handled += 1
        except (EOFError, OSError) as e:
            log.error("Bridge channel closed: %s", e)
            self._closed = True
        return handled

    def _wait_for(self, reply_type: type, timeout: float) -> TransportConfig:
        deadline = self.clock() + timeout
        try:
            while True:
                remaining = deadline - self.clock()
                if remaining <= 0 or not self.conn.poll(remaining):
                    break
                reply = self.conn.recv()
                if isinstance(reply, reply_type):
                    return reply.config
                # 다른 응답은 평소처럼 콜백으로
                self._dispatch(reply)
        except (EOFError, OSError) as e:
            raise ChannelTimeout(f"bridge channel closed: {e}") from e
        raise ChannelTimeout(f"no {reply_type.__name__} reply within {timeout}s")

    def request_config(self, timeout: float = DEFAULT_TIMEOUT) -> TransportConfig:
        if not self.get_config():
            raise ChannelTimeout("bridge unreachable")
        return self._wait_for(Config, timeout)

    def request_update(self, remote_address: Optional[str] = None,
                       remote_port: Optional[int] = None,
                       timeout: float = DEFAULT_TIMEOUT) -> TransportConfig:
        if not self.update_config(remote_address, remote_port):
            raise ChannelTimeout("bridge unreachable")
        return self._wait_for(ConfigUpdated, timeout)

    def shutdown(self, process: Optional[multiprocessing.Process] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self._post(Shutdown())
        self._closed = True
        self.conn.close()
        if process is not None:
            process.join(timeout)
            if process.is_alive():
                log.warning("Bridge process did not exit, terminating")
                process.terminate()


def spawn_bridge(config: TransportConfig,
                 log_level: str = "INFO") -> Tuple[multiprocessing.Process, ChannelClient]:
    """브리지 호스트 프로세스를 띄우고 GUI 쪽 클라이언트 반환"""
    parent_conn, child_conn = multiprocessing.Pipe()
    process = multiprocessing.Process(
        target=run_bridge_host,
        args=(child_conn, config, log_level),
        name="pose-osc-bridge",
        daemon=True,
    )
    process.start()
    child_conn.close()
    return process, ChannelClient(parent_conn)
