import logging
import socket

import pytest
from pythonosc.osc_message import OscMessage

from pose_osc.models import OscArg, TransportConfig
from pose_osc.transport import TransportBridge, build_message


@pytest.fixture
def receiver():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def bridge(receiver):
    port = receiver.getsockname()[1]
    b = TransportBridge(TransportConfig(local_address="127.0.0.1", local_port=0,
                                        remote_address="127.0.0.1", remote_port=port))
    b.open()
    yield b
    b.close()


def test_send_delivers_one_datagram(bridge, receiver):
    args = [OscArg('f', 0.5), OscArg('f', 0.25), OscArg('f', -1.0)]

    assert bridge.send("/pose/nose/position", args)

    message = OscMessage(receiver.recv(65535))
    assert message.address == "/pose/nose/position"
    assert message.params == [0.5, 0.25, -1.0]


def test_send_mixed_types(bridge, receiver):
    bridge.send("/pose/meta", [OscArg('i', 3), OscArg('s', "hello"), OscArg('f', 1.5)])

    message = OscMessage(receiver.recv(65535))
    assert message.params == [3, "hello", 1.5]


def test_build_message_without_metadata_infers_types():
    dgram = build_message("/x", [OscArg('f', 7)], metadata=False)

    # 타입 태그 없이 보내면 int 값은 int 로 나감
    assert OscMessage(dgram).params == [7]


def test_build_message_rejects_unknown_type():
    with pytest.raises(ValueError):
        build_message("/x", [OscArg('q', 1)])


def test_send_when_closed_is_dropped():
    bridge = TransportBridge(TransportConfig(local_port=0))

    assert bridge.send("/pose/all", [OscArg('f', 1.0)]) is False


def test_reconfigure_preserves_omitted_port(bridge, receiver):
    port = receiver.getsockname()[1]

    config = bridge.reconfigure(remote_address="127.0.0.1")

    assert config.remote_port == port
    assert bridge.current_config() == config
    assert bridge.is_open

    bridge.send("/pose/all", [OscArg('f', 1.0)])
    assert OscMessage(receiver.recv(65535)).address == "/pose/all"


def test_reconfigure_changes_destination(bridge, receiver):
    other = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    other.bind(("127.0.0.1", 0))
    other.settimeout(2.0)
    try:
        config = bridge.reconfigure(remote_port=other.getsockname()[1])
        assert config.remote_address == "127.0.0.1"

        bridge.send("/pose/nose/visibility", [OscArg('f', 0.75)])
        assert OscMessage(other.recv(65535)).params == [0.75]
    finally:
        other.close()


def test_bind_failure_is_logged_and_send_still_works(receiver, caplog):
    busy = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    busy.bind(("127.0.0.1", 0))
    busy_port = busy.getsockname()[1]
    bridge = TransportBridge(TransportConfig(local_address="127.0.0.1", local_port=busy_port,
                                             remote_address="127.0.0.1",
                                             remote_port=receiver.getsockname()[1]))
    try:
        with caplog.at_level(logging.ERROR, logger="pose_osc"):
            bridge.open()
        assert "bind" in caplog.text
        assert bridge.is_open

        assert bridge.send("/pose/all", [OscArg('f', 2.0)])
        assert OscMessage(receiver.recv(65535)).params == [2.0]
    finally:
        bridge.close()
        busy.close()


def test_close_is_idempotent(bridge):
    bridge.close()
    bridge.close()

    assert not bridge.is_open
