import pytest

from pose_osc.config import AppConfig, parse_args
from pose_osc.models import TransportConfig


def test_defaults_match_transport_defaults():
    config = parse_args([])

    assert config == AppConfig()
    assert config.osc.transport() == TransportConfig()
    assert config.capture.device_id is None
    assert (config.capture.width, config.capture.height) == (1280, 720)


def test_cli_overrides():
    config = parse_args([
        "--osc-host", "192.168.1.20", "--osc-port", "9000", "--local-port", "0",
        "--no-metadata", "--camera", "1", "--model-complexity", "2", "--log-level", "DEBUG",
    ])

    transport = config.osc.transport()
    assert transport.remote_address == "192.168.1.20"
    assert transport.remote_port == 9000
    assert transport.local_port == 0
    assert transport.metadata is False
    assert config.capture.device_id == "1"
    assert config.pose.model_complexity == 2
    assert config.log_level == "DEBUG"


def test_invalid_model_complexity_is_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--model-complexity", "5"])
