from pose_osc.models import TrackingState, TransportConfig


def test_merged_keeps_omitted_port():
    config = TransportConfig(remote_address="127.0.0.1", remote_port=9000)

    merged = config.merged(remote_address="10.0.0.5")

    assert merged.remote_address == "10.0.0.5"
    assert merged.remote_port == 9000
    assert config.remote_address == "127.0.0.1"


def test_merged_ignores_empty_values():
    config = TransportConfig()

    merged = config.merged(remote_address="", remote_port=None)

    assert merged == config


def test_to_dict_uses_channel_keys():
    data = TransportConfig().to_dict()

    assert data == {
        "localAddress": "0.0.0.0",
        "localPort": 57121,
        "remoteAddress": "127.0.0.1",
        "remotePort": 8000,
        "metadata": True,
    }


def test_tracking_state_derive():
    assert TrackingState.derive(False, False) is TrackingState.IDLE
    assert TrackingState.derive(False, True) is TrackingState.IDLE
    assert TrackingState.derive(True, False) is TrackingState.CAMERA_READY
    assert TrackingState.derive(True, True) is TrackingState.TRACKING
