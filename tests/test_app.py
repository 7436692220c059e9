import pytest

from pose_osc import app as app_module
from pose_osc.app import PoseOscWindow
from pose_osc.camera import CameraSelector
from pose_osc.capture import STATUS_CAMERA_READY, STATUS_TRACKING
from pose_osc.config import AppConfig
from pose_osc.models import TransportConfig

from fakes import FakeChannelClient, FakeEstimator


@pytest.fixture
def client():
    return FakeChannelClient(TransportConfig(remote_address="10.0.0.5", remote_port=9001))


@pytest.fixture
def window(qtbot, client, camera_factory, make_landmarks):
    selector = CameraSelector(probe=lambda index: index in (0, 1), max_devices=3)
    w = PoseOscWindow(AppConfig(), client, FakeEstimator(make_landmarks()),
                      selector=selector, camera_factory=camera_factory)
    qtbot.addWidget(w)
    w.start()
    return w


def test_launch_fills_osc_inputs_and_starts_default_camera(qtbot, window, client, camera_factory):
    assert client.requests[0] == "getConfig"
    qtbot.waitUntil(lambda: window.control_panel.osc_ip_edit.text() == "10.0.0.5")
    assert window.control_panel.osc_port_spin.value() == 9001

    # 역순 목록의 첫 장치가 기본값
    assert window.control_panel.camera_combo.itemData(0) == "1"
    assert camera_factory.opened[0].device_id == "1"
    assert window.status_bar.currentMessage() == STATUS_CAMERA_READY


def test_frames_render_and_update_stats(qtbot, window, client):
    qtbot.waitUntil(lambda: window.canvas.surface is not None)
    qtbot.waitUntil(lambda: window.control_panel.stats_panel.landmark_count_label.text() == "33")
    # 트래킹 전에는 전송 없음
    assert client.sent == []


def test_osc_update_flashes_then_restores_status(qtbot, window, client, monkeypatch):
    monkeypatch.setattr(app_module, "STATUS_FLASH_MS", 20)
    panel = window.control_panel
    panel.osc_ip_edit.setText("192.168.0.9")
    panel.osc_port_spin.setValue(9100)

    panel.update_osc_btn.click()

    assert client.requests[-1] == ("updateConfig", "192.168.0.9", 9100)
    assert window.status_bar.currentMessage() == "OSC config updated: 192.168.0.9:9100"
    qtbot.waitUntil(lambda: window.status_bar.currentMessage() == STATUS_CAMERA_READY)


def test_tracking_sends_and_disarm_clears_canvas(qtbot, window, client):
    button = window.control_panel.tracking_btn

    button.click()

    assert window.loop.tracking
    assert button.text() == "Stop Tracking"
    assert window.status_bar.currentMessage() == STATUS_TRACKING
    qtbot.waitUntil(lambda: len(client.sent) >= 67)
    assert client.sent[66][0] == "/pose/all"

    button.click()

    assert not window.loop.tracking
    assert button.text() == "Start Tracking"
    assert window.canvas.surface is None
    assert window.status_bar.currentMessage() == STATUS_CAMERA_READY


def test_choosing_camera_switches_device(window, camera_factory, monkeypatch):
    switched = []
    original = window.loop.switch_device
    monkeypatch.setattr(window.loop, "switch_device",
                        lambda device_id: switched.append(device_id) or original(device_id))
    combo = window.control_panel.camera_combo

    combo.activated.emit(combo.findData("0"))

    assert switched == ["0"]
    assert camera_factory.opened[0].released
    assert camera_factory.opened[-1].device_id == "0"
    assert window.loop.camera_active


def test_close_stops_loop(window, camera_factory):
    estimator = window.loop.estimator

    window.close()

    assert not window.frame_timer.isActive()
    assert not window.channel_timer.isActive()
    assert not window.loop.running
    assert not window.loop.camera_active
    assert camera_factory.opened[-1].released
    assert estimator.closed
