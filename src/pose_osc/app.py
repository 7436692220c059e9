"""
Pose OSC - Main Application Window
"""

import sys
from typing import Callable, List, Optional

import numpy as np

from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QHBoxLayout, QStatusBar, QSplitter
)
from PySide6.QtCore import Qt, QTimer

from .camera import CameraSelector, open_camera
from .canvas import VideoCanvas
from .capture import CaptureLoop
from .channel import ChannelClient, spawn_bridge
from .config import AppConfig, parse_args
from .controls import ControlPanel
from .log import get_logger
from .models import LandmarkPoint, OscPacket, TransportConfig
from .pose import PoseEstimator

log = get_logger(__name__)

# 브리지 응답 확인 주기
CHANNEL_POLL_MS = 50
# OSC 설정 변경 메시지 표시 시간
STATUS_FLASH_MS = 2000


class PoseOscWindow(QMainWindow):
    """메인 윈도우"""

    def __init__(self, config: AppConfig, client: ChannelClient, estimator,
                 selector: Optional[CameraSelector] = None,
                 camera_factory: Callable = open_camera):
        super().__init__()
        self.config = config
        self.client = client
        self.selector = selector or CameraSelector(max_devices=config.capture.max_devices)

        self.loop = CaptureLoop(
            estimator,
            sink=self._send_packet,
            camera_factory=camera_factory,
            width=config.capture.width,
            height=config.capture.height,
        )

        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self._on_frame_tick)
        self.channel_timer = QTimer(self)
        self.channel_timer.timeout.connect(self.client.poll)

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        self.setWindowTitle("Pose OSC")
        self.setMinimumSize(1280, 900)
        self.setStyleSheet("""
            QMainWindow {
                background-color: #1a1a2e;
            }
            QStatusBar {
                background-color: #16213e;
                color: #e0e0e0;
            }
        """)

        central = QWidget()
        self.setCentralWidget(central)

        content_layout = QHBoxLayout(central)
        content_layout.setContentsMargins(10, 10, 10, 10)
        content_layout.setSpacing(10)

        self.canvas = VideoCanvas()

        self.control_panel = ControlPanel()
        self.control_panel.setFixedWidth(300)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.control_panel)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 0)
        content_layout.addWidget(splitter)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Initializing application...")

    def _connect_signals(self):
        self.control_panel.camera_changed.connect(self.selector.select)
        self.control_panel.tracking_toggled.connect(self._toggle_tracking)
        self.control_panel.show_skeleton_changed.connect(self.canvas.set_show_skeleton)
        self.control_panel.show_landmarks_changed.connect(self.canvas.set_show_landmarks)
        self.control_panel.osc_update_requested.connect(self._update_osc_config)

        self.selector.on_selection_changed = self._on_camera_change
        self.loop.on_frame = self._on_frame
        self.client.on_config = self.control_panel.set_osc_config
        self.client.on_config_updated = self._on_osc_config_updated

    def start(self):
        """초기 설정 요청, 카메라 목록 조회 후 기본 카메라 자동 시작"""
        self.channel_timer.start(CHANNEL_POLL_MS)
        self.client.get_config()

        cameras = self.selector.enumerate()
        if self.config.capture.device_id is not None:
            self.selector.selected_id = self.config.capture.device_id
        self.control_panel.set_cameras(cameras, self.selector.selected_id)
        if not cameras:
            self.canvas.set_placeholder_text("No camera found")

        self._start_camera(self.selector.selected_id)
        self.frame_timer.start(self.config.capture.frame_interval_ms)

    def _send_packet(self, packet: OscPacket):
        self.client.send_data(packet.address, packet.args)

    def _start_camera(self, device_id: Optional[str]):
        self.status_bar.showMessage("Initializing camera...")
        QApplication.processEvents()
        if not self.loop.start(device_id):
            self.canvas.clear()
        self._refresh_status()

    def _on_camera_change(self, device_id: Optional[str]):
        self.status_bar.showMessage("Initializing camera...")
        QApplication.processEvents()
        if not self.loop.switch_device(device_id):
            self.canvas.clear()
        self._refresh_status()

    def _toggle_tracking(self):
        if not self.loop.camera_active:
            self.status_bar.showMessage("Initializing camera...")
            QApplication.processEvents()
        tracking = self.loop.toggle_tracking()
        self.control_panel.set_tracking(tracking)
        if not tracking:
            self.canvas.clear()
        self._refresh_status()

    def _refresh_status(self):
        self.status_bar.showMessage(self.loop.status_text())

    def _on_frame_tick(self):
        self.loop.step()

    def _on_frame(self, rgb: np.ndarray, landmarks: Optional[List[LandmarkPoint]]):
        self.canvas.set_frame(rgb, landmarks)
        self.control_panel.stats_panel.update_stats(self.loop.telemetry)

    def _update_osc_config(self, address: str, port: int):
        self.client.update_config(address or None, port)
        shown = address or self.control_panel.osc_ip_edit.placeholderText()
        self.status_bar.showMessage(f"OSC config updated: {shown}:{port}")
        QTimer.singleShot(STATUS_FLASH_MS, self._refresh_status)

    def _on_osc_config_updated(self, config: TransportConfig):
        log.info("OSC config updated: %s:%s", config.remote_address, config.remote_port)
        self.control_panel.set_osc_config(config)

    def closeEvent(self, event):
        self.frame_timer.stop()
        self.channel_timer.stop()
        self.loop.close()
        super().closeEvent(event)


def main(argv: Optional[List[str]] = None):
    config = parse_args(argv)
    get_logger(level=config.log_level)
    log.info("Initializing application...")

    process, client = spawn_bridge(config.osc.transport(), config.log_level)

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    try:
        estimator = PoseEstimator(config.pose)
    except RuntimeError as e:
        log.error("%s", e)
        client.shutdown(process)
        sys.exit(1)

    window = PoseOscWindow(config, client, estimator)
    window.show()
    window.start()
    try:
        code = app.exec()
    finally:
        client.shutdown(process)
    sys.exit(code)


def run_app():
    """Entry point for the application."""
    main()


if __name__ == "__main__":
    main()
