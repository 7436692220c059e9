"""
Control widgets - ControlPanel and StatsPanel.
"""

from typing import List, Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QSpinBox, QLineEdit,
    QGroupBox, QComboBox, QCheckBox, QScrollArea
)
from PySide6.QtCore import Qt, Signal

from .models import CameraDescriptor, TransportConfig
from .telemetry import Telemetry


class StatsPanel(QGroupBox):
    """FPS / OSC 메시지 수 / 랜드마크 수 / 평균 confidence"""

    def __init__(self, parent=None):
        super().__init__("Stats", parent)
        layout = QGridLayout(self)
        layout.setHorizontalSpacing(12)

        self.fps_label = self._add_row(layout, 0, "FPS:")
        self.osc_count_label = self._add_row(layout, 1, "OSC messages:")
        self.landmark_count_label = self._add_row(layout, 2, "Landmarks:")
        self.confidence_label = self._add_row(layout, 3, "Confidence:")
        self.confidence_label.setText("0%")

    def _add_row(self, layout: QGridLayout, row: int, title: str) -> QLabel:
        title_label = QLabel(title)
        title_label.setStyleSheet("color: #a0a0a0;")
        value_label = QLabel("0")
        value_label.setStyleSheet("color: #4ECDC4; font-weight: bold;")
        value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(title_label, row, 0)
        layout.addWidget(value_label, row, 1)
        return value_label

    def update_stats(self, telemetry: Telemetry):
        self.fps_label.setText(str(telemetry.fps))
        self.osc_count_label.setText(str(telemetry.osc_message_count))
        self.landmark_count_label.setText(str(telemetry.landmark_count))
        self.confidence_label.setText(f"{telemetry.confidence_percent}%")


class ControlPanel(QWidget):
    """컨트롤 패널 위젯"""

    camera_changed = Signal(str)
    tracking_toggled = Signal()
    show_skeleton_changed = Signal(bool)
    show_landmarks_changed = Signal(bool)
    osc_update_requested = Signal(str, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll_area.setStyleSheet("QScrollArea { border: none; background-color: transparent; }")

        scroll_content = QWidget()
        layout = QVBoxLayout(scroll_content)
        layout.setSpacing(12)
        layout.setContentsMargins(5, 5, 5, 5)

        # === 카메라 ===
        camera_group = QGroupBox("Camera")
        camera_group.setStyleSheet(self._get_group_style())
        camera_layout = QVBoxLayout(camera_group)

        self.camera_combo = QComboBox()
        self.camera_combo.setStyleSheet(self._get_input_style())
        self.camera_combo.activated.connect(self._on_camera_activated)
        camera_layout.addWidget(self.camera_combo)

        self.tracking_btn = QPushButton("Start Tracking")
        self.tracking_btn.setStyleSheet(self._get_button_style())
        self.tracking_btn.clicked.connect(lambda: self.tracking_toggled.emit())
        camera_layout.addWidget(self.tracking_btn)

        layout.addWidget(camera_group)

        # === 표시 옵션 ===
        display_group = QGroupBox("Display")
        display_group.setStyleSheet(self._get_group_style())
        display_layout = QVBoxLayout(display_group)

        self.draw_skeleton_cb = QCheckBox("Draw skeleton")
        self.draw_skeleton_cb.setChecked(True)
        self.draw_skeleton_cb.stateChanged.connect(
            lambda s: self.show_skeleton_changed.emit(s == Qt.CheckState.Checked.value))
        self.draw_skeleton_cb.setStyleSheet("color: #e0e0e0;")
        display_layout.addWidget(self.draw_skeleton_cb)

        self.draw_landmarks_cb = QCheckBox("Draw landmarks")
        self.draw_landmarks_cb.setChecked(True)
        self.draw_landmarks_cb.stateChanged.connect(
            lambda s: self.show_landmarks_changed.emit(s == Qt.CheckState.Checked.value))
        self.draw_landmarks_cb.setStyleSheet("color: #e0e0e0;")
        display_layout.addWidget(self.draw_landmarks_cb)

        layout.addWidget(display_group)

        # === OSC 설정 ===
        osc_group = QGroupBox("OSC Output")
        osc_group.setStyleSheet(self._get_group_style())
        osc_layout = QVBoxLayout(osc_group)

        ip_layout = QHBoxLayout()
        ip_label = QLabel("IP:")
        ip_label.setStyleSheet("color: #e0e0e0;")
        self.osc_ip_edit = QLineEdit()
        self.osc_ip_edit.setPlaceholderText("127.0.0.1")
        self.osc_ip_edit.setStyleSheet(self._get_input_style())
        ip_layout.addWidget(ip_label)
        ip_layout.addWidget(self.osc_ip_edit)
        osc_layout.addLayout(ip_layout)

        port_layout = QHBoxLayout()
        port_label = QLabel("Port:")
        port_label.setStyleSheet("color: #e0e0e0;")
        self.osc_port_spin = QSpinBox()
        self.osc_port_spin.setRange(1, 65535)
        self.osc_port_spin.setValue(8000)
        self.osc_port_spin.setStyleSheet(self._get_input_style())
        port_layout.addWidget(port_label)
        port_layout.addWidget(self.osc_port_spin)
        port_layout.addStretch()
        osc_layout.addLayout(port_layout)

        self.update_osc_btn = QPushButton("Update OSC")
        self.update_osc_btn.setStyleSheet(self._get_button_style())
        self.update_osc_btn.clicked.connect(self._on_update_osc)
        osc_layout.addWidget(self.update_osc_btn)

        layout.addWidget(osc_group)

        # === 통계 ===
        self.stats_panel = StatsPanel()
        self.stats_panel.setStyleSheet(self._get_group_style())
        layout.addWidget(self.stats_panel)

        layout.addStretch()

        scroll_area.setWidget(scroll_content)
        main_layout.addWidget(scroll_area)

    def _get_group_style(self):
        return """
            QGroupBox {
                color: #e0e0e0;
                font-weight: bold;
                border: 1px solid #3d3d5c;
                border-radius: 8px;
                margin-top: 10px;
                padding-top: 10px;
            }
            QGroupBox::title { subcontrol-origin: margin; left: 10px; }
        """

    def _get_button_style(self, color: str = "#4ECDC4", pressed: str = "#3DBDB5"):
        return f"""
            QPushButton {{
                background-color: {color};
                color: #1a1a2e;
                border: none;
                padding: 8px 20px;
                font-weight: bold;
                border-radius: 6px;
            }}
            QPushButton:pressed {{ background-color: {pressed}; }}
        """

    def _get_input_style(self):
        # QLineEdit / QSpinBox / QComboBox 공통
        return """
            QLineEdit, QSpinBox, QComboBox {
                background-color: #2d2d44;
                color: #e0e0e0;
                border: 1px solid #3d3d5c;
                border-radius: 4px;
                padding: 4px 8px;
            }
            QLineEdit:focus, QComboBox:hover { border-color: #4ECDC4; }
            QComboBox QAbstractItemView {
                background-color: #2d2d44;
                color: #e0e0e0;
                selection-background-color: #4ECDC4;
            }
        """

    def _on_camera_activated(self, index: int):
        device_id = self.camera_combo.itemData(index)
        if device_id is not None:
            self.camera_changed.emit(device_id)

    def _on_update_osc(self):
        address = self.osc_ip_edit.text().strip()
        self.osc_update_requested.emit(address, self.osc_port_spin.value())

    def set_cameras(self, cameras: List[CameraDescriptor], selected_id: Optional[str]):
        """카메라 목록 채우기 (기본 항목 없음)"""
        self.camera_combo.blockSignals(True)
        self.camera_combo.clear()
        for camera in cameras:
            self.camera_combo.addItem(camera.label, camera.device_id)
        if selected_id is not None:
            index = self.camera_combo.findData(selected_id)
            if index >= 0:
                self.camera_combo.setCurrentIndex(index)
        self.camera_combo.blockSignals(False)

    def set_tracking(self, tracking: bool):
        self.tracking_btn.setText("Stop Tracking" if tracking else "Start Tracking")
        if tracking:
            self.tracking_btn.setStyleSheet(self._get_button_style("#FF6B6B", "#E65555"))
        else:
            self.tracking_btn.setStyleSheet(self._get_button_style())

    def set_osc_config(self, config: TransportConfig):
        self.osc_ip_edit.setText(config.remote_address)
        self.osc_port_spin.setValue(config.remote_port)
