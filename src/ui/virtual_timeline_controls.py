"""가상 타임라인 컨트롤: 이전/재생/다음/정지, 가상 시간 시크 바, 시간 표시."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QWidget,
)

from src.utils.time_utils import format_seconds_to_time, ms_to_seconds, seconds_to_ms


class VirtualTimelineControls(QWidget):
    """트랜스포트 바: 클립만 이어 붙인 가상 타임라인을 초 단위로 표시/시크."""

    # 사용자가 슬라이더로 시크했을 때 발생 (가상 타임라인, 초)
    seek_requested = Signal(float)
    play_toggled = Signal()
    play_all_requested = Signal()
    previous_requested = Signal()
    next_requested = Signal()
    stop_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_seeking = False

        # --- 위젯 구성 ---
        self._prev_btn = QPushButton("⏮")
        self._prev_btn.setFixedWidth(36)
        self._play_btn = QPushButton("▶")
        self._play_btn.setFixedWidth(36)
        self._next_btn = QPushButton("⏭")
        self._next_btn.setFixedWidth(36)
        self._stop_btn = QPushButton("■")
        self._stop_btn.setFixedWidth(36)
        self._play_all_btn = QPushButton("Play clips")

        self._time_label = QLabel(format_seconds_to_time(0.0))
        self._time_label.setFixedWidth(80)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._seek_slider = QSlider(Qt.Orientation.Horizontal)
        self._seek_slider.setRange(0, 0)

        self._duration_label = QLabel(format_seconds_to_time(0.0))
        self._duration_label.setFixedWidth(80)
        self._duration_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._mode_label = QLabel("")
        self._mode_label.setFixedWidth(40)

        # --- 레이아웃 ---
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.addWidget(self._prev_btn)
        layout.addWidget(self._play_btn)
        layout.addWidget(self._next_btn)
        layout.addWidget(self._stop_btn)
        layout.addWidget(self._time_label)
        layout.addWidget(self._seek_slider, 1)
        layout.addWidget(self._duration_label)
        layout.addWidget(self._mode_label)
        layout.addWidget(self._play_all_btn)

        # --- 시그널 연결 ---
        self._prev_btn.clicked.connect(self.previous_requested.emit)
        self._play_btn.clicked.connect(self.play_toggled.emit)
        self._next_btn.clicked.connect(self.next_requested.emit)
        self._stop_btn.clicked.connect(self.stop_requested.emit)
        self._play_all_btn.clicked.connect(self.play_all_requested.emit)

        self._seek_slider.sliderPressed.connect(self._on_seek_pressed)
        self._seek_slider.sliderReleased.connect(self._on_seek_released)
        self._seek_slider.sliderMoved.connect(self._on_seek_moved)

    # --- 외부에서 호출 ---

    def set_duration(self, seconds: float) -> None:
        self._seek_slider.setRange(0, seconds_to_ms(seconds))
        self._duration_label.setText(format_seconds_to_time(seconds))
        self.setEnabled(seconds > 0)

    def set_position(self, seconds: float) -> None:
        if self._is_seeking:
            return
        self._seek_slider.setValue(seconds_to_ms(seconds))
        self._time_label.setText(format_seconds_to_time(seconds))

    def set_playing(self, playing: bool) -> None:
        self._play_btn.setText("⏸" if playing else "▶")

    def set_virtual_mode(self, enabled: bool) -> None:
        self._mode_label.setText("CLIPS" if enabled else "")

    # --- 슬롯 ---

    def _on_seek_pressed(self) -> None:
        self._is_seeking = True

    def _on_seek_released(self) -> None:
        self._is_seeking = False
        self.seek_requested.emit(ms_to_seconds(self._seek_slider.value()))

    def _on_seek_moved(self, value: int) -> None:
        self._time_label.setText(format_seconds_to_time(ms_to_seconds(value)))
