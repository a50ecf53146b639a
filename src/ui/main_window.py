"""Main application window."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer, QUrl, Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from src.models.clip import Clip
from src.services.media_player_adapter import QMediaPlayerAdapter
from src.services.settings_manager import SettingsManager, SyncConfig
from src.ui.controllers.clip_sync_engine import ClipSyncEngine
from src.ui.video_surface import VideoSurface
from src.ui.virtual_timeline_controls import VirtualTimelineControls
from src.utils.config import (
    APP_NAME,
    CLIP_LIST_MIN_WIDTH,
    NOTES_EDIT_DEBOUNCE_MS,
    VIDEO_FILTER,
)
from src.utils.time_utils import format_seconds_to_time, parse_notes_to_clips

logger = logging.getLogger(__name__)


def clip_label(index: int, clip: Clip) -> str:
    start = format_seconds_to_time(clip.start_time)
    end = format_seconds_to_time(clip.end_time)
    return f"{index + 1}. {start} - {end}  {clip.text}"


class MainWindow(QMainWindow):
    """Video surface, notes editor, clip list and the virtual-timeline transport."""

    def __init__(self, settings: SettingsManager | None = None) -> None:
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.resize(1200, 720)
        self._settings = settings or SettingsManager()

        # Media stack
        self._audio_output = QAudioOutput()
        self._player = QMediaPlayer()
        self._player.setAudioOutput(self._audio_output)
        self._adapter = QMediaPlayerAdapter(
            self._player,
            progress_interval_ms=self._settings.get_progress_interval_ms(),
            buffer_pending_seek=self._settings.get_buffer_pending_seek(),
            parent=self,
        )
        self._engine = ClipSyncEngine(
            player=self._adapter,
            config=SyncConfig.from_settings(self._settings),
            parent=self,
        )

        # Notes are re-parsed once typing pauses
        self._notes_timer = QTimer(self)
        self._notes_timer.setSingleShot(True)
        self._notes_timer.setInterval(NOTES_EDIT_DEBOUNCE_MS)
        self._notes_timer.timeout.connect(self._apply_notes)

        self._build_ui()
        self._build_menu()
        self._connect_signals()
        self._restore_session()

    @property
    def engine(self) -> ClipSyncEngine:
        return self._engine

    def _build_ui(self) -> None:
        self._video_widget = VideoSurface()
        self._video_widget.setMinimumSize(640, 360)
        self._player.setVideoOutput(self._video_widget)

        self._controls = VirtualTimelineControls()
        self._controls.set_duration(0.0)

        left = QWidget()
        left_layout = QVBoxLayout(left)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.addWidget(self._video_widget, 1)
        left_layout.addWidget(self._controls)

        self._notes_edit = QPlainTextEdit()
        self._notes_edit.setPlaceholderText("0:30 - 1:05 Intro\n2:10 - 2:45 Chorus")
        self._clip_list = QListWidget()
        self._clip_count_label = QLabel("0 clips")

        right = QWidget()
        right.setMinimumWidth(CLIP_LIST_MIN_WIDTH)
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self._notes_edit, 1)
        right_layout.addWidget(self._clip_count_label)
        right_layout.addWidget(self._clip_list, 1)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        open_action = QAction("&Open Video...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_video)
        file_menu.addAction(open_action)

        play_menu = self.menuBar().addMenu("&Playback")
        for text, shortcut, slot in (
            ("Play/Pause", "Ctrl+P", self._engine.toggle_play),
            ("Play All Clips", "Ctrl+Return", self._engine.play_all_clips),
            ("Previous Clip", "Ctrl+Left", self._engine.skip_to_previous_clip),
            ("Next Clip", "Ctrl+Right", self._engine.skip_to_next_clip),
            ("Skip Back", "Alt+Left", self._engine.skip_backward),
            ("Skip Forward", "Alt+Right", self._engine.skip_forward),
            ("Stop", "Esc", self._engine.stop_playback),
        ):
            action = QAction(text, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(lambda checked=False, s=slot: s())
            play_menu.addAction(action)

    def _connect_signals(self) -> None:
        # Player → engine
        self._adapter.progress.connect(self._engine.on_progress)
        self._adapter.playing_changed.connect(self._engine.on_playing_changed)
        self._adapter.playing_changed.connect(self._controls.set_playing)
        self._player.errorOccurred.connect(self._on_player_error)

        # Engine → UI
        self._engine.clips_changed.connect(self._on_clips_changed)
        self._engine.clip_index_changed.connect(self._on_clip_index_changed)
        self._engine.virtual_mode_changed.connect(self._controls.set_virtual_mode)
        self._engine.virtual_position_changed.connect(self._controls.set_position)
        self._engine.sequence_finished.connect(self._on_sequence_finished)

        # UI → engine
        self._controls.seek_requested.connect(self._engine.seek_to_virtual_time)
        self._controls.play_toggled.connect(self._engine.toggle_play)
        self._controls.play_all_requested.connect(self._engine.play_all_clips)
        self._controls.previous_requested.connect(self._engine.skip_to_previous_clip)
        self._controls.next_requested.connect(self._engine.skip_to_next_clip)
        self._controls.stop_requested.connect(self._engine.stop_playback)
        self._clip_list.itemActivated.connect(self._on_clip_activated)
        self._notes_edit.textChanged.connect(self._notes_timer.start)

        # 비디오 화면을 직접 클릭하면 클립 모드 해제 후 일반 재생 토글
        self._video_widget.clicked.connect(self._on_video_clicked)

    # ---- 세션 ----

    def _restore_session(self) -> None:
        notes = self._settings.get_last_notes()
        if notes:
            self._notes_edit.setPlainText(notes)
            self._apply_notes()
        last_video = self._settings.get_last_video_path()
        if last_video and Path(last_video).is_file():
            self.load_video(Path(last_video))

    def load_video(self, path: Path) -> None:
        logger.info(f"Loading video: {path}")
        self._player.setSource(QUrl.fromLocalFile(str(path)))
        self._settings.set_last_video_path(str(path))
        self.setWindowTitle(f"{APP_NAME} - {path.name}")

    # ---- 슬롯 ----

    @Slot()
    def _on_open_video(self) -> None:
        last = self._settings.get_last_video_path()
        start_dir = str(Path(last).parent) if last else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open Video", start_dir, VIDEO_FILTER)
        if not path:
            return
        self.load_video(Path(path))

    @Slot()
    def _apply_notes(self) -> None:
        notes = self._notes_edit.toPlainText()
        self._settings.set_last_notes(notes)
        self._engine.set_clips(parse_notes_to_clips(notes))

    @Slot()
    def _on_clips_changed(self) -> None:
        self._clip_list.clear()
        for i, clip in enumerate(self._engine.clips):
            item = QListWidgetItem(clip_label(i, clip))
            item.setData(Qt.ItemDataRole.UserRole, i)
            self._clip_list.addItem(item)
        self._clip_count_label.setText(f"{len(self._engine.clips)} clips")
        self._controls.set_duration(self._engine.total_virtual_duration)

    @Slot(int)
    def _on_clip_index_changed(self, index: int) -> None:
        self._clip_list.blockSignals(True)
        self._clip_list.setCurrentRow(index)
        self._clip_list.blockSignals(False)

    @Slot(QListWidgetItem)
    def _on_clip_activated(self, item: QListWidgetItem) -> None:
        self._engine.jump_to_clip(item.data(Qt.ItemDataRole.UserRole))

    @Slot()
    def _on_sequence_finished(self) -> None:
        self.statusBar().showMessage("Clip sequence finished", 3000)

    def _on_player_error(self, error, error_string: str) -> None:
        logger.error(f"Player error {error}: {error_string}")
        self.statusBar().showMessage(f"Player error: {error_string}", 5000)

    @Slot()
    def _on_video_clicked(self) -> None:
        self._engine.exit_clip_mode()
        if self._engine.is_playing:
            self._adapter.pause()
        else:
            self._adapter.play()

    def closeEvent(self, event) -> None:
        self._notes_timer.stop()
        self._settings.set_last_notes(self._notes_edit.toPlainText())
        super().closeEvent(event)
