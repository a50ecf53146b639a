from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtMultimedia import QMediaPlayer
import logging

from src.utils.config import BUFFER_PENDING_SEEK, PROGRESS_INTERVAL_MS
from src.utils.time_utils import ms_to_seconds, seconds_to_ms

logger = logging.getLogger(__name__)

_READY_STATUSES = (
    QMediaPlayer.MediaStatus.LoadedMedia,
    QMediaPlayer.MediaStatus.BufferingMedia,
    QMediaPlayer.MediaStatus.BufferedMedia,
    QMediaPlayer.MediaStatus.StalledMedia,
    QMediaPlayer.MediaStatus.EndOfMedia,
)


class QMediaPlayerAdapter(QObject):
    """
    QMediaPlayer를 클립 동기화 엔진의 외부 플레이어 계약에 맞추는 어댑터.

    명령은 초 단위로 받고, 재생 중에는 타이머로 일정 간격마다 위치를
    progress 시그널로 보고합니다. 미디어가 준비되기 전의 명령은 버리며,
    buffer_pending_seek가 켜져 있으면 마지막 시크만 보관했다가 준비 시 적용합니다.
    """

    progress = Signal(float)          # 현재 재생 위치 (초)
    playing_changed = Signal(bool)    # True=Playing, False=Paused/Stopped
    ready_changed = Signal(bool)

    def __init__(
        self,
        player: QMediaPlayer,
        progress_interval_ms: int = PROGRESS_INTERVAL_MS,
        buffer_pending_seek: bool = BUFFER_PENDING_SEEK,
        parent=None,
    ):
        super().__init__(parent)
        self._player = player
        self._buffer_pending_seek = buffer_pending_seek
        self._pending_seek: float | None = None
        self._ready = player.mediaStatus() in _READY_STATUSES
        self._playing = False

        self._timer = QTimer(self)
        self._timer.setInterval(progress_interval_ms)
        self._timer.timeout.connect(self._on_tick)

        self._player.mediaStatusChanged.connect(self._on_media_status_changed)
        self._player.playbackStateChanged.connect(self._on_playback_state_changed)

    @property
    def player(self) -> QMediaPlayer:
        return self._player

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def pending_seek(self) -> float | None:
        return self._pending_seek

    def set_progress_interval(self, ms: int):
        """진행 보고 간격을 설정합니다."""
        if ms <= 0:
            logger.warning(f"Invalid progress interval: {ms}")
            return
        self._timer.setInterval(ms)

    # ---- 외부 플레이어 계약 ----

    def seek_to(self, seconds: float):
        if not self._ready:
            if self._buffer_pending_seek:
                self._pending_seek = seconds
                logger.debug(f"Player not ready, seek to {seconds:.3f}s buffered")
            else:
                logger.debug(f"Player not ready, seek to {seconds:.3f}s dropped")
            return
        self._player.setPosition(seconds_to_ms(seconds))

    def play(self):
        if not self._ready:
            logger.debug("Player not ready, play dropped")
            return
        self._player.play()

    def pause(self):
        if not self._ready:
            logger.debug("Player not ready, pause dropped")
            return
        self._player.pause()

    # ---- QMediaPlayer 시그널 ----

    def _on_media_status_changed(self, status):
        ready = status in _READY_STATUSES
        if ready == self._ready:
            return
        self._ready = ready
        logger.info(f"Player ready={ready} (status={status})")
        self.ready_changed.emit(ready)
        if ready and self._pending_seek is not None:
            seconds = self._pending_seek
            self._pending_seek = None
            self._player.setPosition(seconds_to_ms(seconds))

    def _on_playback_state_changed(self, state):
        playing = state == QMediaPlayer.PlaybackState.PlayingState
        if playing:
            self._timer.start()
        else:
            self._timer.stop()
        if playing != self._playing:
            self._playing = playing
            self.playing_changed.emit(playing)

    def _on_tick(self):
        self.progress.emit(ms_to_seconds(self._player.position()))
