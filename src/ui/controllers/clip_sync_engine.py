"""ClipSyncEngine — 클립 연속 재생 동기화 엔진 (UI에 노출되는 QObject)."""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from PySide6.QtCore import QObject, Signal, Slot

from src.models.clip import Clip, ClipRange
from src.models.playback_state import PlaybackState, idle
from src.services.settings_manager import SyncConfig
from src.ui.controllers.progress_controller import ProgressController
from src.ui.controllers.seek_controller import SeekController
from src.ui.controllers.sync_context import ExternalPlayer, SyncContext
from src.utils.config import SKIP_SECONDS

logger = logging.getLogger(__name__)


class ClipSyncEngine(QObject):
    """Plays a list of clips back-to-back as one gapless virtual timeline.

    The player keeps running on its own timeline; the engine translates
    between that timeline and the virtual one, seeks over the gaps and
    reports the current clip.  All methods are meant to be called from the
    Qt event loop thread.
    """

    clip_index_changed = Signal(int)
    virtual_mode_changed = Signal(bool)
    clips_changed = Signal()
    virtual_position_changed = Signal(float)  # seconds on the virtual timeline
    sequence_finished = Signal()

    def __init__(
        self,
        player: ExternalPlayer | None = None,
        config: SyncConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.ctx = SyncContext(player=player, config=config, clock=clock)
        self.ctx.notify_clip_index = self.clip_index_changed.emit
        self.ctx.notify_virtual_mode = self.virtual_mode_changed.emit
        self.ctx.notify_sequence_finished = self.sequence_finished.emit

        self.seek_ctrl = SeekController(self.ctx)
        self.progress_ctrl = ProgressController(self.ctx, self.seek_ctrl)

    # ---- 구성 ----

    def set_player(self, player: ExternalPlayer | None) -> None:
        self.ctx.player = player

    def set_config(self, config: SyncConfig) -> None:
        self.ctx.config = config

    def set_clips(self, clips: Sequence[Clip]) -> None:
        """Replace the clip list. Always returns the engine to idle."""
        ctx = self.ctx
        ctx.replace_clips(clips)
        logger.info(
            f"Clip list replaced: {len(ctx.clips)} clips, "
            f"{ctx.total_virtual_duration:.1f}s virtual"
        )
        ctx.set_state(idle(), always_notify_index=True)
        self.clips_changed.emit()
        self.virtual_position_changed.emit(ctx.current_virtual_time)

    # ---- 상태 ----

    @property
    def clips(self) -> tuple[Clip, ...]:
        return self.ctx.clips

    @property
    def clip_ranges(self) -> list[ClipRange]:
        return list(self.ctx.ranges)

    @property
    def total_virtual_duration(self) -> float:
        return self.ctx.total_virtual_duration

    @property
    def state(self) -> PlaybackState:
        return self.ctx.state

    @property
    def current_clip_index(self) -> int:
        return self.ctx.state.clip_index

    @property
    def is_virtual_mode(self) -> bool:
        return self.ctx.state.is_virtual_mode

    @property
    def is_playing(self) -> bool:
        return self.ctx.is_playing

    @property
    def current_actual_time(self) -> float:
        return self.ctx.current_actual_time

    @property
    def current_virtual_time(self) -> float:
        return self.ctx.current_virtual_time

    # ---- 플레이어 콜백 ----

    @Slot(float)
    def on_progress(self, actual_time: float) -> None:
        self.progress_ctrl.on_progress(actual_time)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot(bool)
    def on_playing_changed(self, playing: bool) -> None:
        self.progress_ctrl.on_playing_changed(playing)

    # ---- 조작 ----

    def perform_seek(self, actual_time: float, clip_index: int, should_play: bool) -> None:
        self.seek_ctrl.perform_seek(actual_time, clip_index, should_play)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot(int)
    def jump_to_clip(self, clip_index: int) -> None:
        self.seek_ctrl.jump_to_clip(clip_index)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot()
    def play_all_clips(self) -> None:
        self.seek_ctrl.play_all_clips()
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot()
    def stop_playback(self) -> None:
        self.seek_ctrl.stop_playback()

    @Slot()
    def skip_to_previous_clip(self) -> None:
        self.seek_ctrl.skip_to_previous_clip()
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot()
    def skip_to_next_clip(self) -> None:
        self.seek_ctrl.skip_to_next_clip()
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot(float)
    def seek_to_virtual_time(self, virtual_time: float) -> None:
        self.seek_ctrl.seek_to_virtual_time(virtual_time)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    def skip_forward(self, seconds: float = SKIP_SECONDS) -> None:
        self.seek_ctrl.skip_forward(seconds)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    def skip_backward(self, seconds: float = SKIP_SECONDS) -> None:
        self.seek_ctrl.skip_backward(seconds)
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot()
    def toggle_play(self) -> None:
        self.seek_ctrl.toggle_play()
        self.virtual_position_changed.emit(self.ctx.current_virtual_time)

    @Slot()
    def exit_clip_mode(self) -> None:
        self.seek_ctrl.exit_clip_mode()

    @Slot(bool)
    def set_virtual_mode(self, enabled: bool) -> None:
        self.seek_ctrl.set_virtual_mode(enabled)
