"""ProgressController — 플레이어 위치 보고 처리 (클립 경계 감지, 자동 진행)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.services.time_mapper import find_clip_at_time

if TYPE_CHECKING:
    from src.ui.controllers.seek_controller import SeekController
    from src.ui.controllers.sync_context import SyncContext

logger = logging.getLogger(__name__)


class ProgressController:
    """주기적인 재생 위치 보고를 받아 현재 클립 인덱스를 갱신하는 Controller."""

    def __init__(self, ctx: SyncContext, seek_ctrl: SeekController) -> None:
        self.ctx = ctx
        self.seek_ctrl = seek_ctrl

    def on_progress(self, actual_time: float) -> None:
        """Handle a position report from the player (seconds)."""
        ctx = self.ctx
        ctx.current_actual_time = actual_time

        # 시크 직후의 보고는 시크 이전 위치일 수 있음 → 표시만 갱신
        if ctx.in_seek_grace():
            logger.debug(f"Progress {actual_time:.3f}s inside seek grace window, index kept")
            return

        if not ctx.state.is_virtual_mode or not ctx.clips:
            self._track_clip_index(actual_time)
            return

        idx = ctx.state.clip_index
        if not (0 <= idx < len(ctx.clips)):
            return
        current_clip = ctx.clips[idx]
        if actual_time < current_clip.end_time - ctx.config.clip_end_tolerance:
            return

        if ctx.config.auto_advance and idx < len(ctx.clips) - 1:
            next_idx = idx + 1
            logger.debug(f"Clip {idx} reached its end, advancing to clip {next_idx}")
            self.seek_ctrl.perform_seek(ctx.clips[next_idx].start_time, next_idx, False)
        else:
            self._finish_sequence()

    def on_playing_changed(self, playing: bool) -> None:
        self.ctx.is_playing = playing

    # ---- 내부 ----

    def _track_clip_index(self, actual_time: float) -> None:
        ctx = self.ctx
        idx = find_clip_at_time(actual_time, ctx.clips)
        if idx != ctx.state.clip_index:
            ctx.set_state(ctx.state.with_index(idx))

    def _finish_sequence(self) -> None:
        ctx = self.ctx
        logger.info(f"Clip sequence finished at clip {ctx.state.clip_index}")
        if ctx.player is not None:
            ctx.player.pause()
        ctx.set_state(ctx.state.finish_sequence())
        ctx.notify_sequence_finished()
