"""SeekController — 모든 위치 변경이 지나가는 단일 경로."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.models.playback_state import NO_CLIP, PlaybackPhase, idle, playing_clip
from src.services.time_mapper import find_clip_at_time, virtual_to_actual
from src.utils.config import SKIP_SECONDS

if TYPE_CHECKING:
    from src.ui.controllers.sync_context import SyncContext

logger = logging.getLogger(__name__)


class SeekController:
    """클립 이동, 스킵, 가상 타임라인 시크, 재생 모드 전환을 담당하는 Controller."""

    def __init__(self, ctx: SyncContext) -> None:
        self.ctx = ctx

    # ---- 시크 ----

    def perform_seek(
        self,
        actual_time: float,
        clip_index: int,
        should_play: bool,
        enter_sequence: bool = False,
    ) -> None:
        """Seek the player and make *clip_index* current.

        The seek is stamped before anything else so that progress reports
        still describing the old position are ignored for the grace window.
        The index is stored before observers run, so a progress callback
        fired from inside an observer already sees it.  With
        *enter_sequence* the engine also switches to clip-sequence mode.
        *clip_index* is clamped to the clip list; -1 leaves clip-sequence mode.
        """
        ctx = self.ctx
        clip_index = max(NO_CLIP, min(clip_index, len(ctx.clips) - 1))
        ctx.stamp_seek()
        if clip_index == NO_CLIP:
            state = idle()
        elif enter_sequence:
            state = playing_clip(clip_index)
        else:
            state = ctx.state.with_index(clip_index)
        ctx.set_state(state, always_notify_index=True)
        ctx.current_actual_time = actual_time
        logger.debug(f"Seek to {actual_time:.3f}s (clip {clip_index}, play={should_play})")

        if ctx.player is None:
            logger.debug("No player attached, seek dropped")
            return
        ctx.player.seek_to(actual_time)
        if should_play:
            ctx.player.play()

    def jump_to_clip(self, clip_index: int) -> None:
        ctx = self.ctx
        if not (0 <= clip_index < len(ctx.clips)):
            return
        self.perform_seek(ctx.clips[clip_index].start_time, clip_index, True, enter_sequence=True)

    def play_all_clips(self) -> None:
        ctx = self.ctx
        if not ctx.clips:
            return
        logger.info(f"Playing {len(ctx.clips)} clips in sequence")
        self.perform_seek(ctx.clips[0].start_time, 0, True, enter_sequence=True)

    # ---- 클립 스킵 ----

    def skip_to_previous_clip(self) -> None:
        """Go to the previous clip; at the first clip, restart it."""
        ctx = self.ctx
        if not ctx.clips:
            return
        target = max(0, min(ctx.state.clip_index - 1, len(ctx.clips) - 1))
        self.perform_seek(ctx.clips[target].start_time, target, False)

    def skip_to_next_clip(self) -> None:
        ctx = self.ctx
        if not ctx.clips:
            return
        last = len(ctx.clips) - 1
        if ctx.state.clip_index >= last:
            return
        target = max(0, ctx.state.clip_index + 1)
        self.perform_seek(ctx.clips[target].start_time, target, False)

    # ---- 가상 타임라인 ----

    def seek_to_virtual_time(self, virtual_time: float) -> None:
        ctx = self.ctx
        if not ctx.clips:
            return
        target = virtual_to_actual(virtual_time, ctx.ranges)
        self.perform_seek(target.actual_time, target.clip_index, False)

    def skip_forward(self, seconds: float = SKIP_SECONDS) -> None:
        ctx = self.ctx
        self.seek_to_virtual_time(min(ctx.current_virtual_time + seconds, ctx.total_virtual_duration))

    def skip_backward(self, seconds: float = SKIP_SECONDS) -> None:
        self.seek_to_virtual_time(max(self.ctx.current_virtual_time - seconds, 0.0))

    # ---- 재생 / 모드 ----

    def stop_playback(self) -> None:
        ctx = self.ctx
        if ctx.player is not None:
            ctx.player.pause()
        ctx.set_state(ctx.state.exit_sequence())

    def exit_clip_mode(self) -> None:
        """Leave clip-sequence mode, e.g. when the native player controls are used."""
        ctx = self.ctx
        if not ctx.state.is_virtual_mode:
            return
        logger.info(f"Leaving clip mode at clip {ctx.state.clip_index}")
        ctx.set_state(ctx.state.exit_sequence())

    def set_virtual_mode(self, enabled: bool) -> None:
        ctx = self.ctx
        if not enabled:
            self.exit_clip_mode()
            return
        if not ctx.clips or ctx.state.is_virtual_mode:
            return
        ctx.set_state(playing_clip(max(ctx.state.clip_index, 0)))

    def toggle_play(self) -> None:
        """Pause, or resume the clip sequence from the current position."""
        ctx = self.ctx
        if ctx.is_playing:
            if ctx.player is not None:
                ctx.player.pause()
            return
        if not ctx.clips:
            if ctx.player is not None:
                ctx.player.play()
            return

        index = find_clip_at_time(ctx.current_actual_time, ctx.clips)
        if ctx.state.phase is PlaybackPhase.SEQUENCE_ENDED or index < 0:
            # 끝났거나 클립 밖이면 처음부터
            self.play_all_clips()
            return
        self.perform_seek(ctx.current_actual_time, index, True, enter_sequence=True)
