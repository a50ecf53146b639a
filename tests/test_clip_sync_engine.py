"""ClipSyncEngine 시그널 / 상태 노출 테스트."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest
from PySide6.QtWidgets import QApplication

from src.models.clip import Clip
from src.models.playback_state import PlaybackPhase, idle, playing_clip
from src.services.settings_manager import SyncConfig
from src.ui.controllers.clip_sync_engine import ClipSyncEngine

# QApplication 인스턴스 보장
_app = QApplication.instance() or QApplication([])

CLIPS = [Clip(10, 20, "Intro", "clip-0"), Clip(30, 35, "Verse", "clip-1"), Clip(50, 60, "Outro", "clip-2")]


class _Clock:
    def __init__(self):
        self.now = 50.0

    def __call__(self):
        return self.now


class _Recorder:
    """Collects every engine signal in emission order."""

    def __init__(self, engine: ClipSyncEngine):
        self.events: list[tuple] = []
        engine.clip_index_changed.connect(lambda i: self.events.append(("index", i)))
        engine.virtual_mode_changed.connect(lambda m: self.events.append(("mode", m)))
        engine.clips_changed.connect(lambda: self.events.append(("clips",)))
        engine.sequence_finished.connect(lambda: self.events.append(("finished",)))
        engine.virtual_position_changed.connect(lambda t: self.events.append(("position", t)))

    def of(self, kind: str) -> list:
        return [e[1] if len(e) > 1 else True for e in self.events if e[0] == kind]


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def player():
    return MagicMock()


@pytest.fixture
def engine(player, clock):
    eng = ClipSyncEngine(player=player, clock=clock)
    eng.set_clips(CLIPS)
    player.reset_mock()
    return eng


class TestSetClips:
    def test_exposes_ranges(self, engine):
        assert engine.clips == tuple(CLIPS)
        assert engine.total_virtual_duration == 25
        assert [(r.virtual_start, r.virtual_end) for r in engine.clip_ranges] == [
            (0, 10), (10, 15), (15, 25),
        ]

    def test_clip_ranges_is_a_copy(self, engine):
        engine.clip_ranges.clear()
        assert len(engine.clip_ranges) == 3

    def test_initial_state(self, engine):
        assert engine.state == idle()
        assert engine.current_clip_index == -1
        assert engine.is_virtual_mode is False
        assert engine.current_virtual_time == 0.0

    def test_emits_signals(self, player, clock):
        eng = ClipSyncEngine(player=player, clock=clock)
        rec = _Recorder(eng)
        eng.set_clips(CLIPS)
        assert rec.events == [("index", -1), ("clips",), ("position", 0.0)]

    def test_replace_resets_to_idle(self, engine, player):
        engine.jump_to_clip(2)
        assert engine.is_virtual_mode
        rec = _Recorder(engine)
        engine.set_clips(CLIPS[:1])
        assert engine.state == idle()
        assert rec.of("mode") == [False]
        assert rec.of("index") == [-1]
        assert engine.total_virtual_duration == 10

    def test_replace_with_empty_list(self, engine):
        engine.set_clips([])
        assert engine.clips == ()
        assert engine.total_virtual_duration == 0
        assert engine.current_virtual_time == 0.0
        engine.play_all_clips()
        assert engine.state == idle()

    def test_accepts_generator(self, engine):
        engine.set_clips(c for c in CLIPS[1:])
        assert len(engine.clips) == 2


class TestOperations:
    def test_jump_emits_mode_then_index(self, engine, player):
        rec = _Recorder(engine)
        engine.jump_to_clip(1)
        assert rec.events[:2] == [("mode", True), ("index", 1)]
        assert rec.of("position") == [10.0]
        assert player.mock_calls == [call.seek_to(30), call.play()]

    def test_play_all(self, engine, player):
        engine.play_all_clips()
        assert engine.state == playing_clip(0)
        assert player.mock_calls == [call.seek_to(10), call.play()]

    def test_perform_seek_always_emits_index(self, engine):
        rec = _Recorder(engine)
        engine.perform_seek(12, 0, False)
        engine.perform_seek(14, 0, False)
        assert rec.of("index") == [0, 0]

    def test_perform_seek_clamps_index(self, engine):
        engine.perform_seek(55.0, 7, False)
        assert engine.current_clip_index == 2

    def test_perform_seek_without_clip_leaves_clip_mode(self, engine):
        engine.play_all_clips()
        rec = _Recorder(engine)
        engine.perform_seek(25.0, -1, False)
        assert engine.state == idle()
        assert rec.of("mode") == [False]
        assert rec.of("index") == [-1]

    def test_seek_to_virtual_time(self, engine, player):
        engine.seek_to_virtual_time(12.5)
        player.seek_to.assert_called_once_with(32.5)
        assert engine.current_clip_index == 1
        assert engine.current_actual_time == 32.5
        assert engine.current_virtual_time == 12.5

    def test_skip_forward_and_backward(self, engine, player):
        engine.perform_seek(18, 0, False)
        player.reset_mock()
        engine.skip_forward()
        player.seek_to.assert_called_once_with(33)
        player.reset_mock()
        engine.skip_backward(10)
        player.seek_to.assert_called_once_with(13)

    def test_next_and_previous(self, engine):
        engine.jump_to_clip(0)
        engine.skip_to_next_clip()
        engine.skip_to_next_clip()
        engine.skip_to_next_clip()
        assert engine.current_clip_index == 2
        engine.skip_to_previous_clip()
        assert engine.current_clip_index == 1

    def test_stop_playback(self, engine, player):
        engine.jump_to_clip(1)
        rec = _Recorder(engine)
        engine.stop_playback()
        player.pause.assert_called()
        assert engine.state == idle(1)
        assert rec.of("mode") == [False]

    def test_set_virtual_mode(self, engine):
        rec = _Recorder(engine)
        engine.set_virtual_mode(True)
        engine.set_virtual_mode(True)
        engine.set_virtual_mode(False)
        assert rec.of("mode") == [True, False]

    def test_exit_clip_mode(self, engine):
        engine.jump_to_clip(2)
        engine.exit_clip_mode()
        assert engine.state == idle(2)

    def test_toggle_play_follows_playing_flag(self, engine, player):
        engine.on_playing_changed(True)
        assert engine.is_playing
        engine.toggle_play()
        player.pause.assert_called_once()
        engine.on_playing_changed(False)
        engine.toggle_play()
        assert engine.state == playing_clip(0)


class TestProgress:
    def test_emits_virtual_position(self, engine):
        rec = _Recorder(engine)
        engine.on_progress(32.0)
        assert rec.of("position") == [12.0]
        assert rec.of("index") == [1]

    def test_position_in_gap_snaps_forward(self, engine):
        engine.on_progress(25.0)
        assert engine.current_virtual_time == 10.0
        assert engine.current_clip_index == -1

    def test_sequence_runs_to_completion(self, engine, player, clock):
        rec = _Recorder(engine)
        engine.play_all_clips()
        for t, jump in ((19.95, 30), (34.95, 50)):
            clock.now += 1.0
            engine.on_progress(t)
            player.seek_to.assert_called_with(jump)
        clock.now += 1.0
        engine.on_progress(59.95)
        player.pause.assert_called_once()
        assert engine.state.phase is PlaybackPhase.SEQUENCE_ENDED
        assert engine.current_clip_index == 2
        assert rec.of("index") == [0, 1, 2]
        assert rec.of("finished") == [True]
        assert rec.of("mode") == [True, False]

    def test_stale_report_after_seek_is_ignored(self, engine, clock):
        engine.jump_to_clip(2)
        clock.now += 0.1
        engine.on_progress(12.0)
        assert engine.current_clip_index == 2
        assert engine.is_virtual_mode

    def test_config_change_applies_immediately(self, engine, player):
        engine.set_config(SyncConfig(auto_advance=False))
        engine.set_virtual_mode(True)
        engine.on_progress(19.95)
        player.pause.assert_called_once()
        player.seek_to.assert_not_called()


class TestPlayerAttachment:
    def test_no_player_drops_commands(self, clock):
        eng = ClipSyncEngine(clock=clock)
        eng.set_clips(CLIPS)
        eng.jump_to_clip(1)
        assert eng.state == playing_clip(1)
        assert eng.current_actual_time == 30

    def test_set_player_later(self, clock, player):
        eng = ClipSyncEngine(clock=clock)
        eng.set_clips(CLIPS)
        eng.set_player(player)
        eng.jump_to_clip(0)
        player.seek_to.assert_called_once_with(10)
