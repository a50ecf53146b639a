"""Settings manager for clip sync preferences."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QSettings

from src.utils.config import (
    AUTO_ADVANCE,
    BUFFER_PENDING_SEEK,
    CLIP_END_TOLERANCE_MS,
    PROGRESS_INTERVAL_MS,
    SEEK_GRACE_MS,
)

logger = logging.getLogger(__name__)


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self, settings: Optional[QSettings] = None):
        self._settings = settings if settings is not None else QSettings()

    def _non_negative_int(self, key: str, default: int) -> int:
        value = self._settings.value(key, default, int)
        if value < 0:
            logger.warning(f"Ignoring negative value for {key}: {value}")
            return default
        return value

    # ---------------------------------------------------- Sync Settings

    def get_seek_grace_ms(self) -> int:
        """Get the post-seek window during which progress cannot change the clip (default: 500)."""
        return self._non_negative_int("sync/seek_grace_ms", SEEK_GRACE_MS)

    def set_seek_grace_ms(self, ms: int) -> None:
        self._settings.setValue("sync/seek_grace_ms", ms)

    def get_clip_end_tolerance_ms(self) -> int:
        """Get how early before a clip end the clip counts as finished (default: 100)."""
        return self._non_negative_int("sync/clip_end_tolerance_ms", CLIP_END_TOLERANCE_MS)

    def set_clip_end_tolerance_ms(self, ms: int) -> None:
        self._settings.setValue("sync/clip_end_tolerance_ms", ms)

    def get_auto_advance(self) -> bool:
        """Get whether clip-sequence playback advances to the next clip (default: True)."""
        return self._settings.value("sync/auto_advance", AUTO_ADVANCE, bool)

    def set_auto_advance(self, enabled: bool) -> None:
        self._settings.setValue("sync/auto_advance", enabled)

    def get_buffer_pending_seek(self) -> bool:
        """Get whether a seek issued before the media is ready is replayed later (default: False)."""
        return self._settings.value("sync/buffer_pending_seek", BUFFER_PENDING_SEEK, bool)

    def set_buffer_pending_seek(self, enabled: bool) -> None:
        self._settings.setValue("sync/buffer_pending_seek", enabled)

    # ---------------------------------------------------- Player Settings

    def get_progress_interval_ms(self) -> int:
        """Get the player progress report interval in ms (default: 100)."""
        value = self._non_negative_int("sync/progress_interval_ms", PROGRESS_INTERVAL_MS)
        return value or PROGRESS_INTERVAL_MS

    def set_progress_interval_ms(self, ms: int) -> None:
        self._settings.setValue("sync/progress_interval_ms", ms)

    # ---------------------------------------------------- Session

    def get_last_video_path(self) -> Optional[str]:
        """Get the last opened video (None if never set)."""
        path = self._settings.value("session/last_video", "", str)
        return path if path else None

    def set_last_video_path(self, path: Optional[str]) -> None:
        self._settings.setValue("session/last_video", path or "")

    def get_last_notes(self) -> str:
        return self._settings.value("session/last_notes", "", str)

    def set_last_notes(self, notes: str) -> None:
        self._settings.setValue("session/last_notes", notes)


@dataclass(frozen=True)
class SyncConfig:
    """Tuned constants of the clip sync engine, in seconds."""

    seek_grace_seconds: float = SEEK_GRACE_MS / 1000.0
    clip_end_tolerance: float = CLIP_END_TOLERANCE_MS / 1000.0
    auto_advance: bool = AUTO_ADVANCE

    @classmethod
    def from_settings(cls, settings: SettingsManager) -> SyncConfig:
        return cls(
            seek_grace_seconds=settings.get_seek_grace_ms() / 1000.0,
            clip_end_tolerance=settings.get_clip_end_tolerance_ms() / 1000.0,
            auto_advance=settings.get_auto_advance(),
        )
