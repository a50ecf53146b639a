"""Clip sync controllers — 재생 동기화 책임 분리.

ClipSyncEngine(QObject)이 UI에 시그널/슬롯을 노출하고,
Controller들은 SyncContext를 통해 공유 상태에 접근한다.
"""

from src.ui.controllers.clip_sync_engine import ClipSyncEngine
from src.ui.controllers.sync_context import ExternalPlayer, SyncContext

__all__ = ["ClipSyncEngine", "ExternalPlayer", "SyncContext"]
