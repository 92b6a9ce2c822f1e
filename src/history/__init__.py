"""Result snapshots and their hand-off to history storage."""

from .snapshot import WordResultRecord, ParticipantResult, GameResultSnapshot, build_snapshot
from .registry import HandoffRegistry, DEFAULT_MAX_ENTRIES, DEFAULT_TTL_SECONDS
from .store import HistoryRecorder, JsonHistoryStore, MemoryHistoryStore, get_history_dir

__all__ = [
    "WordResultRecord", "ParticipantResult", "GameResultSnapshot", "build_snapshot",
    "HandoffRegistry", "DEFAULT_MAX_ENTRIES", "DEFAULT_TTL_SECONDS",
    "HistoryRecorder", "JsonHistoryStore", "MemoryHistoryStore", "get_history_dir",
]
