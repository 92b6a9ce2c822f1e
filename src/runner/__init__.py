from .config import EngineConfig
from .events import EventType, SessionEvent
from .manager import CommandResult, SessionManager

__all__ = [
    "EngineConfig",
    "EventType", "SessionEvent",
    "CommandResult", "SessionManager",
]
