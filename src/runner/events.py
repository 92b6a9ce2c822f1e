"""Events published to session observers."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from src.engine import SessionPhase, WordResult


class EventType(str, Enum):
    """Types of session events."""

    SESSION_STARTED = "session_started"
    STATE_CHANGED = "state_changed"
    GUESS_STARTED = "guess_started"
    GUESS_ENDED = "guess_ended"
    WORD_RESOLVED = "word_resolved"
    TURN_ENDED = "turn_ended"
    SESSION_FINISHED = "session_finished"
    HISTORY_SAVED = "history_saved"
    HISTORY_FAILED = "history_failed"


class SessionEvent(BaseModel):
    """Wrapper for all session events."""

    event_type: EventType
    session_id: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    data: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def session_started(cls, session_id: str, mode: str, participants: list[str]) -> "SessionEvent":
        return cls(
            event_type=EventType.SESSION_STARTED,
            session_id=session_id,
            data={"mode": mode, "participants": participants},
        )

    @classmethod
    def state_changed(
        cls, session_id: str, old: SessionPhase, new: SessionPhase
    ) -> "SessionEvent":
        return cls(
            event_type=EventType.STATE_CHANGED,
            session_id=session_id,
            data={"from": old.value, "to": new.value},
        )

    @classmethod
    def guess_started(
        cls, session_id: str, participant_index: int, word_index: int, seconds: int
    ) -> "SessionEvent":
        return cls(
            event_type=EventType.GUESS_STARTED,
            session_id=session_id,
            data={
                "participant_index": participant_index,
                "word_index": word_index,
                "seconds": seconds,
            },
        )

    @classmethod
    def guess_ended(cls, session_id: str, participant_index: int, word_index: int) -> "SessionEvent":
        return cls(
            event_type=EventType.GUESS_ENDED,
            session_id=session_id,
            data={"participant_index": participant_index, "word_index": word_index},
        )

    @classmethod
    def word_resolved(
        cls,
        session_id: str,
        participant_index: int,
        word_index: int,
        result: WordResult,
        points_earned: int,
    ) -> "SessionEvent":
        return cls(
            event_type=EventType.WORD_RESOLVED,
            session_id=session_id,
            data={
                "participant_index": participant_index,
                "word_index": word_index,
                "result": result.value,
                "points_earned": points_earned,
            },
        )

    @classmethod
    def turn_ended(cls, session_id: str, participant_index: int, name: str) -> "SessionEvent":
        return cls(
            event_type=EventType.TURN_ENDED,
            session_id=session_id,
            data={"participant_index": participant_index, "name": name},
        )

    @classmethod
    def session_finished(cls, session_id: str, winners: list[str]) -> "SessionEvent":
        return cls(
            event_type=EventType.SESSION_FINISHED,
            session_id=session_id,
            data={"winners": winners},
        )

    @classmethod
    def history_saved(cls, session_id: str) -> "SessionEvent":
        return cls(event_type=EventType.HISTORY_SAVED, session_id=session_id)

    @classmethod
    def history_failed(cls, session_id: str, error: str) -> "SessionEvent":
        return cls(
            event_type=EventType.HISTORY_FAILED,
            session_id=session_id,
            data={"error": error},
        )
