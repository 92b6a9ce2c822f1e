"""
Session manager - owns the current round and serializes every command.

The UI (or any driver) talks to the engine only through this class:
- commands return a CommandResult with the new session snapshot or a
  structured failure, never raise for rejected commands
- a 1 Hz timer calls tick(); user actions call the other commands
- observers subscribe to SessionEvents
- the finished result is handed to the history recorder exactly once
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from pydantic import BaseModel

from src.engine import (
    EngineError, GameConfig, InvalidOperation, PersistenceError, Session,
    SessionPhase, ValidationError, WordEntry,
)
from src.engine import session as machine
from src.engine.factory import create_session
from src.history import (
    HandoffRegistry, HistoryRecorder, JsonHistoryStore, build_snapshot,
)
from src.ranking import compute_standings, winners

from .config import EngineConfig
from .events import SessionEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[SessionEvent], None]


class CommandResult(BaseModel):
    """Outcome of a manager command."""
    ok: bool
    session: Session | None = None
    error: str | None = None
    error_code: str | None = None
    # Set when the command finished the session but the history save failed
    persistence_error: str | None = None

    @classmethod
    def success(
        cls, session: Session | None, persistence_error: str | None = None
    ) -> "CommandResult":
        return cls(ok=True, session=session, persistence_error=persistence_error)

    @classmethod
    def failure(cls, error: EngineError, session: Session | None) -> "CommandResult":
        return cls(ok=False, session=session, error=str(error), error_code=error.code)


class SessionManager:
    """
    Owns at most one session at a time.

    All commands run under one re-entrant lock, so a timer thread and
    user input never interleave mutations. Observers may call back into
    the manager from their callback.
    """

    def __init__(
        self,
        recorder: HistoryRecorder | None = None,
        config: EngineConfig | None = None,
        registry: HandoffRegistry | None = None,
    ):
        self.config = config if config is not None else EngineConfig()
        self.recorder = (
            recorder if recorder is not None
            else JsonHistoryStore(self.config.get_history_path())
        )
        self.registry = (
            registry if registry is not None
            else HandoffRegistry(
                max_entries=self.config.handoff_max_entries,
                ttl_seconds=self.config.handoff_ttl_seconds,
            )
        )
        self._session: Session | None = None
        self._lock = threading.RLock()
        self._subscribers: list[Subscriber] = []

    @property
    def session(self) -> Session | None:
        return self._session

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register an observer. Returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _emit(self, event: SessionEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber failed on {event.event_type.value} event")

    def _publish_changes(self, before: Session, after: Session) -> None:
        """Emit events describing what a command changed."""
        for p_index, (old_p, new_p) in enumerate(zip(before.participants, after.participants)):
            for w_index, (old_w, new_w) in enumerate(zip(old_p.words, new_p.words)):
                if not old_w.is_resolved and new_w.is_resolved:
                    self._emit(SessionEvent.word_resolved(
                        after.id, p_index, w_index, new_w.result, new_w.points_earned,
                    ))

        if not before.is_guessing and after.is_guessing:
            self._emit(SessionEvent.guess_started(
                after.id, after.active_participant_index,
                after.guess_word_index, after.guess_time_remaining,
            ))
        elif before.is_guessing and not after.is_guessing:
            self._emit(SessionEvent.guess_ended(
                after.id, before.active_participant_index, before.guess_word_index,
            ))

        if before.state != after.state:
            self._emit(SessionEvent.state_changed(after.id, before.state, after.state))

        if after.state == SessionPhase.WAITING_NEXT_TURN and before.state != after.state:
            index = after.active_participant_index
            self._emit(SessionEvent.turn_ended(
                after.id, index, after.participants[index].name,
            ))

        if after.is_finished and not before.is_finished:
            top = winners(compute_standings(after.participants))
            self._emit(SessionEvent.session_finished(
                after.id, [standing.participant.name for standing in top],
            ))

    # ------------------------------------------------------------------
    # History hand-off
    # ------------------------------------------------------------------

    def _hand_off(self, session: Session) -> str | None:
        """
        Give the finished session's snapshot to the recorder once.

        Returns:
            Error message if the recorder failed, else None.
        """
        if self.registry.is_handed_off(session.id):
            logger.debug(f"Session {session.id} already handed off, skipping")
            return None

        self.registry.mark_handed_off(session.id)
        snapshot = build_snapshot(session)
        try:
            self.recorder.record(snapshot)
        except Exception as e:
            self.registry.unmark(session.id)
            error = PersistenceError(f"Failed to save session {session.id}: {e}", session.id)
            logger.exception(str(error))
            self._emit(SessionEvent.history_failed(session.id, str(error)))
            return str(error)

        logger.info(f"Handed off result of session {session.id}")
        self._emit(SessionEvent.history_saved(session.id))
        return None

    def notify_finished(self) -> CommandResult:
        """
        Hand off the current session's result if it is finished.

        Safe to call any number of times; the recorder sees each session
        once unless a previous attempt failed.
        """
        with self._lock:
            session = self._session
            if session is None or not session.is_finished:
                return CommandResult.failure(
                    InvalidOperation("No finished session to hand off"), session,
                )
            return CommandResult.success(session, self._hand_off(session))

    def retry_handoff(self) -> CommandResult:
        """Try again after a failed history save."""
        return self.notify_finished()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(
        self,
        config: GameConfig,
        word_pools: list[list[WordEntry]],
        session_id: str | None = None,
    ) -> CommandResult:
        """Create a new session, replacing any previous one."""
        with self._lock:
            try:
                session = create_session(config, word_pools, session_id=session_id)
            except ValidationError as e:
                logger.warning(f"Cannot start session: {e}")
                return CommandResult.failure(e, self._session)

            self._session = session
            self._emit(SessionEvent.session_started(
                session.id,
                session.mode.value,
                [p.name for p in session.participants],
            ))
            return CommandResult.success(session)

    def reset(self) -> None:
        """Discard the current session."""
        with self._lock:
            if self._session is not None:
                logger.info(f"Discarding session {self._session.id}")
            self._session = None

    def _apply(self, operation: Callable[..., Session], *args) -> CommandResult:
        with self._lock:
            before = self._session
            if before is None:
                return CommandResult.failure(InvalidOperation("No active session"), None)

            try:
                after = operation(before, *args)
            except InvalidOperation as e:
                logger.warning(f"Rejected {operation.__name__} on session {before.id}: {e}")
                return CommandResult.failure(e, before)

            self._session = after
            if after is before:
                return CommandResult.success(after)

            self._publish_changes(before, after)
            persistence_error = None
            if after.is_finished and not before.is_finished:
                persistence_error = self._hand_off(after)
            return CommandResult.success(after, persistence_error)

    def tick(self) -> CommandResult:
        return self._apply(machine.tick)

    def start_guess(self, participant_index: int, word_index: int) -> CommandResult:
        return self._apply(
            machine.start_guess, participant_index, word_index, self.config.guess_duration,
        )

    def end_guess(self) -> CommandResult:
        return self._apply(machine.end_guess)

    def reveal_letter(self, participant_index: int, word_index: int, letter_index: int) -> CommandResult:
        return self._apply(machine.reveal_letter, participant_index, word_index, letter_index)

    def submit_guess(self, participant_index: int, word_index: int, is_correct: bool) -> CommandResult:
        return self._apply(machine.submit_guess, participant_index, word_index, is_correct)

    def skip_word(self, participant_index: int, word_index: int) -> CommandResult:
        return self._apply(machine.skip_word, participant_index, word_index)

    def pause(self) -> CommandResult:
        return self._apply(machine.pause)

    def resume(self) -> CommandResult:
        return self._apply(machine.resume)

    def next_participant(self) -> CommandResult:
        return self._apply(machine.next_participant)

    def end_session(self) -> CommandResult:
        return self._apply(machine.end_session)
