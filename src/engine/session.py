"""Session state machine: ticks, guess mode, word commands, turn rotation."""

from __future__ import annotations

import logging
from datetime import datetime

from . import clock, words
from .errors import InvalidOperation
from .models import (
    DEFAULT_GUESS_DURATION, GameMode, Participant, Session, SessionPhase, Word, WordResult,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Completion policy
# ============================================================================

def _advance_word_index(participant: Participant) -> None:
    """Point current_word_index at the next open word, if any."""
    for index, word in enumerate(participant.words):
        if not word.is_resolved:
            participant.current_word_index = index
            return
    participant.current_word_index = len(participant.words)


def _clear_guess(session: Session) -> None:
    session.is_guessing = False
    session.guess_word_index = None
    session.guess_time_remaining = 0


def _finish(session: Session, now: datetime | None = None) -> None:
    _clear_guess(session)
    session.state = SessionPhase.FINISHED
    session.is_paused = False
    session.finished_at = now or datetime.utcnow()
    for participant in session.participants:
        participant.is_active = False


def evaluate_completion(session: Session, now: datetime | None = None) -> Session:
    """
    Apply the completion and turn-rotation policy to a session.

    Called after every mutating operation. Mutates and returns the
    session it is given, so callers pass their own working copy.

    - every participant settled -> finished
    - active participant settled, multi/team -> waiting_next_turn
    - active participant settled, single -> finished
    """
    if session.state in (SessionPhase.SETUP, SessionPhase.FINISHED):
        return session

    active = session.active_participant
    if session.all_resolved():
        _finish(session, now)
        logger.info(f"Session {session.id} finished")
    elif active.is_complete:
        if session.mode in (GameMode.MULTI, GameMode.TEAM):
            active.is_active = False
            _clear_guess(session)
            session.state = SessionPhase.WAITING_NEXT_TURN
            logger.info(
                f"Session {session.id}: turn of {active.name!r} over, "
                f"waiting for next participant"
            )
        else:
            _finish(session, now)
            logger.info(f"Session {session.id} finished")
    return session


# ============================================================================
# Guards
# ============================================================================

def _require_playing(session: Session) -> None:
    if session.state == SessionPhase.FINISHED:
        raise InvalidOperation(f"Session {session.id} is finished")
    if session.state != SessionPhase.PLAYING or session.is_paused:
        raise InvalidOperation(
            f"Session {session.id} is {session.state.value}, not playing"
        )


def _check_target(session: Session, participant_index: int, word_index: int) -> None:
    if participant_index < 0 or participant_index >= len(session.participants):
        raise InvalidOperation(f"Unknown participant index {participant_index}")
    if participant_index != session.active_participant_index:
        raise InvalidOperation(
            f"Participant {participant_index} is not the active participant"
        )
    participant = session.participants[participant_index]
    if word_index < 0 or word_index >= len(participant.words):
        raise InvalidOperation(
            f"Unknown word index {word_index} for participant {participant_index}"
        )


def _check_guess_target(session: Session, word_index: int) -> None:
    """While guessing, only the word under guess can be acted on."""
    if session.is_guessing and word_index != session.guess_word_index:
        raise InvalidOperation(
            f"Guess in progress on word {session.guess_word_index}, not {word_index}"
        )


def _record_guess(participant: Participant, word_index: int, new_word: Word, delta: int) -> None:
    """Store a guessed word on a participant, updating score and counters in place."""
    participant.words[word_index] = new_word
    participant.score += delta
    if new_word.result == WordResult.FOUND:
        participant.words_found += 1
    elif new_word.result == WordResult.SKIPPED:
        participant.words_skipped += 1
    if new_word.is_resolved:
        _advance_word_index(participant)


# ============================================================================
# Operations
# ============================================================================

def tick(session: Session, now: datetime | None = None) -> Session:
    """
    Advance the running countdown by one second.

    Ignored while paused or when no turn is running. In guess mode the
    guess countdown runs instead of the participant's clock; when it
    runs out the guess counts as wrong. When the participant's clock
    runs out, every open word of that participant times out.
    """
    if session.is_paused or session.state != SessionPhase.PLAYING:
        return session

    new_session = session.model_copy(deep=True)
    index = new_session.active_participant_index

    if new_session.is_guessing:
        new_session.guess_time_remaining = max(0, new_session.guess_time_remaining - 1)
        if new_session.guess_time_remaining == 0:
            participant = new_session.participants[index]
            word_index = new_session.guess_word_index
            new_word, delta = words.submit_guess(participant.words[word_index], False)
            _record_guess(participant, word_index, new_word, delta)
            _clear_guess(new_session)
            logger.info(f"Session {session.id}: guess time up for {participant.name!r}")
        return evaluate_completion(new_session, now)

    participant, expired = clock.advance(new_session.participants[index])
    new_session.elapsed_seconds += 1

    if expired:
        participant.words = [words.time_out_word(word) for word in participant.words]
        _advance_word_index(participant)
        logger.info(
            f"Session {session.id}: time up for {participant.name!r} "
            f"after {participant.elapsed_seconds}s"
        )

    new_session.participants[index] = participant
    return evaluate_completion(new_session, now)


def start_guess(
    session: Session,
    participant_index: int,
    word_index: int,
    duration: int = DEFAULT_GUESS_DURATION,
) -> Session:
    """
    Enter guess mode on one of the active participant's words.

    The participant's clock stops and a guess countdown of ``duration``
    seconds starts. Guess mode ends with submit_guess, skip_word,
    end_guess or the countdown running out.
    """
    _require_playing(session)
    _check_target(session, participant_index, word_index)
    if session.is_guessing:
        raise InvalidOperation(f"Already guessing word {session.guess_word_index}")
    if duration <= 0:
        raise InvalidOperation(f"Guess duration must be positive, got {duration}")

    word = session.participants[participant_index].words[word_index]
    if word.is_resolved:
        raise InvalidOperation(f"Word {word.id} is already {word.result.value}")

    new_session = session.model_copy(deep=True)
    new_session.is_guessing = True
    new_session.guess_word_index = word_index
    new_session.guess_time_remaining = duration
    return new_session


def end_guess(session: Session) -> Session:
    """Leave guess mode without spending an attempt."""
    if not session.is_guessing:
        raise InvalidOperation(f"Session {session.id} is not in guess mode")

    new_session = session.model_copy(deep=True)
    _clear_guess(new_session)
    return new_session


def reveal_letter(
    session: Session,
    participant_index: int,
    word_index: int,
    letter_index: int,
    now: datetime | None = None,
) -> Session:
    """Reveal a letter of one of the active participant's words."""
    _require_playing(session)
    _check_target(session, participant_index, word_index)
    if session.is_guessing:
        raise InvalidOperation("Cannot reveal letters in guess mode")

    participant = session.participants[participant_index]
    new_word = words.reveal_letter(participant.words[word_index], letter_index)

    new_session = session.model_copy(deep=True)
    new_participant = new_session.participants[participant_index]
    new_participant.words[word_index] = new_word
    new_participant.letters_revealed_total += 1
    if new_word.result == WordResult.SKIPPED:
        new_participant.words_skipped += 1
        _advance_word_index(new_participant)

    return evaluate_completion(new_session, now)


def submit_guess(
    session: Session,
    participant_index: int,
    word_index: int,
    is_correct: bool,
    now: datetime | None = None,
) -> Session:
    """Record a guess on one of the active participant's words. Ends guess mode."""
    _require_playing(session)
    _check_target(session, participant_index, word_index)
    _check_guess_target(session, word_index)

    participant = session.participants[participant_index]
    new_word, delta = words.submit_guess(participant.words[word_index], is_correct)

    new_session = session.model_copy(deep=True)
    _record_guess(new_session.participants[participant_index], word_index, new_word, delta)
    _clear_guess(new_session)

    return evaluate_completion(new_session, now)


def skip_word(
    session: Session,
    participant_index: int,
    word_index: int,
    now: datetime | None = None,
) -> Session:
    """Skip one of the active participant's words. Ends guess mode."""
    _require_playing(session)
    _check_target(session, participant_index, word_index)
    _check_guess_target(session, word_index)

    participant = session.participants[participant_index]
    new_word = words.skip_word(participant.words[word_index])

    new_session = session.model_copy(deep=True)
    new_participant = new_session.participants[participant_index]
    new_participant.words[word_index] = new_word
    new_participant.words_skipped += 1
    _advance_word_index(new_participant)
    _clear_guess(new_session)

    return evaluate_completion(new_session, now)


def pause(session: Session) -> Session:
    if session.state != SessionPhase.PLAYING:
        raise InvalidOperation(f"Cannot pause session in state {session.state.value}")

    new_session = session.model_copy(deep=True)
    new_session.is_paused = True
    new_session.state = SessionPhase.PAUSED
    return new_session


def resume(session: Session) -> Session:
    if session.state != SessionPhase.PAUSED:
        raise InvalidOperation(f"Cannot resume session in state {session.state.value}")

    new_session = session.model_copy(deep=True)
    new_session.is_paused = False
    new_session.state = SessionPhase.PLAYING
    return new_session


def next_participant(session: Session) -> Session:
    """Hand the turn to the next participant in order."""
    if session.state != SessionPhase.WAITING_NEXT_TURN:
        raise InvalidOperation(
            f"No turn to hand over, session is {session.state.value}"
        )

    new_session = session.model_copy(deep=True)
    next_index = (session.active_participant_index + 1) % len(session.participants)
    new_session.active_participant_index = next_index
    for index, participant in enumerate(new_session.participants):
        participant.is_active = index == next_index
    new_session.state = SessionPhase.PLAYING

    logger.info(
        f"Session {session.id}: turn starts for "
        f"{new_session.participants[next_index].name!r}"
    )
    return new_session


def end_session(session: Session, now: datetime | None = None) -> Session:
    """Stop the round early. Open words of every participant time out."""
    if session.state in (SessionPhase.SETUP, SessionPhase.FINISHED):
        raise InvalidOperation(f"Cannot end session in state {session.state.value}")

    new_session = session.model_copy(deep=True)
    for participant in new_session.participants:
        participant.words = [words.time_out_word(word) for word in participant.words]
        _advance_word_index(participant)
    _finish(new_session, now)

    logger.info(f"Session {session.id} ended early")
    return new_session
