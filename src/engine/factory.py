"""Builds a new session from a confirmed setup and its word pools."""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from datetime import datetime

from .errors import InvalidOperation, ValidationError
from .models import (
    GameConfig, GameMode, MultiPlayerSetup, Participant, Session, SessionPhase,
    SinglePlayerSetup, TeamModeSetup, Word, WordEntry,
    WORD_LENGTHS, WORDS_PER_LENGTH, WORDS_PER_PARTICIPANT,
)

logger = logging.getLogger(__name__)

_SETUP_FOR_MODE = {
    GameMode.SINGLE: SinglePlayerSetup,
    GameMode.MULTI: MultiPlayerSetup,
    GameMode.TEAM: TeamModeSetup,
}


def validate_word_pool(pool: list[WordEntry], participant_index: int) -> list[str]:
    """
    Check one participant's pool: 14 words, at least 2 per length 4-10.

    Returns:
        List of error messages, empty if the pool is usable.
    """
    errors: list[str] = []
    if len(pool) != WORDS_PER_PARTICIPANT:
        errors.append(
            f"Pool {participant_index} has {len(pool)} words, "
            f"need exactly {WORDS_PER_PARTICIPANT}"
        )

    counts = Counter(entry.letter_count for entry in pool)
    short = [length for length in WORD_LENGTHS if counts[length] < WORDS_PER_LENGTH]
    if short:
        lengths = ", ".join(str(length) for length in short)
        errors.append(
            f"Pool {participant_index} has fewer than {WORDS_PER_LENGTH} words "
            f"of length {lengths}"
        )
    return errors


def build_participants(config: GameConfig, word_pools: list[list[WordEntry]]) -> list[Participant]:
    """Create one participant per setup entry, the first one active."""
    kind = config.participant_kind()
    return [
        Participant(
            name=name,
            kind=kind,
            words=[Word.from_entry(entry) for entry in pool],
            is_active=index == 0,
            total_seconds=config.game_duration,
        )
        for index, (name, pool) in enumerate(zip(config.participant_names(), word_pools))
    ]


def start_session(session: Session, now: datetime | None = None) -> Session:
    """Move a session out of setup and start the first turn."""
    if session.state != SessionPhase.SETUP:
        raise InvalidOperation(f"Session {session.id} already started")

    new_session = session.model_copy(deep=True)
    new_session.state = SessionPhase.PLAYING
    new_session.started_at = now or datetime.utcnow()
    return new_session


def create_session(
    config: GameConfig,
    word_pools: list[list[WordEntry]],
    session_id: str | None = None,
    now: datetime | None = None,
) -> Session:
    """
    Create a new session ready to play.

    Raises:
        ValidationError: if the number of pools does not match the
            participants or a pool does not have the required shape.
    """
    expected_setup = _SETUP_FOR_MODE[config.mode]
    if not isinstance(config.setup, expected_setup):
        raise ValidationError(
            f"Mode {config.mode.value} needs a {expected_setup.__name__}, "
            f"got {type(config.setup).__name__}"
        )

    names = config.participant_names()
    if not names:
        raise ValidationError("A session needs at least one participant")
    if len(word_pools) != len(names):
        raise ValidationError(
            f"Got {len(word_pools)} word pools for {len(names)} participants"
        )

    errors: list[str] = []
    for index, pool in enumerate(word_pools):
        errors.extend(validate_word_pool(pool, index))
    if errors:
        raise ValidationError("Invalid word pools: " + "; ".join(errors), errors)

    session = Session(
        id=session_id or str(uuid.uuid4()),
        category_id=config.category_id,
        category_name=config.category_name,
        mode=config.mode,
        participants=build_participants(config, word_pools),
    )
    session = start_session(session, now)

    logger.info(
        f"Created {config.mode.value} session {session.id} for category "
        f"{config.category_id} with {len(names)} participant(s)"
    )
    return session
