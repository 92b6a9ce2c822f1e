from .models import (
    GameMode, SessionPhase, ParticipantKind, LetterStatus, WordResult,
    SinglePlayerSetup, MultiPlayerSetup, TeamMember, TeamSetup, TeamModeSetup,
    GameConfig, WordEntry, CategoryInventory, Letter, Word, Participant, Session,
    WORD_LENGTHS, WORDS_PER_LENGTH, WORDS_PER_PARTICIPANT, GUESSES_PER_WORD,
    POINTS_PER_LETTER, DEFAULT_GAME_DURATION, DEFAULT_GUESS_DURATION,
)
from .errors import EngineError, ValidationError, InvalidOperation, PersistenceError
from .words import base_value, word_value, time_out_word
from .clock import remaining_seconds, is_expired
from .factory import create_session, start_session, validate_word_pool
from .session import (
    evaluate_completion, tick, start_guess, end_guess, reveal_letter, submit_guess, skip_word,
    pause, resume, next_participant, end_session,
)

__all__ = [
    "GameMode", "SessionPhase", "ParticipantKind", "LetterStatus", "WordResult",
    "SinglePlayerSetup", "MultiPlayerSetup", "TeamMember", "TeamSetup", "TeamModeSetup",
    "GameConfig", "WordEntry", "CategoryInventory", "Letter", "Word", "Participant", "Session",
    "WORD_LENGTHS", "WORDS_PER_LENGTH", "WORDS_PER_PARTICIPANT", "GUESSES_PER_WORD",
    "POINTS_PER_LETTER", "DEFAULT_GAME_DURATION", "DEFAULT_GUESS_DURATION",
    "EngineError", "ValidationError", "InvalidOperation", "PersistenceError",
    "base_value", "word_value", "time_out_word",
    "remaining_seconds", "is_expired",
    "create_session", "start_session", "validate_word_pool",
    "evaluate_completion", "tick", "start_guess", "end_guess", "reveal_letter", "submit_guess", "skip_word",
    "pause", "resume", "next_participant", "end_session",
]
