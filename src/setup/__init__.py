"""Setup checks and word pool selection."""

from .validation import (
    ModeValidation, CategoryValidation,
    required_words, required_words_per_length, insufficient_lengths,
    validate_for_mode, max_participants, playable_modes, is_playable,
    validate_category, MIN_PARTICIPANTS, MAX_PARTICIPANTS,
)
from .participants import SetupValidation, validate_setup, validate_team, ensure_valid_setup
from .selection import load_category, select_word_pools

__all__ = [
    "ModeValidation", "CategoryValidation",
    "required_words", "required_words_per_length", "insufficient_lengths",
    "validate_for_mode", "max_participants", "playable_modes", "is_playable",
    "validate_category", "MIN_PARTICIPANTS", "MAX_PARTICIPANTS",
    "SetupValidation", "validate_setup", "validate_team", "ensure_valid_setup",
    "load_category", "select_word_pools",
]
