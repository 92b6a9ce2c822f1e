"""Word requirements and mode eligibility for a category."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.engine import CategoryInventory, GameMode, WORD_LENGTHS
from src.engine.models import WORDS_PER_LENGTH, WORDS_PER_PARTICIPANT

MIN_PARTICIPANTS = {
    GameMode.SINGLE: 1,
    GameMode.MULTI: 2,
    GameMode.TEAM: 2,
}

MAX_PARTICIPANTS = {
    GameMode.SINGLE: 1,
    GameMode.MULTI: 6,
    GameMode.TEAM: 4,
}


class ModeValidation(BaseModel):
    """Outcome of checking a category against a mode and participant count."""
    valid: bool
    required_words: int
    required_per_length: int
    reason: str | None = None
    insufficient_lengths: list[int] = Field(default_factory=list)


class CategoryValidation(BaseModel):
    """Summary of what a category supports."""
    is_valid: bool
    total_words: int
    words_by_length: dict[int, int]
    max_players_single: int
    max_players_multi: int
    max_teams: int
    playable_modes: list[GameMode]
    insufficient_lengths: list[int] = Field(default_factory=list)
    message: str


def required_words(mode: GameMode, participant_count: int = 1) -> int:
    """Total words a category needs for the mode."""
    if mode == GameMode.SINGLE:
        return WORDS_PER_PARTICIPANT
    return participant_count * WORDS_PER_PARTICIPANT


def required_words_per_length(mode: GameMode, participant_count: int = 1) -> int:
    """Words each letter-length bucket (4-10) needs for the mode."""
    if mode == GameMode.SINGLE:
        return WORDS_PER_LENGTH
    return participant_count * WORDS_PER_LENGTH


def insufficient_lengths(
    inventory: CategoryInventory,
    required_per_length: int = WORDS_PER_LENGTH,
) -> list[int]:
    """Letter lengths whose bucket holds fewer than ``required_per_length`` words."""
    return [
        length for length in WORD_LENGTHS
        if inventory.count_for(length) < required_per_length
    ]


def validate_for_mode(
    inventory: CategoryInventory,
    mode: GameMode,
    participant_count: int = 1,
) -> ModeValidation:
    """
    Check whether a category can supply words for a mode.

    Fails on the total first, then on the letter-length buckets. Exactly
    the minimum counts as enough.
    """
    total_needed = required_words(mode, participant_count)
    per_length = required_words_per_length(mode, participant_count)

    if inventory.total_words < total_needed:
        return ModeValidation(
            valid=False,
            required_words=total_needed,
            required_per_length=per_length,
            reason=(
                f"Not enough words: {total_needed} required "
                f"(available: {inventory.total_words})"
            ),
        )

    short = insufficient_lengths(inventory, per_length)
    if short:
        buckets = ", ".join(
            f"{length} letters ({inventory.count_for(length)})" for length in short
        )
        return ModeValidation(
            valid=False,
            required_words=total_needed,
            required_per_length=per_length,
            reason=f"Not enough words for {buckets}: at least {per_length} needed per length",
            insufficient_lengths=short,
        )

    return ModeValidation(
        valid=True,
        required_words=total_needed,
        required_per_length=per_length,
    )


def max_participants(inventory: CategoryInventory, mode: GameMode) -> int:
    """Largest number of participants the category can serve in a mode."""
    if mode == GameMode.SINGLE:
        return 1 if validate_for_mode(inventory, mode, 1).valid else 0

    by_length = inventory.min_bucket() // WORDS_PER_LENGTH
    return max(0, min(MAX_PARTICIPANTS[mode], by_length))


def playable_modes(inventory: CategoryInventory) -> list[GameMode]:
    """Modes the category supports with at least their minimum participants."""
    return [
        mode for mode in GameMode
        if max_participants(inventory, mode) >= MIN_PARTICIPANTS[mode]
    ]


def is_playable(inventory: CategoryInventory, mode: GameMode) -> bool:
    return mode in playable_modes(inventory)


def validate_category(inventory: CategoryInventory) -> CategoryValidation:
    """Summarise what a category supports, for category listings."""
    single = validate_for_mode(inventory, GameMode.SINGLE, 1)
    max_multi = max_participants(inventory, GameMode.MULTI)
    max_teams = max_participants(inventory, GameMode.TEAM)

    if not single.valid:
        message = f"Unplayable: {single.reason}"
    elif max_multi < MIN_PARTICIPANTS[GameMode.MULTI]:
        message = f"Playable in single player mode only ({inventory.total_words} words)"
    else:
        message = (
            f"Playable with up to {max_multi} players or {max_teams} teams "
            f"({inventory.total_words} words)"
        )

    return CategoryValidation(
        is_valid=single.valid,
        total_words=inventory.total_words,
        words_by_length={length: inventory.count_for(length) for length in WORD_LENGTHS},
        max_players_single=1 if single.valid else 0,
        max_players_multi=max_multi,
        max_teams=max_teams,
        playable_modes=playable_modes(inventory),
        insufficient_lengths=insufficient_lengths(inventory),
        message=message,
    )
