"""Participant and team setup checks run before a session is created."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.engine import (
    CategoryInventory, GameConfig, GameMode, MultiPlayerSetup,
    SinglePlayerSetup, TeamModeSetup, TeamSetup, ValidationError,
)

from .validation import MAX_PARTICIPANTS, MIN_PARTICIPANTS, required_words, validate_for_mode

MIN_MEMBERS_PER_TEAM = 2
MAX_MEMBERS_PER_TEAM = 4


class SetupValidation(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    required_words: int
    available_words: int


def is_valid_name(name: str | None) -> bool:
    return bool(name and name.strip())


def _has_duplicates(names: list[str]) -> bool:
    normalized = [name.strip().lower() for name in names]
    return len(set(normalized)) != len(normalized)


def _count_errors(mode: GameMode, count: int, label: str) -> list[str]:
    errors = []
    if count < MIN_PARTICIPANTS[mode]:
        errors.append(f"At least {MIN_PARTICIPANTS[mode]} {label} required")
    if count > MAX_PARTICIPANTS[mode]:
        errors.append(f"At most {MAX_PARTICIPANTS[mode]} {label} allowed")
    return errors


def validate_team(team: TeamSetup, team_index: int) -> list[str]:
    """Check one team's name, look and members."""
    label = f"Team {team_index + 1}"
    errors: list[str] = []

    if not is_valid_name(team.name):
        errors.append(f"{label}: team name cannot be empty")
    if not team.emoji.strip():
        errors.append(f"{label}: an emoji must be chosen")
    if not team.color.strip():
        errors.append(f"{label}: a color must be chosen")

    member_count = len(team.members)
    if member_count < MIN_MEMBERS_PER_TEAM:
        errors.append(f"{label}: at least {MIN_MEMBERS_PER_TEAM} members required")
    if member_count > MAX_MEMBERS_PER_TEAM:
        errors.append(f"{label}: at most {MAX_MEMBERS_PER_TEAM} members allowed")

    member_names = [member.name for member in team.members]
    if not all(is_valid_name(name) for name in member_names):
        errors.append(f"{label}: all member names must be filled in")
    elif _has_duplicates(member_names):
        errors.append(f"{label}: member names must be unique")

    return errors


def validate_setup(config: GameConfig, inventory: CategoryInventory) -> SetupValidation:
    """
    Validate the participant setup of a config against a category.

    Collects every problem instead of stopping at the first one so the
    caller can show them all.
    """
    errors: list[str] = []
    setup = config.setup
    mode = config.mode

    if mode == GameMode.SINGLE and isinstance(setup, SinglePlayerSetup):
        count = 1
        if not is_valid_name(setup.player_name):
            errors.append("Player name cannot be empty")
    elif mode == GameMode.MULTI and isinstance(setup, MultiPlayerSetup):
        count = len(setup.players)
        errors.extend(_count_errors(mode, count, "players"))
        if not all(is_valid_name(name) for name in setup.players):
            errors.append("All player names must be filled in")
        elif _has_duplicates(setup.players):
            errors.append("Player names must be unique")
    elif mode == GameMode.TEAM and isinstance(setup, TeamModeSetup):
        count = len(setup.teams)
        errors.extend(_count_errors(mode, count, "teams"))
        for index, team in enumerate(setup.teams):
            errors.extend(validate_team(team, index))
        if _has_duplicates([team.name for team in setup.teams]):
            errors.append("Team names must be unique")
    else:
        return SetupValidation(
            is_valid=False,
            errors=[f"Setup does not match mode {mode.value}"],
            required_words=0,
            available_words=inventory.total_words,
        )

    words = validate_for_mode(inventory, mode, count)
    if not words.valid:
        errors.append(words.reason or "Not enough words")

    return SetupValidation(
        is_valid=not errors,
        errors=errors,
        required_words=required_words(mode, count),
        available_words=inventory.total_words,
    )


def ensure_valid_setup(config: GameConfig, inventory: CategoryInventory) -> SetupValidation:
    """Like validate_setup, but raises ValidationError when invalid."""
    result = validate_setup(config, inventory)
    if not result.is_valid:
        raise ValidationError("Invalid setup: " + "; ".join(result.errors), result.errors)
    return result
