"""Shared fixtures for the engine tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import (
    GameConfig, GameMode, MultiPlayerSetup, SinglePlayerSetup,
    TeamMember, TeamModeSetup, TeamSetup, WordEntry, WORD_LENGTHS,
    create_session,
)

FIXED_NOW = datetime(2026, 1, 1, 12, 0, 0)


def make_pool(start_id: int = 1) -> list[WordEntry]:
    """14 words, 2 per length 4-10, ordered by length."""
    entries = []
    next_id = start_id
    for length in WORD_LENGTHS:
        for base in ("ABCDEFGHIJ", "KLMNOPQRST"):
            entries.append(WordEntry(id=next_id, text=base[:length], hint=f"{length} letters"))
            next_id += 1
    return entries


def make_pools(count: int) -> list[list[WordEntry]]:
    return [make_pool(start_id=1 + i * 100) for i in range(count)]


def make_team(name: str) -> TeamSetup:
    return TeamSetup(
        name=name,
        emoji="*",
        color="red",
        members=[TeamMember(name=f"{name} one", order=1), TeamMember(name=f"{name} two", order=2)],
    )


@pytest.fixture
def single_config():
    return GameConfig(
        category_id=7,
        category_name="Test",
        mode=GameMode.SINGLE,
        setup=SinglePlayerSetup(player_name="Ada"),
        game_duration=60,
    )


@pytest.fixture
def multi_config():
    return GameConfig(
        category_id=7,
        category_name="Test",
        mode=GameMode.MULTI,
        setup=MultiPlayerSetup(players=["Ada", "Bob"]),
        game_duration=60,
    )


@pytest.fixture
def team_config():
    return GameConfig(
        category_id=7,
        category_name="Test",
        mode=GameMode.TEAM,
        setup=TeamModeSetup(teams=[make_team("Reds"), make_team("Blues")]),
        game_duration=60,
    )


@pytest.fixture
def single_session(single_config):
    return create_session(single_config, make_pools(1), session_id="single-1", now=FIXED_NOW)


@pytest.fixture
def multi_session(multi_config):
    return create_session(multi_config, make_pools(2), session_id="multi-1", now=FIXED_NOW)


@pytest.fixture
def team_session(team_config):
    return create_session(team_config, make_pools(2), session_id="team-1", now=FIXED_NOW)
