"""Data models for the word round engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = 10
WORD_LENGTHS = tuple(range(MIN_WORD_LENGTH, MAX_WORD_LENGTH + 1))
WORDS_PER_LENGTH = 2
WORDS_PER_PARTICIPANT = WORDS_PER_LENGTH * len(WORD_LENGTHS)  # 14
GUESSES_PER_WORD = 3
POINTS_PER_LETTER = 100
DEFAULT_GAME_DURATION = 300
DEFAULT_GUESS_DURATION = 30


class GameMode(str, Enum):
    """Game mode enumeration."""
    SINGLE = "single"
    MULTI = "multi"
    TEAM = "team"


class SessionPhase(str, Enum):
    """Session state enumeration."""
    SETUP = "setup"
    PLAYING = "playing"
    PAUSED = "paused"
    WAITING_NEXT_TURN = "waiting_next_turn"
    FINISHED = "finished"


class ParticipantKind(str, Enum):
    """Whether a participant is a single player or a team."""
    PLAYER = "player"
    TEAM = "team"


class LetterStatus(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"


class WordResult(str, Enum):
    """Outcome of a word. UNRESOLVED until the word is settled."""
    UNRESOLVED = "unresolved"
    FOUND = "found"
    SKIPPED = "skipped"
    TIMEOUT = "timeout"


# Setup

class SinglePlayerSetup(BaseModel):
    player_name: str


class MultiPlayerSetup(BaseModel):
    players: list[str]


class TeamMember(BaseModel):
    name: str
    order: int  # Playing order within the team


class TeamSetup(BaseModel):
    """A team taking part in team mode."""
    name: str
    emoji: str = ""
    color: str = ""
    members: list[TeamMember] = Field(default_factory=list)


class TeamModeSetup(BaseModel):
    teams: list[TeamSetup]


ParticipantSetup = SinglePlayerSetup | MultiPlayerSetup | TeamModeSetup


class GameConfig(BaseModel):
    """Configuration for a round, confirmed at the end of setup."""
    category_id: int
    category_name: str = ""
    mode: GameMode
    setup: ParticipantSetup
    game_duration: int = Field(default=DEFAULT_GAME_DURATION, gt=0)

    def participant_names(self) -> list[str]:
        """Names of the participants in play order."""
        if isinstance(self.setup, SinglePlayerSetup):
            return [self.setup.player_name]
        if isinstance(self.setup, MultiPlayerSetup):
            return list(self.setup.players)
        return [team.name for team in self.setup.teams]

    def participant_kind(self) -> ParticipantKind:
        if self.mode == GameMode.TEAM:
            return ParticipantKind.TEAM
        return ParticipantKind.PLAYER


# Word inventory

class WordEntry(BaseModel):
    """A word as handed over by the word-selection collaborator."""
    id: int
    text: str
    hint: str = ""

    @model_validator(mode="before")
    @classmethod
    def normalize_text(cls, data: Any) -> Any:
        """Store words trimmed and upper-cased, so the length is the played length."""
        if isinstance(data, dict) and isinstance(data.get("text"), str):
            data = dict(data)
            data["text"] = data["text"].strip().upper()
        return data

    @property
    def letter_count(self) -> int:
        return len(self.text)


class CategoryInventory(BaseModel):
    """Word counts of a category, bucketed by letter length."""
    total_words: int = 0
    words_by_length: dict[int, int] = Field(default_factory=dict)

    @classmethod
    def from_words(cls, words: list[str] | list[WordEntry]) -> "CategoryInventory":
        """Build an inventory from raw words or word entries."""
        by_length: dict[int, int] = {length: 0 for length in WORD_LENGTHS}
        total = 0
        for word in words:
            text = word.text if isinstance(word, WordEntry) else word
            length = len(text.strip().upper())
            total += 1
            if length in by_length:
                by_length[length] += 1
        return cls(total_words=total, words_by_length=by_length)

    def count_for(self, length: int) -> int:
        return self.words_by_length.get(length, 0)

    def min_bucket(self) -> int:
        """Smallest bucket over lengths 4-10. Missing buckets count as 0."""
        return min(self.count_for(length) for length in WORD_LENGTHS)


# Session state

class Letter(BaseModel):
    char: str
    status: LetterStatus = LetterStatus.HIDDEN
    index: int


class Word(BaseModel):
    """A word in a participant's pool."""
    id: int
    text: str
    hint: str = ""
    letter_count: int
    letters: list[Letter]
    remaining_guesses: int = GUESSES_PER_WORD
    letters_revealed_count: int = 0
    has_made_guess: bool = False
    result: WordResult = WordResult.UNRESOLVED
    points_earned: int = 0

    @classmethod
    def from_entry(cls, entry: WordEntry) -> "Word":
        """Create an untouched word from a word entry."""
        text = entry.text
        return cls(
            id=entry.id,
            text=text,
            hint=entry.hint,
            letter_count=len(text),
            letters=[Letter(char=char, index=i) for i, char in enumerate(text)],
        )

    @property
    def is_resolved(self) -> bool:
        return self.result != WordResult.UNRESOLVED

    def masked(self, mask: str = "_") -> str:
        """Text with hidden letters replaced by ``mask``."""
        return "".join(
            letter.char if letter.status == LetterStatus.REVEALED else mask
            for letter in self.letters
        )


class Participant(BaseModel):
    """A player or team taking part in the round."""
    name: str
    kind: ParticipantKind = ParticipantKind.PLAYER
    score: int = 0
    words_found: int = 0
    words_skipped: int = 0
    letters_revealed_total: int = 0
    current_word_index: int = 0
    words: list[Word] = Field(default_factory=list)
    is_active: bool = False
    elapsed_seconds: int = 0
    total_seconds: int = DEFAULT_GAME_DURATION

    @property
    def is_complete(self) -> bool:
        """True once every word of the pool has a result."""
        return all(word.is_resolved for word in self.words)

    def unresolved_words(self) -> list[Word]:
        return [word for word in self.words if not word.is_resolved]


class Session(BaseModel):
    """The state of one round."""
    id: str
    category_id: int
    category_name: str = ""
    mode: GameMode
    state: SessionPhase = SessionPhase.SETUP
    participants: list[Participant] = Field(default_factory=list)
    active_participant_index: int = 0
    elapsed_seconds: int = 0  # Aggregate, informational
    is_paused: bool = False
    # Guess mode: the participant clock stops while the guess countdown runs
    is_guessing: bool = False
    guess_word_index: int | None = None
    guess_time_remaining: int = 0
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def active_participant(self) -> Participant:
        return self.participants[self.active_participant_index]

    @property
    def is_finished(self) -> bool:
        return self.state == SessionPhase.FINISHED

    def all_resolved(self) -> bool:
        return all(p.is_complete for p in self.participants)
