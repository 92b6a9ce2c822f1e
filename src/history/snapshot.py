"""Result snapshot handed to the history recorder."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from src.engine import GameMode, InvalidOperation, ParticipantKind, Session, WordResult
from src.ranking import compute_standings


class WordResultRecord(BaseModel):
    word: str
    hint: str = ""
    result: WordResult
    points_earned: int
    letters_used: int


class ParticipantResult(BaseModel):
    name: str
    kind: ParticipantKind
    score: int
    words_found: int
    words_skipped: int
    letters_revealed: int
    elapsed_seconds: int
    rank: int
    word_results: list[WordResultRecord] = Field(default_factory=list)


class GameResultSnapshot(BaseModel):
    """Flat record of a finished round."""
    session_id: str
    category_id: int
    category_name: str = ""
    mode: GameMode
    played_at: datetime
    total_time_seconds: int
    participants: list[ParticipantResult] = Field(default_factory=list)

    def to_filename(self) -> str:
        """Generate filename for this snapshot."""
        ts = self.played_at.strftime("%Y%m%d_%H%M%S")
        return f"game_{self.session_id}_{ts}.json"

    @property
    def winners(self) -> list[ParticipantResult]:
        return [p for p in self.participants if p.rank == 1]


def build_snapshot(session: Session) -> GameResultSnapshot:
    """
    Build the result snapshot of a finished session.

    Participants appear in standing order. Total time is the sum of
    every participant's own clock.
    """
    if not session.is_finished:
        raise InvalidOperation(
            f"Session {session.id} is {session.state.value}, not finished"
        )

    results = []
    for standing in compute_standings(session.participants):
        participant = standing.participant
        results.append(
            ParticipantResult(
                name=participant.name,
                kind=participant.kind,
                score=participant.score,
                words_found=participant.words_found,
                words_skipped=participant.words_skipped,
                letters_revealed=participant.letters_revealed_total,
                elapsed_seconds=participant.elapsed_seconds,
                rank=standing.rank,
                word_results=[
                    WordResultRecord(
                        word=word.text,
                        hint=word.hint,
                        result=word.result,
                        points_earned=word.points_earned,
                        letters_used=word.letters_revealed_count,
                    )
                    for word in participant.words
                ],
            )
        )

    return GameResultSnapshot(
        session_id=session.id,
        category_id=session.category_id,
        category_name=session.category_name,
        mode=session.mode,
        played_at=session.finished_at or datetime.utcnow(),
        total_time_seconds=sum(p.elapsed_seconds for p in session.participants),
        participants=results,
    )
