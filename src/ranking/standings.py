"""Final standings with tie-break."""

from __future__ import annotations

from pydantic import BaseModel

from src.engine import Participant


class Standing(BaseModel):
    """A participant's place in the final standings."""
    rank: int
    participant_index: int  # Position in the session's participant list
    participant: Participant


def ranking_key(participant: Participant) -> tuple[int, int, int]:
    """Higher score first, then fewer letters revealed, then less time used."""
    return (
        -participant.score,
        participant.letters_revealed_total,
        participant.elapsed_seconds,
    )


def compute_standings(participants: list[Participant]) -> list[Standing]:
    """
    Order participants and assign ranks.

    Ranks are positional (1..N), except that a participant tied with its
    predecessor on score, letters revealed and elapsed time takes the
    predecessor's rank. Several participants can share rank 1.
    """
    ordered = sorted(
        enumerate(participants),
        key=lambda item: ranking_key(item[1]),
    )

    standings: list[Standing] = []
    for position, (index, participant) in enumerate(ordered, start=1):
        rank = position
        if standings:
            prev = standings[-1]
            if ranking_key(prev.participant) == ranking_key(participant):
                rank = prev.rank
        standings.append(
            Standing(rank=rank, participant_index=index, participant=participant)
        )
    return standings


def winners(standings: list[Standing]) -> list[Standing]:
    """Every participant sharing rank 1."""
    return [standing for standing in standings if standing.rank == 1]
