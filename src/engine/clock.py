"""Per-participant countdown."""

from __future__ import annotations

from .models import Participant


def remaining_seconds(participant: Participant) -> int:
    return max(0, participant.total_seconds - participant.elapsed_seconds)


def is_expired(participant: Participant) -> bool:
    return participant.elapsed_seconds >= participant.total_seconds


def advance(participant: Participant, seconds: int = 1) -> tuple[Participant, bool]:
    """
    Advance a participant's clock.

    Returns:
        (new_participant, expired) - expired is True once elapsed time
        has reached the participant's budget.
    """
    new_participant = participant.model_copy(deep=True)
    new_participant.elapsed_seconds += seconds
    return new_participant, is_expired(new_participant)
