"""Tests for final standings."""

import itertools
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine import Participant, ParticipantKind
from src.ranking import compute_standings, ranking_key, winners


def make_participant(name, score=0, letters=0, elapsed=0, kind=ParticipantKind.PLAYER):
    return Participant(
        name=name,
        kind=kind,
        score=score,
        letters_revealed_total=letters,
        elapsed_seconds=elapsed,
    )


def ranks_by_name(standings):
    return {s.participant.name: s.rank for s in standings}


class TestStandings:
    """Tests for ranking order and tie handling."""

    def test_orders_by_score(self):
        """Higher score ranks first."""
        standings = compute_standings([
            make_participant("a", score=100),
            make_participant("b", score=300),
            make_participant("c", score=200),
        ])
        assert [s.participant.name for s in standings] == ["b", "c", "a"]
        assert [s.rank for s in standings] == [1, 2, 3]
        assert [s.participant_index for s in standings] == [1, 2, 0]

    def test_fewer_letters_breaks_score_tie(self):
        """Fewer revealed letters breaks a score tie."""
        standings = compute_standings([
            make_participant("a", score=500, letters=4),
            make_participant("b", score=500, letters=2),
        ])
        assert ranks_by_name(standings) == {"b": 1, "a": 2}

    def test_less_time_breaks_remaining_tie(self):
        """Less time used breaks the remaining tie."""
        standings = compute_standings([
            make_participant("slow", score=500, letters=2, elapsed=200),
            make_participant("fast", score=500, letters=2, elapsed=120),
        ])
        assert ranks_by_name(standings) == {"fast": 1, "slow": 2}

    def test_score_dominates_tie_breaks(self):
        """Tie-breaks never outweigh score."""
        standings = compute_standings([
            make_participant("a", score=400, letters=0, elapsed=10),
            make_participant("b", score=500, letters=9, elapsed=300),
        ])
        assert standings[0].participant.name == "b"

    def test_full_tie_shares_rank_one(self):
        """Fully tied participants share rank 1."""
        standings = compute_standings([
            make_participant("Reds", 900, 3, 240, ParticipantKind.TEAM),
            make_participant("Blues", 900, 3, 240, ParticipantKind.TEAM),
        ])
        assert [s.rank for s in standings] == [1, 1]
        assert len(winners(standings)) == 2

    def test_tie_keeps_positional_rank_after(self):
        """Ranks after a tie stay positional."""
        standings = compute_standings([
            make_participant("a", 900),
            make_participant("b", 900),
            make_participant("c", 100),
            make_participant("d", 100),
            make_participant("e", 50),
        ])
        assert ranks_by_name(standings) == {"a": 1, "b": 1, "c": 3, "d": 3, "e": 5}

    def test_partial_tie_is_not_a_tie(self):
        """Equal score alone does not share a rank."""
        standings = compute_standings([
            make_participant("a", 900, 1, 100),
            make_participant("b", 900, 1, 101),
        ])
        assert [s.rank for s in standings] == [1, 2]

    def test_empty(self):
        """No participants, no standings."""
        assert compute_standings([]) == []

    def test_order_is_consistent_for_any_input_order(self):
        """Ranks follow the key order whatever order participants come in."""
        people = [
            make_participant("a", 700, 2, 100),
            make_participant("b", 700, 1, 300),
            make_participant("c", 700, 1, 200),
            make_participant("d", 900, 5, 300),
            make_participant("e", 700, 1, 200),
        ]
        expected = {"d": 1, "c": 2, "e": 2, "b": 4, "a": 5}
        for order in itertools.permutations(people):
            standings = compute_standings(list(order))
            assert ranks_by_name(standings) == expected
            keys = [ranking_key(s.participant) for s in standings]
            assert keys == sorted(keys)
