"""Unit tests for suggestion assembly: seeding, exclusion, dedup, ranking, limits."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import datetime
from types import SimpleNamespace

from app.services.candidate_scorer import Candidate
from app.services.suggestion_assembler import (
    SEED_SCORE,
    Suggestion,
    assemble_suggestions,
    fold_candidates,
    rank_suggestions,
    seed_accumulator,
)
from app.services.term_normalizer import normalize_term


def make_vehicle(vehicle_id, plate, make="Ford", model="Focus", created=None):
    return SimpleNamespace(id=vehicle_id, plate_number=plate, make=make, model=model,
                           created_at=created or datetime(2024, 1, vehicle_id))


def candidate(vehicle_id, plate, **kwargs):
    return Candidate(vehicle=make_vehicle(vehicle_id, plate, **kwargs), customer=None)


def seed(vehicle_id, plate="SEED000", reason="name"):
    return Suggestion(vehicle=make_vehicle(vehicle_id, plate), customer=None, reason=reason)


class TestSeedAccumulator:
    def test_match_excluded_and_duplicates_dropped(self):
        acc = seed_accumulator([seed(1), seed(2), seed(1), seed(3)], exclude_id=2)
        assert [s.vehicle.id for s in acc] == [1, 3]

    def test_seeds_get_top_score(self):
        acc = seed_accumulator([Suggestion(vehicle=make_vehicle(1, "A"), customer=None, reason="phone", score=0.2)])
        assert acc[0].score == SEED_SCORE

    def test_returns_new_tuple(self):
        assert isinstance(seed_accumulator([]), tuple)


class TestFoldCandidates:
    def test_does_not_mutate_input(self):
        start = seed_accumulator([seed(1)])
        after = fold_candidates(start, normalize_term("ABC1"), [candidate(2, "ABC123")])
        assert len(start) == 1
        assert len(after) == 2

    def test_skips_match_and_held(self):
        acc = seed_accumulator([seed(1)])
        acc = fold_candidates(acc, normalize_term("ABC1"),
                              [candidate(1, "ABC100"), candidate(2, "ABC120"), candidate(3, "ABC130")],
                              exclude_id=2)
        assert [s.vehicle.id for s in acc] == [1, 3]
        assert acc[1].reason == "plate"

    def test_stops_at_limit(self):
        acc = fold_candidates((), normalize_term("ABC"),
                              [candidate(i, f"ABC{i}") for i in range(1, 10)], limit=3)
        assert [s.vehicle.id for s in acc] == [1, 2, 3]


class TestRanking:
    def test_score_then_recency_then_id(self):
        old = Suggestion(vehicle=make_vehicle(1, "A", created=datetime(2023, 1, 1)), customer=None, reason="partial", score=0.5)
        new = Suggestion(vehicle=make_vehicle(2, "B", created=datetime(2024, 1, 1)), customer=None, reason="partial", score=0.5)
        best = Suggestion(vehicle=make_vehicle(3, "C", created=datetime(2020, 1, 1)), customer=None, reason="plate", score=0.9)
        same_time = Suggestion(vehicle=make_vehicle(4, "D", created=datetime(2024, 1, 1)), customer=None, reason="partial", score=0.5)

        ranked = rank_suggestions((old, new, best, same_time), limit=10)
        assert [s.vehicle.id for s in ranked] == [3, 4, 2, 1]

    def test_truncates(self):
        acc = tuple(seed(i) for i in range(1, 8))
        assert len(rank_suggestions(acc, limit=5)) == 5


class TestAssembleSuggestions:
    def test_seeds_rank_ahead_of_exact_fuzzy_hits(self):
        term = normalize_term("ABC123")
        result = assemble_suggestions(term, None, [seed(1, "ZZZ999")], [candidate(2, "ABC123")], limit=5)
        assert [s.vehicle.id for s in result] == [1, 2]
        assert result[1].score == 1.0

    def test_match_never_suggested(self):
        term = normalize_term("ABC123")
        result = assemble_suggestions(term, 2, [seed(2)], [candidate(2, "ABC123"), candidate(3, "ABC124")])
        assert 2 not in [s.vehicle.id for s in result]

    def test_bound_respected_with_many_seeds(self):
        term = normalize_term("Smith")
        result = assemble_suggestions(term, None, [seed(i) for i in range(1, 9)], [], limit=5)
        assert len(result) == 5

    def test_empty(self):
        assert assemble_suggestions(normalize_term("nothing"), None, [], []) == []
