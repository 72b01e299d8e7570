"""
Suggestion assembly for the vehicle lookup.

Seeds from the match resolver go in first with the maximum score, so they
always rank ahead of fuzzy candidates. Fetched candidates are scored,
tagged with a reason and appended until the limit is reached. Each phase
takes an accumulator tuple and returns a new one; nothing is mutated.
The vehicle already returned as the match never appears as a suggestion.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional

from app.models.customer import Customer
from app.models.vehicle import Vehicle
from app.services.candidate_scorer import Candidate, SuggestionReason, classify_reason, score_candidate
from app.services.term_normalizer import NormalizedTerm

SEED_SCORE = 1.0
DEFAULT_SUGGESTION_LIMIT = 5


@dataclass(frozen=True)
class Suggestion:
    vehicle: Vehicle
    customer: Optional[Customer]
    reason: SuggestionReason
    score: float = SEED_SCORE
    seeded: bool = False


# insertion-ordered, unique by vehicle id
Accumulator = tuple[Suggestion, ...]


def _held_ids(acc: Accumulator) -> frozenset:
    return frozenset(s.vehicle.id for s in acc)


def seed_accumulator(seeds: Iterable[Suggestion], exclude_id: Optional[int] = None) -> Accumulator:
    acc: Accumulator = ()
    for seed in seeds:
        if seed.vehicle.id == exclude_id or seed.vehicle.id in _held_ids(acc):
            continue
        acc = acc + (replace(seed, score=SEED_SCORE, seeded=True),)
    return acc


def fold_candidates(
    acc: Accumulator,
    term: NormalizedTerm,
    candidates: Iterable[Candidate],
    exclude_id: Optional[int] = None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> Accumulator:
    held = _held_ids(acc)
    for candidate in candidates:
        if len(acc) >= limit:
            break
        vehicle_id = candidate.vehicle.id
        if vehicle_id == exclude_id or vehicle_id in held:
            continue
        suggestion = Suggestion(
            vehicle=candidate.vehicle,
            customer=candidate.customer,
            reason=classify_reason(term.upper, term.digits, candidate),
            score=score_candidate(term.upper, term.digits, candidate),
        )
        acc = acc + (suggestion,)
        held = held | {vehicle_id}
    return acc


def _created_ts(vehicle: Vehicle) -> float:
    created = vehicle.created_at
    return created.timestamp() if isinstance(created, datetime) else 0.0


def rank_suggestions(acc: Accumulator, limit: int = DEFAULT_SUGGESTION_LIMIT) -> list[Suggestion]:
    """Score descending (seeds first on ties), then newest vehicle, then highest id."""
    ordered = sorted(
        acc,
        key=lambda s: (-s.score, not s.seeded, -_created_ts(s.vehicle), -(s.vehicle.id or 0)),
    )
    return ordered[:limit]


def assemble_suggestions(
    term: NormalizedTerm,
    match_vehicle_id: Optional[int],
    seeds: Iterable[Suggestion],
    candidates: Iterable[Candidate],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[Suggestion]:
    acc = seed_accumulator(seeds, exclude_id=match_vehicle_id)
    acc = fold_candidates(acc, term, candidates, exclude_id=match_vehicle_id, limit=limit)
    return rank_suggestions(acc, limit)
