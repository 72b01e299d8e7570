"""
Vehicle search: "find the car for whatever the clerk typed".

search_vehicles() runs the whole lookup pipeline:
  normalize → resolve primary match → fetch candidates → score/assemble
and returns the single resolved vehicle (with owner and service history),
if any, plus up to `limit` ranked suggestions.

An empty term raises InvalidSearchTerm. Record-store errors propagate.
The lookup never writes, so callers may retry it freely.
"""

from dataclasses import dataclass, field
from typing import Optional

from app.config import settings
from app.services.candidate_fetcher import fetch_candidates
from app.services.match_resolver import PrimaryResolution, VehicleLookup, resolve_primary_match
from app.services.record_store import RecordStore
from app.services.suggestion_assembler import Suggestion, assemble_suggestions
from app.services.term_normalizer import InvalidSearchTerm, normalize_term
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VehicleSearchResult:
    match: Optional[VehicleLookup]
    suggestions: list[Suggestion] = field(default_factory=list)


def search_vehicles(store: RecordStore, raw_term: Optional[str], limit: Optional[int] = None) -> VehicleSearchResult:
    limit = settings.VEHICLE_SUGGESTION_LIMIT if limit is None else limit
    if limit < 1:
        raise InvalidSearchTerm("Suggestion limit must be at least 1")

    term = normalize_term(raw_term)

    resolution: PrimaryResolution = resolve_primary_match(store, term)
    match_id = resolution.match.vehicle.id if resolution.match else None

    fetch_limit = max(limit, len(resolution.seeds)) * 2
    candidates = fetch_candidates(store, term, fetch_limit)
    suggestions = assemble_suggestions(term, match_id, resolution.seeds, candidates, limit)

    logger.info(
        f"Vehicle search '{term.text}': "
        f"match={'vehicle ' + str(match_id) if match_id is not None else 'none'} "
        f"suggestions={len(suggestions)} (seeds={len(resolution.seeds)}, candidates={len(candidates)})"
    )
    return VehicleSearchResult(match=resolution.match, suggestions=suggestions)
