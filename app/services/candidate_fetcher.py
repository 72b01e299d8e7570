"""
Candidate fetching for the vehicle lookup.

Turns a search term into LIKE patterns and asks the record store for
vehicles whose plate, make, model, owner name or owner phone loosely
resemble it. Single-character deletions of the term give a cheap kind of
typo tolerance ("ABXC12" still finds "ABC12"). The query over-fetches; every
fetched row is scored and the list comes back best first, so the
assembler's early stop keeps the strongest candidates rather than the newest.
"""

from app.services.candidate_scorer import Candidate, score_candidate
from app.services.record_store import RecordStore
from app.services.term_normalizer import NormalizedTerm
from app.utils.logger import get_logger

logger = get_logger(__name__)

MIN_SUBSTRING_LENGTH = 3
MIN_FETCH_LIMIT = 5
OVERFETCH_FACTOR = 6


def escape_like(value: str) -> str:
    """Backslash-escape LIKE metacharacters so user input only matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _deletion_variants(value: str) -> list[str]:
    if len(value) < MIN_SUBSTRING_LENGTH + 1:
        return []
    variants = []
    for index in range(len(value)):
        variant = value[:index] + value[index + 1:]
        if len(variant) >= MIN_SUBSTRING_LENGTH:
            variants.append(variant)
    return variants


def _as_patterns(values) -> list[str]:
    # dict keeps first-seen order while dropping duplicates
    return list(dict.fromkeys(f"%{escape_like(value)}%" for value in values))


def build_text_patterns(term: str) -> list[str]:
    normalized = term.strip()
    if not normalized:
        return []
    values = [normalized]
    values.extend(_deletion_variants(normalized))
    values.extend(token for token in normalized.split() if len(token) >= MIN_SUBSTRING_LENGTH)
    return _as_patterns(values)


def build_digit_patterns(digits: str) -> list[str]:
    if not digits:
        return []
    return _as_patterns([digits] + _deletion_variants(digits))


def rank_candidates(term: NormalizedTerm, candidates: list[Candidate]) -> list[Candidate]:
    """Best score first. The sort is stable, so equal scores keep the store's newest-first order."""
    return sorted(candidates, key=lambda c: -score_candidate(term.upper, term.digits, c))


def fetch_candidates(store: RecordStore, term: NormalizedTerm, limit: int) -> list[Candidate]:
    text_patterns = build_text_patterns(term.text)
    digit_patterns = build_digit_patterns(term.digits)
    if not text_patterns and not digit_patterns:
        return []

    row_limit = max(limit, MIN_FETCH_LIMIT) * OVERFETCH_FACTOR
    rows = store.search_vehicle_rows(text_patterns, digit_patterns, row_limit)
    logger.debug(
        f"Fetched {len(rows)} candidates for '{term.text}' "
        f"({len(text_patterns)} text / {len(digit_patterns)} digit patterns, cap {row_limit})"
    )
    candidates = [Candidate(vehicle=vehicle, customer=customer) for vehicle, customer in rows if vehicle is not None]
    return rank_candidates(term, candidates)
