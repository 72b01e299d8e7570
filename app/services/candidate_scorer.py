"""
Similarity scoring and reason tagging for vehicle search candidates.

score_candidate() compares the uppercased term with the candidate's plate,
"make model" label and owner name using Levenshtein distance normalized by
the longer string. A substring hit in either direction counts as
near-perfect (distance 0.05). The owner phone is compared separately on
digits only and discounted by 0.9. The score is 1 - best distance, in [0, 1].
"""

from dataclasses import dataclass
from typing import Literal, Optional

from rapidfuzz.distance import Levenshtein

from app.models.customer import Customer
from app.models.vehicle import Vehicle
from app.services.term_normalizer import digits_only

SuggestionReason = Literal["plate", "phone", "name", "vehicle", "partial"]

CONTAINMENT_DISTANCE = 0.05
PHONE_DISTANCE_WEIGHT = 0.9


@dataclass(frozen=True)
class Candidate:
    """A fetched vehicle row and its owner (None when the owner row is gone)."""
    vehicle: Vehicle
    customer: Optional[Customer] = None


def normalized_distance(a: str, b: str) -> float:
    return Levenshtein.distance(a, b) / max(len(a), len(b), 1)


def _comparison_values(candidate: Candidate) -> list[str]:
    vehicle = candidate.vehicle
    values = []
    if vehicle.plate_number:
        values.append(vehicle.plate_number.upper())
    label = f"{vehicle.make or ''} {vehicle.model or ''}".strip()
    if label:
        values.append(label.upper())
    if candidate.customer is not None and candidate.customer.name:
        values.append(candidate.customer.name.upper())
    return values


def _customer_digits(customer) -> str:
    if customer is None or not customer.phone:
        return ""
    return digits_only(customer.phone)


def score_candidate(upper_term: str, digits: str, candidate: Candidate) -> float:
    if not upper_term and not digits:
        return 0.0

    best: Optional[float] = None
    if upper_term:
        for value in _comparison_values(candidate):
            distance = normalized_distance(upper_term, value)
            if upper_term in value or value in upper_term:
                distance = min(distance, CONTAINMENT_DISTANCE)
            best = distance if best is None else min(best, distance)

    phone_digits = _customer_digits(candidate.customer)
    if digits and phone_digits:
        distance = normalized_distance(digits, phone_digits) * PHONE_DISTANCE_WEIGHT
        best = distance if best is None else min(best, distance)

    if best is None:
        return 0.0
    return 1.0 - min(max(best, 0.0), 1.0)


def classify_reason(upper_term: str, digits: str, candidate: Candidate) -> SuggestionReason:
    """First matching field wins: plate, phone, name, vehicle; otherwise partial."""
    vehicle = candidate.vehicle
    customer = candidate.customer

    if upper_term and upper_term in (vehicle.plate_number or "").upper():
        return "plate"
    phone_digits = _customer_digits(customer)
    if digits and phone_digits and digits in phone_digits:
        return "phone"
    if upper_term and customer is not None and customer.name and upper_term in customer.name.upper():
        return "name"
    if upper_term and (upper_term in (vehicle.make or "").upper() or upper_term in (vehicle.model or "").upper()):
        return "vehicle"
    return "partial"
