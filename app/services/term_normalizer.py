"""
Search term normalization for the vehicle lookup.

Cleans the raw text a clerk typed into the search box and classifies it:
whitespace collapsed, a digits-only projection for phone matching, and a
plate-likeness flag that lets plate lookups short-circuit the fuzzier steps.
"""

import re
from dataclasses import dataclass
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"\D")
_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")

MIN_PLATE_LENGTH = 4


class InvalidSearchTerm(ValueError):
    """Raised for a search request that carries no usable term."""


def normalize_whitespace(value: Optional[str]) -> str:
    return _WHITESPACE.sub(" ", value or "").strip()


def digits_only(value: Optional[str]) -> str:
    return _NON_DIGITS.sub("", value or "")


def is_likely_plate(value: str) -> bool:
    """At least 4 characters once whitespace is removed, with both a letter and a digit."""
    compact = _WHITESPACE.sub("", value or "")
    return len(compact) >= MIN_PLATE_LENGTH and bool(_LETTER.search(compact)) and bool(_DIGIT.search(compact))


@dataclass(frozen=True)
class NormalizedTerm:
    text: str
    digits: str
    plate_like: bool

    @property
    def upper(self) -> str:
        return self.text.upper()


def normalize_term(raw: Optional[str]) -> NormalizedTerm:
    text = normalize_whitespace(raw)
    if not text:
        raise InvalidSearchTerm("Search term is required")
    return NormalizedTerm(text=text, digits=digits_only(text), plate_like=is_likely_plate(text))
