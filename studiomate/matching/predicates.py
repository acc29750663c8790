"""Case-insensitive text predicates used by the scoring rules.

Opportunity data is messy free text, so every rule is expressed in terms of
substring containment over lowercased strings. Keeping those checks here lets
the rule tables in the scorer stay declarative.
"""

import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from studiomate.profile.models import split_comma_list

SECONDS_PER_DAY = 24 * 60 * 60


def normalize(text: Optional[str]) -> str:
    """Lowercase text, treating None as the empty string."""
    return text.lower() if text else ""


def split_tokens(text: Optional[str]) -> list[str]:
    """Split comma-separated text into lowercased, trimmed tokens.

    Empty tokens from stray commas are kept: an empty token is a substring of
    every string, which is how the matching has always behaved.
    """
    return split_comma_list(text)


def contains(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring check."""
    return normalize(needle) in normalize(haystack)


def contains_any(haystack: Optional[str], needles: Iterable[str]) -> bool:
    """True if any needle is a case-insensitive substring of haystack."""
    text = normalize(haystack)
    return any(normalize(needle) in text for needle in needles)


def count_contained(haystack: Optional[str], needles: Iterable[str]) -> int:
    """Count how many needles appear in haystack."""
    text = normalize(haystack)
    return sum(1 for needle in needles if normalize(needle) in text)


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days until deadline, rounding partial days up.

    Negative or zero for deadlines that have already passed.
    """
    delta = as_utc(deadline) - as_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
