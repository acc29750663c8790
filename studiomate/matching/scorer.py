"""Match score calculation for artist/opportunity pairs.

Each opportunity earns points from a fixed sequence of rules:
- location match and Australia focus (up to 55)
- career stage eligibility (up to 25)
- medium match (up to 25)
- opportunity type bonus (up to 8)
- prize/funding bonus (10)
- deadline urgency (up to 5)

The total is capped at 100. Every rule that fires adds a reason, in rule order,
even when the cap hides its points.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional

from pydantic import Field

from studiomate.matching import predicates
from studiomate.matching.models import Opportunity
from studiomate.profile.models import ArtistProfile

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0

# Opportunities scoring below this are not shown to the artist
MATCH_THRESHOLD = 30

# Location
LOCATION_MATCH_POINTS = 30
AUSTRALIA_FOCUS_POINTS = 25
AUSTRALIA_MARKERS = ("australia", "nsw", "vic", "qld", "wa", "sa", "tas", "nt", "act")

# Career stage
OPEN_TO_ALL_MARKERS = ("all artists", "any artist")
OPEN_TO_ALL_POINTS = 20
CAREER_STAGE_POINTS = 25
EMERGING_EARLY_POINTS = 20

# Medium
ALL_MEDIUMS_MARKERS = ("all mediums", "all medium")
ALL_MEDIUMS_POINTS = 20
POINTS_PER_MEDIUM = 8
MAX_MEDIUM_POINTS = 25

# Opportunity type, first match wins
TYPE_BONUSES = (
    ("grant", 5, "Grant opportunity"),
    ("exhibition", 8, "Exhibition opportunity"),
    ("residency", 7, "Residency opportunity"),
    ("prize", 6, "Prize opportunity"),
)

PRIZE_POINTS = 10

# Deadline urgency: (min days exclusive, max days inclusive, points, reason)
DEADLINE_BANDS = (
    (0, 30, 5, "Deadline approaching"),
    (30, 90, 3, "Good timing"),
)

# Score bands: (min score inclusive, description, color)
MATCH_BANDS = (
    (80, "Excellent Match", "text-green-600"),
    (60, "Good Match", "text-blue-600"),
    (40, "Fair Match", "text-yellow-600"),
)
FALLBACK_DESCRIPTION = "Possible Match"
FALLBACK_COLOR = "text-gray-600"


class RuleHit(NamedTuple):
    """Points and reason contributed by one rule."""

    points: int
    reason: str


Rule = Callable[[ArtistProfile, Opportunity, datetime], List[RuleHit]]


class ScoredOpportunity(Opportunity):
    """An opportunity with its match score and reasons attached."""

    match_score: int = Field(0, alias="matchScore", ge=MIN_SCORE, le=MAX_SCORE)
    match_reasons: List[str] = Field(default_factory=list, alias="matchReasons")

    @property
    def match_description(self) -> str:
        return get_match_description(self.match_score)

    @property
    def match_color(self) -> str:
        return get_match_color(self.match_score)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        data["matchDescription"] = self.match_description
        data["matchColor"] = self.match_color
        return data


def _location_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    if not (artist.location and artist.interested_regions):
        return []

    hits = []
    regions = artist.region_list()

    if predicates.contains(opportunity.location, artist.location) or predicates.contains_any(
        opportunity.location, regions
    ):
        hits.append(RuleHit(LOCATION_MATCH_POINTS, "Location match"))

    if "australia" in regions and predicates.contains_any(opportunity.location, AUSTRALIA_MARKERS):
        hits.append(RuleHit(AUSTRALIA_FOCUS_POINTS, "Australia focus"))

    return hits


def _career_stage_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    if not artist.career_stage:
        return []

    eligibility = opportunity.eligibility
    stage = predicates.normalize(artist.career_stage)

    if predicates.contains_any(eligibility, OPEN_TO_ALL_MARKERS):
        return [RuleHit(OPEN_TO_ALL_POINTS, "Open to all career stages")]
    if predicates.contains(eligibility, stage):
        return [RuleHit(CAREER_STAGE_POINTS, "Career stage match")]
    if stage == "emerging" and predicates.contains(eligibility, "early"):
        return [RuleHit(EMERGING_EARLY_POINTS, "Suitable for emerging artists")]
    return []


def _medium_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    if not (artist.artistic_focus and opportunity.art_types):
        return []

    if predicates.contains_any(opportunity.art_types, ALL_MEDIUMS_MARKERS):
        return [RuleHit(ALL_MEDIUMS_POINTS, "Open to all mediums")]

    matches = predicates.count_contained(opportunity.art_types, artist.focus_list())
    if matches > 0:
        points = min(MAX_MEDIUM_POINTS, matches * POINTS_PER_MEDIUM)
        return [RuleHit(points, f"Medium match ({matches} matches)")]
    return []


def _type_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    for keyword, points, reason in TYPE_BONUSES:
        if predicates.contains(opportunity.type, keyword):
            return [RuleHit(points, reason)]
    return []


def _prize_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    if opportunity.has_prize:
        return [RuleHit(PRIZE_POINTS, "Prize/funding available")]
    return []


def _deadline_rule(artist: ArtistProfile, opportunity: Opportunity, now: datetime) -> List[RuleHit]:
    days = predicates.days_until(opportunity.deadline, now)
    for lower, upper, points, reason in DEADLINE_BANDS:
        if lower < days <= upper:
            return [RuleHit(points, reason)]
    return []


# Evaluation order determines the order of match reasons
RULES: tuple[Rule, ...] = (
    _location_rule,
    _career_stage_rule,
    _medium_rule,
    _type_rule,
    _prize_rule,
    _deadline_rule,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def score_opportunity_match(
    artist: ArtistProfile,
    opportunity: Opportunity,
    now: Optional[datetime] = None,
) -> ScoredOpportunity:
    """Score how well an opportunity suits an artist.

    Args:
        artist: Artist profile
        opportunity: Opportunity to score
        now: Reference time for deadline urgency (default: current UTC time)

    Returns:
        ScoredOpportunity with a 0-100 score and the reasons that fired
    """
    if now is None:
        now = _utcnow()

    total = 0
    reasons: List[str] = []
    for rule in RULES:
        for hit in rule(artist, opportunity, now):
            total += hit.points
            reasons.append(hit.reason)

    score = max(MIN_SCORE, min(MAX_SCORE, total))
    logger.debug("Scored %r: %d (%s)", opportunity.title, score, ", ".join(reasons))

    return ScoredOpportunity(
        **opportunity.model_dump(include=set(Opportunity.model_fields)),
        match_score=score,
        match_reasons=reasons,
    )


def get_matched_opportunities(
    artist: ArtistProfile,
    opportunities: Iterable[Opportunity],
    now: Optional[datetime] = None,
    threshold: int = MATCH_THRESHOLD,
) -> List[ScoredOpportunity]:
    """Score opportunities, drop weak matches and rank the rest.

    Ties keep their input order.

    Args:
        artist: Artist profile
        opportunities: Opportunities to score
        now: Reference time shared by the whole batch (default: current UTC time)
        threshold: Minimum score to keep

    Returns:
        Scored opportunities with score >= threshold, highest first
    """
    if now is None:
        now = _utcnow()

    scored = [score_opportunity_match(artist, opportunity, now) for opportunity in opportunities]
    matched = [s for s in scored if s.match_score >= threshold]

    # list.sort is stable, so equal scores stay in input order
    matched.sort(key=lambda s: s.match_score, reverse=True)

    logger.info(f"Matched {len(matched)} of {len(scored)} opportunities (threshold {threshold})")
    return matched


def get_match_description(score: int) -> str:
    """Human-readable label for a match score."""
    for minimum, description, _ in MATCH_BANDS:
        if score >= minimum:
            return description
    return FALLBACK_DESCRIPTION


def get_match_color(score: int) -> str:
    """Display color tag for a match score."""
    for minimum, _, color in MATCH_BANDS:
        if score >= minimum:
            return color
    return FALLBACK_COLOR


class MatchScorer:
    """Scores and ranks opportunities for an artist."""

    def __init__(self, now: Optional[datetime] = None, threshold: int = MATCH_THRESHOLD):
        """Initialize the scorer.

        Args:
            now: Fixed reference time; read from the clock per call when None
            threshold: Minimum score for ranked results
        """
        self.now = now
        self.threshold = threshold

    def _reference_time(self) -> datetime:
        return self.now if self.now is not None else _utcnow()

    def score(self, artist: ArtistProfile, opportunity: Opportunity) -> ScoredOpportunity:
        return score_opportunity_match(artist, opportunity, self._reference_time())

    def score_batch(
        self, artist: ArtistProfile, opportunities: Iterable[Opportunity]
    ) -> List[ScoredOpportunity]:
        """Score every opportunity without filtering, in input order."""
        now = self._reference_time()
        return [score_opportunity_match(artist, opportunity, now) for opportunity in opportunities]

    def rank(
        self, artist: ArtistProfile, opportunities: Iterable[Opportunity]
    ) -> List[ScoredOpportunity]:
        """Score, filter by threshold and sort by score descending."""
        return get_matched_opportunities(
            artist, opportunities, now=self._reference_time(), threshold=self.threshold
        )
