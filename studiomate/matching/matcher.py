"""Top-N match summaries for an artist.

Wraps the scorer with the selection the dashboard uses: only opportunities
that are still open, fetched soonest-deadline first, ranked by score and cut
to the top few.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from studiomate.matching.models import Opportunity
from studiomate.matching.predicates import as_utc
from studiomate.matching.scorer import ScoredOpportunity, get_matched_opportunities
from studiomate.profile.models import ArtistProfile

logger = logging.getLogger(__name__)

DEFAULT_MATCH_LIMIT = 10


@dataclass
class MatchSummary:
    """Top matches plus the size of the full ranked list."""
    matches: List[ScoredOpportunity] = field(default_factory=list)
    total_matches: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "totalMatches": self.total_matches,
        }


def open_opportunities(
    opportunities: Iterable[Opportunity],
    now: datetime,
) -> List[Opportunity]:
    """Opportunities whose deadline is not before now, soonest deadline first."""
    now = as_utc(now)
    still_open = [o for o in opportunities if o.deadline >= now]
    still_open.sort(key=lambda o: o.deadline)
    return still_open


def find_matches(
    artist: ArtistProfile,
    opportunities: Iterable[Opportunity],
    now: Optional[datetime] = None,
    limit: Optional[int] = DEFAULT_MATCH_LIMIT,
) -> MatchSummary:
    """Rank open opportunities for an artist and keep the top matches.

    Args:
        artist: Artist profile
        opportunities: Candidate opportunities, open or not
        now: Reference time (default: current UTC time)
        limit: Number of matches to return; None returns all of them

    Returns:
        MatchSummary with the top matches and the total match count
    """
    if now is None:
        now = datetime.now(timezone.utc)

    candidates = open_opportunities(opportunities, now)
    ranked = get_matched_opportunities(artist, candidates, now=now)
    top = ranked if limit is None else ranked[:limit]

    logger.info(f"Returning {len(top)} of {len(ranked)} matches for {artist.name or 'artist'}")
    return MatchSummary(matches=top, total_matches=len(ranked))
