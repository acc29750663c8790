"""Matching module for opportunity match scoring and ranking."""

from studiomate.matching.matcher import MatchSummary, find_matches
from studiomate.matching.models import Opportunity
from studiomate.matching.scorer import (
    MATCH_THRESHOLD,
    MatchScorer,
    ScoredOpportunity,
    get_match_color,
    get_match_description,
    get_matched_opportunities,
    score_opportunity_match,
)

__all__ = [
    "MATCH_THRESHOLD",
    "MatchScorer",
    "MatchSummary",
    "Opportunity",
    "ScoredOpportunity",
    "find_matches",
    "get_match_color",
    "get_match_description",
    "get_matched_opportunities",
    "score_opportunity_match",
]
