"""
Tests for top-N match summaries and text predicates.
"""

from datetime import datetime, timedelta, timezone

from studiomate.matching import predicates
from studiomate.matching.matcher import find_matches, open_opportunities
from studiomate.profile.models import ArtistProfile


class TestPredicates:
    """Case-insensitive text helpers."""

    def test_normalize_none(self):
        assert predicates.normalize(None) == ""
        assert predicates.normalize("MiXed") == "mixed"

    def test_split_tokens_trims_and_lowercases(self):
        assert predicates.split_tokens(" Painting , SCULPTURE,video ") == ["painting", "sculpture", "video"]

    def test_split_tokens_absent(self):
        assert predicates.split_tokens(None) == []
        assert predicates.split_tokens("") == []

    def test_split_tokens_keeps_empty_tokens(self):
        assert predicates.split_tokens("painting,") == ["painting", ""]

    def test_contains_any_and_count(self):
        assert predicates.contains_any("Sydney, NSW", ["qld", "nsw"])
        assert not predicates.contains_any(None, ["nsw"])
        assert predicates.count_contained("Painting & Drawing", ["painting", "drawing", "video"]) == 2

    def test_days_until_rounds_up(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert predicates.days_until(now + timedelta(hours=1), now) == 1
        assert predicates.days_until(now + timedelta(days=2, hours=1), now) == 3
        assert predicates.days_until(now - timedelta(days=2), now) == -2

    def test_days_until_mixed_naive_and_aware(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert predicates.days_until(datetime(2026, 1, 11), now) == 10


class TestFindMatches:
    """Dashboard match selection."""

    def test_excludes_closed_opportunities(self, make_opportunity, now):
        artist = ArtistProfile(location="Sydney", interested_regions="europe")
        closed = make_opportunity(days=-1, location="Sydney")
        open_ = make_opportunity(days=5, location="Sydney")

        summary = find_matches(artist, [closed, open_], now=now)

        assert [m.id for m in summary.matches] == [open_.id]
        assert summary.total_matches == 1

    def test_limit_truncates_but_total_counts_all(self, make_opportunity, now):
        artist = ArtistProfile(location="Sydney", interested_regions="europe")
        opps = [make_opportunity(days=100 + i, location="Sydney") for i in range(12)]

        summary = find_matches(artist, opps, now=now)

        assert len(summary.matches) == 10
        assert summary.total_matches == 12

    def test_no_limit_returns_everything(self, make_opportunity, now):
        artist = ArtistProfile(location="Sydney", interested_regions="europe")
        opps = [make_opportunity(days=100 + i, location="Sydney") for i in range(12)]
        summary = find_matches(artist, opps, now=now, limit=None)
        assert len(summary.matches) == 12

    def test_equal_scores_ordered_by_deadline(self, make_opportunity, now):
        artist = ArtistProfile(location="Sydney", interested_regions="europe")
        later = make_opportunity(days=300, location="Sydney")
        sooner = make_opportunity(days=150, location="Sydney")

        summary = find_matches(artist, [later, sooner], now=now)

        assert [m.id for m in summary.matches] == [sooner.id, later.id]

    def test_open_opportunities_sorted_by_deadline(self, make_opportunity, now):
        a = make_opportunity(days=10)
        b = make_opportunity(days=2)
        c = make_opportunity(days=-3)
        assert [o.id for o in open_opportunities([a, b, c], now)] == [b.id, a.id]

    def test_to_dict(self, sydney_artist, make_opportunity, now):
        opp = make_opportunity(days=20, location="Sydney, NSW", type="grant")
        data = find_matches(sydney_artist, [opp], now=now).to_dict()

        assert data["totalMatches"] == 1
        assert data["matches"][0]["matchScore"] == 65
        assert data["matches"][0]["matchDescription"] == "Good Match"
