"""
Tests for database storage and queries.
"""

from datetime import timedelta, timezone

import pytest

from studiomate.matching.scorer import score_opportunity_match
from studiomate.storage.database import get_session
from studiomate.storage.models import OpportunityRecord
from studiomate.storage.repository import (
    add_opportunities,
    count_by_type,
    count_opportunities,
    list_open_opportunities,
    list_saved_matches,
    save_matches,
)

AEST = timezone(timedelta(hours=10))


class TestOpportunityStorage:
    """Opportunity persistence."""

    def test_round_trip_preserves_fields(self, db, make_opportunity):
        opp = make_opportunity(
            days=12,
            organizer="Create NSW",
            location="Sydney, NSW",
            type="Grant",
            eligibility="Emerging",
            art_types="painting",
            prize="$5,000",
        )
        with get_session() as session:
            add_opportunities(session, [opp])

        with get_session() as session:
            record = session.get(OpportunityRecord, opp.id)
            loaded = record.to_opportunity()

        assert loaded.title == opp.title
        assert loaded.art_types == "painting"
        assert loaded.prize == "$5,000"
        assert loaded.deadline == opp.deadline

    def test_generates_id_when_missing(self, db, make_opportunity):
        opp = make_opportunity(id=None)
        with get_session() as session:
            records = add_opportunities(session, [opp])
            assert records[0].id

    def test_stores_scored_opportunity(self, db, sydney_artist, make_opportunity, now):
        """Scored opportunities store only their opportunity fields."""
        scored = score_opportunity_match(sydney_artist, make_opportunity(days=5, type="grant"), now)
        with get_session() as session:
            add_opportunities(session, [scored])

        with get_session() as session:
            loaded = session.get(OpportunityRecord, scored.id).to_opportunity()

        assert loaded.type == "grant"
        assert loaded.deadline == scored.deadline
        assert not hasattr(loaded, "match_score")

    def test_list_open_opportunities(self, db, make_opportunity, now):
        later = make_opportunity(days=40)
        closed = make_opportunity(days=-2)
        sooner = make_opportunity(days=3)
        with get_session() as session:
            add_opportunities(session, [later, closed, sooner])

        with get_session() as session:
            open_ = list_open_opportunities(session, now)

        assert [o.id for o in open_] == [sooner.id, later.id]

    def test_deadline_offsets_stored_as_utc(self, db, make_opportunity, now):
        opp = make_opportunity(days=1)
        shifted = opp.model_copy(update={"deadline": opp.deadline.astimezone(AEST)})
        with get_session() as session:
            add_opportunities(session, [shifted])

        with get_session() as session:
            assert [o.deadline for o in list_open_opportunities(session, now)] == [opp.deadline]

    def test_count_by_type(self, db, make_opportunity):
        with get_session() as session:
            add_opportunities(session, [
                make_opportunity(type="Grant"),
                make_opportunity(type="Prize"),
                make_opportunity(type="Grant"),
            ])

        with get_session() as session:
            assert count_opportunities(session) == 3
            assert count_by_type(session) == [("Grant", 2), ("Prize", 1)]

    def test_session_rolls_back_on_error(self, db, make_opportunity):
        with pytest.raises(RuntimeError):
            with get_session() as session:
                add_opportunities(session, [make_opportunity()])
                raise RuntimeError("boom")

        with get_session() as session:
            assert count_opportunities(session) == 0


class TestSavedMatches:
    """Saved match persistence."""

    def test_save_replaces_previous_matches(self, db, sydney_artist, make_opportunity, now):
        first = score_opportunity_match(sydney_artist, make_opportunity(location="Sydney"), now)
        second = score_opportunity_match(sydney_artist, make_opportunity(type="grant", days=5), now)

        with get_session() as session:
            assert save_matches(session, "alex@example.com", [first, second]) == 2
        with get_session() as session:
            assert save_matches(session, "alex@example.com", [second]) == 1

        with get_session() as session:
            saved = list_saved_matches(session, "alex@example.com")
            assert [m.opportunity_id for m in saved] == [second.id]
            assert saved[0].match_reasons == second.match_reasons

    def test_skips_matches_without_id(self, db, sydney_artist, make_opportunity, now):
        scored = score_opportunity_match(sydney_artist, make_opportunity(id=None), now)
        with get_session() as session:
            assert save_matches(session, "alex@example.com", [scored]) == 0

    def test_list_orders_by_score(self, db, sydney_artist, make_opportunity, now):
        low = score_opportunity_match(sydney_artist, make_opportunity(type="grant"), now)
        high = score_opportunity_match(sydney_artist, make_opportunity(location="Sydney, NSW"), now)
        with get_session() as session:
            save_matches(session, "alex@example.com", [low, high])
            saved = list_saved_matches(session, "alex@example.com")
            assert [m.match_score for m in saved] == [55, 5]
