"""Queries over stored opportunities and saved matches."""

import logging
from datetime import datetime
from typing import Iterable, List, Tuple

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from studiomate.matching.models import Opportunity
from studiomate.matching.predicates import as_utc
from studiomate.matching.scorer import ScoredOpportunity
from studiomate.storage.models import OpportunityRecord, SavedMatch

logger = logging.getLogger(__name__)


def add_opportunities(session: Session, opportunities: Iterable[Opportunity]) -> List[OpportunityRecord]:
    """Insert opportunities and return the new records."""
    records = [OpportunityRecord.from_opportunity(o) for o in opportunities]
    session.add_all(records)
    session.flush()
    logger.info(f"Stored {len(records)} opportunities")
    return records


def list_open_opportunities(session: Session, now: datetime) -> List[Opportunity]:
    """Opportunities with a deadline at or after now, soonest first."""
    # Deadlines are stored as UTC without an offset
    cutoff = as_utc(now).replace(tzinfo=None)
    stmt = (
        select(OpportunityRecord)
        .where(OpportunityRecord.deadline >= cutoff)
        .order_by(OpportunityRecord.deadline.asc())
    )
    return [record.to_opportunity() for record in session.scalars(stmt)]


def count_opportunities(session: Session) -> int:
    return session.scalar(select(func.count()).select_from(OpportunityRecord)) or 0


def count_by_type(session: Session) -> List[Tuple[str, int]]:
    """Opportunity counts per type, most common first."""
    count = func.count(OpportunityRecord.id)
    stmt = (
        select(OpportunityRecord.type, count)
        .group_by(OpportunityRecord.type)
        .order_by(count.desc(), OpportunityRecord.type)
    )
    return [(type_, n) for type_, n in session.execute(stmt)]


def save_matches(
    session: Session,
    artist_email: str,
    scored: Iterable[ScoredOpportunity],
) -> int:
    """Replace an artist's saved matches with a new result set.

    Opportunities without an id cannot be referenced and are skipped.
    """
    session.execute(delete(SavedMatch).where(SavedMatch.artist_email == artist_email))

    saved = 0
    for match in scored:
        if not match.id:
            continue
        session.add(
            SavedMatch(
                artist_email=artist_email,
                opportunity_id=match.id,
                match_score=match.match_score,
                match_reasons=list(match.match_reasons),
            )
        )
        saved += 1

    session.flush()
    logger.info(f"Saved {saved} matches for {artist_email}")
    return saved


def list_saved_matches(session: Session, artist_email: str) -> List[SavedMatch]:
    """Saved matches for an artist, highest score first."""
    stmt = (
        select(SavedMatch)
        .where(SavedMatch.artist_email == artist_email)
        .order_by(SavedMatch.match_score.desc(), SavedMatch.id)
    )
    return list(session.scalars(stmt))
