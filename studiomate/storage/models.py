"""SQLAlchemy models for the StudioMate database."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    DateTime,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from studiomate.matching.models import Opportunity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class OpportunityRecord(Base):
    """Core opportunity table."""

    __tablename__ = "opportunities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    organizer: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    type: Mapped[str] = mapped_column(String(100), nullable=False, default="", index=True)
    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    link: Mapped[Optional[str]] = mapped_column(Text)
    eligibility: Mapped[str] = mapped_column(Text, nullable=False, default="")
    art_types: Mapped[Optional[str]] = mapped_column(Text)
    fee: Mapped[Optional[str]] = mapped_column(String(200))
    prize: Mapped[Optional[str]] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    @classmethod
    def from_opportunity(cls, opportunity: Opportunity) -> "OpportunityRecord":
        # Subclasses such as ScoredOpportunity carry extra fields
        data = opportunity.model_dump(include=set(Opportunity.model_fields))
        if not data.get("id"):
            data.pop("id", None)
        data["deadline"] = data["deadline"].astimezone(timezone.utc)
        return cls(**data)

    def to_opportunity(self) -> Opportunity:
        return Opportunity(
            id=self.id,
            title=self.title,
            organizer=self.organizer,
            description=self.description,
            location=self.location,
            type=self.type,
            deadline=self.deadline,
            link=self.link,
            eligibility=self.eligibility,
            art_types=self.art_types,
            fee=self.fee,
            prize=self.prize,
        )

    def __repr__(self) -> str:
        return f"<OpportunityRecord(id={self.id!r}, title={self.title!r}, type={self.type!r})>"


class SavedMatch(Base):
    """Match results saved for an artist."""

    __tablename__ = "saved_matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    artist_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    opportunity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    match_score: Mapped[int] = mapped_column(Integer, nullable=False)
    match_reasons: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    matched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        UniqueConstraint("artist_email", "opportunity_id", name="uq_artist_opportunity"),
    )

    def __repr__(self) -> str:
        return (
            f"<SavedMatch(artist_email={self.artist_email!r}, "
            f"opportunity_id={self.opportunity_id!r}, match_score={self.match_score})>"
        )
