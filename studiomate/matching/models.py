"""Pydantic model for opportunity records fed to the matcher."""

from datetime import date, datetime, time, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sentinel used by the source data for "no prize" / "no fee"
NOT_AVAILABLE = "NA"


class Opportunity(BaseModel):
    """A funding, exhibition, residency or prize opportunity."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Record identifier")
    title: str = Field("", description="Opportunity title")
    organizer: str = Field("", description="Organising body")
    description: str = Field("", description="Free-text description")
    location: str = Field("", description="Where the opportunity takes place")
    type: str = Field("", description="Category: grant, exhibition, residency, prize, ...")
    deadline: datetime = Field(..., description="Application deadline")
    link: Optional[str] = Field(None, description="Application or info URL")
    eligibility: str = Field("", description="Who may apply, as free text")
    art_types: Optional[str] = Field(
        None, alias="artTypes", description="Accepted mediums, as free text"
    )
    fee: Optional[str] = Field(None, description="Entry fee, as free text")
    prize: Optional[str] = Field(None, description="Prize or funding amount, or 'NA'")

    @field_validator("title", "organizer", "description", "location", "type", "eligibility", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("deadline", mode="before")
    @classmethod
    def _date_to_datetime(cls, value: Any) -> Any:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min, tzinfo=timezone.utc)
        return value

    @field_validator("deadline")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive deadlines are stored in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def has_prize(self) -> bool:
        """True when a prize is listed and is not the 'NA' sentinel."""
        return bool(self.prize) and self.prize != NOT_AVAILABLE

    def __repr__(self) -> str:
        return f"<Opportunity(id={self.id!r}, title={self.title!r}, type={self.type!r})>"
