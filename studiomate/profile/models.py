"""Pydantic models for artist profile data."""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field


def split_comma_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated free-text field into lowercased, trimmed tokens."""
    if not value:
        return []
    return [token.strip() for token in value.lower().split(",")]


class CareerStage(str, Enum):
    """Expected career stage values.

    Matching does substring checks on the raw string, so other values are
    accepted on the profile as well.
    """

    EMERGING = "emerging"
    MID = "mid"
    ESTABLISHED = "established"


class ArtistProfile(BaseModel):
    """Artist profile used for opportunity matching."""

    model_config = ConfigDict(populate_by_name=True)

    # Profile metadata
    name: Optional[str] = Field(None, description="Artist's name")
    email: Optional[str] = Field(None, description="Email address")
    bio: Optional[str] = Field(None, description="Short artist biography")

    # Matching fields
    location: Optional[str] = Field(None, description="City or region the artist is based in")
    career_stage: Optional[str] = Field(
        None,
        alias="careerStage",
        description="Career stage: emerging, mid, established",
    )
    artistic_focus: Optional[str] = Field(
        None,
        alias="artisticFocus",
        description="Comma-separated mediums, e.g. 'painting, sculpture'",
    )
    interested_regions: Optional[str] = Field(
        None,
        alias="interestedRegions",
        description="Comma-separated regions, e.g. 'australia, new zealand'",
    )

    MATCHING_FIELDS: ClassVar[tuple[str, ...]] = ("location", "career_stage", "artistic_focus", "interested_regions")

    def focus_list(self) -> list[str]:
        """Mediums from artistic_focus as lowercased tokens."""
        return split_comma_list(self.artistic_focus)

    def region_list(self) -> list[str]:
        """Regions from interested_regions as lowercased tokens."""
        return split_comma_list(self.interested_regions)

    def known_career_stage(self) -> Optional[CareerStage]:
        """The career stage as a CareerStage, or None if it is free text or absent."""
        if not self.career_stage:
            return None
        try:
            return CareerStage(self.career_stage.strip().lower())
        except ValueError:
            return None

    def is_empty(self) -> bool:
        """Check if profile has any data used for matching."""
        return not any(getattr(self, field_name) for field_name in self.MATCHING_FIELDS)

    def completion_percentage(self) -> float:
        """Calculate matching-field completion percentage."""
        filled = sum(1 for field_name in self.MATCHING_FIELDS if getattr(self, field_name))
        return filled / len(self.MATCHING_FIELDS) * 100

    def get_summary(self) -> dict:
        """Get a summary of key profile attributes for display."""
        return {
            "name": self.name,
            "location": self.location,
            "career_stage": self.career_stage,
            "mediums": self.focus_list(),
            "regions": self.region_list(),
            "completion": f"{self.completion_percentage():.0f}%",
        }
