"""Profile module for artist profile management."""

from studiomate.profile.models import ArtistProfile, CareerStage, split_comma_list

__all__ = [
    "ArtistProfile",
    "CareerStage",
    "split_comma_list",
]
