"""Configuration management for StudioMate."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from studiomate.profile.models import ArtistProfile

# Default paths
DATA_DIR = Path(os.environ.get("STUDIOMATE_DATA_DIR", Path(__file__).parent.parent / "data"))
DEFAULT_PROFILE_PATH = DATA_DIR / "profile.yaml"
DEFAULT_DB_PATH = DATA_DIR / "studiomate.db"
LOG_PATH = DATA_DIR / "studiomate.log"

# Account-level keys copied onto the artist when a user record is loaded
USER_FIELDS = ("name", "email")


def ensure_data_dir() -> None:
    """Ensure the data directory exists."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def _artist_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a web-tier user record ({email, name, artist: {...}}) to artist fields."""
    artist = data.get("artist")
    if not isinstance(artist, dict):
        return data

    merged = dict(artist)
    for key in USER_FIELDS:
        if data.get(key) and not merged.get(key):
            merged[key] = data[key]
    return merged


def load_profile(path: Optional[Path] = None) -> ArtistProfile:
    """Load an artist profile from YAML.

    The file may hold the artist fields directly, or a user record with the
    artist nested under ``artist`` as the web tier exports it. Keys may be
    camelCase or snake_case.

    Args:
        path: Optional path to profile file. Defaults to data/profile.yaml.

    Returns:
        ArtistProfile instance. Returns empty profile if file doesn't exist.
    """
    path = path or DEFAULT_PROFILE_PATH

    if not path.exists():
        return ArtistProfile()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return ArtistProfile()

    return ArtistProfile.model_validate(_artist_data(data))


def save_profile(profile: ArtistProfile, path: Optional[Path] = None) -> Path:
    """Save an artist profile to YAML using the web tier's camelCase keys.

    Args:
        profile: ArtistProfile instance to save.
        path: Optional path to save to. Defaults to data/profile.yaml.

    Returns:
        Path where profile was saved.
    """
    path = path or DEFAULT_PROFILE_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    data = profile.model_dump(mode="json", by_alias=True, exclude_none=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

    return path


def profile_exists(path: Optional[Path] = None) -> bool:
    return (path or DEFAULT_PROFILE_PATH).exists()
