"""Data normalization for opportunity records.

Turns raw rows from the opportunities spreadsheet export into validated
Opportunity models: day-first deadlines, rolling-intake placeholders and
"NA" prize/fee sentinels are all resolved here so matching sees clean data.
"""

import csv
import logging
import re
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from studiomate.matching.models import Opportunity

logger = logging.getLogger(__name__)

# Deadline used when an opportunity has no fixed closing date
ROLLING_DEADLINE_DAYS = 365
ROLLING_DEADLINE_MARKERS = ("accepting invitations",)

NOT_AVAILABLE_MARKERS = ("na", "n/a", "none")


class OpportunityNormalizer:
    """Normalizes raw opportunity rows to a consistent format."""

    # The source sheet is day-first; ISO is accepted for hand-edited rows
    DATE_FORMATS = [
        "%d/%m/%Y",           # 15/03/2026
        "%d/%m/%y",           # 15/03/26
        "%Y-%m-%d",           # ISO format
        "%d %B %Y",           # 15 March 2026
        "%d %b %Y",           # 15 Mar 2026
        "%B %d, %Y",          # March 15, 2026
    ]

    # Column names as exported by the web tier mapped to model fields
    COLUMN_MAP = {
        "artTypes": "art_types",
        "art types": "art_types",
    }

    def __init__(self, now: Optional[datetime] = None):
        """Initialize the normalizer.

        Args:
            now: Reference time for rolling deadlines (default: current UTC time)
        """
        self.now = now

    def _reference_time(self) -> datetime:
        return self.now if self.now is not None else datetime.now(timezone.utc)

    def rolling_deadline(self) -> datetime:
        """Deadline assigned to opportunities without a closing date."""
        return self._reference_time() + timedelta(days=ROLLING_DEADLINE_DAYS)

    def parse_deadline(self, value: Union[str, date, datetime, None]) -> datetime:
        """Convert a raw deadline value to an aware datetime.

        Empty values and rolling-intake markers map to a deadline one year out,
        as do values that cannot be parsed.

        Args:
            value: Raw deadline (string, date or datetime)

        Returns:
            Timezone-aware deadline
        """
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

        if not value or not value.strip():
            return self.rolling_deadline()

        text = value.strip()
        if text.lower() in ROLLING_DEADLINE_MARKERS:
            return self.rolling_deadline()

        # Remove ordinal suffixes like "1st", "22nd"
        text = re.sub(r'(\d+)(st|nd|rd|th)\b', r'\1', text)

        for fmt in self.DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                return parsed.replace(tzinfo=timezone.utc)
            except ValueError:
                continue

        logger.warning(f"Could not parse deadline {value!r}, treating as rolling")
        return self.rolling_deadline()

    def normalize_optional(self, value: Optional[str]) -> Optional[str]:
        """Map empty strings and NA sentinels to None."""
        if value is None:
            return None
        text = value.strip()
        if not text or text.lower() in NOT_AVAILABLE_MARKERS:
            return None
        return text

    def normalize_prize(self, value: Optional[str]) -> Optional[str]:
        return self.normalize_optional(value)

    def normalize_fee(self, value: Optional[str]) -> Optional[str]:
        return self.normalize_optional(value)

    def normalize_row(self, row: Dict[str, Any]) -> Opportunity:
        """Normalize a single raw row into an Opportunity.

        Args:
            row: Raw row dictionary (camelCase or snake_case keys)

        Returns:
            Validated Opportunity

        Raises:
            ValidationError: If the row cannot form a valid opportunity
        """
        data: Dict[str, Any] = {}
        for key, value in row.items():
            if key is None:
                continue
            name = self.COLUMN_MAP.get(key.strip(), key.strip().lower())
            data[name] = value.strip() if isinstance(value, str) else value

        data["deadline"] = self.parse_deadline(data.get("deadline"))
        data["prize"] = self.normalize_prize(data.get("prize"))
        data["fee"] = self.normalize_fee(data.get("fee"))
        data["art_types"] = self.normalize_optional(data.get("art_types"))
        data["link"] = data.get("link") or None

        return Opportunity.model_validate(data)

    def normalize_batch(self, rows: List[Dict[str, Any]]) -> List[Opportunity]:
        """Normalize a batch of rows, skipping rows that fail validation."""
        normalized = []
        for i, row in enumerate(rows, 1):
            try:
                normalized.append(self.normalize_row(row))
            except ValidationError as e:
                logger.warning(f"Skipping opportunity row {i}: {e}")

        logger.info(f"Normalized {len(normalized)} of {len(rows)} opportunities")
        return normalized

    def load_csv(self, path: Union[str, Path]) -> List[Opportunity]:
        """Read and normalize an opportunities CSV file.

        Args:
            path: Path to a CSV file with a header row

        Returns:
            List of Opportunity models
        """
        with open(path, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            rows = [row for row in reader if any((v or "").strip() for v in row.values() if isinstance(v, str))]

        return self.normalize_batch(rows)
