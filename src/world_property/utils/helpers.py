"""
Utility functions and helpers
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalise_email(email: str) -> str:
    return email.strip().lower()


def normalise_optional(value: Optional[str]) -> Optional[str]:
    """Trim a value, treating blank strings as missing"""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None
