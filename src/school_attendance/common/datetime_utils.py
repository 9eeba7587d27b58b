from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None


def today_local() -> date:
    """Current calendar day.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)
