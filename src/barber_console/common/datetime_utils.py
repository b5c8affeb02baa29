from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..core.constants import SHOP_UTC_OFFSET_HOURS

SHOP_TZ = timezone(timedelta(hours=SHOP_UTC_OFFSET_HOURS), name="America/Recife")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_api_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the API ('Z' suffix allowed)."""
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc)


def to_shop_time(value: datetime) -> datetime:
    """Convert to the shop's fixed UTC-3 offset; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(SHOP_TZ)


def shop_now() -> datetime:
    return to_shop_time(now_utc())


def shop_today() -> date:
    return shop_now().date()


def shop_now_iso() -> str:
    return shop_now().isoformat()
