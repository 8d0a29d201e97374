"""
Event timestamp normalization at the ingestion boundary.

Clients have historically sent every flavour of ISO-8601:
'2025-07-22T13:00', '2025-07-22 13:00', '2025-07-22T13:00:00.000Z',
'2025-07-22T13:00+05:45', '2025-07-22'. Values without an offset are wall
clock time in the venue's timezone. Everything is stored as UTC.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.platform.exception.exceptions import InvalidInputError


def ensure_utc(value: datetime, default_tz: tzinfo = timezone.utc) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=default_tz)
    return value.astimezone(timezone.utc)


def parse_event_timestamp(
    raw: Optional[str | datetime], *, default_timezone: str = 'UTC'
) -> Optional[datetime]:
    if raw is None:
        return None

    if isinstance(raw, datetime):
        value = raw
    else:
        text = raw.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise InvalidInputError(f'Unrecognized timestamp: {raw!r}') from None

    try:
        venue_tz = ZoneInfo(default_timezone)
    except ZoneInfoNotFoundError:
        raise InvalidInputError(f'Unknown timezone: {default_timezone}') from None

    return ensure_utc(value, venue_tz)
