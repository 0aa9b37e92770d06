"""Time helpers.

Stored timestamps are UTC. Rendering (system placeholders, default document
names) happens in the configured display zone via to_zone.
"""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """Default engine clock: aware UTC now. Tests inject a fixed clock instead."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC; naive values (SQLite reads) are taken to be UTC already."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_zone(dt: datetime, zone_name: str) -> datetime:
    """Convert dt (naive means UTC) to the IANA zone zone_name, e.g. "Europe/Istanbul"."""
    aware = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt
    return aware.astimezone(ZoneInfo(zone_name))
