"""Hour-of-day helpers so every rule reads wall-clock time in one zone."""

from datetime import UTC, datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo


@lru_cache(maxsize=32)
def resolve_zone(name: str) -> tzinfo:
    """Look up an IANA zone name; raises ZoneInfoNotFoundError for unknown names."""
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def hour_in(moment: datetime, zone: str = "UTC") -> int:
    """Hour of day of `moment` as seen in `zone`, whatever offset it carries."""
    return moment.astimezone(resolve_zone(zone)).hour
