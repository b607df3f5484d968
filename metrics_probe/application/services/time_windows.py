"""Calendar-day windows in a named time zone, expressed in UTC."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from metrics_probe.domain.entities import TimeWindow
from metrics_probe.domain.errors import ZoneResolutionError
from metrics_probe.domain.ports import ClockPort

# Windows time zone ids mapped to their IANA equivalents
WINDOWS_ZONE_ALIASES = {
    "Pacific Standard Time": "America/Los_Angeles",
    "Mountain Standard Time": "America/Denver",
    "Central Standard Time": "America/Chicago",
    "Eastern Standard Time": "America/New_York",
    "Alaskan Standard Time": "America/Anchorage",
    "Hawaiian Standard Time": "Pacific/Honolulu",
    "GMT Standard Time": "Europe/London",
    "W. Europe Standard Time": "Europe/Berlin",
    "Romance Standard Time": "Europe/Paris",
    "Central European Standard Time": "Europe/Warsaw",
    "AUS Eastern Standard Time": "Australia/Sydney",
    "Tokyo Standard Time": "Asia/Tokyo",
    "India Standard Time": "Asia/Kolkata",
    "China Standard Time": "Asia/Shanghai",
    "UTC": "UTC",
}


def resolve_zone(zone_id: str | ZoneInfo) -> ZoneInfo:
    """Resolve an IANA or Windows time zone id. Resolved zones pass through.

    Raises:
        ZoneResolutionError: If the id is unknown to the time zone database.
    """
    if isinstance(zone_id, ZoneInfo):
        return zone_id

    key = WINDOWS_ZONE_ALIASES.get(zone_id, zone_id)
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ZoneResolutionError(f"Unknown time zone: {zone_id!r}") from e


def current_calendar_date(zone_id: str | ZoneInfo, clock: ClockPort) -> date:
    """Return the zone-local calendar date of the clock's current instant."""
    tz = resolve_zone(zone_id)
    now_utc = clock.now()
    if now_utc.tzinfo is None:
        now_utc = now_utc.replace(tzinfo=timezone.utc)
    return now_utc.astimezone(tz).date()


def window_for_date(local_date: date, zone_id: str | ZoneInfo, minute_offset: int = 0) -> TimeWindow:
    """Compute the UTC range covering one zone-local calendar day.

    Start is local midnight plus `minute_offset`, end is one day minus one
    second later in wall-clock time. Each bound is converted with the UTC
    offset in effect at that instant, so a day containing a DST transition
    is 23 or 25 hours long.
    """
    tz = resolve_zone(zone_id)
    start_local = datetime.combine(local_date, time(), tzinfo=tz) + timedelta(minutes=minute_offset)
    end_local = start_local + timedelta(days=1) - timedelta(seconds=1)

    return TimeWindow(
        local_date=local_date,
        start_utc=start_local.astimezone(timezone.utc),
        end_utc=end_local.astimezone(timezone.utc),
    )


def backward_windows(
    reference_date: date,
    zone_id: str | ZoneInfo,
    day_count: int,
    minute_offset: int = 0,
) -> list[TimeWindow]:
    """Windows for reference_date and the preceding days, most recent first."""
    if day_count < 1:
        raise ValueError(f"Day count must be >= 1, got {day_count}")

    tz = resolve_zone(zone_id)
    return [
        window_for_date(reference_date - timedelta(days=offset), tz, minute_offset)
        for offset in range(day_count)
    ]
