"""
Time-of-day detection, optionally from astronomical sun times via Astral.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from astral import LocationInfo
from astral.sun import sun

from seasonal_glass.logger import logger
from seasonal_glass.models import TimeOfDay


def solar_timezone(longitude: float) -> timezone:
    """Fixed-offset zone of local mean solar time (4 minutes per degree)."""
    return timezone(timedelta(minutes=round(longitude * 4)))


def get_sun_times(latitude: float, longitude: float, when: Optional[datetime] = None) -> dict:
    """
    Return Astral's dawn/sunrise/noon/sunset/dusk for the observer's local day.

    The local day is the calendar date of `when` in the observer's solar
    time zone, so events east or west of Greenwich belong to the same
    day as `when` there. A naive `when` is read as host local time.
    """
    when = when or datetime.now(timezone.utc)
    if when.tzinfo is None:
        when = when.astimezone()

    local_tz = solar_timezone(longitude)
    location = LocationInfo(latitude=latitude, longitude=longitude)
    return sun(location.observer, date=when.astimezone(local_tz).date(), tzinfo=local_tz)


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    if 6 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 18:
        return TimeOfDay.DAY
    if 18 <= hour < 22:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def detect_time_of_day(
    now: Optional[datetime] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> TimeOfDay:
    """
    Classify `now` into a time of day.

    A naive `now` is host local time. Without a location the clock hour
    of `now` decides. With one, the sun decides: sunrise..noon is
    morning, noon..sunset is day, sunset..dusk is evening and everything
    else is night. Polar days/nights where the sun never crosses the
    horizon fall back to the hour table.
    """
    now = now or datetime.now().astimezone()

    if latitude is None or longitude is None:
        return time_of_day_for_hour(now.hour)

    aware = now if now.tzinfo is not None else now.astimezone()

    try:
        s = get_sun_times(latitude, longitude, aware)
    except ValueError as e:
        logger.debug(f"Sun times unavailable at ({latitude}, {longitude}): {e}")
        return time_of_day_for_hour(now.hour)

    if s["sunrise"] <= aware < s["noon"]:
        return TimeOfDay.MORNING
    if s["noon"] <= aware < s["sunset"]:
        return TimeOfDay.DAY
    if s["sunset"] <= aware < s["dusk"]:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT
