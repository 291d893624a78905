"""
Seasonal boundary (equinox/solstice) calculations.

Exact boundary instants are tabled for known years; other years fall
back to fixed calendar windows around the approximate dates.
"""

from datetime import date as date_type, datetime, timedelta, timezone
from typing import Optional

from seasonal_glass.models import BoundaryType, Season, SeasonalBoundary

BOUNDARY_TOLERANCE = timedelta(days=1)

_LABELS = {
    Season.SPRING: ("Spring Equinox", BoundaryType.EQUINOX),
    Season.SUMMER: ("Summer Solstice", BoundaryType.SOLSTICE),
    Season.AUTUMN: ("Autumn Equinox", BoundaryType.EQUINOX),
    Season.WINTER: ("Winter Solstice", BoundaryType.SOLSTICE),
}


def _boundary(season: Season, when: datetime, approximate: bool = False) -> SeasonalBoundary:
    label, boundary_type = _LABELS[season]
    if approximate:
        label = f"{label} (Approximate)"
    return SeasonalBoundary(date=when, season=season, type=boundary_type, label=label)


def _utc(year, month, day, hour=0, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


SEASONAL_BOUNDARIES: dict[int, list[SeasonalBoundary]] = {
    2024: [
        _boundary(Season.SPRING, _utc(2024, 3, 20, 3, 6)),
        _boundary(Season.SUMMER, _utc(2024, 6, 20, 20, 51)),
        _boundary(Season.AUTUMN, _utc(2024, 9, 22, 12, 44)),
        _boundary(Season.WINTER, _utc(2024, 12, 21, 9, 21)),
    ],
    2025: [
        _boundary(Season.SPRING, _utc(2025, 3, 20, 9, 1)),
        _boundary(Season.SUMMER, _utc(2025, 6, 21, 2, 42)),
        _boundary(Season.AUTUMN, _utc(2025, 9, 22, 18, 19)),
        _boundary(Season.WINTER, _utc(2025, 12, 21, 15, 3)),
    ],
}

# (month, approximate day, first window day, last window day)
APPROXIMATE_WINDOWS = {
    Season.SPRING: (3, 20, 19, 22),
    Season.SUMMER: (6, 21, 19, 22),
    Season.AUTUMN: (9, 22, 21, 24),
    Season.WINTER: (12, 21, 20, 23),
}


def _as_utc(when) -> datetime:
    """Promote a date or naive datetime to an aware UTC datetime."""
    if not isinstance(when, datetime):
        return datetime(when.year, when.month, when.day, tzinfo=timezone.utc)
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when


def get_current_season(when: Optional[date_type] = None) -> Season:
    """
    Map a calendar date to its season (Northern Hemisphere).

    spring Mar 20 - Jun 20, summer Jun 21 - Sep 22,
    autumn Sep 23 - Dec 20, winter Dec 21 - Mar 19.
    """
    if when is None:
        when = datetime.now()
    month, day = when.month, when.day

    if (month == 3 and day >= 20) or month in (4, 5) or (month == 6 and day < 21):
        return Season.SPRING
    if (month == 6 and day >= 21) or month in (7, 8) or (month == 9 and day < 23):
        return Season.SUMMER
    if (month == 9 and day >= 23) or month in (10, 11) or (month == 12 and day < 21):
        return Season.AUTUMN
    return Season.WINTER


def get_seasonal_boundaries(year: int) -> list[SeasonalBoundary]:
    """Return the four boundaries of a year, exact when tabled."""
    if year in SEASONAL_BOUNDARIES:
        return list(SEASONAL_BOUNDARIES[year])
    return [
        _boundary(season, _utc(year, month, day), approximate=True)
        for season, (month, day, _, _) in APPROXIMATE_WINDOWS.items()
    ]


def detect_seasonal_boundary(when) -> Optional[SeasonalBoundary]:
    """
    Return the boundary `when` falls on, or None.

    Tabled years match within one day of the exact instant; other years
    match a calendar window of a few days around the approximate date.
    """
    when = _as_utc(when)
    boundaries = SEASONAL_BOUNDARIES.get(when.year)

    if boundaries is None:
        for season, (month, day, first, last) in APPROXIMATE_WINDOWS.items():
            if when.month == month and first <= when.day <= last:
                return _boundary(season, _utc(when.year, month, day), approximate=True)
        return None

    for boundary in boundaries:
        if abs(when - boundary.date) <= BOUNDARY_TOLERANCE:
            return boundary

    return None


def get_next_seasonal_boundary(when) -> Optional[SeasonalBoundary]:
    """Return the earliest boundary strictly after `when`."""
    when = _as_utc(when)

    for year in (when.year, when.year + 1):
        for boundary in get_seasonal_boundaries(year):
            if boundary.date > when:
                return boundary

    return None
