"""
Opening hours engine.
Validates weekly opening intervals and decides whether a restaurant is open at a given moment.

Weekdays are keyed 0=Sunday .. 6=Saturday, times are minutes since local midnight.
An interval whose closes_at is smaller than its opens_at runs past midnight, but it
stays keyed to the weekday it opened on.
"""
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass

WEEKDAY_NAMES = ['sunday', 'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday']

MINUTES_PER_DAY = 24 * 60
MAX_MINUTE = MINUTES_PER_DAY - 1


class RestaurantStatus(str, Enum):
    DRAFT = "DRAFT"
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    SUSPENDED = "SUSPENDED"


class OpeningHoursError(ValueError):
    """base error for rejected opening hours."""


class IntervalOutOfRangeError(OpeningHoursError):
    """a weekday or minute value is outside its domain."""

    def __init__(self, field: str, value: Any, index: Optional[int] = None):
        self.field = field
        self.value = value
        self.index = index
        bounds = "0 and 6" if field == "weekday" else f"0 and {MAX_MINUTE}"
        message = f"{field} must be between {bounds}, got {value}"
        if index is not None:
            message = f"hours[{index}]: {message}"
        super().__init__(message)


class IntervalOverlapError(OpeningHoursError):
    """two intervals on the same weekday conflict."""

    def __init__(self, weekday: int, first: "Interval", second: "Interval"):
        self.weekday = weekday
        self.first = first
        self.second = second
        super().__init__(f"opening hours overlap on weekday {weekday}")


@dataclass(frozen=True)
class Interval:
    """one weekly opening interval."""
    weekday: int  # 0=Sunday, 6=Saturday
    opens_at: int  # minutes since midnight
    closes_at: int  # minutes since midnight, smaller than opens_at when it runs past midnight

    @property
    def crosses_midnight(self) -> bool:
        return self.closes_at < self.opens_at

    @classmethod
    def from_obj(cls, obj: Any) -> "Interval":
        """build an interval from an ORM row, a pydantic model, a mapping or a triple."""
        if isinstance(obj, Interval):
            return obj
        if isinstance(obj, Mapping):
            return cls(obj["weekday"], obj["opens_at"], obj["closes_at"])
        if isinstance(obj, (tuple, list)):
            weekday, opens_at, closes_at = obj
            return cls(weekday, opens_at, closes_at)
        return cls(obj.weekday, obj.opens_at, obj.closes_at)


def coerce_intervals(items: Optional[Iterable[Any]]) -> List[Interval]:
    if not items:
        return []
    return [Interval.from_obj(item) for item in items]


def weekday_of(instant: datetime) -> int:
    """weekday of an instant with Sunday as 0."""
    return instant.isoweekday() % 7


def minutes_of_day(instant: datetime) -> int:
    """minutes since midnight, seconds are dropped."""
    return instant.hour * 60 + instant.minute


def parse_hhmm(value: str) -> int:
    """convert 'HH:MM' into minutes since midnight."""
    try:
        hour_raw, minute_raw = value.strip().split(":")
        hour, minute = int(hour_raw), int(minute_raw)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time format '{value}'. Use HH:MM")
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time '{value}'. Use HH:MM between 00:00 and 23:59")
    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """convert minutes since midnight into 'HH:MM'."""
    if not 0 <= minutes <= MAX_MINUTE:
        raise ValueError(f"minutes must be between 0 and {MAX_MINUTE}, got {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _check_range(interval: Interval, index: int) -> None:
    if not 0 <= interval.weekday <= 6:
        raise IntervalOutOfRangeError("weekday", interval.weekday, index)
    if not 0 <= interval.opens_at <= MAX_MINUTE:
        raise IntervalOutOfRangeError("opens_at", interval.opens_at, index)
    if not 0 <= interval.closes_at <= MAX_MINUTE:
        raise IntervalOutOfRangeError("closes_at", interval.closes_at, index)


def intervals_overlap(h1: Interval, h2: Interval) -> bool:
    """decide whether two intervals on the same weekday conflict.

    Two same-day intervals use the half-open intersection test. Two intervals that
    both run past midnight always conflict. A mixed pair uses a deliberately loose
    check that also flags some pairs that never share a minute; it is kept as is.
    """
    if h1.opens_at < h1.closes_at and h2.opens_at < h2.closes_at:
        return not (h1.closes_at <= h2.opens_at or h2.closes_at <= h1.opens_at)

    if h1.crosses_midnight and h2.crosses_midnight:
        return True

    if h1.crosses_midnight:
        return (h2.opens_at >= h1.opens_at or h2.closes_at <= h1.closes_at
                or h2.opens_at < h1.closes_at or h2.closes_at > h1.opens_at)

    if h2.crosses_midnight:
        return (h1.opens_at >= h2.opens_at or h1.closes_at <= h2.closes_at
                or h1.opens_at < h2.closes_at or h1.closes_at > h2.opens_at)

    # at least one side is zero-length (opens_at == closes_at) and neither wraps
    return False


def _group_by_weekday(intervals: Sequence[Interval]) -> Dict[int, List[Interval]]:
    grouped: Dict[int, List[Interval]] = {}
    for interval in intervals:
        grouped.setdefault(interval.weekday, []).append(interval)
    return grouped


def find_overlaps(candidate: Iterable[Any]) -> List[Tuple[Interval, Interval]]:
    """all conflicting pairs, ordered by weekday and then by input position."""
    intervals = coerce_intervals(candidate)
    conflicts: List[Tuple[Interval, Interval]] = []
    grouped = _group_by_weekday(intervals)
    for weekday in sorted(grouped):
        day_hours = grouped[weekday]
        for i in range(len(day_hours)):
            for j in range(i + 1, len(day_hours)):
                if intervals_overlap(day_hours[i], day_hours[j]):
                    conflicts.append((day_hours[i], day_hours[j]))
    return conflicts


def validate_intervals(candidate: Iterable[Any]) -> List[Interval]:
    """check a full replacement set of opening hours.

    Raises IntervalOutOfRangeError for the first entry with a value outside its domain,
    then IntervalOverlapError for the first conflicting pair (lowest weekday first,
    then input order). Returns the accepted intervals in input order.
    """
    intervals = coerce_intervals(candidate)

    for index, interval in enumerate(intervals):
        _check_range(interval, index)

    grouped = _group_by_weekday(intervals)
    for weekday in sorted(grouped):
        day_hours = grouped[weekday]
        if len(day_hours) <= 1:
            continue
        for i in range(len(day_hours)):
            for j in range(i + 1, len(day_hours)):
                if intervals_overlap(day_hours[i], day_hours[j]):
                    raise IntervalOverlapError(weekday, day_hours[i], day_hours[j])

    return intervals


def _covers(interval: Interval, current_minutes: int) -> bool:
    if interval.crosses_midnight:
        return current_minutes >= interval.opens_at or current_minutes < interval.closes_at
    return interval.opens_at <= current_minutes < interval.closes_at


def matching_intervals(intervals: Iterable[Any], instant: datetime) -> List[Interval]:
    """every interval keyed to the instant's weekday that covers its minute."""
    current_weekday = weekday_of(instant)
    current_minutes = minutes_of_day(instant)
    return [
        interval for interval in coerce_intervals(intervals)
        if interval.weekday == current_weekday and _covers(interval, current_minutes)
    ]


def is_open_at(status: Any, intervals: Optional[Iterable[Any]], instant: datetime) -> bool:
    """check if an owner with this status and these hours is open at a local wall-clock instant."""
    if status != RestaurantStatus.OPEN:
        return False

    hours = coerce_intervals(intervals)
    if not hours:
        return False

    current_weekday = weekday_of(instant)
    current_minutes = minutes_of_day(instant)

    for interval in hours:
        if interval.weekday == current_weekday and _covers(interval, current_minutes):
            return True

    return False


def weekly_schedule(intervals: Iterable[Any]) -> Dict[str, List[Dict[str, Any]]]:
    """get formatted weekly hours for API response."""
    grouped = _group_by_weekday(coerce_intervals(intervals))
    schedule: Dict[str, List[Dict[str, Any]]] = {}

    for weekday, day_name in enumerate(WEEKDAY_NAMES):
        day_hours = sorted(grouped.get(weekday, []), key=lambda h: (h.opens_at, h.closes_at))
        schedule[day_name] = [
            {
                'opens_at': format_minutes(h.opens_at),
                'closes_at': format_minutes(h.closes_at),
                'crosses_midnight': h.crosses_midnight,
            }
            for h in day_hours
        ]

    return schedule
