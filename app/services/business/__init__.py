"""
Business logic services package.

This package contains the opening hours engine:
- Weekly interval model and range/overlap validation
- Point-in-time open/closed evaluation
- Weekly schedule formatting
"""

from .hours import (
    Interval,
    RestaurantStatus,
    OpeningHoursError,
    IntervalOutOfRangeError,
    IntervalOverlapError,
    WEEKDAY_NAMES,
    intervals_overlap,
    find_overlaps,
    validate_intervals,
    matching_intervals,
    is_open_at,
    weekly_schedule,
)

__all__ = [
    'Interval',
    'RestaurantStatus',
    'OpeningHoursError',
    'IntervalOutOfRangeError',
    'IntervalOverlapError',
    'WEEKDAY_NAMES',
    'intervals_overlap',
    'find_overlaps',
    'validate_intervals',
    'matching_intervals',
    'is_open_at',
    'weekly_schedule',
]
