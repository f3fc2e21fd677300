"""
Calendar Scope Engine: calendar-aligned bucket arithmetic.

Buckets are computed from calendar fields, never from fixed durations, since
months and years vary in length:

    day          local midnight to next midnight
    week         7 days from the configured week-start day (Monday or Sunday)
    month        first of month to first of next month
    three_months Jan 1 to next Jan 1 (calendar quarter when quarters are aligned)
    six_months   Jan 1 to next Jan 1 (calendar half-year when quarters are aligned)
    year         Jan 1 to next Jan 1

Timestamps are wall-clock datetimes. Aware datetimes keep their tzinfo on
every boundary; naive ones stay naive.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

import structlog

from periodlens.errors import CalendarInvariantError
from periodlens.models.enums import Scope
from periodlens.models.intervals import Interval

logger = structlog.get_logger()

# Bucket width in months for month-based scopes when quarters are aligned
_ALIGNED_MONTH_SPANS = {
    Scope.MONTH: 1,
    Scope.THREE_MONTHS: 3,
    Scope.SIX_MONTHS: 6,
    Scope.YEAR: 12,
}


def coerce_timestamp(value: Union[datetime, date]) -> datetime:
    """Promote a date to its midnight; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _add_months(moment: datetime, months: int) -> datetime:
    """Shift a first-of-month instant by whole months."""
    index = moment.year * 12 + (moment.month - 1) + months
    return moment.replace(year=index // 12, month=index % 12 + 1)


def _month_span(scope: Scope, calendar_aligned_quarters: bool) -> int:
    if scope in (Scope.THREE_MONTHS, Scope.SIX_MONTHS) and not calendar_aligned_quarters:
        return 12
    return _ALIGNED_MONTH_SPANS[scope]


def interval_containing(
    moment: Union[datetime, date],
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> Interval:
    """
    Calendar bucket of the given scope that contains moment.

    Args:
        moment: Timestamp to locate
        scope: Calendar granularity
        week_starts_on_monday: Week-start day for the week scope only
        calendar_aligned_quarters: Quarter/half-year buckets for the three
            and six month scopes instead of year buckets

    Returns:
        Interval with start <= moment < end
    """
    moment = coerce_timestamp(moment)
    scope = Scope(scope)
    midnight = _midnight(moment)

    if scope == Scope.DAY:
        return Interval(start=midnight, end=midnight + timedelta(days=1))

    if scope == Scope.WEEK:
        if week_starts_on_monday:
            offset = moment.weekday()
        else:
            offset = (moment.weekday() + 1) % 7
        start = midnight - timedelta(days=offset)
        return Interval(start=start, end=start + timedelta(days=7))

    span = _month_span(scope, calendar_aligned_quarters)
    first_month = (moment.month - 1) // span * span + 1
    start = midnight.replace(month=first_month, day=1)
    return Interval(start=start, end=_add_months(start, span))


def interval_after(
    interval: Interval,
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> Interval:
    """
    Next calendar bucket after interval.

    For an aligned bucket this is the bucket starting at interval.end. For an
    arbitrary interval it is the first bucket starting at or after its end.

    Raises:
        CalendarInvariantError: If the next bucket does not start strictly
            after interval.start
    """
    scope = Scope(scope)
    following = interval_containing(
        interval.end, scope, week_starts_on_monday, calendar_aligned_quarters
    )
    if following.start < interval.end:
        following = interval_containing(
            following.end, scope, week_starts_on_monday, calendar_aligned_quarters
        )

    if not following.start > interval.start:
        logger.error(
            "interval_stepping_stalled",
            scope=scope.value,
            start=interval.start.isoformat(),
            next_start=following.start.isoformat(),
        )
        raise CalendarInvariantError(
            f"Interval after {interval.start.isoformat()} did not advance for scope {scope.value}"
        )
    return following


def iter_intervals(
    first: Union[datetime, date],
    last: Union[datetime, date],
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> Iterator[Interval]:
    """
    Yield every bucket from the one containing first to the one containing last.

    Terminates because interval_after strictly advances.
    """
    last = coerce_timestamp(last)
    current = interval_containing(first, scope, week_starts_on_monday, calendar_aligned_quarters)
    while current.start <= last:
        yield current
        current = interval_after(current, scope, week_starts_on_monday, calendar_aligned_quarters)
