"""
Trend Engine: period-over-period comparison.

Compares a segment's combined value with the previous segment's. When the
later segment is still in progress at `now`, the previous period is cut to
the same elapsed fraction so a half-finished week is compared with the first
half of last week, not the whole of it.

    progress = clamp((now - later.start) / later.duration, 0, 1)
    earlier  = combined_value([prev.start, prev.start + progress * prev.duration))
"""

from datetime import date, datetime, timedelta
from typing import Mapping, Optional, Union

import structlog

from periodlens.engine.calendar import coerce_timestamp, iter_intervals
from periodlens.engine.timeseries import TimeSeriesDataSource
from periodlens.models.enums import Scope, TrendResult, TrendSentiment
from periodlens.models.series import KPIPeriod

logger = structlog.get_logger()


def classify(earlier: float, later: float) -> TrendResult:
    """UP if earlier < later, DOWN if earlier > later, NEUTRAL otherwise."""
    if earlier > later:
        return TrendResult.DOWN
    if earlier < later:
        return TrendResult.UP
    return TrendResult.NEUTRAL


def sentiment(trend: TrendResult, higher_is_better: bool = True) -> TrendSentiment:
    """Read a trend against whether higher values are better."""
    if trend == TrendResult.NEUTRAL:
        return TrendSentiment.UNCHANGED
    rising = trend == TrendResult.UP
    if rising == higher_is_better:
        return TrendSentiment.IMPROVING
    return TrendSentiment.WORSENING


def period_progress(start: datetime, end: datetime, now: datetime) -> float:
    """Elapsed fraction of [start, end) at now, clamped to [0, 1]."""
    fraction = (now - start) / (end - start)
    return min(max(fraction, 0.0), 1.0)


def trend_for_segment(
    source: TimeSeriesDataSource,
    segment_index: int,
    now: datetime,
) -> Optional[TrendResult]:
    """
    Trend of a segment against the one before it.

    Args:
        source: Data source providing segments and combined values
        segment_index: Index of the later segment
        now: Reference instant supplied by the caller

    Returns:
        The trend, or None when there is no previous segment, the segment has
        not started at now, or a combined value is unavailable

    Raises:
        SegmentIndexError: If segment_index is outside the series
    """
    series = source.time_series()
    current = series.interval_for_segment(segment_index)
    if segment_index == 0:
        return None

    previous = series.interval_for_segment(segment_index - 1)
    progress = period_progress(current.start, current.end, now)
    # timedelta scaling rounds to microseconds, so tiny progress can still be empty
    if previous.duration * progress <= timedelta(0):
        logger.debug(
            "trend_progress_unavailable",
            segment_index=segment_index,
            now=now.isoformat(),
        )
        return None

    earlier_window = previous if progress >= 1.0 else previous.prefix(progress)

    later_value = source.combined_value(current)
    earlier_value = source.combined_value(earlier_window)
    if later_value is None or earlier_value is None:
        return None

    trend = classify(earlier_value, later_value)
    logger.debug(
        "segment_trend_computed",
        segment_index=segment_index,
        progress=progress,
        earlier_value=earlier_value,
        later_value=later_value,
        trend=trend.value,
    )
    return trend


def kpi_trend_series(
    counts_by_date: Mapping[Union[datetime, date], int],
    scope: Scope,
    now: datetime,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> tuple[list[KPIPeriod], int]:
    """
    Per-period sums of a date -> count snapshot, each trended against the last.

    The strip always reaches now: it runs from the bucket holding the earlier
    of (earliest sample, now) to the bucket holding the later of (latest
    sample, now). Completed periods are compared whole.

    Returns:
        Tuple of (periods, index of the period containing now)
    """
    moments: dict[datetime, int] = {}
    for key, count in counts_by_date.items():
        moment = coerce_timestamp(key)
        moments[moment] = moments.get(moment, 0) + count

    earliest = min([now, *moments])
    latest = max([now, *moments])

    periods: list[KPIPeriod] = []
    initial_index = 0
    previous_value: Optional[int] = None

    for interval in iter_intervals(
        earliest, latest, scope, week_starts_on_monday, calendar_aligned_quarters
    ):
        total = sum(count for moment, count in moments.items() if interval.contains(moment))
        if interval.contains(now):
            initial_index = len(periods)

        trend = classify(previous_value, total) if previous_value is not None else None
        periods.append(KPIPeriod(interval=interval, value=total, trend=trend))
        previous_value = total

    logger.debug(
        "kpi_trend_series_built",
        scope=Scope(scope).value,
        period_count=len(periods),
        initial_index=initial_index,
    )
    return periods, initial_index
