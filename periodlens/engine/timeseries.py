"""
Time-Series Data Source: dense segment sequences from sparse samples.

A data source is built once per (snapshot, scope, week start) triple. It
turns a sparse timestamp -> value mapping into one segment per calendar
bucket, from the bucket holding the earliest sample to the bucket holding the
latest, and answers combined-value queries over arbitrary intervals.

Strategies:
    SummingTimeSeriesDataSource
        Bucket value is the sum of its samples; empty buckets are 0.
    AveragingTimeSeriesDataSource
        Bucket value is the mean of its samples; empty buckets are linearly
        interpolated between the nearest non-empty buckets on the bucket
        index axis. Edges copy the nearest non-empty value.

Both strategies delegate bucket boundaries to the calendar engine and differ
only in how a bucket's value is derived.
"""

from abc import ABC, abstractmethod
from bisect import bisect_left
from datetime import date, datetime
from functools import cached_property
from typing import Mapping, Optional, Union

import structlog

from periodlens.engine.calendar import coerce_timestamp, iter_intervals
from periodlens.models.enums import AggregationStrategy, Scope
from periodlens.models.intervals import Interval
from periodlens.models.series import Segment, TimeSeriesData

logger = structlog.get_logger()


class TimeSeriesDataSource(ABC):
    """
    Abstract base class for time series aggregation strategies.

    Attributes:
        scope: Calendar granularity of the segments
        week_starts_on_monday: Week-start day for the week scope
        calendar_aligned_quarters: Quarter/half-year bucketing switch
        samples: Raw samples keyed by timestamp (dates promoted to midnight)
    """

    strategy: AggregationStrategy

    def __init__(
        self,
        data: Mapping[Union[datetime, date], float],
        scope: Scope,
        week_starts_on_monday: bool = True,
        calendar_aligned_quarters: bool = False,
    ):
        """
        Initialize the data source from a snapshot.

        Args:
            data: Sparse timestamp -> value mapping; copied, never mutated
            scope: Calendar granularity of the segments
            week_starts_on_monday: Week-start day for the week scope
            calendar_aligned_quarters: Real quarter/half-year bucketing
        """
        self.scope = Scope(scope)
        self.week_starts_on_monday = week_starts_on_monday
        self.calendar_aligned_quarters = calendar_aligned_quarters

        samples: dict[datetime, float] = {}
        for key, value in data.items():
            moment = coerce_timestamp(key)
            # a date and its midnight datetime collapse onto one sample
            samples[moment] = samples.get(moment, 0.0) + float(value)
        self.samples = samples

        ordered = sorted(samples.items())
        self._times = [moment for moment, _ in ordered]
        self._values = [value for _, value in ordered]
        self.logger = logger.bind(strategy=self.strategy.value, scope=self.scope.value)

    @property
    def is_empty(self) -> bool:
        return not self._times

    def _sample_values_in(self, interval: Interval) -> list[float]:
        """Values of samples with start <= timestamp < end."""
        lo = bisect_left(self._times, interval.start)
        hi = bisect_left(self._times, interval.end)
        return self._values[lo:hi]

    @cached_property
    def _buckets(self) -> list[tuple[Interval, list[float]]]:
        if self.is_empty:
            return []
        return [
            (interval, self._sample_values_in(interval))
            for interval in iter_intervals(
                self._times[0],
                self._times[-1],
                self.scope,
                self.week_starts_on_monday,
                self.calendar_aligned_quarters,
            )
        ]

    @cached_property
    def _time_series(self) -> TimeSeriesData:
        if self.is_empty:
            self.logger.debug("no_samples_for_time_series")
            return TimeSeriesData(
                scope=self.scope,
                week_starts_on_monday=self.week_starts_on_monday,
                samples={},
            )

        values = self._bucket_values([bucket_values for _, bucket_values in self._buckets])
        segments = tuple(
            Segment(interval=interval, value=value, index=index)
            for index, ((interval, _), value) in enumerate(zip(self._buckets, values))
        )

        self.logger.debug(
            "time_series_built",
            segment_count=len(segments),
            sample_count=len(self._times),
        )
        return TimeSeriesData(
            scope=self.scope,
            week_starts_on_monday=self.week_starts_on_monday,
            segments=segments,
            samples=dict(self.samples),
        )

    def time_series(self) -> TimeSeriesData:
        """The immutable time series for this source's scope."""
        return self._time_series

    def segments(self) -> list[Segment]:
        """Dense, ascending segment sequence."""
        return list(self._time_series.segments)

    @abstractmethod
    def _bucket_values(self, bucket_samples: list[list[float]]) -> list[float]:
        """Derive one value per bucket from the samples inside each bucket."""

    @abstractmethod
    def combined_value(self, interval: Interval) -> Optional[float]:
        """
        Strategy-consistent summary of the samples in an arbitrary interval.

        Returns:
            The combined value, or None when the source holds no samples
        """


class SummingTimeSeriesDataSource(TimeSeriesDataSource):
    """Bucket value is the sum of the samples inside the bucket."""

    strategy = AggregationStrategy.SUM_EXISTING_VALUES

    def _bucket_values(self, bucket_samples: list[list[float]]) -> list[float]:
        return [float(sum(values)) for values in bucket_samples]

    def combined_value(self, interval: Interval) -> Optional[float]:
        if self.is_empty:
            return None
        return float(sum(self._sample_values_in(interval)))


class AveragingTimeSeriesDataSource(TimeSeriesDataSource):
    """
    Bucket value is the mean of the samples inside the bucket.

    Empty buckets are interpolated between their nearest non-empty neighbours.
    """

    strategy = AggregationStrategy.INTERPOLATE_AND_AVERAGE

    def _bucket_values(self, bucket_samples: list[list[float]]) -> list[float]:
        means: list[Optional[float]] = [
            sum(values) / len(values) if values else None for values in bucket_samples
        ]
        return interpolate_gaps(means)

    def combined_value(self, interval: Interval) -> Optional[float]:
        if self.is_empty:
            return None

        values = self._sample_values_in(interval)
        if values:
            return sum(values) / len(values)

        # No sample inside: interpolated value of the bucket nearest the midpoint
        series = self._time_series
        midpoint = interval.midpoint
        index = series.segment_index_containing(midpoint)
        if index is None:
            index = 0 if midpoint < series.segments[0].interval.start else len(series.segments) - 1
        return series.segments[index].value


def interpolate_gaps(values: list[Optional[float]]) -> list[float]:
    """
    Fill None entries by linear interpolation on the list index axis.

    Leading and trailing gaps copy the nearest known value. A list with no
    known value at all is filled with 0.0.

    Example:
        >>> filled = interpolate_gaps([10.0, None, None, 20.0])
        >>> print([round(v, 2) for v in filled])
        [10.0, 13.33, 16.67, 20.0]
    """
    known = [index for index, value in enumerate(values) if value is not None]
    if not known:
        return [0.0] * len(values)

    filled: list[float] = []
    cursor = 0
    for index, value in enumerate(values):
        if value is not None:
            filled.append(float(value))
            continue

        while cursor < len(known) and known[cursor] < index:
            cursor += 1
        before = known[cursor - 1] if cursor > 0 else None
        after = known[cursor] if cursor < len(known) else None

        if before is None:
            filled.append(float(values[after]))
        elif after is None:
            filled.append(float(values[before]))
        else:
            low, high = values[before], values[after]
            filled.append(low + (high - low) * (index - before) / (after - before))
    return filled


_STRATEGIES: dict[AggregationStrategy, type[TimeSeriesDataSource]] = {
    AggregationStrategy.SUM_EXISTING_VALUES: SummingTimeSeriesDataSource,
    AggregationStrategy.INTERPOLATE_AND_AVERAGE: AveragingTimeSeriesDataSource,
}


def build_data_source(
    strategy: AggregationStrategy,
    data: Mapping[Union[datetime, date], float],
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> TimeSeriesDataSource:
    """Instantiate the data source implementing strategy."""
    source_cls = _STRATEGIES[AggregationStrategy(strategy)]
    return source_cls(
        data,
        scope,
        week_starts_on_monday=week_starts_on_monday,
        calendar_aligned_quarters=calendar_aligned_quarters,
    )
