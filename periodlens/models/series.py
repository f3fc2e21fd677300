"""
Time series data models.

Segments are the calendar buckets of a time series; TimeSeriesData is the
immutable sequence built once per (snapshot, scope, week start) triple.
"""

from bisect import bisect_right
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from periodlens.errors import SegmentIndexError

from .enums import Scope, TrendResult
from .intervals import Interval


class Segment(BaseModel):
    """
    One calendar bucket of a time series.

    Attributes:
        interval: Calendar-aligned bucket boundaries
        value: Aggregated value of the bucket
        index: Position in the series, used for chart-window navigation
    """

    model_config = ConfigDict(frozen=True)

    interval: Interval
    value: float
    index: int = Field(ge=0)


class TimeSeriesData(BaseModel):
    """
    Dense, ascending, contiguous sequence of segments.

    Spans exactly from the bucket containing the earliest sample to the bucket
    containing the latest one. Empty when there are no samples.
    """

    model_config = ConfigDict(frozen=True)

    scope: Scope
    week_starts_on_monday: bool
    segments: tuple[Segment, ...] = Field(default=())
    samples: dict[datetime, float] = Field(
        default_factory=dict, description="Raw samples the series was built from"
    )

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def interval(self) -> Optional[Interval]:
        """Whole span of the series, or None when empty."""
        if not self.segments:
            return None
        return Interval(start=self.segments[0].interval.start, end=self.segments[-1].interval.end)

    @property
    def values(self) -> list[float]:
        return [segment.value for segment in self.segments]

    def interval_for_segment(self, index: int) -> Interval:
        if not 0 <= index < len(self.segments):
            raise SegmentIndexError(
                f"Segment index {index} outside series of {len(self.segments)} segments"
            )
        return self.segments[index].interval

    def segment_index_containing(self, moment: datetime) -> Optional[int]:
        """Index of the segment whose interval contains moment, if any."""
        starts = [segment.interval.start for segment in self.segments]
        position = bisect_right(starts, moment) - 1
        if position < 0:
            return None
        if self.segments[position].interval.contains(moment):
            return position
        return None


class KPIPeriod(BaseModel):
    """
    One tile of a trending KPI strip.

    Attributes:
        interval: Calendar bucket of the tile
        value: Sum of counts inside the bucket
        trend: Direction against the previous tile, None for the first tile
    """

    model_config = ConfigDict(frozen=True)

    interval: Interval
    value: int
    trend: Optional[TrendResult] = None
