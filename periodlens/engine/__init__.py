"""
Period aggregation engine core components.

- Calendar scope engine: calendar-aligned buckets and stepping
- Time series data sources: summing and interpolating/averaging strategies
- Trend engine: period-over-period comparison with partial-period normalization
- Grouping adapter: deterministic (label, count) rankings
- Distribution statistics: mean, sample standard deviation, histograms
- Recompute facade: one pure call per visualization refresh

Every component is a pure, synchronous function of its inputs.
"""

__all__ = [
    "AveragingTimeSeriesDataSource",
    "SummingTimeSeriesDataSource",
    "TimeSeriesDataSource",
    "build_data_source",
    "classify",
    "group_counts",
    "group_counts_by_date",
    "interval_after",
    "interval_containing",
    "kpi_trend_series",
    "recompute",
    "summarize",
    "trend_for_segment",
]

from periodlens.engine.calendar import interval_after, interval_containing
from periodlens.engine.distribution import summarize
from periodlens.engine.grouping import group_counts, group_counts_by_date
from periodlens.engine.recompute import recompute
from periodlens.engine.timeseries import (
    AveragingTimeSeriesDataSource,
    SummingTimeSeriesDataSource,
    TimeSeriesDataSource,
    build_data_source,
)
from periodlens.engine.trend import classify, kpi_trend_series, trend_for_segment
