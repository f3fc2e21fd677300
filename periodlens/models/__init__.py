"""
Domain models for the period aggregation engine.

Every model is a frozen pydantic value created fresh per computation.
"""

from .enums import AggregationStrategy, Scope, TrendResult, TrendSentiment, VisualizationKind
from .intervals import Interval
from .series import KPIPeriod, Segment, TimeSeriesData
from .statistics import CurvePoint, DistributionSummary, GroupedEntry, HistogramBin
from .visualization import (
    ChartDetail,
    ChartView,
    DistributionDetail,
    DistributionView,
    KPITrendView,
    ListDetail,
    ListView,
    TimeSeriesDetail,
    TimeSeriesView,
    TrendingKPIDetail,
    VisualizationConfig,
)

__all__ = [
    "AggregationStrategy",
    "ChartDetail",
    "ChartView",
    "CurvePoint",
    "DistributionDetail",
    "DistributionSummary",
    "DistributionView",
    "GroupedEntry",
    "HistogramBin",
    "Interval",
    "KPIPeriod",
    "KPITrendView",
    "ListDetail",
    "ListView",
    "Scope",
    "Segment",
    "TimeSeriesData",
    "TimeSeriesDetail",
    "TimeSeriesView",
    "TrendResult",
    "TrendSentiment",
    "TrendingKPIDetail",
    "VisualizationConfig",
    "VisualizationKind",
]
