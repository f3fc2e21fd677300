"""
Enumeration types for the period aggregation engine.

All enums inherit from str to ensure JSON serialization compatibility.
"""

from enum import Enum


class Scope(str, Enum):
    """
    Calendar granularity used to bucket a time series.

    THREE_MONTHS and SIX_MONTHS share YEAR boundaries unless calendar-aligned
    quarters are switched on.
    """

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "three_months"
    SIX_MONTHS = "six_months"
    YEAR = "year"


class AggregationStrategy(str, Enum):
    """How a bucket's representative value is derived from raw samples."""

    # Sum of all existing values in an interval
    SUM_EXISTING_VALUES = "sum_existing_values"

    # Mean of existing values, linear interpolation across empty buckets
    INTERPOLATE_AND_AVERAGE = "interpolate_and_average"


class TrendResult(str, Enum):
    """Direction of change between an earlier and a later value."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class TrendSentiment(str, Enum):
    """A trend read against whether higher values are better."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    UNCHANGED = "unchanged"


class VisualizationKind(str, Enum):
    """Tags of the visualization detail union."""

    TIME_SERIES = "time_series"
    CHART = "chart"
    TRENDING_KPI = "trending_kpi"
    LIST = "list"
    DISTRIBUTION = "distribution"
