"""
Pytest configuration and shared factories for the periodlens test suite.

Factories build snapshots, configs and data sources with sensible defaults so
each test only spells out what it is about. 2024-01-01 is a Monday, which
keeps week arithmetic easy to read.
"""

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from periodlens.adapters import SnapshotSource
from periodlens.engine.timeseries import build_data_source
from periodlens.models.enums import AggregationStrategy, Scope
from periodlens.models.visualization import (
    TimeSeriesDetail,
    VisualizationConfig,
)

MONDAY = datetime(2024, 1, 1)


def day(n: int, hour: int = 0) -> datetime:
    """Midnight (or the given hour) of the n-th day of January 2024, 1-based."""
    return MONDAY + timedelta(days=n - 1, hours=hour)


def make_source(
    data: dict,
    scope: Scope = Scope.DAY,
    strategy: AggregationStrategy = AggregationStrategy.SUM_EXISTING_VALUES,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
):
    """Factory function for time series data sources."""
    return build_data_source(
        strategy,
        data,
        scope,
        week_starts_on_monday=week_starts_on_monday,
        calendar_aligned_quarters=calendar_aligned_quarters,
    )


def make_snapshot(
    counts_by_group: Optional[dict] = None,
    counts_by_date: Optional[dict] = None,
    distribution: Optional[list[float]] = None,
    source_name: str = "test_source",
) -> SnapshotSource:
    """Factory function for analytics snapshots."""
    return SnapshotSource(
        source_name,
        counts_by_group=counts_by_group,
        counts_by_date=counts_by_date,
        distribution=distribution,
    )


def make_time_series_detail(
    aggregation_strategy: AggregationStrategy = AggregationStrategy.SUM_EXISTING_VALUES,
    initial_scope: Scope = Scope.DAY,
    selectable_scopes: Optional[list[Scope]] = None,
    scroll_to_end: bool = True,
    show_trends: bool = True,
    higher_is_better: bool = True,
) -> TimeSeriesDetail:
    """Factory function for time series details."""
    if selectable_scopes is None:
        selectable_scopes = [Scope.DAY, Scope.WEEK, Scope.MONTH, Scope.YEAR]
    return TimeSeriesDetail(
        aggregation_strategy=aggregation_strategy,
        initial_scope=initial_scope,
        selectable_scopes=selectable_scopes,
        scroll_to_end=scroll_to_end,
        show_trends=show_trends,
        higher_is_better=higher_is_better,
    )


def make_config(detail, week_starts_on_monday: bool = True, **overrides) -> VisualizationConfig:
    """Factory function for visualization configs."""
    return VisualizationConfig(
        week_starts_on_monday=week_starts_on_monday,
        detail=detail,
        **overrides,
    )


def partial_week_counts(current_week_total: int = 40) -> dict:
    """
    Two weeks of counts: 100 spread over last week, one sample this week.

    Last week holds 25 on Mon, Tue, Fri and Sat, so its first half
    (Mon 00:00 to Thu 12:00) holds 50.
    """
    return {
        day(1): 25,
        day(2): 25,
        day(5): 25,
        day(6): 25,
        day(8): current_week_total,
    }


@pytest.fixture
def sparse_daily_counts() -> dict:
    """{day1: 10, day4: 20} as used by the segment scenarios."""
    return {day(1): 10, day(4): 20}


@pytest.fixture
def mid_week_now() -> datetime:
    """Thursday 2024-01-11 12:00, exactly half-way through the second week."""
    return datetime(2024, 1, 11, 12)


@pytest.fixture
def reference_distribution() -> list[float]:
    return [2, 4, 4, 4, 5, 5, 7, 9]


@pytest.fixture
def new_year_dates() -> list[date]:
    return [date(2023, 12, 30), date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 2)]
