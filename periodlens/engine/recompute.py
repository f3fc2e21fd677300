"""
Recompute facade: one pure call per visualization refresh.

The caller's own state layer calls recompute() whenever the snapshot, the
config, the selected scope or `now` changes. Nothing is retained between
calls; each call reads the snapshot through its read-only capabilities and
returns a fresh frozen view model.
"""

from datetime import datetime
from typing import Optional, Union

import structlog

from periodlens.adapters.base_adapter import AnalyticsSource
from periodlens.engine.distribution import histogram, normal_curve, summarize
from periodlens.engine.grouping import group_counts
from periodlens.engine.timeseries import build_data_source
from periodlens.engine.trend import kpi_trend_series, sentiment, trend_for_segment
from periodlens.errors import UnsupportedScopeError
from periodlens.models.enums import Scope, VisualizationKind
from periodlens.models.visualization import (
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

logger = structlog.get_logger()

View = Union[TimeSeriesView, ChartView, KPITrendView, ListView, DistributionView]


def recompute(
    snapshot: AnalyticsSource,
    config: VisualizationConfig,
    now: datetime,
    scope: Optional[Scope] = None,
    segment_index: Optional[int] = None,
) -> View:
    """
    Build the view model for one visualization.

    Args:
        snapshot: Read-only analytics source
        config: Calendar settings plus the kind-specific detail
        now: Reference instant supplied by the caller
        scope: Scope selected by the user (time series only; defaults to the
            detail's initial scope)
        segment_index: Segment the user navigated to (time series only;
            defaults to the configured initial window)

    Returns:
        The view model matching config.detail.kind

    Raises:
        UnsupportedScopeError: If scope is not one of the selectable scopes
        SegmentIndexError: If segment_index is outside the series
    """
    detail = config.detail
    kind = VisualizationKind(detail.kind)

    if isinstance(detail, TimeSeriesDetail):
        view = _time_series_view(snapshot, config, detail, now, scope, segment_index)
    elif isinstance(detail, ChartDetail):
        entries = tuple(group_counts(snapshot.value_counts_by_group()))
        initial_index = len(entries) - 1 if detail.scroll_to_end and entries else None
        view = ChartView(entries=entries, initial_index=initial_index)
    elif isinstance(detail, TrendingKPIDetail):
        periods, initial_index = kpi_trend_series(
            snapshot.value_counts_by_date(),
            detail.scope,
            now,
            week_starts_on_monday=config.week_starts_on_monday,
            calendar_aligned_quarters=config.calendar_aligned_quarters,
        )
        view = KPITrendView(
            scope=detail.scope,
            periods=tuple(periods),
            initial_index=initial_index,
            higher_is_better=detail.higher_is_better,
        )
    elif isinstance(detail, ListDetail):
        entries = tuple(group_counts(snapshot.value_counts_by_group()))
        view = ListView(visible=entries[: detail.visible_values_limit], entries=entries)
    elif isinstance(detail, DistributionDetail):
        view = _distribution_view(snapshot, detail)
    else:
        raise TypeError(f"Unknown visualization detail: {type(detail).__name__}")

    logger.info(
        "visualization_recomputed",
        source=snapshot.source_name,
        kind=kind.value,
    )
    return view


def _time_series_view(
    snapshot: AnalyticsSource,
    config: VisualizationConfig,
    detail: TimeSeriesDetail,
    now: datetime,
    scope: Optional[Scope],
    segment_index: Optional[int],
) -> TimeSeriesView:
    if scope is None:
        scope = detail.initial_scope
    elif Scope(scope) not in detail.selectable_scopes:
        raise UnsupportedScopeError(
            f"Scope {Scope(scope).value} is not selectable; "
            f"choose from {[s.value for s in detail.selectable_scopes]}"
        )
    scope = Scope(scope)

    data = {moment: float(count) for moment, count in snapshot.value_counts_by_date().items()}
    source = build_data_source(
        detail.aggregation_strategy,
        data,
        scope,
        week_starts_on_monday=config.week_starts_on_monday,
        calendar_aligned_quarters=config.calendar_aligned_quarters,
    )
    series = source.time_series()
    if series.is_empty:
        logger.warning("no_dated_counts", source=snapshot.source_name, scope=scope.value)
        return TimeSeriesView(scope=scope, segments=())

    if segment_index is None:
        if detail.scroll_to_end:
            segment_index = len(series.segments) - 1
        else:
            containing = series.segment_index_containing(now)
            segment_index = containing if containing is not None else 0

    combined_value = source.combined_value(series.interval_for_segment(segment_index))

    trend = None
    trend_sentiment = None
    if detail.show_trends:
        trend = trend_for_segment(source, segment_index, now)
        if trend is not None:
            trend_sentiment = sentiment(trend, detail.higher_is_better)

    return TimeSeriesView(
        scope=scope,
        segments=series.segments,
        selected_index=segment_index,
        combined_value=combined_value,
        trend=trend,
        sentiment=trend_sentiment,
    )


def _distribution_view(snapshot: AnalyticsSource, detail: DistributionDetail) -> DistributionView:
    samples = snapshot.value_distribution()
    summary = summarize(samples)

    if detail.show_estimate and summary.has_estimate:
        curve = normal_curve(summary)
        if curve:
            return DistributionView(summary=summary, curve=tuple(curve))

    # Too few samples for an estimate, or the histogram was requested
    return DistributionView(summary=summary, histogram=tuple(histogram(samples)))
