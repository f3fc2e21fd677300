"""
Visualization configuration and view models.

Each visualization kind carries its own fully specified detail payload; the
detail union is discriminated on `kind` so a payload can never be read as
another kind's settings. View models are the frozen results of recompute().
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import AggregationStrategy, Scope, TrendResult, TrendSentiment
from .series import KPIPeriod, Segment
from .statistics import CurvePoint, DistributionSummary, GroupedEntry, HistogramBin


class TimeSeriesDetail(BaseModel):
    """Settings of a segmented time series chart."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["time_series"] = "time_series"
    aggregation_strategy: AggregationStrategy
    initial_scope: Scope
    selectable_scopes: list[Scope]
    scroll_to_end: bool
    show_trends: bool
    higher_is_better: bool

    @field_validator("selectable_scopes")
    @classmethod
    def validate_selectable_scopes(cls, v: list[Scope]) -> list[Scope]:
        if not v:
            raise ValueError("At least one selectable scope is required")
        return v

    @model_validator(mode="after")
    def validate_initial_scope(self) -> "TimeSeriesDetail":
        if self.initial_scope not in self.selectable_scopes:
            raise ValueError(
                f"Initial scope {self.initial_scope.value} must be one of the selectable scopes"
            )
        return self


class ChartDetail(BaseModel):
    """Settings of a grouped (label, count) chart."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["chart"] = "chart"
    scroll_to_end: bool


class TrendingKPIDetail(BaseModel):
    """Settings of a per-period KPI strip."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["trending_kpi"] = "trending_kpi"
    scope: Scope
    higher_is_better: bool


class ListDetail(BaseModel):
    """Settings of a ranked list."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    visible_values_limit: int = Field(ge=1)


class DistributionDetail(BaseModel):
    """Settings of a value distribution view."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["distribution"] = "distribution"
    show_estimate: bool


VisualizationDetail = Annotated[
    Union[TimeSeriesDetail, ChartDetail, TrendingKPIDetail, ListDetail, DistributionDetail],
    Field(discriminator="kind"),
]


class VisualizationConfig(BaseModel):
    """
    Calendar settings shared by every visualization plus the kind-specific detail.

    Attributes:
        week_starts_on_monday: Week buckets start on Monday (False: Sunday)
        calendar_aligned_quarters: Real quarter/half-year bucketing for the
            three and six month scopes
        detail: Kind-specific payload
    """

    model_config = ConfigDict(frozen=True)

    week_starts_on_monday: bool
    calendar_aligned_quarters: bool = False
    detail: VisualizationDetail


class TimeSeriesView(BaseModel):
    """
    Recomputed time series.

    Attributes:
        scope: Scope the segments were built for
        segments: Dense segment sequence
        selected_index: Segment the chart window starts on, None when empty
        combined_value: Combined value of the selected segment
        trend: Trend of the selected segment against the previous one
        sentiment: Trend read against higher_is_better
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["time_series"] = "time_series"
    scope: Scope
    segments: tuple[Segment, ...]
    selected_index: Optional[int] = None
    combined_value: Optional[float] = None
    trend: Optional[TrendResult] = None
    sentiment: Optional[TrendSentiment] = None


class ChartView(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["chart"] = "chart"
    entries: tuple[GroupedEntry, ...]
    initial_index: Optional[int] = None


class KPITrendView(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["trending_kpi"] = "trending_kpi"
    scope: Scope
    periods: tuple[KPIPeriod, ...]
    initial_index: int
    higher_is_better: bool


class ListView(BaseModel):
    """Ranked entries, with the full ranking kept for expansion."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    visible: tuple[GroupedEntry, ...]
    entries: tuple[GroupedEntry, ...]

    @property
    def is_truncated(self) -> bool:
        return len(self.visible) < len(self.entries)


class DistributionView(BaseModel):
    """Either an estimated normal curve or the raw integer histogram."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["distribution"] = "distribution"
    summary: DistributionSummary
    curve: tuple[CurvePoint, ...] = ()
    histogram: tuple[HistogramBin, ...] = ()
