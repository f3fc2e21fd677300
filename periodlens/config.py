"""
Configuration management using pydantic-settings.
All settings loaded from environment variables prefixed with PERIODLENS_.
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from periodlens.models.enums import AggregationStrategy, Scope
from periodlens.models.visualization import (
    ListDetail,
    TimeSeriesDetail,
    TrendingKPIDetail,
    VisualizationConfig,
)


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PERIODLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Calendar
    week_starts_on_monday: bool = Field(
        default=True, description="Week buckets start on Monday (False: Sunday)"
    )
    calendar_aligned_quarters: bool = Field(
        default=False,
        description="Bucket three/six month scopes by calendar quarter/half instead of year",
    )

    # Time series defaults
    default_scope: Scope = Field(default=Scope.WEEK, description="Initially selected scope")
    selectable_scopes: str = Field(
        default="day,week,month,year",
        description="Scopes offered to the user (comma-separated)",
    )
    aggregation_strategy: AggregationStrategy = Field(
        default=AggregationStrategy.SUM_EXISTING_VALUES,
        description="How bucket values are derived from raw samples",
    )

    # Lists
    list_visible_values_limit: int = Field(
        default=10, ge=1, description="Entries shown before a list is expanded"
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("selectable_scopes")
    @classmethod
    def validate_selectable_scopes(cls, v: str) -> str:
        """Reject unknown scope names early."""
        names = [name.strip() for name in v.split(",") if name.strip()]
        if not names:
            raise ValueError("At least one selectable scope is required")
        for name in names:
            Scope(name)
        return ",".join(names)

    @property
    def scope_choices(self) -> List[Scope]:
        """Parse comma-separated selectable scopes."""
        return [Scope(name) for name in self.selectable_scopes.split(",")]

    def default_time_series_detail(
        self,
        show_trends: bool = False,
        higher_is_better: bool = True,
    ) -> TimeSeriesDetail:
        """Build a time series detail from the configured defaults."""
        return TimeSeriesDetail(
            aggregation_strategy=self.aggregation_strategy,
            initial_scope=self.default_scope,
            selectable_scopes=self.scope_choices,
            scroll_to_end=True,
            show_trends=show_trends,
            higher_is_better=higher_is_better,
        )

    def default_list_detail(self) -> ListDetail:
        return ListDetail(visible_values_limit=self.list_visible_values_limit)

    def default_kpi_detail(self, higher_is_better: bool = True) -> TrendingKPIDetail:
        return TrendingKPIDetail(scope=self.default_scope, higher_is_better=higher_is_better)

    def visualization_config(self, detail) -> VisualizationConfig:
        """Wrap a detail payload with the calendar settings."""
        return VisualizationConfig(
            week_starts_on_monday=self.week_starts_on_monday,
            calendar_aligned_quarters=self.calendar_aligned_quarters,
            detail=detail,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
