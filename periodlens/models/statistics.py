"""
Value types produced by the distribution and grouping engines.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DistributionSummary(BaseModel):
    """
    Descriptive statistics of a numeric sample set.

    Attributes:
        count: Number of samples
        mean: Arithmetic mean, None for an empty sample set
        sample_std_dev: Bessel-corrected standard deviation, None when count < 2
    """

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    mean: Optional[float] = None
    sample_std_dev: Optional[float] = None

    @property
    def has_estimate(self) -> bool:
        """Whether a continuous normal estimate can be drawn."""
        return self.mean is not None and self.sample_std_dev is not None


class HistogramBin(BaseModel):
    """Samples sharing the same integer key (truncated toward zero)."""

    model_config = ConfigDict(frozen=True)

    key: int
    count: int = Field(ge=1)


class CurvePoint(BaseModel):
    """A point of an estimated density curve."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class GroupedEntry(BaseModel):
    """A label and its count in a sorted grouping."""

    model_config = ConfigDict(frozen=True)

    label: str
    count: int
