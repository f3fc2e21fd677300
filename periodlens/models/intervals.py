"""
Calendar interval model.

An Interval is a non-degenerate, half-open time span [start, end). Adjacent
calendar buckets share a boundary instant that belongs to the later bucket
only, so no sample is ever counted twice.
"""

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Interval(BaseModel):
    """
    A half-open time span.

    Attributes:
        start: First instant contained in the interval
        end: First instant after the interval; always later than start
    """

    model_config = ConfigDict(frozen=True)

    start: datetime = Field(description="First instant contained in the interval")
    end: datetime = Field(description="Exclusive upper bound, strictly after start")

    @field_validator("end")
    @classmethod
    def validate_non_degenerate(cls, v: datetime, info) -> datetime:
        """Ensure interval end is after start."""
        if "start" in info.data:
            if v <= info.data["start"]:
                raise ValueError("Interval end must be after start")
        return v

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def midpoint(self) -> datetime:
        return self.start + self.duration / 2

    def contains(self, moment: datetime) -> bool:
        """Half-open containment: start <= moment < end."""
        return self.start <= moment < self.end

    def prefix(self, fraction: float) -> "Interval":
        """
        Leading part of this interval covering `fraction` of its duration.

        Raises ValidationError when the fraction leaves nothing to cover.
        """
        return Interval(start=self.start, end=self.start + self.duration * fraction)
