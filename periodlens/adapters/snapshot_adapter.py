"""
In-memory snapshot source.

Copies the collaborator's data once at construction so later mutation of the
caller's mappings cannot leak into a computation.
"""

from datetime import date, datetime
from types import MappingProxyType
from typing import Hashable, Mapping, Optional, Sequence, Union

from periodlens.adapters.base_adapter import AnalyticsSource


class SnapshotSource(AnalyticsSource):
    """
    Immutable snapshot of grouped counts, dated counts and a raw distribution.

    Example:
        >>> source = SnapshotSource(
        ...     "sessions",
        ...     counts_by_date={date(2024, 1, 1): 10, date(2024, 1, 4): 20},
        ... )
        >>> source.value_distribution()
        ()
    """

    def __init__(
        self,
        source_name: str,
        counts_by_group: Optional[Mapping[Hashable, int]] = None,
        counts_by_date: Optional[Mapping[Union[datetime, date], int]] = None,
        distribution: Optional[Sequence[float]] = None,
    ):
        super().__init__(source_name)
        self._counts_by_group = MappingProxyType(dict(counts_by_group or {}))
        self._counts_by_date = MappingProxyType(dict(counts_by_date or {}))
        self._distribution = tuple(float(value) for value in (distribution or ()))

        self.logger.debug(
            "snapshot_captured",
            group_count=len(self._counts_by_group),
            date_count=len(self._counts_by_date),
            sample_count=len(self._distribution),
        )

    def value_counts_by_group(self) -> Mapping[Hashable, int]:
        return self._counts_by_group

    def value_counts_by_date(self) -> Mapping[Union[datetime, date], int]:
        return self._counts_by_date

    def value_distribution(self) -> Sequence[float]:
        return self._distribution
