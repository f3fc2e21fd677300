"""
Base class for analytics snapshot sources.

The engine reads counts through exactly three read-only capabilities of an
external analytics collaborator. It never writes back and never holds on to
a source between recompute() calls.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Hashable, Mapping, Sequence, Union

import structlog

logger = structlog.get_logger()


class AnalyticsSource(ABC):
    """
    Read-only view of an analytics collaborator's aggregated data.

    Attributes:
        source_name: Identifier for the collaborator (e.g., "sessions", "purchases")
    """

    def __init__(self, source_name: str):
        """
        Initialize the source with a name.

        Args:
            source_name: Identifier for this analytics source
        """
        self.source_name = source_name
        self.logger = logger.bind(source=source_name)

    @abstractmethod
    def value_counts_by_group(self) -> Mapping[Hashable, int]:
        """Arbitrary label -> count mapping."""

    @abstractmethod
    def value_counts_by_date(self) -> Mapping[Union[datetime, date], int]:
        """Sparse, unordered timestamp -> count mapping."""

    @abstractmethod
    def value_distribution(self) -> Sequence[float]:
        """Raw numeric samples."""
