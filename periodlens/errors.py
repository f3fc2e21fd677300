"""
Exception types raised by the engine.

Empty input is never an error; the engine returns None or an empty result
for the caller to present. CalendarInvariantError signals a broken internal
precondition and is never caught by the engine.
"""


class PeriodLensError(Exception):
    """Base class for caller-facing engine errors."""


class CalendarInvariantError(AssertionError):
    """Interval stepping failed to advance."""


class UnsupportedScopeError(PeriodLensError, ValueError):
    """Requested scope is not one of the configured selectable scopes."""


class SegmentIndexError(PeriodLensError, IndexError):
    """Segment index outside the time series."""
