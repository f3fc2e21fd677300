"""
periodlens: temporal aggregation and statistics for analytics snapshots.

Turns sparse timestamp -> count snapshots into calendar-aligned segments,
classifies period-over-period trends, ranks grouped counts and summarizes
numeric distributions.
"""

__version__ = "1.0.0"
