"""
Analytics snapshot sources.

AnalyticsSource is the three-capability read surface the engine consumes;
SnapshotSource is its in-memory implementation.
"""

from periodlens.adapters.base_adapter import AnalyticsSource
from periodlens.adapters.snapshot_adapter import SnapshotSource

__all__ = ["AnalyticsSource", "SnapshotSource"]
