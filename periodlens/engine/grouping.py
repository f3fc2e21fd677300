"""
Grouping Aggregation Adapter: ranked (label, count) lists.

Snapshots arrive as unordered mappings, so every ordering here is total:
count descending, then label ascending.
"""

from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Hashable, Mapping, Optional, Union

import structlog

from periodlens.engine.calendar import interval_containing
from periodlens.models.enums import Scope
from periodlens.models.intervals import Interval
from periodlens.models.statistics import GroupedEntry

logger = structlog.get_logger()


def _default_interval_label(interval: Interval) -> str:
    return interval.start.date().isoformat()


def rank_entries(entries: list[GroupedEntry], limit: Optional[int] = None) -> list[GroupedEntry]:
    """Sort by count descending, ties by label ascending, optionally truncated."""
    ranked = sorted(entries, key=lambda entry: (-entry.count, entry.label))
    if limit is not None:
        return ranked[:limit]
    return ranked


def group_counts(
    label_counts: Mapping[Hashable, int],
    limit: Optional[int] = None,
    format_label: Callable[[Hashable], str] = str,
) -> list[GroupedEntry]:
    """
    Rank a label -> count snapshot.

    Args:
        label_counts: Unordered label -> count mapping
        limit: Keep only the first `limit` entries
        format_label: Turns a group key into its display label

    Returns:
        Entries sorted by count descending, ties broken alphabetically

    Example:
        >>> group_counts({"b": 5, "a": 5, "c": 1})
        [GroupedEntry(label='a', count=5), GroupedEntry(label='b', count=5), GroupedEntry(label='c', count=1)]
    """
    totals: dict[str, int] = defaultdict(int)
    for key, count in label_counts.items():
        totals[format_label(key)] += count

    entries = [GroupedEntry(label=label, count=count) for label, count in totals.items()]
    return rank_entries(entries, limit)


def bucket_date_counts(
    date_counts: Mapping[Union[datetime, date], int],
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
) -> dict[Interval, int]:
    """Sum date -> count pairs per calendar bucket, in chronological order."""
    buckets: dict[Interval, int] = defaultdict(int)
    for moment, count in date_counts.items():
        interval = interval_containing(
            moment, scope, week_starts_on_monday, calendar_aligned_quarters
        )
        buckets[interval] += count
    return dict(sorted(buckets.items(), key=lambda item: item[0].start))


def group_counts_by_date(
    date_counts: Mapping[Union[datetime, date], int],
    scope: Scope,
    week_starts_on_monday: bool = True,
    calendar_aligned_quarters: bool = False,
    format_interval: Callable[[Interval], str] = _default_interval_label,
    sort_by_count: bool = True,
    limit: Optional[int] = None,
) -> list[GroupedEntry]:
    """
    Bucket a date -> count snapshot by scope and rank the buckets.

    Args:
        date_counts: Sparse, unordered date -> count mapping
        scope: Calendar granularity of the buckets
        week_starts_on_monday: Week-start day for the week scope
        calendar_aligned_quarters: Real quarter/half-year bucketing
        format_interval: Turns a bucket into its display label
        sort_by_count: Rank by count; False keeps chronological order
        limit: Keep only the first `limit` entries

    Returns:
        One entry per non-empty bucket
    """
    buckets = bucket_date_counts(date_counts, scope, week_starts_on_monday, calendar_aligned_quarters)
    entries = [GroupedEntry(label=format_interval(interval), count=count) for interval, count in buckets.items()]

    logger.debug(
        "date_counts_grouped",
        scope=Scope(scope).value,
        bucket_count=len(entries),
        sort_by_count=sort_by_count,
    )

    if sort_by_count:
        return rank_entries(entries, limit)
    if limit is not None:
        return entries[:limit]
    return entries
