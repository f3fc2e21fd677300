"""
Property-based tests using Hypothesis for the periodlens engine.

These tests verify the mathematical invariants of the calendar engine, the
time series strategies, the trend classifier and the grouping adapter across
generated inputs.
"""

from datetime import datetime, timedelta

import hypothesis.strategies as st
from hypothesis import given, settings

from periodlens.engine.calendar import interval_after, interval_containing
from periodlens.engine.distribution import histogram, sample_std_dev, summarize
from periodlens.engine.grouping import group_counts
from periodlens.engine.timeseries import interpolate_gaps
from periodlens.engine.trend import classify
from periodlens.models.enums import AggregationStrategy, Scope, TrendResult
from periodlens.models.intervals import Interval
from tests.conftest import make_source

timestamps = st.datetimes(min_value=datetime(1990, 1, 1), max_value=datetime(2090, 12, 31))
scopes = st.sampled_from(list(Scope))
finite_floats = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)

# Samples within a few months keep day-scope series short
sample_maps = st.dictionaries(
    keys=st.datetimes(min_value=datetime(2024, 1, 1), max_value=datetime(2024, 4, 30)),
    values=st.integers(min_value=0, max_value=1000),
    min_size=1,
    max_size=30,
)


# =============================================================================
# Calendar Property Tests
# =============================================================================


@given(moment=timestamps, scope=scopes, monday=st.booleans(), aligned=st.booleans())
@settings(max_examples=200)
def test_prop_interval_containing_contains_date(moment, scope, monday, aligned):
    """
    Invariant: interval_containing(d).start <= d < interval_containing(d).end
    for every scope and week start.
    """
    interval = interval_containing(moment, scope, monday, aligned)
    assert interval.start <= moment < interval.end


@given(moment=timestamps, scope=scopes, monday=st.booleans(), aligned=st.booleans())
@settings(max_examples=200)
def test_prop_interval_after_advances(moment, scope, monday, aligned):
    """
    Invariant: interval_after(I).start > I.start, and for an aligned bucket the
    next bucket starts exactly where the current one ends.
    """
    interval = interval_containing(moment, scope, monday, aligned)
    following = interval_after(interval, scope, monday, aligned)
    assert following.start > interval.start
    assert following.start == interval.end


@given(
    start=timestamps,
    length=st.timedeltas(min_value=timedelta(seconds=1), max_value=timedelta(days=800)),
    scope=scopes,
)
@settings(max_examples=200)
def test_prop_interval_after_advances_for_arbitrary_intervals(start, length, scope):
    """Invariant: stepping from any non-degenerate interval moves past its end."""
    interval = Interval(start=start, end=start + length)
    following = interval_after(interval, scope)
    assert following.start > interval.start
    assert following.start >= interval.end


# =============================================================================
# Time Series Property Tests
# =============================================================================


@given(data=sample_maps, scope=scopes)
@settings(max_examples=100, deadline=None)
def test_prop_summing_conserves_total(data, scope):
    """Invariant: summing segment values equals summing raw samples."""
    source = make_source(data, scope=scope)
    assert sum(segment.value for segment in source.segments()) == sum(data.values())


@given(data=sample_maps, scope=scopes, strategy=st.sampled_from(list(AggregationStrategy)))
@settings(max_examples=100, deadline=None)
def test_prop_segments_contiguous_and_span_samples(data, scope, strategy):
    """
    Invariant: segments are ascending and contiguous, and run from the bucket
    holding the earliest sample to the bucket holding the latest one.
    """
    segments = make_source(data, scope=scope, strategy=strategy).segments()

    for earlier, later in zip(segments, segments[1:]):
        assert earlier.interval.end == later.interval.start
    assert [segment.index for segment in segments] == list(range(len(segments)))
    assert segments[0].interval.contains(min(data))
    assert segments[-1].interval.contains(max(data))


@given(data=sample_maps, scope=scopes)
@settings(max_examples=100, deadline=None)
def test_prop_strategies_share_boundaries(data, scope):
    """Invariant: both strategies produce identical bucket boundaries."""
    summing = make_source(data, scope=scope)
    averaging = make_source(data, scope=scope, strategy=AggregationStrategy.INTERPOLATE_AND_AVERAGE)
    assert [s.interval for s in summing.segments()] == [s.interval for s in averaging.segments()]


@given(values=st.lists(st.one_of(st.none(), finite_floats), min_size=1, max_size=40))
@settings(max_examples=200)
def test_prop_interpolation_bounded_by_neighbours(values):
    """
    Invariant: every filled value lies between its bounding known neighbours,
    or equals the single available neighbour at the edges.
    """
    filled = interpolate_gaps(values)
    known = [i for i, v in enumerate(values) if v is not None]
    assert len(filled) == len(values)

    for index, value in enumerate(values):
        if value is not None:
            assert filled[index] == value
            continue
        if not known:
            assert filled[index] == 0.0
            continue
        before = [i for i in known if i < index]
        after = [i for i in known if i > index]
        if before and after:
            low, high = sorted((values[before[-1]], values[after[0]]))
            assert low - 1e-6 <= filled[index] <= high + 1e-6
        elif before:
            assert filled[index] == values[before[-1]]
        else:
            assert filled[index] == values[after[0]]


# =============================================================================
# Trend and Grouping Property Tests
# =============================================================================


@given(a=finite_floats, b=finite_floats)
@settings(max_examples=200)
def test_prop_classify_exhaustive(a, b):
    """Invariant: UP iff a < b, DOWN iff a > b, NEUTRAL iff a == b."""
    trend = classify(a, b)
    assert trend in (TrendResult.UP, TrendResult.DOWN, TrendResult.NEUTRAL)
    assert (trend == TrendResult.UP) == (a < b)
    assert (trend == TrendResult.DOWN) == (a > b)
    assert (trend == TrendResult.NEUTRAL) == (a == b)


@given(counts=st.dictionaries(st.text(min_size=1, max_size=5), st.integers(min_value=0, max_value=50)))
@settings(max_examples=200)
def test_prop_group_counts_total_order(counts):
    """Invariant: count descending, ties by label ascending, independent of input order."""
    entries = group_counts(counts)
    keys = [(-entry.count, entry.label) for entry in entries]
    assert keys == sorted(keys)
    assert group_counts(dict(reversed(list(counts.items())))) == entries


# =============================================================================
# Distribution Property Tests
# =============================================================================


@given(samples=st.lists(finite_floats, max_size=50))
@settings(max_examples=200)
def test_prop_summary_fields_defined_by_count(samples):
    """Invariant: mean needs one sample, sample std-dev needs two and is non-negative."""
    summary = summarize(samples)
    assert summary.count == len(samples)
    assert (summary.mean is None) == (len(samples) == 0)
    assert (summary.sample_std_dev is None) == (len(samples) < 2)
    if summary.sample_std_dev is not None:
        assert summary.sample_std_dev >= 0.0
        assert summary.sample_std_dev == sample_std_dev(samples)


@given(samples=st.lists(finite_floats, max_size=50))
@settings(max_examples=200)
def test_prop_histogram_conserves_count(samples):
    """Invariant: histogram counts add up to the sample count, keys ascending."""
    bins = histogram(samples)
    assert sum(b.count for b in bins) == len(samples)
    assert [b.key for b in bins] == sorted({int(s) for s in samples})
