"""
Distribution Statistics: summaries of raw numeric samples.

    mean            arithmetic mean, None for no samples
    sample_std_dev  sqrt(sum((x - mean)^2) / (n - 1)), None for n < 2
    histogram       counts per integer key (truncated toward zero)
    normal_curve    estimated normal density over +/- 3 standard deviations

The histogram is the fallback view when there are too few samples for a
continuous estimate. NaN and infinite samples are dropped before any of
these are computed.
"""

import math
from collections import Counter
from typing import Optional, Sequence

import numpy as np
import structlog
from scipy import stats

from periodlens.models.statistics import CurvePoint, DistributionSummary, HistogramBin

logger = structlog.get_logger()

# Curve spans this many standard deviations either side of the mean
CURVE_SPREAD = 3

# Wider spans are sampled at this many evenly spaced offsets
MAX_CURVE_POINTS = 601


def _as_array(samples: Sequence[float]) -> np.ndarray:
    """Samples as floats, with NaN and infinities dropped."""
    values = np.asarray(list(samples), dtype=float)
    finite = values[np.isfinite(values)]
    if finite.size < values.size:
        logger.warning("non_finite_samples_dropped", dropped=int(values.size - finite.size))
    return finite


def mean(samples: Sequence[float]) -> Optional[float]:
    values = _as_array(samples)
    if values.size == 0:
        return None
    return float(np.mean(values))


def sample_std_dev(samples: Sequence[float]) -> Optional[float]:
    """Bessel-corrected standard deviation; None for fewer than two samples."""
    values = _as_array(samples)
    if values.size < 2:
        return None
    return float(np.std(values, ddof=1))


def histogram(samples: Sequence[float]) -> list[HistogramBin]:
    """Count samples per integer key (truncation toward zero), sorted by key."""
    counts = Counter(int(value) for value in _as_array(samples))
    return [HistogramBin(key=key, count=counts[key]) for key in sorted(counts)]


def summarize(samples: Sequence[float]) -> DistributionSummary:
    values = _as_array(samples)
    if values.size < 2:
        logger.debug("insufficient_samples_for_std_dev", sample_count=int(values.size))
    return DistributionSummary(
        count=int(values.size),
        mean=mean(values),
        sample_std_dev=sample_std_dev(values),
    )


def normal_curve(summary: DistributionSummary) -> list[CurvePoint]:
    """
    Estimated normal density at each integer offset within +/- 3 sigma.

    When that would exceed MAX_CURVE_POINTS offsets, the same span is sampled
    at MAX_CURVE_POINTS evenly spaced offsets instead.

    Offsets are evaluated against a zero-centred normal and reported at
    offset + mean. Empty when the summary has no standard deviation or a
    zero one.
    """
    if not summary.has_estimate or summary.sample_std_dev == 0:
        return []

    sigma = summary.sample_std_dev
    low = math.trunc(-CURVE_SPREAD * sigma)
    high = math.trunc(CURVE_SPREAD * sigma)
    if high - low + 1 > MAX_CURVE_POINTS:
        offsets = np.linspace(-CURVE_SPREAD * sigma, CURVE_SPREAD * sigma, MAX_CURVE_POINTS)
    else:
        offsets = np.arange(low, high + 1, dtype=float)
    densities = stats.norm.pdf(offsets, loc=0.0, scale=sigma)

    return [
        CurvePoint(x=float(offset) + summary.mean, y=float(density))
        for offset, density in zip(offsets, densities)
    ]
