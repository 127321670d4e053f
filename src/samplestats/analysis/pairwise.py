"""
Pairwise metrics between two index-aligned datasets.

Kernels operate on plain sequences in insertion order. Callers
(BatchAccumulator) are responsible for passing original-order values,
so a percentile-triggered sort never misaligns the pairs.

Metrics:
    - Euclidean: sum((x - y)^2) / n^2 (no square root)
    - Manhattan: sum(|x - y|) / n
    - Population covariance: sum((x - mean_x) * (y - mean_y)) / n
    - Pearson: cov / (std_x * std_y), 0 when either std is exactly 0

Undefined inputs (empty or unequal lengths) yield NaN. Unsupported
variants raise UnsupportedVariantError before any data is touched.
"""

from typing import Sequence, Union

from samplestats.constants import (
    UNDEFINED,
    DistanceType,
    CorrelationType,
    SUPPORTED_DISTANCES,
    SUPPORTED_CORRELATIONS,
)
from samplestats.errors import UnsupportedVariantError


def resolve_distance(metric: Union[DistanceType, int]) -> DistanceType:
    """
    Validate a distance selector.
    
    Args:
        metric: DistanceType member or its numeric code
    
    Returns:
        The DistanceType member
    
    Raises:
        UnsupportedVariantError: Unknown code, or a declared but unimplemented metric
    """
    try:
        metric = DistanceType(metric)
    except ValueError:
        raise UnsupportedVariantError(f"Unknown distance: {metric!r}") from None
    if metric not in SUPPORTED_DISTANCES:
        raise UnsupportedVariantError(f"{metric.name.title()} distance is not implemented")
    return metric


def resolve_correlation(method: Union[CorrelationType, str]) -> CorrelationType:
    """
    Validate a correlation selector.
    
    Args:
        method: CorrelationType member or its string value
    
    Returns:
        The CorrelationType member
    
    Raises:
        UnsupportedVariantError: Unknown method, or a method other than Pearson
    """
    try:
        method = CorrelationType(method)
    except ValueError:
        raise UnsupportedVariantError(f"Unknown correlation: {method!r}") from None
    if method not in SUPPORTED_CORRELATIONS:
        raise UnsupportedVariantError(f"{method!s} is not implemented")
    return method


def is_aligned(n_a: int, n_b: int) -> bool:
    """True if both datasets are non-empty and of equal length."""
    return n_a > 0 and n_a == n_b


def distance(
    xs: Sequence[float],
    ys: Sequence[float],
    metric: Union[DistanceType, int],
) -> float:
    """
    Distance between two index-aligned datasets.
    
    Args:
        xs: First dataset in insertion order
        ys: Second dataset in insertion order
        metric: DistanceType.EUCLIDEAN or DistanceType.MANHATTAN
    
    Returns:
        Distance, or NaN if the datasets are empty or of unequal length
    
    Raises:
        UnsupportedVariantError: If metric is not implemented
    """
    metric = resolve_distance(metric)
    n = len(xs)
    if not is_aligned(n, len(ys)):
        return UNDEFINED
    
    total = 0.0
    if metric is DistanceType.EUCLIDEAN:
        for x, y in zip(xs, ys):
            d = x - y
            total += d * d
        return total / float(n) ** 2
    
    for x, y in zip(xs, ys):
        total += abs(x - y)
    return total / n


def covariance_population(
    xs: Sequence[float],
    mean_x: float,
    ys: Sequence[float],
    mean_y: float,
) -> float:
    """
    Population covariance between two index-aligned datasets.
    
    Args:
        xs: First dataset in insertion order
        mean_x: Mean of xs
        ys: Second dataset in insertion order
        mean_y: Mean of ys
    
    Returns:
        Covariance, or NaN if the datasets are empty or of unequal length
    """
    n = len(xs)
    if not is_aligned(n, len(ys)):
        return UNDEFINED
    
    ss = 0.0
    for x, y in zip(xs, ys):
        ss += (y - mean_y) * (x - mean_x)
    return ss / n


def pearson(covariance: float, std_x: float, std_y: float) -> float:
    """
    Pearson correlation from a population covariance and population stds.
    
    Returns 0.0 if either standard deviation is exactly zero.
    """
    if std_x == 0 or std_y == 0:
        return 0.0
    return covariance / (std_x * std_y)
