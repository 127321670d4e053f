"""
Constants for sample statistics.

Re-exports the enumerated options and sentinels from options.py.

Usage:
    >>> from samplestats.constants import DistanceType, CorrelationType
    >>> DistanceType.EUCLIDEAN in SUPPORTED_DISTANCES
    True
"""

from samplestats.constants.options import (
    # Sentinels
    UNSET,
    UNDEFINED,
    # Distance
    DistanceType,
    SUPPORTED_DISTANCES,
    # Correlation
    CorrelationType,
    SUPPORTED_CORRELATIONS,
    # Pooling
    DEFAULT_POOL_SIZE,
)

__all__ = [
    "UNSET",
    "UNDEFINED",
    "DistanceType",
    "SUPPORTED_DISTANCES",
    "CorrelationType",
    "SUPPORTED_CORRELATIONS",
    "DEFAULT_POOL_SIZE",
]
