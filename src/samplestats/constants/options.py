"""
Enumerated options and sentinels shared by the accumulators.

Distance metrics and correlation methods are closed sets. Members that are
declared but not implemented stay in the enums so callers can name them,
and selecting one raises UnsupportedVariantError at the call boundary.

Supported:
    | Option          | Members                     |
    |-----------------|-----------------------------|
    | DistanceType    | EUCLIDEAN, MANHATTAN        |
    | CorrelationType | PEARSON                     |

Declared, not implemented:
    - DistanceType.CHEBYSHEV
    - CorrelationType.SPEARMAN, KENDALL, CUSTOM
"""

from enum import Enum, IntEnum
from typing import Final, FrozenSet


# =============================================================================
# Sentinels
# =============================================================================

UNSET: Final[float] = float('nan')
"""Marks a memoized statistic that has not been computed yet."""

UNDEFINED: Final[float] = float('nan')
"""Returned when a statistic is undefined for the current data (empty input, length mismatch)."""


# =============================================================================
# Distance metrics
# =============================================================================

class DistanceType(IntEnum):
    """
    Distance metrics between two index-aligned datasets.
    
    Values match the historical numeric codes so they can be persisted.
    """
    CHEBYSHEV = 1
    EUCLIDEAN = 2
    MANHATTAN = 3


SUPPORTED_DISTANCES: Final[FrozenSet[DistanceType]] = frozenset({
    DistanceType.EUCLIDEAN,
    DistanceType.MANHATTAN,
})


# =============================================================================
# Correlation methods
# =============================================================================

class CorrelationType(str, Enum):
    """Correlation methods between two index-aligned datasets."""
    PEARSON = "Pearson"
    SPEARMAN = "SpearMan"
    CUSTOM = "Custom"
    KENDALL = "Kendal"

    def __str__(self) -> str:
        return "Correlation" + self.value


SUPPORTED_CORRELATIONS: Final[FrozenSet[CorrelationType]] = frozenset({
    CorrelationType.PEARSON,
})


# =============================================================================
# Pooling
# =============================================================================

DEFAULT_POOL_SIZE: Final[int] = 1024
"""Idle instances a default pool keeps; releases beyond this are dropped."""
