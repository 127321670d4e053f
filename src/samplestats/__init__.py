"""
samplestats - Online and batch descriptive statistics.

Computes sum, mean, sample/population variance, standard deviation,
bounds, percentiles, positive/negative streaks, and pairwise measures
(covariance, Pearson correlation, distance) over sequences of floats.

Modules:
    constants: Distance/correlation options, sentinels, pool defaults
    analysis: BatchAccumulator, StreamAccumulator, summaries
    pooling: Thread-safe reusable object pools
    errors: Precondition-violation exceptions

Quick Start:
    >>> from samplestats import BatchAccumulator, StreamAccumulator
    >>> 
    >>> acc = BatchAccumulator.from_values([43, 54, 56, 61, 62, 66])
    >>> acc.percentile(0.9)
    64.0
    >>> 
    >>> # Constant memory, reused from the process-wide pool
    >>> stream = StreamAccumulator.from_pool()
    >>> stream.extend([1, 2, -1, -1, -1, 1, 1, 1])
    >>> stream.max_positive_streak, stream.max_negative_streak
    (3, 3)
    >>> stream.release()

Undefined results (empty input, unequal lengths) are NaN; misuse
(unsupported metric, missing insertion-order values) raises.
"""

__version__ = "0.1.0"

from samplestats.constants import (
    UNDEFINED,
    DistanceType,
    CorrelationType,
)

from samplestats.errors import (
    SampleStatsError,
    OriginalValuesRequiredError,
    UnsupportedVariantError,
    PoolError,
)

from samplestats.pooling import ObjectPool, get_default_pool

from samplestats.analysis import (
    BatchAccumulator,
    StreamAccumulator,
    summarize,
    pairwise_matrix,
)

__all__ = [
    # Version
    "__version__",
    # Options
    "UNDEFINED",
    "DistanceType",
    "CorrelationType",
    # Errors
    "SampleStatsError",
    "OriginalValuesRequiredError",
    "UnsupportedVariantError",
    "PoolError",
    # Pooling
    "ObjectPool",
    "get_default_pool",
    # Accumulators
    "BatchAccumulator",
    "StreamAccumulator",
    "summarize",
    "pairwise_matrix",
]
