"""
Descriptive statistics accumulators.

Two accumulators share one statistical contract but trade memory for
latency:
    - batch: BatchAccumulator keeps every value (percentiles, pairwise metrics)
    - streaming_stats: StreamAccumulator keeps O(1) state (Welford)
    - pairwise: distance / covariance / correlation kernels
    - summary: pandas DataFrame summaries over named accumulators

Usage:
    >>> from samplestats.analysis import BatchAccumulator, StreamAccumulator
    >>> 
    >>> batch = BatchAccumulator.from_values([1, 2, 3, 4, 5])
    >>> stream = StreamAccumulator()
    >>> stream.extend([1, 2, 3, 4, 5])
    >>> batch.mean() == stream.mean()
    True
"""

from samplestats.analysis import pairwise

from samplestats.analysis.batch import BatchAccumulator

from samplestats.analysis.streaming_stats import StreamAccumulator

from samplestats.analysis.summary import (
    SUMMARY_COLUMNS,
    summarize,
    pairwise_matrix,
)

__all__ = [
    # Pairwise kernels
    "pairwise",
    # Accumulators
    "BatchAccumulator",
    "StreamAccumulator",
    # Summaries
    "SUMMARY_COLUMNS",
    "summarize",
    "pairwise_matrix",
]
