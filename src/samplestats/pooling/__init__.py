"""
Reusable object pools for accumulators.

Usage:
    >>> from samplestats.pooling import ObjectPool, get_default_pool
    >>> pool = get_default_pool(BatchAccumulator)
"""

from samplestats.pooling.pool import (
    ObjectPool,
    get_default_pool,
)

__all__ = [
    "ObjectPool",
    "get_default_pool",
]
