"""
Streaming (online) statistics algorithms.

Provides constant-memory incremental statistics:
    - StreamAccumulator: sum, bounds, streaks and Welford mean/variance

No observation history is kept, so percentiles and pairwise metrics are
only available on BatchAccumulator.

Reference:
    Welford, B. P. (1962). "Note on a method for calculating
    corrected sums of squares and products"

Memory Budget:
    - StreamAccumulator: O(1), a dozen scalars regardless of data size
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from samplestats.errors import PoolError
from samplestats.pooling import ObjectPool, get_default_pool


@dataclass(eq=False)
class StreamAccumulator:
    """
    Welford's online algorithm for computing mean and variance.

    Numerically stable, single-pass, constant memory. Each append is O(1).

    Formula:
        mean_n = mean_{n-1} + (x_n - mean_{n-1}) / n
        M2_n = M2_{n-1} + (x_n - mean_{n-1}) * (x_n - mean_n)
        variance = M2 / (n - 1)

    Queries on fewer than two observations are not special-cased: they
    follow IEEE 754 division (0 / 0 = NaN) instead of raising.

    Attributes:
        count: Number of observations (kept as float64)
        running_mean: Welford running mean
        M2: Sum of squared deviations from the running mean
        sum_val: Sum of observations in insertion order
        min_val: Minimum value seen (inf before the first observation)
        max_val: Maximum value seen (-inf before the first observation)
        positive_count: Observations > 0
        max_positive_streak: Longest run of observations > 0
        max_negative_streak: Longest run of observations <= 0
    """
    count: np.float64 = field(default_factory=lambda: np.float64(0.0))
    running_mean: float = 0.0
    M2: float = 0.0  # Sum of squared deviations
    sum_val: float = 0.0
    min_val: float = float('inf')
    max_val: float = float('-inf')
    positive_count: int = 0
    max_positive_streak: int = 0
    max_negative_streak: int = 0
    _positive_streak: int = field(default=0, init=False, repr=False)
    _negative_streak: int = field(default=0, init=False, repr=False)
    _initialized: bool = field(default=False, init=False, repr=False)
    _pool: Optional[ObjectPool] = field(default=None, init=False, repr=False)
    _released: bool = field(default=False, init=False, repr=False)

    @classmethod
    def from_pool(cls, pool: Optional[ObjectPool] = None) -> 'StreamAccumulator':
        """
        Acquire an empty accumulator from a pool.

        Args:
            pool: Pool to acquire from (default: process-wide pool)

        Returns:
            Reset StreamAccumulator; call release() when done
        """
        pool = pool if pool is not None else get_default_pool(cls)
        acc = pool.acquire()
        acc.reset()
        acc._pool = pool
        acc._released = False
        return acc

    def release(self) -> None:
        """
        Return this accumulator to its pool. It must not be used afterwards.

        Raises:
            PoolError: If the accumulator was already released
        """
        if self._released:
            raise PoolError("StreamAccumulator already released")
        pool = self._pool if self._pool is not None else get_default_pool(type(self))
        self._pool = None
        self._released = True
        pool.release(self)

    def reset(self) -> None:
        """Restore every field to the empty state."""
        self.count = np.float64(0.0)
        self.running_mean = 0.0
        self.M2 = 0.0
        self.sum_val = 0.0
        self.min_val = float('inf')
        self.max_val = float('-inf')
        self.positive_count = 0
        self.max_positive_streak = 0
        self.max_negative_streak = 0
        self._positive_streak = 0
        self._negative_streak = 0
        self._initialized = False

    def append(self, x: float) -> None:
        """
        Update with a single value.

        Args:
            x: New observation
        """
        x = float(x)
        self.sum_val += x
        if x > 0:
            self.positive_count += 1
            self._positive_streak += 1
            self._negative_streak = 0
            if self._positive_streak > self.max_positive_streak:
                self.max_positive_streak = self._positive_streak
        else:
            self._negative_streak += 1
            self._positive_streak = 0
            if self._negative_streak > self.max_negative_streak:
                self.max_negative_streak = self._negative_streak

        # NaN never replaces a bound
        if x < self.min_val:
            self.min_val = x
        if x > self.max_val:
            self.max_val = x

        self.count += 1
        if not self._initialized:
            self._initialized = True
            self.running_mean = x
            return

        # New mean first; M2 uses both the old and the new mean
        new_mean = self.running_mean + (x - self.running_mean) / float(self.count)
        self.M2 += (x - self.running_mean) * (x - new_mean)
        self.running_mean = new_mean

    def extend(self, values: Iterable[float]) -> None:
        """
        Update with a batch of values.

        Args:
            values: Iterable or array of observations
        """
        if isinstance(values, np.ndarray):
            values = values.flat
        for x in values:
            self.append(x)

    def __len__(self) -> int:
        return int(self.count)

    def sum(self) -> float:
        """Sum of observations."""
        return self.sum_val

    def bounds(self) -> Tuple[float, float]:
        """(min, max); (inf, -inf) before the first observation."""
        return self.min_val, self.max_val

    def mean(self) -> float:
        """Mean as sum / count (NaN when empty)."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.sum_val) / self.count)

    def variance(self) -> float:
        """Sample variance, M2 / (count - 1)."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.M2) / (self.count - 1))

    def standard_deviation(self) -> float:
        """Sample standard deviation."""
        with np.errstate(invalid='ignore'):
            return float(np.sqrt(self.variance()))

    def summary(self) -> Dict[str, Any]:
        """Convert to dict."""
        return {
            'n': len(self),
            'sum': self.sum_val,
            'mean': self.mean(),
            'variance': self.variance(),
            'std': self.standard_deviation(),
            'min': self.min_val,
            'max': self.max_val,
            'positive_count': self.positive_count,
            'max_positive_streak': self.max_positive_streak,
            'max_negative_streak': self.max_negative_streak,
        }
