"""
Batch (retained-history) descriptive statistics.

BatchAccumulator keeps every observation, so it can answer questions a
streaming accumulator cannot: percentiles, and pairwise metrics against
another dataset (covariance, Pearson correlation, distance).

Cost Model:
    - append: O(1) amortized (bounds, running sum and streaks updated eagerly)
    - sum, bounds, len: O(1)
    - mean, variance, std: O(n) on first call, O(1) afterwards (memoized)
    - percentile: O(n log n) on first call after an append, O(1) afterwards

Cache Policy:
    Every append invalidates all memoized statistics and the sorted flag,
    so queries interleaved with appends always reflect the full data.

Undefined results (empty accumulator, unequal lengths in pairwise metrics)
are returned as NaN. Precondition violations raise (see samplestats.errors).
"""

import math
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from samplestats.constants import UNSET, UNDEFINED, DistanceType, CorrelationType
from samplestats.errors import OriginalValuesRequiredError, PoolError
from samplestats.pooling import ObjectPool, get_default_pool
from samplestats.analysis import pairwise


@dataclass(eq=False)
class BatchAccumulator:
    """
    Append-only collection of observations with memoized statistics.

    Not safe for concurrent mutation: one writer builds the accumulator,
    then any number of readers may query it.

    Streak rule: a value > 0 extends the positive streak; any other value
    (including 0) extends the negative streak. Each resets the other.

    Attributes:
        retain_original: Keep a second copy of the values in insertion order
            (required by distance_to, covariance_population and correlation)

    Example:
        >>> acc = BatchAccumulator.from_values([43, 54, 56, 61, 62, 66])
        >>> acc.percentile(0.9)
        64.0
    """
    retain_original: bool = False

    _values: List[float] = field(default_factory=list, init=False, repr=False)
    _original: Optional[List[float]] = field(default=None, init=False, repr=False)
    _count: int = field(default=0, init=False, repr=False)
    _sorted: bool = field(default=False, init=False, repr=False)
    _sum: float = field(default=0.0, init=False, repr=False)
    _min: float = field(default=float('inf'), init=False, repr=False)
    _max: float = field(default=float('-inf'), init=False, repr=False)
    _positive_count: int = field(default=0, init=False, repr=False)
    _max_positive_streak: int = field(default=0, init=False, repr=False)
    _max_negative_streak: int = field(default=0, init=False, repr=False)
    _positive_streak: int = field(default=0, init=False, repr=False)
    _negative_streak: int = field(default=0, init=False, repr=False)
    # Memoized statistics (UNSET = not computed)
    _mean: float = field(default=UNSET, init=False, repr=False)
    _variance: float = field(default=UNSET, init=False, repr=False)
    _population_variance: float = field(default=UNSET, init=False, repr=False)
    _std: float = field(default=UNSET, init=False, repr=False)
    _population_std: float = field(default=UNSET, init=False, repr=False)
    _pool: Optional[ObjectPool] = field(default=None, init=False, repr=False)
    _released: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self._reset(self.retain_original)

    # =========================================================================
    # Construction and lifecycle
    # =========================================================================

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        retain_original: bool = False,
    ) -> 'BatchAccumulator':
        """
        Build an accumulator from an initial sequence.

        Args:
            values: Observations in insertion order
            retain_original: Keep an insertion-order copy for pairwise metrics

        Returns:
            New BatchAccumulator
        """
        acc = cls(retain_original=retain_original)
        acc.extend(values)
        return acc

    @classmethod
    def from_pool(
        cls,
        retain_original: bool = False,
        pool: Optional[ObjectPool] = None,
    ) -> 'BatchAccumulator':
        """
        Acquire an empty accumulator from a pool.

        Args:
            retain_original: Keep an insertion-order copy for pairwise metrics
            pool: Pool to acquire from (default: process-wide pool)

        Returns:
            Reset BatchAccumulator; call release() when done
        """
        pool = pool if pool is not None else get_default_pool(cls)
        acc = pool.acquire()
        acc._reset(retain_original)
        acc._pool = pool
        acc._released = False
        return acc

    @classmethod
    def from_pool_with_values(
        cls,
        values: Iterable[float],
        retain_original: bool = False,
        pool: Optional[ObjectPool] = None,
    ) -> 'BatchAccumulator':
        """Acquire an accumulator from a pool and fill it with values."""
        acc = cls.from_pool(retain_original, pool=pool)
        acc.extend(values)
        return acc

    def release(self) -> None:
        """
        Return this accumulator to its pool.

        The instance must not be used afterwards. Accumulators built
        directly go to the process-wide pool.

        Raises:
            PoolError: If the accumulator was already released
        """
        if self._released:
            raise PoolError("BatchAccumulator already released")
        pool = self._pool if self._pool is not None else get_default_pool(type(self))
        self._pool = None
        self._released = True
        pool.release(self)

    def _reset(self, retain_original: bool) -> None:
        """Restore every field to the empty state."""
        self.retain_original = retain_original
        self._values = []
        self._original = [] if retain_original else None
        self._count = 0
        self._sorted = False
        self._sum = 0.0
        self._min = float('inf')
        self._max = float('-inf')
        self._positive_count = 0
        self._max_positive_streak = 0
        self._max_negative_streak = 0
        self._positive_streak = 0
        self._negative_streak = 0
        self._invalidate()

    def _invalidate(self) -> None:
        self._mean = UNSET
        self._variance = UNSET
        self._population_variance = UNSET
        self._std = UNSET
        self._population_std = UNSET

    # =========================================================================
    # Mutation
    # =========================================================================

    def append(self, value: float) -> None:
        """
        Add a single observation.

        Args:
            value: New observation
        """
        value = float(value)
        self._values.append(value)
        if self._original is not None:
            self._original.append(value)

        self._sum += value
        if value > 0:
            self._positive_count += 1
            self._positive_streak += 1
            self._negative_streak = 0
            if self._positive_streak > self._max_positive_streak:
                self._max_positive_streak = self._positive_streak
        else:
            self._negative_streak += 1
            self._positive_streak = 0
            if self._negative_streak > self._max_negative_streak:
                self._max_negative_streak = self._negative_streak

        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

        self._count += 1
        self._sorted = False
        self._invalidate()

    def extend(self, values: Iterable[float]) -> None:
        """
        Add observations in order.

        Args:
            values: Iterable or array of observations
        """
        if isinstance(values, np.ndarray):
            values = values.flat
        for value in values:
            self.append(value)

    # =========================================================================
    # Accessors
    # =========================================================================

    def __len__(self) -> int:
        return self._count

    @property
    def values(self) -> np.ndarray:
        """Working copy of the observations (ascending once a percentile was queried)."""
        return np.array(self._values, dtype=np.float64)

    @property
    def original(self) -> np.ndarray:
        """
        Observations in insertion order.

        Raises:
            OriginalValuesRequiredError: If built with retain_original=False
        """
        return np.array(self._require_original(), dtype=np.float64)

    @property
    def retains_original(self) -> bool:
        """True if insertion-order values are kept for pairwise metrics."""
        return self._original is not None

    @property
    def positive_count(self) -> int:
        """Number of observations > 0."""
        return self._positive_count

    @property
    def max_positive_streak(self) -> int:
        """Longest run of consecutive observations > 0."""
        return self._max_positive_streak

    @property
    def max_negative_streak(self) -> int:
        """Longest run of consecutive observations <= 0."""
        return self._max_negative_streak

    def _require_original(self) -> List[float]:
        if self._original is None:
            raise OriginalValuesRequiredError(
                "Insertion-order values are not retained; "
                "construct with retain_original=True"
            )
        return self._original

    # =========================================================================
    # Statistics
    # =========================================================================

    def sum(self) -> float:
        """Sum of all observations in insertion order (0.0 when empty)."""
        return self._sum

    def mean(self) -> float:
        """Arithmetic mean, or NaN when empty."""
        if not math.isnan(self._mean):
            return self._mean
        if self._count == 0:
            return UNDEFINED
        self._mean = self._sum / self._count
        return self._mean

    def _sum_squared_deviations(self) -> float:
        m = self.mean()
        ss = 0.0
        for x in self._values:
            ss += (x - m) * (x - m)
        return ss

    def variance(self) -> float:
        """
        Sample variance (n - 1 divisor).

        Returns:
            NaN when empty, 0.0 for a single observation
        """
        if not math.isnan(self._variance):
            return self._variance
        if self._count == 0:
            return UNDEFINED
        if self._count == 1:
            self._variance = 0.0
            return self._variance
        self._variance = self._sum_squared_deviations() / (self._count - 1)
        return self._variance

    def population_variance(self) -> float:
        """Population variance (n divisor), or NaN when empty."""
        if not math.isnan(self._population_variance):
            return self._population_variance
        if self._count == 0:
            return UNDEFINED
        self._population_variance = self._sum_squared_deviations() / self._count
        return self._population_variance

    def standard_deviation(self) -> float:
        """Sample standard deviation; NaN when empty, 0.0 for one observation."""
        if not math.isnan(self._std):
            return self._std
        if self._count == 0:
            return UNDEFINED
        self._std = float(np.sqrt(self.variance()))
        return self._std

    def standard_deviation_population(self) -> float:
        """Population standard deviation, or NaN when empty."""
        if not math.isnan(self._population_std):
            return self._population_std
        if self._count == 0:
            return UNDEFINED
        self._population_std = float(np.sqrt(self.population_variance()))
        return self._population_std

    def bounds(self) -> Tuple[float, float]:
        """(min, max), or (NaN, NaN) when empty. Constant time."""
        if self._count == 0:
            return UNDEFINED, UNDEFINED
        return self._min, self._max

    def _sort(self) -> None:
        if not self._sorted:
            # NaN sorts first
            self._values.sort(key=lambda v: (not math.isnan(v), v))
            self._sorted = True

    def percentile(self, p: float) -> float:
        """
        Percentile using the midpoint rule.

        For index = p * (n - 1): the value at index when it is whole,
        otherwise the average of the two neighbouring values (not a
        distance-weighted interpolation).

        Args:
            p: Fraction in [0, 1]; <= 0 gives min, >= 1 gives max

        Returns:
            Percentile value, or NaN when empty or p is NaN

        Example:
            >>> BatchAccumulator.from_values(range(1, 11)).percentile(0.5)
            5.5
        """
        if self._count == 0:
            return UNDEFINED
        if math.isnan(p):
            warnings.warn("percentile requested with NaN fraction", RuntimeWarning)
            return UNDEFINED

        if p <= 0:
            return self.bounds()[0]
        if p >= 1:
            return self.bounds()[1]

        self._sort()
        index = float(p) * (self._count - 1)
        if index.is_integer():
            return self._values[int(index)]
        return (self._values[math.floor(index)] + self._values[math.ceil(index)]) / 2.0

    # =========================================================================
    # Pairwise metrics
    # =========================================================================

    def distance_to(
        self,
        other: 'BatchAccumulator',
        metric: Union[DistanceType, int] = DistanceType.EUCLIDEAN,
    ) -> float:
        """
        Distance to another dataset, pairing values by insertion order.

        Euclidean is sum((x - y)^2) / n^2; Manhattan is sum(|x - y|) / n.

        Args:
            other: Accumulator of equal length
            metric: DistanceType.EUCLIDEAN or DistanceType.MANHATTAN

        Returns:
            Distance, or NaN if either is empty or lengths differ

        Raises:
            UnsupportedVariantError: For DistanceType.CHEBYSHEV or unknown codes
            OriginalValuesRequiredError: If either side lacks insertion-order values
        """
        metric = pairwise.resolve_distance(metric)
        return pairwise.distance(
            self._require_original(), other._require_original(), metric
        )

    def covariance_population(self, other: 'BatchAccumulator') -> float:
        """
        Population covariance with another dataset, paired by insertion order.

        Args:
            other: Accumulator of equal length

        Returns:
            Covariance, or NaN if either is empty or lengths differ

        Raises:
            OriginalValuesRequiredError: If either side lacks insertion-order values
        """
        xs = self._require_original()
        ys = other._require_original()
        if not pairwise.is_aligned(len(xs), len(ys)):
            return UNDEFINED
        return pairwise.covariance_population(xs, self.mean(), ys, other.mean())

    def correlation(
        self,
        other: 'BatchAccumulator',
        method: Union[CorrelationType, str] = CorrelationType.PEARSON,
    ) -> float:
        """
        Correlation with another dataset.

        Args:
            other: Accumulator of equal length
            method: Only CorrelationType.PEARSON is implemented

        Returns:
            Correlation in [-1, 1]; 0.0 if either side is constant;
            NaN if either is empty or lengths differ

        Raises:
            UnsupportedVariantError: For any method other than Pearson
            OriginalValuesRequiredError: If either side lacks insertion-order values
        """
        pairwise.resolve_correlation(method)
        self._require_original()
        other._require_original()
        if not pairwise.is_aligned(self._count, other._count):
            return UNDEFINED
        return pairwise.pearson(
            self.covariance_population(other),
            other.standard_deviation_population(),
            self.standard_deviation_population(),
        )

    # =========================================================================
    # Export
    # =========================================================================

    def summary(self) -> Dict[str, Any]:
        """Convert statistics to dict."""
        low, high = self.bounds()
        return {
            'n': self._count,
            'sum': self.sum(),
            'mean': self.mean(),
            'variance': self.variance(),
            'std': self.standard_deviation(),
            'population_variance': self.population_variance(),
            'population_std': self.standard_deviation_population(),
            'min': low,
            'max': high,
            'positive_count': self._positive_count,
            'max_positive_streak': self._max_positive_streak,
            'max_negative_streak': self._max_negative_streak,
        }
