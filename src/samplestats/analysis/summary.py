"""
Tabular summaries over named accumulators.

Collects the statistics of several accumulators into pandas DataFrames
for display or export:
    - summarize: one row of descriptive statistics per accumulator
    - pairwise_matrix: square matrix of a pairwise metric

Example:
    >>> accs = {
    ...     'a': BatchAccumulator.from_values([1, 2, 3.5, 3.7, 8, 12], retain_original=True),
    ...     'b': BatchAccumulator.from_values([0.5, 1, 2.1, 3.4, 3.4, 4], retain_original=True),
    ... }
    >>> df = summarize(accs)
    >>> print(df[['n', 'mean', 'std']])
    >>> corr = pairwise_matrix(accs, kind='correlation')
"""

from typing import Callable, Dict, Mapping, Union

import numpy as np
import pandas as pd

from samplestats.constants import DistanceType
from samplestats.analysis.batch import BatchAccumulator
from samplestats.analysis.streaming_stats import StreamAccumulator


SUMMARY_COLUMNS = [
    'n', 'sum', 'mean', 'variance', 'std',
    'population_variance', 'population_std',
    'min', 'max',
    'positive_count', 'max_positive_streak', 'max_negative_streak',
]

Accumulator = Union[BatchAccumulator, StreamAccumulator]

_PAIRWISE_KINDS: Dict[str, Callable[[BatchAccumulator, BatchAccumulator], float]] = {
    'covariance': lambda a, b: a.covariance_population(b),
    'correlation': lambda a, b: a.correlation(b),
    'euclidean': lambda a, b: a.distance_to(b, DistanceType.EUCLIDEAN),
    'manhattan': lambda a, b: a.distance_to(b, DistanceType.MANHATTAN),
}


def summarize(accumulators: Mapping[str, Accumulator]) -> pd.DataFrame:
    """
    Descriptive statistics for each named accumulator.

    Statistics a StreamAccumulator does not provide (population
    variance/std) are NaN in its row.

    Args:
        accumulators: Mapping name -> accumulator

    Returns:
        DataFrame indexed by name with SUMMARY_COLUMNS
    """
    names = list(accumulators)
    rows = [accumulators[name].summary() for name in names]
    return pd.DataFrame(
        rows,
        index=pd.Index(names, name='name'),
        columns=SUMMARY_COLUMNS,
    )


def pairwise_matrix(
    accumulators: Mapping[str, BatchAccumulator],
    kind: str = 'correlation',
) -> pd.DataFrame:
    """
    Pairwise metric between every pair of accumulators.

    Args:
        accumulators: Mapping name -> BatchAccumulator built with retain_original=True
        kind: 'covariance', 'correlation', 'euclidean' or 'manhattan'

    Returns:
        Square DataFrame (names x names); NaN where lengths differ

    Raises:
        ValueError: If kind is unknown
        OriginalValuesRequiredError: If any accumulator lacks insertion-order values
    """
    if kind not in _PAIRWISE_KINDS:
        raise ValueError(
            f"Unknown pairwise kind {kind!r}, expected one of {sorted(_PAIRWISE_KINDS)}"
        )
    metric = _PAIRWISE_KINDS[kind]

    names = list(accumulators)
    matrix = np.full((len(names), len(names)), np.nan)
    for i, a in enumerate(names):
        for j, b in enumerate(names):
            matrix[i, j] = metric(accumulators[a], accumulators[b])

    return pd.DataFrame(matrix, index=names, columns=names)
