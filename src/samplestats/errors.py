"""
Error classes for samplestats.

Only precondition violations raise. Undefined results (empty input,
mismatched lengths) are reported by returning NaN instead.
"""


class SampleStatsError(Exception):
    """Base error for samplestats."""
    pass


class OriginalValuesRequiredError(SampleStatsError, RuntimeError):
    """Operation needs insertion-order values but the accumulator does not keep them."""
    pass


class UnsupportedVariantError(SampleStatsError, NotImplementedError):
    """Requested distance metric or correlation method is not implemented."""
    pass


class PoolError(SampleStatsError, ValueError):
    """Object released into a pool that does not manage its type."""
    pass
