"""
Tests for option enums and package exports.
"""

import math


class TestOptions:
    """Test enum values and supported sets."""

    def test_distance_codes(self) -> None:
        """Distance codes are stable."""
        from samplestats.constants import DistanceType

        assert DistanceType.CHEBYSHEV == 1
        assert DistanceType.EUCLIDEAN == 2
        assert DistanceType.MANHATTAN == 3

    def test_supported_sets(self) -> None:
        """Only Euclidean/Manhattan and Pearson are supported."""
        from samplestats.constants import (
            DistanceType,
            CorrelationType,
            SUPPORTED_DISTANCES,
            SUPPORTED_CORRELATIONS,
        )

        assert DistanceType.CHEBYSHEV not in SUPPORTED_DISTANCES
        assert SUPPORTED_CORRELATIONS == {CorrelationType.PEARSON}

    def test_correlation_str(self) -> None:
        """str() of a correlation type is prefixed."""
        from samplestats.constants import CorrelationType

        assert str(CorrelationType.PEARSON) == "CorrelationPearson"
        assert CorrelationType("Kendal") is CorrelationType.KENDALL

    def test_sentinels_are_nan(self) -> None:
        """Sentinels are NaN."""
        from samplestats.constants import UNSET, UNDEFINED

        assert math.isnan(UNSET)
        assert math.isnan(UNDEFINED)


class TestPackageImports:
    """Test top-level exports."""

    def test_import_from_package(self) -> None:
        """Key exports are available from the package root."""
        from samplestats import (
            __version__,
            BatchAccumulator,
            StreamAccumulator,
            DistanceType,
            CorrelationType,
            UnsupportedVariantError,
            OriginalValuesRequiredError,
            ObjectPool,
            summarize,
        )

        assert isinstance(__version__, str)
        acc = BatchAccumulator.from_values([1, 2, 3])
        assert acc.mean() == 2.0
