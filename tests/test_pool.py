"""
Tests for object pooling.

Validates reuse, reset-on-acquire, type checks and concurrent access.
"""

import threading

import pytest


class TestObjectPool:
    """Test the generic pool."""

    def test_reuses_released_object(self) -> None:
        """A released object is handed out again."""
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(list)
        first = pool.acquire()
        pool.release(first)

        assert pool.idle == 1
        assert pool.acquire() is first
        assert pool.get_stats()['reuses'] == 1
        assert pool.get_stats()['allocations'] == 1

    def test_max_size_drops_extra(self) -> None:
        """Releases beyond max_size are dropped."""
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(dict, max_size=2)
        for obj in [pool.acquire() for _ in range(3)]:
            pool.release(obj)

        stats = pool.get_stats()
        assert stats['idle'] == 2
        assert stats['dropped'] == 1

    def test_wrong_type_rejected(self) -> None:
        """Releasing a foreign object raises PoolError."""
        from samplestats.pooling import ObjectPool
        from samplestats.errors import PoolError

        pool = ObjectPool(list)

        with pytest.raises(PoolError, match="dict"):
            pool.release({})

    def test_negative_max_size(self) -> None:
        """Negative max_size is rejected."""
        from samplestats.pooling import ObjectPool

        with pytest.raises(ValueError, match="max_size"):
            ObjectPool(list, max_size=-1)

    def test_clear(self) -> None:
        """clear drops idle objects and statistics."""
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(list)
        pool.release(pool.acquire())
        pool.clear()

        assert pool.get_stats() == {
            'kind': 'list', 'idle': 0, 'max_size': pool.max_size,
            'allocations': 0, 'reuses': 0, 'dropped': 0,
        }

    def test_double_release_rejected(self) -> None:
        """An object already idle in the pool cannot be released again."""
        from samplestats.pooling import ObjectPool
        from samplestats.errors import PoolError

        pool = ObjectPool(list)
        obj = pool.acquire()
        pool.release(obj)

        with pytest.raises(PoolError, match="already in the pool"):
            pool.release(obj)
        assert pool.idle == 1

    def test_concurrent_acquire_release(self) -> None:
        """Many threads never receive the same object at the same time."""
        from samplestats.analysis import StreamAccumulator
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(StreamAccumulator)
        errors = []

        def worker(seed: int) -> None:
            for i in range(200):
                acc = StreamAccumulator.from_pool(pool=pool)
                acc.extend([seed, i, seed])
                if len(acc) != 3:
                    errors.append((seed, i, len(acc)))
                acc.release()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert pool.idle <= 8


class TestDefaultPools:
    """Test process-wide pools."""

    def test_one_pool_per_class(self) -> None:
        """get_default_pool returns the same pool for a class."""
        from samplestats.analysis import BatchAccumulator, StreamAccumulator
        from samplestats.pooling import get_default_pool

        assert get_default_pool(BatchAccumulator) is get_default_pool(BatchAccumulator)
        assert get_default_pool(BatchAccumulator) is not get_default_pool(StreamAccumulator)


class TestAccumulatorRoundTrip:
    """Accumulators come back from a pool empty."""

    def test_batch_round_trip(self) -> None:
        """A reacquired BatchAccumulator carries no prior state."""
        import math
        from samplestats.analysis import BatchAccumulator
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(BatchAccumulator)
        acc = BatchAccumulator.from_pool(retain_original=True, pool=pool)
        acc.extend([3, 1, 2])
        acc.percentile(0.5)
        acc.mean()
        acc.release()

        again = BatchAccumulator.from_pool(retain_original=False, pool=pool)

        assert again is acc
        assert len(again) == 0
        assert again.retain_original is False
        assert again.sum() == 0.0
        assert math.isnan(again.mean())
        assert again.positive_count == 0
        assert again.max_negative_streak == 0
        assert math.isnan(again.bounds()[0])

        again.append(10)
        assert again.mean() == 10.0
        assert again.bounds() == (10.0, 10.0)

    def test_batch_from_pool_with_values(self) -> None:
        """from_pool_with_values fills a pooled accumulator."""
        from samplestats.analysis import BatchAccumulator
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(BatchAccumulator)
        acc = BatchAccumulator.from_pool_with_values([1, 2, 3], retain_original=True, pool=pool)

        assert acc.variance() == 1.0
        assert list(acc.original) == [1, 2, 3]
        acc.release()
        assert pool.idle == 1

    def test_stream_round_trip(self) -> None:
        """A reacquired StreamAccumulator reports zero observations."""
        from samplestats.analysis import StreamAccumulator
        from samplestats.pooling import ObjectPool

        pool = ObjectPool(StreamAccumulator)
        acc = StreamAccumulator.from_pool(pool=pool)
        acc.extend([1, 2, 3])
        acc.release()

        again = StreamAccumulator.from_pool(pool=pool)

        assert again is acc
        assert len(again) == 0
        assert again.count == 0
        assert again.bounds() == (float('inf'), float('-inf'))

    def test_direct_instance_goes_to_default_pool(self) -> None:
        """Releasing a directly built accumulator feeds the default pool."""
        from samplestats.analysis import StreamAccumulator
        from samplestats.pooling import get_default_pool

        pool = get_default_pool(StreamAccumulator)
        pool.clear()

        acc = StreamAccumulator()
        acc.append(1.0)
        acc.release()

        assert pool.idle == 1
        reused = StreamAccumulator.from_pool()
        assert reused is acc
        assert len(reused) == 0
        reused.release()

    @pytest.mark.parametrize("kind", ["batch", "stream"])
    def test_second_release_raises(self, kind) -> None:
        """Releasing an accumulator twice raises and leaves the pools untouched."""
        from samplestats.analysis import BatchAccumulator, StreamAccumulator
        from samplestats.errors import PoolError
        from samplestats.pooling import ObjectPool, get_default_pool

        cls = BatchAccumulator if kind == "batch" else StreamAccumulator
        default = get_default_pool(cls)
        default.clear()

        pool = ObjectPool(cls)
        acc = cls.from_pool(pool=pool)
        acc.append(1.0)
        acc.release()

        with pytest.raises(PoolError, match="already released"):
            acc.release()

        assert pool.idle == 1
        assert default.idle == 0

        first = cls.from_pool(pool=pool)
        second = cls.from_pool(pool=pool)
        assert first is acc
        assert second is not acc
