"""
Thread-safe reusable object pool.

Accumulators are cheap to reset but comparatively expensive to allocate
when thousands are created and discarded per second. The pool keeps a
bounded free list of idle instances behind a lock.

The pool never clears anything: callers reset an instance right after
acquiring it.

Usage:
    >>> pool = ObjectPool(StreamAccumulator, max_size=64)
    >>> acc = pool.acquire()
    >>> ...
    >>> pool.release(acc)
"""

import logging
import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, Generic, Optional, Type, TypeVar

from samplestats.constants import DEFAULT_POOL_SIZE
from samplestats.errors import PoolError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ObjectPool(Generic[T]):
    """
    Bounded free list of reusable objects.
    
    Safe for concurrent acquire/release from many threads.
    
    Attributes:
        kind: Type of object managed (release() rejects anything else)
        max_size: Maximum number of idle objects retained
    """
    
    def __init__(
        self,
        factory: Callable[[], T],
        kind: Optional[Type[T]] = None,
        max_size: int = DEFAULT_POOL_SIZE,
    ):
        """
        Initialize pool.
        
        Args:
            factory: Zero-argument callable creating a fresh object
            kind: Type checked on release (default: factory if it is a class)
            max_size: Idle objects kept before releases are dropped
        
        Raises:
            ValueError: If max_size is negative
        """
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        if kind is None and isinstance(factory, type):
            kind = factory
        
        self.kind = kind
        self.max_size = max_size
        self._factory = factory
        self._free: Deque[T] = deque()
        self._lock = threading.Lock()
        self._allocations = 0
        self._reuses = 0
        self._dropped = 0
    
    def acquire(self) -> T:
        """
        Take an idle object, or allocate a new one if none is idle.
        
        Returns:
            Object in unspecified state; the caller must reset it
        """
        with self._lock:
            if self._free:
                self._reuses += 1
                return self._free.pop()
            self._allocations += 1
        
        logger.debug("Pool for %s allocating new instance", self._kind_name)
        return self._factory()
    
    def release(self, obj: T) -> None:
        """
        Return an object to the pool.
        
        The caller must not use obj afterwards.
        
        Args:
            obj: Object previously acquired (or built by the same factory)
        
        Raises:
            PoolError: If obj is not an instance of the pool's kind,
                or is already idle in the pool
        """
        if self.kind is not None and not isinstance(obj, self.kind):
            raise PoolError(
                f"Cannot release {type(obj).__name__} into pool of {self._kind_name}"
            )
        
        with self._lock:
            if any(idle is obj for idle in self._free):
                raise PoolError(f"{self._kind_name} instance is already in the pool")
            if len(self._free) < self.max_size:
                self._free.append(obj)
                return
            self._dropped += 1
        
        logger.debug("Pool for %s full (%d idle), dropping instance",
                     self._kind_name, self.max_size)
    
    def clear(self) -> None:
        """Drop all idle objects and reset statistics."""
        with self._lock:
            self._free.clear()
            self._allocations = 0
            self._reuses = 0
            self._dropped = 0
    
    @property
    def idle(self) -> int:
        """Number of idle objects currently held."""
        with self._lock:
            return len(self._free)
    
    def get_stats(self) -> Dict[str, Any]:
        """Pool statistics as a dict."""
        with self._lock:
            return {
                'kind': self._kind_name,
                'idle': len(self._free),
                'max_size': self.max_size,
                'allocations': self._allocations,
                'reuses': self._reuses,
                'dropped': self._dropped,
            }
    
    @property
    def _kind_name(self) -> str:
        return self.kind.__name__ if self.kind is not None else 'object'


# Process-wide pools, one per accumulator class
_default_pools: Dict[type, ObjectPool] = {}
_default_pools_lock = threading.Lock()


def get_default_pool(cls: Type[T]) -> ObjectPool[T]:
    """
    Get the process-wide pool for cls, creating it on first use.
    
    Args:
        cls: Class with a zero-argument constructor
    
    Returns:
        Shared ObjectPool for cls
    """
    with _default_pools_lock:
        pool = _default_pools.get(cls)
        if pool is None:
            pool = ObjectPool(cls)
            _default_pools[cls] = pool
        return pool
