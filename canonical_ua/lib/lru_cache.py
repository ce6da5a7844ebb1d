from collections import OrderedDict
from threading import Lock
from typing import Generic, TypeVar, overload, override

K = TypeVar('K')
V = TypeVar('V')
D = TypeVar('D')

_not_found = object()


class LRUCache(Generic[K, V]):
    """
    Capacity-bounded mapping that evicts the least recently used entry.

    There is no time-based expiry. Reads and writes both refresh recency.
    """

    __slots__ = ('_cache', '_maxsize')

    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            raise ValueError(f'LRUCache maxsize must be positive, got {maxsize}')
        self._maxsize = maxsize
        self._cache: OrderedDict[K, V] = OrderedDict()

    @property
    def maxsize(self) -> int:
        return self._maxsize

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        # membership test does not count as a use
        return key in self._cache

    def __setitem__(self, key: K, value: V) -> None:
        cache = self._cache  # read property once for performance
        if key in cache:
            cache.move_to_end(key)
        elif len(cache) >= self._maxsize:
            cache.popitem(last=False)
        cache[key] = value

    @overload
    def get(self, key: K, /) -> V | None: ...

    @overload
    def get(self, key: K, /, default: D) -> V | D: ...

    def get(self, key: K, /, default: D | None = None) -> V | D | None:
        # read property once for performance
        cache = self._cache
        not_found = _not_found

        value = cache.get(key, not_found)
        if value is not_found:
            return default
        cache.move_to_end(key)
        return value  # type: ignore

    def clear(self) -> None:
        self._cache.clear()


class SynchronizedLRUCache(LRUCache[K, V]):
    """LRUCache safe to share between threads."""

    __slots__ = ('_lock',)

    def __init__(self, maxsize: int) -> None:
        super().__init__(maxsize)
        self._lock = Lock()

    @override
    def __len__(self) -> int:
        with self._lock:
            return super().__len__()

    @override
    def __contains__(self, key: object) -> bool:
        with self._lock:
            return super().__contains__(key)

    @override
    def __setitem__(self, key: K, value: V) -> None:
        with self._lock:
            super().__setitem__(key, value)

    @override
    def get(self, key: K, /, default: D | None = None) -> V | D | None:  # type: ignore[override]
        with self._lock:
            return super().get(key, default)

    @override
    def clear(self) -> None:
        with self._lock:
            super().clear()
