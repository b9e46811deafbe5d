"""
incremental_feature_select.cache
================================
Bounded memoizing cache for subset scores.

A :class:`ScoreCache` wraps a pure scoring function ``frozenset -> float``.
Keys are canonicalised (sorted tuple of the subset's features) so that the
same subset always hits the same entry regardless of how it was built.

Computational notes
-------------------
* Least recently used entries are evicted first once ``maxsize`` is exceeded.
  Eviction only costs recomputation, never correctness.
* Lookups are thread-safe and single-flight: if several threads request the
  same missing key, the scorer runs once and the others wait for its result.
* A failing scorer call is not cached; its exception propagates to the
  caller that triggered it and any waiting threads retry.
"""

from __future__ import annotations

import threading
from collections import OrderedDict, namedtuple
from math import comb
from typing import Callable, Hashable, Iterable

from .combinations import canonical_order


__all__ = ["CacheInfo", "ScoreCache", "cache_capacity", "canonical_key"]


CacheInfo = namedtuple("CacheInfo", ["hits", "misses", "maxsize", "currsize"])

# Upper bound for the advisory capacity; n ** k explodes quickly.
MAX_CAPACITY = 2 ** 20


def canonical_key(subset: Iterable[Hashable]) -> tuple:
    """Sorted tuple identifying ``subset`` in the cache."""
    return canonical_order(subset)


def cache_capacity(n_features: int, max_size: int, remove_red: bool = False) -> int:
    """Advisory cache size for a selection over ``n_features`` features.

    The relevance pass queries subsets of up to ``max_size`` features and the
    redundancy pass (``remove_red``) subsets of one more.  The capacity is the
    larger of ``n_features ** top`` and the number of distinct non-empty
    subsets of up to ``top`` features, clipped to ``[1, MAX_CAPACITY]``.
    """
    top = max_size + 1 if remove_red else max_size
    if n_features <= 0 or top <= 0:
        return 1
    distinct = 0
    for k in range(1, min(top, n_features) + 1):
        distinct += comb(n_features, k)
        if distinct >= MAX_CAPACITY:
            return MAX_CAPACITY
    capacity = 1
    for _ in range(top):
        capacity *= n_features
        if capacity >= MAX_CAPACITY:
            return MAX_CAPACITY
    return max(capacity, distinct)


class _Flight:
    """A computation in progress for one key."""

    __slots__ = ("done", "ok", "value")

    def __init__(self):
        self.done  = threading.Event()
        self.ok    = False
        self.value = None


class ScoreCache:
    """LRU memoizing wrapper around a subset scorer.

    Parameters
    ----------
    func : callable
        ``frozenset -> float``.  Assumed deterministic and side-effect free.
    maxsize : int, default=128
        Maximum number of cached subsets.

    Examples
    --------
    >>> calls = []
    >>> def score(fs):
    ...     calls.append(fs)
    ...     return float(len(fs))
    >>> cache = ScoreCache(score, maxsize=4)
    >>> cache({"a", "b"}), cache(("b", "a"))
    (2.0, 2.0)
    >>> len(calls)
    1
    """

    def __init__(self, func: Callable[[frozenset], float], maxsize: int = 128):
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}.")
        self.func    = func
        self.maxsize = maxsize
        self.hits    = 0
        self.misses  = 0

        self._data: OrderedDict = OrderedDict()
        self._inflight: dict = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_or_compute(self, key: Iterable[Hashable]) -> float:
        """Return the score of ``key``, computing it at most once."""
        ckey = canonical_key(key)
        while True:
            with self._lock:
                if ckey in self._data:
                    self._data.move_to_end(ckey)
                    self.hits += 1
                    return self._data[ckey]
                flight = self._inflight.get(ckey)
                owner = flight is None
                if owner:
                    flight = _Flight()
                    self._inflight[ckey] = flight
                    self.misses += 1

            if owner:
                return self._compute(ckey, flight)

            flight.done.wait()
            if flight.ok:
                with self._lock:
                    self.hits += 1
                return flight.value
            # The owner failed; try again (possibly becoming the owner).

    __call__ = get_or_compute

    def _compute(self, ckey: tuple, flight: _Flight) -> float:
        try:
            value = self.func(frozenset(ckey))
        except BaseException:
            with self._lock:
                del self._inflight[ckey]
            flight.done.set()
            raise

        with self._lock:
            self._data[ckey] = value
            self._data.move_to_end(ckey)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)
            del self._inflight[ckey]
        flight.value = value
        flight.ok    = True
        flight.done.set()
        return value

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def currsize(self) -> int:
        with self._lock:
            return len(self._data)

    def __len__(self) -> int:
        return self.currsize

    def __contains__(self, key) -> bool:
        with self._lock:
            return canonical_key(key) in self._data

    def items(self) -> list[tuple[tuple, float]]:
        """Snapshot of ``(key, score)`` pairs, least recently used first."""
        with self._lock:
            return list(self._data.items())

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self.hits, self.misses, self.maxsize, len(self._data))

    def clear(self) -> None:
        """Drop every entry and reset the statistics."""
        with self._lock:
            self._data.clear()
            self.hits   = 0
            self.misses = 0

    def __repr__(self) -> str:
        info = self.cache_info()
        return (
            f"ScoreCache(hits={info.hits}, misses={info.misses}, "
            f"maxsize={info.maxsize}, currsize={info.currsize})"
        )
