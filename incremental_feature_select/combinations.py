"""
incremental_feature_select.combinations
=======================================
Lazy enumeration of feature subsets by cardinality.

The selector only ever needs subsets of one exact size at a time, so the
generator never materialises the full powerset.  :func:`powerset` returns a
:class:`Subsets` object which can be iterated any number of times and whose
length is known up front (``C(n, k)``).
"""

from __future__ import annotations

from itertools import chain, combinations
from math import comb
from typing import Hashable, Iterable, Iterator


__all__ = ["Subsets", "canonical_order", "powerset"]


def canonical_order(features: Iterable[Hashable]) -> tuple:
    """Return ``features`` as a sorted, duplicate-free tuple.

    Falls back to ordering by ``repr`` for mixed types that do not compare.
    """
    unique = set(features)
    try:
        return tuple(sorted(unique))
    except TypeError:
        return tuple(sorted(unique, key=repr))


class Subsets:
    """Restartable lazy sequence of ``frozenset`` subsets.

    Parameters
    ----------
    features : iterable
        Pool of features.  Duplicates are ignored.
    size : int
        Target cardinality.
    exact : bool, default=True
        If ``True`` only subsets of exactly ``size`` elements are produced,
        otherwise every subset of ``0..size`` elements, smallest first.
    """

    def __init__(self, features: Iterable[Hashable], size: int, exact: bool = True):
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}.")
        self.features = canonical_order(features)
        self.size     = size
        self.exact    = exact

    def _sizes(self) -> range:
        if self.exact:
            return range(self.size, self.size + 1)
        return range(0, min(self.size, len(self.features)) + 1)

    def __iter__(self) -> Iterator[frozenset]:
        pools = (combinations(self.features, k) for k in self._sizes())
        return (frozenset(c) for c in chain.from_iterable(pools))

    def __len__(self) -> int:
        n = len(self.features)
        return sum(comb(n, k) for k in self._sizes())

    def __repr__(self) -> str:
        return (
            f"Subsets(n_features={len(self.features)}, size={self.size}, "
            f"exact={self.exact})"
        )


def powerset(
    features: Iterable[Hashable],
    size: int,
    exact: bool = True,
) -> Subsets:
    """Enumerate the subsets of ``features`` with the given cardinality.

    Parameters
    ----------
    features : iterable of hashable
        Candidate pool.
    size : int
        Cardinality of the produced subsets (or the upper bound when
        ``exact`` is ``False``).
    exact : bool, default=True
        Produce only subsets of exactly ``size`` elements.

    Returns
    -------
    Subsets
        Lazy iterable of ``frozenset``; ``len()`` gives the subset count.

    Examples
    --------
    >>> sorted(sorted(s) for s in powerset("abc", 2))
    [['a', 'b'], ['a', 'c'], ['b', 'c']]
    >>> len(powerset(range(10), 3))
    120
    """
    return Subsets(features, size, exact=exact)
