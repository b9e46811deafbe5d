"""
incremental_feature_select.selector
===================================
Incremental relevance/redundancy feature selection.

The low-level entry point is :func:`incremental_selection` (alias
:func:`select`), which works on any pool of hashable, orderable features and
any subset scorer.  :class:`IncrementalFeatureSelector` wraps it as a
scikit-learn transformer over the columns of ``X``:

    selector = IncrementalFeatureSelector(
        threshold=0.7,
        max_size=2,
        remove_red=True,
        estimator=LogisticRegression(),
        cv=5,
    )
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, Callable, Hashable, Iterable

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .cache import ScoreCache, cache_capacity
from .combinations import canonical_order, powerset
from .scoring import make_column_scorer, make_cv_scorer


__all__ = ["IncrementalFeatureSelector", "incremental_selection", "select"]


# ---------------------------------------------------------------------------
# Core algorithm
# ---------------------------------------------------------------------------

def incremental_selection(
    features: Iterable[Hashable],
    scorer: Callable[[frozenset], float],
    threshold: float,
    max_size: int = 1,
    remove_red: bool = False,
    *,
    verbose: int = 0,
    cache: ScoreCache | None = None,
) -> frozenset:
    """Select relevant (and optionally non-redundant) features.

    For each cardinality ``i`` from 1 to ``max_size``:

    1. Candidates are the features not yet found relevant in an earlier
       iteration.
    2. Every size-``i`` subset of the candidates is scored; the features of
       each subset scoring strictly above ``threshold`` are relevant for
       this iteration.
    3. If ``remove_red``, every size-``i+1`` subset of this iteration's
       relevant features is probed: the first feature ``f`` whose removal
       costs strictly less than ``threshold``
       (``score(fs) - score(fs - {f}) < threshold``) is marked redundant.
       Subsets already touching a redundant feature are skipped.
    4. The relevant, non-redundant features are added to the result.

    Parameters
    ----------
    features : iterable of hashable
        Candidate pool.  Elements should be mutually orderable.
    scorer : callable
        ``frozenset -> float``; deterministic and side-effect free.  Must
        accept subsets of up to ``max_size + 1`` features when
        ``remove_red`` is set.
    threshold : float
        Relevance and redundancy decision boundary.
    max_size : int, default=1
        Largest cardinality explored.  ``0`` selects nothing.
    remove_red : bool, default=False
        Discard redundant features.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = per cardinality, 2 = per subset).
    cache : ScoreCache, optional
        Score cache to use.  It must wrap ``scorer`` and is owned by the
        caller, who should not share it between selections.  By default a
        new one sized for this call is created; pass one to inspect the
        scores afterwards.

    Returns
    -------
    frozenset
        Selected features.

    Raises
    ------
    TypeError
        If ``max_size`` is not an integer.
    ValueError
        If ``max_size`` is negative, or ``cache`` does not wrap ``scorer``.

    Any exception raised by ``scorer`` propagates unchanged.

    Examples
    --------
    >>> scores = {("A",): 0.6, ("B",): 0.4, ("C",): 0.5}
    >>> score = lambda fs: scores.get(tuple(sorted(fs)), 0.0)
    >>> sorted(incremental_selection({"A", "B", "C"}, score, threshold=0.5))
    ['A']
    """
    if not isinstance(max_size, Integral):
        raise TypeError(f"max_size must be an integer, got {type(max_size).__name__}.")
    if max_size < 0:
        raise ValueError(f"max_size must be >= 0, got {max_size}.")

    pool = canonical_order(features)
    if cache is None:
        cache = ScoreCache(
            scorer, maxsize=cache_capacity(len(pool), max_size, remove_red),
        )
    elif cache.func is not scorer:
        raise ValueError("cache must wrap the scorer passed to incremental_selection.")

    rel: set = set()      # relevant features of the current iteration
    known: set = set()    # relevant features of all previous iterations
    res: set = set()

    for i in range(1, max_size + 1):
        tf = [f for f in pool if f not in known]
        rel.clear()

        candidates = powerset(tf, i)
        for fs in candidates:
            score = cache(fs)
            if verbose >= 2:
                print(f"  size={i}  features={canonical_order(fs)}  score={score:.4f}")
            if score > threshold:
                rel.update(fs)

        red: set = set()
        if remove_red:
            for fs in powerset(rel, i + 1):
                if not red.isdisjoint(fs):
                    continue
                full = cache(fs)
                for f in canonical_order(fs):
                    if full - cache(fs - {f}) < threshold:
                        red.add(f)
                        break
            res.update(rel - red)
        else:
            res.update(rel)

        known.update(rel)

        if verbose >= 1:
            print(
                f"[incremental_selection] size {i}/{max_size}: "
                f"{len(candidates)} candidate subsets, "
                f"{len(rel)} relevant, {len(red)} redundant, "
                f"{len(res)} selected so far"
            )

    return frozenset(res)


select = incremental_selection


# ---------------------------------------------------------------------------
# scikit-learn estimator
# ---------------------------------------------------------------------------

class IncrementalFeatureSelector(TransformerMixin, BaseEstimator):
    """Incremental relevance/redundancy feature selector.

    Features are the column indices of ``X``.  A feature subset is scored
    either by a user-supplied ``scorer(X_sub, y)`` or by the mean
    cross-validated score of ``estimator`` on the subset's columns, and
    :func:`incremental_selection` picks the features.

    Parameters
    ----------
    threshold : float, default=0.0
        A subset is relevant when its score is strictly above ``threshold``;
        a feature is redundant when removing it lowers the score by strictly
        less than ``threshold``.
    max_size : int, default=1
        Largest feature-subset cardinality explored.
    remove_red : bool, default=False
        Discard redundant features.
    scorer : callable, optional
        ``(X_sub, y) -> float``.  Mutually exclusive with ``estimator``.
    estimator : sklearn estimator, optional
        Model cross-validated on each subset when ``scorer`` is ``None``.
    cv : int, default=5
        Number of cross-validation folds (estimator scoring only).
    scoring : str, optional
        Scoring metric passed to ``cross_val_score``.
    empty_score : float, default=0.0
        Score of the empty subset.
    n_jobs : int, default=1
        Parallel jobs for cross-validation.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = progress, 2 = detailed).

    Attributes
    ----------
    selected_features_ : tuple of int
        Sorted indices of the selected features.
    subset_scores_ : dict
        Score of every subset evaluated during ``fit`` (sorted index tuple
        -> score).
    cache_info_ : CacheInfo
        Hit/miss statistics of the score cache.
    n_features_in_ : int
        Number of features seen during fit.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from sklearn.tree import DecisionTreeClassifier
    >>> X, y = load_iris(return_X_y=True)
    >>> selector = IncrementalFeatureSelector(
    ...     threshold=0.9,
    ...     estimator=DecisionTreeClassifier(random_state=0),
    ...     cv=3,
    ... )
    >>> selector.fit(X, y)
    IncrementalFeatureSelector(...)
    >>> selector.selected_features_
    (2, 3)
    """

    def __init__(
        self,
        threshold: float = 0.0,
        max_size: int = 1,
        remove_red: bool = False,
        scorer: Callable[[np.ndarray, np.ndarray], float] | None = None,
        estimator: Any = None,
        cv: int = 5,
        scoring: str | None = None,
        empty_score: float = 0.0,
        n_jobs: int = 1,
        verbose: int = 0,
    ):
        self.threshold   = threshold
        self.max_size    = max_size
        self.remove_red  = remove_red
        self.scorer      = scorer
        self.estimator   = estimator
        self.cv          = cv
        self.scoring     = scoring
        self.empty_score = empty_score
        self.n_jobs      = n_jobs
        self.verbose     = verbose

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: np.ndarray, y: np.ndarray) -> "IncrementalFeatureSelector":
        """Run incremental selection over the columns of ``X``.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data.
        y : array-like, shape (n_samples,)
            Target values.

        Returns
        -------
        self
        """
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y)
        self.n_features_in_ = X_arr.shape[1]

        self._validate_params()

        if self.scorer is not None:
            subset_scorer = make_column_scorer(
                self.scorer, X_arr, y_arr, empty_score=self.empty_score,
            )
        else:
            subset_scorer = make_cv_scorer(
                self.estimator, X_arr, y_arr,
                cv=self.cv, scoring=self.scoring, n_jobs=self.n_jobs,
                empty_score=self.empty_score,
            )

        if self.verbose >= 1:
            print(
                f"[IncrementalFeatureSelector] Selecting from "
                f"{self.n_features_in_} features "
                f"(threshold={self.threshold}, max_size={self.max_size}, "
                f"remove_red={self.remove_red}) ..."
            )

        cache = ScoreCache(
            subset_scorer,
            maxsize=cache_capacity(self.n_features_in_, self.max_size, self.remove_red),
        )
        selected = incremental_selection(
            range(self.n_features_in_),
            subset_scorer,
            self.threshold,
            max_size=self.max_size,
            remove_red=self.remove_red,
            verbose=self.verbose,
            cache=cache,
        )

        self.selected_features_ = tuple(sorted(selected))
        self.subset_scores_     = dict(cache.items())
        self.cache_info_        = cache.cache_info()

        if self.verbose >= 1:
            print(
                f"[IncrementalFeatureSelector] Done.  "
                f"Selected features: {self.selected_features_}  "
                f"({self.cache_info_.misses} subsets scored)"
            )
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Project X onto the selected features.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, n_selected)
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features."""
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Names of the selected features (``x0``, ``x1``, ... by default)."""
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = [f"x{i}" for i in range(self.n_features_in_)]
        return np.array(
            [input_features[i] for i in self.selected_features_], dtype=object,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_params(self):
        if not isinstance(self.max_size, Integral):
            raise TypeError("max_size must be an integer.")
        if self.max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {self.max_size}.")
        if self.scorer is not None and self.estimator is not None:
            raise ValueError("Pass either scorer or estimator, not both.")
        if self.scorer is None and self.estimator is None:
            raise ValueError("One of scorer or estimator is required.")
        if self.estimator is not None and self.cv < 2:
            raise ValueError("cv must be >= 2.")

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        info = self.cache_info_
        lines = [
            "IncrementalFeatureSelector – fit summary",
            f"  n_features_in          : {self.n_features_in_}",
            f"  threshold              : {self.threshold}",
            f"  max_size               : {self.max_size}",
            f"  remove_red             : {self.remove_red}",
            f"  subsets scored         : {info.misses}",
            f"  cache hits             : {info.hits}",
            f"  selected features      : {self.selected_features_}",
        ]
        return "\n".join(lines)
