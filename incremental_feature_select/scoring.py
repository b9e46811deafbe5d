"""
incremental_feature_select.scoring
==================================
Adapters turning scikit-learn style evaluations into subset scorers.

A subset scorer maps a ``frozenset`` of column indices to a float.  The
selector requires it to accept the empty subset, which these adapters score
as ``empty_score`` without touching the data.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from sklearn.base import clone
from sklearn.model_selection import cross_val_score


__all__ = ["make_column_scorer", "make_cv_scorer"]


def make_column_scorer(
    func: Callable[[np.ndarray, np.ndarray], float],
    X: np.ndarray,
    y: np.ndarray,
    *,
    empty_score: float = 0.0,
) -> Callable[[frozenset], float]:
    """Wrap ``func(X_sub, y)`` as a subset scorer over the columns of ``X``.

    Parameters
    ----------
    func : callable
        ``(X_sub, y) -> float`` where ``X_sub`` holds the subset's columns in
        increasing index order.
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    empty_score : float, default=0.0
        Score returned for the empty subset.

    Returns
    -------
    callable
        ``frozenset[int] -> float``.
    """
    X_arr = np.asarray(X)
    y_arr = np.asarray(y)

    def score(subset: frozenset) -> float:
        if not subset:
            return float(empty_score)
        return float(func(X_arr[:, sorted(subset)], y_arr))

    return score


def make_cv_scorer(
    estimator: Any,
    X: np.ndarray,
    y: np.ndarray,
    *,
    cv: int = 5,
    scoring: str | None = None,
    n_jobs: int = 1,
    empty_score: float = 0.0,
) -> Callable[[frozenset], float]:
    """Subset scorer returning the mean cross-validated score of ``estimator``.

    Each call fits a fresh clone of ``estimator`` on the subset's columns.

    Parameters
    ----------
    estimator : sklearn estimator
    X : array-like, shape (n_samples, n_features)
    y : array-like, shape (n_samples,)
    cv : int, default=5
        Number of cross-validation folds.
    scoring : str, optional
        Passed to ``cross_val_score``; ``None`` uses the estimator's default.
    n_jobs : int, default=1
        Parallel jobs for cross-validation.
    empty_score : float, default=0.0
        Score returned for the empty subset.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from sklearn.tree import DecisionTreeClassifier
    >>> X, y = load_iris(return_X_y=True)
    >>> score = make_cv_scorer(DecisionTreeClassifier(random_state=0), X, y, cv=3)
    >>> score(frozenset({2, 3})) > 0.9
    True
    """

    def evaluate(X_sub: np.ndarray, y_arr: np.ndarray) -> float:
        scores = cross_val_score(
            clone(estimator), X_sub, y_arr,
            cv=cv, scoring=scoring, n_jobs=n_jobs,
        )
        return scores.mean()

    return make_column_scorer(evaluate, X, y, empty_score=empty_score)
