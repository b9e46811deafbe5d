"""
incremental_feature_select
==========================
Incremental relevance/redundancy feature subset selection with a
scikit-learn compatible estimator.

Given a pool of features and a scoring function over feature subsets, the
selector grows the subset cardinality from 1 to ``max_size`` and keeps the
features that take part in a subset scoring above a threshold.  Optionally
it drops features that can be removed without the score falling by at least
the threshold.

Core idea
---------
**Relevance**
    At cardinality ``i`` every size-``i`` combination of the features not yet
    known to be relevant is scored.  A combination is relevant when::

        score(S) > threshold

    and all of its features become relevant.

**Redundancy** (optional)
    Among the relevant features, every size-``i+1`` combination ``S`` is
    probed; a feature ``f`` is redundant when::

        score(S) - score(S \\ {f}) < threshold

Scores are memoized in a bounded LRU cache owned by the selection call, so
each distinct subset is scored at most once.

Public API
----------
IncrementalFeatureSelector  – sklearn-compatible estimator over columns of X
incremental_selection       – core algorithm on any feature pool (alias select)
ScoreCache                  – thread-safe LRU memoizing score cache
powerset                    – lazy fixed-cardinality subset enumeration
make_cv_scorer              – cross-validation based subset scorer
"""

from .cache      import CacheInfo, ScoreCache, cache_capacity
from .combinations import powerset
from .scoring    import make_column_scorer, make_cv_scorer
from .selector   import IncrementalFeatureSelector, incremental_selection, select

__all__ = [
    "CacheInfo",
    "IncrementalFeatureSelector",
    "ScoreCache",
    "cache_capacity",
    "incremental_selection",
    "make_column_scorer",
    "make_cv_scorer",
    "powerset",
    "select",
]

__version__ = "0.1.0"
