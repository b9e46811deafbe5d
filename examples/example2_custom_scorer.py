"""
Example 2 – Using incremental_selection Directly
================================================
The core algorithm works on any pool of hashable features and any subset
scorer.  Here the features are column names and the score is the R^2 of a
linear fit, so a feature that only matters in combination with another is
found at cardinality 2.
"""

import numpy as np
from sklearn.linear_model import LinearRegression

from incremental_feature_select import ScoreCache, incremental_selection

# ---------------------------------------------------------------------------
# Synthetic data: y depends on a, and on b*c jointly; d is a copy of a
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 500
cols = {name: rng.normal(size=n) for name in "abce"}
cols["d"] = cols["a"] + rng.normal(scale=0.01, size=n)
y = 2.0 * cols["a"] + cols["b"] * cols["c"] + rng.normal(scale=0.1, size=n)


def r2(subset):
    if not subset:
        return 0.0
    names = sorted(subset)
    X = np.column_stack([cols[c] for c in names])
    if len(names) > 1:
        X = np.column_stack([X, np.prod(X, axis=1)])
    return LinearRegression().fit(X, y).score(X, y)


cache = ScoreCache(r2, maxsize=256)
selected = incremental_selection(
    cols, r2, threshold=0.1, max_size=2, remove_red=True, verbose=1, cache=cache,
)
print(f"\nSelected features: {sorted(selected)}")
print(f"Subsets scored: {cache.cache_info().misses}")
