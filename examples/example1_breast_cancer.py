"""
Example 1 – Breast Cancer (Binary Classification)
==================================================
Dataset : Wisconsin Breast Cancer (30 features, 2 classes, 569 samples)
Task    : Keep the features that, alone or in pairs, give a cross-validated
          logistic-regression accuracy above 0.9, dropping redundant ones.
"""

from sklearn.datasets import load_breast_cancer
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import accuracy_score
from sklearn.model_selection import train_test_split
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from incremental_feature_select import IncrementalFeatureSelector
from incremental_feature_select.plot import plot_subset_scores

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_breast_cancer(return_X_y=True)
feature_names = load_breast_cancer().feature_names.tolist()

X_train, X_test, y_train, y_test = train_test_split(
    X, y, test_size=0.2, random_state=42, stratify=y,
)

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 2 classes")

# ---------------------------------------------------------------------------
# 2. Run incremental selection
# ---------------------------------------------------------------------------
model = make_pipeline(StandardScaler(), LogisticRegression(max_iter=1000))

selector = IncrementalFeatureSelector(
    threshold=0.9,
    max_size=2,
    remove_red=True,
    estimator=model,
    cv=5,
    verbose=1,
)
selector.fit(X_train, y_train)
print()
print(selector.summary())
print("Selected:", list(selector.get_feature_names_out(feature_names)))

# ---------------------------------------------------------------------------
# 3. Evaluate on held-out test set
# ---------------------------------------------------------------------------
if selector.selected_features_:
    clf = make_pipeline(StandardScaler(), LogisticRegression(max_iter=1000))
    clf.fit(selector.transform(X_train), y_train)
    acc = accuracy_score(y_test, clf.predict(selector.transform(X_test)))
    print(f"\nTest accuracy (LR on selected features): {acc:.4f}")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
plot_subset_scores(
    selector.subset_scores_,
    threshold=selector.threshold,
    top_n=20,
    title="Breast Cancer – top 20 scored feature subsets",
    save_path="example1_scores.png",
)
print("Plot saved: example1_scores.png")
