"""
incremental_feature_select.plot
===============================
Visualization helpers for the incremental feature selector.
"""

from __future__ import annotations

from typing import Mapping, Optional

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches


__all__ = ["plot_subset_scores"]


def plot_subset_scores(
    subset_scores: Mapping[tuple, float],
    *,
    threshold: float | None = None,
    top_n: int = 20,
    highlight: tuple | None = None,
    title: str = "Scores of evaluated feature subsets",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Bar chart of the ``top_n`` best-scoring subsets.

    Subsets scoring strictly above ``threshold`` are drawn in the accent
    colour; the threshold itself is a dashed horizontal line.

    Parameters
    ----------
    subset_scores : mapping of (feature_tuple -> score)
        Typically ``IncrementalFeatureSelector.subset_scores_``.
    threshold : float, optional
        Relevance threshold to draw.
    top_n : int
        Number of subsets to display.
    highlight : tuple, optional
        Outline the bar of this subset (e.g. the selected features).
    title : str
        Plot title.
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    ranked = sorted(subset_scores.items(), key=lambda t: t[1], reverse=True)
    top    = ranked[:top_n]
    labels = [str(feat) for feat, _ in top]
    scores = [score for _, score in top]
    colors = ["#55A868" if (threshold is not None and score > threshold)
              else "#4C72B0"
              for score in scores]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(8, len(top) * 0.55), 4))
    else:
        fig = ax.get_figure()

    bars = ax.bar(range(len(top)), scores, color=colors, edgecolor="white", linewidth=0.5)
    ax.set_xticks(range(len(top)))
    ax.set_xticklabels(labels, rotation=60, ha="right", fontsize=8)
    ax.set_ylabel("Score", fontsize=12)
    ax.set_title(title, fontsize=13)

    for bar, score in zip(bars, scores):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            bar.get_height(),
            f"{score:.3f}",
            ha="center", va="bottom", fontsize=7,
        )

    handles = []
    if threshold is not None:
        ax.axhline(threshold, color="#C44E52", linestyle="--", linewidth=1.2)
        handles.append(mpatches.Patch(color="#C44E52", label=f"Threshold = {threshold}"))
        handles.append(mpatches.Patch(color="#55A868", label="Relevant"))

    if highlight is not None:
        for bar, (feat, _) in zip(bars, top):
            if feat == tuple(highlight):
                bar.set_edgecolor("black")
                bar.set_linewidth(2.0)
        handles.append(mpatches.Patch(facecolor="white", edgecolor="black",
                                      label=f"Selected: {tuple(highlight)}"))

    if handles:
        ax.legend(handles=handles, fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
