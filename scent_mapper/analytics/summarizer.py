"""Per-cluster summaries: size, rating, dominant accords and 2D centroid."""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from ..config import TOP_CLUSTER_LABELS
from ..models.cluster import Centroid, ClusterSummary
from .labels import mean_or_zero

SUMMARY_SORT_KEYS = ("cluster_id", "size", "average_rating")


def top_labels(label_sets: List[List[str]], top_n: int = TOP_CLUSTER_LABELS) -> List[str]:
    """Most frequent labels across label sets, ties in first-seen order."""
    freq: Dict[str, int] = {}
    for labels in label_sets:
        for label in labels:
            freq[label] = freq.get(label, 0) + 1
    ranked = sorted(freq.items(), key=lambda kv: kv[1], reverse=True)
    return [label for label, _ in ranked[:top_n]]


def summarize_clusters(
    assignments: np.ndarray,
    coords_2d: np.ndarray,
    label_sets: List[List[str]],
    ratings: List[Optional[float]],
    *,
    top_n: int = TOP_CLUSTER_LABELS,
) -> List[ClusterSummary]:
    """Build one ClusterSummary per non-empty cluster, by ascending id.

    Args:
        assignments: Cluster id per row.
        coords_2d: Projected coordinates (n_rows, 2).
        label_sets: Normalized labels per row.
        ratings: Positive rating per row, or None when unavailable.
        top_n: Number of dominant labels per cluster.
    """
    members: Dict[int, List[int]] = {}
    for i, cid in enumerate(assignments):
        members.setdefault(int(cid), []).append(i)

    summaries: List[ClusterSummary] = []
    for cid in sorted(members):
        rows = members[cid]
        cluster_ratings = [ratings[i] for i in rows if ratings[i] is not None]
        points = coords_2d[rows]
        summaries.append(ClusterSummary(
            cluster_id=cid,
            size=len(rows),
            average_rating=mean_or_zero(cluster_ratings),
            top_labels=top_labels([label_sets[i] for i in rows], top_n),
            centroid=Centroid(x=float(points[:, 0].mean()), y=float(points[:, 1].mean())),
        ))
    return summaries


def sort_summaries(
    summaries: List[ClusterSummary],
    key: str = "size",
    *,
    descending: bool = True,
) -> List[ClusterSummary]:
    """Stable sort of summaries by one of SUMMARY_SORT_KEYS."""
    if key not in SUMMARY_SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}. Available: {list(SUMMARY_SORT_KEYS)}")
    return sorted(summaries, key=lambda s: getattr(s, key), reverse=descending)
