"""k-means partitioning of accord vectors."""

from __future__ import annotations

import warnings
from typing import Optional, Tuple

import numpy as np
from sklearn.cluster import KMeans
from sklearn.exceptions import ConvergenceWarning

from ..config import KMEANS_MAX_ITER, KMEANS_N_INIT, RANDOM_SEED
from ..errors import ClusterCountAdjusted
from ..models.notice import Notice


def resolve_k(requested: int, n_points: int) -> Tuple[int, Optional[Notice]]:
    """Clamp k to the number of points.

    Returns:
        Tuple of (usable k, notice or None). The notice is set whenever k had
        to be reduced.
    """
    if requested < 1:
        raise ValueError(f"k must be a positive integer, got {requested}")
    if requested <= n_points:
        return requested, None
    notice = Notice(
        kind="cluster_count_adjusted",
        title="Not enough data for clustering",
        message=f"Reduced k to {n_points} due to insufficient data points.",
    )
    return n_points, notice


def cluster_kmeans(
    vectors: np.ndarray,
    k: int,
    *,
    random_state: int = RANDOM_SEED,
    n_init: int = KMEANS_N_INIT,
    max_iter: int = KMEANS_MAX_ITER,
) -> np.ndarray:
    """Partition rows into k groups with Lloyd's algorithm.

    Each row goes to its nearest centroid under squared Euclidean distance,
    lowest cluster index winning ties. Clusters may come back empty when there
    are fewer distinct rows than k.

    Args:
        vectors: Input array (n_samples, n_features).
        k: Number of clusters, 1 <= k <= n_samples.
        random_state: Seed for centroid initialisation.
        n_init: Number of initialisations; the lowest-inertia run wins.
        max_iter: Iteration cap per run.

    Returns:
        Cluster id per row (n_samples,), values in [0, k).

    Raises:
        ValueError: k < 1.
        ClusterCountAdjusted: k exceeds the number of rows.
    """
    if k < 1:
        raise ValueError(f"k must be a positive integer, got {k}")
    n = vectors.shape[0]
    if k > n:
        raise ClusterCountAdjusted(requested=k, available=n)
    if k == 1:
        return np.zeros(n, dtype=int)

    km = KMeans(
        n_clusters=k,
        algorithm="lloyd",
        init="k-means++",
        n_init=n_init,
        max_iter=max_iter,
        random_state=random_state,
    )
    with warnings.catch_warnings():
        # Duplicate multi-hot rows routinely leave fewer distinct clusters than k
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        labels = km.fit_predict(vectors)
    return np.asarray(labels, dtype=int)
