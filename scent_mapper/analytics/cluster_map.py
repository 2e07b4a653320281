"""Cluster map pipeline: filter -> vectorize -> (k-means, PCA) -> join by row."""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np
from sklearn.metrics import silhouette_score

from ..config import (
    BRAND_FIELD,
    DEFAULT_K,
    MAX_CLUSTER_POINTS,
    RANDOM_SEED,
    RATING_FIELD,
    SILHOUETTE_SAMPLE_SIZE,
    TITLE_FIELD,
)
from ..models.cluster import ClusterMapResult, PlotPoint
from ..models.filters import RecordFilter
from ..models.notice import Notice
from .clusterer import cluster_kmeans, resolve_k
from .labels import gender_matches, matches_search, parse_rating, record_year, valid_rating
from .projector import project_pca
from .summarizer import summarize_clusters
from .vectorizer import vectorize_records


def passes_filter(record: Dict[str, str], record_filter: RecordFilter) -> bool:
    """Year window, rating floor and a name or brand being present."""
    year = record_year(record)
    if year is None or not (record_filter.year_min <= year <= record_filter.year_max):
        return False
    raw_rating = record.get(RATING_FIELD)
    # Empty cells rate 0; a non-empty cell without a number never passes
    rating = parse_rating(raw_rating) if raw_rating else 0.0
    if rating is None or rating < record_filter.min_rating:
        return False
    return bool(record.get(TITLE_FIELD) or record.get(BRAND_FIELD))


def sampled_silhouette(
    vectors: np.ndarray,
    assignments: np.ndarray,
    *,
    sample_size: int = SILHOUETTE_SAMPLE_SIZE,
    random_state: int = RANDOM_SEED,
) -> Optional[float]:
    """Silhouette score on a seeded row sample, or None when undefined.

    Requires 2 <= distinct clusters < rows within the scored sample.
    """
    n = len(assignments)
    if n > sample_size:
        idx = np.random.RandomState(random_state).choice(n, sample_size, replace=False)
        vectors, assignments = vectors[idx], assignments[idx]
    n_distinct = len(np.unique(assignments))
    if not 2 <= n_distinct < len(assignments):
        return None
    return float(silhouette_score(vectors, assignments))


def build_cluster_map(
    records: List[Dict[str, str]],
    accord_columns: List[str],
    *,
    k: int = DEFAULT_K,
    record_filter: Optional[RecordFilter] = None,
    cap: int = MAX_CLUSTER_POINTS,
) -> ClusterMapResult:
    """Compute the full cluster map for one set of filter parameters.

    Every call recomputes from scratch. ``PlotPoint.record_index`` refers to
    the position of the record in ``records``.

    Args:
        records: Full record population.
        accord_columns: Columns holding accord labels.
        k: Requested number of clusters; clamped to the number of points.
        record_filter: Year/rating/gender/search parameters (defaults apply).
        cap: Maximum number of filtered records that are vectorized.
    """
    rf = record_filter or RecordFilter()

    candidate_idx = [
        i for i, r in enumerate(records)
        if gender_matches(r, rf.gender) and passes_filter(r, rf)
    ]
    candidates = [records[i] for i in candidate_idx]

    vs = vectorize_records(candidates, accord_columns, cap=cap)
    notices: List[Notice] = []
    if vs.sampled:
        notices.append(Notice(
            kind="sampled",
            title="Dataset Sampled",
            message=f"Displaying the first {cap:,} perfumes for performance. Summaries use the full dataset.",
        ))

    n = vs.n_rows
    if n == 0:
        notices.append(Notice(
            kind="empty_result",
            title="No Accords Found",
            message="No perfumes with accord data match the current filter.",
        ))
        return ClusterMapResult(k_requested=k, k=0, sampled=vs.sampled, notices=notices)

    k_used, adjusted = resolve_k(k, n)
    if adjusted is not None:
        notices.append(adjusted)

    assignments = cluster_kmeans(vs.matrix, k_used)
    coords = project_pca(vs.matrix)

    source_rows = [candidates[i] for i in vs.record_indices]
    ratings = [valid_rating(r) for r in source_rows]

    points = [
        PlotPoint(
            record_index=candidate_idx[vs.record_indices[row]],
            x=float(coords[row, 0]),
            y=float(coords[row, 1]),
            cluster_id=int(assignments[row]),
            title=record.get(TITLE_FIELD, ""),
            brand=record.get(BRAND_FIELD, ""),
            year=record_year(record),
            rating=ratings[row] or 0.0,
            labels=vs.labels[row],
            highlighted=matches_search(record, rf.search),
        )
        for row, record in enumerate(source_rows)
    ]

    clusters = summarize_clusters(assignments, coords, vs.labels, ratings)

    silhouette = sampled_silhouette(vs.matrix, assignments)

    return ClusterMapResult(
        k_requested=k,
        k=k_used,
        n_points=n,
        sampled=vs.sampled,
        vocabulary=vs.vocabulary,
        points=points,
        clusters=clusters,
        silhouette=silhouette,
        notices=notices,
    )


def highlight_cluster(result: ClusterMapResult, cluster_id: Optional[int]) -> List[PlotPoint]:
    """Points of a single selected cluster, or all points when None."""
    if cluster_id is None:
        return list(result.points)
    return [p for p in result.points if p.cluster_id == cluster_id]
