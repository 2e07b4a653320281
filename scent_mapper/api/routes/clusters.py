"""Cluster map endpoint: k-means assignments over a PCA projection."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import ValidationError

from ...analytics.cluster_map import build_cluster_map, highlight_cluster
from ...analytics.summarizer import SUMMARY_SORT_KEYS, sort_summaries
from ...config import DEFAULT_K, DEFAULT_YEAR_RANGE
from ...dataset import Dataset
from ...models.filters import RecordFilter
from ..deps import get_dataset

router = APIRouter(tags=["clusters"])


def _compute_clusters(
    dataset: Dataset,
    record_filter: RecordFilter,
    *,
    k: int,
    sort: str,
    descending: bool,
    cluster_id: Optional[int],
) -> Dict[str, Any]:
    """Compute the cluster map synchronously (runs in thread pool)."""
    result = build_cluster_map(
        dataset.records, dataset.accord_columns, k=k, record_filter=record_filter,
    )
    result = result.model_copy(update={
        "clusters": sort_summaries(result.clusters, sort, descending=descending),
    })
    if cluster_id is not None:
        result = result.model_copy(update={
            "points": highlight_cluster(result, cluster_id),
        })
    return result.model_dump()


@router.get("/clusters")
async def get_clusters(
    request: Request,
    k: int = Query(DEFAULT_K, ge=1, le=100),
    year_min: int = Query(DEFAULT_YEAR_RANGE[0]),
    year_max: int = Query(DEFAULT_YEAR_RANGE[1]),
    min_rating: float = Query(0.0, ge=0.0, le=5.0),
    gender: str = Query("all"),
    search: str = Query(""),
    sort: str = Query("size"),
    descending: bool = Query(True),
    cluster_id: Optional[int] = Query(None, ge=0),
) -> Dict[str, Any]:
    """Cluster map for the given filter parameters."""
    if sort not in SUMMARY_SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"Unknown sort key: {sort}. Available: {list(SUMMARY_SORT_KEYS)}")
    try:
        record_filter = RecordFilter(
            year_min=year_min, year_max=year_max, min_rating=min_rating,
            gender=gender, search=search,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    dataset = get_dataset(request)

    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, partial(
            _compute_clusters, dataset, record_filter,
            k=k, sort=sort, descending=descending, cluster_id=cluster_id,
        )
    )
