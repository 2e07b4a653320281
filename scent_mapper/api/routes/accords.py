"""Accord statistics endpoints: frequency table and bar chart data."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request

from ...analytics.labels import filter_by_gender
from ...analytics.stats import (
    STAT_SORT_KEYS,
    analyze_accords,
    filter_stats,
    normalize_stats,
    sort_stats,
)
from ...dataset import Dataset
from ..deps import get_dataset

router = APIRouter(tags=["accords"])


def _compute_accords(
    dataset: Dataset,
    *,
    gender: str,
    query: str,
    sort: str,
    descending: bool,
    top_n: Optional[int],
    normalize: bool,
) -> Dict[str, Any]:
    """Compute statistics synchronously (runs in thread pool)."""
    records = filter_by_gender(dataset.records, gender)
    result = analyze_accords(records, dataset.accord_columns)
    result = normalize_stats(result, normalize)

    stats = sort_stats(filter_stats(result.stats, query), sort, descending=descending)
    if top_n is not None:
        stats = stats[:top_n]

    payload = result.model_dump()
    payload["stats"] = [s.model_dump() for s in stats]
    payload["gender"] = gender
    return payload


@router.get("/accords")
async def get_accords(
    request: Request,
    gender: str = Query("all"),
    query: str = Query(""),
    sort: str = Query("count"),
    descending: bool = Query(True),
    top_n: Optional[int] = Query(None, ge=1, le=1000),
    normalize: bool = Query(False),
) -> Dict[str, Any]:
    """Accord frequency, share and average rating for the selected gender."""
    if sort not in STAT_SORT_KEYS:
        raise HTTPException(status_code=400, detail=f"Unknown sort key: {sort}. Available: {list(STAT_SORT_KEYS)}")

    dataset = get_dataset(request)

    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, partial(
            _compute_accords, dataset,
            gender=gender, query=query, sort=sort, descending=descending,
            top_n=top_n, normalize=normalize,
        )
    )
