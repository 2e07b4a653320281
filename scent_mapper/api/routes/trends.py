"""Accord trend endpoint: top accords per year."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Query, Request

from ...analytics.labels import filter_by_gender
from ...analytics.trends import accord_trends
from ...config import DEFAULT_YEAR_RANGE, TREND_TOP_N
from ...dataset import Dataset
from ..deps import get_dataset

router = APIRouter(tags=["trends"])


def _compute_trends(
    dataset: Dataset,
    *,
    start: int,
    end: int,
    top_n: int,
    gender: str,
) -> Dict[str, Any]:
    """Compute yearly buckets synchronously (runs in thread pool)."""
    records = filter_by_gender(dataset.records, gender)
    result = accord_trends(
        records, dataset.accord_columns, start_year=start, end_year=end, top_n=top_n,
    )
    return result.model_dump()


@router.get("/trends")
async def get_trends(
    request: Request,
    start: int = Query(DEFAULT_YEAR_RANGE[0]),
    end: int = Query(DEFAULT_YEAR_RANGE[1]),
    top_n: int = Query(TREND_TOP_N, ge=1, le=50),
    gender: str = Query("all"),
) -> Dict[str, Any]:
    """Yearly counts of the window's most common accords."""
    if start > end:
        raise HTTPException(status_code=400, detail=f"start ({start}) is after end ({end})")
    if end - start > 200:
        raise HTTPException(status_code=400, detail="Year window is limited to 200 years")

    dataset = get_dataset(request)

    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, partial(
            _compute_trends, dataset,
            start=start, end=end, top_n=top_n, gender=gender,
        )
    )
