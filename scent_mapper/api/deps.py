"""Shared request dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request

from ..dataset import Dataset


def get_dataset(request: Request) -> Dataset:
    """Loaded dataset, or HTTP 503 with the load error."""
    dataset: Optional[Dataset] = getattr(request.app.state, "dataset", None)
    if dataset is None:
        detail = getattr(request.app.state, "load_error", None) or "Dataset not loaded"
        raise HTTPException(status_code=503, detail=detail)
    return dataset
