"""Label normalization endpoint."""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...errors import NormalizationFailure
from ...llm_io import normalize_accord_labels, structural_normalize

router = APIRouter(tags=["labels"])


class NormalizeRequest(BaseModel):
    labels: List[str]
    should_normalize: bool = True


@router.post("/labels/normalize")
async def normalize_labels(body: NormalizeRequest) -> Dict[str, Any]:
    """Normalize distinct labels; 502 when the service fails."""
    # Distinct, first-seen order
    labels = list(dict.fromkeys(body.labels))

    loop = asyncio.get_event_loop()
    try:
        normalized = await loop.run_in_executor(
            None, partial(normalize_accord_labels, labels, body.should_normalize)
        )
    except NormalizationFailure as e:
        raise HTTPException(status_code=502, detail=str(e))

    if body.should_normalize:
        normalized = [structural_normalize(label) for label in normalized]

    return {
        "labels": labels,
        "normalized_labels": normalized,
        "mapping": dict(zip(labels, normalized)),
    }
