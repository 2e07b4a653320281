"""Accord statistics and trend data models."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from .notice import Notice


class AccordStat(BaseModel):
    """Frequency, share and mean rating of one normalized accord label."""

    label: str
    count: int = Field(default=0, ge=0)
    share: float = Field(default=0.0, ge=0.0, le=100.0)
    average_rating: float = Field(default=0.0, ge=0.0)


class AccordStatsResult(BaseModel):
    """Output of the statistics engine for one record population."""

    stats: List[AccordStat] = Field(default_factory=list)
    total_records: int = 0
    qualifying_records: int = 0  # records with at least one accord value
    notices: List[Notice] = Field(default_factory=list)


class YearBucket(BaseModel):
    """Per-year record total and top-label counts."""

    year: int
    total_records: int = 0
    counts: Dict[str, int] = Field(default_factory=dict)
    shares: Dict[str, float] = Field(default_factory=dict)  # count / total_records * 100


class TrendResult(BaseModel):
    """Dense, gap-free yearly series for the top labels of a window."""

    start_year: int
    end_year: int
    top_labels: List[str] = Field(default_factory=list)
    buckets: List[YearBucket] = Field(default_factory=list)
