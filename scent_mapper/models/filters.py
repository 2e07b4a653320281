"""Record filter parameters passed explicitly to every computation."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from ..config import DEFAULT_YEAR_RANGE


class RecordFilter(BaseModel):
    """Year window, rating floor, gender and search text for the cluster map."""

    year_min: int = DEFAULT_YEAR_RANGE[0]
    year_max: int = DEFAULT_YEAR_RANGE[1]
    min_rating: float = Field(default=0.0, ge=0.0)
    gender: str = "all"
    search: str = ""

    @model_validator(mode="after")
    def _check_window(self) -> "RecordFilter":
        if self.year_min > self.year_max:
            raise ValueError(f"year_min ({self.year_min}) is after year_max ({self.year_max})")
        return self
