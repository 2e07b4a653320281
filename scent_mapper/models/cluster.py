"""Cluster map data models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .notice import Notice


class Centroid(BaseModel):
    x: float = 0.0
    y: float = 0.0


class PlotPoint(BaseModel):
    """One vectorized record placed on the 2D map with its cluster id."""

    record_index: int
    x: float
    y: float
    cluster_id: int
    title: str = ""
    brand: str = ""
    year: Optional[int] = None
    rating: float = 0.0
    labels: List[str] = Field(default_factory=list)
    highlighted: bool = False  # matched the search text


class ClusterSummary(BaseModel):
    """Size, rating and dominant accords of a single cluster."""

    cluster_id: int
    size: int = Field(ge=1)
    average_rating: float = 0.0
    top_labels: List[str] = Field(default_factory=list)
    centroid: Centroid = Field(default_factory=Centroid)  # mean of projected points


class ClusterMapResult(BaseModel):
    """Full cluster map: projected points, assignments and summaries."""

    k_requested: int = 0
    k: int = 0
    n_points: int = 0
    sampled: bool = False
    vocabulary: List[str] = Field(default_factory=list)
    points: List[PlotPoint] = Field(default_factory=list)
    clusters: List[ClusterSummary] = Field(default_factory=list)
    silhouette: Optional[float] = None
    notices: List[Notice] = Field(default_factory=list)
