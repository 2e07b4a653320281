"""Pydantic data models for Scent Mapper."""

from .accord import AccordStat, AccordStatsResult, TrendResult, YearBucket
from .cluster import Centroid, ClusterMapResult, ClusterSummary, PlotPoint
from .filters import RecordFilter
from .notice import Notice

__all__ = [
    "AccordStat",
    "AccordStatsResult",
    "TrendResult",
    "YearBucket",
    "Centroid",
    "ClusterMapResult",
    "ClusterSummary",
    "PlotPoint",
    "RecordFilter",
    "Notice",
]
