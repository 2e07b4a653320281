"""Accord analytics: statistics, vectors, PCA projection, k-means and trends."""

from .cluster_map import build_cluster_map
from .clusterer import cluster_kmeans, resolve_k
from .projector import project_pca
from .stats import analyze_accords
from .summarizer import summarize_clusters
from .trends import accord_trends
from .vectorizer import vectorize_records

__all__ = [
    "build_cluster_map",
    "cluster_kmeans",
    "resolve_k",
    "project_pca",
    "analyze_accords",
    "summarize_clusters",
    "accord_trends",
    "vectorize_records",
]
