"""Exception types raised by the dataset loader and analytics core."""

from __future__ import annotations


class ScentMapperError(Exception):
    """Base class for all Scent Mapper errors."""


class FormatError(ScentMapperError, ValueError):
    """The input file is malformed or uses an unsupported layout."""


class ClusterCountAdjusted(ScentMapperError):
    """More clusters were requested than there are points to cluster."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested k={requested} but only {available} data points are available"
        )


class NormalizationFailure(ScentMapperError, RuntimeError):
    """The label normalization service was unreachable or answered garbage."""
