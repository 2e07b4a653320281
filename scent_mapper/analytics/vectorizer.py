"""Multi-hot vectors over the accord vocabulary of a record population."""

from __future__ import annotations

from typing import Dict, List

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..config import MAX_CLUSTER_POINTS
from .labels import record_labels


class VectorizedSet(BaseModel):
    """Records that carry at least one accord, with their binary vectors.

    ``record_indices[i]`` is the position of row ``i`` in the population that
    was passed to :func:`vectorize_records`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    record_indices: List[int] = Field(default_factory=list)
    labels: List[List[str]] = Field(default_factory=list)
    vocabulary: List[str] = Field(default_factory=list)
    matrix: np.ndarray = Field(default_factory=lambda: np.zeros((0, 0), dtype="float32"))
    sampled: bool = False

    @property
    def n_rows(self) -> int:
        return len(self.record_indices)


def cap_population(records: List[Dict[str, str]], cap: int = MAX_CLUSTER_POINTS) -> List[Dict[str, str]]:
    """Deterministic prefix of at most ``cap`` records."""
    return records[:cap]


def vectorize_records(
    records: List[Dict[str, str]],
    accord_columns: List[str],
    *,
    cap: int = MAX_CLUSTER_POINTS,
) -> VectorizedSet:
    """Build one binary vector per record that has accords.

    Records without any accord value are dropped. Vocabulary indices follow
    first-seen order, so the same input always yields the same matrix.

    Args:
        records: Filtered record population.
        accord_columns: Columns holding accord labels.
        cap: Maximum number of records considered; larger inputs are truncated
            to a prefix and flagged as ``sampled``.
    """
    sampled = len(records) > cap
    population = cap_population(records, cap)

    vocab_index: Dict[str, int] = {}
    kept_indices: List[int] = []
    kept_labels: List[List[str]] = []

    for i, record in enumerate(population):
        labels = record_labels(record, accord_columns)
        if not labels:
            continue
        for label in labels:
            if label not in vocab_index:
                vocab_index[label] = len(vocab_index)
        kept_indices.append(i)
        kept_labels.append(labels)

    matrix = np.zeros((len(kept_indices), len(vocab_index)), dtype="float32")
    for row, labels in enumerate(kept_labels):
        for label in labels:
            matrix[row, vocab_index[label]] = 1.0

    return VectorizedSet(
        record_indices=kept_indices,
        labels=kept_labels,
        vocabulary=list(vocab_index),
        matrix=matrix,
        sampled=sampled,
    )
