"""PCA 2D projection of accord vectors."""

from __future__ import annotations

import numpy as np
from sklearn.decomposition import PCA


def project_pca(vectors: np.ndarray, *, n_components: int = 2) -> np.ndarray:
    """Project rows onto their top principal directions.

    Degenerate inputs (fewer than two rows, a single column, or no variance at
    all) do not raise: missing directions come back as zero columns.

    Args:
        vectors: Input array of shape (n_samples, n_features).
        n_components: Output dimensions (default 2 for scatter).

    Returns:
        numpy array of shape (n_samples, n_components), same row order.
    """
    n_samples = vectors.shape[0]
    n_features = vectors.shape[1] if vectors.ndim == 2 else 0
    out = np.zeros((n_samples, n_components))

    if n_samples < 2 or n_features < 1:
        return out

    centered = vectors - vectors.mean(axis=0)
    if not np.any(np.abs(centered) > 1e-12):
        return out

    n_comp = min(n_components, n_samples, n_features)
    pca = PCA(n_components=n_comp, svd_solver="full")
    result = pca.fit_transform(vectors)

    out[:, :n_comp] = result
    return np.nan_to_num(out, nan=0.0, posinf=0.0, neginf=0.0)
