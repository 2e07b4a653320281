"""Scent Mapper - accord statistics, trends and cluster maps for perfume datasets."""

# Set thread limits BEFORE numpy/scikit-learn are imported so KMeans and PCA
# stay deterministic and do not oversubscribe cores inside the API executor.
import os as _os
_os.environ.setdefault("KMP_DUPLICATE_LIB_OK", "TRUE")
_os.environ.setdefault("OMP_NUM_THREADS", "1")
_os.environ.setdefault("MKL_NUM_THREADS", "1")
_os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
del _os

__version__ = "1.0.0"

__all__ = []
