"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import DEFAULT_DATASET, has_openai
from ..dataset import load_dataset
from ..errors import FormatError


def load_into_state(app: FastAPI, path: Optional[Union[str, Path]] = None) -> None:
    """Load the dataset into app.state, recording the error on failure."""
    dataset_path = path or DEFAULT_DATASET
    try:
        app.state.dataset = load_dataset(dataset_path)
        app.state.load_error = None
        ds = app.state.dataset
        print(f"Loaded dataset: {len(ds.records)} perfumes, {len(ds.accord_columns)} accord columns")
    except (FileNotFoundError, FormatError, UnicodeDecodeError) as e:
        print(f"Warning: Could not load dataset {dataset_path}: {e}")
        app.state.dataset = None
        app.state.load_error = str(e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle events."""
    # Tests may pre-populate app.state.dataset
    if getattr(app.state, "dataset", None) is None:
        load_into_state(app, getattr(app.state, "dataset_path", None))

    yield

    print("Shutting down Scent Mapper API.")


def create_app(dataset_path: Optional[Union[str, Path]] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        dataset_path: Dataset to load at startup (default: configured path).
    """
    app = FastAPI(
        title="Scent Mapper API",
        description="Accord statistics, trends and cluster maps for perfume datasets.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dataset_path = dataset_path

    # CORS - allow the front-end dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from .routes import accords, clusters, labels, trends
    app.include_router(accords.router, prefix="/api")
    app.include_router(clusters.router, prefix="/api")
    app.include_router(trends.router, prefix="/api")
    app.include_router(labels.router, prefix="/api")

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Scent Mapper API",
            "version": __version__,
            "status": "running",
            "docs": "/docs",
            "health": "/api/health",
            "endpoints": {
                "accords": "/api/accords",
                "clusters": "/api/clusters",
                "trends": "/api/trends",
                "normalize": "/api/labels/normalize",
            },
        }

    @app.get("/api/health")
    async def health():
        dataset = getattr(app.state, "dataset", None)
        return {
            "status": "ok",
            "dataset_loaded": dataset is not None,
            "n_records": len(dataset.records) if dataset is not None else 0,
            "accord_columns": dataset.accord_columns if dataset is not None else [],
            "load_error": getattr(app.state, "load_error", None),
            "normalization_available": has_openai(),
        }

    return app


# For uvicorn direct run
app = create_app()
