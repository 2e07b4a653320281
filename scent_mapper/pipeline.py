"""
Scent Mapper - Main Entry Point

Command-line access to the accord analytics and the API server.

Example usage:
    # Accord frequency table (top 15)
    python -m scent_mapper.pipeline stats --data data/perfume-data.csv --top 15

    # Cluster map summary with k=8 for 2015-2024, women's perfumes only
    python -m scent_mapper.pipeline clusters -k 8 --years 2015 2024 --gender women

    # Top-5 accord trends per year
    python -m scent_mapper.pipeline trends --years 2019 2024

    # Start the FastAPI backend
    python -m scent_mapper.pipeline serve --port 8000
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .analytics.cluster_map import build_cluster_map
from .analytics.labels import filter_by_gender
from .analytics.stats import analyze_accords, filter_stats, normalize_stats, sort_stats
from .analytics.summarizer import sort_summaries
from .analytics.trends import accord_trends
from .config import BAR_CHART_TOP_N, DEFAULT_K, DEFAULT_YEAR_RANGE, TREND_TOP_N
from .dataset import Dataset, load_dataset
from .models.filters import RecordFilter
from .models.notice import Notice


def _load(path: Optional[str]) -> Dataset:
    dataset = load_dataset(path)
    print(f"Loaded {len(dataset.records)} perfumes ({len(dataset.accord_columns)} accord columns)")
    return dataset


def _print_notices(notices: List[Notice]) -> None:
    for n in notices:
        print(f"  [{n.kind}] {n.title}: {n.message}")


def _emit(df: pd.DataFrame, csv_path: Optional[str]) -> None:
    if df.empty:
        print("  (no rows)")
    else:
        print(df.to_string(index=False))
    if csv_path:
        df.to_csv(csv_path, index=False)
        print(f"\nSaved {len(df)} rows to {csv_path}")


def stats_frame(dataset: Dataset, *, gender: str = "all", query: str = "", sort: str = "count",
                top: Optional[int] = BAR_CHART_TOP_N, normalize: bool = False) -> pd.DataFrame:
    """Accord statistics as a DataFrame."""
    records = filter_by_gender(dataset.records, gender)
    result = normalize_stats(analyze_accords(records, dataset.accord_columns), normalize)
    _print_notices(result.notices)

    stats = sort_stats(filter_stats(result.stats, query), sort)
    if top:
        stats = stats[:top]
    return pd.DataFrame(
        [s.model_dump() for s in stats],
        columns=["label", "count", "share", "average_rating"],
    )


def clusters_frame(dataset: Dataset, *, k: int = DEFAULT_K,
                   record_filter: Optional[RecordFilter] = None) -> pd.DataFrame:
    """Cluster summaries as a DataFrame (largest first)."""
    result = build_cluster_map(dataset.records, dataset.accord_columns, k=k, record_filter=record_filter)
    print(f"Clustered {result.n_points} perfumes into k={result.k} (requested {result.k_requested})")
    if result.silhouette is not None:
        print(f"Silhouette score: {result.silhouette:.3f}")
    _print_notices(result.notices)

    rows = [
        {
            "cluster_id": s.cluster_id,
            "size": s.size,
            "average_rating": round(s.average_rating, 2),
            "top_labels": ", ".join(s.top_labels),
            "centroid_x": s.centroid.x,
            "centroid_y": s.centroid.y,
        }
        for s in sort_summaries(result.clusters, "size")
    ]
    return pd.DataFrame(
        rows,
        columns=["cluster_id", "size", "average_rating", "top_labels", "centroid_x", "centroid_y"],
    )


def trends_frame(dataset: Dataset, *, start: int = DEFAULT_YEAR_RANGE[0], end: int = DEFAULT_YEAR_RANGE[1],
                 top_n: int = TREND_TOP_N, gender: str = "all") -> pd.DataFrame:
    """One row per year: total perfumes plus a count column per top accord."""
    records = filter_by_gender(dataset.records, gender)
    result = accord_trends(records, dataset.accord_columns, start_year=start, end_year=end, top_n=top_n)
    rows = [
        {"year": b.year, "total": b.total_records, **b.counts}
        for b in result.buckets
    ]
    return pd.DataFrame(rows, columns=["year", "total", *result.top_labels])


def serve(port: int = 8000, reload: bool = False, data: Optional[str] = None) -> None:
    """Start the FastAPI backend server.

    Args:
        port: Port to run on
        reload: Enable auto-reload for development (uses the configured dataset)
        data: Dataset to serve
    """
    import uvicorn

    print(f"Starting Scent Mapper API on http://localhost:{port}")
    if reload:
        uvicorn.run("scent_mapper.api.main:app", host="0.0.0.0", port=port, reload=True)
        return

    from .api.main import create_app
    uvicorn.run(create_app(Path(data) if data else None), host="0.0.0.0", port=port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scent-mapper",
        description="Scent Mapper - accord statistics, trends and cluster maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scent-mapper stats --top 20
  scent-mapper clusters -k 8 --years 2015 2024 --min-rating 3.5
  scent-mapper trends --csv trends.csv
  scent-mapper serve --port 8000
        """,
    )
    parser.add_argument(
        "--data", "-d", type=str, default=None,
        help="Semicolon-delimited dataset (default: data/perfume-data.csv)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    stats_parser = subparsers.add_parser("stats", help="Accord frequency table")
    stats_parser.add_argument("--gender", "-g", type=str, default="all", help="Gender filter (default: all)")
    stats_parser.add_argument("--query", "-q", type=str, default="", help="Only labels containing this text")
    stats_parser.add_argument("--sort", type=str, default="count",
                              choices=["label", "count", "share", "average_rating"])
    stats_parser.add_argument("--top", type=int, default=BAR_CHART_TOP_N,
                              help=f"Number of rows, 0 for all (default: {BAR_CHART_TOP_N})")
    stats_parser.add_argument("--normalize", action="store_true",
                              help="Normalize labels through the LLM (requires OPENAI_API_KEY)")
    stats_parser.add_argument("--csv", type=str, default=None, help="Also write the table to CSV")

    clusters_parser = subparsers.add_parser("clusters", help="k-means cluster summaries")
    clusters_parser.add_argument("-k", type=int, default=DEFAULT_K, help=f"Number of clusters (default: {DEFAULT_K})")
    clusters_parser.add_argument("--years", type=int, nargs=2, default=list(DEFAULT_YEAR_RANGE),
                                 metavar=("MIN", "MAX"), help="Inclusive year range")
    clusters_parser.add_argument("--min-rating", type=float, default=0.0, help="Minimum rating (default: 0)")
    clusters_parser.add_argument("--gender", "-g", type=str, default="all", help="Gender filter (default: all)")
    clusters_parser.add_argument("--csv", type=str, default=None, help="Also write the table to CSV")

    trends_parser = subparsers.add_parser("trends", help="Top accords per year")
    trends_parser.add_argument("--years", type=int, nargs=2, default=list(DEFAULT_YEAR_RANGE),
                               metavar=("START", "END"), help="Inclusive year window")
    trends_parser.add_argument("--top", type=int, default=TREND_TOP_N, help=f"Number of accords (default: {TREND_TOP_N})")
    trends_parser.add_argument("--gender", "-g", type=str, default="all", help="Gender filter (default: all)")
    trends_parser.add_argument("--csv", type=str, default=None, help="Also write the table to CSV")

    serve_parser = subparsers.add_parser("serve", help="Start FastAPI backend")
    serve_parser.add_argument("--port", "-p", type=int, default=8000, help="Port (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "serve":
            serve(port=args.port, reload=args.reload, data=args.data)
            return

        dataset = _load(args.data)
        if args.command == "stats":
            df = stats_frame(
                dataset, gender=args.gender, query=args.query, sort=args.sort,
                top=args.top or None, normalize=args.normalize,
            )
        elif args.command == "clusters":
            record_filter = RecordFilter(
                year_min=args.years[0], year_max=args.years[1],
                min_rating=args.min_rating, gender=args.gender,
            )
            df = clusters_frame(dataset, k=args.k, record_filter=record_filter)
        else:
            df = trends_frame(
                dataset, start=args.years[0], end=args.years[1], top_n=args.top, gender=args.gender,
            )
        print()
        _emit(df, args.csv)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
