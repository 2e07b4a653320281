"""Yearly counts of the most common accords within a fixed window."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..config import DEFAULT_YEAR_RANGE, TREND_TOP_N
from ..models.accord import TrendResult, YearBucket
from .labels import record_labels, record_year


def accord_trends(
    records: List[Dict[str, str]],
    accord_columns: List[str],
    *,
    start_year: int = DEFAULT_YEAR_RANGE[0],
    end_year: int = DEFAULT_YEAR_RANGE[1],
    top_n: int = TREND_TOP_N,
) -> TrendResult:
    """Bucket records by year and count the window's top labels per year.

    The top labels are ranked over the whole window (ties in first-seen
    order). Every year of the window gets a bucket, including years without
    records, so the series has no gaps.
    """
    if start_year > end_year:
        raise ValueError(f"start_year ({start_year}) is after end_year ({end_year})")

    in_window: List[Tuple[int, List[str]]] = []
    frequency: Dict[str, int] = {}
    for record in records:
        year = record_year(record)
        if year is None or not (start_year <= year <= end_year):
            continue
        labels = record_labels(record, accord_columns)
        in_window.append((year, labels))
        for label in labels:
            frequency[label] = frequency.get(label, 0) + 1

    ranked = sorted(frequency.items(), key=lambda kv: kv[1], reverse=True)
    top = [label for label, _ in ranked[:top_n]]
    top_set = set(top)

    totals: Dict[int, int] = {year: 0 for year in range(start_year, end_year + 1)}
    counts: Dict[int, Dict[str, int]] = {
        year: {label: 0 for label in top} for year in totals
    }
    for year, labels in in_window:
        totals[year] += 1
        for label in labels:
            if label in top_set:
                counts[year][label] += 1

    buckets = [
        YearBucket(
            year=year,
            total_records=totals[year],
            counts=counts[year],
            shares={
                label: (count / totals[year] * 100) if totals[year] else 0.0
                for label, count in counts[year].items()
            },
        )
        for year in range(start_year, end_year + 1)
    ]

    return TrendResult(start_year=start_year, end_year=end_year, top_labels=top, buckets=buckets)
