"""Accord label and field helpers shared by all analytics components."""

from __future__ import annotations

import math
import re
from typing import Dict, Iterable, List, Optional

from ..config import BRAND_FIELD, GENDER_FIELD, RATING_FIELD, TITLE_FIELD, YEAR_FIELD

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_DECIMAL = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def normalize_accord(value: str) -> str:
    """Lowercase and trim an accord string."""
    return value.lower().strip()


def record_labels(record: Dict[str, str], columns: Iterable[str]) -> List[str]:
    """Deduplicated normalized labels of a record, in column order.

    Empty and missing cells are ignored.
    """
    labels: Dict[str, None] = {}
    for col in columns:
        value = record.get(col)
        if not value:
            continue
        label = normalize_accord(value)
        if label:
            labels.setdefault(label, None)
    return list(labels)


def has_accord_values(record: Dict[str, str], columns: Iterable[str]) -> bool:
    return any(record.get(col) for col in columns)


def parse_rating(value: Optional[str]) -> Optional[float]:
    """Leading number of a rating cell, first comma read as the decimal point.

    "4,5", "4.5" and "4,5/5" all give 4.5. None if no number leads the cell.
    """
    if not value:
        return None
    match = _LEADING_DECIMAL.match(value.replace(",", ".", 1))
    if not match:
        return None
    rating = float(match.group(1))
    if not math.isfinite(rating):
        return None
    return rating


def valid_rating(record: Dict[str, str], field: str = RATING_FIELD) -> Optional[float]:
    """Positive rating of a record, or None when missing, unparsable or <= 0."""
    rating = parse_rating(record.get(field))
    if rating is None or rating <= 0:
        return None
    return rating


def parse_year(value: Optional[str]) -> Optional[int]:
    """Leading integer of a year cell ("2021", " 2021 ", "2021.0"), else None."""
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


def mean_or_zero(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def gender_matches(record: Dict[str, str], gender: str = "all") -> bool:
    """Case-insensitive gender match; "all" (or empty) matches everything."""
    if not gender or gender.lower() == "all":
        return True
    value = record.get(GENDER_FIELD)
    return bool(value) and value.lower() == gender.lower()


def filter_by_gender(records: List[Dict[str, str]], gender: str = "all") -> List[Dict[str, str]]:
    return [r for r in records if gender_matches(r, gender)]


def matches_search(record: Dict[str, str], query: str) -> bool:
    """Case-insensitive substring match on perfume name or brand."""
    if not query:
        return False
    q = query.lower()
    return q in record.get(TITLE_FIELD, "").lower() or q in record.get(BRAND_FIELD, "").lower()


def record_year(record: Dict[str, str]) -> Optional[int]:
    return parse_year(record.get(YEAR_FIELD))
