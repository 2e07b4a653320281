"""Accord frequency, share and average-rating statistics."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..config import BAR_CHART_TOP_N, DEFAULT_LLM_MODEL, RATING_FIELD
from ..errors import NormalizationFailure
from ..llm_io import normalize_accord_labels, structural_normalize
from ..models.accord import AccordStat, AccordStatsResult
from ..models.notice import Notice
from .labels import has_accord_values, mean_or_zero, record_labels, valid_rating

STAT_SORT_KEYS = ("label", "count", "share", "average_rating")


def analyze_accords(
    records: List[Dict[str, str]],
    accord_columns: List[str],
    *,
    rating_field: Optional[str] = RATING_FIELD,
) -> AccordStatsResult:
    """Count records per normalized accord label.

    A record contributes each of its labels once, however many columns carry
    it. Ratings that are missing, unparsable or <= 0 are left out of the
    average but the record still counts. Shares use the number of records with
    at least one accord value as denominator.

    Args:
        records: Record population (already filtered by the caller).
        accord_columns: Columns holding accord labels.
        rating_field: Column with the numeric rating, or None to skip ratings.

    Returns:
        AccordStatsResult sorted by count descending, ties in first-seen order.
        An empty population or one without labels yields no stats and an
        ``empty_result`` notice instead of an error.
    """
    counts: Dict[str, int] = {}
    ratings: Dict[str, List[float]] = {}

    for record in records:
        labels = record_labels(record, accord_columns)
        rating = valid_rating(record, rating_field) if rating_field else None
        for label in labels:
            if label not in counts:
                counts[label] = 0
                ratings[label] = []
            counts[label] += 1
            if rating is not None:
                ratings[label].append(rating)

    qualifying = sum(1 for r in records if has_accord_values(r, accord_columns))

    if not counts:
        notices = []
        if records:
            notices.append(Notice(
                kind="empty_result",
                title="No Accords Found",
                message="No data was found in the accord columns for the current filter.",
            ))
        return AccordStatsResult(
            stats=[],
            total_records=len(records),
            qualifying_records=qualifying,
            notices=notices,
        )

    stats = [
        AccordStat(
            label=label,
            count=count,
            share=min(100.0, count / qualifying * 100) if qualifying else 0.0,
            average_rating=mean_or_zero(ratings[label]),
        )
        for label, count in counts.items()
    ]
    # sorted() is stable, so ties keep first-seen order
    stats = sorted(stats, key=lambda s: s.count, reverse=True)

    return AccordStatsResult(
        stats=stats,
        total_records=len(records),
        qualifying_records=qualifying,
    )


def top_accords(stats: List[AccordStat], n: int = BAR_CHART_TOP_N) -> List[AccordStat]:
    """Most frequent labels for the bar chart."""
    return sorted(stats, key=lambda s: s.count, reverse=True)[:n]


def filter_stats(stats: List[AccordStat], query: str) -> List[AccordStat]:
    """Keep stats whose label contains the query (case-insensitive)."""
    if not query:
        return list(stats)
    q = query.lower()
    return [s for s in stats if q in s.label.lower()]


def sort_stats(stats: List[AccordStat], key: str = "count", *, descending: bool = True) -> List[AccordStat]:
    """Stable sort of stats by one of STAT_SORT_KEYS."""
    if key not in STAT_SORT_KEYS:
        raise ValueError(f"Unknown sort key: {key}. Available: {list(STAT_SORT_KEYS)}")
    return sorted(stats, key=lambda s: getattr(s, key), reverse=descending)


def relabel_stats(stats: List[AccordStat], mapping: Dict[str, str]) -> List[AccordStat]:
    """Replace labels with their normalized form, keeping every number as is."""
    return [s.model_copy(update={"label": mapping.get(s.label, s.label)}) for s in stats]


def normalize_stats(
    result: AccordStatsResult,
    should_normalize: bool,
    *,
    model: str = DEFAULT_LLM_MODEL,
) -> AccordStatsResult:
    """Relabel stats through the normalization service.

    The structural transform is applied once more to whatever the service
    returns. On failure the unnormalized result is returned with a
    ``normalization_failure`` notice attached.
    """
    if not should_normalize or not result.stats:
        return result

    labels = [s.label for s in result.stats]
    try:
        normalized = normalize_accord_labels(labels, should_normalize, model=model)
    except NormalizationFailure as e:
        notice = Notice(
            kind="normalization_failure",
            title="Normalization failed",
            message=f"Showing original labels. {e}",
        )
        return result.model_copy(update={"notices": [*result.notices, notice]})

    mapping = {old: structural_normalize(new) for old, new in zip(labels, normalized)}
    return result.model_copy(update={"stats": relabel_stats(result.stats, mapping)})
