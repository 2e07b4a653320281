"""
Tests for label and field helpers in scent_mapper/analytics/labels.py.

Run: pytest tests/test_labels.py -v
"""

import pytest

from scent_mapper.analytics.labels import (
    filter_by_gender,
    gender_matches,
    matches_search,
    mean_or_zero,
    normalize_accord,
    parse_rating,
    parse_year,
    record_labels,
    valid_rating,
)

# ── Normalization ───────────────────────────────────────────────────────────


class TestRecordLabels:
    """Labels are lowercased, trimmed and deduplicated per record."""

    def test_normalize_accord(self):
        assert normalize_accord("  Woody ") == "woody"

    def test_dedup_across_columns(self):
        record = {"a1": "Floral", "a2": "floral ", "a3": "FLORAL"}
        assert record_labels(record, ["a1", "a2", "a3"]) == ["floral"]

    def test_column_order_kept(self):
        record = {"a1": "Woody", "a2": "Amber"}
        assert record_labels(record, ["a2", "a1"]) == ["amber", "woody"]

    def test_empty_and_missing_ignored(self):
        record = {"a1": "", "a2": "Citrus"}
        assert record_labels(record, ["a1", "a2", "a3"]) == ["citrus"]

    def test_no_labels(self):
        assert record_labels({"a1": ""}, ["a1"]) == []


# ── Ratings and years ───────────────────────────────────────────────────────


class TestParseRating:
    """Decimal comma or dot, leading number only; anything else is None."""

    @pytest.mark.parametrize("raw, expected", [("4,5", 4.5), ("3.0", 3.0), ("0", 0.0), ("-1", -1.0)])
    def test_parseable(self, raw, expected):
        assert parse_rating(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw, expected", [
        ("4,5/5", 4.5),
        ("4.2 stars", 4.2),
        (" 3,5", 3.5),
        ("1,2,3", 1.2),
        (".5", 0.5),
    ])
    def test_numeric_prefix(self, raw, expected):
        assert parse_rating(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["", None, "bad", "nan", "inf"])
    def test_unparseable(self, raw):
        assert parse_rating(raw) is None

    def test_overflow_is_none(self):
        assert parse_rating("1e999") is None

    def test_valid_rating_requires_positive(self):
        assert valid_rating({"Rating Value": "0"}) is None
        assert valid_rating({"Rating Value": "-2"}) is None
        assert valid_rating({"Rating Value": "4,2"}) == pytest.approx(4.2)
        assert valid_rating({}) is None


class TestParseYear:
    """Leading integer like JavaScript parseInt."""

    @pytest.mark.parametrize("raw, expected", [("2020", 2020), (" 2021 ", 2021), ("2019.0", 2019)])
    def test_parseable(self, raw, expected):
        assert parse_year(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "n/a", "year 2020"])
    def test_unparseable(self, raw):
        assert parse_year(raw) is None


# ── Filters ─────────────────────────────────────────────────────────────────


class TestFilters:
    """Gender filter and search matching."""

    def test_all_keeps_everything(self, sample_dataset):
        assert len(filter_by_gender(sample_dataset.records, "all")) == 8

    def test_gender_case_insensitive(self, sample_dataset):
        women = filter_by_gender(sample_dataset.records, "Women")
        assert [r["Perfume"] for r in women] == ["B", "C", "F"]

    def test_missing_gender_excluded(self):
        assert not gender_matches({"Gender": ""}, "men")

    def test_search_matches_name_or_brand(self):
        record = {"Perfume": "Sauvage", "Brand": "Dior"}
        assert matches_search(record, "sauv")
        assert matches_search(record, "DIOR")
        assert not matches_search(record, "chanel")

    def test_empty_search_matches_nothing(self):
        assert not matches_search({"Perfume": "Sauvage"}, "")

    def test_mean_or_zero(self):
        assert mean_or_zero([]) == 0.0
        assert mean_or_zero([4.0, 5.0]) == pytest.approx(4.5)
