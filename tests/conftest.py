"""Shared fixtures: a small perfume dataset with messy real-world cells."""

import pytest

from scent_mapper.dataset import Dataset, parse_records

from .sample_data import SAMPLE_TEXT, SCENARIO_TEXT


@pytest.fixture
def sample_dataset() -> Dataset:
    """Eight perfumes (A-H); G has no accords, H is outside 2019-2024."""
    return parse_records(SAMPLE_TEXT)


@pytest.fixture
def scenario_dataset() -> Dataset:
    """Two perfumes: A lists Floral twice, B has a single Woody accord."""
    return parse_records(SCENARIO_TEXT)
