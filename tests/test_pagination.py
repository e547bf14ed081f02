"""Tests for pagination normalization."""

import math

import pytest

from src.config import Settings
from src.utils.pagination import normalize_pagination, with_pagination


@pytest.mark.parametrize("page", [0, -1, -3.5, None, math.nan, math.inf, -math.inf, "2", True])
def test_invalid_page_uses_default(page):
    """Non-positive, non-finite and non-numeric pages fall back to the default page."""
    settings = Settings(default_page=3)
    assert normalize_pagination(page, 10, settings)["page"] == 3


@pytest.mark.parametrize("per_page", [101, 1000, 100.5, 250.9])
def test_per_page_above_max_is_clamped(per_page):
    """Requests above the maximum are clamped down, never rejected."""
    assert normalize_pagination(1, per_page, Settings())["per_page"] == 100


@pytest.mark.parametrize("per_page,expected", [(1, 1), (5, 5), (5.9, 5), (99.99, 99), (100, 100)])
def test_per_page_within_bounds_is_floored(per_page, expected):
    assert normalize_pagination(1, per_page, Settings())["per_page"] == expected


@pytest.mark.parametrize("per_page", [0, -5, None, math.nan, math.inf])
def test_invalid_per_page_uses_default(per_page):
    assert normalize_pagination(1, per_page, Settings())["per_page"] == 20


def test_fractional_page_is_floored():
    assert normalize_pagination(2.7, 5, Settings()) == {"page": 2, "per_page": 5}


def test_huge_integers_do_not_overflow():
    assert normalize_pagination(10**400, 10**400, Settings()) == {"page": 10**400, "per_page": 100}


def test_huge_negative_integer_uses_default():
    assert normalize_pagination(-10**400, -10**400, Settings()) == {"page": 1, "per_page": 20}


def test_page_between_zero_and_one_stays_positive():
    result = normalize_pagination(0.4, 0.4, Settings())
    assert result["page"] >= 1
    assert 1 <= result["per_page"] <= 100


def test_custom_max_per_page():
    settings = Settings(max_per_page=50)
    assert normalize_pagination(None, 80, settings) == {"page": 1, "per_page": 50}


def test_default_per_page_is_clamped_to_max():
    """A configured default above the maximum is clamped when settings are built."""
    settings = Settings(default_per_page=500, max_per_page=30)
    assert settings.default_per_page == 30
    assert normalize_pagination(None, None, settings) == {"page": 1, "per_page": 30}


def test_defaults_without_settings():
    assert normalize_pagination() == {"page": 1, "per_page": 20}


def test_with_pagination_preserves_other_keys():
    params = {"state": "opened", "sort": "desc"}
    merged = with_pagination(params, 0, 1000, Settings())

    assert merged == {"state": "opened", "sort": "desc", "page": 1, "per_page": 100}
    # input mapping is not modified
    assert params == {"state": "opened", "sort": "desc"}


def test_with_pagination_overwrites_existing_page_keys():
    merged = with_pagination({"page": 9, "per_page": 9, "search": "x"}, 2, 10, Settings())
    assert merged == {"page": 2, "per_page": 10, "search": "x"}
