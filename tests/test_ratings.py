# tests/test_ratings.py

import pytest
from types import SimpleNamespace
from shelf.exceptions import ValidationError
from shelf.ratings import RatingSummary, aggregate_ratings, round_half_up, validate_rating


def test_aggregate_two_reviews():
    assert aggregate_ratings([8.5, 9.5]) == RatingSummary(9.0, 2)


def test_aggregate_no_reviews():
    summary = aggregate_ratings([])
    assert summary.average_rating == 0
    assert summary.total_reviews == 0


def test_aggregate_rounds_halves_up():
    # mean is exactly 8.25
    assert aggregate_ratings([8.0, 8.5]).average_rating == 8.3
    assert aggregate_ratings([7.0, 7.0, 8.0]).average_rating == 7.3


def test_aggregate_accepts_models_and_dicts():
    reviews = [SimpleNamespace(rating=6.0), {"rating": 7.0}, {"rating": None}]
    assert aggregate_ratings(reviews) == RatingSummary(6.5, 2)


def test_round_half_up():
    assert round_half_up(2.25) == 2.3
    assert round_half_up(2.35) == 2.4
    assert round_half_up(10) == 10.0


@pytest.mark.parametrize("value,expected", [
    (0, 0.0),
    (10, 10.0),
    (7.25, 7.3),
    ("8.5", 8.5),
])
def test_validate_rating_accepts_range(value, expected):
    assert validate_rating(value) == expected


@pytest.mark.parametrize("value", [None, True, -0.1, 10.1, "abc", "nan", "inf", [8]])
def test_validate_rating_rejects(value):
    with pytest.raises(ValidationError):
        validate_rating(value)
