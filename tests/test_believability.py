"""
Believability estimates and parsing of the BELIEVABILITY marker.
"""

import random

import pytest

from excusegen.core.believability import (
    BELIEVABILITY_RANGES,
    DEFAULT_RANGE,
    believability_range,
    estimate_believability,
    parse_believability,
)


def test_absurd_draws_stay_in_range():
    draws = [estimate_believability("absurd") for _ in range(1000)]
    assert all(1 <= d <= 30 for d in draws)


def test_believable_draws_stay_in_range():
    draws = [estimate_believability("believable") for _ in range(1000)]
    assert all(70 <= d <= 100 for d in draws)


@pytest.mark.parametrize("tone", sorted(BELIEVABILITY_RANGES))
def test_every_tone_respects_its_range(tone):
    low, high = BELIEVABILITY_RANGES[tone]
    rng = random.Random(7)
    assert all(low <= estimate_believability(tone, rng) <= high for _ in range(200))


def test_range_endpoints_are_reachable():
    rng = random.Random(1)
    draws = {estimate_believability("dramatic", rng) for _ in range(2000)}
    assert min(draws) == 40
    assert max(draws) == 60


def test_unrecognized_tone_uses_default_range():
    assert believability_range("sarcastic") == DEFAULT_RANGE
    assert all(30 <= estimate_believability("sarcastic") <= 70 for _ in range(200))


def test_parse_splits_rating_from_text():
    assert parse_believability("My car broke down. BELIEVABILITY: 72") == ("My car broke down.", 72)


def test_parse_is_case_insensitive_and_multiline():
    text, rating = parse_believability("The dog ate my homework.\n\nbelievability:15")
    assert text == "The dog ate my homework."
    assert rating == 15


def test_parse_without_marker_uses_default():
    assert parse_believability("No rating here.") == ("No rating here.", 50)
    assert parse_believability("No rating here.", default=0) == ("No rating here.", 0)


def test_parse_clamps_to_100():
    assert parse_believability("Aliens. BELIEVABILITY: 250")[1] == 100


def test_parse_empty_text():
    assert parse_believability("") == ("", 50)
    assert parse_believability("BELIEVABILITY: 40") == ("", 40)
