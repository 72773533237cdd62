"""
Local excuse selection and the fallback-to-unfiltered policy.
"""

import random

import pytest

from excusegen.core.catalog import Catalog
from excusegen.core.schema import ExcuseRecord
from excusegen.core.selector import select_excuse

BELIEVABLE_1 = ExcuseRecord("Traffic was terrible.", "believable", "short", 85)
ABSURD = ExcuseRecord("A raccoon stole my keys.", "absurd", "short", 12)
BELIEVABLE_2 = ExcuseRecord("My alarm didn't go off.", "believable", "short", 90)


@pytest.fixture
def catalog():
    return Catalog({
        "Late to work": [BELIEVABLE_1, ABSURD, BELIEVABLE_2],
        "Missed deadline": [ExcuseRecord("Waiting on finance.", "believable", "medium", 80)],
    })


def test_single_matching_record_is_returned(catalog):
    for seed in range(20):
        assert select_excuse(catalog, "Late to work", "absurd", "short", rng=random.Random(seed)) is ABSURD


def test_display_labels_filter_like_canonical_keys(catalog):
    assert select_excuse(catalog, "Late to work", "Absurd", "Quick one-liner") is ABSURD


def test_tone_filter_only(catalog):
    picks = {select_excuse(catalog, "Late to work", tone="believable", rng=random.Random(s)) for s in range(50)}
    assert picks == {BELIEVABLE_1, BELIEVABLE_2}


@pytest.mark.parametrize("tone,length", [
    ("dramatic", None),
    (None, "long"),
    ("absurd", "long"),
    ("Sarcastic", "Epic"),
])
def test_no_match_falls_back_to_every_record(catalog, tone, length):
    records = catalog["Late to work"]
    for seed in range(30):
        assert select_excuse(catalog, "Late to work", tone, length, rng=random.Random(seed)) in records


def test_fallback_covers_all_records(catalog):
    picks = {select_excuse(catalog, "Late to work", "dramatic", rng=random.Random(s)) for s in range(200)}
    assert picks == set(catalog["Late to work"])


def test_unknown_situation_is_not_found(catalog):
    assert select_excuse(catalog, "Why I'm single") is None
    assert select_excuse(catalog, "Why I'm single", "absurd", "short") is None


def test_selection_does_not_mutate_catalog(catalog):
    before = dict(catalog)
    for seed in range(10):
        select_excuse(catalog, "Late to work", "absurd", rng=random.Random(seed))
    assert dict(catalog) == before


def test_padded_canonical_keys_still_filter(catalog):
    for seed in range(20):
        assert select_excuse(catalog, "Late to work", " absurd ", " short", rng=random.Random(seed)) is ABSURD
