"""
Believability ratings: tone-based estimates for catalog records and the
"BELIEVABILITY: <n>" suffix parsed out of generated text.
"""

import random
import re
from typing import Tuple

# Inclusive ranges per canonical tone
BELIEVABILITY_RANGES = {
    "believable": (70, 100),
    "absurd": (1, 30),
    "dramatic": (40, 60),
    "mysterious": (50, 70),
    "technical": (45, 65),
    "detailed": (35, 55),
}
DEFAULT_RANGE = (30, 70)

DEFAULT_GENERATED_RATING = 50
DEFAULT_ULTIMATE_RATING = 0

_BELIEVABILITY_PATTERN = re.compile(r"BELIEVABILITY:\s*(\d+)", re.IGNORECASE)


def believability_range(tone: str) -> Tuple[int, int]:
    return BELIEVABILITY_RANGES.get(tone, DEFAULT_RANGE)


def estimate_believability(tone: str, rng: random.Random = None) -> int:
    """Draw a rating uniformly from the tone's range, both ends included."""
    low, high = believability_range(tone)
    return (rng or random).randint(low, high)


def parse_believability(text: str, default: int = DEFAULT_GENERATED_RATING) -> Tuple[str, int]:
    """Split generated text into (excuse body, rating).

    The first BELIEVABILITY marker is removed from the body. Without a marker
    the rating falls back to ``default``. Ratings are clamped to 0-100.
    """
    text = text or ""
    match = _BELIEVABILITY_PATTERN.search(text)
    if not match:
        return text.strip(), default

    rating = max(0, min(100, int(match.group(1))))
    body = _BELIEVABILITY_PATTERN.sub("", text, count=1).strip()
    return body, rating
