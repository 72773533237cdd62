"""
Local excuse selection over the read-only catalog.
"""

import random
from typing import Optional

from .catalog import Catalog
from .normalize import normalize_length, normalize_tone
from .schema import ExcuseRecord
from ..util.logging import logger


def select_excuse(catalog: Catalog, situation: str, tone: Optional[str] = None,
                  length: Optional[str] = None, rng: random.Random = None) -> Optional[ExcuseRecord]:
    """Pick one catalog excuse for a situation.

    Tone and length narrow the candidates by exact canonical match. When the
    filters leave nothing, every record for the situation is a candidate
    again. Returns None only when the situation has no records at all.
    """
    records = catalog.records(situation)
    if not records:
        logger.debug(f"No local excuses for situation: {situation}")
        return None

    candidates = records
    if tone:
        wanted_tone = normalize_tone(tone)
        candidates = [r for r in candidates if r.tone == wanted_tone]
    if length:
        wanted_length = normalize_length(length)
        candidates = [r for r in candidates if r.length == wanted_length]

    if not candidates:
        logger.debug(f"No exact matches for tone={tone} length={length}; using all excuses for {situation}")
        candidates = records

    return (rng or random).choice(candidates)
