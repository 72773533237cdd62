"""
Data access for persisted excuses and share events.

Both tables are append-only. Storage errors are logged with context and
re-raised; callers decide what the user sees.
"""

import sqlite3
import uuid
from typing import Optional

from .db import get_db, utc_now
from .schema import PersistedExcuse, ShareRecord
from ..util.logging import excerpt, logger


def _row_to_excuse(row: sqlite3.Row) -> PersistedExcuse:
    return PersistedExcuse(
        id=row["id"],
        situation=row["situation"],
        tone=row["tone"],
        length=row["length"],
        excuse=row["excuse"],
        believability_rating=row["believability_rating"],
        created_at=row["created_at"],
    )


def save_excuse(situation: str, tone: str, length: str, excuse: str, believability_rating: int) -> PersistedExcuse:
    """Insert a generated excuse and return the stored row."""
    record = PersistedExcuse(
        id=str(uuid.uuid4()),
        situation=situation,
        tone=tone,
        length=length,
        excuse=excuse,
        believability_rating=believability_rating,
        created_at=utc_now(),
    )

    try:
        with get_db() as conn:
            conn.execute(
                "INSERT INTO excuses (id, situation, tone, length, excuse, believability_rating, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (record.id, record.situation, record.tone, record.length,
                 record.excuse, record.believability_rating, record.created_at)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to save excuse for situation '{situation}' "
                     f"(tone={tone}, length={length}, excuse='{excerpt(excuse)}'): {e}")
        raise

    return record


def get_excuse(excuse_id: str) -> Optional[PersistedExcuse]:
    """Get a persisted excuse by id."""
    if not excuse_id or not excuse_id.strip():
        return None

    try:
        with get_db() as conn:
            row = conn.execute(
                "SELECT id, situation, tone, length, excuse, believability_rating, created_at "
                "FROM excuses WHERE id = ?",
                (excuse_id.strip(),)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to get excuse '{excuse_id}': {e}")
        raise

    return _row_to_excuse(row) if row else None


def count_excuses(situation: str = None) -> int:
    """Count persisted excuses for one situation, or all of them."""
    try:
        with get_db() as conn:
            if situation is not None:
                row = conn.execute("SELECT COUNT(*) FROM excuses WHERE situation = ?", (situation,)).fetchone()
            else:
                row = conn.execute("SELECT COUNT(*) FROM excuses").fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to count excuses{' for situation ' + situation if situation else ''}: {e}")
        raise

    return row[0] if row else 0


def record_share(excuse_id: str, share_method: str) -> ShareRecord:
    """Append a share event for an excuse."""
    share = ShareRecord(
        id=str(uuid.uuid4()),
        excuse_id=excuse_id,
        share_method=share_method,
        created_at=utc_now(),
    )

    try:
        with get_db() as conn:
            conn.execute(
                "INSERT INTO excuse_shares (id, excuse_id, share_method, created_at) VALUES (?, ?, ?, ?)",
                (share.id, share.excuse_id, share.share_method, share.created_at)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to record share for excuse '{excuse_id}' (method={share_method}): {e}")
        raise

    logger.log_share(excuse_id, share_method)
    return share


def get_share_count(excuse_id: str) -> int:
    try:
        with get_db() as conn:
            row = conn.execute("SELECT COUNT(*) FROM excuse_shares WHERE excuse_id = ?", (excuse_id,)).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to count shares for excuse '{excuse_id}': {e}")
        raise

    return row[0] if row else 0
