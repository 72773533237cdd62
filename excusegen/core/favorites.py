"""
Per-device favorites ledger.

The (excuse_id, device_id) pair is unique in the schema, and inserts use
INSERT OR IGNORE, so adding the same favorite twice leaves a single row even
when two requests race. ``add_favorite`` itself never checks the per-device
cap; ``add_favorite_capped`` is the guard that does, before any insert.
"""

import sqlite3
import uuid
from typing import List, Optional

from . import config
from .db import get_db, utc_now
from .errors import ExcuseValidationError, FavoritesLimitError
from .schema import AddFavoriteResult, FavoriteExcuse, FavoriteRecord
from ..util.logging import logger


def _require(value: str, name: str) -> str:
    if not value or not str(value).strip():
        raise ExcuseValidationError(f"{name} is required")
    return str(value).strip()


def _row_to_favorite(row: sqlite3.Row) -> FavoriteRecord:
    return FavoriteRecord(
        id=row["id"],
        excuse_id=row["excuse_id"],
        device_id=row["device_id"],
        created_at=row["created_at"],
    )


def get_favorite(excuse_id: str, device_id: str) -> Optional[FavoriteRecord]:
    try:
        with get_db() as conn:
            row = conn.execute(
                "SELECT id, excuse_id, device_id, created_at FROM favorites WHERE excuse_id = ? AND device_id = ?",
                (excuse_id, device_id)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to read favorite (excuse '{excuse_id}', device '{device_id}'): {e}")
        raise

    return _row_to_favorite(row) if row else None


def is_favorited(excuse_id: str, device_id: str) -> bool:
    return get_favorite(excuse_id, device_id) is not None


def add_favorite(excuse_id: str, device_id: str) -> AddFavoriteResult:
    """Favorite an excuse for a device. Re-adding returns the existing row."""
    excuse_id = _require(excuse_id, "excuseId")
    device_id = _require(device_id, "deviceId")

    favorite = FavoriteRecord(
        id=str(uuid.uuid4()),
        excuse_id=excuse_id,
        device_id=device_id,
        created_at=utc_now(),
    )

    try:
        with get_db() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO favorites (id, excuse_id, device_id, created_at) VALUES (?, ?, ?, ?)",
                (favorite.id, favorite.excuse_id, favorite.device_id, favorite.created_at)
            )
            conn.commit()
            created = cursor.rowcount == 1
    except sqlite3.Error as e:
        logger.error(f"Failed to add favorite (excuse '{excuse_id}', device '{device_id}'): {e}")
        raise

    if not created:
        logger.log_favorite("add", excuse_id, device_id, status="already_exists")
        return AddFavoriteResult(favorite=get_favorite(excuse_id, device_id), created=False)

    logger.log_favorite("add", excuse_id, device_id)
    return AddFavoriteResult(favorite=favorite, created=True)


def add_favorite_capped(excuse_id: str, device_id: str, max_favorites: int = None) -> AddFavoriteResult:
    """Check the per-device cap, then add the favorite.

    Re-adding an excuse the device already favorited succeeds even at the cap.
    Raises FavoritesLimitError without touching storage when the device is full.
    """
    excuse_id = _require(excuse_id, "excuseId")
    device_id = _require(device_id, "deviceId")
    limit = config.MAX_FAVORITES if max_favorites is None else max_favorites

    existing = get_favorite(excuse_id, device_id)
    if existing is not None:
        return AddFavoriteResult(favorite=existing, created=False)

    if count_favorites(device_id) >= limit:
        logger.log_favorite("add", excuse_id, device_id, status="limit_reached")
        raise FavoritesLimitError(device_id, limit)

    return add_favorite(excuse_id, device_id)


def remove_favorite(excuse_id: str, device_id: str) -> bool:
    """Delete one favorite. Returns False when there was nothing to delete."""
    excuse_id = _require(excuse_id, "excuseId")
    device_id = _require(device_id, "deviceId")

    try:
        with get_db() as conn:
            cursor = conn.execute(
                "DELETE FROM favorites WHERE excuse_id = ? AND device_id = ?",
                (excuse_id, device_id)
            )
            conn.commit()
            removed = cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Failed to remove favorite (excuse '{excuse_id}', device '{device_id}'): {e}")
        raise

    logger.log_favorite("remove", excuse_id, device_id, status="success" if removed else "not_found")
    return removed


def list_favorites(device_id: str) -> List[FavoriteExcuse]:
    """All favorites of a device with excuse text and average rating, newest first."""
    device_id = _require(device_id, "deviceId")

    try:
        with get_db() as conn:
            rows = conn.execute('''
                SELECT f.id, f.excuse_id, f.device_id, f.created_at,
                       e.excuse, e.situation, e.tone, e.length, e.believability_rating,
                       COALESCE(r.average_rating, 0) AS average_rating
                FROM favorites f
                JOIN excuses e ON e.id = f.excuse_id
                LEFT JOIN (
                    SELECT excuse_id, AVG(rating) AS average_rating
                    FROM excuse_ratings
                    GROUP BY excuse_id
                ) r ON r.excuse_id = f.excuse_id
                WHERE f.device_id = ?
                ORDER BY f.created_at DESC, f.rowid DESC
            ''', (device_id,)).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to list favorites for device '{device_id}': {e}")
        raise

    return [
        FavoriteExcuse(
            id=row["id"],
            excuse_id=row["excuse_id"],
            device_id=row["device_id"],
            excuse=row["excuse"],
            situation=row["situation"],
            tone=row["tone"],
            length=row["length"],
            believability_rating=row["believability_rating"],
            average_rating=float(row["average_rating"]),
            created_at=row["created_at"],
        )
        for row in rows
    ]


def count_favorites(device_id: str) -> int:
    try:
        with get_db() as conn:
            row = conn.execute("SELECT COUNT(*) FROM favorites WHERE device_id = ?", (device_id,)).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to count favorites for device '{device_id}': {e}")
        raise

    return row[0] if row else 0


def clear_all(device_id: str) -> int:
    """Delete every favorite of a device and return how many were removed."""
    device_id = _require(device_id, "deviceId")

    try:
        with get_db() as conn:
            cursor = conn.execute("DELETE FROM favorites WHERE device_id = ?", (device_id,))
            conn.commit()
            deleted = cursor.rowcount
    except sqlite3.Error as e:
        logger.error(f"Failed to clear favorites for device '{device_id}': {e}")
        raise

    logger.log_operation("favorite.clear_all", "success", {"device_id": device_id, "deleted": deleted})
    return deleted
