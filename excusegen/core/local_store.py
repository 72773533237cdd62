"""
Device-resident store for the offline variant.

Holds the generated device id plus favorites and star ratings for excuses
that never reached the server. With no server identifier to go on, an
excuse is identified by the SHA-256 digest of its text. Two different
texts sharing a digest would be treated as one excuse; that is
astronomically unlikely but possible in principle. Texts differing only
in surrounding whitespace are treated as the same excuse.
"""

import hashlib
import json
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Generator, List, Optional

from . import config
from .ratings import validate_stars
from ..util.logging import excerpt, logger

FAVORITES_KEY = "excusegen_favorites"
RATINGS_KEY = "excusegen_ratings"
DEVICE_ID_KEY = "excusegen_device_id"


def excuse_key(text: str) -> str:
    """Content identity for an excuse text."""
    return hashlib.sha256((text or "").strip().encode("utf-8")).hexdigest()


@dataclass
class LocalFavorite:
    id: str
    excuse: str
    situation: str
    tone: str
    length: str
    timestamp: str


@dataclass
class SaveFavoriteResult:
    success: bool
    limit_reached: bool = False
    already_favorited: bool = False


class LocalStore:
    """Key/value store on the device, backed by a small SQLite file."""

    def __init__(self, path: str = None, max_favorites: int = None):
        self.path = path or config.LOCAL_STORE_PATH
        self.max_favorites = config.MAX_FAVORITES if max_favorites is None else max_favorites
        config.ensure_db_directory(self.path)
        with self._connect() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')
            conn.commit()

    @contextmanager
    def _connect(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self.path)
        try:
            yield conn
        finally:
            conn.close()

    # Raw key/value access

    def get_item(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, value, datetime.now(timezone.utc).isoformat())
            )
            conn.commit()

    def remove_item(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()

    def _get_json(self, key: str, default: Any) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable local value for '{key}'")
            return default

    def _set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    # Device identity

    def get_device_id(self) -> str:
        """Return the persisted device id, generating it on first use."""
        device_id = self.get_item(DEVICE_ID_KEY)
        if not device_id:
            device_id = f"device_{uuid.uuid4().hex}"
            self.set_item(DEVICE_ID_KEY, device_id)
            logger.info(f"Generated new device id {device_id}")
        return device_id

    # Favorites

    def get_favorites(self) -> List[LocalFavorite]:
        """Favorites, newest first."""
        items = self._get_json(FAVORITES_KEY, [])
        favorites = []
        for item in items if isinstance(items, list) else []:
            try:
                favorites.append(LocalFavorite(**item))
            except TypeError:
                logger.warning(f"Skipping malformed local favorite: {item!r}")
        return favorites

    def save_favorite(self, excuse: str, situation: str = "", tone: str = "", length: str = "") -> SaveFavoriteResult:
        """Save a favorite. An existing favorite is a success even at the cap."""
        if not excuse or not excuse.strip():
            return SaveFavoriteResult(success=False)

        favorites = self.get_favorites()
        fav_id = excuse_key(excuse)

        if any(fav.id == fav_id for fav in favorites):
            logger.info(f"Excuse already favorited locally: '{excerpt(excuse)}'")
            return SaveFavoriteResult(success=True, already_favorited=True)

        if len(favorites) >= self.max_favorites:
            logger.info(f"Local favorites limit of {self.max_favorites} reached")
            return SaveFavoriteResult(success=False, limit_reached=True)

        favorite = LocalFavorite(
            id=fav_id,
            excuse=excuse.strip(),
            situation=situation,
            tone=tone,
            length=length,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        self._set_json(FAVORITES_KEY, [asdict(favorite)] + [asdict(fav) for fav in favorites])
        logger.log_favorite("local_add", fav_id, self.get_item(DEVICE_ID_KEY))
        return SaveFavoriteResult(success=True)

    def remove_favorite(self, fav_id: str) -> bool:
        favorites = self.get_favorites()
        remaining = [fav for fav in favorites if fav.id != fav_id]
        if len(remaining) == len(favorites):
            return False
        self._set_json(FAVORITES_KEY, [asdict(fav) for fav in remaining])
        logger.log_favorite("local_remove", fav_id, self.get_item(DEVICE_ID_KEY))
        return True

    def is_favorited(self, excuse: str) -> bool:
        fav_id = excuse_key(excuse)
        return any(fav.id == fav_id for fav in self.get_favorites())

    def clear_all_favorites(self) -> int:
        count = len(self.get_favorites())
        self.remove_item(FAVORITES_KEY)
        return count

    def favorites_count(self) -> int:
        return len(self.get_favorites())

    # Ratings

    def save_rating(self, excuse: str, stars: int) -> None:
        """Remember the device's own star rating for an excuse text."""
        validate_stars(stars)
        ratings = self._get_json(RATINGS_KEY, {})
        if not isinstance(ratings, dict):
            ratings = {}
        ratings[excuse_key(excuse)] = stars
        self._set_json(RATINGS_KEY, ratings)

    def get_rating(self, excuse: str) -> Optional[int]:
        ratings = self._get_json(RATINGS_KEY, {})
        if not isinstance(ratings, dict):
            return None
        return ratings.get(excuse_key(excuse))
