"""
Rating aggregation over persisted excuses.

Ratings are append-only 1-5 star rows. A device may rate the same excuse more
than once; every row counts toward the plain arithmetic mean.
"""

import sqlite3
import uuid
from typing import List

from .db import get_db, utc_now
from .errors import ExcuseValidationError
from .schema import RatingAggregate, TopRatedExcuse
from ..util.logging import logger

MIN_STARS = 1
MAX_STARS = 5


def validate_stars(stars) -> int:
    """Reject anything that is not an integer from 1 to 5."""
    if isinstance(stars, bool) or not isinstance(stars, int):
        raise ExcuseValidationError(f"Rating must be an integer between {MIN_STARS} and {MAX_STARS}")
    if not MIN_STARS <= stars <= MAX_STARS:
        raise ExcuseValidationError(f"Rating must be between {MIN_STARS} and {MAX_STARS}, got {stars}")
    return stars


def _aggregate(conn: sqlite3.Connection, excuse_id: str) -> RatingAggregate:
    row = conn.execute(
        "SELECT AVG(rating), COUNT(*) FROM excuse_ratings WHERE excuse_id = ?",
        (excuse_id,)
    ).fetchone()
    average, total = row[0], row[1]
    if not total:
        return RatingAggregate(average_rating=0.0, total_ratings=0)
    return RatingAggregate(average_rating=float(average), total_ratings=int(total))


def submit_rating(excuse_id: str, stars: int) -> RatingAggregate:
    """Store a rating and return the refreshed aggregate for the excuse."""
    validate_stars(stars)
    if not excuse_id or not excuse_id.strip():
        raise ExcuseValidationError("excuseId is required")

    try:
        with get_db() as conn:
            conn.execute(
                "INSERT INTO excuse_ratings (id, excuse_id, rating, created_at) VALUES (?, ?, ?, ?)",
                (str(uuid.uuid4()), excuse_id, stars, utc_now())
            )
            conn.commit()
            aggregate = _aggregate(conn, excuse_id)
    except sqlite3.Error as e:
        logger.error(f"Failed to store rating {stars} for excuse '{excuse_id}': {e}")
        raise

    logger.log_rating(excuse_id, stars, aggregate.average_rating, aggregate.total_ratings)
    return aggregate


def get_rating(excuse_id: str) -> RatingAggregate:
    """Read the aggregate for an excuse; (0, 0) when it has no ratings."""
    try:
        with get_db() as conn:
            return _aggregate(conn, excuse_id)
    except sqlite3.Error as e:
        logger.error(f"Failed to read rating for excuse '{excuse_id}': {e}")
        raise


def get_top_rated(limit: int) -> List[TopRatedExcuse]:
    """Excuses ordered by average rating, highest first.

    Unrated excuses count as 0 and therefore come last. Order among equal
    averages is not significant.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ExcuseValidationError("limit must be a positive integer")

    try:
        with get_db() as conn:
            rows = conn.execute('''
                SELECT e.id, e.situation, e.tone, e.length, e.excuse, e.believability_rating, e.created_at,
                       COALESCE(r.average_rating, 0) AS average_rating,
                       COALESCE(r.total_ratings, 0) AS total_ratings,
                       COALESCE(s.share_count, 0) AS share_count
                FROM excuses e
                LEFT JOIN (
                    SELECT excuse_id, AVG(rating) AS average_rating, COUNT(*) AS total_ratings
                    FROM excuse_ratings
                    GROUP BY excuse_id
                ) r ON r.excuse_id = e.id
                LEFT JOIN (
                    SELECT excuse_id, COUNT(*) AS share_count
                    FROM excuse_shares
                    GROUP BY excuse_id
                ) s ON s.excuse_id = e.id
                ORDER BY average_rating DESC, total_ratings DESC, e.created_at DESC
                LIMIT ?
            ''', (limit,)).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to load top rated excuses (limit={limit}): {e}")
        raise

    return [
        TopRatedExcuse(
            id=row["id"],
            situation=row["situation"],
            tone=row["tone"],
            length=row["length"],
            excuse=row["excuse"],
            believability_rating=row["believability_rating"],
            average_rating=float(row["average_rating"]),
            total_ratings=int(row["total_ratings"]),
            share_count=int(row["share_count"]),
            created_at=row["created_at"],
        )
        for row in rows
    ]
