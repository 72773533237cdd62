"""
Typed records shared by the catalog, the DAO and the API layer.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ExcuseRecord:
    """One static excuse from the catalog. Tone and length are canonical."""
    excuse_text: str
    tone: str
    length: str
    believability_rating: int


@dataclass
class PersistedExcuse:
    id: str
    situation: str
    tone: str
    length: str
    excuse: str
    believability_rating: int
    created_at: str


@dataclass
class RatingAggregate:
    average_rating: float = 0.0
    total_ratings: int = 0


@dataclass
class TopRatedExcuse:
    id: str
    situation: str
    tone: str
    length: str
    excuse: str
    believability_rating: int
    average_rating: float
    total_ratings: int
    share_count: int
    created_at: str


@dataclass
class ShareRecord:
    id: str
    excuse_id: str
    share_method: str
    created_at: str


@dataclass
class FavoriteRecord:
    id: str
    excuse_id: str
    device_id: str
    created_at: str


@dataclass
class FavoriteExcuse:
    """A favorite joined with its excuse text and current average rating."""
    id: str
    excuse_id: str
    device_id: str
    excuse: str
    situation: str
    tone: str
    length: str
    believability_rating: int
    average_rating: float
    created_at: str


@dataclass
class AddFavoriteResult:
    favorite: FavoriteRecord
    created: bool


@dataclass
class GenerationResult:
    excuse: PersistedExcuse
    seed: Optional[str] = None
    usage_count: Optional[int] = None
    metadata: dict = field(default_factory=dict)
