"""
Request and response models for the excuse API.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateExcuseRequest(CamelModel):
    situation: str
    tone: str
    length: str
    seed: Optional[str] = None

    @field_validator('situation', 'tone', 'length')
    @classmethod
    def must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('field cannot be empty')
        return v.strip()


class AdjustExcuseRequest(GenerateExcuseRequest):
    original_excuse: str
    direction: Literal['better', 'worse']

    @field_validator('original_excuse')
    @classmethod
    def original_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('originalExcuse cannot be empty')
        return v


class ExcuseResponse(CamelModel):
    id: str
    excuse: str
    believability_rating: int
    situation: str
    tone: str
    length: str
    usage_count: Optional[int] = None


class LocalExcuseResponse(CamelModel):
    excuse: str
    believability_rating: int
    situation: str
    tone: str
    length: str
    usage_count: int
    source: str = "local"


class CatalogStatsResponse(CamelModel):
    total_situations: int
    total_excuses: int
    situations: List[str]
    excuses_by_situation: Dict[str, int]


class RateExcuseRequest(CamelModel):
    rating: StrictInt


class RatingResponse(CamelModel):
    average_rating: float
    total_ratings: int


class TopRatedExcuseResponse(CamelModel):
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


class ShareExcuseRequest(CamelModel):
    share_method: str = "unknown"


class ShareResponse(CamelModel):
    success: bool
    share_count: int


class AddFavoriteRequest(CamelModel):
    excuse_id: str
    device_id: str


class AddFavoriteResponse(CamelModel):
    success: bool
    favorite_id: str
    already_favorited: bool


class FavoriteResponse(CamelModel):
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


class RemoveFavoriteResponse(CamelModel):
    success: bool
    removed: bool


class ClearFavoritesResponse(CamelModel):
    success: bool
    deleted_count: int


class HealthResponse(CamelModel):
    status: str
    version: str
    db_health: bool
    catalog_situations: int
    catalog_excuses: int
