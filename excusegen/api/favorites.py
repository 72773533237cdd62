"""
Favorites endpoints, scoped by device id.
"""

from typing import List

from fastapi import APIRouter, Query

from .schemas import (
    AddFavoriteRequest,
    AddFavoriteResponse,
    ClearFavoritesResponse,
    FavoriteResponse,
    RemoveFavoriteResponse,
)
from ..core import config, dao, favorites
from ..core.errors import ExcuseNotFoundError

router = APIRouter()


@router.post("", response_model=AddFavoriteResponse)
def add_favorite_endpoint(request: AddFavoriteRequest):
    """Favorite an excuse for a device. Adding it again is a no-op."""
    if dao.get_excuse(request.excuse_id) is None:
        raise ExcuseNotFoundError(request.excuse_id)

    if config.FAVORITES_CAP_ENFORCED:
        result = favorites.add_favorite_capped(request.excuse_id, request.device_id)
    else:
        result = favorites.add_favorite(request.excuse_id, request.device_id)

    return AddFavoriteResponse(
        success=True,
        favorite_id=result.favorite.id,
        already_favorited=not result.created,
    )


@router.get("", response_model=List[FavoriteResponse])
def list_favorites_endpoint(device_id: str = Query(..., alias="deviceId")):
    """A device's favorites with excuse text and average rating, newest first."""
    return [
        FavoriteResponse(
            id=fav.id,
            excuse_id=fav.excuse_id,
            device_id=fav.device_id,
            excuse=fav.excuse,
            situation=fav.situation,
            tone=fav.tone,
            length=fav.length,
            believability_rating=fav.believability_rating,
            average_rating=fav.average_rating,
            created_at=fav.created_at,
        )
        for fav in favorites.list_favorites(device_id)
    ]


# Define /clear BEFORE /{excuse_id} to avoid path parameter conflict
@router.delete("/clear", response_model=ClearFavoritesResponse)
def clear_favorites_endpoint(device_id: str = Query(..., alias="deviceId")):
    deleted = favorites.clear_all(device_id)
    return ClearFavoritesResponse(success=True, deleted_count=deleted)


@router.delete("/{excuse_id}", response_model=RemoveFavoriteResponse)
def remove_favorite_endpoint(excuse_id: str, device_id: str = Query(..., alias="deviceId")):
    removed = favorites.remove_favorite(excuse_id, device_id)
    return RemoveFavoriteResponse(success=True, removed=removed)
