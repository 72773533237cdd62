"""
Excuse endpoints: remote generation, local catalog selection, ratings and shares.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .deps import get_agent, get_catalog
from .schemas import (
    AdjustExcuseRequest,
    CatalogStatsResponse,
    ExcuseResponse,
    GenerateExcuseRequest,
    LocalExcuseResponse,
    RateExcuseRequest,
    RatingResponse,
    ShareExcuseRequest,
    ShareResponse,
    TopRatedExcuseResponse,
)
from ..agents.agent import BaseExcuseAgent
from ..core import config, dao, generation, ratings
from ..core.catalog import Catalog
from ..core.errors import ExcuseNotFoundError
from ..core.schema import GenerationResult
from ..core.selector import select_excuse

router = APIRouter()


def _excuse_response(result: GenerationResult) -> ExcuseResponse:
    saved = result.excuse
    return ExcuseResponse(
        id=saved.id,
        excuse=saved.excuse,
        believability_rating=saved.believability_rating,
        situation=saved.situation,
        tone=saved.tone,
        length=saved.length,
        usage_count=result.usage_count,
    )


def _require_excuse(excuse_id: str):
    excuse = dao.get_excuse(excuse_id)
    if excuse is None:
        raise ExcuseNotFoundError(excuse_id)
    return excuse


@router.post("/generate", response_model=ExcuseResponse, response_model_exclude_none=True)
def generate_excuse_endpoint(request: GenerateExcuseRequest, agent: BaseExcuseAgent = Depends(get_agent)):
    """Generate a new excuse with the text generator and persist it."""
    result = generation.generate_excuse(agent, request.situation, request.tone, request.length, request.seed)
    return _excuse_response(result)


@router.post("/adjust", response_model=ExcuseResponse, response_model_exclude_none=True)
def adjust_excuse_endpoint(request: AdjustExcuseRequest, agent: BaseExcuseAgent = Depends(get_agent)):
    """Make an existing excuse more ('better') or less ('worse') believable."""
    result = generation.adjust_excuse(
        agent,
        request.original_excuse,
        request.situation,
        request.tone,
        request.length,
        request.direction,
        request.seed,
    )
    return _excuse_response(result)


@router.get("/ultimate", response_model=ExcuseResponse, response_model_exclude_none=True)
def ultimate_excuse_endpoint(agent: BaseExcuseAgent = Depends(get_agent)):
    """The Easter-egg excuse."""
    return _excuse_response(generation.generate_ultimate_excuse(agent))


@router.get("/local", response_model=LocalExcuseResponse)
def local_excuse_endpoint(
    situation: str = Query(..., description="Situation name, e.g. 'Late to work'"),
    tone: Optional[str] = Query(None, description="Tone display label or canonical key"),
    length: Optional[str] = Query(None, description="Length display label or canonical key"),
    catalog: Catalog = Depends(get_catalog),
):
    """Pick an excuse from the static catalog. 404 means: fall back to /generate.

    usageCount counts the excuses persisted for the situation, as /generate does.
    """
    record = select_excuse(catalog, situation, tone, length)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No local excuses for situation: {situation}")

    return LocalExcuseResponse(
        excuse=record.excuse_text,
        believability_rating=record.believability_rating,
        situation=situation,
        tone=record.tone,
        length=record.length,
        usage_count=dao.count_excuses(situation),
    )


@router.get("/stats", response_model=CatalogStatsResponse)
def catalog_stats_endpoint(catalog: Catalog = Depends(get_catalog)):
    """Counts of the loaded catalog, overall and per situation."""
    stats = catalog.stats()
    return CatalogStatsResponse(
        total_situations=stats.total_situations,
        total_excuses=stats.total_excuses,
        situations=stats.situations,
        excuses_by_situation=stats.excuses_by_situation,
    )


@router.get("/top-rated", response_model=List[TopRatedExcuseResponse])
def top_rated_endpoint(limit: Optional[int] = Query(None, ge=1, description="Maximum number of excuses")):
    """Excuses ranked by average rating; unrated excuses last."""
    limit = min(limit or config.TOP_RATED_DEFAULT_LIMIT, config.TOP_RATED_MAX_LIMIT)
    return [
        TopRatedExcuseResponse(
            id=item.id,
            situation=item.situation,
            tone=item.tone,
            length=item.length,
            excuse=item.excuse,
            believability_rating=item.believability_rating,
            average_rating=item.average_rating,
            total_ratings=item.total_ratings,
            share_count=item.share_count,
            created_at=item.created_at,
        )
        for item in ratings.get_top_rated(limit)
    ]


@router.post("/{excuse_id}/rate", response_model=RatingResponse)
def rate_excuse_endpoint(excuse_id: str, request: RateExcuseRequest):
    """Submit a 1-5 star rating and get the refreshed aggregate back."""
    _require_excuse(excuse_id)
    aggregate = ratings.submit_rating(excuse_id, request.rating)
    return RatingResponse(average_rating=aggregate.average_rating, total_ratings=aggregate.total_ratings)


@router.get("/{excuse_id}/rating", response_model=RatingResponse)
def get_rating_endpoint(excuse_id: str):
    _require_excuse(excuse_id)
    aggregate = ratings.get_rating(excuse_id)
    return RatingResponse(average_rating=aggregate.average_rating, total_ratings=aggregate.total_ratings)


@router.post("/{excuse_id}/share", response_model=ShareResponse)
def share_excuse_endpoint(excuse_id: str, request: Optional[ShareExcuseRequest] = None):
    """Record that an excuse was shared."""
    _require_excuse(excuse_id)
    share_method = (request.share_method if request else None) or "unknown"
    dao.record_share(excuse_id, share_method)
    return ShareResponse(success=True, share_count=dao.get_share_count(excuse_id))
