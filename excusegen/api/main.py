"""
FastAPI application for the excuse service.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import excuses, favorites
from .schemas import HealthResponse
from ..core import config
from ..core.catalog import load_catalog_dir
from ..core.db import health_check, init_db
from ..core.errors import ExcuseNotFoundError, ExcuseValidationError, FavoritesLimitError, GenerationError
from ..util.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables, load the catalog once and pick the generator agent."""
    init_db()

    for issue in config.validate_config():
        logger.warning(f"Configuration issue: {issue}")

    app.state.catalog = load_catalog_dir(config.CATALOG_DIR)
    app.state.agent = config.get_excuse_agent()
    logger.info(f"Excuse service ready (agent={app.state.agent.__class__.__name__}, "
                f"situations={len(app.state.catalog)})")
    yield


# Initialize the FastAPI application
app = FastAPI(
    title="Excuse Generator API",
    version=config.VERSION,
    description="Excuse generation, local catalog selection, ratings and favorites",
    docs_url="/docs" if config.debug_enabled() else None,
    redoc_url="/redoc" if config.debug_enabled() else None,
    lifespan=lifespan,
)

# Allow the mobile/web clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(excuses.router, prefix="/api/excuses", tags=["excuses"])
app.include_router(favorites.router, prefix="/api/favorites", tags=["favorites"])


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(request: Request):
    """Check system health."""
    db_health = health_check()
    catalog = getattr(request.app.state, "catalog", None)

    return HealthResponse(
        status="healthy" if db_health else "unhealthy",
        version=config.VERSION,
        db_health=db_health,
        catalog_situations=len(catalog) if catalog is not None else 0,
        catalog_excuses=catalog.total_excuses() if catalog is not None else 0,
    )


@app.exception_handler(ExcuseValidationError)
async def validation_exception_handler(request: Request, exc: ExcuseValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ExcuseNotFoundError)
async def not_found_exception_handler(request: Request, exc: ExcuseNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(FavoritesLimitError)
async def favorites_limit_exception_handler(request: Request, exc: FavoritesLimitError):
    return JSONResponse(status_code=409, content={"detail": str(exc), "limit": exc.limit})


@app.exception_handler(GenerationError)
async def generation_exception_handler(request: Request, exc: GenerationError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    content = {"detail": "Internal server error"}
    if config.debug_enabled():
        content["debug"] = str(exc)
    return JSONResponse(status_code=500, content=content)
