"""
Movie list HTTP facade - FastAPI application.

Endpoints:
- GET /api/        liveness
- GET /api/movies  movies resolved from the title list

If the configured static directory exists it is served at / as the front-end.
"""

from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from .api.omdb import OmdbClient
from .config import MovieListConfig
from .errors import TitleSourceError
from .service import collect_movies

log = logger.bind(stage="http")

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."

router = APIRouter(prefix="/api")


@router.get("/")
def root():
    """Liveness endpoint."""
    return {"message": "page loaded"}


@router.get("/movies")
def list_movies(request: Request):
    """Look up every configured title and return the ones that resolved.

    Partial success is still a 200; only a missing/unreadable title list
    is a 500, and its cause is logged but never returned.
    """
    config: MovieListConfig = request.app.state.config
    client: OmdbClient = request.app.state.client

    log.info("Handling movie list request")
    try:
        result = collect_movies(
            config.titles_file,
            client.fetch,
            max_concurrency=config.max_concurrent_lookups,
        )
    except TitleSourceError as e:
        log.error(f"Movie list request failed: {e}")
        return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})

    return [record.to_dict() for record in result.records]


def create_app(config: MovieListConfig, client: OmdbClient | None = None) -> FastAPI:
    """Build the application around an explicit config and lookup client."""
    owns_client = client is None
    lookup_client = client or OmdbClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("Starting movie list API...")
        yield
        log.info("Shutting down movie list API...")
        if owns_client:
            lookup_client.close()

    app = FastAPI(
        title="Movie List API",
        description="Movies resolved concurrently from OMDb",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.client = lookup_client
    app.include_router(router)

    # Mounted last so the API routes take precedence
    if config.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")
        log.debug(f"Serving static files from {config.static_dir}")

    return app
