from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from prospector.config import Settings, get_settings
from prospector.routers import config, health, maps, places
from prospector.services.google_maps import GoogleMapsClient
from prospector.services.identity import IdentityVerifier

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _status(configured: bool) -> str:
    return "configured" if configured else "NOT configured"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    app.state.identity_verifier = IdentityVerifier.from_settings(settings)
    app.state.maps_client = GoogleMapsClient(
        httpx.AsyncClient(timeout=settings.upstream_timeout_seconds)
    )

    logger.info("Prospector backend listening on port %d", settings.port)
    logger.info("Health check: http://localhost:%d/api/health", settings.port)
    logger.info("Firebase: %s", _status(app.state.identity_verifier is not None))
    logger.info("Google Places API: %s", _status(bool(settings.places_api_key)))
    logger.info("Google Maps API: %s", _status(bool(settings.maps_api_key)))
    if not settings.places_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not set; /api/places/* will return 500")
    if not settings.maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; geocode/directions will return 500")

    yield

    # Shutdown: close the upstream HTTP client
    await app.state.maps_client.close()


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app around an already-loaded Settings."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Prospector",
        description="Server-side proxy for Google Places and Maps APIs",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    app.include_router(health.router)
    app.include_router(config.router)
    app.include_router(places.router)
    app.include_router(maps.router)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
