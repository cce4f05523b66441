"""
FastAPI application for the lens selector service.

The application owns a single LensService (on ``app.state``) and, when
enabled, a background worker that periodically refreshes the lens cache.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from lens_selector.api.routes import error_response, router as lenses_router
from lens_selector.config.settings import Settings
from lens_selector.logging.logger import Log
from lens_selector.service import LensService, build_lens_service
from lens_selector.worker.refresher import RefreshWorker

SERVICE_NAME = "lens-selector"


class HealthResponse(BaseModel):
    status: str
    service: str


def create_app(
    settings: Settings | None = None,
    service: LensService | None = None,
) -> FastAPI:
    """Build the application; collaborators are created from settings unless given."""
    settings = settings if settings is not None else Settings()
    service = service if service is not None else build_lens_service(settings)
    refresher = RefreshWorker(service, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.git_repo_url:
            await run_in_threadpool(_warm_cache, service)
            refresher.start_in_background()
        try:
            yield
        finally:
            refresher.stop()

    app = FastAPI(
        title="Lens Selector Service",
        description="Discovers, validates and serves FHIR lens documents from a git repository",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.lens_service = service
    app.state.refresher = refresher

    @app.get("/health", response_model=HealthResponse, summary="Liveness check")
    def health() -> HealthResponse:
        return HealthResponse(status="ok", service=SERVICE_NAME)

    app.include_router(lenses_router, prefix="/lenses")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return error_response(
                exc.status_code,
                "Not Found",
                f"Route {request.method} {request.url.path} not found",
            )
        return error_response(exc.status_code, "HTTP Error", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        Log.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", str(exc)
        )

    return app


def _warm_cache(service: LensService) -> None:
    try:
        service.refresh()
    except Exception as exc:
        Log.error(f"Initial lens discovery failed: {exc}")
