"""
Lens endpoints.

Both routes are read-only. Results come from the lens service, which serves
cached discovery runs and only touches the repository on a cache miss.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lens_selector.logging.logger import Log
from lens_selector.service import LensNotFoundError, LensService

router = APIRouter(tags=["Lenses"])


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LensListResponse(BaseModel):
    lenses: list[str]


class ErrorResponse(BaseModel):
    error: str
    message: str


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Dependency providers
# ---------------------------------------------------------------------------


def get_lens_service(request: Request) -> LensService:
    service: LensService | None = getattr(request.app.state, "lens_service", None)
    if service is None:
        raise RuntimeError("lens service not initialized")
    return service


# ---------------------------------------------------------------------------
# GET /lenses
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=LensListResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List the ids of all valid lenses",
)
def list_lenses(
    service: Annotated[LensService, Depends(get_lens_service)],
) -> Any:
    try:
        return LensListResponse(lenses=service.get_lens_names())
    except Exception as exc:
        Log.error(f"Error fetching lenses: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch lenses", str(exc)
        )


# ---------------------------------------------------------------------------
# GET /lenses/{name}
# ---------------------------------------------------------------------------


@router.get(
    "/{name}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Fetch one lens document by name or id",
)
def get_lens(
    name: str,
    service: Annotated[LensService, Depends(get_lens_service)],
) -> Any:
    """Return the validated FHIR Library document, not the discovery wrapper."""
    try:
        return service.get_lens(name)
    except LensNotFoundError as exc:
        Log.debug(f"Lens not found: {exc.name}")
        return error_response(status.HTTP_404_NOT_FOUND, "Lens not found", str(exc))
    except Exception as exc:
        Log.error(f"Error fetching lens {name}: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch lens", str(exc)
        )
