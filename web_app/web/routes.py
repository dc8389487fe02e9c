"""Public routes: link creation, redirects and health."""

from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, Request, HTTPException, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError as SchemaValidationError

from ..api.schemas import ShortenRequest, URLRecordResponse, HealthResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=URLRecordResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed JSON or invalid URL"},
        500: {"model": ErrorResponse, "description": "Generation or persistence failure"},
    },
    summary="Create short URL",
    description="Shorten a URL. Equivalent URLs map to the same short URL.",
)
async def create_short_url(request: Request):
    """Create a shortened URL."""
    service = request.app.state.shorten_service

    # Malformed JSON maps to 400, not FastAPI's default 422
    raw = await request.body()
    try:
        body = ShortenRequest.model_validate_json(raw)
    except SchemaValidationError as e:
        request.app.state.logger.error(f"Invalid JSON format: {e.errors(include_url=False)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON format",
        )

    record = await service.shorten(body.original_url)

    return URLRecordResponse(**record.to_dict())


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Service unhealthy"}},
    summary="Health check",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    repository = request.app.state.repository
    cache = request.app.state.cache

    db_healthy = await repository.health_check()
    cache_healthy = await cache.ping() if cache else True
    overall = db_healthy and cache_healthy

    health = HealthResponse(
        status="healthy" if overall else "unhealthy",
        database="healthy" if db_healthy else "unhealthy",
        cache="healthy" if cache_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if overall else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=health.model_dump(mode="json"),
    )


async def redirect_to_url(request: Request, slug: str):
    """Redirect to the original URL."""
    resolver = request.app.state.resolver

    original_url = await resolver.resolve(request.url.path)

    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)


def add_redirect_route(app: FastAPI, path_prefix: str) -> None:
    """Register the short link redirect under ``path_prefix``.

    Must be called after the other routers are included, since a ``/``
    prefix would otherwise shadow them.
    """
    app.add_api_route(
        f"{path_prefix}{{slug:path}}",
        redirect_to_url,
        methods=["GET"],
        include_in_schema=False,
        responses={
            302: {"description": "Redirect to the original URL"},
            400: {"model": ErrorResponse, "description": "Invalid slug"},
            404: {"model": ErrorResponse, "description": "Unknown short URL"},
            410: {"model": ErrorResponse, "description": "Expired short URL"},
        },
    )
