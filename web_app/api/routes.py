"""API routes implementation."""

from fastapi import APIRouter, Request

from .schemas import URLRecordResponse, ErrorResponse

router = APIRouter()


@router.get(
    "/urls/{slug}",
    response_model=URLRecordResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid slug"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Get URL information",
    description="Get a short URL record including its click count. Does not count as a visit.",
)
async def get_url_info(request: Request, slug: str):
    """Get information about a shortened URL."""
    resolver = request.app.state.resolver
    config = request.app.state.config

    record = await resolver.describe(f"{config.path_prefix}{slug}")

    return URLRecordResponse(**record.to_dict())
