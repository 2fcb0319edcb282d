"""Health check endpoint. No database dependency; used for liveness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok plus whether the result cache is reachable (search works without it)."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return HealthResponse()
    return HealthResponse(cache="connected" if cache.is_available() else "unavailable")
