"""Health check API endpoints."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/live")
async def liveness():
    """Kubernetes liveness probe."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness():
    """Kubernetes readiness probe."""
    from routedns.api.main import state

    if state.source is None:
        return {"status": "not_ready", "reason": "source not initialized"}
    return {"status": "ready"}
