"""Endpoint API."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from routedns.core.errors import TransportError
from routedns.core.source import TraefikSource

router = APIRouter()


async def get_source() -> TraefikSource:
    from routedns.api.main import get_source as _get_source
    return _get_source()


@router.get("")
async def list_endpoints(source: TraefikSource = Depends(get_source)) -> list[dict[str, Any]]:
    """Current endpoints across IngressRoute, IngressRouteTCP and IngressRouteUDP."""
    try:
        endpoints = await source.endpoints()
    except TransportError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [e.to_dict() for e in endpoints]


@router.get("/failures")
async def list_failures(source: TraefikSource = Depends(get_source)):
    """Objects skipped during the last pass because they could not be decoded."""
    return [f.model_dump(mode="json") for f in source.last_failures]
