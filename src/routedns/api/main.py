"""FastAPI application exposing routedns endpoints."""

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException

from routedns import __version__
from routedns.api.routers import endpoints, health
from routedns.core.errors import RouteDNSError
from routedns.core.k8s.manifests import ManifestRoutingObjectLister
from routedns.core.models import ENV_PREFIX, SourceConfig
from routedns.core.source import TraefikSource, create_source

logger = logging.getLogger(__name__)

MANIFESTS_ENV = ENV_PREFIX + "MANIFESTS"


# Shared state
class AppState:
    source: TraefikSource | None = None


state = AppState()


def build_source_from_env() -> TraefikSource:
    """Create the source described by ``ROUTEDNS_*`` variables.

    ``ROUTEDNS_MANIFESTS`` (comma separated paths) serves manifest files
    instead of a cluster.
    """
    config = SourceConfig.from_env()
    manifests = os.environ.get(MANIFESTS_ENV)
    if manifests:
        paths = [p.strip() for p in manifests.split(",") if p.strip()]
        return TraefikSource(ManifestRoutingObjectLister.from_files(paths), config)
    return create_source(config)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    try:
        state.source = build_source_from_env()
    except (RouteDNSError, OSError, ValueError) as e:
        logger.error(f"Source initialization failed: {e}")
        state.source = None

    yield

    # Shutdown
    state.source = None


# Create FastAPI app
app = FastAPI(
    title="routedns API",
    description="DNS endpoints derived from Traefik routing resources",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Include routers
app.include_router(endpoints.router, prefix="/api/v1/endpoints", tags=["Endpoints"])
app.include_router(health.router, prefix="/api/v1/health", tags=["Health"])


@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "routedns API",
        "version": __version__,
        "docs": "/docs",
    }


def get_source() -> TraefikSource:
    """Dependency to get the endpoint source."""
    if not state.source:
        raise HTTPException(status_code=503, detail="Source not initialized")
    return state.source


def run():
    """Run the API server."""
    uvicorn.run(
        "routedns.api.main:app",
        host=os.environ.get(ENV_PREFIX + "HOST", "0.0.0.0"),
        port=int(os.environ.get(ENV_PREFIX + "PORT", "8080")),
    )


if __name__ == "__main__":
    run()
