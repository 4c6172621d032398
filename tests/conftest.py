"""Pytest configuration and fixtures."""

from typing import Any, AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from routedns.core.k8s.manifests import ManifestRoutingObjectLister
from routedns.core.models import RouteKind, SourceConfig
from routedns.core.source import TraefikSource

TRAEFIK_NAMESPACE = "traefik"
TARGET = "target.domain.tld"
INGRESS_CLASS_SELECTOR = "kubernetes.io/ingress.class=traefik"

HOSTNAME_KEY = "external-dns.alpha.kubernetes.io/hostname"
TARGET_KEY = "external-dns.alpha.kubernetes.io/target"
TTL_KEY = "external-dns.alpha.kubernetes.io/ttl"


def traefik_manifest(
    kind: RouteKind,
    name: str,
    hostname: str | None = None,
    matches: list[str] | None = None,
    target: str | None = TARGET,
    namespace: str = TRAEFIK_NAMESPACE,
    extra_annotations: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build a raw Traefik routing manifest."""
    annotations = {"kubernetes.io/ingress.class": "traefik"}
    if hostname is not None:
        annotations[HOSTNAME_KEY] = hostname
    if target is not None:
        annotations[TARGET_KEY] = target
    annotations.update(extra_annotations or {})

    manifest: dict[str, Any] = {
        "apiVersion": "traefik.containo.us/v1alpha1",
        "kind": kind.kind_name,
        "metadata": {
            "name": name,
            "namespace": namespace,
            "annotations": annotations,
        },
    }
    if matches is not None:
        manifest["spec"] = {
            "routes": [{"match": m, "kind": "Rule"} for m in matches],
        }
    return manifest


@pytest.fixture
def make_manifest() -> Callable[..., dict[str, Any]]:
    """Factory for raw routing manifests."""
    return traefik_manifest


@pytest.fixture
def source_config() -> SourceConfig:
    """Config scoped like a typical Traefik deployment."""
    return SourceConfig(namespace=TRAEFIK_NAMESPACE, selector=INGRESS_CLASS_SELECTOR)


@pytest.fixture
def make_source(source_config: SourceConfig) -> Callable[..., TraefikSource]:
    """Factory for a source over an in-memory snapshot."""

    def _make(*manifests: dict[str, Any], config: SourceConfig | None = None) -> TraefikSource:
        lister = ManifestRoutingObjectLister(list(manifests))
        return TraefikSource(lister, config or source_config)

    return _make


@pytest.fixture
async def api_client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for API testing."""
    from routedns.api.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
