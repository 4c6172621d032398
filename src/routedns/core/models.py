"""Core data models for routedns."""

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RouteKind(str, Enum):
    """Traefik routing resource kinds."""

    HTTP = "http"
    TCP = "tcp"
    UDP = "udp"

    @property
    def kind_name(self) -> str:
        """Kubernetes ``kind`` of the custom resource."""
        return {
            RouteKind.HTTP: "IngressRoute",
            RouteKind.TCP: "IngressRouteTCP",
            RouteKind.UDP: "IngressRouteUDP",
        }[self]

    @property
    def plural(self) -> str:
        return self.kind_name.lower() + "s"

    @property
    def resource_prefix(self) -> str:
        return self.kind_name.lower()

    @property
    def host_functions(self) -> tuple[str, ...]:
        """Match functions whose arguments are hostnames."""
        if self is RouteKind.HTTP:
            return ("Host", "HostHeader")
        if self is RouteKind.TCP:
            return ("HostSNI",)
        return ()

    @property
    def has_routes(self) -> bool:
        return self is not RouteKind.UDP


# Fixed output order across kinds
KIND_ORDER: tuple[RouteKind, ...] = (RouteKind.HTTP, RouteKind.TCP, RouteKind.UDP)


class RecordType(str, Enum):
    """DNS record types emitted by the source."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"


# ============================================================================
# Routing Objects
# ============================================================================


class Route(BaseModel):
    """A single route entry of a routing object."""

    model_config = ConfigDict(frozen=True)

    match: str = ""


class RoutingObject(BaseModel):
    """Decoded snapshot of one IngressRoute, IngressRouteTCP or IngressRouteUDP."""

    model_config = ConfigDict(frozen=True)

    kind: RouteKind
    namespace: str
    name: str
    api_version: str = ""
    annotations: dict[str, str] = Field(default_factory=dict)
    routes: tuple[Route, ...] = ()

    @property
    def resource_label(self) -> str:
        """Stable ``kind/namespace/name`` identity attached to endpoints."""
        return f"{self.kind.resource_prefix}/{self.namespace}/{self.name}"


class DecodeFailure(BaseModel):
    """An object that could not be decoded during a listing."""

    kind: RouteKind
    namespace: str | None = None
    name: str | None = None
    reason: str


class KindListing(BaseModel):
    """Point-in-time snapshot of all matching objects of one kind."""

    kind: RouteKind
    objects: list[RoutingObject] = Field(default_factory=list)
    failures: list[DecodeFailure] = Field(default_factory=list)


# ============================================================================
# Endpoints
# ============================================================================


class ResolvedAnnotations(BaseModel):
    """DNS intent declared through annotations."""

    hostnames: list[str] = Field(default_factory=list)
    targets: list[str] = Field(default_factory=list)
    ttl: int = Field(default=0, description="Record TTL in seconds, 0 means unset")


class Endpoint(BaseModel):
    """A candidate DNS record."""

    model_config = ConfigDict(populate_by_name=True)

    dns_name: str = Field(..., alias="dnsName")
    record_type: RecordType = Field(default=RecordType.CNAME, alias="recordType")
    targets: list[str] = Field(default_factory=list)
    record_ttl: int = Field(default=0, alias="recordTTL")
    labels: dict[str, str] = Field(default_factory=dict)
    provider_specific: dict[str, str] = Field(default_factory=dict, alias="providerSpecific")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# Configuration
# ============================================================================


ENV_PREFIX = "ROUTEDNS_"


class SourceConfig(BaseModel):
    """Configuration of a Traefik endpoint source."""

    namespace: str = Field(default="", description="Namespace scope, empty for all namespaces")
    selector: str = Field(default="", description="Selector evaluated against annotations")
    api_group: str = Field(default="traefik.containo.us")
    api_version: str = Field(default="v1alpha1")
    enabled_kinds: list[RouteKind] = Field(default_factory=lambda: list(KIND_ORDER))
    ignore_hostname_annotation: bool = False
    request_timeout: float | None = Field(
        default=None, gt=0, description="Per-request timeout for the cluster API"
    )
    timeout: float | None = Field(
        default=None, gt=0, description="Deadline for a whole endpoints pass"
    )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "SourceConfig":
        """Build a config from ``ROUTEDNS_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for field_name in ("namespace", "selector", "api_group", "api_version"):
            key = ENV_PREFIX + field_name.upper()
            if key in env:
                values[field_name] = env[key]

        kinds = env.get(ENV_PREFIX + "KINDS")
        if kinds:
            values["enabled_kinds"] = [k.strip().lower() for k in kinds.split(",") if k.strip()]

        ignore = env.get(ENV_PREFIX + "IGNORE_HOSTNAME_ANNOTATION")
        if ignore is not None:
            values["ignore_hostname_annotation"] = ignore.strip().lower() in ("1", "true", "yes")

        for field_name in ("request_timeout", "timeout"):
            raw = env.get(ENV_PREFIX + field_name.upper())
            if raw:
                values[field_name] = float(raw)

        return cls(**values)

    @property
    def ordered_kinds(self) -> list[RouteKind]:
        """Enabled kinds in output order, without duplicates."""
        return [k for k in KIND_ORDER if k in self.enabled_kinds]
