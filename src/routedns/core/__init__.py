"""Core library: routing objects to DNS endpoints."""

from routedns.core.errors import DecodeError, RouteDNSError, SelectorError, TransportError
from routedns.core.models import (
    DecodeFailure,
    Endpoint,
    KindListing,
    RecordType,
    ResolvedAnnotations,
    Route,
    RouteKind,
    RoutingObject,
    SourceConfig,
)
from routedns.core.source import TraefikSource, create_source

__all__ = [
    "DecodeError",
    "DecodeFailure",
    "Endpoint",
    "KindListing",
    "RecordType",
    "ResolvedAnnotations",
    "Route",
    "RouteDNSError",
    "RouteKind",
    "RoutingObject",
    "SelectorError",
    "SourceConfig",
    "TraefikSource",
    "TransportError",
    "create_source",
]
