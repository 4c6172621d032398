"""Exception hierarchy for routedns."""

from routedns.core.models import RouteKind


class RouteDNSError(Exception):
    """Base class for routedns errors."""


class TransportError(RouteDNSError):
    """Listing a kind from the cluster failed; the whole pass is unusable."""

    def __init__(self, message: str, kind: RouteKind | None = None):
        super().__init__(message)
        self.kind = kind


class SelectorError(RouteDNSError, ValueError):
    """A selector expression could not be parsed."""


class DecodeError(RouteDNSError, ValueError):
    """A raw object does not have the shape of its kind."""
