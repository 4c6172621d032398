"""Traefik rule parsing and endpoint synthesis."""

from routedns.core.traefik.endpoints import endpoints_for_object
from routedns.core.traefik.rules import hostnames_from_routes, parse_hostnames

__all__ = ["endpoints_for_object", "hostnames_from_routes", "parse_hostnames"]
