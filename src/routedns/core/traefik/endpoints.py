"""Endpoint synthesis for Traefik routing objects."""

import logging

from routedns.core.annotations import dedupe, resolve_annotations
from routedns.core.models import Endpoint, RecordType, RoutingObject
from routedns.core.traefik.rules import hostnames_from_routes

logger = logging.getLogger(__name__)

RESOURCE_LABEL = "resource"


def merge_hostnames(annotated: list[str], derived: list[str]) -> list[str]:
    """Annotation hosts first, then rule hosts, first occurrence wins."""
    return dedupe([*annotated, *derived])


def build_endpoints(
    hostnames: list[str],
    targets: list[str],
    ttl: int,
    resource: str,
) -> list[Endpoint]:
    """Emit one CNAME endpoint per hostname, all sharing targets and TTL."""
    if not hostnames or not targets:
        return []

    return [
        Endpoint(
            dns_name=host,
            record_type=RecordType.CNAME,
            targets=list(targets),
            record_ttl=ttl,
            labels={RESOURCE_LABEL: resource},
            provider_specific={},
        )
        for host in hostnames
    ]


def endpoints_for_object(
    obj: RoutingObject,
    ignore_hostname_annotation: bool = False,
) -> list[Endpoint]:
    """Compute the endpoints declared by a single routing object."""
    resolved = resolve_annotations(obj.annotations)

    if not resolved.targets:
        logger.debug(f"No target annotation on {obj.resource_label}, skipping")
        return []

    annotated = [] if ignore_hostname_annotation else resolved.hostnames
    derived = (
        hostnames_from_routes(obj.routes, obj.kind.host_functions)
        if obj.kind.has_routes
        else []
    )
    hostnames = merge_hostnames(annotated, derived)

    if not hostnames:
        logger.debug(f"No hostnames found for {obj.resource_label}")
        return []

    return build_endpoints(hostnames, resolved.targets, resolved.ttl, obj.resource_label)
