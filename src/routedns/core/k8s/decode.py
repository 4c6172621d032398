"""Decoding of raw Kubernetes objects into routing objects."""

import logging
from typing import Any, Iterable

from routedns.core.errors import DecodeError
from routedns.core.models import DecodeFailure, KindListing, Route, RouteKind, RoutingObject
from routedns.core.selector import Selector

logger = logging.getLogger(__name__)


def _string_map(value: Any, what: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"{what} must be a mapping, got {type(value).__name__}")
    for k, v in value.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise DecodeError(f"{what} must map strings to strings (key {k!r})")
    return dict(value)


def _decode_routes(spec: Any) -> tuple[Route, ...]:
    if spec is None:
        return ()
    if not isinstance(spec, dict):
        raise DecodeError("spec must be a mapping")

    raw_routes = spec.get("routes")
    if raw_routes is None:
        return ()
    if not isinstance(raw_routes, list):
        raise DecodeError("spec.routes must be a list")

    routes = []
    for index, raw in enumerate(raw_routes):
        if not isinstance(raw, dict):
            raise DecodeError(f"spec.routes[{index}] must be a mapping")
        match = raw.get("match", "")
        if match is None:
            match = ""
        if not isinstance(match, str):
            raise DecodeError(f"spec.routes[{index}].match must be a string")
        routes.append(Route(match=match))
    return tuple(routes)


def decode_object(kind: RouteKind, raw: Any) -> RoutingObject:
    """Decode one raw object of ``kind``.

    Raises DecodeError when the object does not have the expected shape.
    """
    if not isinstance(raw, dict):
        raise DecodeError(f"object must be a mapping, got {type(raw).__name__}")

    raw_kind = raw.get("kind")
    if raw_kind is not None and raw_kind != kind.kind_name:
        raise DecodeError(f"expected kind {kind.kind_name}, got {raw_kind!r}")

    metadata = raw.get("metadata")
    if not isinstance(metadata, dict):
        raise DecodeError("metadata is missing")

    name = metadata.get("name")
    if not isinstance(name, str) or not name:
        raise DecodeError("metadata.name is missing")

    namespace = metadata.get("namespace")
    if not isinstance(namespace, str) or not namespace:
        raise DecodeError("metadata.namespace is missing")

    api_version = raw.get("apiVersion") or ""
    if not isinstance(api_version, str):
        raise DecodeError("apiVersion must be a string")

    annotations = _string_map(metadata.get("annotations"), "metadata.annotations")
    # UDP routes carry services only, never match expressions
    routes = _decode_routes(raw.get("spec")) if kind.has_routes else ()

    return RoutingObject(
        kind=kind,
        namespace=namespace,
        name=name,
        api_version=api_version,
        annotations=annotations,
        routes=routes,
    )


def _identity(raw: Any) -> tuple[str | None, str | None]:
    metadata = raw.get("metadata") if isinstance(raw, dict) else None
    if not isinstance(metadata, dict):
        return None, None
    namespace, name = metadata.get("namespace"), metadata.get("name")
    return (
        namespace if isinstance(namespace, str) else None,
        name if isinstance(name, str) else None,
    )


def decode_listing(kind: RouteKind, items: Iterable[Any], selector: Selector) -> KindListing:
    """Decode raw items one by one, keeping failures per object."""
    listing = KindListing(kind=kind)

    for raw in items:
        try:
            obj = decode_object(kind, raw)
        except DecodeError as e:
            namespace, name = _identity(raw)
            logger.warning(f"Skipping {kind.kind_name} {namespace}/{name}: {e}")
            listing.failures.append(
                DecodeFailure(kind=kind, namespace=namespace, name=name, reason=str(e))
            )
            continue

        if selector.matches(obj.annotations):
            listing.objects.append(obj)

    return listing
