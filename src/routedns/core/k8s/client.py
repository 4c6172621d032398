"""Kubernetes client listing Traefik routing resources."""

import asyncio
import logging
from typing import Any

import urllib3.exceptions
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from routedns.core.base import BaseRoutingObjectLister
from routedns.core.errors import TransportError
from routedns.core.k8s.decode import decode_listing
from routedns.core.models import KindListing, RouteKind
from routedns.core.selector import Selector

logger = logging.getLogger(__name__)


def load_kube_config(kubeconfig: str | None = None, context: str | None = None) -> None:
    """Load cluster credentials, preferring in-cluster config when no file is given."""
    try:
        if kubeconfig:
            config.load_kube_config(config_file=kubeconfig, context=context)
            return
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config(context=context)
    except (config.ConfigException, OSError) as e:
        raise TransportError(f"Unable to load Kubernetes configuration: {e}") from e


class K8sRoutingObjectLister(BaseRoutingObjectLister):
    """
    Lists IngressRoute, IngressRouteTCP and IngressRouteUDP objects through
    the custom objects API.

    The selector is evaluated client side against annotations, so every
    object of the kind in scope is fetched.
    """

    def __init__(
        self,
        api_group: str = "traefik.containo.us",
        api_version: str = "v1alpha1",
        request_timeout: float | None = None,
        api_client: client.ApiClient | None = None,
    ):
        self.api_group = api_group
        self.api_version = api_version
        self.request_timeout = request_timeout
        self._api_client = api_client
        self._custom_objects: client.CustomObjectsApi | None = None

    @property
    def custom_objects(self) -> client.CustomObjectsApi:
        if not self._custom_objects:
            self._custom_objects = client.CustomObjectsApi(self._api_client)
        return self._custom_objects

    def _list_kwargs(self, kind: RouteKind) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "group": self.api_group,
            "version": self.api_version,
            "plural": kind.plural,
        }
        if self.request_timeout:
            kwargs["_request_timeout"] = self.request_timeout
        return kwargs

    async def _fetch(self, kind: RouteKind, namespace: str) -> dict[str, Any]:
        kwargs = self._list_kwargs(kind)
        if namespace:
            return await asyncio.to_thread(
                self.custom_objects.list_namespaced_custom_object,
                namespace=namespace,
                **kwargs,
            )
        return await asyncio.to_thread(
            self.custom_objects.list_cluster_custom_object,
            **kwargs,
        )

    async def list_objects(
        self,
        kind: RouteKind,
        namespace: str,
        selector: Selector,
    ) -> KindListing:
        scope = namespace or "all namespaces"
        try:
            result = await self._fetch(kind, namespace)
        except ApiException as e:
            raise TransportError(
                f"Failed to list {kind.kind_name} in {scope}: {e.status} {e.reason}",
                kind,
            ) from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            raise TransportError(f"Failed to list {kind.kind_name} in {scope}: {e}", kind) from e

        items = result.get("items") or []
        listing = decode_listing(kind, items, selector)
        logger.debug(
            f"Listed {len(items)} {kind.kind_name} in {scope}, "
            f"{len(listing.objects)} selected, {len(listing.failures)} undecodable"
        )
        return listing
