"""Traefik endpoint source."""

import asyncio
import logging

from routedns.core.base import BaseRoutingObjectLister, BaseSource
from routedns.core.errors import TransportError
from routedns.core.models import DecodeFailure, Endpoint, KindListing, RouteKind, SourceConfig
from routedns.core.selector import Selector
from routedns.core.traefik.endpoints import endpoints_for_object

logger = logging.getLogger(__name__)


class TraefikSource(BaseSource):
    """
    Produces endpoints from IngressRoute, IngressRouteTCP and IngressRouteUDP
    objects.

    Kinds are listed concurrently; results are merged in fixed kind order
    (HTTP, TCP, UDP), then listing order, then per-object hostname order,
    so identical snapshots always give identical output.
    """

    def __init__(
        self,
        lister: BaseRoutingObjectLister,
        config: SourceConfig | None = None,
    ):
        self.lister = lister
        self.config = config or SourceConfig()
        # Invalid selectors fail here rather than on every pass
        self.selector = Selector.parse(self.config.selector)
        self.last_failures: list[DecodeFailure] = []

    async def _list(self, kind: RouteKind) -> KindListing:
        return await self.lister.list_objects(kind, self.config.namespace, self.selector)

    async def _list_all(self) -> list[KindListing]:
        tasks = [asyncio.create_task(self._list(kind)) for kind in self.config.ordered_kinds]
        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def endpoints(self) -> list[Endpoint]:
        """Compute current endpoints across all enabled kinds.

        Raises TransportError if any kind cannot be listed; no partial
        result is returned in that case.
        """
        if self.config.timeout:
            try:
                listings = await asyncio.wait_for(self._list_all(), self.config.timeout)
            except asyncio.TimeoutError as e:
                raise TransportError(
                    f"Listing routing objects exceeded {self.config.timeout}s"
                ) from e
        else:
            listings = await self._list_all()

        endpoints: list[Endpoint] = []
        failures: list[DecodeFailure] = []

        for listing in listings:
            failures.extend(listing.failures)
            for obj in listing.objects:
                endpoints.extend(
                    endpoints_for_object(
                        obj,
                        ignore_hostname_annotation=self.config.ignore_hostname_annotation,
                    )
                )

        self.last_failures = failures
        logger.info(
            f"Computed {len(endpoints)} endpoints from "
            f"{sum(len(listing.objects) for listing in listings)} routing objects"
            + (f" ({len(failures)} skipped)" if failures else "")
        )
        return endpoints


def create_source(
    config: SourceConfig | None = None,
    kubeconfig: str | None = None,
    context: str | None = None,
) -> TraefikSource:
    """Build a source backed by the cluster API."""
    from routedns.core.k8s.client import K8sRoutingObjectLister, load_kube_config

    config = config or SourceConfig()
    load_kube_config(kubeconfig, context)
    lister = K8sRoutingObjectLister(
        api_group=config.api_group,
        api_version=config.api_version,
        request_timeout=config.request_timeout,
    )
    return TraefikSource(lister, config)
