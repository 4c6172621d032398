"""Abstract base classes defining source interfaces."""

from abc import ABC, abstractmethod

from routedns.core.models import Endpoint, KindListing, RouteKind
from routedns.core.selector import Selector


class BaseRoutingObjectLister(ABC):
    """Lists routing objects of one kind from a point-in-time snapshot."""

    @abstractmethod
    async def list_objects(
        self,
        kind: RouteKind,
        namespace: str,
        selector: Selector,
    ) -> KindListing:
        """List objects of ``kind`` in ``namespace`` (empty for all) matching ``selector``.

        Objects that fail to decode are reported in ``KindListing.failures``.
        Raises TransportError when the listing itself fails.
        """
        ...


class BaseSource(ABC):
    """Produces the current set of endpoints."""

    @abstractmethod
    async def endpoints(self) -> list[Endpoint]:
        """Compute current endpoints."""
        ...
