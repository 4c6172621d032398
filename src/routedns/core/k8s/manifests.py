"""Routing object listing over an in-memory manifest snapshot."""

import copy
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from routedns.core.base import BaseRoutingObjectLister
from routedns.core.k8s.decode import decode_listing
from routedns.core.models import KindListing, RouteKind
from routedns.core.selector import Selector

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


def _flatten(documents: Iterable[Any]) -> list[dict[str, Any]]:
    manifests: list[dict[str, Any]] = []
    for doc in documents:
        if doc is None:
            continue
        if not isinstance(doc, dict):
            logger.warning(f"Ignoring non-mapping document of type {type(doc).__name__}")
            continue
        kind = doc.get("kind")
        if isinstance(kind, str) and kind.endswith("List") and isinstance(doc.get("items"), list):
            manifests.extend(_flatten(doc["items"]))
        else:
            manifests.append(doc)
    return manifests


class ManifestRoutingObjectLister(BaseRoutingObjectLister):
    """
    Serves routing objects from manifests held in memory.

    Manifests without a namespace are placed in ``default`` as kubectl
    would do. Each listing works on a deep copy so later ``apply`` calls
    never alter a snapshot already handed out.
    """

    def __init__(self, manifests: Iterable[dict[str, Any]] | None = None):
        self._manifests: list[dict[str, Any]] = []
        for manifest in _flatten(manifests or []):
            self.apply(manifest)

    @classmethod
    def from_files(cls, paths: Iterable[str | Path]) -> "ManifestRoutingObjectLister":
        """Load multi-document YAML (or JSON) files."""
        documents: list[Any] = []
        for path in paths:
            with open(path, encoding="utf-8") as f:
                documents.extend(yaml.safe_load_all(f))
        return cls(documents)

    @staticmethod
    def _key(manifest: dict[str, Any]) -> tuple[Any, Any, Any]:
        metadata = manifest.get("metadata")
        if not isinstance(metadata, dict):
            return manifest.get("kind"), None, None
        return manifest.get("kind"), metadata.get("namespace"), metadata.get("name")

    def apply(self, manifest: dict[str, Any]) -> None:
        """Create or replace a manifest, keyed by kind, namespace and name."""
        manifest = copy.deepcopy(manifest)
        metadata = manifest.get("metadata")
        if isinstance(metadata, dict) and not metadata.get("namespace"):
            metadata["namespace"] = DEFAULT_NAMESPACE

        key = self._key(manifest)
        if key[2] is not None:
            for index, existing in enumerate(self._manifests):
                if self._key(existing) == key:
                    self._manifests[index] = manifest
                    return
        self._manifests.append(manifest)

    def __len__(self) -> int:
        return len(self._manifests)

    async def list_objects(
        self,
        kind: RouteKind,
        namespace: str,
        selector: Selector,
    ) -> KindListing:
        items = [
            copy.deepcopy(m)
            for m in self._manifests
            if m.get("kind") == kind.kind_name
            and (not namespace or self._key(m)[1] == namespace)
        ]
        return decode_listing(kind, items, selector)
