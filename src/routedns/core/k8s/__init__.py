"""Kubernetes integration for routedns."""

from routedns.core.k8s.client import K8sRoutingObjectLister
from routedns.core.k8s.manifests import ManifestRoutingObjectLister

__all__ = ["K8sRoutingObjectLister", "ManifestRoutingObjectLister"]
