"""
Cluster Client Protocol.

The narrow, read-only view of the Kubernetes API that resolvers need.

Design Principle:
    Protocols define WHAT, implementations define HOW.
    Resolvers never import the kubernetes library directly; they receive a
    ClusterClient through the BindingContext.

Implementations:
    - KubernetesClusterClient: Dynamic client over a live cluster
    - InMemoryClusterClient: Plain manifests held in memory

Objects are exchanged as plain manifest dicts (``metadata``, ``spec``,
``status``), the same shape ``kubectl get -o json`` returns.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClusterClient(Protocol):
    """Protocol for read-only cluster access."""

    def get(
        self,
        api_version: str,
        kind: str,
        namespace: str,
        name: str,
    ) -> dict[str, Any] | None:
        """
        Fetch one object.

        Returns:
            The object manifest, or None if it does not exist
        """
        ...

    def list(self, api_version: str, kind: str, namespace: str) -> list[dict[str, Any]]:
        """List objects of a kind in a namespace."""
        ...

    def is_api_installed(self, api_version: str, kind: str) -> bool:
        """Check whether the cluster serves the given kind at the given apiVersion."""
        ...


def object_labels(obj: dict[str, Any]) -> dict[str, str]:
    """Get the labels of a manifest (never None)."""
    return (obj.get("metadata") or {}).get("labels") or {}

