"""
In-memory cluster client.

Holds plain manifests in a dict. Used by the test-suite and by offline
tooling.

Objects are keyed by API group rather than by full apiVersion: as on a real
API server, the same object is visible through every served version.

Usage:
    client = InMemoryClusterClient([
        {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {"name": "my-svc", "namespace": "default"},
            "spec": {"type": "ClusterIP"},
        },
    ])
    client.get("v1", "Service", "default", "my-svc")
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from pipebind.model.endpoint import parse_group_version


class InMemoryClusterClient:
    """
    Cluster client over a fixed set of manifests.

    Every kind of a stored object is considered installed. Additional APIs
    (with no objects) can be declared with ``install``.

    Attributes:
        calls: Log of (operation, kind, namespace, name) tuples, in order
    """

    def __init__(self, objects: Iterable[dict[str, Any]] = ()):
        self._objects: dict[tuple[str, str, str, str], dict[str, Any]] = {}
        self._installed: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, str, str, str]] = []
        for obj in objects:
            self.add(obj)

    def add(self, obj: dict[str, Any]) -> None:
        """Store (or replace) a manifest."""
        metadata = obj.get("metadata") or {}
        group, _ = parse_group_version(obj.get("apiVersion", ""))
        key = (group, obj["kind"], metadata.get("namespace", ""), metadata["name"])
        self._objects[key] = copy.deepcopy(obj)
        self.install(obj.get("apiVersion", ""), obj["kind"])

    def install(self, api_version: str, kind: str) -> None:
        """Declare an API as served by the fake cluster."""
        self._installed.add((api_version, kind))

    def get(
        self,
        api_version: str,
        kind: str,
        namespace: str,
        name: str,
    ) -> dict[str, Any] | None:
        self.calls.append(("get", kind, namespace, name))
        group, _ = parse_group_version(api_version)
        obj = self._objects.get((group, kind, namespace, name))
        return copy.deepcopy(obj) if obj is not None else None

    def list(self, api_version: str, kind: str, namespace: str) -> list[dict[str, Any]]:
        self.calls.append(("list", kind, namespace, ""))
        group, _ = parse_group_version(api_version)
        items = []
        for (obj_group, obj_kind, obj_ns, _), obj in sorted(self._objects.items()):
            if (obj_group, obj_kind, obj_ns) != (group, kind, namespace):
                continue
            items.append(copy.deepcopy(obj))
        return items

    def is_api_installed(self, api_version: str, kind: str) -> bool:
        self.calls.append(("discover", kind, "", ""))
        return (api_version, kind) in self._installed

    def __len__(self) -> int:
        return len(self._objects)
