"""
Kubernetes cluster client.

ClusterClient implementation backed by the official ``kubernetes`` Python
client, using the dynamic client so that any kind (core Services, Knative
resources, Strimzi custom resources) can be read without generated models.

Error mapping:
    - Unknown API (kind not served)  -> BackendUnavailableError
    - Object not found               -> None from ``get``
    - Anything else (network, 403, throttling) propagates unchanged, so the
      reconciler's retry policy can act on it.
"""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import config as k8s_config
from kubernetes.client import ApiClient
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import NotFoundError, ResourceNotFoundError

from pipebind.errors import BackendUnavailableError

logger = logging.getLogger(__name__)


class KubernetesClusterClient:
    """
    Read-only cluster client over a DynamicClient.

    Example:
        client = KubernetesClusterClient.from_config()
        svc = client.get("v1", "Service", "default", "my-svc")
    """

    def __init__(self, dynamic_client: DynamicClient):
        self._client = dynamic_client

    @classmethod
    def from_config(cls, *, context: str | None = None) -> KubernetesClusterClient:
        """
        Build a client from the ambient configuration.

        Uses the in-cluster service account when running in a pod,
        the local kubeconfig otherwise.
        """
        try:
            k8s_config.load_incluster_config()
            logger.info("[cluster] Using in-cluster configuration")
        except k8s_config.ConfigException:
            k8s_config.load_kube_config(context=context)
            logger.info(f"[cluster] Using kubeconfig (context={context or 'current'})")
        return cls(DynamicClient(ApiClient()))

    def _resource(self, api_version: str, kind: str) -> Any:
        try:
            return self._client.resources.get(api_version=api_version, kind=kind)
        except ResourceNotFoundError as e:
            raise BackendUnavailableError(
                f"API {api_version} does not serve kind {kind} on this cluster"
            ) from e

    def get(
        self,
        api_version: str,
        kind: str,
        namespace: str,
        name: str,
    ) -> dict[str, Any] | None:
        resource = self._resource(api_version, kind)
        try:
            obj = resource.get(name=name, namespace=namespace)
        except NotFoundError:
            logger.debug(f"[cluster] {kind} {namespace}/{name} not found")
            return None
        return obj.to_dict()

    def list(self, api_version: str, kind: str, namespace: str) -> list[dict[str, Any]]:
        resource = self._resource(api_version, kind)
        result = resource.get(namespace=namespace)
        return result.to_dict().get("items") or []

    def is_api_installed(self, api_version: str, kind: str) -> bool:
        try:
            self._client.resources.get(api_version=api_version, kind=kind)
        except ResourceNotFoundError:
            logger.info(f"[cluster] API {api_version} kind {kind} is not installed")
            return False
        return True
