"""
Service reference provider.

Resolves references to in-cluster workloads reachable through a
ClusterIP Service into plain ``http://`` URIs:

    http://<name>.<namespace>.svc.cluster.local[:<port>][/<path>]

Claimed references:
    - core ``Service`` (apiVersion ``v1``)
    - ``Integration`` and ``Pipe`` (camel.apache.org), which expose a
      Service with the same name and namespace

The optional ``path`` property is appended to the address.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pipebind.errors import ResourceNotFoundError, UnsupportedServiceTypeError
from pipebind.model import Binding, ObjectReference

from .kamelet import CAMEL_GROUP
from .provider import ORDER_LAST, BindingProvider

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext

logger = logging.getLogger(__name__)

SERVICE_TYPE_CLUSTER_IP = "ClusterIP"

# (group, kind) pairs known to be backed by a Service of the same name.
SERVICE_REF_KINDS = frozenset(
    {
        ("", "Service"),
        (CAMEL_GROUP, "Integration"),
        (CAMEL_GROUP, "Pipe"),
    }
)


def is_service_reference(ref: ObjectReference) -> bool:
    return (ref.group, ref.kind) in SERVICE_REF_KINDS


class ServiceRefBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "service-ref"

    @property
    def order(self) -> int:
        # After Kamelet/Knative resolvers, before the generic catch-alls.
        return ORDER_LAST - 10

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        ref = endpoint.ref
        if ref is None or not is_service_reference(ref):
            return None

        namespace = ref.namespace or ctx.namespace
        service = ctx.client.get("v1", "Service", namespace, ref.name)
        if service is None:
            raise ResourceNotFoundError(
                f"could not load a Service with name {ref.name} in namespace {namespace}"
            )

        spec = service.get("spec") or {}
        if spec.get("type", SERVICE_TYPE_CLUSTER_IP) != SERVICE_TYPE_CLUSTER_IP:
            raise UnsupportedServiceTypeError(
                "operator only supports ClusterIP Service type, feel free to request this support"
            )

        uri = f"http://{ref.name}.{namespace}.{ctx.settings.cluster_domain}"
        ports = spec.get("ports") or []
        if ports and ports[0].get("port"):
            uri = f"{uri}:{ports[0]['port']}"

        path = endpoint.property_map().get("path")
        if path:
            if not path.startswith("/"):
                path = f"/{path}"
            uri = f"{uri}{path}"

        logger.debug(f"[service-ref] Resolved {ref.kind} {namespace}/{ref.name} to {uri}")
        return Binding(uri=uri)
