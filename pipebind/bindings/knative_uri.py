"""
Knative external sink provider.

When running with the Knative profile, an explicit ``http``/``https`` sink
is wrapped into a CloudEvents-producing ``knative:endpoint/sink``. The
target is not a cluster object, so the runtime receives a static service
descriptor through the knative trait instead of discovering it, and
SinkBinding wiring is turned off.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from pipebind.errors import MalformedEndpointError
from pipebind.knative.apis import CamelServiceType
from pipebind.knative.environment import (
    CamelEndpointKind,
    CamelEnvironment,
    CamelServiceDefinition,
)
from pipebind.model import Binding, EndpointType, KnativeTrait, TraitProfile, Traits

from .provider import ORDER_STANDARD, BindingProvider
from .uri import append_parameters

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext

SINK_SERVICE_NAME = "sink"


class KnativeURIBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "knative-uri"

    @property
    def order(self) -> int:
        return ORDER_STANDARD

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        if endpoint.uri is None:
            return None
        if ctx.profile != TraitProfile.KNATIVE:
            return None
        if endpoint_ctx.type == EndpointType.SOURCE:
            return None
        if not endpoint.uri.startswith(("http:", "https:")):
            return None

        try:
            httpx.URL(endpoint.uri)
        except httpx.InvalidURL as e:
            raise MalformedEndpointError(f"invalid sink URL {endpoint.uri!r}: {e}") from e

        env = CamelEnvironment()
        env.add(
            CamelServiceDefinition.build(
                SINK_SERVICE_NAME,
                CamelEndpointKind.SINK,
                CamelServiceType.ENDPOINT,
                endpoint.uri,
            )
        )

        return Binding(
            uri=append_parameters(
                f"knative:{CamelServiceType.ENDPOINT.value}/{SINK_SERVICE_NAME}",
                endpoint.property_map(),
            ),
            traits=Traits(
                knative=KnativeTrait(configuration=env.serialize(), sink_binding=False)
            ),
        )
