"""
Generic Camel URI provider.

Fallback for endpoints given as an explicit URI: properties are appended
as query parameters. Registered last so that URI-aware providers (such as
the Knative sink wrapper) get the first chance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipebind.model import Binding

from .provider import ORDER_LAST, BindingProvider
from .uri import append_parameters

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext


class CamelURIBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "camel-uri"

    @property
    def order(self) -> int:
        return ORDER_LAST

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        if endpoint.uri is None:
            return None
        return Binding(uri=append_parameters(endpoint.uri, endpoint.property_map()))
