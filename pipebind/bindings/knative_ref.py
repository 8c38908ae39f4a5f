"""
Knative reference provider.

Resolves references to Knative resources (services, channels, brokers)
into ``knative:`` URIs.

URI shapes:
    knative:endpoint/<name>?apiVersion=...&kind=...
    knative:channel/<name>?apiVersion=...&kind=...
    knative:event[/<event-type>]?apiVersion=...&kind=Broker&name=<broker>

Broker sources:
    Properties other than the reserved keys become CloudEvents attribute
    filters carried by the knative trait, not by the URI:

        source=my-source      ->  filter "source=my-source"
        cloudEventsType=x     ->  filter "type=x"

    When no event type is known, ``filterEventType=false`` tells the runtime
    not to apply its default type filter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pipebind.errors import BackendUnavailableError
from pipebind.knative.apis import CamelServiceType, get_service_type, is_knative_reference
from pipebind.model import Binding, EndpointType, KnativeTrait, Traits

from .provider import ORDER_LAST, BindingProvider
from .uri import append_parameters, path_escape

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext

logger = logging.getLogger(__name__)

CLOUD_EVENTS_TYPE_PROPERTY = "cloudEventsType"

# Keys that never become broker filters.
_RESERVED_KEYS = frozenset({"name", "type", "apiVersion", "kind", CLOUD_EVENTS_TYPE_PROPERTY})


class KnativeRefBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "knative-ref"

    @property
    def order(self) -> int:
        return ORDER_LAST

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        ref = endpoint.ref
        if ref is None or not is_knative_reference(ref):
            return None

        if not ctx.client.is_api_installed(ref.api_version, ref.kind):
            raise BackendUnavailableError(
                f"integration referencing Knative endpoint {ref.name!r} that cannot run, "
                f"because Knative ({ref.api_version} {ref.kind}) is not installed on the cluster"
            )

        service_type = get_service_type(ref) or CamelServiceType.ENDPOINT

        props = endpoint.property_map()
        if not props.get("apiVersion"):
            props["apiVersion"] = ref.api_version
        if not props.get("kind"):
            props["kind"] = ref.kind

        is_source = endpoint_ctx.type == EndpointType.SOURCE
        filters: list[str] = []
        filter_event_type = True

        if service_type == CamelServiceType.EVENT:
            if not props.get("name"):
                props["name"] = ref.name

            if is_source:
                for key in sorted(props):
                    if key in _RESERVED_KEYS:
                        continue
                    filters.append(f"{key}={props.pop(key)}")
                if CLOUD_EVENTS_TYPE_PROPERTY in props:
                    filters.append(f"type={props[CLOUD_EVENTS_TYPE_PROPERTY]}")

            if "type" in props:
                event_type = props.pop("type")
                service_uri = f"knative:{service_type.value}/{event_type}"
            elif is_source and CLOUD_EVENTS_TYPE_PROPERTY in props:
                service_uri = f"knative:{service_type.value}/{props[CLOUD_EVENTS_TYPE_PROPERTY]}"
            else:
                filter_event_type = False
                service_uri = f"knative:{service_type.value}"
        else:
            service_uri = f"knative:{service_type.value}/{path_escape(ref.name)}"

        binding = Binding(uri=append_parameters(service_uri, props))

        if is_source and (filters or not filter_event_type):
            binding.traits = Traits(
                knative=KnativeTrait(filters=filters or None, filter_event_type=filter_event_type)
            )

        logger.debug(f"[knative-ref] Resolved {ref.kind} {ref.name} to {binding.uri}")
        return binding
