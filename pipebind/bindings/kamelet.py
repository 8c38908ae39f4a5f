"""
Kamelet binding provider.

Resolves references to Kamelets (reusable, parameterized connector
templates) into ``kamelet:`` URIs or inline route steps.

Instance isolation:
    Every property of the endpoint is published as an application property
    namespaced by template and instance id:

        camel.kamelet.<kamelet>.<id>.<key> = <value>

    The id is the endpoint's ``id`` property if present, otherwise one is
    generated from the endpoint role and position (``source``, ``sink``,
    ``action-2``). Using the same Kamelet twice in a Pipe with different ids
    gives two independently configured instances.

Data types:
    A declared ``in`` / ``out`` data type adds an adapter step running the
    data-type Kamelet, named ``<adapter>/<id>-<slot>``, configured with
    ``<id>-<slot>.scheme`` and ``<id>-<slot>.format`` properties.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pipebind.model import Binding, EndpointType, ObjectReference, TypeSlot

from .provider import ORDER_STANDARD, BindingProvider
from .uri import path_escape

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext

logger = logging.getLogger(__name__)

CAMEL_GROUP = "camel.apache.org"
KAMELET_KIND = "Kamelet"

KAMELET_ID_PROPERTY = "id"
KAMELET_VERSION_PROPERTY = "kameletVersion"
KAMELET_NAMESPACE_PROPERTY = "kameletNamespace"
KAMELET_PROPERTY_PREFIX = "camel.kamelet"

# Annotation on the integration overriding the data-type adapter Kamelet.
KAMELET_DATA_TYPE_ANNOTATION = "camel.apache.org/kamelet.data.type"


def is_kamelet_reference(ref: ObjectReference) -> bool:
    return ref.matches(CAMEL_GROUP, KAMELET_KIND)


def kamelet_querystring(name: str, version: str = "", namespace: str = "") -> str:
    """Attach the optional version and namespace selectors to a Kamelet path."""
    params = []
    if version:
        params.append(f"{KAMELET_VERSION_PROPERTY}={version}")
    if namespace:
        params.append(f"{KAMELET_NAMESPACE_PROPERTY}={namespace}")
    if not params:
        return name
    return f"{name}?{'&'.join(params)}"


class KameletBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "kamelet"

    @property
    def order(self) -> int:
        return ORDER_STANDARD

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        ref = endpoint.ref
        if ref is None or not is_kamelet_reference(ref):
            return None

        kamelet_name = path_escape(ref.name)
        props = endpoint.property_map()

        instance_id = props.pop(KAMELET_ID_PROPERTY, None) or endpoint_ctx.generate_id()
        version = props.pop(KAMELET_VERSION_PROPERTY, "")

        namespace = ""
        if ref.namespace and ref.namespace != ctx.namespace:
            namespace = ref.namespace

        translated = kamelet_querystring(
            f"{kamelet_name}/{path_escape(instance_id)}", version, namespace
        )

        application_properties = {
            f"{KAMELET_PROPERTY_PREFIX}.{kamelet_name}.{instance_id}.{key}": value
            for key, value in props.items()
        }

        adapter = ctx.metadata.get(KAMELET_DATA_TYPE_ANNOTATION) or ctx.settings.data_type_kamelet

        def data_type_step(slot: TypeSlot) -> dict[str, Any] | None:
            step, step_props = self.data_type_step(endpoint, instance_id, slot, adapter)
            application_properties.update(step_props)
            return step

        step: dict[str, Any] | None = None
        uri = ""

        if endpoint_ctx.type == EndpointType.ACTION:
            steps = []
            in_step = data_type_step(TypeSlot.IN)
            if in_step is not None:
                steps.append(in_step)
            steps.append({"kamelet": {"name": translated}})
            out_step = data_type_step(TypeSlot.OUT)
            if out_step is not None:
                steps.append(out_step)

            if len(steps) > 1:
                step = {"pipeline": {"id": f"{instance_id}-pipeline", "steps": steps}}
            else:
                step = steps[0]
        elif endpoint_ctx.type == EndpointType.SOURCE:
            step = data_type_step(TypeSlot.OUT)
            uri = f"kamelet:{translated}"
        elif endpoint_ctx.type == EndpointType.SINK:
            step = data_type_step(TypeSlot.IN)
            uri = f"kamelet:{translated}"
        else:
            uri = f"kamelet:{translated}"

        logger.debug(
            f"[kamelet] Resolved {ref.name} as instance {instance_id} "
            f"({len(application_properties)} properties)"
        )
        return Binding(uri=uri, step=step, application_properties=application_properties)

    def data_type_step(
        self,
        endpoint: Endpoint,
        instance_id: str,
        slot: TypeSlot,
        adapter: str,
    ) -> tuple[dict[str, Any] | None, dict[str, str]]:
        """
        Build the data-type adapter step for one slot.

        Returns:
            (step, properties), or (None, {}) if the slot declares no data type
        """
        data_type = endpoint.data_type(slot)
        if data_type is None:
            return None, {}

        scheme, fmt = data_type.resolve()
        slot_id = f"{instance_id}-{slot.value}"
        props = {
            f"{KAMELET_PROPERTY_PREFIX}.{adapter}.{slot_id}.scheme": scheme,
            f"{KAMELET_PROPERTY_PREFIX}.{adapter}.{slot_id}.format": fmt,
        }
        step = {"kamelet": {"name": f"{adapter}/{path_escape(instance_id)}-{slot.value}"}}
        return step, props
