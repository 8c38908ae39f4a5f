"""
Endpoint Schema.

Declarative description of a connection point of a Pipe, as stored in the
Pipe custom resource (``spec.source``, ``spec.sink``, ``spec.steps[]``).

An endpoint is either:
    - a reference to a cluster resource (``ref``), or
    - an explicit Camel URI (``uri``),
plus an opaque property bag and optional data-type hints.

Usage:
    endpoint = Endpoint.model_validate({
        "ref": {
            "kind": "Kamelet",
            "apiVersion": "camel.apache.org/v1",
            "name": "timer-source",
        },
        "properties": {"message": "hello", "period": 1000},
        "dataTypes": {"out": {"format": "application-json"}},
    })

    endpoint.property_map()
    # {"message": "hello", "period": "1000"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pipebind.errors import MalformedEndpointError

DEFAULT_DATA_TYPE_SCHEME = "camel"


class EndpointType(str, Enum):
    """Role an endpoint plays in a Pipe."""

    SOURCE = "source"
    SINK = "sink"
    ACTION = "action"


class TypeSlot(str, Enum):
    """Boundary of an endpoint where a payload conversion may apply."""

    IN = "in"
    OUT = "out"
    ERROR = "error"


class TraitProfile(str, Enum):
    """Deployment profile of the integration owning the endpoints."""

    KNATIVE = "knative"
    KUBERNETES = "kubernetes"
    OPENSHIFT = "openshift"


def parse_group_version(api_version: str) -> tuple[str, str]:
    """
    Split an apiVersion into (group, version).

    ``"v1"`` belongs to the core group, ``"camel.apache.org/v1"`` to
    ``camel.apache.org``.

    Raises:
        MalformedEndpointError: If the string has more than one ``/``
    """
    if not api_version or api_version == "/":
        return "", ""
    slashes = api_version.count("/")
    if slashes == 0:
        return "", api_version
    if slashes == 1:
        group, version = api_version.split("/", 1)
        return group, version
    raise MalformedEndpointError(f"unexpected GroupVersion string: {api_version}")


def _stringify(value: Any) -> str:
    # Render JSON values the way the Camel runtime reads them
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


class ObjectReference(BaseModel):
    """Reference to a cluster resource (subset of a Kubernetes ObjectReference)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(default="", description="Resource kind")
    api_version: str = Field(default="", alias="apiVersion", description="group/version")
    namespace: str = Field(default="", description="Namespace, empty for the binding namespace")
    name: str = Field(default="", description="Resource name")

    @property
    def group(self) -> str:
        return parse_group_version(self.api_version)[0]

    @property
    def version(self) -> str:
        return parse_group_version(self.api_version)[1]

    def matches(self, group: str, kind: str) -> bool:
        """Check if this reference points to the given group and kind."""
        return self.kind == kind and self.group == group


class DataTypeReference(BaseModel):
    """Payload format required at one boundary of an endpoint."""

    model_config = ConfigDict(frozen=True)

    format: str = Field(default="", description="Data type format, optionally 'scheme:format'")
    scheme: str = Field(default="", description="Data type scheme (default camel)")

    def resolve(self) -> tuple[str, str]:
        """
        Return the effective (scheme, format) pair.

        An explicit scheme wins. Otherwise a ``scheme:format`` value is split,
        and the default scheme applies to anything else.
        """
        if self.scheme:
            return self.scheme, self.format
        if ":" in self.format:
            scheme, fmt = self.format.split(":", 1)
            return scheme, fmt
        return DEFAULT_DATA_TYPE_SCHEME, self.format


class Endpoint(BaseModel):
    """
    Immutable endpoint definition.

    Exactly one of ``ref`` and ``uri`` must be set; this is enforced by the
    validation gate rather than at parse time, so that a malformed endpoint
    is reported as a resolution error with the rest of the Pipe context.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: ObjectReference | None = Field(default=None, description="Cluster resource reference")
    uri: str | None = Field(default=None, description="Explicit Camel URI")
    properties: dict[str, Any] | None = Field(default=None, description="Endpoint properties")
    data_types: dict[TypeSlot, DataTypeReference] | None = Field(
        default=None,
        alias="dataTypes",
        description="Data types per slot",
    )

    def property_map(self) -> dict[str, str]:
        """
        Get the properties as a fresh string map.

        Resolvers consume keys from the returned dict, so every call
        returns a new copy.
        """
        if not self.properties:
            return {}
        return {key: _stringify(value) for key, value in self.properties.items()}

    def data_type(self, slot: TypeSlot) -> DataTypeReference | None:
        if not self.data_types:
            return None
        return self.data_types.get(slot)


@dataclass(frozen=True, slots=True)
class EndpointContext:
    """
    Resolution-time role metadata for an endpoint.

    Attributes:
        type: Role of the endpoint in the Pipe
        position: Ordinal of the endpoint among its siblings (steps)
    """

    type: EndpointType | None = None
    position: int | None = None

    def __post_init__(self) -> None:
        if self.type is not None and not isinstance(self.type, EndpointType):
            object.__setattr__(self, "type", EndpointType(self.type))

    def generate_id(self) -> str:
        """
        Generate a stable identity such as ``source`` or ``action-2``.

        Used when the endpoint does not declare its own ``id`` property.
        """
        base = self.type.value if self.type is not None else ""
        if self.position is not None:
            return f"{base}-{self.position}"
        return base
