"""
Camel Knative environment.

The static service descriptor consumed by the Camel Knative component when
it cannot discover a target from the cluster (e.g. an external HTTP sink).
It is passed to the runtime through the knative trait ``configuration``.

Example serialized form:
    {"resources":[{"name":"sink","type":"endpoint","endpointKind":"sink",
                   "url":"https://my-domain"}]}
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .apis import CamelServiceType


class CamelEndpointKind(str, Enum):
    SINK = "sink"


class CamelServiceDefinition(BaseModel):
    """One addressable service known to the Camel Knative component."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    name: str
    service_type: CamelServiceType = Field(alias="type")
    endpoint_kind: CamelEndpointKind | None = Field(default=None, alias="endpointKind")
    url: str | None = None

    @classmethod
    def build(
        cls,
        name: str,
        endpoint_kind: CamelEndpointKind,
        service_type: CamelServiceType,
        url: str,
    ) -> CamelServiceDefinition:
        """Build a definition targeting a fully qualified URL, kept as written."""
        return cls(
            name=name,
            service_type=service_type,
            endpoint_kind=endpoint_kind,
            url=url,
        )


class CamelEnvironment(BaseModel):
    """Collection of service definitions, serialized as a single JSON blob."""

    services: list[CamelServiceDefinition] = Field(default_factory=list, alias="resources")

    model_config = ConfigDict(populate_by_name=True)

    def add(self, service: CamelServiceDefinition) -> None:
        self.services.append(service)

    def serialize(self) -> str:
        """Compact JSON with stable key order."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
