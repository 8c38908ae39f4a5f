"""
Binding Schema.

The resolved form of an Endpoint: a URI and/or an inline route step, plus
side-channel configuration the reconciler applies to the integration.

Reconciler contract:
    - ``traits`` are merged into the integration trait spec
    - ``application_properties`` are injected as runtime configuration
    - ``uri`` / ``step`` are wired into the generated route
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pipebind.errors import MalformedEndpointError


class KnativeTrait(BaseModel):
    """Partial override of the knative trait."""

    model_config = ConfigDict(populate_by_name=True)

    configuration: str | None = Field(
        default=None,
        description="Serialized Camel Knative environment",
    )
    filters: list[str] | None = Field(default=None, description="Broker filter expressions")
    filter_event_type: bool | None = Field(
        default=None,
        alias="filterEventType",
        description="Apply the default event type filter",
    )
    sink_binding: bool | None = Field(
        default=None,
        alias="sinkBinding",
        description="Wire the sink through a SinkBinding",
    )


class Traits(BaseModel):
    """Trait overrides produced by a binding."""

    knative: KnativeTrait | None = None

    def is_empty(self) -> bool:
        return self.knative is None

    def to_dict(self) -> dict[str, Any]:
        """Dump with wire names and without unset fields, ready for merging."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Binding(BaseModel):
    """
    Resolution output for one endpoint.

    Attributes:
        uri: Single addressable location (sources and sinks)
        step: Inline route fragment (actions, data-type adapters)
        traits: Trait overrides for the owning integration
        application_properties: Namespaced runtime properties
    """

    uri: str = Field(default="", description="Resolved Camel URI")
    step: dict[str, Any] | None = Field(default=None, description="Route DSL fragment")
    traits: Traits = Field(default_factory=Traits)
    application_properties: dict[str, str] = Field(default_factory=dict)

    def as_dsl_step(self) -> dict[str, Any]:
        """
        Get the route DSL step for this binding.

        Returns the explicit step if present, otherwise a ``to`` step
        targeting the URI.

        Raises:
            MalformedEndpointError: If the binding has neither step nor URI
        """
        if self.step is not None:
            return self.step
        if self.uri:
            return {"to": self.uri}
        raise MalformedEndpointError("no step or uri defined in binding")
