"""
Knative support: kind tables and the Camel Knative service descriptor.
"""

from .apis import (
    KNATIVE_GROUPS,
    KNOWN_BROKER_KINDS,
    KNOWN_CHANNEL_KINDS,
    KNOWN_ENDPOINT_KINDS,
    CamelServiceType,
    GroupVersionKind,
    get_service_type,
    is_knative_reference,
)
from .environment import CamelEndpointKind, CamelEnvironment, CamelServiceDefinition

__all__ = [
    "KNATIVE_GROUPS",
    "KNOWN_BROKER_KINDS",
    "KNOWN_CHANNEL_KINDS",
    "KNOWN_ENDPOINT_KINDS",
    "CamelEndpointKind",
    "CamelEnvironment",
    "CamelServiceDefinition",
    "CamelServiceType",
    "GroupVersionKind",
    "get_service_type",
    "is_knative_reference",
]
