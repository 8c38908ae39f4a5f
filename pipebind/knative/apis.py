"""
Knative kind tables.

Static catalog of the Knative resource kinds the engine knows how to
address, grouped by the Camel Knative service type they resolve to:

    - channel:  fan-out channels (messaging.knative.dev)
    - endpoint: point-to-point addressables (serving.knative.dev), plus
                channels and brokers, which are addressable too
    - event:    brokers (eventing.knative.dev)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pipebind.model.endpoint import ObjectReference

SERVING_GROUP = "serving.knative.dev"
EVENTING_GROUP = "eventing.knative.dev"
MESSAGING_GROUP = "messaging.knative.dev"

KNATIVE_GROUPS = frozenset({SERVING_GROUP, EVENTING_GROUP, MESSAGING_GROUP})


class CamelServiceType(str, Enum):
    """Shape of a Knative service as seen by the Camel Knative component."""

    ENDPOINT = "endpoint"
    CHANNEL = "channel"
    EVENT = "event"


@dataclass(frozen=True, slots=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str


KNOWN_CHANNEL_KINDS: tuple[GroupVersionKind, ...] = (
    GroupVersionKind(MESSAGING_GROUP, "v1", "Channel"),
    GroupVersionKind(MESSAGING_GROUP, "v1beta1", "Channel"),
    GroupVersionKind(MESSAGING_GROUP, "v1", "InMemoryChannel"),
    GroupVersionKind(MESSAGING_GROUP, "v1beta1", "InMemoryChannel"),
    GroupVersionKind(MESSAGING_GROUP, "v1beta1", "KafkaChannel"),
    GroupVersionKind(MESSAGING_GROUP, "v1alpha1", "KafkaChannel"),
    GroupVersionKind(MESSAGING_GROUP, "v1alpha1", "NatssChannel"),
)

KNOWN_BROKER_KINDS: tuple[GroupVersionKind, ...] = (
    GroupVersionKind(EVENTING_GROUP, "v1", "Broker"),
    GroupVersionKind(EVENTING_GROUP, "v1beta1", "Broker"),
)

# Channels and brokers are addressable too; brokers come last.
KNOWN_ENDPOINT_KINDS: tuple[GroupVersionKind, ...] = (
    GroupVersionKind(SERVING_GROUP, "v1", "Service"),
    GroupVersionKind(SERVING_GROUP, "v1beta1", "Service"),
    GroupVersionKind(SERVING_GROUP, "v1alpha1", "Service"),
    *KNOWN_CHANNEL_KINDS,
    *KNOWN_BROKER_KINDS,
)


def is_knative_reference(ref: ObjectReference) -> bool:
    """Check if the reference points into one of the Knative API groups."""
    return ref.group in KNATIVE_GROUPS


def _matches(kinds: tuple[GroupVersionKind, ...], group: str, kind: str) -> bool:
    return any(k.group == group and k.kind == kind for k in kinds)


def get_service_type(ref: ObjectReference) -> CamelServiceType | None:
    """
    Derive the Camel service type of a reference.

    Channels are checked first, then brokers, then plain endpoints.

    Returns:
        The service type, or None if the group/kind pair is unknown
    """
    group = ref.group
    if _matches(KNOWN_CHANNEL_KINDS, group, ref.kind):
        return CamelServiceType.CHANNEL
    if _matches(KNOWN_BROKER_KINDS, group, ref.kind):
        return CamelServiceType.EVENT
    if _matches(KNOWN_ENDPOINT_KINDS, group, ref.kind):
        return CamelServiceType.ENDPOINT
    return None
