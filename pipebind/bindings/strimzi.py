"""
Strimzi binding provider.

Resolves references to Strimzi resources (Kafka clusters and topics) into
``kafka:`` URIs, discovering the bootstrap servers from the cluster status.

    Kafka       ->  requires a ``topic`` property
    KafkaTopic  ->  topic is the resource name; the owning cluster is read
                    from the ``strimzi.io/cluster`` label

    kafka:<topic>?brokers=<bootstrap-servers>&...

An explicit ``brokers`` property skips discovery altogether.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pipebind.cluster.base import object_labels
from pipebind.errors import (
    MissingTopicError,
    NoBootstrapServersError,
    ResourceNotFoundError,
    TopicNotFoundError,
)
from pipebind.model import Binding

from .provider import ORDER_STANDARD, BindingProvider
from .uri import append_parameters

if TYPE_CHECKING:
    from pipebind.model import Endpoint, EndpointContext

    from .context import BindingContext

logger = logging.getLogger(__name__)

STRIMZI_GROUP = "kafka.strimzi.io"
STRIMZI_API_VERSION = f"{STRIMZI_GROUP}/v1beta2"
STRIMZI_KIND_KAFKA = "Kafka"
STRIMZI_KIND_TOPIC = "KafkaTopic"
STRIMZI_CLUSTER_LABEL = "strimzi.io/cluster"
STRIMZI_LISTENER_PLAIN = "plain"

TOPIC_PROPERTY = "topic"
BROKERS_PROPERTY = "brokers"


class StrimziBindingProvider(BindingProvider):
    @property
    def id(self) -> str:
        return "strimzi"

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
        if ref is None or ref.group != STRIMZI_GROUP:
            return None

        namespace = ref.namespace or ctx.namespace
        props = endpoint.property_map()

        if ref.kind == STRIMZI_KIND_KAFKA:
            topic = props.pop(TOPIC_PROPERTY, "")
            if not topic:
                raise MissingTopicError("invalid endpoint configuration: missing topic property")
            if not props.get(BROKERS_PROPERTY):
                props[BROKERS_PROPERTY] = self.bootstrap_servers(ctx, ref.name, namespace)
        elif ref.kind == STRIMZI_KIND_TOPIC:
            topic = ref.name
            if not props.get(BROKERS_PROPERTY):
                props[BROKERS_PROPERTY] = self.lookup_bootstrap_servers(ctx, ref.name, namespace)
        else:
            logger.debug(f"[strimzi] Ignoring unsupported kind {ref.kind}")
            return None

        return Binding(uri=append_parameters(f"kafka:{topic}", props))

    def lookup_bootstrap_servers(self, ctx: BindingContext, topic_name: str, namespace: str) -> str:
        """Find the owning cluster of a topic and return its bootstrap servers."""
        topic = self.lookup_topic(ctx, topic_name, namespace)
        cluster_name = object_labels(topic).get(STRIMZI_CLUSTER_LABEL, "")
        if not cluster_name:
            raise TopicNotFoundError(
                f"no {STRIMZI_CLUSTER_LABEL!r} label defined on topic {topic_name}"
            )
        return self.bootstrap_servers(ctx, cluster_name, namespace)

    def lookup_topic(self, ctx: BindingContext, topic_name: str, namespace: str) -> dict[str, Any]:
        """
        Find a KafkaTopic by resource name, then by ``status.topicName``.

        Resource names are sanitized by Strimzi, so the Kafka topic name may
        only be visible in the status.
        """
        topic = ctx.client.get(STRIMZI_API_VERSION, STRIMZI_KIND_TOPIC, namespace, topic_name)
        if topic is not None:
            return topic

        for candidate in ctx.client.list(STRIMZI_API_VERSION, STRIMZI_KIND_TOPIC, namespace):
            if (candidate.get("status") or {}).get("topicName") == topic_name:
                logger.debug(
                    f"[strimzi] Topic {topic_name} found through status as "
                    f"{candidate['metadata']['name']}"
                )
                return candidate

        raise TopicNotFoundError(
            f"couldn't find any KafkaTopic with either name or topicName {topic_name}"
        )

    def bootstrap_servers(self, ctx: BindingContext, cluster_name: str, namespace: str) -> str:
        cluster = ctx.client.get(STRIMZI_API_VERSION, STRIMZI_KIND_KAFKA, namespace, cluster_name)
        if cluster is None:
            raise ResourceNotFoundError(
                f"could not load a Kafka cluster with name {cluster_name} in namespace {namespace}"
            )

        for listener in (cluster.get("status") or {}).get("listeners") or []:
            if listener.get("name") != STRIMZI_LISTENER_PLAIN:
                continue
            servers = listener.get("bootstrapServers", "")
            if not servers:
                raise NoBootstrapServersError(
                    f"cluster {cluster_name!r} has no bootstrap servers in "
                    f"{STRIMZI_LISTENER_PLAIN!r} listener"
                )
            return servers

        raise NoBootstrapServersError(
            f"cluster {cluster_name!r} has no listeners of name {STRIMZI_LISTENER_PLAIN!r}"
        )
