"""
Tests for the Knative providers.

Tests for:
- knative-ref: services, channels, brokers (filters, event types)
- knative-uri: external HTTP sinks under the knative profile
- Kind tables and the Camel Knative environment
"""

import itertools
import json

import pytest

from pipebind.bindings import KnativeRefBindingProvider, KnativeURIBindingProvider, translate
from pipebind.errors import BackendUnavailableError
from pipebind.knative import (
    CamelEndpointKind,
    CamelEnvironment,
    CamelServiceDefinition,
    CamelServiceType,
    get_service_type,
)
from pipebind.model import Endpoint, EndpointContext, EndpointType, ObjectReference, TraitProfile

SOURCE = EndpointContext(type=EndpointType.SOURCE)
SINK = EndpointContext(type=EndpointType.SINK)


def knative_ref(kind, api_version, name, properties=None):
    return Endpoint.model_validate(
        {
            "ref": {"kind": kind, "apiVersion": api_version, "name": name},
            "properties": properties,
        }
    )


@pytest.fixture
def knative_cluster(cluster):
    """Cluster serving the usual Knative APIs."""
    cluster.install("serving.knative.dev/v1", "Service")
    cluster.install("messaging.knative.dev/v1", "Channel")
    cluster.install("messaging.knative.dev/v1beta1", "KafkaChannel")
    cluster.install("eventing.knative.dev/v1", "Broker")
    cluster.install("eventing.knative.dev/v1beta1", "Broker")
    return cluster


@pytest.fixture
def knative_ctx(make_context, knative_cluster):
    return make_context(profile=TraitProfile.KNATIVE, client=knative_cluster)


# =============================================================================
# Endpoints and channels
# =============================================================================


class TestKnativeRef:
    def test_service_sink(self, knative_ctx):
        binding = translate(knative_ctx, SINK, knative_ref("Service", "serving.knative.dev/v1", "myservice"))

        assert binding.uri == "knative:endpoint/myservice?apiVersion=serving.knative.dev%2Fv1&kind=Service"
        assert binding.traits.is_empty()

    def test_service_with_properties(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SINK,
            knative_ref("Service", "serving.knative.dev/v1", "myservice", {"ce.override.ce-type": "mytype"}),
        )

        assert binding.uri == (
            "knative:endpoint/myservice?apiVersion=serving.knative.dev%2Fv1"
            "&ce.override.ce-type=mytype&kind=Service"
        )

    @pytest.mark.parametrize("endpoint_ctx", [SOURCE, SINK])
    def test_channel(self, knative_ctx, endpoint_ctx):
        binding = translate(
            knative_ctx, endpoint_ctx, knative_ref("Channel", "messaging.knative.dev/v1", "mychannel")
        )

        assert binding.uri == "knative:channel/mychannel?apiVersion=messaging.knative.dev%2Fv1&kind=Channel"
        assert binding.traits.is_empty()

    def test_kafka_channel(self, knative_ctx):
        binding = translate(
            knative_ctx, SOURCE, knative_ref("KafkaChannel", "messaging.knative.dev/v1beta1", "mychannel")
        )

        assert binding.uri == (
            "knative:channel/mychannel?apiVersion=messaging.knative.dev%2Fv1beta1&kind=KafkaChannel"
        )

    def test_works_under_kubernetes_profile(self, make_context, knative_cluster):
        ctx = make_context(client=knative_cluster)

        binding = translate(ctx, SINK, knative_ref("Service", "serving.knative.dev/v1", "myservice"))
        assert binding.uri.startswith("knative:endpoint/myservice")

    def test_backend_not_installed(self, ctx, cluster):
        with pytest.raises(BackendUnavailableError, match="not installed"):
            translate(ctx, SINK, knative_ref("Service", "serving.knative.dev/v1", "myservice"))

        assert ("discover", "Service", "", "") in cluster.calls

    def test_non_knative_skipped(self, knative_ctx):
        provider = KnativeRefBindingProvider()
        endpoint = knative_ref("Service", "v1", "svc")

        assert provider.resolve(knative_ctx, SINK, endpoint) is None


# =============================================================================
# Brokers
# =============================================================================


class TestKnativeBroker:
    def test_source_with_type(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SOURCE,
            knative_ref("Broker", "eventing.knative.dev/v1", "default", {"type": "org.apache.camel.myevent"}),
        )

        assert binding.uri == (
            "knative:event/org.apache.camel.myevent"
            "?apiVersion=eventing.knative.dev%2Fv1&kind=Broker&name=default"
        )
        assert binding.traits.is_empty()

    def test_source_with_filters(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SOURCE,
            knative_ref(
                "Broker",
                "eventing.knative.dev/v1",
                "default",
                {"source": "my-source", "subject": "mySubject"},
            ),
        )

        assert binding.uri == "knative:event?apiVersion=eventing.knative.dev%2Fv1&kind=Broker&name=default"
        assert binding.traits.to_dict() == {
            "knative": {
                "filters": ["source=my-source", "subject=mySubject"],
                "filterEventType": False,
            }
        }

    def test_source_without_properties(self, knative_ctx):
        binding = translate(knative_ctx, SOURCE, knative_ref("Broker", "eventing.knative.dev/v1", "default"))

        assert binding.uri == "knative:event?apiVersion=eventing.knative.dev%2Fv1&kind=Broker&name=default"
        assert binding.traits.to_dict() == {"knative": {"filterEventType": False}}

    def test_source_with_cloud_events_type(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SOURCE,
            knative_ref(
                "Broker",
                "eventing.knative.dev/v1",
                "default",
                {"cloudEventsType": "my.type", "source": "my-source"},
            ),
        )

        assert binding.uri == (
            "knative:event/my.type?apiVersion=eventing.knative.dev%2Fv1"
            "&cloudEventsType=my.type&kind=Broker&name=default"
        )
        assert binding.traits.to_dict() == {
            "knative": {"filters": ["source=my-source", "type=my.type"], "filterEventType": True}
        }

    def test_sink_keeps_properties(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SINK,
            knative_ref("Broker", "eventing.knative.dev/v1beta1", "default", {"type": "myeventtype", "x": "y"}),
        )

        assert binding.uri == (
            "knative:event/myeventtype?apiVersion=eventing.knative.dev%2Fv1beta1&kind=Broker&name=default&x=y"
        )
        assert binding.traits.is_empty()

    def test_explicit_broker_name_kept(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SINK,
            knative_ref("Broker", "eventing.knative.dev/v1", "default", {"name": "other", "type": "t"}),
        )

        assert binding.uri.endswith("&name=other")

    @pytest.mark.parametrize(
        "order",
        list(itertools.permutations([("source", "my-source"), ("subject", "mySubject"), ("cloudEventsType", "t")])),
    )
    def test_source_independent_of_property_order(self, knative_ctx, order):
        expected = translate(
            knative_ctx,
            SOURCE,
            knative_ref(
                "Broker",
                "eventing.knative.dev/v1",
                "default",
                {"cloudEventsType": "t", "source": "my-source", "subject": "mySubject"},
            ),
        )

        endpoint = knative_ref("Broker", "eventing.knative.dev/v1", "default", dict(order))
        binding = translate(knative_ctx, SOURCE, endpoint)

        assert binding.uri == expected.uri
        assert binding.traits.to_dict() == expected.traits.to_dict()
        assert binding.traits.to_dict()["knative"]["filters"] == [
            "source=my-source",
            "subject=mySubject",
            "type=t",
        ]


# =============================================================================
# External sinks
# =============================================================================


class TestKnativeURI:
    def test_http_sink_wrapped(self, knative_ctx):
        binding = translate(knative_ctx, SINK, Endpoint(uri="https://my-domain"))

        assert binding.uri == "knative:endpoint/sink"
        trait = binding.traits.knative
        assert trait.sink_binding is False

        env = json.loads(trait.configuration)
        assert env["resources"][0]["name"] == "sink"
        assert env["resources"][0]["type"] == "endpoint"
        assert env["resources"][0]["endpointKind"] == "sink"
        assert env["resources"][0]["url"] == "https://my-domain"

    @pytest.mark.parametrize("url", ["http://host:80/p", "https://My-Domain/x", "https://my-domain/a%20b?q=1"])
    def test_sink_url_kept_as_written(self, knative_ctx, url):
        binding = translate(knative_ctx, SINK, Endpoint(uri=url))

        env = json.loads(binding.traits.knative.configuration)
        assert env["resources"][0]["url"] == url

    def test_http_sink_properties(self, knative_ctx):
        binding = translate(
            knative_ctx,
            SINK,
            Endpoint(uri="https://myurl/hey", properties={"ce.override.ce-type": "mytype"}),
        )

        assert binding.uri == "knative:endpoint/sink?ce.override.ce-type=mytype"
        assert binding.traits.to_dict()["knative"]["sinkBinding"] is False
        assert "https://myurl/hey" in binding.traits.knative.configuration

    def test_action_is_wrapped(self, knative_ctx):
        binding = translate(
            knative_ctx, EndpointContext(type=EndpointType.ACTION, position=0), Endpoint(uri="http://x")
        )
        assert binding.uri == "knative:endpoint/sink"

    def test_kubernetes_profile_passthrough(self, ctx):
        binding = translate(ctx, SINK, Endpoint(uri="https://myurl/hey"))

        assert binding.uri == "https://myurl/hey"
        assert binding.traits.is_empty()

    def test_source_passthrough(self, knative_ctx):
        binding = translate(knative_ctx, SOURCE, Endpoint(uri="https://myurl/hey"))
        assert binding.uri == "https://myurl/hey"

    def test_other_scheme_passthrough(self, knative_ctx):
        binding = translate(knative_ctx, SINK, Endpoint(uri="docker://xxx"))
        assert binding.uri == "docker://xxx"

    def test_ref_skipped(self, knative_ctx):
        provider = KnativeURIBindingProvider()
        assert provider.resolve(knative_ctx, SINK, knative_ref("Service", "v1", "x")) is None


# =============================================================================
# Kind tables and environment
# =============================================================================


class TestKnativeApis:
    @pytest.mark.parametrize(
        "api_version,kind,expected",
        [
            ("serving.knative.dev/v1", "Service", CamelServiceType.ENDPOINT),
            ("messaging.knative.dev/v1", "Channel", CamelServiceType.CHANNEL),
            ("messaging.knative.dev/v1", "InMemoryChannel", CamelServiceType.CHANNEL),
            ("eventing.knative.dev/v1", "Broker", CamelServiceType.EVENT),
            ("eventing.knative.dev/v1", "Trigger", None),
            ("v1", "Service", None),
        ],
    )
    def test_service_type(self, api_version, kind, expected):
        ref = ObjectReference(kind=kind, api_version=api_version, name="x")
        assert get_service_type(ref) == expected

    def test_environment_serialization(self):
        env = CamelEnvironment()
        env.add(
            CamelServiceDefinition.build(
                "sink",
                CamelEndpointKind.SINK,
                CamelServiceType.ENDPOINT,
                "https://my-domain/path",
            )
        )

        data = json.loads(env.serialize())
        assert data == {
            "resources": [
                {
                    "name": "sink",
                    "type": "endpoint",
                    "endpointKind": "sink",
                    "url": "https://my-domain/path",
                }
            ]
        }
