"""
pipebind - Binding resolution engine for integration Pipes on Kubernetes.

pipebind turns the declarative endpoints of a Pipe (references to cluster
resources or explicit URIs) into concrete Camel endpoints:

- **Kamelets**: parameterized connector templates, with per-instance
  configuration namespaces and data-type adapters
- **Knative**: services, channels and brokers, with CloudEvents filters
- **Strimzi**: Kafka clusters and topics, with bootstrap server discovery
- **Services**: in-cluster ClusterIP services
- **URIs**: explicit Camel URIs

Quick Start:
    >>> from pipebind import BindingContext, Endpoint, EndpointContext, EndpointType, translate
    >>> from pipebind.cluster import InMemoryClusterClient
    >>>
    >>> ctx = BindingContext(namespace="default", client=InMemoryClusterClient())
    >>> endpoint = Endpoint(uri="log:info", properties={"showAll": True})
    >>> translate(ctx, EndpointContext(type=EndpointType.SINK), endpoint).uri
    'log:info?showAll=true'
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from pipebind.bindings import BindingContext, BindingProviderCatalog, translate
from pipebind.errors import BindingError, BindingErrorType
from pipebind.model import Binding, Endpoint, EndpointContext, EndpointType, ObjectReference

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Engine
    "BindingContext",
    "BindingProviderCatalog",
    "translate",
    # Model
    "Binding",
    "Endpoint",
    "EndpointContext",
    "EndpointType",
    "ObjectReference",
    # Errors
    "BindingError",
    "BindingErrorType",
]
