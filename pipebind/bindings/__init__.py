"""
Binding resolution engine.

Turns declarative Pipe endpoints into concrete Camel URIs / route steps
plus the side configuration (traits, application properties) needed to
reach them.

Components:
    - BindingProviderCatalog: ordered providers + orchestration
    - BindingContext: per-Pipe resolution environment
    - validate_endpoint: shape and cross-namespace checks
    - Providers: Kamelet, Knative (ref and external sink), Service, Strimzi,
      generic Camel URI

Usage:
    from pipebind.bindings import BindingContext, translate
    from pipebind.model import Endpoint, EndpointContext, EndpointType

    ctx = BindingContext(namespace="default", client=client)
    binding = translate(ctx, EndpointContext(type=EndpointType.SOURCE), endpoint)
"""

from .camel_uri import CamelURIBindingProvider
from .catalog import BindingProviderCatalog, builtin_providers, default_catalog, translate
from .context import BindingContext
from .kamelet import KameletBindingProvider
from .knative_ref import KnativeRefBindingProvider
from .knative_uri import KnativeURIBindingProvider
from .policy import AccessPolicy, AllowListAccessPolicy, DenyAllAccessPolicy
from .provider import (
    ORDER_FIRST,
    ORDER_LAST,
    ORDER_STANDARD,
    BindingProvider,
    Failed,
    Resolved,
    Skipped,
    TranslationOutcome,
)
from .service_ref import ServiceRefBindingProvider
from .strimzi import StrimziBindingProvider
from .uri import append_parameters, path_escape, query_escape
from .validation import validate_endpoint

__all__ = [
    # Orchestration
    "BindingContext",
    "BindingProviderCatalog",
    "builtin_providers",
    "default_catalog",
    "translate",
    "validate_endpoint",
    # Contract
    "ORDER_FIRST",
    "ORDER_LAST",
    "ORDER_STANDARD",
    "BindingProvider",
    "Failed",
    "Resolved",
    "Skipped",
    "TranslationOutcome",
    # Policy
    "AccessPolicy",
    "AllowListAccessPolicy",
    "DenyAllAccessPolicy",
    # Providers
    "CamelURIBindingProvider",
    "KameletBindingProvider",
    "KnativeRefBindingProvider",
    "KnativeURIBindingProvider",
    "ServiceRefBindingProvider",
    "StrimziBindingProvider",
    # URI helpers
    "append_parameters",
    "path_escape",
    "query_escape",
]
