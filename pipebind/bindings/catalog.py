"""
Binding Provider Catalog.

Holds the ordered list of providers and orchestrates endpoint translation.

Design Principle:
    Providers are registered once at start-up and immutable afterwards.
    The catalog is sorted by (order, id), so the resolution priority does
    not depend on registration sequence.

Flow:
    1. validate_endpoint() rejects malformed/unauthorized endpoints
    2. Providers are asked in priority order
    3. The first Resolved or Failed outcome wins
    4. If every provider skips, the endpoint is unrecognized (None)

Usage:
    ctx = BindingContext(namespace="default", client=cluster_client)
    binding = translate(ctx, EndpointContext(type=EndpointType.SINK), endpoint)
    if binding is None:
        raise ValueError("no provider matched the endpoint")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from pipebind.errors import CatalogError

from .camel_uri import CamelURIBindingProvider
from .kamelet import KameletBindingProvider
from .knative_ref import KnativeRefBindingProvider
from .knative_uri import KnativeURIBindingProvider
from .provider import BindingProvider, Failed, Resolved, TranslationOutcome
from .service_ref import ServiceRefBindingProvider
from .strimzi import StrimziBindingProvider
from .validation import validate_endpoint

if TYPE_CHECKING:
    from pipebind.model import Binding, Endpoint, EndpointContext

    from .context import BindingContext

logger = logging.getLogger(__name__)


class BindingProviderCatalog:
    """
    Ordered registry of binding providers.

    Example:
        catalog = BindingProviderCatalog()
        catalog.register(KameletBindingProvider())
        catalog.register(CamelURIBindingProvider())
        catalog.freeze()

        binding = catalog.translate(ctx, endpoint_ctx, endpoint)
    """

    def __init__(self) -> None:
        self._providers: list[BindingProvider] = []
        self._frozen = False

    def register(self, provider: BindingProvider) -> None:
        """
        Register a provider.

        Raises:
            CatalogError: If the catalog is frozen or the id is already taken
        """
        if self._frozen:
            raise CatalogError(
                f"Cannot register provider '{provider.id}': catalog is frozen"
            )
        if any(p.id == provider.id for p in self._providers):
            raise CatalogError(f"Provider '{provider.id}' already registered")

        self._providers.append(provider)
        self._providers.sort(key=lambda p: (p.order, p.id))
        logger.info(f"[catalog] Registered provider: {provider.id} (order={provider.order})")

    def freeze(self) -> None:
        """Make the catalog read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def providers(self) -> tuple[BindingProvider, ...]:
        """Providers in resolution order."""
        return tuple(self._providers)

    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> TranslationOutcome | None:
        """
        Validate the endpoint and run providers until one claims it.

        Returns:
            The Resolved or Failed outcome of the winning provider,
            or None if every provider skipped

        Raises:
            BindingError: If validation fails (no provider is consulted)
        """
        validate_endpoint(ctx, endpoint)

        for provider in self._providers:
            outcome = provider.translate(ctx, endpoint_ctx, endpoint)
            if isinstance(outcome, (Resolved, Failed)):
                return outcome
            logger.debug(f"[catalog] Provider {provider.id} skipped endpoint")

        return None

    def translate(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        """
        Translate an endpoint into a Binding.

        Returns:
            The Binding, or None if no provider recognized the endpoint.
            Callers must surface None as a configuration error.

        Raises:
            BindingError: On validation failure or a provider failure
        """
        outcome = self.resolve(ctx, endpoint_ctx, endpoint)
        if outcome is None:
            logger.warning(
                f"[catalog] No provider matched endpoint "
                f"(type={endpoint_ctx.type}, position={endpoint_ctx.position})"
            )
            return None
        if isinstance(outcome, Failed):
            logger.info(f"[catalog] Provider {outcome.provider_id} failed: {outcome.error}")
            raise outcome.error
        logger.info(f"[catalog] Provider {outcome.provider_id} resolved endpoint")
        return outcome.binding

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider_id: str) -> bool:
        return any(p.id == provider_id for p in self._providers)


def builtin_providers() -> list[BindingProvider]:
    return [
        CamelURIBindingProvider(),
        KameletBindingProvider(),
        KnativeRefBindingProvider(),
        KnativeURIBindingProvider(),
        ServiceRefBindingProvider(),
        StrimziBindingProvider(),
    ]


@lru_cache()
def default_catalog() -> BindingProviderCatalog:
    """
    Get the process-wide catalog holding the built-in providers.

    Built on first access and frozen.
    """
    catalog = BindingProviderCatalog()
    for provider in builtin_providers():
        catalog.register(provider)
    catalog.freeze()
    return catalog


def translate(
    ctx: BindingContext,
    endpoint_ctx: EndpointContext,
    endpoint: Endpoint,
) -> Binding | None:
    """Translate an endpoint with the default catalog."""
    return default_catalog().translate(ctx, endpoint_ctx, endpoint)
