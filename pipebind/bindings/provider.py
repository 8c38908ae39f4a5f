"""
Binding Provider contract.

A BindingProvider (resolver) claims one class of endpoints and translates
it into a Binding. Each call has exactly one of three outcomes:

    - Skipped:  the endpoint is not of this provider's kind, try the next one
    - Resolved: the endpoint was translated
    - Failed:   the endpoint is of this provider's kind but cannot be
                resolved; this is final for the endpoint

Providers implement ``resolve`` and raise a BindingError for domain
failures; the base class turns that into a Failed outcome. Cluster I/O
errors are not BindingErrors and escape unchanged.

Usage:
    class LogProvider(BindingProvider):
        @property
        def id(self) -> str:
            return "log"

        @property
        def order(self) -> int:
            return ORDER_STANDARD

        def resolve(self, ctx, endpoint_ctx, endpoint):
            if endpoint.uri != "log":
                return None
            return Binding(uri="log:info")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pipebind.errors import BindingError

if TYPE_CHECKING:
    from pipebind.model import Binding, Endpoint, EndpointContext

    from .context import BindingContext

# Priority bands: lower resolves first.
ORDER_FIRST = 0
ORDER_STANDARD = 50
ORDER_LAST = 100


@dataclass(frozen=True, slots=True)
class Skipped:
    """The provider does not handle this endpoint."""

    provider_id: str


@dataclass(frozen=True, slots=True)
class Resolved:
    provider_id: str
    binding: Binding


@dataclass(frozen=True, slots=True)
class Failed:
    provider_id: str
    error: BindingError


TranslationOutcome = Union[Skipped, Resolved, Failed]


class BindingProvider(ABC):
    """Base class for endpoint resolvers."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique provider identifier (also the tie-breaker for ordering)."""
        ...

    @property
    @abstractmethod
    def order(self) -> int:
        """Resolution priority, lower runs first."""
        ...

    @abstractmethod
    def resolve(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> Binding | None:
        """
        Translate the endpoint.

        Returns:
            The Binding, or None when the endpoint is not handled here

        Raises:
            BindingError: When the endpoint is handled here but is invalid
        """
        ...

    def translate(
        self,
        ctx: BindingContext,
        endpoint_ctx: EndpointContext,
        endpoint: Endpoint,
    ) -> TranslationOutcome:
        try:
            binding = self.resolve(ctx, endpoint_ctx, endpoint)
        except BindingError as e:
            return Failed(self.id, e)
        if binding is None:
            return Skipped(self.id)
        return Resolved(self.id, binding)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, order={self.order})"
