"""
Endpoint validation and cross-namespace authorization.

Runs before any resolver, so malformed or unauthorized endpoints never
trigger cluster I/O.

Rules:
    1. Exactly one of ``ref`` / ``uri`` must be set.
    2. A ref into a foreign namespace is only allowed when:
       - it is a Kamelet living in the shared Kamelet namespace, or
       - the Pipe has a service account AND the access policy grants it
         the referenced kind in that namespace.
       Knative references can never cross namespaces.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pipebind.errors import (
    CrossNamespaceDeniedError,
    MalformedEndpointError,
    MissingAuthorizationError,
)
from pipebind.knative.apis import is_knative_reference
from pipebind.model.endpoint import parse_group_version

from .kamelet import is_kamelet_reference

if TYPE_CHECKING:
    from pipebind.model import Endpoint

    from .context import BindingContext

logger = logging.getLogger(__name__)


def validate_endpoint(ctx: BindingContext, endpoint: Endpoint) -> None:
    """
    Validate an endpoint against the binding context.

    Raises:
        MalformedEndpointError: Neither or both of ref/uri set, bad apiVersion
        CrossNamespaceDeniedError: Foreign namespace not allowed
        MissingAuthorizationError: Foreign namespace without a service account
    """
    if endpoint.ref is not None and endpoint.uri is not None:
        raise MalformedEndpointError(
            "cannot use both ref and uri to specify an endpoint: only one of them should be used"
        )
    if endpoint.ref is None and endpoint.uri is None:
        raise MalformedEndpointError(
            "no ref or uri specified in endpoint: exactly one of them should be used"
        )

    ref = endpoint.ref
    if ref is None:
        return

    parse_group_version(ref.api_version)

    if not ref.namespace or ref.namespace == ctx.namespace:
        return

    global_namespace = ctx.settings.global_kamelet_namespace
    if is_kamelet_reference(ref) and global_namespace and ref.namespace == global_namespace:
        return

    if is_knative_reference(ref):
        raise CrossNamespaceDeniedError(
            f"cross-namespace Pipe references are not allowed for Knative "
            f"({ref.kind} {ref.namespace}/{ref.name})"
        )

    if not ctx.service_account_name:
        raise MissingAuthorizationError(
            f"a service account must be set on the Pipe to reference {ref.kind} "
            f"{ref.name} in namespace {ref.namespace}"
        )

    if not ctx.access_policy.is_allowed(ctx.service_account_name, ref.kind, ref.namespace):
        logger.info(
            f"[validation] Denied {ctx.service_account_name} access to {ref.kind} "
            f"in namespace {ref.namespace}"
        )
        raise CrossNamespaceDeniedError(
            f"service account {ctx.service_account_name} is not allowed to reference "
            f"{ref.kind} resources in namespace {ref.namespace}"
        )
