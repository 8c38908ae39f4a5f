"""
Error taxonomy for pipebind.

Every domain failure raised while resolving an endpoint is a BindingError.
Callers can branch on ``error_type`` rather than on concrete classes when
they only need to decide how to surface the problem.

None of these errors is recoverable by retrying: they all require a change
in the endpoint specification, the authorization setup, or the referenced
cluster resource. Transient cluster I/O errors are NOT part of
this hierarchy and propagate unchanged.
"""

from __future__ import annotations

from enum import Enum


class BindingErrorType(str, Enum):
    """Classification of binding errors for handling decisions."""

    # Specification errors
    MALFORMED_ENDPOINT = "malformed_endpoint"

    # Authorization gate
    CROSS_NAMESPACE_DENIED = "cross_namespace_denied"
    MISSING_AUTHORIZATION = "missing_authorization"

    # Cluster state
    BACKEND_UNAVAILABLE = "backend_unavailable"
    RESOURCE_NOT_FOUND = "resource_not_found"
    TOPIC_NOT_FOUND = "topic_not_found"
    MISSING_TOPIC = "missing_topic"
    NO_BOOTSTRAP_SERVERS = "no_bootstrap_servers"
    UNSUPPORTED_SERVICE_TYPE = "unsupported_service_type"


class BindingError(Exception):
    """Base class for all endpoint resolution failures."""

    error_type: BindingErrorType = BindingErrorType.MALFORMED_ENDPOINT
    recoverable: bool = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "error_type": self.error_type.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }


class MalformedEndpointError(BindingError):
    """Neither or both of ref/uri are set, or a field cannot be parsed."""

    error_type = BindingErrorType.MALFORMED_ENDPOINT


class CrossNamespaceDeniedError(BindingError):
    error_type = BindingErrorType.CROSS_NAMESPACE_DENIED


class MissingAuthorizationError(BindingError):
    """A cross-namespace reference was made without a service account."""

    error_type = BindingErrorType.MISSING_AUTHORIZATION


class BackendUnavailableError(BindingError):
    """
    The API backing a reference is not installed on the cluster.

    Surface this distinctly: the remediation is to install the backend,
    not to fix the endpoint.
    """

    error_type = BindingErrorType.BACKEND_UNAVAILABLE


class ResourceNotFoundError(BindingError):
    error_type = BindingErrorType.RESOURCE_NOT_FOUND


class TopicNotFoundError(BindingError):
    error_type = BindingErrorType.TOPIC_NOT_FOUND


class MissingTopicError(BindingError):
    error_type = BindingErrorType.MISSING_TOPIC


class NoBootstrapServersError(BindingError):
    error_type = BindingErrorType.NO_BOOTSTRAP_SERVERS


class UnsupportedServiceTypeError(BindingError):
    error_type = BindingErrorType.UNSUPPORTED_SERVICE_TYPE


class CatalogError(Exception):
    """Error in binding provider registration."""

    pass


__all__ = [
    "BackendUnavailableError",
    "BindingError",
    "BindingErrorType",
    "CatalogError",
    "CrossNamespaceDeniedError",
    "MalformedEndpointError",
    "MissingAuthorizationError",
    "MissingTopicError",
    "NoBootstrapServersError",
    "ResourceNotFoundError",
    "TopicNotFoundError",
    "UnsupportedServiceTypeError",
]
