"""
Data model for pipebind.

Pydantic models for the declarative input (Endpoint) and the resolved
output (Binding) of the resolution engine.
"""

from .binding import Binding, KnativeTrait, Traits
from .endpoint import (
    DataTypeReference,
    Endpoint,
    EndpointContext,
    EndpointType,
    ObjectReference,
    TraitProfile,
    TypeSlot,
    parse_group_version,
)

__all__ = [
    # Input
    "DataTypeReference",
    "Endpoint",
    "EndpointContext",
    "EndpointType",
    "ObjectReference",
    "TraitProfile",
    "TypeSlot",
    "parse_group_version",
    # Output
    "Binding",
    "KnativeTrait",
    "Traits",
]
