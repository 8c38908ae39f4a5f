"""
Cross-namespace access policy.

The validation gate asks an AccessPolicy whether an identity (the Pipe's
service account) may reference a resource kind in a foreign namespace.
The policy is injected through the BindingContext.

Grant syntax (settings / from_grants):
    "<identity>=<kind>@<namespace>"

    e.g. "pipe-runner=KafkaTopic@streaming"
         "pipe-runner=*@shared"        any kind in "shared"
         "admin=*@*"                   anything, anywhere
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

WILDCARD = "*"


@runtime_checkable
class AccessPolicy(Protocol):
    """Pure authorization check: (identity, kind, namespace) -> allowed."""

    def is_allowed(self, identity: str, kind: str, namespace: str) -> bool: ...


class DenyAllAccessPolicy:
    """Policy that never grants cross-namespace access."""

    def is_allowed(self, identity: str, kind: str, namespace: str) -> bool:
        return False


class AllowListAccessPolicy:
    """
    Explicit allow-list keyed by identity.

    Example:
        policy = AllowListAccessPolicy({"runner": [("KafkaTopic", "streaming")]})
        policy.is_allowed("runner", "KafkaTopic", "streaming")  # True
        policy.is_allowed("runner", "Service", "streaming")     # False
    """

    def __init__(self, grants: Mapping[str, Iterable[tuple[str, str]]] | None = None):
        self._grants: dict[str, frozenset[tuple[str, str]]] = {
            identity: frozenset(entries) for identity, entries in (grants or {}).items()
        }

    @classmethod
    def from_grants(cls, grants: Iterable[str]) -> AllowListAccessPolicy:
        """
        Parse grant strings.

        Raises:
            ValueError: If an entry is not of the form identity=kind@namespace
        """
        parsed: dict[str, set[tuple[str, str]]] = {}
        for raw in grants:
            identity, sep, target = raw.partition("=")
            kind, at, namespace = target.partition("@")
            if not sep or not at or not identity.strip() or not kind.strip() or not namespace.strip():
                raise ValueError(f"Invalid cross-namespace grant {raw!r}, expected identity=kind@namespace")
            parsed.setdefault(identity.strip(), set()).add((kind.strip(), namespace.strip()))
        return cls(parsed)

    def is_allowed(self, identity: str, kind: str, namespace: str) -> bool:
        for grant_kind, grant_namespace in self._grants.get(identity, ()):
            if grant_kind not in (WILDCARD, kind):
                continue
            if grant_namespace not in (WILDCARD, namespace):
                continue
            logger.debug(f"[policy] Granted {identity} access to {kind} in {namespace}")
            return True
        return False

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._grants.values())
