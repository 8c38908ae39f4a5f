"""
Binding Context.

The resolution environment shared by every endpoint of one Pipe during
one reconciliation pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pipebind.config import EngineSettings, get_settings
from pipebind.model.endpoint import TraitProfile

from .policy import AccessPolicy, AllowListAccessPolicy

if TYPE_CHECKING:
    from pipebind.cluster.base import ClusterClient


@dataclass
class BindingContext:
    """
    Resolution environment.

    Attributes:
        namespace: Namespace of the Pipe being resolved
        client: Read-only cluster client
        profile: Deployment profile (gates Knative-only resolvers),
            defaults to the configured profile
        service_account_name: Identity used to authorize cross-namespace refs
        metadata: Annotations of the owning integration
        settings: Process-wide engine settings
        access_policy: Cross-namespace authorization check, defaults to the
            allow-list configured in settings
    """

    namespace: str
    client: ClusterClient
    profile: TraitProfile | None = None
    service_account_name: str = ""
    metadata: dict[str, str] = field(default_factory=dict)
    settings: EngineSettings = field(default_factory=get_settings)
    access_policy: AccessPolicy | None = None

    def __post_init__(self) -> None:
        if self.profile is None:
            self.profile = TraitProfile(self.settings.default_profile)
        elif not isinstance(self.profile, TraitProfile):
            self.profile = TraitProfile(self.profile)
        if self.access_policy is None:
            self.access_policy = AllowListAccessPolicy.from_grants(self.settings.cross_namespace_grants)
