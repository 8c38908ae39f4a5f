"""
Configuration Schemas for pipebind.

Settings that are fixed for the lifetime of the operator process.
They are read once from the environment (see ``settings.get_settings``)
and shared by every BindingContext built during reconciliation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_CLUSTER_DOMAIN = "svc.cluster.local"
DEFAULT_DATA_TYPE_KAMELET = "data-type-action"


class EngineSettings(BaseModel):
    """
    Engine settings model.

    Attributes:
        global_kamelet_namespace: Namespace holding shared Kamelets. References
            into it are allowed from any namespace. Usually the namespace the
            operator runs in.
        cluster_domain: DNS suffix used to build in-cluster service addresses.
        data_type_kamelet: Kamelet used to synthesize data-type adapter steps.
        default_profile: Deployment profile used when the caller gives none.
        cross_namespace_grants: Allow-list entries in the form
            ``identity=kind@namespace`` (``*`` matches anything).
    """

    global_kamelet_namespace: str = Field(default="", description="Shared Kamelet namespace")
    cluster_domain: str = Field(default=DEFAULT_CLUSTER_DOMAIN, description="Cluster DNS suffix")
    data_type_kamelet: str = Field(
        default=DEFAULT_DATA_TYPE_KAMELET,
        description="Kamelet used for data-type adapter steps",
    )
    default_profile: str = Field(default="kubernetes", description="Default trait profile")
    cross_namespace_grants: list[str] = Field(
        default_factory=list,
        description="Cross-namespace allow-list entries",
    )
