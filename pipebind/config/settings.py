"""
Settings loader.

Reads EngineSettings from the process environment. The result is cached:
settings are loaded once at start-up, like the resolver catalog.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from .schemas import DEFAULT_CLUSTER_DOMAIN, DEFAULT_DATA_TYPE_KAMELET, EngineSettings

logger = logging.getLogger(__name__)

# The operator namespace is exposed through the downward API under this name.
OPERATOR_NAMESPACE_ENV = "NAMESPACE"


def _split_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings() -> EngineSettings:
    """Build EngineSettings from the current environment (uncached)."""
    settings = EngineSettings(
        global_kamelet_namespace=os.getenv(OPERATOR_NAMESPACE_ENV, ""),
        cluster_domain=os.getenv("PIPEBIND_CLUSTER_DOMAIN", DEFAULT_CLUSTER_DOMAIN),
        data_type_kamelet=os.getenv("PIPEBIND_DATA_TYPE_KAMELET", DEFAULT_DATA_TYPE_KAMELET),
        default_profile=os.getenv("PIPEBIND_DEFAULT_PROFILE", "kubernetes"),
        cross_namespace_grants=_split_list(os.getenv("PIPEBIND_CROSS_NAMESPACE_GRANTS")),
    )
    logger.debug(
        f"[settings] Loaded settings (global_kamelet_namespace={settings.global_kamelet_namespace!r}, "
        f"cluster_domain={settings.cluster_domain!r}, grants={len(settings.cross_namespace_grants)})"
    )
    return settings


@lru_cache()
def get_settings() -> EngineSettings:
    """
    Get engine settings from environment.

    Uses lru_cache for singleton pattern. Call ``get_settings.cache_clear()``
    to force a reload (tests do this after patching the environment).
    """
    return load_settings()
