"""
Tests for engine settings.
"""

import pytest

from pipebind.bindings import AllowListAccessPolicy, BindingContext
from pipebind.cluster import InMemoryClusterClient
from pipebind.config import EngineSettings, get_settings, load_settings
from pipebind.model import TraitProfile

ENV_VARS = [
    "NAMESPACE",
    "PIPEBIND_CLUSTER_DOMAIN",
    "PIPEBIND_DATA_TYPE_KAMELET",
    "PIPEBIND_DEFAULT_PROFILE",
    "PIPEBIND_CROSS_NAMESPACE_GRANTS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestLoadSettings:
    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings == EngineSettings()
        assert settings.global_kamelet_namespace == ""
        assert settings.cluster_domain == "svc.cluster.local"
        assert settings.data_type_kamelet == "data-type-action"
        assert settings.default_profile == "kubernetes"
        assert settings.cross_namespace_grants == []

    def test_from_environment(self, clean_env):
        clean_env.setenv("NAMESPACE", "camel-k")
        clean_env.setenv("PIPEBIND_CLUSTER_DOMAIN", "svc.example.org")
        clean_env.setenv("PIPEBIND_DATA_TYPE_KAMELET", "my-data-type")
        clean_env.setenv("PIPEBIND_DEFAULT_PROFILE", "knative")
        clean_env.setenv("PIPEBIND_CROSS_NAMESPACE_GRANTS", "runner=KafkaTopic@streaming, ,admin=*@*")

        settings = load_settings()

        assert settings.global_kamelet_namespace == "camel-k"
        assert settings.cluster_domain == "svc.example.org"
        assert settings.data_type_kamelet == "my-data-type"
        assert settings.default_profile == "knative"
        assert settings.cross_namespace_grants == ["runner=KafkaTopic@streaming", "admin=*@*"]


class TestGetSettings:
    def test_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_cache_clear_reloads(self, clean_env):
        clean_env.setenv("NAMESPACE", "first")
        assert get_settings().global_kamelet_namespace == "first"

        clean_env.setenv("NAMESPACE", "second")
        assert get_settings().global_kamelet_namespace == "first"

        get_settings.cache_clear()
        assert get_settings().global_kamelet_namespace == "second"

    def test_context_uses_process_settings(self, clean_env):
        clean_env.setenv("NAMESPACE", "global")
        clean_env.setenv("PIPEBIND_DEFAULT_PROFILE", "openshift")
        clean_env.setenv("PIPEBIND_CROSS_NAMESPACE_GRANTS", "runner=Service@other")

        ctx = BindingContext(namespace="test", client=InMemoryClusterClient())

        assert ctx.settings.global_kamelet_namespace == "global"
        assert ctx.profile is TraitProfile.OPENSHIFT
        assert isinstance(ctx.access_policy, AllowListAccessPolicy)
        assert ctx.access_policy.is_allowed("runner", "Service", "other")

    def test_invalid_grant_in_environment(self, clean_env):
        clean_env.setenv("PIPEBIND_CROSS_NAMESPACE_GRANTS", "broken")

        with pytest.raises(ValueError):
            BindingContext(namespace="test", client=InMemoryClusterClient())
