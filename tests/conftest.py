"""
Pytest configuration and fixtures for pipebind tests.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
# This allows `from pipebind.bindings import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from pipebind.bindings import AllowListAccessPolicy, BindingContext  # noqa: E402
from pipebind.cluster import InMemoryClusterClient  # noqa: E402
from pipebind.config import EngineSettings  # noqa: E402
from pipebind.model import TraitProfile  # noqa: E402


@pytest.fixture
def settings():
    """Engine settings with a shared Kamelet namespace."""
    return EngineSettings(global_kamelet_namespace="global")


@pytest.fixture
def cluster():
    """Empty in-memory cluster."""
    return InMemoryClusterClient()


@pytest.fixture
def make_context(settings, cluster):
    """Factory for binding contexts over the in-memory cluster."""

    def _make(
        namespace="test",
        profile=TraitProfile.KUBERNETES,
        client=None,
        service_account_name="",
        metadata=None,
        access_policy=None,
    ):
        return BindingContext(
            namespace=namespace,
            client=client if client is not None else cluster,
            profile=profile,
            service_account_name=service_account_name,
            metadata=metadata or {},
            settings=settings,
            access_policy=access_policy if access_policy is not None else AllowListAccessPolicy(),
        )

    return _make


@pytest.fixture
def ctx(make_context):
    """Default context: namespace 'test', kubernetes profile."""
    return make_context()
