"""
Cluster access layer.

Read-only client protocol plus its in-memory implementation. The
kubernetes-backed client lives in ``pipebind.cluster.kubernetes`` and is
imported explicitly, so that offline use does not load the kubernetes
package.
"""

from .base import ClusterClient, object_labels
from .memory import InMemoryClusterClient

__all__ = [
    "ClusterClient",
    "InMemoryClusterClient",
    "object_labels",
]
