from .cluster_nodes_provider import ClusterNodesProvider
from .k8s_cluster_nodes_provider import K8sClusterNodesProvider

__all__ = [
    "ClusterNodesProvider",
    "K8sClusterNodesProvider",
]
