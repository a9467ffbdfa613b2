"""Kubernetes API backed cluster nodes provider.

Every ``get_nodes()`` call lists the pods again; nothing is cached
between calls, so scale-up/down is visible on the next poll.
"""

import logging
from typing import Mapping

from k8s_discovery.cluster.cluster_nodes_provider import ClusterNodesProvider
from k8s_discovery.k8s_provider import K8sProvider


class K8sClusterNodesProvider(ClusterNodesProvider):
    """Discovers cluster node addresses from Kubernetes pods.

    Args:
        self_address: This node's address reachable by peers.
        provider: The Kubernetes discovery provider.
        args: Discovery args map passed to every ``K8sProvider.addrs`` call.
    """

    def __init__(self, self_address: str, provider: K8sProvider, args: Mapping[str, str]) -> None:
        self._self_address = self_address
        self._provider = provider
        self._args = dict(args)
        self._logger = logging.getLogger(self.__class__.__name__)

    def get_nodes(self) -> list[str]:
        """Run one discovery and return its addresses.

        Discovery errors propagate to the caller.
        """
        nodes = self._provider.addrs(self._args, self._logger)
        self._logger.debug("Discovered %d cluster node(s): %s", len(nodes), nodes)
        return nodes

    def get_self_address(self) -> str:
        """Return this node's address."""
        return self._self_address
