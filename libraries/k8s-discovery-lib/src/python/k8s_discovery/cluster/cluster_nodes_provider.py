"""Abstract base class for cluster node discovery.

A cluster membership layer (for example a distributed cache) polls an
implementation of this interface for its seed list. The list may change
at any time as pods join or leave the Kubernetes cluster.
"""

from __future__ import annotations

import abc


class ClusterNodesProvider(abc.ABC):
    """Interface that supplies the current set of cluster node addresses.

    Each address is a string in ``host`` or ``host:port`` format (e.g.
    ``"10.0.0.5:4322"``). Bare hosts are returned when the pods carry no
    port annotation; the caller decides which port to use then.
    """

    @abc.abstractmethod
    def get_nodes(self) -> list[str]:
        """Return the current list of peer node addresses.

        Returns:
            The discovered addresses in discovery order. The list may
            include the local node.
        """
        ...

    @abc.abstractmethod
    def get_self_address(self) -> str:
        """Return the address other nodes can use to reach *this* node."""
        ...
