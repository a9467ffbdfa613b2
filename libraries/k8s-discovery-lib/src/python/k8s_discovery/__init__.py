"""Kubernetes pod discovery for cluster bootstrapping.

Resolves the pods of a namespace into ``host`` / ``host:port`` join
addresses, e.g. to seed the member list of a distributed cache.

Quick Start::

    from injector import Injector
    from k8s_discovery import K8sProvider

    provider = Injector().get(K8sProvider)
    addrs = provider.addrs({
        "provider": "k8s",
        "namespace": "cache",
        "label_selector": "app=cache",
    })

Pods opt into a join port with the annotation
``hashicorp.com/consul-auto-join-port`` set to a container port name or
a port number.
"""

__version__ = "0.1.0"

from .args_parser import parse_args, parse_pairs
from .client import KubeClientFactory
from .cluster import ClusterNodesProvider, K8sClusterNodesProvider
from .configs import DiscoveryConfig, load_config
from .constants import ANNOTATION_KEY_PORT
from .exceptions import (
    ClientInitError,
    ConfigError,
    InClusterConfigError,
    InvalidArgumentError,
    InvalidProviderError,
    K8sDiscoveryError,
    KubeconfigError,
    ListPodsError,
    PortResolutionError,
)
from .k8s_provider import K8sProvider
from .models import (
    Container,
    ContainerPort,
    DiscoveryOptions,
    Pod,
    PodCondition,
    PodList,
    PodMetadata,
    PodSpec,
    PodStatus,
    ResolutionOptions,
)
from .resolver import PodResolution, pod_addrs, pod_port, resolve_pod

__all__ = [
    "__version__",
    # Entry points
    "K8sProvider",
    "pod_addrs",
    "pod_port",
    "resolve_pod",
    "PodResolution",
    # Cluster
    "ClusterNodesProvider",
    "K8sClusterNodesProvider",
    # Client
    "KubeClientFactory",
    # Config
    "DiscoveryConfig",
    "load_config",
    "parse_args",
    "parse_pairs",
    "ANNOTATION_KEY_PORT",
    # Models
    "Container",
    "ContainerPort",
    "DiscoveryOptions",
    "Pod",
    "PodCondition",
    "PodList",
    "PodMetadata",
    "PodSpec",
    "PodStatus",
    "ResolutionOptions",
    # Exceptions
    "ClientInitError",
    "ConfigError",
    "InClusterConfigError",
    "InvalidArgumentError",
    "InvalidProviderError",
    "K8sDiscoveryError",
    "KubeconfigError",
    "ListPodsError",
    "PortResolutionError",
]
