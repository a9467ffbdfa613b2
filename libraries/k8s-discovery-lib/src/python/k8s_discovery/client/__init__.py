from .kube_client_factory import KubeClientFactory

__all__ = [
    "KubeClientFactory",
]
