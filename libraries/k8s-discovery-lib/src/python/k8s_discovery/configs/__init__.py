from .discovery_config import DiscoveryConfig, load_config

__all__ = [
    "DiscoveryConfig",
    "load_config",
]
