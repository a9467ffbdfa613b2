from .pod_addresses import PodResolution, parse_int32, pod_addrs, pod_port, resolve_pod

__all__ = [
    "PodResolution",
    "parse_int32",
    "pod_addrs",
    "pod_port",
    "resolve_pod",
]
