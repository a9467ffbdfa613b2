"""Exception hierarchy for Kubernetes pod discovery."""

from __future__ import annotations


class K8sDiscoveryError(Exception):
    """Base exception for all discovery errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


# ── Argument Errors ───────────────────────────────────────────────

class InvalidArgumentError(K8sDiscoveryError):
    """Raised when a discovery option has a malformed value."""

    def __init__(self, key: str, value: str, reason: str = "") -> None:
        self.key = key
        self.value = value
        msg = f"discover-k8s: invalid value {value!r} for '{key}'."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)


class InvalidProviderError(K8sDiscoveryError):
    """Raised when the args map targets a provider other than ``k8s``."""

    def __init__(self, provider: str | None) -> None:
        self.provider = provider
        super().__init__(f"discover-k8s: invalid provider {provider or ''}")


# ── Client Errors ─────────────────────────────────────────────────

class KubeconfigError(K8sDiscoveryError):
    """Raised when the kubeconfig file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"discover-k8s: {reason} ({path})")


class InClusterConfigError(K8sDiscoveryError):
    """Raised when the in-cluster service account config is unavailable."""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason
        super().__init__(f"discover-k8s: error loading in-cluster config: {reason}")


class ClientInitError(K8sDiscoveryError):
    """Raised when every client configuration path failed.

    The individual failures are kept in :attr:`errors`, in the order the
    paths were attempted.
    """

    def __init__(self, errors: list[K8sDiscoveryError]) -> None:
        self.errors = list(errors)
        lines = "\n".join(f"\t* {error}" for error in self.errors)
        noun = "error" if len(self.errors) == 1 else "errors"
        super().__init__(f"{len(self.errors)} {noun} occurred:\n{lines}")


class ListPodsError(K8sDiscoveryError):
    """Raised when listing pods through the Kubernetes API fails."""

    def __init__(self, namespace: str, reason: str = "") -> None:
        self.namespace = namespace
        msg = f"discover-k8s: error listing pods in namespace '{namespace}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# ── Resolution Errors ─────────────────────────────────────────────

class PortResolutionError(K8sDiscoveryError, ValueError):
    """Raised when a port annotation is neither a known port name nor an int32."""

    def __init__(self, annotation: str, reason: str = "invalid syntax") -> None:
        self.annotation = annotation
        self.reason = reason
        super().__init__(f"parsing {annotation!r}: {reason}")


# ── Configuration Errors ──────────────────────────────────────────

class ConfigError(K8sDiscoveryError):
    """Raised when a discovery config file cannot be read or holds invalid settings."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"discover-k8s: invalid config file {path}: {reason}")
