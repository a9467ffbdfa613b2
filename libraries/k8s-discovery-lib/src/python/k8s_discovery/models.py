"""Data models for Kubernetes pod discovery.

The pod models mirror the JSON shape returned by the Kubernetes API
(camelCase keys such as ``podIP`` are accepted as aliases), so a
serialized ``V1PodList`` validates directly into :class:`PodList`.
Only the fields used for address resolution are modelled; anything
else is ignored.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_NAMESPACE
from .exceptions import InvalidArgumentError


_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(key: str, value: str) -> bool:
    """Parse a textual boolean the way the discovery args map spells them."""
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise InvalidArgumentError(key, value, reason=f"{key} must be boolean value")


class _KubeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


# ── Pod Models ────────────────────────────────────────────────────


class ContainerPort(_KubeModel):
    """A port declared by a container."""

    name: Optional[str] = None
    """IANA_SVC_NAME of the port, used to match the port annotation."""

    container_port: int = Field(default=0, alias="containerPort")
    """Port exposed on the pod's IP address."""

    host_port: Optional[int] = Field(default=None, alias="hostPort")
    """Port exposed on the node, if any. ``None`` and ``0`` mean unset."""


class Container(_KubeModel):
    """A container of a pod; only its declared ports matter here."""

    name: Optional[str] = None
    ports: list[ContainerPort] = Field(default_factory=list)

    @field_validator("ports", mode="before")
    @classmethod
    def _default_ports(cls, value: Any) -> Any:
        return _none_to_list(value)


class PodCondition(_KubeModel):
    """A readiness-like signal attached to a pod."""

    type: str
    status: str


class PodMetadata(_KubeModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    annotations: Optional[dict[str, str]] = None


class PodSpec(_KubeModel):
    containers: list[Container] = Field(default_factory=list)

    @field_validator("containers", mode="before")
    @classmethod
    def _default_containers(cls, value: Any) -> Any:
        return _none_to_list(value)


class PodStatus(_KubeModel):
    phase: Optional[str] = None
    """Lifecycle phase: Pending, Running, Succeeded, Failed or Unknown."""

    pod_ip: Optional[str] = Field(default=None, alias="podIP")
    host_ip: Optional[str] = Field(default=None, alias="hostIP")
    conditions: list[PodCondition] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def _default_conditions(cls, value: Any) -> Any:
        return _none_to_list(value)


class Pod(_KubeModel):
    """A single workload instance as reported by the cluster."""

    metadata: PodMetadata = Field(default_factory=PodMetadata)
    spec: PodSpec = Field(default_factory=PodSpec)
    status: PodStatus = Field(default_factory=PodStatus)

    @property
    def name(self) -> str:
        return self.metadata.name or ""

    @property
    def phase(self) -> str:
        return self.status.phase or ""

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations or {}


class PodList(_KubeModel):
    items: list[Pod] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _default_items(cls, value: Any) -> Any:
        return _none_to_list(value)


# ── Options ───────────────────────────────────────────────────────


class ResolutionOptions(BaseModel):
    """Options consumed by the address resolver itself."""

    model_config = ConfigDict(frozen=True)

    host_network: bool = False
    """Use the host IP and host ports instead of the pod IP and container ports."""

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> ResolutionOptions:
        """Build options from the flat discovery args map.

        Raises:
            InvalidArgumentError: If ``host_network`` is set to something
                that is not a boolean literal.
        """
        value = args.get("host_network") or ""
        if not value:
            return cls()
        return cls(host_network=parse_bool("host_network", value))


class DiscoveryOptions(BaseModel):
    """The full args map as seen by the Kubernetes provider."""

    model_config = ConfigDict(frozen=True)

    provider: str = ""
    kubeconfig: Optional[str] = None
    namespace: str = DEFAULT_NAMESPACE
    label_selector: Optional[str] = None
    field_selector: Optional[str] = None
    host_network: bool = False

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> DiscoveryOptions:
        resolution = ResolutionOptions.from_args(args)
        return cls(
            provider=args.get("provider") or "",
            kubeconfig=args.get("kubeconfig") or None,
            namespace=args.get("namespace") or DEFAULT_NAMESPACE,
            label_selector=args.get("label_selector") or None,
            field_selector=args.get("field_selector") or None,
            host_network=resolution.host_network,
        )

    def resolution_options(self) -> ResolutionOptions:
        return ResolutionOptions(host_network=self.host_network)
