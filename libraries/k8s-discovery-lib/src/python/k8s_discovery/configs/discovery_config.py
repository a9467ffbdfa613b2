"""YAML configuration for Kubernetes discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from k8s_discovery.constants import DEFAULT_NAMESPACE, PROVIDER_NAME
from k8s_discovery.exceptions import ConfigError, InvalidArgumentError
from k8s_discovery.models import parse_bool

logger = logging.getLogger(__name__)

CONFIG_SECTION = "k8s_discovery"


class DiscoveryConfig(BaseModel):
    """Discovery settings as read from the ``k8s_discovery`` section."""

    self_address: Optional[str] = Field(default=None, description="Address peers use to reach this node.")
    provider: str = Field(default=PROVIDER_NAME)
    kubeconfig: Optional[str] = Field(default=None, description="Path to the kubeconfig file.")
    namespace: str = Field(default=DEFAULT_NAMESPACE)
    label_selector: Optional[str] = Field(default=None)
    field_selector: Optional[str] = Field(default=None)
    host_network: Optional[bool] = Field(
        default=None, description="Use host IPs and host ports instead of pod IPs."
    )

    @field_validator("host_network", mode="before")
    @classmethod
    def _parse_host_network(cls, value: Any) -> Any:
        # quoted strings follow the same literals as the args map
        if not isinstance(value, str):
            return value
        if value == "":
            return None
        try:
            return parse_bool("host_network", value)
        except InvalidArgumentError as exc:
            raise ValueError(f"host_network must be boolean value, got {value!r}") from exc

    def to_args(self) -> Dict[str, str]:
        """Render the settings as the flat args map used by the provider."""

        args: Dict[str, str] = {"provider": self.provider, "namespace": self.namespace}
        if self.kubeconfig:
            args["kubeconfig"] = self.kubeconfig
        if self.label_selector:
            args["label_selector"] = self.label_selector
        if self.field_selector:
            args["field_selector"] = self.field_selector
        if self.host_network is not None:
            args["host_network"] = "true" if self.host_network else "false"
        return args


def _read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or CONFIG_SECTION}: {item['msg']}"
        for item in error.errors()
    )


def load_config(path: Path) -> DiscoveryConfig:
    """Load a DiscoveryConfig from a YAML file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigError: If the file is not valid YAML or its ``k8s_discovery``
            section is not a mapping of valid settings.
    """

    resolved = path.expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Config file not found at: {resolved}")

    try:
        data = _read_yaml(resolved)
    except yaml.YAMLError as exc:
        raise ConfigError(str(resolved), f"error parsing YAML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(str(resolved), f"error reading file: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(str(resolved), "expected a mapping at the top level")

    section = data.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ConfigError(str(resolved), f"'{CONFIG_SECTION}' must be a mapping")

    try:
        config = DiscoveryConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(str(resolved), _describe(exc)) from exc
    logger.info(f"DiscoveryConfig loaded from {resolved}")
    return config
