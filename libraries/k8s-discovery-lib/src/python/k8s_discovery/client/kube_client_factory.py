"""Kubernetes API client construction.

The kubeconfig file is tried first; when it cannot be used the factory
falls back to the in-cluster service account. The in-cluster path is
the fallback because it is the slower one to fail.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from injector import singleton
from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from k8s_discovery.constants import KUBECONFIG_ENV_VAR
from k8s_discovery.exceptions import ClientInitError, InClusterConfigError, KubeconfigError


@singleton
class KubeClientFactory:

    def __init__(self):
        self.__logger = logging.getLogger(self.__class__.__name__)

    def create(self, kubeconfig: Optional[str] = None) -> client.ApiClient:
        """
        Build an API client, falling back to in-cluster configuration.

        Args:
            kubeconfig: Optional explicit path to a kubeconfig file.

        Returns:
            A configured ``kubernetes.client.ApiClient``.

        Raises:
            ClientInitError: If both the kubeconfig and the in-cluster
                configuration failed. Both errors are attached.
        """
        try:
            return self.from_kubeconfig(kubeconfig)
        except KubeconfigError as kubeconfig_error:
            self.__logger.debug(f"Kubeconfig unavailable, trying in-cluster config: {kubeconfig_error}")
            try:
                return self.in_cluster()
            except InClusterConfigError as in_cluster_error:
                raise ClientInitError([kubeconfig_error, in_cluster_error]) from in_cluster_error

    def from_kubeconfig(self, kubeconfig: Optional[str] = None) -> client.ApiClient:
        path = self.resolve_kubeconfig_path(kubeconfig)

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise KubeconfigError(str(path), f"error loading kubeconfig: {exc}") from exc

        try:
            config_dict = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise KubeconfigError(str(path), f"error parsing kubeconfig: {exc}") from exc
        if not isinstance(config_dict, dict):
            raise KubeconfigError(str(path), "error parsing kubeconfig: expected a mapping")

        try:
            api_client = config.new_client_from_config_dict(config_dict, persist_config=False)
        except ConfigException as exc:
            raise KubeconfigError(str(path), f"error creating client: {exc}") from exc

        self.__logger.debug(f"Kubernetes client created from kubeconfig {path}")
        return api_client

    def in_cluster(self) -> client.ApiClient:
        configuration = client.Configuration()
        try:
            config.load_incluster_config(client_configuration=configuration)
        except ConfigException as exc:
            raise InClusterConfigError(str(exc)) from exc

        self.__logger.debug("Kubernetes client created from in-cluster config")
        return client.ApiClient(configuration)

    @staticmethod
    def resolve_kubeconfig_path(kubeconfig: Optional[str] = None) -> Path:
        """
        Locate the kubeconfig file.

        Search order: the explicit path, the first entry of ``KUBECONFIG``,
        then ``~/.kube/config``.
        """
        if kubeconfig:
            return Path(kubeconfig).expanduser()

        env_value = os.environ.get(KUBECONFIG_ENV_VAR, "")
        env_paths = [p for p in env_value.split(os.pathsep) if p]
        if env_paths:
            return Path(env_paths[0]).expanduser()

        try:
            home = Path.home()
        except RuntimeError as exc:
            raise KubeconfigError("~/.kube/config", f"error retrieving home directory: {exc}") from exc
        return home / ".kube" / "config"
