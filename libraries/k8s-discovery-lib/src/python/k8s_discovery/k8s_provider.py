"""Kubernetes discovery provider.

Lists pods through the Kubernetes API and resolves them into join
addresses with :func:`k8s_discovery.resolver.pod_addrs`.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from injector import inject, singleton
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from .client import KubeClientFactory
from .constants import ANNOTATION_KEY_PORT, PROVIDER_NAME
from .exceptions import InvalidProviderError, ListPodsError
from .models import DiscoveryOptions, PodList
from .resolver import pod_addrs

logger = logging.getLogger(__name__)

HELP_TEXT = f"""Kubernetes (K8S):

    provider:         "k8s"
    kubeconfig:       Path to the kubeconfig file.
    namespace:        Namespace to search for pods (defaults to "default").
    label_selector:   Label selector value to filter pods.
    field_selector:   Field selector value to filter pods.
    host_network:     "true" if pod host IP and ports should be used.

    The kubeconfig file value will be searched in the following locations:

     1. Use path from "kubeconfig" option if provided.
     2. Use path from KUBECONFIG environment variable.
     3. Use default path of $HOME/.kube/config

    If no kubeconfig can be loaded, the in-cluster service account
    configuration is used instead.

    By default, the Pod IP is used to join. The "host_network" option may
    be set to use the Host IP. No port is used by default. Pods may set
    an annotation '{ANNOTATION_KEY_PORT}' to a named port or
    an integer value. If the value matches a named port, that port will
    be used to join.

    Note that if "host_network" is set to true, then only pods that have
    a HostIP available will be selected. If a port annotation exists, then
    the port must be exposed via a HostPort as well, otherwise the pod will
    be ignored.
"""


@singleton
class K8sProvider:
    """Resolves cluster join addresses from the pods of a namespace.

    Parameters:
        client_factory:
            Builds the Kubernetes API client for each discovery call.
    """

    @inject
    def __init__(self, client_factory: KubeClientFactory) -> None:
        self._client_factory = client_factory

    def help(self) -> str:
        return HELP_TEXT

    def addrs(self, args: Mapping[str, str], log: Optional[logging.Logger] = None) -> list[str]:
        """Discover the addresses of the pods selected by ``args``.

        Args:
            args: Flat options map (``provider``, ``kubeconfig``,
                ``namespace``, ``label_selector``, ``field_selector``,
                ``host_network``).
            log: Receives one line per skipped pod. Defaults to this
                module's logger.

        Returns:
            The ``host`` / ``host:port`` addresses in the order the API
            listed the pods.

        Raises:
            InvalidProviderError: ``provider`` is not ``k8s``.
            InvalidArgumentError: ``host_network`` is not a boolean.
            ClientInitError: No client configuration could be loaded.
            ListPodsError: The pod listing request failed.
        """
        provider = args.get("provider")
        if provider != PROVIDER_NAME:
            raise InvalidProviderError(provider)

        options = DiscoveryOptions.from_args(args)

        api_client = self._client_factory.create(options.kubeconfig)
        try:
            pods = self.list_pods(api_client, options)
        finally:
            api_client.close()

        addrs = pod_addrs(pods.items, options.resolution_options(), log or logger)
        logger.info(
            "discover-k8s: resolved %d address(es) from %d pod(s) in namespace %r",
            len(addrs),
            len(pods.items),
            options.namespace,
        )
        return addrs

    def list_pods(self, api_client: client.ApiClient, options: DiscoveryOptions) -> PodList:
        """List the pods of ``options.namespace`` matching its selectors."""
        selectors = {}
        if options.label_selector:
            selectors["label_selector"] = options.label_selector
        if options.field_selector:
            selectors["field_selector"] = options.field_selector

        core_api = client.CoreV1Api(api_client)
        try:
            response = core_api.list_namespaced_pod(options.namespace, **selectors)
        except (ApiException, HTTPError, OSError) as exc:
            raise ListPodsError(options.namespace, str(exc)) from exc

        return PodList.model_validate(api_client.sanitize_for_serialization(response))
