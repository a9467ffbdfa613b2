import logging

import pytest
from injector import Injector
from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import MaxRetryError, NewConnectionError

from k8s_discovery.client import KubeClientFactory
from k8s_discovery.constants import ANNOTATION_KEY_PORT
from k8s_discovery.exceptions import (
    ClientInitError,
    InClusterConfigError,
    InvalidArgumentError,
    InvalidProviderError,
    KubeconfigError,
    ListPodsError,
)
from k8s_discovery.k8s_provider import K8sProvider


class TrackingApiClient(client.ApiClient):
    closed = False

    def close(self):
        self.closed = True
        super().close()


class FakeClientFactory:
    def __init__(self, api_client=None, error=None):
        self.api_client = api_client or TrackingApiClient()
        self.error = error
        self.kubeconfigs = []

    def create(self, kubeconfig=None):
        self.kubeconfigs.append(kubeconfig)
        if self.error:
            raise self.error
        return self.api_client


class FakeCoreV1Api:
    calls = []
    response = None
    error = None

    def __init__(self, api_client):
        self.api_client = api_client

    def list_namespaced_pod(self, namespace, **kwargs):
        FakeCoreV1Api.calls.append((namespace, kwargs))
        if FakeCoreV1Api.error:
            raise FakeCoreV1Api.error
        return FakeCoreV1Api.response


def _v1_pod(name, phase="Running", pod_ip=None, host_ip=None, ready=None, ports=None, annotations=None):
    conditions = None
    if ready is not None:
        conditions = [client.V1PodCondition(type="Ready", status=ready)]
    return client.V1Pod(
        metadata=client.V1ObjectMeta(name=name, annotations=annotations),
        spec=client.V1PodSpec(containers=[client.V1Container(name="main", ports=ports)]),
        status=client.V1PodStatus(phase=phase, pod_ip=pod_ip, host_ip=host_ip, conditions=conditions),
    )


@pytest.fixture
def core_api(monkeypatch):
    FakeCoreV1Api.calls = []
    FakeCoreV1Api.error = None
    FakeCoreV1Api.response = client.V1PodList(
        items=[
            _v1_pod(
                "cache-0",
                pod_ip="10.0.0.5",
                host_ip="192.168.1.10",
                ready="True",
                ports=[client.V1ContainerPort(name="gossip", container_port=7946, host_port=17946)],
                annotations={ANNOTATION_KEY_PORT: "gossip"},
            ),
            _v1_pod("cache-1", phase="Pending", pod_ip="10.0.0.6"),
            _v1_pod("cache-2", pod_ip="10.0.0.7", host_ip="192.168.1.11", ready="False"),
            _v1_pod("cache-3", pod_ip="10.0.0.8", host_ip="192.168.1.12"),
        ]
    )
    monkeypatch.setattr("kubernetes.client.CoreV1Api", FakeCoreV1Api)
    return FakeCoreV1Api


def test_addrs_lists_and_resolves_pods(core_api):
    factory = FakeClientFactory()
    provider = K8sProvider(factory)

    addrs = provider.addrs({"provider": "k8s", "namespace": "cache", "label_selector": "app=cache"})

    assert addrs == ["10.0.0.5:7946", "10.0.0.8"]
    assert core_api.calls == [("cache", {"label_selector": "app=cache"})]
    assert factory.kubeconfigs == [None]
    assert factory.api_client.closed


def test_addrs_host_network(core_api):
    provider = K8sProvider(FakeClientFactory())
    addrs = provider.addrs({"provider": "k8s", "host_network": "true"})
    assert addrs == ["192.168.1.10:17946", "192.168.1.12"]


def test_addrs_defaults_namespace_and_passes_selectors(core_api):
    factory = FakeClientFactory()
    K8sProvider(factory).addrs(
        {
            "provider": "k8s",
            "kubeconfig": "/etc/kube/config",
            "label_selector": "app = valid",
            "field_selector": "status.phase=Running",
        }
    )
    assert core_api.calls == [
        ("default", {"label_selector": "app = valid", "field_selector": "status.phase=Running"})
    ]
    assert factory.kubeconfigs == ["/etc/kube/config"]


def test_addrs_logs_skipped_pods_to_given_logger(core_api, caplog):
    log = logging.getLogger("discovery-test")
    with caplog.at_level(logging.DEBUG, logger="discovery-test"):
        K8sProvider(FakeClientFactory()).addrs({"provider": "k8s"}, log)

    messages = [r.getMessage() for r in caplog.records if r.name == "discovery-test"]
    assert messages == [
        "discover-k8s: ignoring pod 'cache-1', not running: phase=Pending",
        "discover-k8s: ignoring pod 'cache-2', not ready",
    ]


@pytest.mark.parametrize("provider", [None, "", "aws", "K8S"])
def test_addrs_rejects_other_providers(core_api, provider):
    factory = FakeClientFactory()
    args = {} if provider is None else {"provider": provider}
    with pytest.raises(InvalidProviderError):
        K8sProvider(factory).addrs(args)
    assert factory.kubeconfigs == []


def test_addrs_rejects_malformed_host_network_before_listing(core_api):
    factory = FakeClientFactory()
    with pytest.raises(InvalidArgumentError):
        K8sProvider(factory).addrs({"provider": "k8s", "host_network": "maybe"})
    assert factory.kubeconfigs == []
    assert core_api.calls == []


def test_addrs_propagates_client_errors(core_api):
    error = ClientInitError([KubeconfigError("/nope", "error loading kubeconfig: missing"), InClusterConfigError("no env")])
    with pytest.raises(ClientInitError) as exc:
        K8sProvider(FakeClientFactory(error=error)).addrs({"provider": "k8s"})
    assert exc.value is error
    assert core_api.calls == []


def test_addrs_wraps_list_errors(core_api):
    core_api.error = ApiException(status=403, reason="Forbidden")
    factory = FakeClientFactory()

    with pytest.raises(ListPodsError) as exc:
        K8sProvider(factory).addrs({"provider": "k8s", "namespace": "cache"})

    assert exc.value.namespace == "cache"
    assert "Forbidden" in str(exc.value)
    assert isinstance(exc.value.__cause__, ApiException)
    assert factory.api_client.closed


def test_addrs_wraps_transport_errors(core_api):
    core_api.error = MaxRetryError(
        None, "/api/v1/namespaces/cache/pods", reason=NewConnectionError(None, "Connection refused")
    )
    factory = FakeClientFactory()

    with pytest.raises(ListPodsError) as exc:
        K8sProvider(factory).addrs({"provider": "k8s", "namespace": "cache"})

    assert "Max retries exceeded" in str(exc.value)
    assert isinstance(exc.value.__cause__, MaxRetryError)
    assert factory.api_client.closed


def test_addrs_wraps_socket_errors(core_api):
    core_api.error = ConnectionResetError("connection reset by peer")
    with pytest.raises(ListPodsError) as exc:
        K8sProvider(FakeClientFactory()).addrs({"provider": "k8s"})
    assert "connection reset by peer" in str(exc.value)


def test_addrs_does_not_mask_programming_errors(core_api):
    core_api.error = TypeError("list_namespaced_pod() got an unexpected keyword argument")
    factory = FakeClientFactory()

    with pytest.raises(TypeError):
        K8sProvider(factory).addrs({"provider": "k8s"})

    assert factory.api_client.closed


def test_help_lists_options():
    text = K8sProvider(FakeClientFactory()).help()
    for option in ("provider", "kubeconfig", "namespace", "label_selector", "field_selector", "host_network"):
        assert option in text
    assert ANNOTATION_KEY_PORT in text


def test_injector_builds_provider():
    injector = Injector()
    provider = injector.get(K8sProvider)
    assert provider is injector.get(K8sProvider)
    assert isinstance(provider._client_factory, KubeClientFactory)
