PROVIDER_NAME = "k8s"
DEFAULT_NAMESPACE = "default"

# Annotation naming the port (by container port name or as a number) to
# append to the pod address.
ANNOTATION_KEY_PORT = "hashicorp.com/consul-auto-join-port"

POD_PHASE_RUNNING = "Running"
POD_CONDITION_READY = "Ready"
CONDITION_STATUS_TRUE = "True"

KUBECONFIG_ENV_VAR = "KUBECONFIG"
