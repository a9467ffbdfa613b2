"""Pod address resolution.

Turns a snapshot of pods into the ordered list of ``host`` or
``host:port`` addresses used to join a cluster.  This module does no
I/O: each pod is evaluated on its own and either yields one address or
is skipped with a single DEBUG line on the given logger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..constants import (
    ANNOTATION_KEY_PORT,
    CONDITION_STATUS_TRUE,
    POD_CONDITION_READY,
    POD_PHASE_RUNNING,
)
from ..exceptions import PortResolutionError
from ..models import Pod, ResolutionOptions

logger = logging.getLogger(__name__)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_DIGITS = "0123456789abcdef"
_PREFIX_BASES = {"x": 16, "o": 8, "b": 2}


@dataclass(frozen=True)
class PodResolution:
    """Outcome of evaluating a single pod."""

    address: Optional[str] = None
    reason: Optional[str] = None

    @property
    def included(self) -> bool:
        return self.address is not None


def pod_addrs(
    pods: Iterable[Pod],
    options: ResolutionOptions,
    log: Optional[logging.Logger] = None,
) -> list[str]:
    """Return the join addresses of ``pods``, preserving input order.

    Pods that are not running, not ready, lack the requested IP or carry
    an unresolvable port annotation are left out; each of them produces
    exactly one diagnostic line on ``log``.
    """
    log = log or logger
    addrs: list[str] = []
    for pod in pods:
        resolution = resolve_pod(pod, options)
        if resolution.included:
            addrs.append(resolution.address)
        else:
            log.debug("discover-k8s: ignoring pod %r, %s", pod.name, resolution.reason)
    return addrs


def resolve_pod(pod: Pod, options: ResolutionOptions) -> PodResolution:
    """Decide whether ``pod`` contributes an address and which one."""
    if pod.phase != POD_PHASE_RUNNING:
        return PodResolution(reason=f"not running: phase={pod.phase}")

    # A missing Ready condition is accepted; a present one must be True.
    for condition in pod.status.conditions:
        if condition.type == POD_CONDITION_READY and condition.status != CONDITION_STATUS_TRUE:
            return PodResolution(reason="not ready")

    addr = pod.status.host_ip if options.host_network else pod.status.pod_ip
    if not addr:
        return PodResolution(reason="requested IP is empty")

    annotation = pod.annotations.get(ANNOTATION_KEY_PORT)
    if not annotation:
        return PodResolution(address=addr)

    try:
        port = pod_port(pod, annotation, options.host_network)
    except PortResolutionError as exc:
        return PodResolution(reason=f"error retrieving port: {exc}")
    return PodResolution(address=f"{addr}:{port}")


def pod_port(pod: Pod, annotation: str, host_network: bool) -> int:
    """Resolve a non-empty port annotation against the pod's declared ports.

    A declared port whose name equals the annotation wins over a numeric
    reading of it. With ``host_network`` only ports that expose a host
    port qualify, and the host port is returned.

    Raises:
        PortResolutionError: If no port qualifies and the annotation is not
            a 32-bit integer literal.
    """
    for container in pod.spec.containers:
        for port_def in container.ports:
            if port_def.name != annotation:
                continue
            if host_network:
                if not port_def.host_port:
                    continue
                return port_def.host_port
            return port_def.container_port

    return parse_int32(annotation)


def parse_int32(value: str) -> int:
    """Parse a signed 32-bit integer literal.

    Accepts decimal, ``0x``/``0o``/``0b`` prefixed and leading-zero octal
    literals with an optional sign. Underscores may separate digits.
    """
    body = value[1:] if value[:1] in ("+", "-") else value
    if not body or not _underscores_ok(body):
        raise PortResolutionError(value)

    if len(body) >= 3 and body[0] == "0" and body[1].lower() in ("x", "o", "b"):
        base = _PREFIX_BASES[body[1].lower()]
        digits = body[2:]
    elif len(body) > 1 and body[0] == "0":
        base = 8
        digits = body[1:]
    else:
        base = 10
        digits = body

    digits = digits.replace("_", "")
    allowed = _DIGITS[:base]
    if not digits or any(c.lower() not in allowed for c in digits):
        raise PortResolutionError(value)

    number = int(digits, base)
    if value[0] == "-":
        number = -number
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise PortResolutionError(value, reason="value out of range")
    return number


def _underscores_ok(body: str) -> bool:
    # "^" start, "0" digit or base prefix, "_" underscore, "!" anything else
    saw = "^"
    i = 0
    hex_digits = False
    if len(body) >= 2 and body[0] == "0" and body[1].lower() in ("x", "o", "b"):
        i = 2
        saw = "0"
        hex_digits = body[1].lower() == "x"

    for c in body[i:]:
        if c in _DIGITS[:10] or hex_digits and c.lower() in _DIGITS[10:]:
            saw = "0"
        elif c == "_":
            if saw != "0":
                return False
            saw = "_"
        elif saw == "_":
            return False
        else:
            saw = "!"
    return saw != "_"
