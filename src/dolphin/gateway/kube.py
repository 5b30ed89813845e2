"""Cluster gateway backed by the official Kubernetes Python client."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import urllib3
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from dolphin.errors import ConfigError, GatewayError, NotFoundError
from dolphin.models import NamespaceInfo, NodeRoleInfo, PodRef

logger = logging.getLogger(__name__)

DRY_RUN_ALL = "All"


def _api_message(exc: ApiException) -> str:
    body = exc.body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if body:
        try:
            payload = json.loads(body)
        except ValueError:
            return str(body).strip()
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
    return str(exc.reason or "request failed")


def _translate(exc: Exception) -> GatewayError:
    if isinstance(exc, ApiException):
        message = _api_message(exc)
        if exc.status == 404:
            return NotFoundError(message, status_code=404)
        return GatewayError(message, status_code=exc.status)
    return GatewayError(f"cluster API unreachable: {exc}")


class KubernetesGateway:
    """Maps the gateway capabilities onto ``CoreV1Api`` calls."""

    def __init__(self, core: client.CoreV1Api) -> None:
        self._core = core

    def _call(self, operation: str, func: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (ApiException, urllib3.exceptions.HTTPError) as exc:
            error = _translate(exc)
            logger.debug("%s failed: %s", operation, error)
            raise error from exc

    def list_pods(self, namespace: str, node_name: str) -> list[PodRef]:
        pod_list = self._call(
            "list pods",
            self._core.list_namespaced_pod,
            namespace,
            field_selector=f"spec.nodeName={node_name}",
        )
        pods: list[PodRef] = []
        for item in pod_list.items or []:
            pods.append(
                PodRef(
                    name=item.metadata.name,
                    namespace=item.metadata.namespace or namespace,
                    node_name=item.spec.node_name if item.spec else node_name,
                )
            )
        logger.debug("listed %d pod(s) in %s on %s", len(pods), namespace, node_name)
        return pods

    def delete_pod(self, namespace: str, name: str, *, dry_run: bool = False) -> None:
        kwargs: dict[str, Any] = {}
        if dry_run:
            kwargs["dry_run"] = DRY_RUN_ALL
        self._call("delete pod", self._core.delete_namespaced_pod, name, namespace, **kwargs)

    def get_node(self, name: str) -> NodeRoleInfo:
        node = self._call("read node", self._core.read_node, name)
        return NodeRoleInfo(name=node.metadata.name, labels=dict(node.metadata.labels or {}))

    def get_namespace(self, name: str) -> NamespaceInfo:
        namespace = self._call("read namespace", self._core.read_namespace, name)
        return NamespaceInfo(name=namespace.metadata.name, exists=True)


def load_gateway(
    *,
    kubeconfig: str | Path | None = None,
    context: str | None = None,
    in_cluster: bool = False,
) -> KubernetesGateway:
    """Load cluster credentials and return a ready gateway.

    Without an explicit ``kubeconfig`` the client library resolves
    ``$KUBECONFIG`` and then ``~/.kube/config``.
    """

    try:
        if in_cluster:
            config.load_incluster_config()
        elif kubeconfig is not None:
            config.load_kube_config(config_file=str(Path(kubeconfig).expanduser()), context=context)
        else:
            config.load_kube_config(context=context)
    except (ConfigException, OSError, TypeError) as exc:
        raise ConfigError(f"failed to load Kubernetes configuration: {exc}") from exc

    return KubernetesGateway(client.CoreV1Api())
