from __future__ import annotations

from collections.abc import Callable

import pytest

from dolphin.constants import CONTROL_PLANE_LABEL
from dolphin.errors import GatewayError, NotFoundError
from dolphin.models import NamespaceInfo, NodeRoleInfo, PodRef


class FakeGateway:
    """In-memory cluster recording every call made through the gateway protocol."""

    def __init__(
        self,
        *,
        nodes: dict[str, dict[str, str]] | None = None,
        namespaces: set[str] | None = None,
        pods: list[PodRef] | None = None,
        fail_on: set[str] | None = None,
    ) -> None:
        self.nodes = nodes or {}
        self.namespaces = namespaces or set()
        self.pods = list(pods or [])
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, ...]] = []
        self.deleted: list[str] = []
        self.dry_run_flags: list[bool] = []

    def list_pods(self, namespace: str, node_name: str) -> list[PodRef]:
        self.calls.append(("list_pods", namespace, node_name))
        return [pod for pod in self.pods if pod.namespace == namespace and pod.node_name == node_name]

    def delete_pod(self, namespace: str, name: str, *, dry_run: bool = False) -> None:
        self.calls.append(("delete_pod", namespace, name))
        self.dry_run_flags.append(dry_run)
        if name in self.fail_on:
            raise GatewayError(f'pods "{name}" is forbidden', status_code=403)
        match = [pod for pod in self.pods if pod.namespace == namespace and pod.name == name]
        if not match:
            raise NotFoundError(f'pods "{name}" not found', status_code=404)
        if not dry_run:
            self.pods.remove(match[0])
            self.deleted.append(name)

    def get_node(self, name: str) -> NodeRoleInfo:
        self.calls.append(("get_node", name))
        if name not in self.nodes:
            raise NotFoundError(f'nodes "{name}" not found', status_code=404)
        return NodeRoleInfo(name=name, labels=self.nodes[name])

    def get_namespace(self, name: str) -> NamespaceInfo:
        self.calls.append(("get_namespace", name))
        if name not in self.namespaces:
            raise NotFoundError(f'namespaces "{name}" not found', status_code=404)
        return NamespaceInfo(name=name)

    @property
    def delete_calls(self) -> int:
        return sum(1 for call in self.calls if call[0] == "delete_pod")

    @property
    def list_calls(self) -> int:
        return sum(1 for call in self.calls if call[0] == "list_pods")


def make_pods(count: int, *, namespace: str = "web", node: str = "worker2") -> list[PodRef]:
    return [PodRef(name=f"{namespace}-{index}", namespace=namespace, node_name=node) for index in range(count)]


@pytest.fixture()
def cluster() -> Callable[..., FakeGateway]:
    def build(pod_count: int = 5, **overrides: object) -> FakeGateway:
        params: dict[str, object] = {
            "nodes": {
                "worker2": {"kubernetes.io/hostname": "worker2"},
                "kube-control-plane": {CONTROL_PLANE_LABEL: ""},
            },
            "namespaces": {"default", "web", "kube-system", "kube-public", "kube-node-lease"},
            "pods": make_pods(pod_count),
        }
        params.update(overrides)
        return FakeGateway(**params)  # type: ignore[arg-type]

    return build


@pytest.fixture()
def sleeps() -> list[float]:
    return []


@pytest.fixture()
def fake_sleep(sleeps: list[float]) -> Callable[[float], None]:
    return sleeps.append
