from __future__ import annotations

from typing import Protocol, runtime_checkable

from dolphin.models import NamespaceInfo, NodeRoleInfo, PodRef


@runtime_checkable
class ClusterGateway(Protocol):
    """The four cluster capabilities the eviction core depends on.

    Implementations raise ``NotFoundError`` for missing objects and
    ``GatewayError`` for any other API failure.
    """

    def list_pods(self, namespace: str, node_name: str) -> list[PodRef]: ...

    def delete_pod(self, namespace: str, name: str, *, dry_run: bool = False) -> None: ...

    def get_node(self, name: str) -> NodeRoleInfo: ...

    def get_namespace(self, name: str) -> NamespaceInfo: ...
