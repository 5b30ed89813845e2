from __future__ import annotations

from collections.abc import Callable

import pytest

from conftest import FakeGateway
from dolphin.constants import LEGACY_MASTER_LABEL, NODE_NOT_GIVEN
from dolphin.errors import GatewayError
from dolphin.guard import evaluate
from dolphin.models import EvictionRequest, RejectionReason


def _request(**overrides: object) -> EvictionRequest:
    params: dict[str, object] = {"node_name": "worker2", "namespace": "web", "batch_size": 2}
    params.update(overrides)
    return EvictionRequest.model_validate(params)


def test_valid_request_is_allowed(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request())
    assert result.allowed
    assert result.reason is None
    assert gateway.delete_calls == 0
    assert gateway.list_calls == 0


def test_missing_node_is_rejected_without_lookups(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(node_name=NODE_NOT_GIVEN))
    assert result.rejected
    assert result.reason is RejectionReason.NODE_REQUIRED
    assert result.show_help
    assert gateway.calls == []


def test_unknown_node_is_rejected(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(node_name="kube-worker3"))
    assert result.reason is RejectionReason.NODE_NOT_FOUND
    assert result.message == "node not found: kube-worker3"
    assert ("get_namespace", "web") not in gateway.calls


def test_node_lookup_api_error_is_a_rejection(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()

    def broken(name: str) -> None:
        raise GatewayError("connection refused")

    gateway.get_node = broken  # type: ignore[method-assign,assignment]
    result = evaluate(gateway, _request())
    assert result.reason is RejectionReason.NODE_NOT_FOUND
    assert result.message is not None
    assert "connection refused" in result.message


@pytest.mark.parametrize("label", ["node-role.kubernetes.io/control-plane", LEGACY_MASTER_LABEL])
def test_control_plane_node_is_rejected(cluster: Callable[..., FakeGateway], label: str) -> None:
    gateway = cluster(nodes={"cp-1": {label: ""}})
    for batch_size in (1, 5, -3):
        result = evaluate(gateway, _request(node_name="cp-1", batch_size=batch_size))
        assert result.reason is RejectionReason.CONTROL_PLANE
    assert gateway.delete_calls == 0


def test_unknown_namespace_is_rejected(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(namespace="webi"))
    assert result.reason is RejectionReason.NAMESPACE_NOT_FOUND
    assert result.message == "namespace does not exist: webi"


@pytest.mark.parametrize("namespace", ["kube-system", "kube-public", "kube-node-lease"])
def test_system_namespace_is_rejected(cluster: Callable[..., FakeGateway], namespace: str) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(namespace=namespace))
    assert result.reason is RejectionReason.SYSTEM_NAMESPACE
    assert gateway.delete_calls == 0


@pytest.mark.parametrize("batch_size", [0, -3])
def test_non_positive_batch_size_is_rejected(cluster: Callable[..., FakeGateway], batch_size: int) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(batch_size=batch_size))
    assert result.reason is RejectionReason.INVALID_BATCH_SIZE
    assert result.show_help
    assert gateway.list_calls == 0


def test_checks_short_circuit_in_order(cluster: Callable[..., FakeGateway]) -> None:
    gateway = cluster()
    result = evaluate(gateway, _request(node_name="kube-control-plane", namespace="kube-system", batch_size=0))
    assert result.reason is RejectionReason.CONTROL_PLANE
    assert gateway.calls == [("get_node", "kube-control-plane")]


def test_rejection_converts_to_validation_error(cluster: Callable[..., FakeGateway]) -> None:
    result = evaluate(cluster(), _request(namespace="kube-public"))
    error = result.to_error()
    assert error.reason == "system namespace"
    assert "kube-public" in str(error)
