"""Pre-flight checks deciding whether an eviction request may proceed."""

from __future__ import annotations

import logging

from dolphin.errors import GatewayError, NotFoundError
from dolphin.gateway.base import ClusterGateway
from dolphin.models import EvictionRequest, GuardResult, RejectionReason

logger = logging.getLogger(__name__)


def _check_node(gateway: ClusterGateway, request: EvictionRequest) -> GuardResult | None:
    if not request.node_given:
        return GuardResult.reject(
            RejectionReason.NODE_REQUIRED,
            "node required: pass --node NODE_NAME",
            show_help=True,
        )

    try:
        node = gateway.get_node(request.node_name)
    except GatewayError as exc:
        logger.debug("node lookup for %s failed: %s", request.node_name, exc)
        message = f"node not found: {request.node_name}"
        if not isinstance(exc, NotFoundError):
            message = f"{message} ({exc})"
        return GuardResult.reject(RejectionReason.NODE_NOT_FOUND, message)

    if node.is_control_plane:
        return GuardResult.reject(
            RejectionReason.CONTROL_PLANE,
            f"control-plane node: refusing to evict pods from {node.name}",
        )
    return None


def _check_namespace(gateway: ClusterGateway, request: EvictionRequest) -> GuardResult | None:
    try:
        namespace = gateway.get_namespace(request.namespace)
    except GatewayError as exc:
        logger.debug("namespace lookup for %s failed: %s", request.namespace, exc)
        namespace = None

    if namespace is None or not namespace.exists:
        return GuardResult.reject(
            RejectionReason.NAMESPACE_NOT_FOUND,
            f"namespace does not exist: {request.namespace}",
        )

    if namespace.is_system_reserved:
        return GuardResult.reject(
            RejectionReason.SYSTEM_NAMESPACE,
            f"system namespace: refusing to evict pods from {namespace.name}",
        )
    return None


def evaluate(gateway: ClusterGateway, request: EvictionRequest) -> GuardResult:
    """Validate ``request`` against live cluster state.

    Checks run in a fixed order and stop at the first failure: node given,
    node exists, node is not control-plane, namespace exists, namespace is not
    system-reserved, batch size is positive. Only read-only lookups are issued.
    """

    result = _check_node(gateway, request) or _check_namespace(gateway, request)
    if result is None and request.batch_size < 1:
        result = GuardResult.reject(
            RejectionReason.INVALID_BATCH_SIZE,
            f"invalid batch size: {request.batch_size} (must be >= 1)",
            show_help=True,
        )

    if result is None:
        logger.debug("request for %s/%s allowed", request.namespace, request.node_name)
        return GuardResult.allow()

    logger.info("request for %s/%s rejected: %s", request.namespace, request.node_name, result.message)
    return result
