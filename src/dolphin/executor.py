from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from dolphin.errors import GatewayError
from dolphin.gateway.base import ClusterGateway
from dolphin.models import BatchOutcome, PodRef, ProgressEvent, ProgressKind

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def delete_batch(
    gateway: ClusterGateway,
    pods: Sequence[PodRef],
    *,
    dry_run: bool = False,
    verbose: bool = False,
    on_progress: ProgressCallback | None = None,
) -> BatchOutcome:
    """Delete ``pods`` in order, stopping at the first failure.

    No retries: a failed delete is terminal for the whole run and pods deleted
    before it stay deleted.
    """

    deleted: list[PodRef] = []
    for pod in pods:
        if verbose and on_progress is not None:
            on_progress(ProgressEvent(kind=ProgressKind.POD_DELETING, pod=pod, dry_run=dry_run))

        try:
            gateway.delete_pod(pod.namespace, pod.name, dry_run=dry_run)
        except GatewayError as exc:
            logger.error("delete of %s/%s failed: %s", pod.namespace, pod.name, exc)
            return BatchOutcome.failed(deleted, pod, str(exc))

        logger.debug("deleted %s/%s%s", pod.namespace, pod.name, " (dry run)" if dry_run else "")
        deleted.append(pod)

    return BatchOutcome.succeeded(deleted)
